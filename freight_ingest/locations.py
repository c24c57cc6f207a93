"""Insert-or-reuse resolution of locality text to stored locations.

The first coordinates ever stored for an address text are reused forever;
there is no fuzzy matching and no re-geocoding. Lookup and insert are a
check-then-act guarded by the unique address column: when a concurrent request
stores the same address first, the insert fails and the stored row is reused,
so each address keeps one location. Both requests may still geocode it.
"""
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import crud
from .utils import logger


def resolve_location(db: Session, address: Optional[str], geocoder) -> Optional[str]:
    """Return the id of the location stored for `address`, geocoding and storing it if new.

    Returns None when the address is blank, the geocoder finds nothing, or the
    new location can't be stored.
    """
    if not address or not address.strip():
        return None

    existing = crud.get_location_by_address(db, address)
    if existing is not None:
        logger.info("Location found: %s (id %s)", address, existing.id)
        return existing.id

    result = geocoder.geocode(address)
    if result is None:
        logger.warning("Could not geocode %s", address)
        return None

    try:
        location = crud.create_location(
            db,
            address=address,
            latitude=result.latitude,
            longitude=result.longitude,
            formatted_address=result.formatted_address,
        )
    except SQLAlchemyError as e:
        db.rollback()
        # another writer may have stored the same address since the lookup
        stored = crud.get_location_by_address(db, address)
        if stored is not None:
            logger.info("Location stored concurrently: %s (id %s)", address, stored.id)
            return stored.id
        logger.error("Failed to store location %s: %s", address, e)
        return None
    logger.info("Location created: %s (id %s)", address, location.id)
    return location.id
