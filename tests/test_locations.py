from sqlalchemy.exc import SQLAlchemyError

from freight_ingest import crud
from freight_ingest.db import SessionLocal
from freight_ingest.geocoding import GeocodeResult
from freight_ingest.locations import resolve_location
from freight_ingest.models import Location


def test_same_address_resolves_once(db, geocoder):
    first = resolve_location(db, "Rosario", geocoder)
    second = resolve_location(db, "Rosario", geocoder)
    assert first is not None
    assert first == second
    assert geocoder.calls == ["Rosario"]
    assert db.query(Location).count() == 1


def test_new_location_is_stored_with_coordinates(db, geocoder):
    location_id = resolve_location(db, "Venado Tuerto", geocoder)
    stored = crud.get_location_by_address(db, "Venado Tuerto")
    assert stored.id == location_id
    assert stored.latitude < 0 and stored.longitude < 0
    assert stored.formatted_address == "Venado Tuerto, Argentina"


def test_existing_location_is_never_regeocoded(db, geocoder):
    existing = crud.create_location(db, address="Pergamino", latitude=-33.89, longitude=-60.57)
    assert resolve_location(db, "Pergamino", geocoder) == existing.id
    assert geocoder.calls == []


def test_match_is_exact_text(db, geocoder):
    a = resolve_location(db, "Rosario", geocoder)
    b = resolve_location(db, "Rosario, Santa Fe", geocoder)
    assert a != b
    assert len(geocoder.calls) == 2


def test_geocoding_failure(db, geocoder):
    geocoder.unknown.add("Atlantis")
    assert resolve_location(db, "Atlantis", geocoder) is None
    assert db.query(Location).count() == 0


def test_blank_address_makes_no_call(db, geocoder):
    assert resolve_location(db, "  ", geocoder) is None
    assert resolve_location(db, None, geocoder) is None
    assert geocoder.calls == []


class RacingGeocoder:
    """Stores the address through another session before answering, like a concurrent request."""

    def __init__(self, latitude=-32.95, longitude=-60.65):
        self.latitude = latitude
        self.longitude = longitude
        self.stored_id = None

    def geocode(self, address):
        other = SessionLocal()
        try:
            self.stored_id = crud.create_location(other, address=address, latitude=self.latitude,
                                                  longitude=self.longitude).id
        finally:
            other.close()
        return GeocodeResult(-1.0, -1.0, address)


def test_address_stored_concurrently_is_reused(db):
    geocoder = RacingGeocoder()
    location_id = resolve_location(db, "Rosario", geocoder)
    assert location_id == geocoder.stored_id
    assert db.query(Location).count() == 1
    assert crud.get_location_by_address(db, "Rosario").latitude == -32.95


def test_failed_insert_without_stored_row(db, geocoder, monkeypatch):
    def broken(*args, **kwargs):
        raise SQLAlchemyError("insert rejected")

    monkeypatch.setattr(crud, "create_location", broken)
    assert resolve_location(db, "Rosario", geocoder) is None
