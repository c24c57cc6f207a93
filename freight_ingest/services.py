import os
import time
from datetime import date
from typing import Any, Dict, Iterable, Optional

from dotenv import load_dotenv
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import catalogs, crud
from .errors import FreightIngestError, LocationResolutionError, PersistenceError, RecordValidationError
from .locations import resolve_location
from .models import Listing
from .normalizers import normalize_date, normalize_phone, parse_number
from .reporting import BatchReport
from .utils import logger
from .validation import packaging_type, strip_nulls, validate_listing

load_dotenv()
# listings created by the automatic loader belong to this account
DEFAULT_OWNER_ID = os.getenv("DEFAULT_OWNER_ID", "20d060b6-33b5-4222-a039-a3e603d979be")
INGEST_DELAY_SECONDS = float(os.getenv("INGEST_DELAY_SECONDS", "1.0"))


def _to_date(value: Any, field: str) -> date:
    iso = normalize_date(value)
    try:
        return date.fromisoformat(iso)
    except ValueError:
        raise PersistenceError(f"{field} {iso} is not a calendar date")


def build_listing(record: Dict[str, Any], origin_id: str, destination_id: str,
                  owner_id: str = DEFAULT_OWNER_ID) -> Listing:
    """Map a validated record plus its resolved locations to a storage row."""
    material = catalogs.lookup_by_name(catalogs.MATERIALS, record["material"])
    presentation = catalogs.lookup_by_name(catalogs.PRESENTATIONS, packaging_type(record))
    equipment = catalogs.lookup_by_name(catalogs.EQUIPMENT_TYPES, record["tipoEquipo"])
    payment = (catalogs.lookup_by_name(catalogs.PAYMENT_METHODS, record.get("formaDePago"))
               or catalogs.DEFAULT_PAYMENT_METHOD)
    return Listing(
        owner_id=owner_id,
        weight=parse_number(record["peso"]),
        origin_location_id=origin_id,
        destination_location_id=destination_id,
        phone=normalize_phone(record["telefono"]),
        reference_point=record.get("puntoReferencia") or " ",
        material_id=material.id,
        presentation_id=presentation.id,
        price=parse_number(record.get("precio")) or 0,
        paid_by=record.get("pagoPor") or "Otros",
        other_paid_by=None,
        load_date=_to_date(record.get("fechaCarga"), "fechaCarga"),
        unload_date=_to_date(record.get("fechaDescarga"), "fechaDescarga"),
        payment_method_id=payment.id,
        email=record.get("correo") or " ",
        equipment_type_id=equipment.id,
        observations=record.get("observaciones") or " ",
    )


def _create_listing(db: Session, record: Dict[str, Any], geocoder) -> str:
    errors = validate_listing(record)
    if errors:
        raise RecordValidationError(errors)

    origin_id = resolve_location(db, record["localidadCarga"], geocoder)
    destination_id = resolve_location(db, record["localidadDescarga"], geocoder)
    if origin_id is None:
        raise LocationResolutionError(f"could not resolve location {record['localidadCarga']!r}",
                                      record["localidadCarga"])
    if destination_id is None:
        raise LocationResolutionError(f"could not resolve location {record['localidadDescarga']!r}",
                                      record["localidadDescarga"])

    listing = build_listing(record, origin_id, destination_id)
    try:
        listing = crud.create_listing(db, listing)
    except SQLAlchemyError as e:
        db.rollback()
        raise PersistenceError(f"failed to insert listing: {getattr(e, 'orig', None) or e}")
    return listing.id


def ingest_listing(db: Session, record: Dict[str, Any], geocoder, index: int = 0) -> Dict[str, Any]:
    """Validate, resolve and store one cleaned record; failures become the returned outcome."""
    number = index + 1
    logger.info("Creating listing %d", number)
    try:
        listing_id = _create_listing(db, record, geocoder)
    except RecordValidationError as e:
        logger.warning("Listing %d has errors: %s", number, e.errors)
        return {"success": False, "errors": e.errors}
    except LocationResolutionError as e:
        logger.error("Listing %d failed: %s", number, e)
        return {"success": False, "error": e.message, "address": e.address}
    except FreightIngestError as e:
        logger.error("Listing %d failed: %s", number, e)
        return {"success": False, "error": e.message}
    logger.info("Listing %d created (id %s)", number, listing_id)
    return {"success": True, "listing_id": listing_id}


def ingest_batch(db: Session, records: Iterable[Any], geocoder, delay: Optional[float] = None) -> Dict[str, Any]:
    """Ingest records strictly in order, pausing between them; returns the batch summary."""
    records = list(records)
    pause = INGEST_DELAY_SECONDS if delay is None else delay
    report = BatchReport()
    logger.info("Processing %d listing(s)", len(records))

    for i, raw in enumerate(records):
        logger.info("Listing %d/%d", i + 1, len(records))
        if not isinstance(raw, dict):
            report.add(i, raw, {"success": False, "error": "listing must be a JSON object"})
        else:
            record = strip_nulls(raw)
            logger.info("Material: %s | Route: %s -> %s", record.get("material", "unspecified"),
                        record.get("localidadCarga", "unspecified"), record.get("localidadDescarga", "unspecified"))
            if record.get("confianza"):
                logger.info("AI confidence: %s%%", record["confianza"])
            if record.get("errores"):
                logger.info("Upstream errors: %s", ", ".join(str(e) for e in record["errores"]))
            try:
                outcome = ingest_listing(db, record, geocoder, index=i)
            except Exception as e:
                logger.exception("Unexpected failure on listing %d: %s", i + 1, e)
                db.rollback()
                outcome = {"success": False, "error": str(e)}
            report.add(i, record, outcome)

        if i < len(records) - 1 and pause > 0:
            time.sleep(pause)

    report.log_summary()
    return report.summary()
