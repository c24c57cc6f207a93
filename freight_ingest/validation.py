"""Field-level validation of raw listing records."""
from typing import Any, Dict, List

from . import catalogs
from .normalizers import is_valid_email, is_valid_price, is_valid_weight, normalize_phone, parse_number


def strip_nulls(record: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in record.items() if v is not None}


def packaging_type(record: Dict[str, Any]):
    # upstream producers use either key
    return record.get("tipoCarga") or record.get("presentacion")


def validate_listing(record: Dict[str, Any]) -> List[str]:
    """Check one cleaned record and return every violation found, in field order.

    An empty list means the record can be persisted. The record is not modified.
    """
    errors: List[str] = []

    material = record.get("material")
    if not material:
        errors.append("material is required")
    elif not catalogs.lookup_by_name(catalogs.MATERIALS, material):
        errors.append(f'material "{material}" is not valid')

    presentation = packaging_type(record)
    if not presentation:
        errors.append("tipoCarga is required")
    elif not catalogs.lookup_by_name(catalogs.PRESENTATIONS, presentation):
        errors.append(f'tipoCarga "{presentation}" is not valid')

    if not is_valid_weight(record.get("peso")):
        errors.append("peso is required and must be a number greater than 0")

    equipment = record.get("tipoEquipo")
    if not equipment:
        errors.append("tipoEquipo is required")
    elif not catalogs.lookup_by_name(catalogs.EQUIPMENT_TYPES, equipment):
        errors.append(f'tipoEquipo "{equipment}" is not valid')

    for field in ("localidadCarga", "localidadDescarga", "fechaCarga", "fechaDescarga"):
        if not record.get(field):
            errors.append(f"{field} is required")

    phone = record.get("telefono")
    if not phone:
        errors.append("telefono is required")
    elif normalize_phone(phone) is None:
        errors.append("telefono has an invalid format")

    if record.get("correo") and not is_valid_email(record["correo"]):
        errors.append("correo has an invalid format")

    if record.get("precio") and not is_valid_price(record["precio"]):
        errors.append("precio must be a number greater than or equal to 0")

    payment = record.get("formaDePago")
    if payment and not catalogs.lookup_by_name(catalogs.PAYMENT_METHODS, payment):
        errors.append(f'formaDePago "{payment}" is not valid')

    confidence = record.get("confianza")
    if confidence:
        number = parse_number(confidence)
        if number is None or number < 0 or number > 100:
            errors.append("confianza must be between 0 and 100")

    return errors
