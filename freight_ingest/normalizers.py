"""Normalizers for loosely formatted listing fields.

Each function takes the raw value as it came from the JSON file or the chat
extraction and returns either a canonical form or a validity flag.
"""
import re
from datetime import date
from typing import Any, Optional

from .utils import logger, utcnow

AREA_CODES = ("11", "15", "351", "341", "381", "387", "388", "299", "280", "290")

_PHONE_STRIP_RE = re.compile(r"[\s\-()]")
_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_DMY_DATE_RE = re.compile(r"^\d{2}/\d{2}/\d{4}$")
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
# leading decimal number, the way upstream tools read "30000 kg"
_NUMBER_PREFIX_RE = re.compile(r"^\s*[-+]?(\d+(\.\d*)?|\.\d+)([eE][-+]?\d+)?")


def normalize_phone(value: Any) -> Optional[str]:
    """Return the phone in +54 international form, or None when the country can't be inferred.

    Country inference is a heuristic: a number that merely starts with one of the
    known area codes is accepted as Argentine.
    """
    if value is None or value == "":
        return None
    cleaned = _PHONE_STRIP_RE.sub("", str(value))
    if not cleaned:
        return None
    if cleaned.startswith("+54"):
        return cleaned
    if cleaned.startswith("54"):
        return "+" + cleaned
    if cleaned.startswith("9"):
        return "+54" + cleaned
    if cleaned.startswith(AREA_CODES):
        return "+54" + cleaned
    return None


def normalize_date(value: Any, today: Optional[date] = None) -> str:
    """Return `value` as YYYY-MM-DD.

    Accepts YYYY-MM-DD as is and DD/MM/YYYY reordered. Anything else falls back
    to the current UTC date instead of being rejected.
    """
    if isinstance(value, str):
        if _ISO_DATE_RE.match(value):
            return value
        if _DMY_DATE_RE.match(value):
            day, month, year = value.split("/")
            return f"{year}-{month.zfill(2)}-{day.zfill(2)}"
    fallback = (today or utcnow().date()).isoformat()
    if value:
        logger.warning("Unrecognized date %r, using %s", value, fallback)
    return fallback


def parse_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, str):
        return None
    m = _NUMBER_PREFIX_RE.match(value)
    if not m:
        return None
    return float(m.group(0))


def is_valid_weight(value: Any) -> bool:
    number = parse_number(value)
    return number is not None and number > 0


def is_valid_price(value: Any) -> bool:
    # optional: absent, empty and zero prices are accepted
    if not value:
        return True
    number = parse_number(value)
    return number is not None and number >= 0


def is_valid_email(value: Any) -> bool:
    if not value:
        return True
    return isinstance(value, str) and bool(_EMAIL_RE.match(value))
