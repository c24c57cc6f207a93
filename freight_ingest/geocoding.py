"""Google Geocoding client used to turn free-text localities into coordinates."""

import os
from typing import Any, Dict, NamedTuple, Optional

import requests
from dotenv import load_dotenv

from .utils import logger

load_dotenv()

GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
GOOGLE_MAPS_API_KEY = os.getenv("GOOGLE_MAPS_API_KEY")
GEOCODE_COUNTRY = os.getenv("GEOCODE_COUNTRY", "AR")
GEOCODE_LANGUAGE = os.getenv("GEOCODE_LANGUAGE", "es")
GEOCODE_TIMEOUT_SECONDS = float(os.getenv("GEOCODE_TIMEOUT_SECONDS", "30"))


class GeocodeResult(NamedTuple):
    latitude: float
    longitude: float
    formatted_address: Optional[str] = None


def _parse_response(data: Any) -> Optional[GeocodeResult]:
    if not isinstance(data, dict):
        return None
    status = data.get("status")
    results = data.get("results") or []
    if status != "OK" or not results:
        logger.error("Geocoding returned status %s with %d result(s)", status, len(results))
        return None
    first = results[0]
    try:
        location = first["geometry"]["location"]
        lat = float(location["lat"])
        lng = float(location["lng"])
    except (KeyError, ValueError, TypeError):
        return None
    return GeocodeResult(lat, lng, first.get("formatted_address"))


class GoogleGeocoder:
    """Resolves an address restricted to one country and answer language.

    Only the first candidate of a response is used.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        country: str = GEOCODE_COUNTRY,
        language: str = GEOCODE_LANGUAGE,
        timeout: float = GEOCODE_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_key = api_key or GOOGLE_MAPS_API_KEY
        if not self.api_key:
            raise RuntimeError("GOOGLE_MAPS_API_KEY not set")
        self.country = country
        self.language = language
        self.timeout = timeout
        self.session = session or requests.Session()

    def params(self, address: str) -> Dict[str, str]:
        return {
            "address": address.strip(),
            "components": f"country:{self.country}",
            "region": self.country,
            "language": self.language,
            "key": self.api_key,
        }

    def geocode(self, address: str) -> Optional[GeocodeResult]:
        logger.info("Geocoding %s", address)
        try:
            response = self.session.get(GEOCODE_URL, params=self.params(address), timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except (ValueError, requests.RequestException) as e:
            logger.error("Geocoding request failed for %s: %s", address, e)
            return None
        result = _parse_response(data)
        if result is not None:
            logger.info("Geocoded %s -> %s, %s (%s)", address, result.latitude, result.longitude, result.formatted_address)
        return result
