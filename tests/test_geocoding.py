import pytest
import requests

from freight_ingest.geocoding import GEOCODE_URL, GeocodeResult, GoogleGeocoder


class FakeResponse:
    def __init__(self, payload=None, status_code=200, body_error=None):
        self.payload = payload
        self.status_code = status_code
        self.body_error = body_error

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self.body_error:
            raise self.body_error
        return self.payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def get(self, url, params=None, timeout=None):
        self.requests.append((url, params, timeout))
        if self.error:
            raise self.error
        return self.response


OK_PAYLOAD = {
    "status": "OK",
    "results": [
        {
            "formatted_address": "Rosario, Santa Fe, Argentina",
            "geometry": {"location": {"lat": -32.9442, "lng": -60.6505}},
        },
        {
            "formatted_address": "Rosario, Uruguay",
            "geometry": {"location": {"lat": -34.31, "lng": -57.35}},
        },
    ],
}


def test_first_candidate_is_used():
    session = FakeSession(FakeResponse(OK_PAYLOAD))
    geocoder = GoogleGeocoder(api_key="k", session=session, timeout=5)
    result = geocoder.geocode(" Rosario ")
    assert result == GeocodeResult(-32.9442, -60.6505, "Rosario, Santa Fe, Argentina")

    url, params, timeout = session.requests[0]
    assert url == GEOCODE_URL
    assert params == {
        "address": "Rosario",
        "components": "country:AR",
        "region": "AR",
        "language": "es",
        "key": "k",
    }
    assert timeout == 5


@pytest.mark.parametrize("payload", [
    {"status": "ZERO_RESULTS", "results": []},
    {"status": "REQUEST_DENIED", "results": [], "error_message": "bad key"},
    {"status": "OK", "results": []},
    {"status": "OK", "results": [{"geometry": {}}]},
    ["not", "an", "object"],
])
def test_unusable_responses(payload):
    geocoder = GoogleGeocoder(api_key="k", session=FakeSession(FakeResponse(payload)))
    assert geocoder.geocode("Nowhere") is None


def test_transport_errors_return_none():
    geocoder = GoogleGeocoder(api_key="k", session=FakeSession(error=requests.ConnectionError("down")))
    assert geocoder.geocode("Rosario") is None


def test_http_error_and_html_body():
    assert GoogleGeocoder(api_key="k", session=FakeSession(FakeResponse(status_code=500))).geocode("x") is None
    html = FakeResponse(body_error=ValueError("Expecting value"))
    assert GoogleGeocoder(api_key="k", session=FakeSession(html)).geocode("x") is None


def test_missing_api_key(monkeypatch):
    monkeypatch.setattr("freight_ingest.geocoding.GOOGLE_MAPS_API_KEY", None)
    with pytest.raises(RuntimeError):
        GoogleGeocoder()
