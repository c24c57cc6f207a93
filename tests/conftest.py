import os
import tempfile
from pathlib import Path

# must be set before freight_ingest.db is imported
_tmpdir = tempfile.mkdtemp(prefix="freight-ingest-tests-")
os.environ["POSTGRES_URL"] = f"sqlite:///{Path(_tmpdir) / 'test.db'}"
os.environ.setdefault("GOOGLE_MAPS_API_KEY", "test-key")
os.environ["INGEST_DELAY_SECONDS"] = "0"

import pytest

from freight_ingest.db import Base, engine, SessionLocal
from freight_ingest.geocoding import GeocodeResult
import freight_ingest.models  # noqa: F401


class FakeGeocoder:
    """Answers every address except the ones listed in `unknown`."""

    def __init__(self, unknown=()):
        self.unknown = set(unknown)
        self.calls = []

    def geocode(self, address):
        self.calls.append(address)
        if address in self.unknown:
            return None
        offset = len(self.calls) / 100
        return GeocodeResult(-32.9 - offset, -60.6 - offset, f"{address}, Argentina")


@pytest.fixture
def db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def geocoder():
    return FakeGeocoder()


@pytest.fixture
def make_record():
    def _make(**overrides):
        record = {
            "material": "Soja",
            "tipoCarga": "Granel",
            "peso": "30000",
            "tipoEquipo": "Tolva",
            "localidadCarga": "Rosario",
            "localidadDescarga": "Córdoba",
            "fechaCarga": "01/08/2024",
            "fechaDescarga": "02/08/2024",
            "telefono": "3411234567",
        }
        record.update(overrides)
        return {k: v for k, v in record.items() if v is not ...}
    return _make
