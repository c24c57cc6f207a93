import pytest
from fastapi.testclient import TestClient

from freight_ingest import catalogs
from freight_ingest.api.routes import get_geocoder
from freight_ingest.db import get_db
from freight_ingest.main import app


@pytest.fixture
def client(db, geocoder):
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_geocoder] = lambda: geocoder
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "database": "ok"}


def test_ingest_and_list(client, make_record):
    r = client.post("/listings/ingest", json=[make_record(), make_record(material=...)])
    assert r.status_code == 200
    body = r.json()
    assert body["succeeded"] == 1
    assert body["failed"] == 1
    listing_id = body["results"][0]["result"]["listing_id"]

    r = client.get(f"/listings/{listing_id}")
    assert r.status_code == 200
    listing = r.json()
    assert listing["phone"] == "+543411234567"
    assert listing["load_date"] == "2024-08-01"
    assert listing["weight"] == 30000.0

    soja = catalogs.lookup_by_name(catalogs.MATERIALS, "Soja").id
    r = client.get("/listings", params={"material_id": soja})
    assert r.json()["total"] == 1
    r = client.get("/listings", params={"min_weight": 50000})
    assert r.json() == {"total": 0, "items": []}


@pytest.mark.parametrize("payload", [{"material": "Soja"}, []])
def test_ingest_rejects_non_arrays_and_empty(client, payload):
    r = client.post("/listings/ingest", json=payload)
    assert r.status_code == 400


def test_listing_not_found(client):
    assert client.get("/listings/does-not-exist").status_code == 404


def test_capture_message_and_stats(client, make_record):
    payload = {
        "message": {
            "telegram_message_id": 501,
            "user_id": 77,
            "username": "fletes_norte",
            "text": "Soja granel Rosario a Córdoba",
            "chat_id": -200,
            "chat_type": "group",
            "timestamp": "2024-07-30T10:00:00Z",
        },
        "extraction": {"cargas": [make_record()], "confidence": 90, "model_used": "gemini-test"},
    }
    r = client.post("/messages", json=payload)
    assert r.status_code == 200
    body = r.json()
    assert body["ingestion"]["succeeded"] == 1

    r = client.get("/messages", params={"user_id": 77})
    assert [m["telegram_message_id"] for m in r.json()] == [501]

    r = client.get("/analyses", params={"sentiment": "positive"})
    assert r.json()[0]["summary"] == "Se extrajeron 1 carga(s): Soja de Rosario a Córdoba"

    r = client.get("/users/77/stats")
    assert r.status_code == 200
    stats = r.json()
    assert stats["total_messages"] == 1
    assert stats["avg_confidence"] == 90.0


def test_stats_for_unknown_user(client):
    assert client.get("/users/1/stats").status_code == 404


def test_capture_rejects_out_of_range_confidence(client):
    payload = {
        "message": {
            "telegram_message_id": 1, "user_id": 1, "text": "x", "chat_id": 1,
            "chat_type": "private", "timestamp": "2024-07-30T10:00:00Z",
        },
        "extraction": {"confidence": 140},
    }
    assert client.post("/messages", json=payload).status_code == 422
