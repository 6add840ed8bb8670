"""Tests for the transaction HTTP API."""
import dataclasses

import pytest
from fastapi.testclient import TestClient

from txvault.adapters.memory_store.stores import MemoryRecordStore
from txvault.dependencies import get_master_key_hex, get_record_store
from txvault.main import app


@pytest.fixture
def store():
    return MemoryRecordStore()


@pytest.fixture
def client(store, master_key_hex):
    app.dependency_overrides[get_record_store] = lambda: store
    app.dependency_overrides[get_master_key_hex] = lambda: master_key_hex
    return TestClient(app)


def _create(client, payload=None, party_id="party_123"):
    body = {"partyId": party_id, "payload": payload if payload is not None else {"amount": 100, "currency": "AED"}}
    resp = client.post("/tx/encrypt", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_root(client):
    assert client.get("/").json() == {"status": "api running"}


def test_encrypt_returns_created_record(client, store):
    record = _create(client)

    assert record["partyId"] == "party_123"
    assert record["alg"] == "AES-256-GCM"
    assert record["mk_version"] == 1
    assert set(record) == {
        "id", "partyId", "createdAt", "payload_nonce", "payload_ct", "payload_tag",
        "dek_wrap_nonce", "dek_wrapped", "dek_wrap_tag", "alg", "mk_version",
    }
    assert "AED" not in str(record)
    assert store.get(record["id"]) is not None


def test_get_record(client):
    record = _create(client)
    resp = client.get(f"/tx/{record['id']}")
    assert resp.status_code == 200
    assert resp.json() == record


def test_get_unknown_record(client):
    resp = client.get("/tx/nope")
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "RECORD_NOT_FOUND"


def test_decrypt_roundtrip(client):
    record = _create(client)
    resp = client.post(f"/tx/{record['id']}/decrypt")

    assert resp.status_code == 200
    assert resp.json() == {
        "id": record["id"],
        "partyId": "party_123",
        "payload": {"amount": 100, "currency": "AED"},
    }


def test_decrypt_null_payload(client):
    resp = client.post("/tx/encrypt", json={"partyId": "party_123", "payload": None})
    assert resp.status_code == 201
    record_id = resp.json()["id"]
    assert client.post(f"/tx/{record_id}/decrypt").json()["payload"] is None


def test_decrypt_unknown_record(client):
    resp = client.post("/tx/nope/decrypt")
    assert resp.status_code == 404


def test_decrypt_with_wrong_master_key(client, other_key_hex):
    record = _create(client)
    app.dependency_overrides[get_master_key_hex] = lambda: other_key_hex

    resp = client.post(f"/tx/{record['id']}/decrypt")
    assert resp.status_code == 400
    assert resp.json() == {"error": {"code": "DECRYPTION_FAILED", "message": "decryption failed"}}


def test_decrypt_tampered_record_in_store(client, store):
    record = _create(client)
    stored = store.get(record["id"])
    store._records[stored.id] = dataclasses.replace(stored, party_id="party_999")

    resp = client.post(f"/tx/{record['id']}/decrypt")
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "DECRYPTION_FAILED"


def test_decrypt_malformed_record_in_store(client, store):
    record = _create(client)
    stored = store.get(record["id"])
    store._records[stored.id] = dataclasses.replace(stored, payload_nonce="00")

    resp = client.post(f"/tx/{record['id']}/decrypt")
    assert resp.status_code == 400
    assert resp.json()["error"] == {
        "code": "INVALID_LENGTH",
        "message": "payload_nonce: invalid length",
        "details": {"field": "payload_nonce"},
    }


@pytest.mark.parametrize("body", [
    {"payload": {"amount": 1}},
    {"partyId": 123, "payload": {"amount": 1}},
    {"partyId": "party_123"},
    ["not", "an", "object"],
])
def test_encrypt_invalid_body(client, body):
    resp = client.post("/tx/encrypt", json=body)
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "INVALID_BODY"


def test_encrypt_empty_party_id(client):
    resp = client.post("/tx/encrypt", json={"partyId": "", "payload": {"amount": 1}})
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "MISSING_FIELD"
    assert resp.json()["error"]["message"] == "partyId is required"


def test_master_key_not_configured(store, monkeypatch):
    from txvault.settings import settings

    monkeypatch.setattr(settings, "MASTER_KEY_HEX", None)
    app.dependency_overrides[get_record_store] = lambda: store
    client = TestClient(app)

    resp = client.post("/tx/encrypt", json={"partyId": "party_123", "payload": {}})
    assert resp.status_code == 500
    assert resp.json()["error"]["code"] == "MASTER_KEY_UNAVAILABLE"


def test_master_key_invalid_is_not_echoed(store, monkeypatch):
    from txvault.settings import settings

    monkeypatch.setattr(settings, "MASTER_KEY_HEX", "zz" * 32)
    app.dependency_overrides[get_record_store] = lambda: store
    client = TestClient(app)

    resp = client.post("/tx/encrypt", json={"partyId": "party_123", "payload": {}})
    assert resp.status_code == 500
    assert "zz" not in resp.text


def test_master_key_from_settings(store, monkeypatch, master_key_hex):
    from txvault.settings import settings

    monkeypatch.setattr(settings, "MASTER_KEY_HEX", master_key_hex)
    app.dependency_overrides[get_record_store] = lambda: store
    client = TestClient(app)

    record_id = client.post("/tx/encrypt", json={"partyId": "p", "payload": [1]}).json()["id"]
    assert client.post(f"/tx/{record_id}/decrypt").json()["payload"] == [1]
