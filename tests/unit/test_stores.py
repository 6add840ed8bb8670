"""Tests for record store adapters."""
import json

import pytest

from txvault.adapters.json_store.stores import JsonRecordStore
from txvault.adapters.memory_store.stores import MemoryRecordStore
from txvault.domain.envelope.constructor import encrypt_transaction
from txvault.domain.envelope.opener import decrypt_transaction


@pytest.fixture(params=["memory", "json"])
def store(request, tmp_path):
    if request.param == "memory":
        return MemoryRecordStore()
    return JsonRecordStore(tmp_path / "nested" / "records.json")


@pytest.fixture
def record(master_key_hex):
    return encrypt_transaction("party_123", {"amount": 5}, master_key_hex)


def test_put_get(store, record):
    store.put(record)
    assert store.get(record.id) == record


def test_get_missing_returns_none(store):
    assert store.get("does-not-exist") is None


def test_put_refuses_to_overwrite(store, record):
    store.put(record)
    with pytest.raises(KeyError):
        store.put(record)


def test_stored_record_still_opens(store, record, master_key_hex):
    store.put(record)
    assert decrypt_transaction(store.get(record.id), master_key_hex) == {"amount": 5}


def test_json_store_persists_wire_form(tmp_path, record):
    path = tmp_path / "records.json"
    JsonRecordStore(path).put(record)

    on_disk = json.loads(path.read_text())
    assert on_disk[record.id] == record.to_dict()
    assert "amount" not in path.read_text()

    # A fresh instance reads the same file
    assert JsonRecordStore(path).get(record.id) == record
