"""Dependency Injection Module."""
import logging
from functools import lru_cache
from pathlib import Path

from txvault.adapters.json_store.stores import JsonRecordStore
from txvault.adapters.memory_store.stores import MemoryRecordStore
from txvault.domain.envelope.codec import parse_master_key_hex
from txvault.domain.envelope.errors import InvalidKeyMaterial
from txvault.domain.interfaces import RecordStore
from txvault.errors import raise_vault_error
from txvault.settings import settings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_record_store() -> RecordStore:
    """Process-wide record store. JSON fallback is for local development only."""
    if settings.USE_JSON_STORES:
        logger.info(f"Using JSON record store at {settings.RECORDS_FILE}")
        return JsonRecordStore(Path(settings.RECORDS_FILE))
    return MemoryRecordStore()


def get_master_key_hex() -> str:
    """Resolve the master key for one request.

    A missing or malformed key is a server misconfiguration, not a client
    error, so it maps to 500 and never echoes the value.
    """
    key = settings.MASTER_KEY_HEX
    if not key:
        logger.error("MASTER_KEY_HEX is not set")
        raise_vault_error("MASTER_KEY_UNAVAILABLE", 500, "Master key is not configured")
    try:
        parse_master_key_hex(key)
    except InvalidKeyMaterial as e:
        logger.error(f"MASTER_KEY_HEX is invalid ({e.message})")
        raise_vault_error("MASTER_KEY_UNAVAILABLE", 500, "Master key is not configured")
    return key
