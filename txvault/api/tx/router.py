"""Transaction API Router.

POST /tx/encrypt          seal a payload and store the record (201)
GET  /tx/{id}             fetch the stored record
POST /tx/{id}/decrypt     open a stored record with the configured master key

Envelope errors are client failures (400). Structural errors carry their
field-named message; authentication failures are always the same opaque
DECRYPTION_FAILED.
"""
import logging
from typing import Any, Dict, NoReturn

from fastapi import APIRouter, Depends
from pydantic import BaseModel, StrictStr

from txvault.dependencies import get_master_key_hex, get_record_store
from txvault.domain.envelope.errors import ErrorKind
from txvault.domain.envelope.models import SecureRecord
from txvault.domain.envelope.result import Err, try_decrypt_transaction, try_encrypt_transaction
from txvault.domain.interfaces import RecordStore
from txvault.errors import raise_envelope_error, raise_vault_error

router = APIRouter()
logger = logging.getLogger(__name__)


# ============ Pydantic Models ============

class EncryptRequest(BaseModel):
    partyId: StrictStr
    payload: Any


class DecryptResponse(BaseModel):
    id: str
    partyId: str
    payload: Any


def _get_record_or_404(store: RecordStore, record_id: str) -> SecureRecord:
    record = store.get(record_id)
    if record is None:
        raise_vault_error("RECORD_NOT_FOUND", 404, "Record not found")
    return record


def _reject(result: Err, action: str) -> NoReturn:
    if result.kind == ErrorKind.AUTHENTICATION_FAILED:
        logger.warning(f"{action} rejected: authentication failed")
    else:
        logger.info(f"{action} rejected: {result.message}")
    raise_envelope_error(result.error)


# ============ Routes ============

@router.post("/encrypt", status_code=201)
def encrypt_record(
    body: EncryptRequest,
    master_key_hex: str = Depends(get_master_key_hex),
    store: RecordStore = Depends(get_record_store),
) -> Dict[str, Any]:
    result = try_encrypt_transaction(body.partyId, body.payload, master_key_hex)
    if isinstance(result, Err):
        _reject(result, "Encrypt")

    record = result.value
    store.put(record)
    logger.info(f"Created record {record.id} for party {record.party_id}")
    return record.to_dict()


@router.get("/{record_id}")
def get_record(record_id: str, store: RecordStore = Depends(get_record_store)) -> Dict[str, Any]:
    return _get_record_or_404(store, record_id).to_dict()


@router.post("/{record_id}/decrypt", response_model=DecryptResponse)
def decrypt_record(
    record_id: str,
    master_key_hex: str = Depends(get_master_key_hex),
    store: RecordStore = Depends(get_record_store),
):
    record = _get_record_or_404(store, record_id)

    result = try_decrypt_transaction(record, master_key_hex)
    if isinstance(result, Err):
        _reject(result, f"Decrypt {record_id}")

    return DecryptResponse(id=record.id, partyId=record.party_id, payload=result.value)
