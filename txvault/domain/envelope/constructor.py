"""Envelope Constructor.

Encrypts a payload under a fresh per-record DEK and wraps that DEK under
the caller's master key. Both layers bind the record metadata as AAD.
"""
import logging
import os
import uuid
from typing import Any

from .aead import KEY_BYTES, seal
from .canonical import serialize_payload
from .codec import encode_hex, parse_master_key_hex
from .errors import MissingField
from .models import ALGORITHM_AES_256_GCM, SUPPORTED_MK_VERSION, SecureRecord, build_aad, utc_timestamp

logger = logging.getLogger(__name__)


def encrypt_transaction(party_id: str, payload: Any, master_key_hex: str) -> SecureRecord:
    """Seal `payload` for `party_id` into a new SecureRecord.

    Args:
        party_id: Non-empty identifier of the owning party.
        payload: Any JSON-serializable value (None is stored as null).
        master_key_hex: 64 hex chars (32 bytes).

    Raises:
        MissingField, InvalidKeyMaterial, NotSerializable
    """
    if not party_id or not isinstance(party_id, str):
        raise MissingField("partyId is required", field="partyId")

    master_key = parse_master_key_hex(master_key_hex)
    plaintext = serialize_payload(payload)

    dek = os.urandom(KEY_BYTES)
    record_id = str(uuid.uuid4())
    created_at = utc_timestamp()
    aad = build_aad(record_id, party_id, created_at, ALGORITHM_AES_256_GCM, SUPPORTED_MK_VERSION)

    payload_box = seal(dek, plaintext, aad)
    wrap_box = seal(master_key, dek, aad)

    logger.debug("Sealed record %s for party %s (%d bytes)", record_id, party_id, len(plaintext))

    return SecureRecord(
        id=record_id,
        party_id=party_id,
        created_at=created_at,
        payload_nonce=encode_hex(payload_box.nonce),
        payload_ct=encode_hex(payload_box.ciphertext),
        payload_tag=encode_hex(payload_box.tag),
        dek_wrap_nonce=encode_hex(wrap_box.nonce),
        dek_wrapped=encode_hex(wrap_box.ciphertext),
        dek_wrap_tag=encode_hex(wrap_box.tag),
        alg=ALGORITHM_AES_256_GCM,
        mk_version=SUPPORTED_MK_VERSION,
    )
