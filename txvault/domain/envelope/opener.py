"""Envelope Opener.

Reverses the constructor: unwrap the DEK under the master key, then open
the payload under the DEK. Fails closed with AuthenticationFailed on any
cryptographic defect, including a payload that does not deserialize.
"""
import logging
from typing import Any, Mapping, Union

from .aead import KEY_BYTES, open_sealed
from .canonical import deserialize_payload
from .codec import decode_hex, parse_master_key_hex
from .errors import AuthenticationFailed
from .models import SecureRecord
from .validator import validate_record_shape

logger = logging.getLogger(__name__)


def decrypt_transaction(record: Union[SecureRecord, Mapping[str, Any]], master_key_hex: str) -> Any:
    """Open `record` with the master key and return the original payload."""
    rec = validate_record_shape(record)
    master_key = parse_master_key_hex(master_key_hex)
    aad = rec.aad

    dek = open_sealed(
        master_key,
        decode_hex(rec.dek_wrap_nonce, "dek_wrap_nonce"),
        decode_hex(rec.dek_wrapped, "dek_wrapped"),
        decode_hex(rec.dek_wrap_tag, "dek_wrap_tag"),
        aad,
    )
    if len(dek) != KEY_BYTES:
        raise AuthenticationFailed()

    plaintext = open_sealed(
        dek,
        decode_hex(rec.payload_nonce, "payload_nonce"),
        decode_hex(rec.payload_ct, "payload_ct"),
        decode_hex(rec.payload_tag, "payload_tag"),
        aad,
    )

    try:
        payload = deserialize_payload(plaintext)
    except (ValueError, RecursionError):
        raise AuthenticationFailed() from None

    logger.debug("Opened record %s", rec.id)
    return payload
