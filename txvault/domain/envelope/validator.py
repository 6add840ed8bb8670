"""Structural gate applied to every record before any key material is touched."""
from datetime import datetime
from typing import Any, Mapping, Union

from .aead import NONCE_BYTES, TAG_BYTES
from .codec import assert_exact_length, decode_hex
from .errors import (
    InvalidTimestamp,
    MissingField,
    UnsupportedAlgorithm,
    UnsupportedKeyVersion,
)
from .models import ALGORITHM_AES_256_GCM, SUPPORTED_MK_VERSION, SecureRecord


def as_record(record: Union[SecureRecord, Mapping[str, Any]]) -> SecureRecord:
    if isinstance(record, SecureRecord):
        return record
    if isinstance(record, Mapping):
        return SecureRecord.from_dict(record)
    raise MissingField("record is required", field="record")


def _require_text(value: Any, field: str) -> None:
    if not value or not isinstance(value, str):
        raise MissingField(f"{field} is required", field=field)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, accepting a trailing 'Z' for UTC."""
    text = value[:-1] + "+00:00" if value.endswith(("Z", "z")) else value
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise InvalidTimestamp("createdAt: invalid format", field="createdAt") from None


def validate_record_shape(record: Union[SecureRecord, Mapping[str, Any]]) -> SecureRecord:
    """Reject malformed records with precise, non-sensitive messages.

    Returns the record as a SecureRecord. Checks run in a fixed order so
    that the first defect found is the one reported.
    """
    rec = as_record(record)

    _require_text(rec.id, "id")
    _require_text(rec.party_id, "partyId")
    _require_text(rec.created_at, "createdAt")
    parse_timestamp(rec.created_at)

    if rec.alg != ALGORITHM_AES_256_GCM:
        raise UnsupportedAlgorithm("unsupported algorithm", field="alg")
    # exact int: True and 1.0 both compare equal to 1
    if type(rec.mk_version) is not int or rec.mk_version != SUPPORTED_MK_VERSION:
        raise UnsupportedKeyVersion("unsupported master key version", field="mk_version")

    assert_exact_length(rec.payload_nonce, NONCE_BYTES, "payload_nonce")
    assert_exact_length(rec.payload_tag, TAG_BYTES, "payload_tag")
    assert_exact_length(rec.dek_wrap_nonce, NONCE_BYTES, "dek_wrap_nonce")
    assert_exact_length(rec.dek_wrap_tag, TAG_BYTES, "dek_wrap_tag")
    # Ciphertext length is data-dependent
    decode_hex(rec.payload_ct, "payload_ct")
    decode_hex(rec.dek_wrapped, "dek_wrapped")

    return rec
