"""Secure Record Model."""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Mapping

from .canonical import canonical_json_bytes

ALGORITHM_AES_256_GCM = "AES-256-GCM"
SUPPORTED_MK_VERSION = 1


def utc_timestamp() -> str:
    """Current UTC time as YYYY-MM-DDTHH:MM:SS.mmmZ."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


def build_aad(record_id: Any, party_id: Any, created_at: Any, alg: Any, mk_version: Any) -> bytes:
    """Canonical associated data binding a record's clear metadata to both AEAD layers."""
    return canonical_json_bytes({
        "id": record_id,
        "partyId": party_id,
        "createdAt": created_at,
        "alg": alg,
        "mk_version": mk_version,
    })


@dataclass(frozen=True)
class SecureRecord:
    """
    Encrypted transaction record.

    All binary fields are lowercase hex strings. The metadata fields are
    stored in the clear but authenticated by both AEAD layers, so the
    record is immutable: any change makes it unopenable.
    """
    id: str
    party_id: str
    created_at: str
    payload_nonce: str   # 24 hex char (12 bytes)
    payload_ct: str      # Hex
    payload_tag: str     # 32 hex char (16 bytes)
    dek_wrap_nonce: str  # 24 hex char (12 bytes)
    dek_wrapped: str     # 64 hex char (32 bytes)
    dek_wrap_tag: str    # 32 hex char (16 bytes)
    alg: str = ALGORITHM_AES_256_GCM
    mk_version: int = field(default=SUPPORTED_MK_VERSION)

    @property
    def aad(self) -> bytes:
        return build_aad(self.id, self.party_id, self.created_at, self.alg, self.mk_version)

    def to_dict(self) -> Dict[str, Any]:
        """Wire/storage form; metadata keys are camelCase."""
        return {
            "id": self.id,
            "partyId": self.party_id,
            "createdAt": self.created_at,
            "payload_nonce": self.payload_nonce,
            "payload_ct": self.payload_ct,
            "payload_tag": self.payload_tag,
            "dek_wrap_nonce": self.dek_wrap_nonce,
            "dek_wrapped": self.dek_wrapped,
            "dek_wrap_tag": self.dek_wrap_tag,
            "alg": self.alg,
            "mk_version": self.mk_version,
        }

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> 'SecureRecord':
        """Build a record from its wire form without validating it.

        Missing keys become None; run validate_record_shape before use.
        """
        return SecureRecord(
            id=data.get("id"),
            party_id=data.get("partyId"),
            created_at=data.get("createdAt"),
            payload_nonce=data.get("payload_nonce"),
            payload_ct=data.get("payload_ct"),
            payload_tag=data.get("payload_tag"),
            dek_wrap_nonce=data.get("dek_wrap_nonce"),
            dek_wrapped=data.get("dek_wrapped"),
            dek_wrap_tag=data.get("dek_wrap_tag"),
            alg=data.get("alg"),
            mk_version=data.get("mk_version"),
        )
