"""Hex codec and exact-length validators for envelope fields.

Purely syntactic: no key derivation, no inspection of byte meaning.
"""
import binascii
import re

from .errors import InvalidEncoding, InvalidKeyMaterial, InvalidLength

_HEX_RE = re.compile(r"[0-9a-fA-F]+")


def is_valid_hex(text) -> bool:
    return isinstance(text, str) and len(text) % 2 == 0 and _HEX_RE.fullmatch(text) is not None


def encode_hex(data: bytes) -> str:
    """Lowercase hex encoding."""
    return binascii.hexlify(data).decode("ascii")


def decode_hex(text: str, field: str = "value") -> bytes:
    """Decode hex text, raising InvalidEncoding naming `field` on odd length or non-hex input."""
    if not is_valid_hex(text):
        raise InvalidEncoding(f"{field}: invalid hex", field=field)
    return binascii.unhexlify(text)


def assert_exact_length(text: str, expected_bytes: int, field: str) -> bytes:
    """Decode `text` and require exactly `expected_bytes` bytes.

    Returns the decoded bytes so callers do not decode twice.
    """
    data = decode_hex(text, field)
    if len(data) != expected_bytes:
        raise InvalidLength(f"{field}: invalid length", field=field)
    return data


def parse_master_key_hex(master_key_hex: str, expected_bytes: int = 32) -> bytes:
    """Decode a hex master key, raising InvalidKeyMaterial on any defect."""
    if not is_valid_hex(master_key_hex):
        raise InvalidKeyMaterial("master key: invalid hex", field="master key")
    if len(master_key_hex) != expected_bytes * 2:
        raise InvalidKeyMaterial("master key: invalid length", field="master key")
    return binascii.unhexlify(master_key_hex)
