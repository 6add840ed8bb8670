"""Envelope Error Taxonomy.

Two disjoint classes:
    - StructuralError: input or record shape defects detected before any
      cryptographic work. Messages name the offending field and are safe
      to return to callers.
    - AuthenticationFailed: every tamper, wrong-key or corrupted-ciphertext
      condition in either AEAD layer. Deliberately undifferentiated.
"""
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    MISSING_FIELD = "missing_field"
    NOT_SERIALIZABLE = "not_serializable"
    INVALID_ENCODING = "invalid_encoding"
    INVALID_LENGTH = "invalid_length"
    INVALID_TIMESTAMP = "invalid_timestamp"
    UNSUPPORTED_ALGORITHM = "unsupported_algorithm"
    UNSUPPORTED_KEY_VERSION = "unsupported_key_version"
    INVALID_KEY_MATERIAL = "invalid_key_material"
    INVALID_KEY_LENGTH = "invalid_key_length"
    INVALID_NONCE_LENGTH = "invalid_nonce_length"
    INVALID_TAG_LENGTH = "invalid_tag_length"
    AUTHENTICATION_FAILED = "authentication_failed"


class EnvelopeError(Exception):
    """Base for every error raised by the envelope core."""

    kind: ErrorKind

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field

    @property
    def is_structural(self) -> bool:
        return isinstance(self, StructuralError)


class StructuralError(EnvelopeError):
    """Input or record shape defect. Safe to surface verbatim."""


class MissingField(StructuralError):
    kind = ErrorKind.MISSING_FIELD


class NotSerializable(StructuralError):
    kind = ErrorKind.NOT_SERIALIZABLE


class InvalidEncoding(StructuralError):
    kind = ErrorKind.INVALID_ENCODING


class InvalidLength(StructuralError):
    kind = ErrorKind.INVALID_LENGTH


class InvalidTimestamp(StructuralError):
    kind = ErrorKind.INVALID_TIMESTAMP


class UnsupportedAlgorithm(StructuralError):
    kind = ErrorKind.UNSUPPORTED_ALGORITHM


class UnsupportedKeyVersion(StructuralError):
    kind = ErrorKind.UNSUPPORTED_KEY_VERSION


class InvalidKeyMaterial(StructuralError):
    kind = ErrorKind.INVALID_KEY_MATERIAL


class InvalidKeyLength(StructuralError):
    kind = ErrorKind.INVALID_KEY_LENGTH


class InvalidNonceLength(StructuralError):
    kind = ErrorKind.INVALID_NONCE_LENGTH


class InvalidTagLength(StructuralError):
    kind = ErrorKind.INVALID_TAG_LENGTH


AUTHENTICATION_FAILED_MESSAGE = "decryption failed"


class AuthenticationFailed(EnvelopeError):
    """The record cannot be opened with this key. Cause is never exposed."""

    kind = ErrorKind.AUTHENTICATION_FAILED

    def __init__(self):
        super().__init__(AUTHENTICATION_FAILED_MESSAGE)
