"""AES-256-GCM primitive wrapper.

Single-shot seal/open over a 32-byte key with a fresh 96-bit nonce per
seal and a detached 128-bit tag. Used identically for the payload layer
and the DEK-wrap layer.
"""
import os
from typing import NamedTuple

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .errors import AuthenticationFailed, InvalidKeyLength, InvalidNonceLength, InvalidTagLength

KEY_BYTES = 32
NONCE_BYTES = 12
TAG_BYTES = 16


class SealedBox(NamedTuple):
    nonce: bytes
    ciphertext: bytes
    tag: bytes


def _check_key(key: bytes) -> None:
    if not isinstance(key, (bytes, bytearray)) or len(key) != KEY_BYTES:
        raise InvalidKeyLength("key: invalid length", field="key")


def seal(key: bytes, plaintext: bytes, aad: bytes) -> SealedBox:
    """Encrypt `plaintext` under `key`, authenticating `aad` alongside it."""
    _check_key(key)

    nonce = os.urandom(NONCE_BYTES)
    ct_and_tag = AESGCM(bytes(key)).encrypt(nonce, plaintext, aad)

    return SealedBox(
        nonce=nonce,
        ciphertext=ct_and_tag[:-TAG_BYTES],
        tag=ct_and_tag[-TAG_BYTES:],
    )


def open_sealed(key: bytes, nonce: bytes, ciphertext: bytes, tag: bytes, aad: bytes) -> bytes:
    """Decrypt and authenticate. Any authentication failure raises AuthenticationFailed."""
    _check_key(key)
    if len(nonce) != NONCE_BYTES:
        raise InvalidNonceLength("nonce: invalid length", field="nonce")
    if len(tag) != TAG_BYTES:
        raise InvalidTagLength("tag: invalid length", field="tag")

    try:
        return AESGCM(bytes(key)).decrypt(nonce, ciphertext + tag, aad)
    except InvalidTag:
        raise AuthenticationFailed() from None
