"""Result-returning entry points.

`try_encrypt_transaction` and `try_decrypt_transaction` never raise for
envelope errors; they return Ok or Err so callers handle structural and
cryptographic failures explicitly. Anything that is not an EnvelopeError
is an internal fault and still propagates.
"""
from dataclasses import dataclass
from typing import Any, Generic, Mapping, TypeVar, Union

from .constructor import encrypt_transaction
from .errors import EnvelopeError, ErrorKind
from .models import SecureRecord
from .opener import decrypt_transaction

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    error: EnvelopeError

    @property
    def ok(self) -> bool:
        return False

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind

    @property
    def message(self) -> str:
        return self.error.message

    @property
    def is_structural(self) -> bool:
        return self.error.is_structural


Result = Union[Ok[T], Err]


def try_encrypt_transaction(party_id: str, payload: Any, master_key_hex: str) -> Result[SecureRecord]:
    try:
        return Ok(encrypt_transaction(party_id, payload, master_key_hex))
    except EnvelopeError as e:
        return Err(e)


def try_decrypt_transaction(record: Union[SecureRecord, Mapping[str, Any]], master_key_hex: str) -> Result[Any]:
    try:
        return Ok(decrypt_transaction(record, master_key_hex))
    except EnvelopeError as e:
        return Err(e)
