from typing import Any, Dict, NoReturn, Optional

from fastapi import HTTPException

from txvault.domain.envelope.errors import EnvelopeError, ErrorKind


def raise_vault_error(
    code: str,
    status_code: int,
    message: str,
    details: Optional[Dict[str, Any]] = None
) -> NoReturn:
    """Raise a standardized HTTPException.

    Args:
        code: Error code (INVALID_LENGTH, DECRYPTION_FAILED, etc.)
        status_code: HTTP Status Code (400, 404, etc.)
        message: Human readable message
        details: Optional extra details
    """
    error_body: Dict[str, Any] = {
        "code": code,
        "message": message
    }
    if details:
        error_body["details"] = details

    raise HTTPException(status_code=status_code, detail={"error": error_body})


def raise_envelope_error(error: EnvelopeError) -> NoReturn:
    """Surface an envelope error as a client failure (400).

    Authentication failures keep their single opaque message and carry no
    field detail.
    """
    if error.kind == ErrorKind.AUTHENTICATION_FAILED:
        raise_vault_error("DECRYPTION_FAILED", 400, error.message)

    details = {"field": error.field} if error.field else None
    raise_vault_error(error.kind.value.upper(), 400, error.message, details)
