"""Logging Hardening and Redaction.

This module provides filters to prevent envelope material (nonces, tags,
ciphertexts, wrapped keys) and raw key hex from appearing in application
logs.
"""
import logging
import re

SECRET_PATTERNS = [
    (re.compile(r'("(?:payload|dek_wrap)_nonce":\s*")[0-9a-fA-F]*(")'), r'\1[REDACTED]\2'),
    (re.compile(r'("(?:payload|dek_wrap)_tag":\s*")[0-9a-fA-F]*(")'), r'\1[REDACTED]\2'),
    (re.compile(r'("(?:payload_ct|dek_wrapped)":\s*")[0-9a-fA-F]*(")'), r'\1[REDACTED]\2'),
    (re.compile(r"('(?:payload_nonce|payload_tag|payload_ct|dek_wrap_nonce|dek_wrapped|dek_wrap_tag)':\s*')[0-9a-fA-F]*(')"), r'\1[REDACTED]\2'),
    # Keyword-based assignments
    (re.compile(r'\b((?:payload|dek_wrap)_nonce|(?:payload|dek_wrap)_tag|payload_ct|dek_wrapped)=[0-9a-fA-F]+'), r'\1=[REDACTED]'),
    # Any bare 32-byte hex run: master key or DEK shaped
    (re.compile(r'\b[0-9a-fA-F]{64}\b'), '[REDACTED_KEY]'),
]


def redact_string(text: str) -> str:
    for pattern, replacement in SECRET_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


class SecretRedactionFilter(logging.Filter):
    """Filter that redacts secret-like patterns from log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = redact_string(record.msg)

        # Also redact arguments if they are strings
        if isinstance(record.args, tuple) and record.args:
            record.args = tuple(
                redact_string(arg) if isinstance(arg, str) else arg
                for arg in record.args
            )

        return True


def setup_logging_redaction() -> None:
    """Apply the SecretRedactionFilter to the root and all existing loggers."""
    redact_filter = SecretRedactionFilter()

    root_logger = logging.getLogger()

    # Remove existing filters if any (to avoid duplicates)
    for f in root_logger.filters[:]:
        if isinstance(f, SecretRedactionFilter):
            root_logger.removeFilter(f)

    root_logger.addFilter(redact_filter)

    # Logger filters do not propagate, so attach to named loggers too
    for name in list(logging.root.manager.loggerDict):
        logger = logging.getLogger(name)
        for f in logger.filters[:]:
            if isinstance(f, SecretRedactionFilter):
                logger.removeFilter(f)
        logger.addFilter(redact_filter)

    logging.getLogger(__name__).info("Logging redaction filters active.")
