import logging

from txvault.logging_hardening import SecretRedactionFilter, redact_string, setup_logging_redaction

KEY_HEX = "0123456789abcdef" * 4


def test_redacts_json_envelope_fields():
    text = '{"payload_nonce": "' + "a" * 24 + '", "payload_ct": "deadbeef", "dek_wrap_tag": "' + "b" * 32 + '"}'
    redacted = redact_string(text)
    assert "deadbeef" not in redacted
    assert "a" * 24 not in redacted
    assert redacted.count("[REDACTED]") == 3


def test_redacts_dict_repr_and_keywords():
    assert "cafe" not in redact_string("record {'dek_wrapped': 'cafe'}")
    assert redact_string("payload_ct=00ff") == "payload_ct=[REDACTED]"


def test_redacts_raw_key_hex():
    assert redact_string(f"key is {KEY_HEX}") == "key is [REDACTED_KEY]"


def test_leaves_metadata_alone():
    assert redact_string("Created record 1234 for party party_123") == "Created record 1234 for party party_123"


def test_filter_redacts_message_and_args():
    record = logging.LogRecord("t", logging.INFO, __file__, 1, "master %s n=%d", (KEY_HEX, 3), None)
    assert SecretRedactionFilter().filter(record)
    assert record.getMessage() == "master [REDACTED_KEY] n=3"


def test_setup_is_idempotent():
    setup_logging_redaction()
    setup_logging_redaction()
    root = logging.getLogger()
    assert sum(isinstance(f, SecretRedactionFilter) for f in root.filters) == 1


def test_logged_key_is_redacted(caplog):
    setup_logging_redaction()
    logger = logging.getLogger("txvault.test")
    logger.addFilter(SecretRedactionFilter())
    with caplog.at_level(logging.INFO, logger="txvault.test"):
        logger.info(f"loaded {KEY_HEX}")
    assert KEY_HEX not in caplog.text
