"""Unit tests for structured logging."""

import json
import logging

from app.core.logging import CustomJsonFormatter, REDACTED_FIELDS, setup_logging


def _format(**extra) -> dict:
    formatter = CustomJsonFormatter(fmt="%(asctime)s %(level)s %(name)s %(message)s")
    record = logging.LogRecord("app.services.ledger_service", logging.INFO, __file__, 1, "Payment applied", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return json.loads(formatter.format(record))


def test_json_record_carries_context():
    payload = _format(bill_code="BIL123", correlation_id="req-1")
    assert payload["message"] == "Payment applied"
    assert payload["level"] == "INFO"
    assert payload["bill_code"] == "BIL123"
    assert payload["correlation_id"] == "req-1"


def test_credentials_are_masked():
    payload = _format(password="hunter22", refresh_token="abc")
    assert payload["password"] == "***"
    assert payload["refresh_token"] == "***"
    assert "password" in REDACTED_FIELDS


def test_setup_logging_is_idempotent():
    setup_logging()
    setup_logging()
    names = [h.get_name() for h in logging.getLogger().handlers]
    assert names.count("carepoint") == 1
