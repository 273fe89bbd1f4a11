"""Tests for sensitive data filtering in logs."""

from __future__ import annotations

import json
import logging
from io import StringIO

from ipintel.core.logging import (
    JsonFormatter,
    SensitiveDataFilter,
    clear_request_id,
    set_request_id,
)


def _capture(name: str) -> tuple[logging.Logger, StringIO]:
    logger = logging.getLogger(name)
    logger.setLevel(logging.INFO)
    logger.handlers.clear()
    logger.propagate = False

    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.addFilter(SensitiveDataFilter())
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    return logger, stream


def test_contact_email_is_redacted():
    logger, stream = _capture("test_email_redaction")

    logger.info(
        "ipintel.query",
        extra={
            "email": "owner@example.com",
            "contact": "owner@example.com",
            "ip": "1.2.3.4",
        },
    )

    output = stream.getvalue()
    assert "owner@example.com" not in output
    assert "[REDACTED]" in output
    assert "1.2.3.4" in output


def test_url_is_redacted():
    logger, stream = _capture("test_url_redaction")

    logger.info(
        "ipintel.request",
        extra={"url": "http://check.getipintel.net/check.php?ip=1.2.3.4&contact=a@b.com"},
    )

    assert "a@b.com" not in stream.getvalue()


def test_safe_fields_pass_through():
    logger, stream = _capture("test_safe_fields")

    logger.info(
        "ipintel.query.completed",
        extra={"ip": "1.2.3.4", "score": 0.5, "check_type": "m", "duration_ms": 12.5},
    )

    record = json.loads(stream.getvalue())
    assert record["message"] == "ipintel.query.completed"
    assert record["score"] == 0.5
    assert record["check_type"] == "m"
    assert "[REDACTED]" not in stream.getvalue()


def test_nested_sensitive_fields_are_redacted():
    logger, stream = _capture("test_nested")

    logger.info(
        "nested_event",
        extra={
            "params": {"contact": "secret@example.com", "flags": "b"},
            "attempts": [{"email": "secret@example.com"}],
        },
    )

    output = stream.getvalue()
    assert "secret@example.com" not in output
    assert '"flags": "b"' in output


def test_request_id_from_context():
    logger, stream = _capture("test_request_id")

    set_request_id("req-42")
    try:
        logger.warning("ipintel.query.throttled")
    finally:
        clear_request_id()

    assert json.loads(stream.getvalue())["request_id"] == "req-42"
