from __future__ import annotations

import logging

from fastapi.testclient import TestClient

from ipintel.main import app


client = TestClient(app)


def test_preserves_incoming_request_id_header():
    incoming_id = "test-request-id-123"
    resp = client.get("/health", headers={"X-Request-ID": incoming_id})

    assert resp.status_code == 200
    assert resp.headers.get("X-Request-ID") == incoming_id


def test_generates_request_id_when_missing():
    resp = client.get("/health")

    assert resp.status_code == 200
    generated = resp.headers.get("X-Request-ID")
    assert generated
    assert resp.headers.get("X-Request-Duration-ms") is not None


def test_error_body_carries_request_id():
    resp = client.get("/v1/score/not-an-ip", headers={"X-Request-ID": "req-invalid"})

    assert resp.status_code == 400
    assert resp.json()["error"]["request_id"] == "req-invalid"


def test_logs_one_access_event_per_request():
    records: list[logging.LogRecord] = []

    class _ListHandler(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            records.append(record)

    middleware_logger = logging.getLogger("ipintel.core.middleware")
    handler = _ListHandler()
    previous_level = middleware_logger.level
    middleware_logger.addHandler(handler)
    middleware_logger.setLevel(logging.INFO)
    try:
        resp = client.get("/health", headers={"X-Request-ID": "req-access"})
    finally:
        middleware_logger.removeHandler(handler)
        middleware_logger.setLevel(previous_level)

    assert resp.status_code == 200
    access = [r for r in records if r.getMessage() == "http.request.completed"]
    assert len(access) == 1
    assert access[0].path == "/health"
    assert access[0].status_code == 200
    assert access[0].method == "GET"


def test_blank_request_id_header_is_replaced():
    resp = client.get("/health", headers={"X-Request-ID": "   "})

    assert resp.headers["X-Request-ID"].strip()
