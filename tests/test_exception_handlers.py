"""Tests for global exception handlers.

Validates that every error type maps to the documented HTTP status with a
consistent body and no information leakage.
"""

import asyncio
import json
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from ipintel.core.errors import (
    AppError,
    ConfigurationAppError,
    ParseAppError,
    ServiceAppError,
    ServiceRateLimitedAppError,
    ThrottledAppError,
    TransportAppError,
    ValidationAppError,
)
from ipintel.core.exception_handlers import general_exception_handler, setup_exception_handlers


@pytest.fixture
def app_with_handlers() -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)
    return app


@pytest.fixture
def client(app_with_handlers: FastAPI) -> TestClient:
    return TestClient(app_with_handlers)


class TestAppErrorHandler:
    @pytest.mark.parametrize(
        ("error_cls", "expected_status"),
        [
            (ValidationAppError, 400),
            (ThrottledAppError, 429),
            (ServiceRateLimitedAppError, 503),
            (TransportAppError, 502),
            (ParseAppError, 502),
            (ServiceAppError, 502),
            (ConfigurationAppError, 500),
        ],
    )
    def test_status_mapping(self, client, app_with_handlers, error_cls, expected_status):
        @app_with_handlers.get("/boom")
        async def boom():
            raise error_cls(code="some_code", message="Something failed")

        response = client.get("/boom")

        assert response.status_code == expected_status
        data = response.json()
        assert data["error"]["code"] == "some_code"
        assert data["error"]["message"] == "Something failed"
        assert "request_id" in data["error"]
        assert "details" not in data["error"]

    def test_details_are_included(self, client, app_with_handlers):
        @app_with_handlers.get("/service-error")
        async def service_error():
            raise ServiceAppError(
                code="service_error",
                message="API error: no results",
                details={"ip": "1.2.3.4", "http_status": 200},
            )

        response = client.get("/service-error")

        assert response.json()["error"]["details"] == {"ip": "1.2.3.4", "http_status": 200}

    def test_throttled_sets_retry_after(self, client, app_with_handlers):
        @app_with_handlers.get("/throttled")
        async def throttled():
            raise ThrottledAppError(
                code="throttled",
                message="Throttled",
                details={"retry_after": 2.2, "max_wait_seconds": 1.0},
            )

        response = client.get("/throttled")

        assert response.status_code == 429
        assert response.headers["Retry-After"] == "3"

    def test_throttled_without_hint_has_no_retry_after(self, client, app_with_handlers):
        @app_with_handlers.get("/throttled-plain")
        async def throttled_plain():
            raise ThrottledAppError(code="throttled", message="Throttled")

        response = client.get("/throttled-plain")

        assert response.status_code == 429
        assert "Retry-After" not in response.headers


class TestGeneralExceptionHandler:
    def test_returns_generic_500(self):
        request = AsyncMock()
        request.url.path = "/v1/score/1.2.3.4"
        request.method = "GET"

        exc = RuntimeError("connection pool exhausted for a@b.com")
        response = asyncio.run(general_exception_handler(request, exc))

        data = json.loads(bytes(response.body).decode())
        assert response.status_code == 500
        assert data["error"]["code"] == "internal_server_error"
        assert "a@b.com" not in data["error"]["message"]
        assert "RuntimeError" not in bytes(response.body).decode()


def test_setup_registers_handlers(app_with_handlers: FastAPI):
    assert AppError in app_with_handlers.exception_handlers
    assert Exception in app_with_handlers.exception_handlers
