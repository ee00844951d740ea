from __future__ import annotations

from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.testclient import TestClient
from pydantic import BaseModel

from pension_api.domain.exceptions.base import DomainError
from pension_api.domain.exceptions.calculation import EmptyMutationListError
from pension_api.infrastructure.http import errors


class Payload(BaseModel):
    """Simple request body model used to exercise validation handlers."""

    value: int


def test_error_envelope_includes_optional_fields() -> None:
    payload = errors.error_envelope(
        code="SOME_CODE",
        http_status=418,
        message="I'm a teapot",
        details={"extra": "info"},
        trace_id="trace-123",
    )

    assert payload == {
        "error": {
            "code": "SOME_CODE",
            "http_status": 418,
            "message": "I'm a teapot",
            "details": {"extra": "info"},
            "trace_id": "trace-123",
        }
    }


def test_error_envelope_omits_absent_fields() -> None:
    payload = errors.error_envelope(code="X", http_status=400, message="bad")

    assert payload == {"error": {"code": "X", "http_status": 400, "message": "bad"}}


def _make_app_with_handlers() -> FastAPI:
    app = FastAPI()

    app.add_exception_handler(RequestValidationError, errors.handle_validation_error)
    app.add_exception_handler(HTTPException, errors.handle_http_exception)
    app.add_exception_handler(DomainError, errors.handle_domain_error)
    app.add_exception_handler(Exception, errors.handle_unhandled_exception)

    @app.middleware("http")
    async def add_request_id(request: Request, call_next):  # type: ignore[no-untyped-def]
        request.state.request_id = "trace-xyz"
        return await call_next(request)

    @app.post("/validation")
    async def validation_route(body: Payload) -> dict[str, Any]:
        return {"value": body.value}

    @app.get("/http-exc")
    async def http_exc_route() -> None:
        raise HTTPException(status_code=404, detail="not found")

    @app.get("/domain")
    async def domain_route() -> None:
        raise EmptyMutationListError("no mutations", details={"tenant_id": "acme"})

    @app.get("/unhandled")
    async def unhandled_route() -> None:
        raise RuntimeError("boom")

    return app


def test_handle_validation_error_envelope_and_trace_id() -> None:
    client = TestClient(_make_app_with_handlers())

    resp = client.post("/validation", json={"value": "not-an-int"})

    assert resp.status_code == 422
    err = resp.json()["error"]
    assert err["code"] == "VALIDATION_ERROR"
    assert err["http_status"] == 422
    assert err["details"]["errors"][0]["loc"] == ["body", "value"]
    assert err["trace_id"] == "trace-xyz"


def test_handle_http_exception_envelope() -> None:
    client = TestClient(_make_app_with_handlers())

    resp = client.get("/http-exc")

    assert resp.status_code == 404
    err = resp.json()["error"]
    assert err["code"] == "HTTP_ERROR"
    assert err["message"] == "not found"
    assert "details" not in err


def test_handle_domain_error_uses_error_code() -> None:
    client = TestClient(_make_app_with_handlers())

    resp = client.get("/domain")

    assert resp.status_code == 400
    err = resp.json()["error"]
    assert err["code"] == "EMPTY_MUTATIONS"
    assert err["message"] == "no mutations"
    assert err["details"] == {"tenant_id": "acme"}


def test_handle_unhandled_exception_envelope() -> None:
    client = TestClient(_make_app_with_handlers(), raise_server_exceptions=False)

    resp = client.get("/unhandled")

    assert resp.status_code == 500
    err = resp.json()["error"]
    assert err["code"] == "INTERNAL_ERROR"
    assert err["message"] == "Internal server error"
