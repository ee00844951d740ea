# Copyright (c) Pension API.
# SPDX-License-Identifier: MIT
"""Unit tests for RequestIdMiddleware behavior and header rules."""

from __future__ import annotations

import uuid

from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from pension_api.infrastructure.middleware.request_id import (
    REQUEST_ID_HEADER,
    RequestIdMiddleware,
    coerce_request_id,
)


def _client() -> TestClient:
    app = FastAPI()
    app.add_middleware(RequestIdMiddleware)

    @app.get("/id")
    def get_id(request: Request) -> dict[str, str | None]:
        return {"rid": getattr(request.state, "request_id", None)}

    return TestClient(app)


def test_coerce_request_id_keeps_safe_values() -> None:
    assert coerce_request_id("abc-123_456:@Z") == "abc-123_456:@Z"


def test_coerce_request_id_generates_uuid_for_missing_or_unsafe() -> None:
    for raw in (None, "", "bad id with space", "x" * 129):
        generated = coerce_request_id(raw)
        assert generated != raw
        uuid.UUID(generated)


def test_middleware_generates_id_and_sets_state_and_header() -> None:
    r = _client().get("/id")

    assert r.status_code == 200
    assert r.headers.get(REQUEST_ID_HEADER) == r.json()["rid"]


def test_middleware_uses_valid_incoming_and_rejects_invalid() -> None:
    client = _client()

    r1 = client.get("/id", headers={REQUEST_ID_HEADER: "abc-123"})
    assert r1.json()["rid"] == "abc-123"
    assert r1.headers.get(REQUEST_ID_HEADER) == "abc-123"

    r2 = client.get("/id", headers={REQUEST_ID_HEADER: "bad id with space"})
    assert r2.headers.get(REQUEST_ID_HEADER) not in (None, "bad id with space")
