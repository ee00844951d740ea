# src/pension_api/adapters/schemas/http/envelopes.py
# Copyright (c) Pension API.
# SPDX-License-Identifier: MIT
"""HTTP Envelopes (Adapters Layer).

Purpose:
    Transport-facing error envelope returned for requests rejected before
    any mutation is processed (bad tenant id, empty or oversized mutation
    list, schema errors, unexpected failures).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pension_api.adapters.schemas.http.base import BaseHTTPSchema

__all__ = [
    "ErrorEnvelope",
    "ErrorObject",
]


class ErrorObject(BaseModel):
    """Structured error object inside ErrorEnvelope.

    Error codes are UPPER_SNAKE_CASE and stable across releases:
        - INVALID_TENANT_ID
        - EMPTY_MUTATIONS
        - TOO_MANY_MUTATIONS
        - VALIDATION_ERROR
        - INTERNAL_ERROR
    """

    model_config = ConfigDict(
        title="ErrorObject",
        extra="forbid",
        json_schema_extra={
            "examples": [
                {
                    "code": "INVALID_TENANT_ID",
                    "http_status": 400,
                    "message": "tenant_id must match ^[a-z0-9]+(?:_[a-z0-9]+)*$",
                    "details": {"tenant_id": "Acme-Corp"},
                    "trace_id": "req-123",
                }
            ]
        },
    )

    code: str = Field(..., description="Stable machine-readable error code.")
    http_status: int = Field(..., description="Associated HTTP status.")
    message: str = Field(..., description="Human-readable error description.")
    details: dict[str, Any] | None = Field(
        default=None,
        description="Optional structured details safe for clients.",
    )
    trace_id: str | None = Field(
        default=None,
        description="Request correlation identifier (X-Request-ID).",
    )


class ErrorEnvelope(BaseHTTPSchema):
    r"""Canonical error envelope: {"error": ErrorObject}."""

    model_config = ConfigDict(title="ErrorEnvelope", extra="forbid")

    error: ErrorObject = Field(..., description="Structured error details.")
