# Copyright (c) Pension API.
# SPDX-License-Identifier: MIT
"""Presenter utilities and canonical envelope helpers.

Purpose:
    Thin, framework-aware helpers used by routers to consistently shape HTTP
    responses and headers.

Responsibilities:
    * Build ErrorEnvelope instances.
    * Apply standard headers such as X-Request-ID.
    * Render a presentation result as a JSON response.

Layer:
    adapters/presenters
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from fastapi.responses import JSONResponse

from pension_api.adapters.schemas.http.base import BaseHTTPSchema
from pension_api.adapters.schemas.http.envelopes import ErrorEnvelope, ErrorObject


@dataclass(slots=True)
class PresentResult[T]:
    """Presentation result envelope.

    Attributes:
        body: A Pydantic schema instance.
        headers: Extra HTTP headers to apply.
        status_code: Optional HTTP status override.
    """

    body: T
    headers: Mapping[str, str]
    status_code: int | None = None


class BasePresenter:
    """Base presenter for HTTP response shaping in adapter layers.

    Leaves all business decisions to the use-case/application layer.
    """

    @staticmethod
    def _headers(trace_id: str | None) -> dict[str, str]:
        return {"X-Request-ID": trace_id} if trace_id else {}

    def present_error(
        self,
        *,
        code: str,
        http_status: int,
        message: str,
        trace_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> PresentResult[ErrorEnvelope]:
        """Build an ErrorEnvelope and attach ``X-Request-ID``."""
        err = ErrorObject(
            code=code,
            http_status=http_status,
            message=message,
            details=details or {},
            trace_id=trace_id,
        )
        body = ErrorEnvelope(error=err)
        return PresentResult(body=body, headers=self._headers(trace_id), status_code=http_status)

    @staticmethod
    def to_response(result: PresentResult[BaseHTTPSchema]) -> JSONResponse:
        """Render ``result`` as a JSONResponse (status defaults to 200)."""
        return JSONResponse(
            status_code=result.status_code or 200,
            content=result.body.model_dump_http(),
            headers=dict(result.headers),
        )
