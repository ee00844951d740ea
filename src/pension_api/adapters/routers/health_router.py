# Copyright (c) Pension API.
# SPDX-License-Identifier: MIT
"""Health endpoint (Adapters Layer).

Purpose:
    Liveness signal for container orchestrators and load balancers. The
    service holds no external dependencies, so liveness is readiness.
"""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, status

from pension_api.adapters.schemas.http.base import BaseHTTPSchema

router = APIRouter(tags=["Health"])


class HealthResponse(BaseHTTPSchema):
    """Liveness payload."""

    status: Literal["ok"] = "ok"


@router.get(
    "/healthz",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Liveness probe",
    operation_id="healthz",
)
async def healthz() -> HealthResponse:
    """Return ``{"status": "ok"}``."""
    return HealthResponse()
