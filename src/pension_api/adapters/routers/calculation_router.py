# Copyright (c) Pension API.
# SPDX-License-Identifier: MIT
"""
Calculation Router.

Summary:
    ``POST /calculation-requests``: replay a tenant's mutation list and
    return the calculation metadata and result.

Layer:
    adapters/routers

Notes:
    Only malformed top-level requests are rejected (400/422). Business rule
    failures are reported in the body with outcome FAILURE and status 200.
"""

from __future__ import annotations

import re
from typing import Annotated, Any, Final

from fastapi import Depends, Request, status
from fastapi.responses import JSONResponse

from pension_api.adapters.controllers.calculation_controller import CalculationController
from pension_api.adapters.presenters.calculation_presenter import CalculationPresenter
from pension_api.adapters.routers.base_router import BaseRouter
from pension_api.adapters.schemas.http.calculation_schemas import (
    CalculationRequestHTTP,
    CalculationResponseHTTP,
)
from pension_api.config.settings import Settings, get_settings
from pension_api.dependencies.calculations import get_calculation_controller
from pension_api.infrastructure.logging.logger import get_json_logger, set_request_context

logger = get_json_logger(__name__)

router = BaseRouter(prefix="/calculation-requests", tags=["Calculations"])
presenter = CalculationPresenter()

TENANT_ID_MAX_LENGTH: Final[int] = 25
_TENANT_ID_RE: Final[re.Pattern[str]] = re.compile(r"[a-z0-9]+(?:_[a-z0-9]+)*")


def is_valid_tenant_id(tenant_id: str) -> bool:
    """Return True for non-blank, <= 25 char, lowercase ``a_b_c`` style ids."""
    return (
        bool(tenant_id.strip())
        and len(tenant_id) <= TENANT_ID_MAX_LENGTH
        and _TENANT_ID_RE.fullmatch(tenant_id) is not None
    )


def _bad_request(
    code: str,
    message: str,
    *,
    trace_id: str | None,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    logger.info("calculation_request_rejected", extra={"extra": {"code": code}})
    result = presenter.present_error(
        code=code,
        http_status=status.HTTP_400_BAD_REQUEST,
        message=message,
        trace_id=trace_id,
        details=details,
    )
    return presenter.to_response(result)


@router.post(
    "",
    response_model=CalculationResponseHTTP,
    status_code=status.HTTP_200_OK,
    responses=BaseRouter.std_error_responses(),
    summary="Process a calculation request",
)
def create_calculation_request(
    request: Request,
    body: CalculationRequestHTTP,
    controller: Annotated[CalculationController, Depends(get_calculation_controller)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> JSONResponse:
    """Replay the mutations and return the calculation response.

    Returns:
        200 with the calculation body (SUCCESS or FAILURE outcome), or 400 with
        an ErrorEnvelope for an invalid tenant id or mutation list.
    """
    trace_id: str | None = getattr(request.state, "request_id", None)
    mutations = body.calculation_instructions.mutations

    if not is_valid_tenant_id(body.tenant_id):
        return _bad_request(
            "INVALID_TENANT_ID",
            "Invalid tenant_id format. Must be lowercase alphanumeric with "
            "underscores, max 25 characters.",
            trace_id=trace_id,
            details={"tenant_id": body.tenant_id},
        )

    if not mutations:
        return _bad_request(
            "EMPTY_MUTATIONS",
            "At least one mutation is required in calculation_instructions.mutations",
            trace_id=trace_id,
        )

    if len(mutations) > settings.max_mutations:
        return _bad_request(
            "TOO_MANY_MUTATIONS",
            f"At most {settings.max_mutations} mutations are accepted per request",
            trace_id=trace_id,
            details={"received": len(mutations), "max_mutations": settings.max_mutations},
        )

    set_request_context(tenant_id=body.tenant_id)
    dto = controller.process(body.tenant_id, mutations)
    return presenter.to_response(presenter.present_calculation(dto, trace_id=trace_id))
