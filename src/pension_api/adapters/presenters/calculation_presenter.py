# Copyright (c) Pension API.
# SPDX-License-Identifier: MIT
"""Calculation presenter.

Purpose:
    Shape a calculation response DTO into the HTTP response schema. Both
    SUCCESS and FAILURE outcomes are presented with status 200.

Layer:
    adapters/presenters
"""

from __future__ import annotations

from pension_api.adapters.mappers.calculation_mapper import to_http_response
from pension_api.adapters.presenters.base_presenter import BasePresenter, PresentResult
from pension_api.adapters.schemas.http.calculation_schemas import CalculationResponseHTTP
from pension_api.application.schemas.dto.calculation import CalculationResponseDTO


class CalculationPresenter(BasePresenter):
    """Presenter for ``POST /calculation-requests``."""

    def present_calculation(
        self,
        dto: CalculationResponseDTO,
        *,
        trace_id: str | None = None,
    ) -> PresentResult[CalculationResponseHTTP]:
        """Map the DTO and attach ``X-Request-ID``."""
        return PresentResult(body=to_http_response(dto), headers=self._headers(trace_id))
