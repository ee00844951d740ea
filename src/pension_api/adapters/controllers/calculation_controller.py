# Copyright (c) Pension API.
# SPDX-License-Identifier: MIT
"""
Calculation Controller.

Summary:
    Thin adapter coordinating the ProcessCalculationRequest use-case: maps
    request mutations onto domain entities and returns the response DTO.

Layer:
    adapters/controllers
"""

from __future__ import annotations

from collections.abc import Sequence

from pension_api.adapters.mappers.calculation_mapper import to_domain_mutations
from pension_api.adapters.schemas.http.calculation_schemas import (
    DossierCreationMutationHTTP,
    DossierMutationHTTP,
)
from pension_api.application.schemas.dto.calculation import CalculationResponseDTO
from pension_api.application.use_cases.calculations.process_calculation_request import (
    ProcessCalculationRequest,
)

from .base_controller import BaseController


class CalculationController(BaseController):
    """Controller orchestrating calculation requests."""

    __slots__ = ("_uc",)

    def __init__(self, use_case: ProcessCalculationRequest) -> None:
        """Initialize the controller.

        Args:
            use_case: Use-case that replays the mutations.
        """
        self._uc = use_case

    def process(
        self,
        tenant_id: str,
        mutations: Sequence[DossierCreationMutationHTTP | DossierMutationHTTP],
    ) -> CalculationResponseDTO:
        """Replay the request mutations for a tenant.

        Args:
            tenant_id: Validated tenant identifier.
            mutations: Request mutations in order.

        Returns:
            CalculationResponseDTO: Metadata and result of the replay.
        """
        return self._uc.execute(tenant_id, to_domain_mutations(mutations))
