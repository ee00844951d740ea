# src/pension_api/dependencies/calculations.py
# Copyright (c) Pension API.
# SPDX-License-Identifier: MIT
"""Dependency wiring for calculation requests (engine, use case, controller).

Overview:
    Provides FastAPI dependency providers consumed by the calculation router.
    Rule parameters (accrual rate, retirement age, full-service years) are
    read from :class:`Settings` and handed to the domain engine as a plain
    ``MutationEngineConfig``.

Layer:
    dependencies
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from pension_api.adapters.controllers.calculation_controller import CalculationController
from pension_api.application.use_cases.calculations.process_calculation_request import (
    ProcessCalculationRequest,
)
from pension_api.config.settings import Settings, get_settings
from pension_api.domain.services.mutation_engine import MutationEngine, MutationEngineConfig


def engine_config_from_settings(settings: Settings) -> MutationEngineConfig:
    """Build the engine rule parameters from application settings."""
    return MutationEngineConfig(
        accrual_rate=settings.accrual_rate,
        retirement_age=settings.retirement_age,
        full_service_years=settings.full_service_years,
    )


def get_mutation_engine(
    settings: Annotated[Settings, Depends(get_settings)],
) -> MutationEngine:
    """Return a mutation engine configured from settings."""
    return MutationEngine(engine_config_from_settings(settings))


def get_process_calculation_uc(
    engine: Annotated[MutationEngine, Depends(get_mutation_engine)],
) -> ProcessCalculationRequest:
    """Return the calculation use case."""
    return ProcessCalculationRequest(engine)


def get_calculation_controller(
    use_case: Annotated[ProcessCalculationRequest, Depends(get_process_calculation_uc)],
) -> CalculationController:
    """Return the calculation controller."""
    return CalculationController(use_case)


__all__ = [
    "engine_config_from_settings",
    "get_calculation_controller",
    "get_mutation_engine",
    "get_process_calculation_uc",
]
