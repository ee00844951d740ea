# src/pension_api/application/schemas/dto/calculation.py
# Copyright (c) Pension API.
# SPDX-License-Identifier: MIT
"""Application DTOs for Calculation Requests.

Synopsis:
    Strict (Pydantic v2) DTOs describing the outcome of one mutation replay:
    metadata, message log, situation snapshots and per-mutation results.
    Adapters map these onto HTTP schemas; the use case builds them from the
    domain engine run.

Layer:
    application/schemas/dto
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pension_api.application.schemas.dto.base import BaseDTO
from pension_api.domain.enums.calculation import (
    CalculationOutcome,
    DossierStatus,
    MessageCode,
    MessageLevel,
    MutationType,
    PersonRole,
)
from pension_api.types import JsonValue


class CalculationMessageDTO(BaseDTO):
    """Entry of the message log.

    Attributes:
        id: 0-based log position.
        level: WARNING or CRITICAL.
        code: Stable message code.
        message: Human-readable text.
    """

    id: int
    level: MessageLevel
    code: MessageCode
    message: str


class PersonDTO(BaseDTO):
    """Person attached to a dossier."""

    person_id: UUID
    role: PersonRole
    name: str
    birth_date: date


class ProjectionDTO(BaseDTO):
    """Projected pension at a date."""

    date: date
    projected_pension: Decimal


class PolicyDTO(BaseDTO):
    """Policy state, including derived pension and projections."""

    policy_id: str
    scheme_id: str
    employment_start_date: date
    salary: Decimal
    part_time_factor: Decimal
    attainable_pension: Decimal | None = None
    projections: list[ProjectionDTO] | None = None


class DossierDTO(BaseDTO):
    """Dossier state."""

    dossier_id: UUID
    status: DossierStatus
    retirement_date: date | None = None
    persons: list[PersonDTO]
    policies: list[PolicyDTO]


class SituationDTO(BaseDTO):
    """Situation: the (optional) dossier."""

    dossier: DossierDTO | None = None


class SituationSnapshotDTO(BaseDTO):
    """Situation paired with the mutation that produced it."""

    mutation_id: UUID | None = None
    mutation_index: int | None = None
    actual_at: date
    situation: SituationDTO


class CalculationMutationDTO(BaseDTO):
    """Echo of a processed mutation.

    Attributes:
        mutation_type: DOSSIER_CREATION or DOSSIER.
        dossier_id: Target dossier key (DOSSIER mutations only).
        mutation_properties: Property bag exactly as received.
    """

    mutation_id: UUID
    mutation_definition_name: str
    mutation_type: MutationType
    actual_at: date
    dossier_id: str | None = None
    mutation_properties: dict[str, JsonValue]


class MutationResultDTO(BaseDTO):
    """Processed mutation and the ids of the messages it produced."""

    mutation: CalculationMutationDTO
    calculation_message_indexes: list[int] | None = None
    forward_patch_to_situation_after_this_mutation: list[JsonValue] | None = None
    backward_patch_to_previous_situation: list[JsonValue] | None = None


class CalculationMetadataDTO(BaseDTO):
    """Timing and outcome of one calculation."""

    calculation_id: UUID
    tenant_id: str
    calculation_started_at: datetime
    calculation_completed_at: datetime
    calculation_duration_ms: int
    calculation_outcome: CalculationOutcome


class CalculationResultDTO(BaseDTO):
    """Message log, snapshots and per-mutation results."""

    messages: list[CalculationMessageDTO]
    end_situation: SituationSnapshotDTO
    initial_situation: SituationSnapshotDTO
    mutations: list[MutationResultDTO]


class CalculationResponseDTO(BaseDTO):
    """Complete result of a calculation request."""

    calculation_metadata: CalculationMetadataDTO
    calculation_result: CalculationResultDTO


__all__ = [
    "CalculationMessageDTO",
    "CalculationMetadataDTO",
    "CalculationMutationDTO",
    "CalculationResponseDTO",
    "CalculationResultDTO",
    "DossierDTO",
    "MutationResultDTO",
    "PersonDTO",
    "PolicyDTO",
    "ProjectionDTO",
    "SituationDTO",
    "SituationSnapshotDTO",
]
