# src/pension_api/adapters/schemas/http/calculation_schemas.py
# Copyright (c) Pension API.
# SPDX-License-Identifier: MIT
"""HTTP Schemas: Calculation Requests.

Synopsis:
    Pydantic models that define the HTTP request/response contract of
    ``POST /calculation-requests``. Mutations are a tagged union on
    ``mutation_type``; responses emit decimals as JSON numbers and omit
    optional snapshot/result keys that were never populated.

Layer:
    adapters/schemas/http
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Annotated, ClassVar, Literal
from uuid import UUID

from pydantic import Field

from pension_api.adapters.schemas.http.base import (
    BaseHTTPSchema,
    JsonDecimal,
    OmitAbsentHTTPSchema,
)
from pension_api.domain.enums.calculation import (
    CalculationOutcome,
    DossierStatus,
    MessageCode,
    MessageLevel,
    MutationType,
    PersonRole,
)
from pension_api.types import JsonValue

# --------------------------------------------------------------------------- #
# Request                                                                     #
# --------------------------------------------------------------------------- #


class _MutationHTTPBase(OmitAbsentHTTPSchema):
    mutation_id: UUID = Field(..., description="Caller-supplied correlation id.")
    mutation_definition_name: str = Field(
        ...,
        description="Handler name.",
        examples=["create_dossier", "add_policy"],
    )
    actual_at: date = Field(..., description="As-of date for business rules (YYYY-MM-DD).")
    mutation_properties: dict[str, JsonValue] = Field(
        default_factory=dict,
        description="Definition-specific properties; coerced when the handler reads them.",
    )


class DossierCreationMutationHTTP(_MutationHTTPBase):
    """Mutation that creates the dossier."""

    mutation_type: Literal["DOSSIER_CREATION"] = Field(...)


class DossierMutationHTTP(_MutationHTTPBase):
    """Mutation scoped to an existing dossier."""

    mutation_type: Literal["DOSSIER"] = Field(...)
    dossier_id: str = Field(..., min_length=1, description="Target dossier key.")


CalculationMutationHTTP = Annotated[
    DossierCreationMutationHTTP | DossierMutationHTTP,
    Field(discriminator="mutation_type"),
]


class CalculationInstructionsHTTP(BaseHTTPSchema):
    """Ordered mutation list."""

    mutations: list[CalculationMutationHTTP] = Field(
        ..., description="Mutations, replayed in order (non-empty)."
    )


class CalculationRequestHTTP(BaseHTTPSchema):
    """Body of ``POST /calculation-requests``."""

    tenant_id: str = Field(
        ...,
        description="Lowercase alphanumeric tenant id with single underscores (<= 25 chars).",
        examples=["acme_pensions"],
    )
    calculation_instructions: CalculationInstructionsHTTP


# --------------------------------------------------------------------------- #
# Response                                                                    #
# --------------------------------------------------------------------------- #


class CalculationMessageHTTP(BaseHTTPSchema):
    """Entry of the message log."""

    id: int = Field(..., ge=0)
    level: MessageLevel
    code: MessageCode
    message: str


class PersonHTTP(BaseHTTPSchema):
    """Dossier person."""

    person_id: UUID
    role: PersonRole
    name: str
    birth_date: date


class ProjectionHTTP(BaseHTTPSchema):
    """Projected pension at a date."""

    date: date
    projected_pension: JsonDecimal


class PolicyHTTP(BaseHTTPSchema):
    """Policy state; ``attainable_pension`` and ``projections`` are null until set."""

    policy_id: str
    scheme_id: str
    employment_start_date: date
    salary: JsonDecimal
    part_time_factor: JsonDecimal
    attainable_pension: JsonDecimal | None = None
    projections: list[ProjectionHTTP] | None = None


class DossierHTTP(BaseHTTPSchema):
    """Dossier state."""

    dossier_id: UUID
    status: DossierStatus
    retirement_date: date | None = None
    persons: list[PersonHTTP]
    policies: list[PolicyHTTP]


class SituationHTTP(BaseHTTPSchema):
    """Situation; ``dossier`` is null before creation."""

    dossier: DossierHTTP | None = None


class SituationSnapshotHTTP(OmitAbsentHTTPSchema):
    """Situation with the producing mutation, when there is one."""

    omit_when_none: ClassVar[frozenset[str]] = frozenset({"mutation_id", "mutation_index"})

    mutation_id: UUID | None = None
    mutation_index: int | None = None
    actual_at: date
    situation: SituationHTTP


class CalculationMutationEchoHTTP(_MutationHTTPBase):
    """Processed mutation, echoed as received."""

    omit_when_none: ClassVar[frozenset[str]] = frozenset({"dossier_id"})

    mutation_type: MutationType
    dossier_id: str | None = None


class MutationResultHTTP(OmitAbsentHTTPSchema):
    """Processed mutation and the ids of the messages it produced."""

    omit_when_none: ClassVar[frozenset[str]] = frozenset(
        {
            "calculation_message_indexes",
            "forward_patch_to_situation_after_this_mutation",
            "backward_patch_to_previous_situation",
        }
    )

    mutation: CalculationMutationEchoHTTP
    calculation_message_indexes: list[int] | None = None
    forward_patch_to_situation_after_this_mutation: list[JsonValue] | None = None
    backward_patch_to_previous_situation: list[JsonValue] | None = None


class CalculationMetadataHTTP(BaseHTTPSchema):
    """Calculation id, timing and outcome."""

    calculation_id: UUID
    tenant_id: str
    calculation_started_at: datetime
    calculation_completed_at: datetime
    calculation_duration_ms: int = Field(..., ge=0)
    calculation_outcome: CalculationOutcome


class CalculationResultHTTP(BaseHTTPSchema):
    """Message log, snapshots and per-mutation results."""

    messages: list[CalculationMessageHTTP]
    end_situation: SituationSnapshotHTTP
    initial_situation: SituationSnapshotHTTP
    mutations: list[MutationResultHTTP]


class CalculationResponseHTTP(BaseHTTPSchema):
    """Body of a processed calculation request (HTTP 200 for SUCCESS and FAILURE)."""

    calculation_metadata: CalculationMetadataHTTP
    calculation_result: CalculationResultHTTP


__all__ = [
    "CalculationInstructionsHTTP",
    "CalculationMessageHTTP",
    "CalculationMetadataHTTP",
    "CalculationMutationEchoHTTP",
    "CalculationMutationHTTP",
    "CalculationRequestHTTP",
    "CalculationResponseHTTP",
    "CalculationResultHTTP",
    "DossierCreationMutationHTTP",
    "DossierHTTP",
    "DossierMutationHTTP",
    "MutationResultHTTP",
    "PersonHTTP",
    "PolicyHTTP",
    "ProjectionHTTP",
    "SituationHTTP",
    "SituationSnapshotHTTP",
]
