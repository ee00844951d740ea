# src/pension_api/application/use_cases/calculations/process_calculation_request.py
# Copyright (c) Pension API.
# SPDX-License-Identifier: MIT
"""
Use Case: Process Calculation Request

Purpose:
    Replay a tenant's mutation list through the domain engine and return the
    response DTO: calculation metadata (id, timing, outcome) plus the message
    log, situation snapshots and per-mutation results.

Layer: application/use_cases
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from uuid import UUID, uuid4

from pension_api.application.schemas.dto.calculation import (
    CalculationMessageDTO,
    CalculationMetadataDTO,
    CalculationMutationDTO,
    CalculationResponseDTO,
    CalculationResultDTO,
    DossierDTO,
    MutationResultDTO,
    PersonDTO,
    PolicyDTO,
    ProjectionDTO,
    SituationDTO,
    SituationSnapshotDTO,
)
from pension_api.domain.entities.calculation import (
    CalculationMessage,
    EngineRun,
    MutationResult,
    SituationSnapshot,
)
from pension_api.domain.entities.dossier import Dossier, Policy, Situation
from pension_api.domain.entities.mutation import CalculationMutation, DossierMutation
from pension_api.domain.exceptions.calculation import EmptyMutationListError
from pension_api.domain.services.mutation_engine import MutationEngine

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class ProcessCalculationRequest:
    """Use case to run one calculation request.

    Args:
        engine: Mutation engine (configured with the rule parameters).
        clock: Returns the current UTC time; injectable for tests.
        id_factory: Produces the calculation id; injectable for tests.

    Raises:
        EmptyMutationListError: If no mutations are supplied.
    """

    def __init__(
        self,
        engine: MutationEngine | None = None,
        *,
        clock: Callable[[], datetime] = _utcnow,
        id_factory: Callable[[], UUID] = uuid4,
    ) -> None:
        self._engine = engine or MutationEngine()
        self._clock = clock
        self._id_factory = id_factory

    def execute(
        self, tenant_id: str, mutations: Sequence[CalculationMutation]
    ) -> CalculationResponseDTO:
        """Replay ``mutations`` for ``tenant_id``.

        Args:
            tenant_id: Tenant identifier, already validated by the caller.
            mutations: Ordered, non-empty mutation list.

        Returns:
            CalculationResponseDTO: Metadata and result of the replay. Business
            rule failures are reported in-band (outcome FAILURE), never raised.
        """
        if not mutations:
            raise EmptyMutationListError(
                "calculation_instructions.mutations must contain at least one mutation",
                details={"tenant_id": tenant_id},
            )

        calculation_id = self._id_factory()
        started_at = self._clock()
        run = self._engine.run(mutations)
        completed_at = self._clock()
        duration_ms = max(0, int((completed_at - started_at).total_seconds() * 1000))

        metadata = CalculationMetadataDTO(
            calculation_id=calculation_id,
            tenant_id=tenant_id,
            calculation_started_at=started_at,
            calculation_completed_at=completed_at,
            calculation_duration_ms=duration_ms,
            calculation_outcome=run.outcome,
        )

        logger.info(
            "calculation_completed",
            extra={
                "extra": {
                    "calculation_id": str(calculation_id),
                    "tenant_id": tenant_id,
                    "mutations_received": len(mutations),
                    "mutations_processed": len(run.mutation_results),
                    "messages": len(run.messages),
                    "outcome": run.outcome.value,
                    "duration_ms": duration_ms,
                }
            },
        )

        return CalculationResponseDTO(
            calculation_metadata=metadata,
            calculation_result=self._to_result_dto(run),
        )

    # ------------------------------------------------------------------ #
    # Domain -> DTO                                                      #
    # ------------------------------------------------------------------ #

    @classmethod
    def _to_result_dto(cls, run: EngineRun) -> CalculationResultDTO:
        return CalculationResultDTO(
            messages=[cls._message_dto(m) for m in run.messages],
            end_situation=cls._snapshot_dto(run.end_situation),
            initial_situation=cls._snapshot_dto(run.initial_situation),
            mutations=[cls._mutation_result_dto(r) for r in run.mutation_results],
        )

    @staticmethod
    def _message_dto(message: CalculationMessage) -> CalculationMessageDTO:
        return CalculationMessageDTO(
            id=message.id,
            level=message.level,
            code=message.code,
            message=message.message,
        )

    @classmethod
    def _snapshot_dto(cls, snapshot: SituationSnapshot) -> SituationSnapshotDTO:
        return SituationSnapshotDTO(
            mutation_id=snapshot.mutation_id,
            mutation_index=snapshot.mutation_index,
            actual_at=snapshot.actual_at,
            situation=cls._situation_dto(snapshot.situation),
        )

    @classmethod
    def _situation_dto(cls, situation: Situation) -> SituationDTO:
        if situation.dossier is None:
            return SituationDTO(dossier=None)
        return SituationDTO(dossier=cls._dossier_dto(situation.dossier))

    @classmethod
    def _dossier_dto(cls, dossier: Dossier) -> DossierDTO:
        return DossierDTO(
            dossier_id=dossier.dossier_id,
            status=dossier.status,
            retirement_date=dossier.retirement_date,
            persons=[
                PersonDTO(
                    person_id=p.person_id,
                    role=p.role,
                    name=p.name,
                    birth_date=p.birth_date,
                )
                for p in dossier.persons
            ],
            policies=[cls._policy_dto(p) for p in dossier.policies],
        )

    @staticmethod
    def _policy_dto(policy: Policy) -> PolicyDTO:
        projections = None
        if policy.projections is not None:
            projections = [
                ProjectionDTO(date=p.date, projected_pension=p.projected_pension)
                for p in policy.projections
            ]
        return PolicyDTO(
            policy_id=policy.policy_id,
            scheme_id=policy.scheme_id,
            employment_start_date=policy.employment_start_date,
            salary=policy.salary,
            part_time_factor=policy.part_time_factor,
            attainable_pension=policy.attainable_pension,
            projections=projections,
        )

    @staticmethod
    def _mutation_dto(mutation: CalculationMutation) -> CalculationMutationDTO:
        dossier_id = mutation.dossier_id if isinstance(mutation, DossierMutation) else None
        return CalculationMutationDTO(
            mutation_id=mutation.mutation_id,
            mutation_definition_name=mutation.mutation_definition_name,
            mutation_type=mutation.mutation_type,
            actual_at=mutation.actual_at,
            dossier_id=dossier_id,
            mutation_properties=dict(mutation.mutation_properties),
        )

    @classmethod
    def _mutation_result_dto(cls, result: MutationResult) -> MutationResultDTO:
        indexes = result.calculation_message_indexes
        return MutationResultDTO(
            mutation=cls._mutation_dto(result.mutation),
            calculation_message_indexes=list(indexes) if indexes is not None else None,
        )
