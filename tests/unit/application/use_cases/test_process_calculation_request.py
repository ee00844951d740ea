from __future__ import annotations

import logging
from collections.abc import Iterator
from datetime import UTC, date, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from pension_api.application.use_cases.calculations.process_calculation_request import (
    ProcessCalculationRequest,
)
from pension_api.domain.entities.mutation import (
    DossierCreationMutation,
    DossierMutation,
    MutationProperties,
)
from pension_api.domain.enums.calculation import (
    CalculationOutcome,
    MessageCode,
    MutationType,
)
from pension_api.domain.exceptions.calculation import EmptyMutationListError

CALCULATION_ID = UUID("11111111-2222-3333-4444-555555555555")
DOSSIER_ID = "d2b7c1c0-4a5e-4b56-9d7a-1f0a1a2b3c4d"
STARTED = datetime(2025, 1, 1, 12, 0, 0, tzinfo=UTC)


def _clock(*ticks: datetime) -> Iterator[datetime]:
    return iter(ticks)


def _use_case(duration: timedelta = timedelta(milliseconds=42)) -> ProcessCalculationRequest:
    ticks = _clock(STARTED, STARTED + duration)
    return ProcessCalculationRequest(clock=lambda: next(ticks), id_factory=lambda: CALCULATION_ID)


def _create() -> DossierCreationMutation:
    return DossierCreationMutation(
        mutation_id=uuid4(),
        mutation_definition_name="create_dossier",
        actual_at=date(2020, 1, 1),
        mutation_properties=MutationProperties(
            {
                "dossier_id": DOSSIER_ID,
                "person_id": str(uuid4()),
                "name": "Jane Doe",
                "birth_date": "1960-01-01",
            }
        ),
    )


def _add_policy() -> DossierMutation:
    return DossierMutation(
        mutation_id=uuid4(),
        mutation_definition_name="add_policy",
        actual_at=date(2020, 1, 1),
        mutation_properties=MutationProperties(
            {
                "scheme_id": "SCHEME-A",
                "employment_start_date": "2000-01-01",
                "salary": 50000,
                "part_time_factor": 1,
            }
        ),
        dossier_id=DOSSIER_ID,
    )


def test_execute_builds_metadata_from_clock_and_id_factory() -> None:
    dto = _use_case().execute("tenant_a", [_create(), _add_policy()])

    meta = dto.calculation_metadata
    assert meta.calculation_id == CALCULATION_ID
    assert meta.tenant_id == "tenant_a"
    assert meta.calculation_started_at == STARTED
    assert meta.calculation_completed_at == STARTED + timedelta(milliseconds=42)
    assert meta.calculation_duration_ms == 42
    assert meta.calculation_outcome is CalculationOutcome.SUCCESS


def test_execute_maps_engine_run_into_dto() -> None:
    create, add = _create(), _add_policy()

    result = _use_case().execute("tenant_a", [create, add]).calculation_result

    assert result.messages == []
    assert result.initial_situation.situation.dossier is None
    assert result.end_situation.mutation_id == add.mutation_id
    assert result.end_situation.mutation_index == 1
    dossier = result.end_situation.situation.dossier
    assert dossier is not None
    assert str(dossier.dossier_id) == DOSSIER_ID
    assert [p.policy_id for p in dossier.policies] == [f"{DOSSIER_ID}-1"]
    echoes = [r.mutation for r in result.mutations]
    assert [e.mutation_type for e in echoes] == [MutationType.DOSSIER_CREATION, MutationType.DOSSIER]
    assert echoes[0].dossier_id is None
    assert echoes[1].dossier_id == DOSSIER_ID
    assert echoes[1].mutation_properties["salary"] == 50000


def test_execute_reports_business_failures_in_band() -> None:
    dto = _use_case().execute("tenant_a", [_add_policy()])

    assert dto.calculation_metadata.calculation_outcome is CalculationOutcome.FAILURE
    (message,) = dto.calculation_result.messages
    assert message.code is MessageCode.DOSSIER_NOT_FOUND
    assert dto.calculation_result.mutations[0].calculation_message_indexes == [0]


def test_execute_never_reports_negative_duration() -> None:
    dto = _use_case(duration=timedelta(milliseconds=-5)).execute("tenant_a", [_create()])

    assert dto.calculation_metadata.calculation_duration_ms == 0


def test_execute_logs_completion(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO):
        _use_case().execute("tenant_a", [_create()])

    (record,) = [r for r in caplog.records if r.getMessage() == "calculation_completed"]
    fields = record.extra  # type: ignore[attr-defined]
    assert fields["calculation_id"] == str(CALCULATION_ID)
    assert fields["tenant_id"] == "tenant_a"
    assert fields["mutations_received"] == 1
    assert fields["mutations_processed"] == 1
    assert fields["outcome"] == "SUCCESS"


def test_execute_rejects_empty_mutation_list() -> None:
    with pytest.raises(EmptyMutationListError):
        _use_case().execute("tenant_a", [])
