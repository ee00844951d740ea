# src/pension_api/domain/services/mutation_handlers.py
# Copyright (c) Pension API.
# SPDX-License-Identifier: MIT
"""Mutation handlers (domain kernel).

Purpose:
    Business rules for each mutation definition. Every handler receives the
    current situation and returns the next one together with the findings
    (messages without log ids) raised while applying the mutation.

Layer:
    domain/services

Notes:
    - Pure domain logic:
        * No logging.
        * No HTTP or transport concerns.
    - A handler that raises a CRITICAL finding returns the situation it was
      given, unchanged. WARNING findings never block the effect.
    - Property-bag fields are read after the dossier/policy existence checks.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal

from pension_api.domain.entities.dossier import Dossier, Person, Policy, Projection, Situation
from pension_api.domain.entities.mutation import CalculationMutation
from pension_api.domain.enums.calculation import (
    DossierStatus,
    MessageCode,
    MessageLevel,
    MutationDefinition,
    PersonRole,
)
from pension_api.domain.exceptions.calculation import UnknownMutationDefinitionError
from pension_api.domain.services.pension_arithmetic import (
    DEFAULT_ACCRUAL_RATE,
    age_on,
    compute_pension_breakdown,
    projection_dates,
)

_ZERO = Decimal(0)
_ONE = Decimal(1)


@dataclass(frozen=True, slots=True)
class MutationEngineConfig:
    """Rule parameters for the mutation engine.

    Attributes:
        accrual_rate:
            Fraction of weighted salary earned per year of service.
        retirement_age:
            Minimum age (years) for retirement eligibility.
        full_service_years:
            Service years that grant eligibility regardless of age.
    """

    accrual_rate: Decimal = DEFAULT_ACCRUAL_RATE
    retirement_age: Decimal = Decimal(65)
    full_service_years: Decimal = Decimal(40)


@dataclass(frozen=True, slots=True)
class Finding:
    """Message raised by a handler before it is assigned a log id."""

    level: MessageLevel
    code: MessageCode
    message: str

    @classmethod
    def critical(cls, code: MessageCode, message: str) -> Finding:
        return cls(level=MessageLevel.CRITICAL, code=code, message=message)

    @classmethod
    def warning(cls, code: MessageCode, message: str) -> Finding:
        return cls(level=MessageLevel.WARNING, code=code, message=message)


@dataclass(frozen=True, slots=True)
class HandlerResult:
    """Next situation plus the findings raised while producing it."""

    situation: Situation
    findings: tuple[Finding, ...] = ()

    @property
    def has_critical(self) -> bool:
        return any(f.level is MessageLevel.CRITICAL for f in self.findings)


type MutationHandler = Callable[[CalculationMutation, Situation, MutationEngineConfig], HandlerResult]


def _reject(situation: Situation, *findings: Finding) -> HandlerResult:
    return HandlerResult(situation=situation, findings=findings)


# ---------------------------------------------------------------------- #
# create_dossier                                                         #
# ---------------------------------------------------------------------- #


def create_dossier(
    mutation: CalculationMutation,
    situation: Situation,
    config: MutationEngineConfig,
) -> HandlerResult:
    """Create the dossier with its single participant."""
    if situation.dossier is not None:
        return _reject(
            situation,
            Finding.critical(
                MessageCode.DOSSIER_ALREADY_EXISTS,
                "Cannot create dossier: a dossier already exists",
            ),
        )

    props = mutation.mutation_properties
    dossier_id = props.get_uuid("dossier_id")
    person_id = props.get_uuid("person_id")
    name = props.get_string("name")
    birth_date = props.get_date("birth_date")

    if not name.strip():
        return _reject(
            situation,
            Finding.critical(MessageCode.INVALID_NAME, "Name cannot be empty or whitespace"),
        )

    if birth_date > mutation.actual_at:
        return _reject(
            situation,
            Finding.critical(
                MessageCode.INVALID_BIRTH_DATE,
                "Birth date cannot be in the future "
                f"(birth_date: {birth_date.isoformat()}, actual_at: {mutation.actual_at.isoformat()})",
            ),
        )

    person = Person(
        person_id=person_id,
        role=PersonRole.PARTICIPANT,
        name=name,
        birth_date=birth_date,
    )
    dossier = Dossier(
        dossier_id=dossier_id,
        status=DossierStatus.ACTIVE,
        retirement_date=None,
        persons=(person,),
        policies=(),
    )
    return HandlerResult(situation=Situation(dossier=dossier))


# ---------------------------------------------------------------------- #
# add_policy                                                             #
# ---------------------------------------------------------------------- #


def add_policy(
    mutation: CalculationMutation,
    situation: Situation,
    config: MutationEngineConfig,
) -> HandlerResult:
    """Append a policy with a generated sequential policy id."""
    dossier = situation.dossier
    if dossier is None:
        return _reject(
            situation,
            Finding.critical(MessageCode.DOSSIER_NOT_FOUND, "Cannot add policy: no dossier exists"),
        )

    props = mutation.mutation_properties
    scheme_id = props.get_string("scheme_id")
    employment_start_date = props.get_date("employment_start_date")
    salary = props.get_decimal("salary")
    part_time_factor = props.get_decimal("part_time_factor")

    if salary < 0:
        return _reject(
            situation,
            Finding.critical(
                MessageCode.INVALID_SALARY, "Salary must be greater than or equal to 0"
            ),
        )

    if part_time_factor < 0 or part_time_factor > 1:
        return _reject(
            situation,
            Finding.critical(
                MessageCode.INVALID_PART_TIME_FACTOR, "Part-time factor must be between 0 and 1"
            ),
        )

    findings: list[Finding] = []
    if any(
        p.scheme_id == scheme_id and p.employment_start_date == employment_start_date
        for p in dossier.policies
    ):
        findings.append(
            Finding.warning(
                MessageCode.DUPLICATE_POLICY,
                f"A policy with scheme_id '{scheme_id}' and employment_start_date "
                f"'{employment_start_date.isoformat()}' already exists",
            )
        )

    policy = Policy(
        policy_id=dossier.next_policy_id(),
        scheme_id=scheme_id,
        employment_start_date=employment_start_date,
        salary=salary,
        part_time_factor=part_time_factor,
    )
    updated = replace(dossier, policies=(*dossier.policies, policy))
    return HandlerResult(situation=Situation(dossier=updated), findings=tuple(findings))


# ---------------------------------------------------------------------- #
# apply_indexation                                                       #
# ---------------------------------------------------------------------- #


def _matches_filters(policy: Policy, scheme_id: str | None, effective_before: date | None) -> bool:
    if scheme_id is not None and policy.scheme_id != scheme_id:
        return False
    if effective_before is not None and policy.employment_start_date >= effective_before:
        return False
    return True


def apply_indexation(
    mutation: CalculationMutation,
    situation: Situation,
    config: MutationEngineConfig,
) -> HandlerResult:
    """Scale salary (and attainable pension) of matching policies."""
    dossier = situation.dossier
    if dossier is None:
        return _reject(
            situation,
            Finding.critical(
                MessageCode.DOSSIER_NOT_FOUND, "Cannot apply indexation: no dossier exists"
            ),
        )
    if not dossier.policies:
        return _reject(
            situation,
            Finding.critical(
                MessageCode.NO_POLICIES, "Cannot apply indexation: dossier has no policies"
            ),
        )

    props = mutation.mutation_properties
    percentage = props.get_decimal("percentage")
    scheme_filter = props.get_optional_string("scheme_id")
    before_filter = props.get_optional_date("effective_before")
    has_filters = scheme_filter is not None or before_filter is not None

    if has_filters and not any(
        _matches_filters(p, scheme_filter, before_filter) for p in dossier.policies
    ):
        return HandlerResult(
            situation=situation,
            findings=(
                Finding.warning(
                    MessageCode.NO_MATCHING_POLICIES,
                    "No policies match the specified filter criteria",
                ),
            ),
        )

    factor = _ONE + percentage
    findings: list[Finding] = []
    policies: list[Policy] = []

    for policy in dossier.policies:
        if has_filters and not _matches_filters(policy, scheme_filter, before_filter):
            policies.append(policy)
            continue

        salary = policy.salary * factor
        if salary < 0:
            findings.append(
                Finding.warning(
                    MessageCode.NEGATIVE_SALARY_CLAMPED,
                    f"Salary for policy {policy.policy_id} would be negative after indexation. "
                    "Clamped to 0.",
                )
            )
        salary = max(_ZERO, salary)

        pension = policy.attainable_pension
        if pension is not None:
            pension = max(_ZERO, pension * factor)

        policies.append(replace(policy, salary=salary, attainable_pension=pension))

    updated = replace(dossier, policies=tuple(policies))
    return HandlerResult(situation=Situation(dossier=updated), findings=tuple(findings))


# ---------------------------------------------------------------------- #
# calculate_retirement_benefit                                           #
# ---------------------------------------------------------------------- #


def calculate_retirement_benefit(
    mutation: CalculationMutation,
    situation: Situation,
    config: MutationEngineConfig,
) -> HandlerResult:
    """Retire the participant and distribute the attainable pension."""
    dossier = situation.dossier
    if dossier is None:
        return _reject(
            situation,
            Finding.critical(
                MessageCode.DOSSIER_NOT_FOUND,
                "Cannot calculate retirement benefit: no dossier exists",
            ),
        )
    if not dossier.policies:
        return _reject(
            situation,
            Finding.critical(
                MessageCode.NO_POLICIES,
                "Cannot calculate retirement benefit: dossier has no policies",
            ),
        )

    retirement_date = mutation.mutation_properties.get_date("retirement_date")

    participant = dossier.participant
    if participant is None:
        return _reject(
            situation,
            Finding.critical(
                MessageCode.NO_PARTICIPANT,
                "Cannot calculate retirement benefit: no participant found",
            ),
        )

    findings: list[Finding] = [
        Finding.warning(
            MessageCode.RETIREMENT_BEFORE_EMPLOYMENT,
            f"Retirement date is before employment start date for policy {p.policy_id}",
        )
        for p in dossier.policies
        if retirement_date < p.employment_start_date
    ]

    breakdown = compute_pension_breakdown(dossier.policies, retirement_date, config.accrual_rate)
    age = age_on(participant.birth_date, retirement_date)

    if age < config.retirement_age and breakdown.total_years < config.full_service_years:
        findings.append(
            Finding.critical(
                MessageCode.NOT_ELIGIBLE,
                f"Participant is not eligible for retirement (age: {age:.1f}, "
                f"years of service: {breakdown.total_years:.1f}). "
                f"Must be {config.retirement_age:f}+ years old OR have "
                f"{config.full_service_years:f}+ years of service.",
            )
        )
        return _reject(situation, *findings)

    policies = tuple(
        replace(policy, attainable_pension=pension)
        for policy, pension in zip(dossier.policies, breakdown.policy_pensions, strict=True)
    )
    updated = replace(
        dossier,
        status=DossierStatus.RETIRED,
        retirement_date=retirement_date,
        policies=policies,
    )
    return HandlerResult(situation=Situation(dossier=updated), findings=tuple(findings))


# ---------------------------------------------------------------------- #
# project_future_benefits                                                #
# ---------------------------------------------------------------------- #


def project_future_benefits(
    mutation: CalculationMutation,
    situation: Situation,
    config: MutationEngineConfig,
) -> HandlerResult:
    """Attach a projection series to every policy.

    Each projection re-evaluates the pension formula as of the projection
    date using current salaries; eligibility is not checked.
    """
    dossier = situation.dossier
    if dossier is None:
        return _reject(
            situation,
            Finding.critical(
                MessageCode.NO_DOSSIER, "Cannot project future benefits: no dossier exists"
            ),
        )
    if not dossier.policies:
        return _reject(
            situation,
            Finding.critical(
                MessageCode.NO_POLICIES, "Cannot project future benefits: dossier has no policies"
            ),
        )

    props = mutation.mutation_properties
    start = props.get_date("projection_start_date")
    end = props.get_date("projection_end_date")
    interval_months = props.get_int("projection_interval_months")

    series: list[list[Projection]] = [[] for _ in dossier.policies]
    for projection_date in projection_dates(start, end, interval_months):
        breakdown = compute_pension_breakdown(
            dossier.policies, projection_date, config.accrual_rate
        )
        for bucket, pension in zip(series, breakdown.policy_pensions, strict=True):
            bucket.append(Projection(date=projection_date, projected_pension=pension))

    policies = tuple(
        replace(policy, projections=tuple(bucket))
        for policy, bucket in zip(dossier.policies, series, strict=True)
    )
    return HandlerResult(situation=Situation(dossier=replace(dossier, policies=policies)))


# ---------------------------------------------------------------------- #
# Registry                                                               #
# ---------------------------------------------------------------------- #

DEFAULT_HANDLERS: Mapping[MutationDefinition, MutationHandler] = {
    MutationDefinition.CREATE_DOSSIER: create_dossier,
    MutationDefinition.ADD_POLICY: add_policy,
    MutationDefinition.APPLY_INDEXATION: apply_indexation,
    MutationDefinition.CALCULATE_RETIREMENT_BENEFIT: calculate_retirement_benefit,
    MutationDefinition.PROJECT_FUTURE_BENEFITS: project_future_benefits,
}


def resolve_handler(
    name: str,
    handlers: Mapping[MutationDefinition, MutationHandler] = DEFAULT_HANDLERS,
) -> MutationHandler:
    """Return the handler for an exact mutation definition name.

    Raises:
        UnknownMutationDefinitionError: If the name is not a known definition.
    """
    try:
        return handlers[MutationDefinition(name)]
    except (ValueError, KeyError) as exc:
        raise UnknownMutationDefinitionError(
            f"Unknown mutation definition: {name}",
            details={"mutation_definition_name": name},
        ) from exc


__all__ = [
    "DEFAULT_HANDLERS",
    "Finding",
    "HandlerResult",
    "MutationEngineConfig",
    "MutationHandler",
    "add_policy",
    "apply_indexation",
    "calculate_retirement_benefit",
    "create_dossier",
    "project_future_benefits",
    "resolve_handler",
]
