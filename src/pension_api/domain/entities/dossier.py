# Copyright (c) Pension API.
# SPDX-License-Identifier: MIT
"""
Dossier Entities

Purpose:
    Immutable domain representation of a pension dossier and the situation
    threaded through the mutation fold (no I/O).

Layer: domain/entities
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from uuid import UUID

from pension_api.domain.enums.calculation import DossierStatus, PersonRole

from .base import BaseEntity


@dataclass(frozen=True, slots=True)
class Person(BaseEntity):
    """Person attached to a dossier.

    Args:
        person_id: Caller-supplied identifier.
        role: Role within the dossier (always PARTICIPANT today).
        name: Non-blank display name.
        birth_date: Date of birth.

    Raises:
        ValueError: If the name is blank.
    """

    person_id: UUID
    role: PersonRole
    name: str
    birth_date: date

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("name must be non-blank")


@dataclass(frozen=True, slots=True)
class Projection(BaseEntity):
    """Hypothetical pension value for a policy at a future date."""

    date: date
    projected_pension: Decimal


@dataclass(frozen=True, slots=True)
class Policy(BaseEntity):
    """Pension scheme enrollment within a dossier.

    Args:
        policy_id: ``{dossier_id}-{n}`` with ``n`` the 1-based insertion rank.
        scheme_id: Pension scheme identifier.
        employment_start_date: Start of service for this policy.
        salary: Annual full-time salary (non-negative).
        part_time_factor: Fraction of full time in ``[0, 1]``.
        attainable_pension: Set by a retirement calculation, scaled by indexation.
        projections: Set by the projection handler, replaced on every run.

    Raises:
        ValueError: If salary or part-time factor are out of range.
    """

    policy_id: str
    scheme_id: str
    employment_start_date: date
    salary: Decimal
    part_time_factor: Decimal
    attainable_pension: Decimal | None = None
    projections: tuple[Projection, ...] | None = None

    def __post_init__(self) -> None:
        if not self.policy_id:
            raise ValueError("policy_id must be non-empty")
        if self.salary < 0:
            raise ValueError("salary must be >= 0")
        if not (Decimal(0) <= self.part_time_factor <= Decimal(1)):
            raise ValueError("part_time_factor must be within [0, 1]")

    @property
    def effective_salary(self) -> Decimal:
        """Return salary scaled by the part-time factor."""
        return self.salary * self.part_time_factor


@dataclass(frozen=True, slots=True)
class Dossier(BaseEntity):
    """Pension case for a single participant.

    Raises:
        ValueError: If a retirement date is present on an active dossier.
    """

    dossier_id: UUID
    status: DossierStatus
    retirement_date: date | None
    persons: tuple[Person, ...]
    policies: tuple[Policy, ...]

    def __post_init__(self) -> None:
        if self.status is DossierStatus.ACTIVE and self.retirement_date is not None:
            raise ValueError("retirement_date is only set on RETIRED dossiers")

    @property
    def participant(self) -> Person | None:
        """Return the first PARTICIPANT person, if any."""
        for person in self.persons:
            if person.role is PersonRole.PARTICIPANT:
                return person
        return None

    def next_policy_id(self) -> str:
        """Return the identifier the next added policy will receive."""
        return f"{self.dossier_id}-{len(self.policies) + 1}"


@dataclass(frozen=True, slots=True)
class Situation(BaseEntity):
    """Complete derivable state at a point in the mutation sequence."""

    dossier: Dossier | None = None


__all__ = ["Dossier", "Person", "Policy", "Projection", "Situation"]
