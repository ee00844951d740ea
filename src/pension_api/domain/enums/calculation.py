# src/pension_api/domain/enums/calculation.py
# Copyright (c) Pension API.
# SPDX-License-Identifier: MIT
"""Calculation enums for the pension dossier domain.

Purpose:
    Define the closed vocabularies used by the mutation engine: mutation
    shapes and definitions, message levels and codes, dossier status, person
    roles and calculation outcomes.

Layer:
    domain/enums

Notes:
    - Pure domain types:
        * No logging.
        * No HTTP or transport concerns.
"""

from __future__ import annotations

from enum import Enum


class MutationType(str, Enum):
    """Discriminator for the two mutation shapes."""

    DOSSIER_CREATION = "DOSSIER_CREATION"
    DOSSIER = "DOSSIER"


class MutationDefinition(str, Enum):
    """Names of the supported mutation handlers."""

    CREATE_DOSSIER = "create_dossier"
    ADD_POLICY = "add_policy"
    APPLY_INDEXATION = "apply_indexation"
    CALCULATE_RETIREMENT_BENEFIT = "calculate_retirement_benefit"
    PROJECT_FUTURE_BENEFITS = "project_future_benefits"


class MessageLevel(str, Enum):
    """Severity of a calculation message.

    WARNING messages never block a mutation; CRITICAL messages halt the fold.
    """

    WARNING = "WARNING"
    CRITICAL = "CRITICAL"


class MessageCode(str, Enum):
    """Stable codes for calculation messages."""

    DOSSIER_ALREADY_EXISTS = "DOSSIER_ALREADY_EXISTS"
    INVALID_NAME = "INVALID_NAME"
    INVALID_BIRTH_DATE = "INVALID_BIRTH_DATE"
    DOSSIER_NOT_FOUND = "DOSSIER_NOT_FOUND"
    NO_DOSSIER = "NO_DOSSIER"
    INVALID_SALARY = "INVALID_SALARY"
    INVALID_PART_TIME_FACTOR = "INVALID_PART_TIME_FACTOR"
    DUPLICATE_POLICY = "DUPLICATE_POLICY"
    NO_POLICIES = "NO_POLICIES"
    NO_MATCHING_POLICIES = "NO_MATCHING_POLICIES"
    NEGATIVE_SALARY_CLAMPED = "NEGATIVE_SALARY_CLAMPED"
    NO_PARTICIPANT = "NO_PARTICIPANT"
    NOT_ELIGIBLE = "NOT_ELIGIBLE"
    RETIREMENT_BEFORE_EMPLOYMENT = "RETIREMENT_BEFORE_EMPLOYMENT"
    MUTATION_ERROR = "MUTATION_ERROR"


class DossierStatus(str, Enum):
    """Lifecycle status of a dossier."""

    ACTIVE = "ACTIVE"
    RETIRED = "RETIRED"


class PersonRole(str, Enum):
    """Role of a person within a dossier."""

    PARTICIPANT = "PARTICIPANT"


class CalculationOutcome(str, Enum):
    """Overall outcome of a calculation request."""

    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"


__all__ = [
    "CalculationOutcome",
    "DossierStatus",
    "MessageCode",
    "MessageLevel",
    "MutationDefinition",
    "MutationType",
    "PersonRole",
]
