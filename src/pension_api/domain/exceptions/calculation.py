# src/pension_api/domain/exceptions/calculation.py
# Copyright (c) Pension API.
# SPDX-License-Identifier: MIT
"""
Calculation Domain Exceptions

Purpose:
    Exceptions raised while replaying mutations. The mutation engine turns
    any of them into a CRITICAL ``MUTATION_ERROR`` message; the use case and
    adapters map the request-level ones to HTTP.

Layer: domain/exceptions
"""

from __future__ import annotations

from .base import DomainError


class MutationPropertyError(DomainError):
    """A mutation property is missing or cannot be coerced to its type."""

    code = "MUTATION_PROPERTY_INVALID"


class UnknownMutationDefinitionError(DomainError):
    """No handler is registered for the mutation definition name."""

    code = "UNKNOWN_MUTATION_DEFINITION"


class InvalidProjectionIntervalError(DomainError):
    """Projection interval is not a positive number of months."""

    code = "INVALID_PROJECTION_INTERVAL"


class EmptyMutationListError(DomainError):
    """A calculation request carried no mutations."""

    code = "EMPTY_MUTATIONS"
