# Copyright (c) Pension API.
# SPDX-License-Identifier: MIT
"""
Calculation Result Entities

Purpose:
    Immutable records produced by the mutation engine: the message log,
    situation snapshots and per-mutation results.

Layer: domain/entities
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from pension_api.domain.enums.calculation import CalculationOutcome, MessageCode, MessageLevel

from .base import BaseEntity
from .dossier import Situation
from .mutation import CalculationMutation


@dataclass(frozen=True, slots=True)
class CalculationMessage(BaseEntity):
    """Entry of the message log.

    Args:
        id: 0-based position in the log, assigned at append time.
        level: WARNING or CRITICAL.
        code: Stable message code.
        message: Human-readable text.
    """

    id: int
    level: MessageLevel
    code: MessageCode
    message: str

    def __post_init__(self) -> None:
        if self.id < 0:
            raise ValueError("message id must be >= 0")

    @property
    def is_critical(self) -> bool:
        """Return True when the message blocks further processing."""
        return self.level is MessageLevel.CRITICAL


@dataclass(frozen=True, slots=True)
class SituationSnapshot(BaseEntity):
    """Situation paired with the mutation that produced it."""

    actual_at: date
    situation: Situation
    mutation_id: UUID | None = None
    mutation_index: int | None = None


@dataclass(frozen=True, slots=True)
class MutationResult(BaseEntity):
    """Processed mutation and the log ids of the messages it produced.

    The patch fields are part of the response shape but are never populated.
    """

    mutation: CalculationMutation
    calculation_message_indexes: tuple[int, ...] | None = None
    forward_patch_to_situation_after_this_mutation: tuple[object, ...] | None = None
    backward_patch_to_previous_situation: tuple[object, ...] | None = None


@dataclass(frozen=True, slots=True)
class EngineRun(BaseEntity):
    """Complete output of one mutation replay."""

    messages: tuple[CalculationMessage, ...]
    initial_situation: SituationSnapshot
    end_situation: SituationSnapshot
    mutation_results: tuple[MutationResult, ...]

    @property
    def outcome(self) -> CalculationOutcome:
        """Return FAILURE when any logged message is CRITICAL."""
        if any(m.is_critical for m in self.messages):
            return CalculationOutcome.FAILURE
        return CalculationOutcome.SUCCESS


__all__ = [
    "CalculationMessage",
    "EngineRun",
    "MutationResult",
    "SituationSnapshot",
]
