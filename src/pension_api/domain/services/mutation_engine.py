# src/pension_api/domain/services/mutation_engine.py
# Copyright (c) Pension API.
# SPDX-License-Identifier: MIT
"""Mutation engine (domain kernel).

Purpose:
    Replay an ordered list of mutations over an empty situation, collecting a
    single message log and stopping at the first CRITICAL message.

Layer:
    domain/services

Notes:
    - Pure domain logic:
        * No logging.
        * No HTTP or transport concerns.
    - Any exception raised while a handler runs is converted into a CRITICAL
      ``MUTATION_ERROR`` message for that mutation; it never escapes ``run``.
    - Message ids are log positions, assigned in emission order.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from pension_api.domain.entities.calculation import (
    CalculationMessage,
    EngineRun,
    MutationResult,
    SituationSnapshot,
)
from pension_api.domain.entities.dossier import Situation
from pension_api.domain.entities.mutation import CalculationMutation
from pension_api.domain.enums.calculation import MessageCode, MessageLevel, MutationDefinition
from pension_api.domain.exceptions.calculation import EmptyMutationListError
from pension_api.domain.services.mutation_handlers import (
    DEFAULT_HANDLERS,
    Finding,
    HandlerResult,
    MutationEngineConfig,
    MutationHandler,
    resolve_handler,
)


class _MessageLog:
    """Append-only message log; ids are positions."""

    def __init__(self) -> None:
        self._messages: list[CalculationMessage] = []

    def append(self, finding: Finding) -> int:
        message = CalculationMessage(
            id=len(self._messages),
            level=finding.level,
            code=finding.code,
            message=finding.message,
        )
        self._messages.append(message)
        return message.id

    def freeze(self) -> tuple[CalculationMessage, ...]:
        return tuple(self._messages)


class MutationEngine:
    """Fold mutations over a situation, one handler call per mutation.

    Example:
        >>> run = MutationEngine().run(mutations)
        >>> run.outcome
        <CalculationOutcome.SUCCESS: 'SUCCESS'>
    """

    def __init__(
        self,
        config: MutationEngineConfig | None = None,
        handlers: Mapping[MutationDefinition, MutationHandler] | None = None,
    ) -> None:
        self.config = config or MutationEngineConfig()
        self._handlers = handlers if handlers is not None else DEFAULT_HANDLERS

    # ------------------------------------------------------------------ #
    # Public API                                                         #
    # ------------------------------------------------------------------ #

    def run(self, mutations: Sequence[CalculationMutation]) -> EngineRun:
        """Replay ``mutations`` in order.

        Args:
            mutations:
                Non-empty ordered mutation list.

        Returns:
            EngineRun with the message log, the initial and end snapshots and
            one result per processed mutation (unprocessed mutations after a
            CRITICAL halt are omitted).

        Raises:
            EmptyMutationListError: If ``mutations`` is empty.
        """
        if not mutations:
            raise EmptyMutationListError("mutations must be non-empty")

        first_actual_at = mutations[0].actual_at
        log = _MessageLog()
        results: list[MutationResult] = []
        current = Situation()
        last_success: SituationSnapshot | None = None

        for index, mutation in enumerate(mutations):
            outcome = self._apply(mutation, current)
            message_ids = tuple(log.append(f) for f in outcome.findings)
            results.append(
                MutationResult(
                    mutation=mutation,
                    calculation_message_indexes=message_ids or None,
                )
            )

            if outcome.has_critical:
                break

            current = outcome.situation
            last_success = SituationSnapshot(
                actual_at=mutation.actual_at,
                situation=current,
                mutation_id=mutation.mutation_id,
                mutation_index=index,
            )

        end_situation = last_success or SituationSnapshot(
            actual_at=first_actual_at,
            situation=current,
            mutation_index=0,
        )

        return EngineRun(
            messages=log.freeze(),
            initial_situation=SituationSnapshot(actual_at=first_actual_at, situation=Situation()),
            end_situation=end_situation,
            mutation_results=tuple(results),
        )

    # ------------------------------------------------------------------ #
    # Internals                                                          #
    # ------------------------------------------------------------------ #

    def _apply(self, mutation: CalculationMutation, situation: Situation) -> HandlerResult:
        try:
            handler = resolve_handler(mutation.mutation_definition_name, self._handlers)
            return handler(mutation, situation, self.config)
        except Exception as exc:  # noqa: BLE001 - reported as a MUTATION_ERROR message
            return HandlerResult(
                situation=situation,
                findings=(
                    Finding.critical(
                        MessageCode.MUTATION_ERROR, f"Error processing mutation: {exc}"
                    ),
                ),
            )


__all__ = ["MutationEngine", "MutationEngineConfig"]
