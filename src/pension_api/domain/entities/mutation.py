# Copyright (c) Pension API.
# SPDX-License-Identifier: MIT
"""
Mutation Entities

Purpose:
    Immutable representation of the declarative mutations replayed by the
    engine, plus typed accessors over their untyped property bag.

Layer: domain/entities

Notes:
    Property values arrive as raw JSON values. Each accessor coerces on read
    and raises :class:`MutationPropertyError` when a required key is missing
    or its value cannot be converted.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from uuid import UUID

from pension_api.domain.enums.calculation import MutationType
from pension_api.domain.exceptions.calculation import MutationPropertyError
from pension_api.types import JsonValue

from .base import BaseEntity

_DATE_FORMAT = "%Y-%m-%d"


class MutationProperties(Mapping[str, JsonValue]):
    """Read-only property bag with typed accessors."""

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, JsonValue] | None = None) -> None:
        self._values: Mapping[str, JsonValue] = MappingProxyType(dict(values or {}))

    def __getitem__(self, key: str) -> JsonValue:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"MutationProperties({dict(self._values)!r})"

    # ------------------------------------------------------------------ #
    # Required accessors                                                 #
    # ------------------------------------------------------------------ #

    def _require(self, key: str) -> JsonValue:
        value = self._values.get(key)
        if value is None:
            raise MutationPropertyError(f"Property '{key}' not found", details={"key": key})
        return value

    def get_string(self, key: str) -> str:
        """Return ``key`` as a string; scalars are stringified."""
        value = self._require(key)
        if isinstance(value, (list, dict)):
            raise MutationPropertyError(
                f"Property '{key}' must be a string", details={"key": key}
            )
        return value if isinstance(value, str) else str(value)

    def get_uuid(self, key: str) -> UUID:
        """Return ``key`` parsed as a UUID."""
        raw = self.get_string(key)
        try:
            return UUID(raw)
        except ValueError as exc:
            raise MutationPropertyError(
                f"Property '{key}' is not a valid GUID: {raw!r}", details={"key": key}
            ) from exc

    def get_date(self, key: str) -> date:
        """Return ``key`` parsed as an ISO ``YYYY-MM-DD`` date."""
        return _parse_date(key, self.get_string(key))

    def get_decimal(self, key: str) -> Decimal:
        """Return ``key`` as a Decimal (numbers and numeric strings)."""
        value = self._require(key)
        if isinstance(value, bool) or isinstance(value, (list, dict)):
            raise MutationPropertyError(
                f"Property '{key}' must be a number", details={"key": key}
            )
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise MutationPropertyError(
                f"Property '{key}' is not a valid number: {value!r}", details={"key": key}
            ) from exc
        if not result.is_finite():
            raise MutationPropertyError(
                f"Property '{key}' must be a finite number", details={"key": key}
            )
        return result

    def get_int(self, key: str) -> int:
        """Return ``key`` as an integer (integral numbers and numeric strings)."""
        value = self._require(key)
        if isinstance(value, bool):
            raise MutationPropertyError(
                f"Property '{key}' must be an integer", details={"key": key}
            )
        if isinstance(value, int):
            return value
        number = self.get_decimal(key)
        if number != number.to_integral_value():
            raise MutationPropertyError(
                f"Property '{key}' must be an integer: {value!r}", details={"key": key}
            )
        return int(number)

    # ------------------------------------------------------------------ #
    # Optional accessors                                                 #
    # ------------------------------------------------------------------ #

    def get_optional_string(self, key: str) -> str | None:
        """Return ``key`` as a string, or ``None`` when absent or null."""
        if self._values.get(key) is None:
            return None
        return self.get_string(key)

    def get_optional_date(self, key: str) -> date | None:
        """Return ``key`` as a date, or ``None`` when absent or null."""
        if self._values.get(key) is None:
            return None
        return self.get_date(key)


def _parse_date(key: str, raw: str) -> date:
    try:
        return datetime.strptime(raw.strip(), _DATE_FORMAT).date()
    except ValueError as exc:
        raise MutationPropertyError(
            f"Property '{key}' is not a valid date (expected YYYY-MM-DD): {raw!r}",
            details={"key": key},
        ) from exc


@dataclass(frozen=True, slots=True)
class CalculationMutation(BaseEntity, ABC):
    """Common fields of every mutation; concrete shapes define ``mutation_type``.

    Args:
        mutation_id: Caller-supplied correlation id.
        mutation_definition_name: Selects the handler (kept as raw text so that
            unknown names reach the engine and are reported there).
        actual_at: As-of date for the business rules.
        mutation_properties: Untyped property bag.
    """

    mutation_id: UUID
    mutation_definition_name: str
    actual_at: date
    mutation_properties: MutationProperties = field(default_factory=MutationProperties)

    @property
    @abstractmethod
    def mutation_type(self) -> MutationType:
        """Return the discriminator for this mutation shape."""


@dataclass(frozen=True, slots=True)
class DossierCreationMutation(CalculationMutation):
    """Mutation that creates the dossier (no target dossier id)."""

    @property
    def mutation_type(self) -> MutationType:
        return MutationType.DOSSIER_CREATION


@dataclass(frozen=True, slots=True)
class DossierMutation(CalculationMutation):
    """Mutation scoped to the dossier in the situation.

    ``dossier_id`` is a lookup key only; a request holds at most one dossier.
    """

    dossier_id: str = ""

    def __post_init__(self) -> None:
        if not self.dossier_id:
            raise ValueError("dossier_id must be non-empty for DOSSIER mutations")

    @property
    def mutation_type(self) -> MutationType:
        return MutationType.DOSSIER


__all__ = [
    "CalculationMutation",
    "DossierCreationMutation",
    "DossierMutation",
    "MutationProperties",
]
