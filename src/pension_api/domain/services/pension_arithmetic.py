# src/pension_api/domain/services/pension_arithmetic.py
# Copyright (c) Pension API.
# SPDX-License-Identifier: MIT
"""Pension arithmetic (domain kernel).

Purpose:
    Shared years-of-service, weighted-salary and proportional-distribution
    formula used by the retirement-benefit and projection handlers.

Layer:
    domain/services

Notes:
    - Pure domain logic:
        * No logging.
        * No HTTP or transport concerns.
    - All amounts use ``Decimal``; a year is approximated as 365.25 days.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from dateutil.relativedelta import relativedelta

from pension_api.domain.entities.dossier import Policy
from pension_api.domain.exceptions.calculation import InvalidProjectionIntervalError

DAYS_PER_YEAR = Decimal("365.25")
DEFAULT_ACCRUAL_RATE = Decimal("0.02")

_ZERO = Decimal(0)


@dataclass(frozen=True, slots=True)
class PolicyService:
    """Service years and effective salary of one policy at an as-of date."""

    policy: Policy
    years: Decimal
    effective_salary: Decimal


@dataclass(frozen=True, slots=True)
class PensionBreakdown:
    """Result of the pension formula for a set of policies.

    Attributes:
        services:
            Per-policy service data, in policy order.
        total_years:
            Sum of service years across policies.
        weighted_average_salary:
            Service-weighted average of effective salaries (0 without service).
        annual_pension:
            ``weighted_average_salary * total_years * accrual_rate``.
        policy_pensions:
            Each policy's proportional share of ``annual_pension``.
    """

    services: tuple[PolicyService, ...]
    total_years: Decimal
    weighted_average_salary: Decimal
    annual_pension: Decimal
    policy_pensions: tuple[Decimal, ...]


def days_between(start: date, end: date) -> int:
    """Return the signed number of days from ``start`` to ``end``."""
    return (end - start).days


def years_between(start: date, end: date) -> Decimal:
    """Return service years from ``start`` to ``end``, floored at zero."""
    return max(_ZERO, Decimal(days_between(start, end)) / DAYS_PER_YEAR)


def age_on(birth_date: date, on: date) -> Decimal:
    """Return the fractional age in years on a given date."""
    return Decimal(days_between(birth_date, on)) / DAYS_PER_YEAR


def compute_pension_breakdown(
    policies: Sequence[Policy],
    as_of: date,
    accrual_rate: Decimal = DEFAULT_ACCRUAL_RATE,
) -> PensionBreakdown:
    """Evaluate the pension formula for ``policies`` as of ``as_of``.

    Args:
        policies:
            All policies of the dossier, with their current salaries.
        as_of:
            Date at which service years are measured.
        accrual_rate:
            Fraction of weighted salary earned per year of service.

    Returns:
        PensionBreakdown with per-policy shares in policy order.
    """
    services = tuple(
        PolicyService(
            policy=p,
            years=years_between(p.employment_start_date, as_of),
            effective_salary=p.effective_salary,
        )
        for p in policies
    )
    total_years = sum((s.years for s in services), _ZERO)

    if total_years == 0:
        return PensionBreakdown(
            services=services,
            total_years=total_years,
            weighted_average_salary=_ZERO,
            annual_pension=_ZERO,
            policy_pensions=tuple(_ZERO for _ in services),
        )

    weighted_sum = sum((s.effective_salary * s.years for s in services), _ZERO)
    weighted_average_salary = weighted_sum / total_years
    annual_pension = weighted_average_salary * total_years * accrual_rate

    return PensionBreakdown(
        services=services,
        total_years=total_years,
        weighted_average_salary=weighted_average_salary,
        annual_pension=annual_pension,
        policy_pensions=tuple(annual_pension * (s.years / total_years) for s in services),
    )


def projection_dates(start: date, end: date, interval_months: int) -> tuple[date, ...]:
    """Return the projection series from ``start`` to ``end`` inclusive.

    Each date is the previous one plus ``interval_months`` calendar months,
    with the day clamped to the end of shorter months (so a series starting
    on the 31st drifts to the 28th/29th after February).

    Raises:
        InvalidProjectionIntervalError: If ``interval_months`` is below 1.
    """
    if interval_months < 1:
        raise InvalidProjectionIntervalError(
            f"projection_interval_months must be >= 1 (got {interval_months})",
            details={"projection_interval_months": interval_months},
        )

    dates: list[date] = []
    current = start
    while current <= end:
        dates.append(current)
        current = current + relativedelta(months=interval_months)
    return tuple(dates)


__all__ = [
    "DAYS_PER_YEAR",
    "DEFAULT_ACCRUAL_RATE",
    "PensionBreakdown",
    "PolicyService",
    "age_on",
    "compute_pension_breakdown",
    "days_between",
    "projection_dates",
    "years_between",
]
