"""Salary Rules: adjustment, tax, averaging and status classification.

Invariants:
    - December bonus is applied BEFORE the summer deduction; the month sets are
      disjoint so no record ever receives both multipliers
    - Adjustment never adds, drops or reorders records
    - Tax threshold is strict: a total of exactly 10000 pays no tax
    - average = (total - tax) / record count, 0 for an empty list
    - Status bands are inclusive on their lower edge
    - Every function is pure; inputs are never mutated

Design Decisions:
    - Decimal end to end: 10000.01 * 0.07 must equal 700.0007 exactly
    - Net pool over raw count for the average, kept as published rather than a
      per-record net formula
"""

from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import Sequence

from app.core.domain_types import (
    EmployeeRecord, EmployeeStatus, SalaryRecord, SalaryStatus,
)


DECEMBER = 12
SUMMER_MONTHS = frozenset({6, 7, 8})

DECEMBER_BONUS_RATE = Decimal("1.10")
SUMMER_DEDUCTION_RATE = Decimal("0.95")

TAX_THRESHOLD = Decimal("10000")
TAX_RATE = Decimal("0.07")

GREEN_THRESHOLD = Decimal("5000")
ORANGE_THRESHOLD = Decimal("3000")

_ZERO = Decimal("0")


def _as_decimal(amount) -> Decimal:
    # str() keeps float inputs like 0.1 from expanding to binary noise
    return amount if isinstance(amount, Decimal) else Decimal(str(amount))


def apply_december_bonus(salaries: Sequence[SalaryRecord]) -> list[SalaryRecord]:
    return [
        replace(s, amount=_as_decimal(s.amount) * DECEMBER_BONUS_RATE)
        if s.month == DECEMBER else s
        for s in salaries
    ]


def apply_summer_deduction(salaries: Sequence[SalaryRecord]) -> list[SalaryRecord]:
    return [
        replace(s, amount=_as_decimal(s.amount) * SUMMER_DEDUCTION_RATE)
        if s.month in SUMMER_MONTHS else s
        for s in salaries
    ]


def apply_salary_adjustments(salaries: Sequence[SalaryRecord]) -> list[SalaryRecord]:
    """Bonus first, then deduction."""
    return apply_summer_deduction(apply_december_bonus(salaries))


def calculate_total_salary(salaries: Sequence[SalaryRecord]) -> Decimal:
    return sum((_as_decimal(s.amount) for s in salaries), _ZERO)


def calculate_tax(total_salary: Decimal) -> Decimal:
    if total_salary > TAX_THRESHOLD:
        return total_salary * TAX_RATE
    return _ZERO


def calculate_average_salary(
    total_salary: Decimal, tax_amount: Decimal, salary_count: int,
) -> Decimal:
    if salary_count == 0:
        return _ZERO
    return (total_salary - tax_amount) / salary_count


def find_highest_salary(salaries: Sequence[SalaryRecord]) -> Decimal:
    if not salaries:
        return _ZERO
    return max(_as_decimal(s.amount) for s in salaries)


def determine_status(average_salary: Decimal) -> SalaryStatus:
    if average_salary >= GREEN_THRESHOLD:
        return SalaryStatus.GREEN
    if average_salary >= ORANGE_THRESHOLD:
        return SalaryStatus.ORANGE
    return SalaryStatus.RED


def compute_employee_status(
    employee: EmployeeRecord,
    salaries: Sequence[SalaryRecord],
    computed_at: datetime,
) -> EmployeeStatus:
    """Run the full rule pipeline. Caller has already validated shape and history."""
    adjusted = apply_salary_adjustments(salaries)
    total = calculate_total_salary(adjusted)
    tax = calculate_tax(total)
    average = calculate_average_salary(total, tax, len(adjusted))
    return EmployeeStatus(
        employee=employee,
        adjusted_salaries=tuple(adjusted),
        total_salary=total,
        average_salary=average,
        highest_salary=find_highest_salary(adjusted),
        tax_amount=tax,
        status=determine_status(average),
        computed_at=computed_at,
    )
