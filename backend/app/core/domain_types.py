"""Domain Types: immutable records flowing through the status pipeline.

Invariants:
    - SalaryRecord and EmployeeRecord are frozen; adjustments build new records
    - EmployeeStatus.adjusted_salaries keeps input length and order
    - SalaryStatus values serialize as plain strings (GREEN, ORANGE, RED)

Design Decisions:
    - Frozen dataclasses over ORM rows: the core never sees a live session object
    - Decimal amounts: tax and averages must match the published figures exactly
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

EmployeeId = NewType("EmployeeId", UUID)
NationalKey = NewType("NationalKey", str)  # LLLNNNN, e.g. NAT1001


# ─── Enums ───────────────────────────────────────────────────────

class SalaryStatus(str, Enum):
    """Compensation band derived from the average net salary."""
    GREEN = "GREEN"
    ORANGE = "ORANGE"
    RED = "RED"


# ─── Records ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class SalaryRecord:
    """One monthly salary entry."""
    amount: Decimal
    month: int
    year: int

    def to_response(self) -> dict:
        return {
            "Amount": float(self.amount),
            "Month": self.month,
            "Year": self.year,
        }


@dataclass(frozen=True)
class EmployeeRecord:
    """Read-only copy of a stored employee."""
    id: EmployeeId
    username: str
    national_key: NationalKey
    email: str
    phone: str
    is_active: bool


@dataclass(frozen=True)
class EmployeeStatus:
    """Computed compensation status for one employee at one point in time."""
    employee: EmployeeRecord
    adjusted_salaries: tuple[SalaryRecord, ...]
    total_salary: Decimal
    average_salary: Decimal
    highest_salary: Decimal
    tax_amount: Decimal
    status: SalaryStatus
    computed_at: datetime = field(compare=False)

    def to_response(self) -> dict:
        """Public response shape. Field casing is part of the API contract."""
        return {
            "ID": str(self.employee.id),
            "Username": self.employee.username,
            "NationalNumber": self.employee.national_key,
            "Email": self.employee.email,
            "Phone": self.employee.phone,
            "IsActive": self.employee.is_active,
            "Salaries": [s.to_response() for s in self.adjusted_salaries],
            "TotalSalary": float(self.total_salary),
            "AverageSalary": float(self.average_salary),
            "HighestSalary": float(self.highest_salary),
            "TaxAmount": float(self.tax_amount),
            "Status": self.status.value,
            "LastUpdated": self.computed_at.isoformat(),
        }
