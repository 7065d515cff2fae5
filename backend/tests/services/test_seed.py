"""Demo seed: salary history generation and idempotent inserts.

Tests:
    - build_salary_history is oldest first and rolls into the next year
    - seed_demo_data inserts every employee once
    - The seeded NAT1001 history produces the documented GREEN figures
"""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import func, select

from app.core.domain_types import SalaryStatus
from app.core.salary_rules import compute_employee_status
from app.db.seed import DEMO_EMPLOYEES, MONTHLY_OFFSETS, build_salary_history, seed_demo_data
from app.infrastructure.record_store import SqlRecordStore
from app.models.employee import Employee
from app.models.salary import Salary


def test_offsets_balance_over_a_year():
    assert sum(MONTHLY_OFFSETS) == 0
    assert len(MONTHLY_OFFSETS) == 12


def test_history_rolls_into_next_year():
    history = build_salary_history(5000, 14)
    assert history[0] == (Decimal("5000.00"), 1, 2023)
    assert history[11][1:] == (12, 2023)
    assert history[12][1:] == (1, 2024)
    assert history[13][1:] == (2, 2024)


def test_demo_keys_are_unique():
    keys = [d.national_number for d in DEMO_EMPLOYEES]
    assert len(keys) == len(set(keys)) == 12


async def test_seed_is_idempotent(test_db):
    assert await seed_demo_data(test_db) == 12
    assert await seed_demo_data(test_db) == 0

    employees = await test_db.scalar(select(func.count()).select_from(Employee))
    salaries = await test_db.scalar(select(func.count()).select_from(Salary))
    assert employees == 12
    assert salaries == sum(d.months for d in DEMO_EMPLOYEES)


async def test_seeded_nat1001_is_green(test_db):
    await seed_demo_data(test_db)
    employee, salaries = await SqlRecordStore(test_db).get_employee_with_salaries("NAT1001")

    status = compute_employee_status(employee, salaries, datetime.now(timezone.utc))

    assert status.total_salary == Decimal("66904")
    assert status.tax_amount == Decimal("4683.28")
    assert status.average_salary.quantize(Decimal("0.01")) == Decimal("5185.06")
    assert status.highest_salary == Decimal("6028")
    assert status.status is SalaryStatus.GREEN
