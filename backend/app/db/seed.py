"""Demo Seed Data: twelve sample employees with deterministic salary histories.

Run with ``python -m app.db.seed`` after ``alembic upgrade head``.

Invariants:
    - Idempotent: employees whose national_number already exists are skipped
    - Histories start at January 2023, one record per month; 13+ records roll into 2024
    - Amounts are base + a fixed monthly offset (offsets sum to zero over a year)

Notable fixtures:
    - NAT1001 active, 12 records, average above 5000 → GREEN
    - NAT1003, NAT1008 inactive → INACTIVE
    - NAT1005 active with 2 records → INSUFFICIENT_DATA
    - NAT1009 active, low salary → RED
"""

import asyncio
import logging
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.db.session import create_session_factory
from app.infrastructure.observability import setup_logging
from app.models.employee import Employee
from app.models.salary import Salary

logger = logging.getLogger(__name__)

FIRST_YEAR = 2023
MONTHLY_OFFSETS = (0, 120, -80, 60, -140, 40, 100, -60, 20, -20, 80, -120)


@dataclass(frozen=True)
class DemoEmployee:
    username: str
    national_number: str
    email: str
    phone: str
    is_active: bool
    base_salary: int
    months: int


DEMO_EMPLOYEES: tuple[DemoEmployee, ...] = (
    DemoEmployee("john_doe", "NAT1001", "john.doe@example.com", "+1234567890", True, 5600, 12),
    DemoEmployee("jane_smith", "NAT1002", "jane.smith@example.com", "+1234567891", True, 7500, 10),
    DemoEmployee("bob_johnson", "NAT1003", "bob.johnson@example.com", "+1234567892", False, 4500, 8),
    DemoEmployee("alice_williams", "NAT1004", "alice.williams@example.com", "+1234567893", True, 8000, 15),
    DemoEmployee("charlie_brown", "NAT1005", "charlie.brown@example.com", "+1234567894", True, 3000, 2),
    DemoEmployee("diana_prince", "NAT1006", "diana.prince@example.com", "+1234567895", True, 4000, 6),
    DemoEmployee("edward_stark", "NAT1007", "edward.stark@example.com", "+1234567896", True, 6000, 18),
    DemoEmployee("fiona_gallagher", "NAT1008", "fiona.gallagher@example.com", "+1234567897", False, 3500, 5),
    DemoEmployee("george_martin", "NAT1009", "george.martin@example.com", "+1234567898", True, 2500, 4),
    DemoEmployee("hannah_montana", "NAT1010", "hannah.montana@example.com", "+1234567899", True, 9000, 20),
    DemoEmployee("ian_malcolm", "NAT1011", "ian.malcolm@example.com", "+1234567800", True, 5500, 7),
    DemoEmployee("julia_roberts", "NAT1012", "julia.roberts@example.com", "+1234567801", True, 6500, 11),
)


def build_salary_history(base_salary: int, months: int) -> list[tuple[Decimal, int, int]]:
    """(amount, month, year) tuples, oldest first."""
    history = []
    for i in range(months):
        month = (i % 12) + 1
        year = FIRST_YEAR + i // 12
        amount = Decimal(base_salary + MONTHLY_OFFSETS[i % 12]).quantize(Decimal("0.01"))
        history.append((amount, month, year))
    return history


async def seed_demo_data(
    db: AsyncSession, employees: tuple[DemoEmployee, ...] = DEMO_EMPLOYEES,
) -> int:
    """Insert missing demo employees and their salaries. Returns employees added."""
    result = await db.execute(select(Employee.national_number))
    existing = set(result.scalars().all())

    added = 0
    for demo in employees:
        if demo.national_number in existing:
            continue
        employee = Employee(
            username=demo.username,
            national_number=demo.national_number,
            email=demo.email,
            phone=demo.phone,
            is_active=demo.is_active,
        )
        employee.salaries = [
            Salary(amount=amount, month=month, year=year)
            for amount, month, year in build_salary_history(demo.base_salary, demo.months)
        ]
        db.add(employee)
        added += 1

    await db.commit()
    logger.info(f"Seeded {added} demo employees ({len(existing)} already present)")
    return added


async def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    engine, factory = create_session_factory(settings.database_url)
    try:
        async with factory() as db:
            await seed_demo_data(db)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
