"""SQL Record Store: reads employees and salary histories into domain records.

Invariants:
    - Returns frozen domain records, never ORM instances
    - Salaries ordered newest first (year DESC, month DESC), ties broken by id
    - A failed query rolls the session back before re-raising, so a retry
      starts from a clean transaction
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import (
    EmployeeId, EmployeeRecord, NationalKey, SalaryRecord,
)
from app.models.employee import Employee
from app.models.salary import Salary

logger = logging.getLogger(__name__)


def _to_employee_record(row: Employee) -> EmployeeRecord:
    return EmployeeRecord(
        id=EmployeeId(row.id),
        username=row.username,
        national_key=NationalKey(row.national_number),
        email=row.email,
        phone=row.phone,
        is_active=row.is_active,
    )


def _to_salary_record(row: Salary) -> SalaryRecord:
    return SalaryRecord(amount=row.amount, month=row.month, year=row.year)


class SqlRecordStore:
    """RecordStore implementation over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def find_by_key(
        self, national_key: NationalKey,
    ) -> EmployeeRecord | None:
        try:
            result = await self._db.execute(
                select(Employee).where(Employee.national_number == national_key),
            )
            row = result.scalar_one_or_none()
        except SQLAlchemyError:
            await self._db.rollback()
            raise
        return _to_employee_record(row) if row else None

    async def list_salaries(
        self, employee_id: EmployeeId,
    ) -> list[SalaryRecord]:
        try:
            result = await self._db.execute(
                select(Salary)
                .where(Salary.user_id == employee_id)
                .order_by(Salary.year.desc(), Salary.month.desc(), Salary.id),
            )
            rows = result.scalars().all()
        except SQLAlchemyError:
            await self._db.rollback()
            raise
        return [_to_salary_record(r) for r in rows]

    async def get_employee_with_salaries(
        self, national_key: NationalKey,
    ) -> tuple[EmployeeRecord, list[SalaryRecord]] | None:
        """Employee plus salary history, or None when no employee matches."""
        employee = await self.find_by_key(national_key)
        if employee is None:
            return None
        salaries = await self.list_salaries(employee.id)
        logger.debug(
            "Fetched employee with salaries",
            extra={"national_key": national_key, "salary_count": len(salaries)},
        )
        return employee, salaries
