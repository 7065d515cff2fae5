"""Salary ORM: one monthly salary entry for an employee.

Invariants:
    - Always belongs to an Employee (user_id FK, ON DELETE CASCADE)
    - amount >= 0, 1 <= month <= 12, 2000 <= year <= 2100 (CHECK constraints)
    - amount stored as NUMERIC(10, 2): read back as Decimal
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import (
    CheckConstraint, DateTime, ForeignKey, Index, Integer, Numeric, Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Salary(Base):
    """Salary entity."""
    __tablename__ = "salaries"
    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_salaries_amount_non_negative"),
        CheckConstraint("month BETWEEN 1 AND 12", name="ck_salaries_month_range"),
        CheckConstraint("year BETWEEN 2000 AND 2100", name="ck_salaries_year_range"),
        Index("salaries_month_year_idx", "month", "year"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False, index=True,
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    month: Mapped[int] = mapped_column(Integer, nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
        onupdate=_utcnow,
    )

    employee: Mapped["Employee"] = relationship(
        "Employee", back_populates="salaries",
    )
