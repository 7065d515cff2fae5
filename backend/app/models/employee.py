"""Employee ORM: persisted identity and activity flag for one employee.

Invariants:
    - national_number is unique and non-null (LLLNNNN, e.g. NAT1001)
    - is_active defaults to True; deactivated employees are never deleted
    - Deleting an employee cascades to its salaries

Design Decisions:
    - Table name "users" and snake_case columns match the existing schema and seed data
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Employee(Base):
    """Employee entity. Owns its salary history."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    username: Mapped[str] = mapped_column(String(100), nullable=False)
    national_number: Mapped[str] = mapped_column(
        String(20), nullable=False, unique=True, index=True,
    )
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(20), nullable=False)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
        onupdate=_utcnow,
    )

    salaries: Mapped[list["Salary"]] = relationship(
        "Salary", back_populates="employee",
        cascade="all, delete-orphan", passive_deletes=True,
    )
