"""SQLAlchemy Declarative Base: shared base class for all ORM models.

Invariants:
    - Employee and Salary inherit from Base
    - Base.metadata is the single source of truth for table definitions
      (alembic autogenerate and test fixtures both read it)
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all employee-status ORM models."""
    pass
