"""ORM Models: SQLAlchemy declarative models for employees and salaries.

Invariants:
    - All models inherit from Base (db/base.py)
    - Employee is the aggregate root; salaries are scoped by user_id

Design Decisions:
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from app.models.employee import Employee  # noqa: F401
from app.models.salary import Salary  # noqa: F401
