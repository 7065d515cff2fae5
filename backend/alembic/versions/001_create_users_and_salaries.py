"""Initial schema: users and salaries.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("username", sa.String(100), nullable=False),
        sa.Column("national_number", sa.String(20), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(20), nullable=False),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index(
        "ix_users_national_number", "users", ["national_number"], unique=True,
    )

    op.create_table(
        "salaries",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "user_id", sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE", onupdate="CASCADE"),
            nullable=False,
        ),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("month", sa.Integer, nullable=False),
        sa.Column("year", sa.Integer, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("amount >= 0", name="ck_salaries_amount_non_negative"),
        sa.CheckConstraint("month BETWEEN 1 AND 12", name="ck_salaries_month_range"),
        sa.CheckConstraint("year BETWEEN 2000 AND 2100", name="ck_salaries_year_range"),
    )
    op.create_index("ix_salaries_user_id", "salaries", ["user_id"])
    op.create_index("salaries_month_year_idx", "salaries", ["month", "year"])


def downgrade() -> None:
    op.drop_index("salaries_month_year_idx", table_name="salaries")
    op.drop_index("ix_salaries_user_id", table_name="salaries")
    op.drop_table("salaries")
    op.drop_index("ix_users_national_number", table_name="users")
    op.drop_table("users")
