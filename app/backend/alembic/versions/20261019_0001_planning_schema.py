"""planning schema

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def _money() -> sa.Numeric:
    return sa.Numeric(14, 2)


def upgrade() -> None:
    op.create_table(
        "departments",
        sa.Column("id", sa.BigInteger().with_variant(sa.Integer(), "sqlite"), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("code", sa.String(length=64), nullable=True, unique=True),
        sa.Column("parent_id", sa.BigInteger(), nullable=True),
        sa.Column("manager", sa.String(length=255), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="active"),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        "annual_work_plans",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("sheet_type", sa.String(length=32), nullable=True),
        sa.Column("year", sa.Integer(), nullable=True),
        sa.Column("month", sa.Integer(), nullable=True),
        sa.Column("department_id", sa.BigInteger(), nullable=True),
        sa.Column("department_name", sa.String(length=255), nullable=True),
        sa.Column("plan_name", sa.String(length=255), nullable=True),
        sa.Column("category", sa.String(length=64), nullable=True),
        sa.Column("priority", sa.String(length=32), nullable=True),
        sa.Column("target_level", sa.String(length=32), nullable=True),
        sa.Column("target_value", _money(), nullable=True),
        sa.Column("start_date", sa.String(length=32), nullable=True),
        sa.Column("end_date", sa.String(length=32), nullable=True),
        sa.Column("budget", _money(), nullable=True),
        sa.Column("actual_cost", _money(), nullable=True),
        sa.Column("progress", sa.Integer(), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=True),
        sa.Column("responsible_person", sa.String(length=255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_annual_work_plans_year_month", "annual_work_plans", ["year", "month"])

    op.create_table(
        "department_targets",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("year", sa.Integer(), nullable=True),
        sa.Column("department_id", sa.BigInteger(), nullable=True),
        sa.Column("department", sa.String(length=255), nullable=True),
        sa.Column("target_level", sa.String(length=32), nullable=True),
        sa.Column("target_type", sa.String(length=64), nullable=True),
        sa.Column("target_name", sa.String(length=255), nullable=True),
        sa.Column("target_value", _money(), nullable=True),
        sa.Column("unit", sa.String(length=64), nullable=True),
        sa.Column("quarter", sa.Integer(), nullable=True),
        sa.Column("month", sa.Integer(), nullable=True),
        sa.Column("current_value", _money(), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=True),
        sa.Column("responsible_person", sa.String(length=255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_department_targets_year_month", "department_targets", ["year", "month"])

    op.create_table(
        "monthly_progress",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("year", sa.Integer(), nullable=True),
        sa.Column("month", sa.Integer(), nullable=True),
        sa.Column("department_id", sa.BigInteger(), nullable=True),
        sa.Column("department", sa.String(length=255), nullable=True),
        sa.Column("task_name", sa.String(length=255), nullable=True),
        sa.Column("target_value", _money(), nullable=True),
        sa.Column("actual_value", _money(), nullable=True),
        sa.Column("completion_rate", sa.Numeric(7, 2), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=True),
        sa.Column("responsible_person", sa.String(length=255), nullable=True),
        sa.Column("start_date", sa.String(length=32), nullable=True),
        sa.Column("end_date", sa.String(length=32), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_monthly_progress_year_month", "monthly_progress", ["year", "month"])

    op.create_table(
        "major_events",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("year", sa.Integer(), nullable=True),
        sa.Column("month", sa.Integer(), nullable=True),
        sa.Column("event_name", sa.String(length=255), nullable=True),
        sa.Column("event_type", sa.String(length=64), nullable=True),
        sa.Column("importance", sa.String(length=32), nullable=True),
        sa.Column("planned_date", sa.String(length=32), nullable=True),
        sa.Column("actual_date", sa.String(length=32), nullable=True),
        sa.Column("department_id", sa.BigInteger(), nullable=True),
        sa.Column("responsible_department", sa.String(length=255), nullable=True),
        sa.Column("responsible_person", sa.String(length=255), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=True),
        sa.Column("progress", sa.Integer(), nullable=True),
        sa.Column("budget", _money(), nullable=True),
        sa.Column("actual_cost", _money(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_major_events_year", "major_events", ["year"])

    op.create_table(
        "action_plans",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("year", sa.Integer(), nullable=True),
        sa.Column("goal", sa.String(length=255), nullable=True),
        sa.Column("what", sa.String(length=255), nullable=True),
        sa.Column("why", sa.String(length=255), nullable=True),
        sa.Column("who", sa.String(length=255), nullable=True),
        sa.Column("when", sa.String(length=64), nullable=True),
        sa.Column("how", sa.Text(), nullable=True),
        sa.Column("how_much", _money(), nullable=True),
        sa.Column("start_date", sa.String(length=32), nullable=True),
        sa.Column("department_id", sa.BigInteger(), nullable=True),
        sa.Column("department", sa.String(length=255), nullable=True),
        sa.Column("priority", sa.String(length=32), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=True),
        sa.Column("progress", sa.Integer(), nullable=True),
        sa.Column("expected_result", sa.Text(), nullable=True),
        sa.Column("actual_result", sa.Text(), nullable=True),
        sa.Column("remarks", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_action_plans_year", "action_plans", ["year"])


def downgrade() -> None:
    op.drop_index("ix_action_plans_year", table_name="action_plans")
    op.drop_table("action_plans")

    op.drop_index("ix_major_events_year", table_name="major_events")
    op.drop_table("major_events")

    op.drop_index("ix_monthly_progress_year_month", table_name="monthly_progress")
    op.drop_table("monthly_progress")

    op.drop_index("ix_department_targets_year_month", table_name="department_targets")
    op.drop_table("department_targets")

    op.drop_index("ix_annual_work_plans_year_month", table_name="annual_work_plans")
    op.drop_table("annual_work_plans")

    op.drop_table("departments")
