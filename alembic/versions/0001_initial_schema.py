"""Initial vacation planner schema.

Revision ID: 0001
Revises:
Create Date: 2025-10-24 00:00:00
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "employee",
        sa.Column("registration", sa.String(length=50), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("admission_date", sa.Date(), nullable=False),
        sa.Column("status", sa.String(length=50), nullable=False, server_default="ACTIVE"),
        sa.Column("acquisition_start", sa.Date(), nullable=True),
        sa.Column("acquisition_end", sa.Date(), nullable=True),
        sa.Column("vacation_deadline", sa.Date(), nullable=True),
        sa.Column("unexcused_absences", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("vacation_balance", sa.Integer(), nullable=False, server_default="30"),
        sa.Column("work_location", sa.String(length=255), nullable=True),
        sa.Column("union_convention", sa.String(length=255), nullable=True),
        sa.Column("absence_status", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_employee_vacation_deadline", "employee", ["vacation_deadline"])
    op.create_index("ix_employee_status_deadline", "employee", ["status", "vacation_deadline"])

    op.create_table(
        "absence",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "registration",
            sa.String(length=50),
            sa.ForeignKey("employee.registration", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("reason", sa.String(length=255), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("affects_period", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_absence_registration", "absence", ["registration"])

    op.create_table(
        "vacation_plan",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=50), nullable=False, server_default="ACTIVE"),
        sa.Column("description", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_vacation_plan_year", "vacation_plan", ["year"])
    op.create_index(
        "uq_vacation_plan_active_year",
        "vacation_plan",
        ["year"],
        unique=True,
        postgresql_where=sa.text("status = 'ACTIVE'"),
    )

    op.create_table(
        "substitute",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "registration",
            sa.String(length=50),
            sa.ForeignKey("employee.registration", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("eligible_roles", sa.JSON(), nullable=True),
        sa.Column("status", sa.String(length=50), nullable=False, server_default="AVAILABLE"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "vacation_period",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "registration",
            sa.String(length=50),
            sa.ForeignKey("employee.registration", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("plan_id", sa.Uuid(), sa.ForeignKey("vacation_plan.id", ondelete="SET NULL"), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("days", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=50), nullable=False, server_default="PLANNED"),
        sa.Column("acquisition_start", sa.Date(), nullable=True),
        sa.Column("acquisition_end", sa.Date(), nullable=True),
        sa.Column("manual_adjustment", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("needs_replacement", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("substitute_id", sa.Uuid(), sa.ForeignKey("substitute.id", ondelete="SET NULL"), nullable=True),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_vacation_period_registration", "vacation_period", ["registration"])
    op.create_index("ix_vacation_period_plan_id", "vacation_period", ["plan_id"])
    op.create_index("ix_vacation_period_status_start", "vacation_period", ["status", "start_date"])

    op.create_table(
        "audit_log",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("actor", sa.String(length=255), nullable=False),
        sa.Column("entity_type", sa.String(length=50), nullable=False),
        sa.Column("entity_id", sa.String(length=255), nullable=False),
        sa.Column("action", sa.String(length=50), nullable=False),
        sa.Column("before_json", sa.JSON(), nullable=True),
        sa.Column("after_json", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_audit_entity", "audit_log", ["entity_type", "entity_id"])
    op.create_index("ix_audit_log_created_at", "audit_log", ["created_at"])


def downgrade() -> None:
    op.drop_table("audit_log")
    op.drop_table("vacation_period")
    op.drop_table("substitute")
    op.drop_index("uq_vacation_plan_active_year", table_name="vacation_plan")
    op.drop_table("vacation_plan")
    op.drop_table("absence")
    op.drop_table("employee")
