from __future__ import annotations

import sqlalchemy as sa
from sqlmodel import Field

from vacation_planner.models.base import TimestampMixin, UUIDBase
from vacation_planner.models.enums import PlanStatus


class VacationPlan(UUIDBase, TimestampMixin, table=True):
    """One distribution cycle. At most one plan per year is active."""

    __tablename__ = "vacation_plan"
    __table_args__ = (
        sa.Index(
            "uq_vacation_plan_active_year",
            "year",
            unique=True,
            postgresql_where=sa.text("status = 'ACTIVE'"),
            sqlite_where=sa.text("status = 'ACTIVE'"),
        ),
    )

    year: int = Field(index=True)
    status: str = Field(default=PlanStatus.ACTIVE, max_length=50, sa_column_kwargs={"server_default": "ACTIVE"})
    description: str | None = Field(default=None, max_length=255)
