# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import date

import sqlalchemy as sa
from sqlmodel import Field

from vacation_planner.models.base import TimestampMixin, UUIDBase
from vacation_planner.models.enums import VacationStatus


class VacationPeriod(UUIDBase, TimestampMixin, table=True):
    """A concrete vacation, planned automatically or entered by hand."""

    __tablename__ = "vacation_period"
    __table_args__ = (sa.Index("ix_vacation_period_status_start", "status", "start_date"),)

    registration: str = Field(
        sa_column=sa.Column(
            sa.String(50), sa.ForeignKey("employee.registration", ondelete="CASCADE"), nullable=False, index=True
        ),
    )
    plan_id: uuid.UUID | None = Field(
        default=None,
        sa_column=sa.Column(sa.Uuid, sa.ForeignKey("vacation_plan.id", ondelete="SET NULL"), index=True),
    )
    start_date: date
    end_date: date
    days: int
    status: str = Field(default=VacationStatus.PLANNED, max_length=50, sa_column_kwargs={"server_default": "PLANNED"})
    acquisition_start: date | None = None
    acquisition_end: date | None = None
    manual_adjustment: bool = Field(default=False, sa_column_kwargs={"server_default": sa.false()})
    needs_replacement: bool = Field(default=True, sa_column_kwargs={"server_default": sa.true()})
    substitute_id: uuid.UUID | None = Field(
        default=None,
        sa_column=sa.Column(sa.Uuid, sa.ForeignKey("substitute.id", ondelete="SET NULL")),
    )
    note: str | None = Field(default=None, sa_type=sa.Text)
