# ruff: noqa: TC003
from __future__ import annotations

from datetime import date

import sqlalchemy as sa
from sqlmodel import Field

from vacation_planner.models.base import TimestampMixin
from vacation_planner.models.enums import EmployeeStatus


class Employee(TimestampMixin, table=True):
    """An employee's HR record plus the vacation fields derived from it."""

    __tablename__ = "employee"
    __table_args__ = (sa.Index("ix_employee_status_deadline", "status", "vacation_deadline"),)

    registration: str = Field(primary_key=True, max_length=50)
    name: str = Field(max_length=255)
    admission_date: date
    status: str = Field(
        default=EmployeeStatus.ACTIVE, max_length=50, sa_column_kwargs={"server_default": "ACTIVE"}
    )
    acquisition_start: date | None = None
    acquisition_end: date | None = None
    vacation_deadline: date | None = Field(default=None, index=True)
    unexcused_absences: int = Field(default=0, sa_column_kwargs={"server_default": "0"})
    vacation_balance: int = Field(default=30, sa_column_kwargs={"server_default": "30"})
    work_location: str | None = Field(default=None, max_length=255)
    union_convention: str | None = Field(default=None, max_length=255)
    absence_status: str | None = Field(default=None, max_length=255)
