# ruff: noqa: TC003
from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field

from vacation_planner.models.enums import EmployeeStatus


class CreateEmployeeRequest(BaseModel):
    """Request body for registering an employee."""

    registration: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=1, max_length=255)
    admission_date: date
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    unexcused_absences: int = Field(default=0, ge=0)
    work_location: str | None = Field(default=None, max_length=255)
    union_convention: str | None = Field(default=None, max_length=255)
    absence_status: str | None = Field(default=None, max_length=255)


class EmployeeResponse(BaseModel):
    """Response schema for an employee and their derived vacation fields."""

    registration: str
    name: str
    admission_date: date
    status: EmployeeStatus
    acquisition_start: date | None
    acquisition_end: date | None
    vacation_deadline: date | None
    unexcused_absences: int
    vacation_balance: int
    work_location: str | None
    union_convention: str | None
    absence_status: str | None
    created_at: datetime
