# ruff: noqa: TC003
from __future__ import annotations

from datetime import date

from pydantic import BaseModel


class UpcomingReturnResponse(BaseModel):
    """An employee expected back from an absence soon."""

    registration: str
    name: str
    employee_status: str
    absence_reason: str
    expected_return: date


class RescheduleCandidateResponse(BaseModel):
    """An employee back from an absence with no future planned vacation."""

    registration: str
    name: str
    vacation_deadline: date | None
