"""Operational alerts around employees returning from absences."""

from __future__ import annotations

from datetime import date, timedelta
from typing import TYPE_CHECKING

from sqlalchemy import exists, select
from sqlmodel import col

from vacation_planner.exceptions import InvalidInputError
from vacation_planner.models.absence import Absence
from vacation_planner.models.employee import Employee
from vacation_planner.models.enums import EmployeeStatus, VacationStatus
from vacation_planner.models.vacation import VacationPeriod
from vacation_planner.schemas.alert import RescheduleCandidateResponse, UpcomingReturnResponse

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


def _require_positive(value: int, name: str) -> None:
    if value <= 0:
        raise InvalidInputError(f"{name} must be a positive number of days")


async def find_upcoming_returns(
    session: AsyncSession,
    days: int,
    *,
    today: date | None = None,
) -> list[UpcomingReturnResponse]:
    """Employees whose absence ends within the next ``days`` days."""
    _require_positive(days, "days")
    if today is None:
        today = date.today()

    result = await session.execute(
        select(Absence, Employee)
        .join(Employee, col(Employee.registration) == col(Absence.registration))
        .where(
            col(Absence.end_date).is_not(None),
            col(Absence.end_date) >= today,
            col(Absence.end_date) <= today + timedelta(days=days),
        )
        .order_by(col(Absence.end_date), col(Employee.registration))
    )
    return [
        UpcomingReturnResponse(
            registration=employee.registration,
            name=employee.name,
            employee_status=employee.status,
            absence_reason=absence.reason,
            expected_return=absence.end_date,
        )
        for absence, employee in result.all()
    ]


async def find_needing_reschedule(
    session: AsyncSession,
    period_days: int,
    *,
    today: date | None = None,
) -> list[RescheduleCandidateResponse]:
    """Active employees back from an absence in the last ``period_days`` days
    who have no planned vacation ahead of them."""
    _require_positive(period_days, "period")
    if today is None:
        today = date.today()

    recently_returned = exists().where(
        col(Absence.registration) == col(Employee.registration),
        col(Absence.end_date) >= today - timedelta(days=period_days),
        col(Absence.end_date) <= today,
    )
    future_vacation = exists().where(
        col(VacationPeriod.registration) == col(Employee.registration),
        col(VacationPeriod.status) == VacationStatus.PLANNED.value,
        col(VacationPeriod.start_date) >= today,
    )
    result = await session.execute(
        select(Employee)
        .where(
            col(Employee.status) == EmployeeStatus.ACTIVE.value,
            recently_returned,
            ~future_vacation,
        )
        .order_by(col(Employee.vacation_deadline), col(Employee.registration))
    )
    return [
        RescheduleCandidateResponse(
            registration=employee.registration,
            name=employee.name,
            vacation_deadline=employee.vacation_deadline,
        )
        for employee in result.scalars().all()
    ]
