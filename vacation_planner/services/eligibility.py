"""Selection of employees taking part in a distribution run."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import TYPE_CHECKING

from sqlalchemy import func, or_, select
from sqlmodel import col

from vacation_planner.models.absence import Absence
from vacation_planner.models.employee import Employee
from vacation_planner.models.enums import EmployeeStatus

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

LONG_ABSENCE_THRESHOLD_DAYS = 15
OPEN_ABSENCE_ASSUMED_DAYS = 365
LONG_ABSENCE_REASON = "active long absence"


@dataclass(frozen=True)
class ExcludedEmployee:
    """An employee left out of a distribution run, with the reason."""

    registration: str
    name: str
    reason: str


@dataclass
class EligibilityResult:
    """Candidates in processing order plus the recorded exclusions."""

    candidates: list[Employee] = field(default_factory=list)
    excluded: list[ExcludedEmployee] = field(default_factory=list)


def is_notice_status(absence_status: str | None, notice_marker: str) -> bool:
    """True when the status text says the employee is serving notice."""
    if not absence_status:
        return False
    return notice_marker.lower() in absence_status.lower()


def meets_inclusion_rules(employee: Employee, notice_marker: str) -> bool:
    """Active, with a computed deadline and not serving notice."""
    return (
        employee.status == EmployeeStatus.ACTIVE
        and employee.vacation_deadline is not None
        and not is_notice_status(employee.absence_status, notice_marker)
    )


def has_active_long_absence(absences: Iterable[Absence], today: date) -> bool:
    """True when an ongoing absence lasts more than 15 days.

    An absence is ongoing when it has no end date or ends after today. An
    open-ended absence is assumed to last a year.
    """
    for absence in absences:
        if absence.end_date is not None and absence.end_date <= today:
            continue
        end = absence.end_date or absence.start_date + timedelta(days=OPEN_ABSENCE_ASSUMED_DAYS)
        if (end - absence.start_date).days > LONG_ABSENCE_THRESHOLD_DAYS:
            return True
    return False


def filter_eligible(
    employees: Sequence[Employee],
    absences_by_registration: Mapping[str, Sequence[Absence]],
    today: date,
    notice_marker: str,
) -> EligibilityResult:
    """Split employees into distribution candidates and recorded exclusions.

    Input order is preserved in ``candidates``.
    """
    result = EligibilityResult()
    for employee in employees:
        if not meets_inclusion_rules(employee, notice_marker):
            continue
        if has_active_long_absence(absences_by_registration.get(employee.registration, ()), today):
            result.excluded.append(
                ExcludedEmployee(
                    registration=employee.registration,
                    name=employee.name,
                    reason=LONG_ABSENCE_REASON,
                )
            )
            continue
        result.candidates.append(employee)
    return result


async def fetch_absences_by_registration(
    session: AsyncSession,
    registrations: Sequence[str],
) -> dict[str, list[Absence]]:
    """Load the absences of the given employees in one query."""
    grouped: dict[str, list[Absence]] = defaultdict(list)
    if not registrations:
        return grouped
    result = await session.execute(
        select(Absence)
        .where(col(Absence.registration).in_(registrations))
        .order_by(col(Absence.start_date))
    )
    for absence in result.scalars().all():
        grouped[absence.registration].append(absence)
    return grouped


async def fetch_candidates(
    session: AsyncSession,
    notice_marker: str,
) -> tuple[list[Employee], dict[str, list[Absence]]]:
    """Fetch distribution candidates ordered by deadline, most urgent first."""
    pattern = f"%{notice_marker.lower()}%"
    result = await session.execute(
        select(Employee)
        .where(
            col(Employee.status) == EmployeeStatus.ACTIVE.value,
            col(Employee.vacation_deadline).is_not(None),
            or_(
                col(Employee.absence_status).is_(None),
                func.lower(col(Employee.absence_status)).not_like(pattern),
            ),
        )
        .order_by(
            col(Employee.vacation_deadline),
            col(Employee.created_at),
            col(Employee.registration),
        )
    )
    employees = list(result.scalars().all())
    absences = await fetch_absences_by_registration(session, [e.registration for e in employees])
    return employees, absences
