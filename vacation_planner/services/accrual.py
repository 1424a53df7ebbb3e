"""Accrual engine: acquisition period, vacation deadline and day-balance."""

from __future__ import annotations

import logging
import unicodedata
from calendar import monthrange
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlmodel import col

from vacation_planner.exceptions import NotFoundError
from vacation_planner.models.absence import Absence
from vacation_planner.models.employee import Employee
from vacation_planner.models.enums import AbsenceCategory, AuditAction, AuditEntityType
from vacation_planner.services.audit import SYSTEM_ACTOR, model_to_audit_dict, write_audit_log

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

ILLNESS_RESET_THRESHOLD_DAYS = 180
DEADLINE_MONTHS = 11
DAYS_PER_SERVICE_YEAR = 365.25

_ILLNESS_KEYWORDS = ("doenca", "acidente")
_UNPAID_LEAVE_KEYWORDS = ("licenca nao remunerada", "carcere")

# (max unexcused absences, vacation days), checked in order.
_BALANCE_TIERS: tuple[tuple[int, int], ...] = (
    (5, 30),
    (14, 24),
    (23, 18),
    (32, 12),
)


# ---------------------------------------------------------------------------
# Calendar arithmetic
# ---------------------------------------------------------------------------


def add_months(day: date, months: int) -> date:
    """Shift ``day`` by whole months, clamping to the last day of the month."""
    month_index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    _, days_in_month = monthrange(year, month)
    return date(year, month, min(day.day, days_in_month))


def add_years(day: date, years: int) -> date:
    """Shift ``day`` by whole years (Feb 29 becomes Feb 28)."""
    return add_months(day, years * 12)


def one_year_window_end(start: date) -> date:
    """Last day of the one-year window beginning on ``start``."""
    return add_years(start, 1) - timedelta(days=1)


# ---------------------------------------------------------------------------
# Pure computation helpers (no DB)
# ---------------------------------------------------------------------------


def _normalize(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text.lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def categorize_absence(reason: str) -> AbsenceCategory:
    """Classify an absence by keywords in its free-text reason."""
    normalized = _normalize(reason)
    if any(keyword in normalized for keyword in _ILLNESS_KEYWORDS):
        return AbsenceCategory.ILLNESS
    if any(keyword in normalized for keyword in _UNPAID_LEAVE_KEYWORDS):
        return AbsenceCategory.UNPAID_LEAVE
    return AbsenceCategory.OTHER


def vacation_balance_for(unexcused_absences: int) -> int:
    """Vacation days owed for a number of unexcused absences in the period."""
    for max_absences, days in _BALANCE_TIERS:
        if unexcused_absences <= max_absences:
            return days
    return 0


def vacation_deadline_for(acquisition_end: date) -> date:
    """Latest date by which the period's vacation must be taken."""
    return add_months(acquisition_end, DEADLINE_MONTHS)


def default_acquisition_start(admission_date: date, today: date) -> date:
    """Most recent service anniversary that is not in the future."""
    service_years = int((today - admission_date).days / DAYS_PER_SERVICE_YEAR)
    anniversary = add_years(admission_date, service_years)
    if anniversary > today:
        anniversary = add_years(anniversary, -1)
    return anniversary


@dataclass(frozen=True)
class AcquisitionPeriod:
    """Result of an acquisition-period computation."""

    start: date
    end: date
    deadline: date
    balance: int
    unexcused_absences: int
    reset_by_illness: bool = False


def compute_acquisition_period(
    admission_date: date,
    absences: Iterable[Absence],
    unexcused_absences: int,
    today: date,
) -> AcquisitionPeriod:
    """Compute the acquisition period of an employee from scratch.

    Illness/accident absences are summed; once the sum exceeds 180 days the
    period restarts the day after the absence that crossed the threshold and
    the unexcused-absence count is cleared. Unpaid leave starting inside the
    default period pushes its end back by the leave's duration.
    """
    base_start = default_acquisition_start(admission_date, today)
    base_end = one_year_window_end(base_start)

    illness_days = 0
    extension_days = 0

    relevant = sorted((a for a in absences if a.affects_period), key=lambda a: a.start_date)
    for absence in relevant:
        absence_end = absence.end_date or today
        duration = (absence_end - absence.start_date).days
        category = categorize_absence(absence.reason)

        # Illness days accumulate over the whole history, not only the current window.
        if category == AbsenceCategory.ILLNESS:
            illness_days += duration
            if illness_days > ILLNESS_RESET_THRESHOLD_DAYS:
                start = absence_end + timedelta(days=1)
                end = one_year_window_end(start)
                return AcquisitionPeriod(
                    start=start,
                    end=end,
                    deadline=vacation_deadline_for(end),
                    balance=vacation_balance_for(0),
                    unexcused_absences=0,
                    reset_by_illness=True,
                )
        elif category == AbsenceCategory.UNPAID_LEAVE and base_start <= absence.start_date <= base_end:
            extension_days += duration

    end = base_end + timedelta(days=extension_days)
    return AcquisitionPeriod(
        start=base_start,
        end=end,
        deadline=vacation_deadline_for(end),
        balance=vacation_balance_for(unexcused_absences),
        unexcused_absences=unexcused_absences,
    )


def apply_acquisition_period(employee: Employee, period: AcquisitionPeriod) -> None:
    """Copy the derived fields onto the employee record."""
    employee.acquisition_start = period.start
    employee.acquisition_end = period.end
    employee.vacation_deadline = period.deadline
    employee.vacation_balance = period.balance
    employee.unexcused_absences = period.unexcused_absences


# ---------------------------------------------------------------------------
# DB-backed orchestration
# ---------------------------------------------------------------------------


async def recompute_acquisition_period(
    session: AsyncSession,
    registration: str,
    *,
    today: date | None = None,
    actor: str = SYSTEM_ACTOR,
) -> Employee:
    """Recompute and persist an employee's acquisition period, deadline and balance.

    Raises:
        NotFoundError: no employee has this registration.
    """
    if today is None:
        today = date.today()

    employee = await session.get(Employee, registration)
    if employee is None:
        raise NotFoundError(f"Employee {registration} not found")

    result = await session.execute(select(Absence).where(col(Absence.registration) == registration))
    absences = list(result.scalars().all())

    before = model_to_audit_dict(employee)
    period = compute_acquisition_period(employee.admission_date, absences, employee.unexcused_absences, today)
    apply_acquisition_period(employee, period)
    await session.flush()

    await write_audit_log(
        session,
        actor=actor,
        entity_type=AuditEntityType.EMPLOYEE,
        entity_id=employee.registration,
        action=AuditAction.RECOMPUTE,
        before_json=before,
        after_json=model_to_audit_dict(employee),
    )

    await session.commit()
    await session.refresh(employee)
    logger.info(
        "Recomputed acquisition period for %s: %s..%s deadline=%s balance=%d reset=%s",
        registration,
        period.start,
        period.end,
        period.deadline,
        period.balance,
        period.reset_by_illness,
    )
    return employee
