"""Tests for acquisition period, deadline and balance computation."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import select
from sqlmodel import col

from vacation_planner.exceptions import NotFoundError
from vacation_planner.models.absence import Absence
from vacation_planner.models.audit import AuditLog
from vacation_planner.models.enums import AbsenceCategory, AuditAction
from vacation_planner.services.accrual import (
    add_months,
    add_years,
    categorize_absence,
    compute_acquisition_period,
    default_acquisition_start,
    recompute_acquisition_period,
    vacation_balance_for,
    vacation_deadline_for,
)

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

ADMISSION = date(2020, 1, 10)
TODAY = date(2025, 3, 1)


def _absence(reason: str, start: date, end: date | None, *, affects_period: bool = True) -> Absence:
    return Absence(registration="1001", reason=reason, start_date=start, end_date=end, affects_period=affects_period)


# ---------------------------------------------------------------------------
# Calendar helpers
# ---------------------------------------------------------------------------


def test_add_months_clamps_to_month_end() -> None:
    assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert add_months(date(2025, 1, 31), 1) == date(2025, 2, 28)
    assert add_months(date(2025, 11, 15), 3) == date(2026, 2, 15)


def test_add_years_from_leap_day() -> None:
    assert add_years(date(2024, 2, 29), 1) == date(2025, 2, 28)
    assert add_years(date(2025, 3, 1), -1) == date(2024, 3, 1)


def test_deadline_is_eleven_months_after_period_end() -> None:
    assert vacation_deadline_for(date(2026, 1, 9)) == date(2026, 12, 9)


def test_default_start_is_latest_past_anniversary() -> None:
    assert default_acquisition_start(ADMISSION, TODAY) == date(2025, 1, 10)
    assert default_acquisition_start(ADMISSION, date(2025, 1, 9)) == date(2024, 1, 10)
    assert default_acquisition_start(ADMISSION, date(2025, 1, 10)) == date(2025, 1, 10)


# ---------------------------------------------------------------------------
# Balance tiers
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("absences", "expected"),
    [(0, 30), (5, 30), (6, 24), (14, 24), (15, 18), (23, 18), (24, 12), (32, 12), (33, 0), (100, 0)],
)
def test_vacation_balance_tiers(absences: int, expected: int) -> None:
    assert vacation_balance_for(absences) == expected


# ---------------------------------------------------------------------------
# Absence categories
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("reason", "expected"),
    [
        ("Doença", AbsenceCategory.ILLNESS),
        ("AUXÍLIO DOENÇA", AbsenceCategory.ILLNESS),
        ("Acidente de trabalho", AbsenceCategory.ILLNESS),
        ("Licença não remunerada", AbsenceCategory.UNPAID_LEAVE),
        ("Cárcere", AbsenceCategory.UNPAID_LEAVE),
        ("Licença maternidade", AbsenceCategory.OTHER),
    ],
)
def test_categorize_absence(reason: str, expected: AbsenceCategory) -> None:
    assert categorize_absence(reason) == expected


# ---------------------------------------------------------------------------
# Acquisition period
# ---------------------------------------------------------------------------


def test_period_without_absences() -> None:
    period = compute_acquisition_period(ADMISSION, [], 0, TODAY)
    assert period.start == date(2025, 1, 10)
    assert period.end == date(2026, 1, 9)
    assert period.deadline == date(2026, 12, 9)
    assert period.balance == 30
    assert period.reset_by_illness is False


def test_unexcused_absences_reduce_balance() -> None:
    period = compute_acquisition_period(ADMISSION, [], 10, TODAY)
    assert period.balance == 24
    assert period.unexcused_absences == 10


def test_illness_over_180_days_restarts_period() -> None:
    absences = [
        _absence("Doença", date(2024, 1, 1), date(2024, 4, 1)),  # 91 days
        _absence("Acidente de trabalho", date(2024, 5, 1), date(2024, 8, 1)),  # 92 days
    ]
    period = compute_acquisition_period(ADMISSION, absences, 20, TODAY)
    assert period.reset_by_illness is True
    assert period.start == date(2024, 8, 2)
    assert period.end == date(2025, 8, 1)
    assert period.deadline == date(2026, 7, 1)
    assert period.unexcused_absences == 0
    assert period.balance == 30


def test_illness_under_threshold_keeps_period() -> None:
    absences = [_absence("Doença", date(2024, 1, 1), date(2024, 3, 1))]
    period = compute_acquisition_period(ADMISSION, absences, 0, TODAY)
    assert period.reset_by_illness is False
    assert period.start == date(2025, 1, 10)


def test_open_illness_counts_until_today() -> None:
    absences = [_absence("Doença", date(2024, 8, 1), None)]  # 212 days by TODAY
    period = compute_acquisition_period(ADMISSION, absences, 0, TODAY)
    assert period.start == date(2025, 3, 2)
    assert period.end == date(2026, 3, 1)


def test_illness_order_does_not_depend_on_input_order() -> None:
    early = _absence("Doença", date(2024, 1, 1), date(2024, 4, 1))
    late = _absence("Doença", date(2024, 5, 1), date(2024, 8, 1))
    assert compute_acquisition_period(ADMISSION, [late, early], 0, TODAY).start == date(2024, 8, 2)


def test_illness_before_current_window_still_counts() -> None:
    # Years before the default 2025-01-10 window, yet still part of the running total.
    absences = [_absence("Doença", date(2021, 1, 1), date(2021, 7, 1))]  # 181 days
    period = compute_acquisition_period(ADMISSION, absences, 0, TODAY)
    assert period.reset_by_illness is True
    assert period.start == date(2021, 7, 2)
    assert period.deadline < TODAY


def test_unpaid_leave_inside_period_extends_end() -> None:
    absences = [_absence("Licença não remunerada", date(2025, 2, 1), date(2025, 2, 11))]
    period = compute_acquisition_period(ADMISSION, absences, 0, TODAY)
    assert period.start == date(2025, 1, 10)
    assert period.end == date(2026, 1, 19)
    assert period.deadline == date(2026, 12, 19)


def test_unpaid_leave_before_period_is_ignored() -> None:
    absences = [_absence("Licença não remunerada", date(2024, 12, 1), date(2024, 12, 31))]
    period = compute_acquisition_period(ADMISSION, absences, 0, TODAY)
    assert period.end == date(2026, 1, 9)


def test_absences_not_affecting_period_are_ignored() -> None:
    absences = [
        _absence("Doença", date(2024, 1, 1), date(2024, 12, 31), affects_period=False),
        _absence("Licença não remunerada", date(2025, 2, 1), date(2025, 3, 1), affects_period=False),
    ]
    period = compute_acquisition_period(ADMISSION, absences, 0, TODAY)
    assert period.start == date(2025, 1, 10)
    assert period.end == date(2026, 1, 9)


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------


async def test_recompute_persists_and_audits(db_session: AsyncSession, make_employee) -> None:
    await make_employee(
        "1001",
        today=TODAY,
        absences=[
            {"reason": "Doença", "start_date": date(2024, 1, 1), "end_date": date(2024, 4, 1)},
            {"reason": "Doença", "start_date": date(2024, 5, 1), "end_date": date(2024, 8, 1)},
        ],
    )

    employee = await recompute_acquisition_period(db_session, "1001", today=TODAY, actor="hr-1")

    assert employee.acquisition_start == date(2024, 8, 2)
    assert employee.vacation_deadline == date(2026, 7, 1)
    result = await db_session.execute(
        select(AuditLog).where(col(AuditLog.entity_id) == "1001", col(AuditLog.action) == AuditAction.RECOMPUTE)
    )
    entry = result.scalars().one()
    assert entry.actor == "hr-1"
    assert entry.before_json["acquisition_start"] == "2025-01-10"
    assert entry.after_json["acquisition_start"] == "2024-08-02"


async def test_recompute_unknown_employee(db_session: AsyncSession) -> None:
    with pytest.raises(NotFoundError):
        await recompute_acquisition_period(db_session, "missing", today=TODAY)
