from __future__ import annotations

from datetime import date, timedelta

from vacation_planner.models.absence import Absence
from vacation_planner.models.employee import Employee
from vacation_planner.models.enums import EmployeeStatus
from vacation_planner.services.eligibility import (
    LONG_ABSENCE_REASON,
    fetch_candidates,
    filter_eligible,
    has_active_long_absence,
    is_notice_status,
)

TODAY = date(2026, 3, 2)
MARKER = "aviso prévio"


def _employee(registration: str, **fields: object) -> Employee:
    defaults: dict = {
        "name": f"Employee {registration}",
        "admission_date": date(2020, 1, 10),
        "vacation_deadline": date(2026, 12, 9),
    }
    defaults.update(fields)
    return Employee(registration=registration, **defaults)


def _absence(start: date, end: date | None, reason: str = "Doença") -> Absence:
    return Absence(registration="x", reason=reason, start_date=start, end_date=end)


def test_notice_status_is_case_insensitive() -> None:
    assert is_notice_status("Em AVISO PRÉVIO trabalhado", MARKER)
    assert not is_notice_status("Férias", MARKER)
    assert not is_notice_status(None, MARKER)


def test_long_ongoing_absence() -> None:
    assert has_active_long_absence([_absence(TODAY - timedelta(days=3), TODAY + timedelta(days=20))], TODAY)


def test_short_ongoing_absence_is_not_long() -> None:
    assert not has_active_long_absence([_absence(TODAY - timedelta(days=3), TODAY + timedelta(days=12))], TODAY)


def test_exactly_fifteen_days_is_not_long() -> None:
    assert not has_active_long_absence([_absence(TODAY, TODAY + timedelta(days=15))], TODAY)


def test_finished_absence_is_not_active() -> None:
    assert not has_active_long_absence([_absence(TODAY - timedelta(days=60), TODAY)], TODAY)


def test_open_ended_absence_is_long() -> None:
    assert has_active_long_absence([_absence(TODAY - timedelta(days=1), None)], TODAY)


def test_filter_eligible_applies_inclusion_rules_and_records_exclusions() -> None:
    employees = [
        _employee("1"),
        _employee("2", status=EmployeeStatus.INACTIVE),
        _employee("3", vacation_deadline=None),
        _employee("4", absence_status="Aviso prévio indenizado"),
        _employee("5", name="Carlos"),
        _employee("6"),
    ]
    absences = {"5": [_absence(TODAY - timedelta(days=10), None)]}

    result = filter_eligible(employees, absences, TODAY, MARKER)

    assert [e.registration for e in result.candidates] == ["1", "6"]
    assert len(result.excluded) == 1
    assert result.excluded[0].registration == "5"
    assert result.excluded[0].name == "Carlos"
    assert result.excluded[0].reason == LONG_ABSENCE_REASON


async def test_fetch_candidates_orders_by_deadline(db_session, make_employee) -> None:
    await make_employee("late", vacation_deadline=date(2026, 12, 1))
    await make_employee("early", vacation_deadline=date(2026, 6, 1))
    await make_employee("inactive", status=EmployeeStatus.INACTIVE.value)
    await make_employee("notice", absence_status="aviso prévio")
    await make_employee(
        "absent",
        vacation_deadline=date(2026, 9, 1),
        absences=[{"reason": "Doença", "start_date": TODAY, "end_date": None}],
    )

    employees, absences = await fetch_candidates(db_session, MARKER)

    assert [e.registration for e in employees] == ["early", "absent", "late"]
    assert [a.reason for a in absences["absent"]] == ["Doença"]
    assert absences["early"] == []
