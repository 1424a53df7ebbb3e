"""Tests for cancelling upcoming vacations that collide with long absences."""

from __future__ import annotations

from datetime import date, timedelta
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlmodel import col

from vacation_planner.models.absence import Absence
from vacation_planner.models.audit import AuditLog
from vacation_planner.models.enums import VacationStatus
from vacation_planner.models.vacation import VacationPeriod
from vacation_planner.services.reconciliation import (
    cancellation_note,
    find_conflicting_absence,
    reconcile_conflicts,
)

if TYPE_CHECKING:
    from httpx import AsyncClient
    from sqlalchemy.ext.asyncio import AsyncSession

TODAY = date(2026, 3, 2)


async def _vacation(
    db_session: AsyncSession,
    registration: str,
    start: date,
    status: VacationStatus = VacationStatus.PLANNED,
) -> VacationPeriod:
    vacation = VacationPeriod(
        registration=registration,
        start_date=start,
        end_date=start + timedelta(days=29),
        days=30,
        status=status.value,
    )
    db_session.add(vacation)
    await db_session.commit()
    return vacation


async def _status_of(db_session: AsyncSession, vacation: VacationPeriod) -> VacationPeriod:
    result = await db_session.execute(
        select(VacationPeriod).where(col(VacationPeriod.id) == vacation.id).execution_options(populate_existing=True)
    )
    return result.scalars().one()


def _absence(start: date, end: date | None) -> Absence:
    return Absence(registration="1", reason="Doença", start_date=start, end_date=end)


def test_conflict_requires_covering_long_absence() -> None:
    long_absence = _absence(date(2026, 3, 5), date(2026, 3, 31))
    assert find_conflicting_absence(date(2026, 3, 10), [long_absence]) is long_absence
    assert find_conflicting_absence(date(2026, 4, 1), [long_absence]) is None
    assert find_conflicting_absence(date(2026, 3, 10), [_absence(date(2026, 3, 5), date(2026, 3, 20))]) is None


def test_open_absence_conflicts() -> None:
    open_absence = _absence(date(2026, 3, 1), None)
    assert find_conflicting_absence(date(2030, 1, 1), [open_absence]) is open_absence


def test_cancellation_note_mentions_date() -> None:
    assert "02/03/2026" in cancellation_note(TODAY)


async def test_reconcile_cancels_only_conflicting_upcoming_vacations(
    db_session: AsyncSession, make_employee
) -> None:
    long_absence = {"reason": "Doença", "start_date": date(2026, 3, 5), "end_date": date(2026, 4, 30)}
    await make_employee("long", absences=[long_absence])
    short_absence = {"reason": "Doença", "start_date": date(2026, 3, 18), "end_date": date(2026, 3, 25)}
    await make_employee("short", absences=[short_absence])
    await make_employee("open", absences=[{"reason": "Cárcere", "start_date": date(2026, 3, 1), "end_date": None}])
    await make_employee("free")

    cancelled = await _vacation(db_session, "long", date(2026, 3, 10))
    confirmed = await _vacation(db_session, "open", date(2026, 3, 12), VacationStatus.CONFIRMED)
    short = await _vacation(db_session, "short", date(2026, 3, 20))
    beyond_window = await _vacation(db_session, "long", date(2026, 4, 15))
    requested = await _vacation(db_session, "long", date(2026, 3, 11), VacationStatus.REQUESTED)
    free = await _vacation(db_session, "free", date(2026, 3, 10))

    result = await reconcile_conflicts(db_session, today=TODAY, window_days=30)

    assert result.cancelled_count == 2
    assert set(result.cancelled_ids) == {cancelled.id, confirmed.id}
    for vacation in (cancelled, confirmed):
        reloaded = await _status_of(db_session, vacation)
        assert reloaded.status == VacationStatus.CANCELLED
        assert reloaded.note == cancellation_note(TODAY)
    for vacation, expected in (
        (short, VacationStatus.PLANNED),
        (beyond_window, VacationStatus.PLANNED),
        (requested, VacationStatus.REQUESTED),
        (free, VacationStatus.PLANNED),
    ):
        assert (await _status_of(db_session, vacation)).status == expected

    audit = await db_session.execute(select(AuditLog).where(col(AuditLog.action) == "CANCEL"))
    assert {e.entity_id for e in audit.scalars().all()} == {str(cancelled.id), str(confirmed.id)}


async def test_reconcile_is_idempotent(db_session: AsyncSession, make_employee) -> None:
    await make_employee("1", absences=[{"reason": "Doença", "start_date": date(2026, 3, 1), "end_date": None}])
    await _vacation(db_session, "1", date(2026, 3, 10))

    first = await reconcile_conflicts(db_session, today=TODAY, window_days=30)
    second = await reconcile_conflicts(db_session, today=TODAY, window_days=30)

    assert first.cancelled_count == 1
    assert second.cancelled_count == 0


async def test_past_vacations_are_not_touched(db_session: AsyncSession, make_employee) -> None:
    await make_employee("1", absences=[{"reason": "Doença", "start_date": date(2026, 1, 1), "end_date": None}])
    past = await _vacation(db_session, "1", TODAY - timedelta(days=1))

    result = await reconcile_conflicts(db_session, today=TODAY, window_days=30)

    assert result.cancelled_count == 0
    assert (await _status_of(db_session, past)).status == VacationStatus.PLANNED


async def test_reconcile_endpoint(async_client: AsyncClient, db_session: AsyncSession, make_employee) -> None:
    today = date.today()
    await make_employee("1", absences=[{"reason": "Doença", "start_date": today, "end_date": None}])
    vacation = await _vacation(db_session, "1", today + timedelta(days=3))

    resp = await async_client.post("/jobs/reconcile-conflicts")

    assert resp.status_code == 200
    assert resp.json() == {"cancelled_count": 1, "cancelled_ids": [str(vacation.id)]}


async def test_window_end_is_inclusive(db_session: AsyncSession, make_employee) -> None:
    await make_employee("1", absences=[{"reason": "Doença", "start_date": TODAY, "end_date": None}])
    on_edge = await _vacation(db_session, "1", TODAY + timedelta(days=30))
    past_edge = await _vacation(db_session, "1", TODAY + timedelta(days=31))

    result = await reconcile_conflicts(db_session, today=TODAY, window_days=30)

    assert result.cancelled_ids == [on_edge.id]
    assert (await _status_of(db_session, past_edge)).status == VacationStatus.PLANNED
