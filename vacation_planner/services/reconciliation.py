"""Cancellation of upcoming vacations that collide with long absences."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import TYPE_CHECKING

from sqlalchemy import select, update
from sqlmodel import col

from vacation_planner.config import get_settings
from vacation_planner.models.enums import AuditAction, AuditEntityType, VacationStatus
from vacation_planner.models.vacation import VacationPeriod
from vacation_planner.services.audit import SYSTEM_ACTOR, write_audit_log
from vacation_planner.services.eligibility import LONG_ABSENCE_THRESHOLD_DAYS, fetch_absences_by_registration

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from vacation_planner.models.absence import Absence

logger = logging.getLogger(__name__)

OPEN_ABSENCE_SENTINEL = date(9999, 12, 31)
_RECONCILABLE_STATUSES = (VacationStatus.PLANNED.value, VacationStatus.CONFIRMED.value)


@dataclass
class ReconciliationResult:
    """Summary of a reconciliation run."""

    cancelled_count: int = 0
    cancelled_ids: list[uuid.UUID] = field(default_factory=list)


def find_conflicting_absence(vacation_start: date, absences: Sequence[Absence]) -> Absence | None:
    """First absence covering ``vacation_start`` that lasts more than 15 days."""
    for absence in absences:
        absence_end = absence.end_date or OPEN_ABSENCE_SENTINEL
        if not absence.start_date <= vacation_start <= absence_end:
            continue
        if (absence_end - absence.start_date).days > LONG_ABSENCE_THRESHOLD_DAYS:
            return absence
    return None


def find_conflicts(
    vacations: Sequence[VacationPeriod],
    absences_by_registration: Mapping[str, Sequence[Absence]],
) -> list[tuple[VacationPeriod, Absence]]:
    """Pair each conflicting vacation with the absence that invalidates it."""
    conflicts: list[tuple[VacationPeriod, Absence]] = []
    for vacation in vacations:
        absence = find_conflicting_absence(vacation.start_date, absences_by_registration.get(vacation.registration, ()))
        if absence is not None:
            conflicts.append((vacation, absence))
    return conflicts


def cancellation_note(today: date) -> str:
    return (
        f"Cancelled automatically on {today.strftime('%d/%m/%Y')} "
        f"due to a conflict with an absence longer than {LONG_ABSENCE_THRESHOLD_DAYS} days."
    )


async def reconcile_conflicts(
    session: AsyncSession,
    *,
    today: date | None = None,
    window_days: int | None = None,
) -> ReconciliationResult:
    """Cancel PLANNED/CONFIRMED vacations starting soon that overlap a long absence.

    Only vacations starting within ``window_days`` of today (inclusive) are
    checked. Already-cancelled vacations are never selected, so repeated runs
    are idempotent.
    """
    if today is None:
        today = date.today()
    if window_days is None:
        window_days = get_settings().reconcile_window_days

    window_end = today + timedelta(days=window_days)
    logger.info("Checking vacations starting between %s and %s for absence conflicts", today, window_end)

    result = await session.execute(
        select(VacationPeriod)
        .where(
            col(VacationPeriod.status).in_(_RECONCILABLE_STATUSES),
            col(VacationPeriod.start_date) >= today,
            col(VacationPeriod.start_date) <= window_end,
        )
        .order_by(col(VacationPeriod.start_date))
    )
    vacations = list(result.scalars().all())
    if not vacations:
        logger.info("No upcoming vacations to check")
        return ReconciliationResult()

    absences = await fetch_absences_by_registration(session, sorted({v.registration for v in vacations}))
    conflicts = find_conflicts(vacations, absences)
    if not conflicts:
        logger.info("Checked %d vacations, no conflicts", len(vacations))
        return ReconciliationResult()

    for vacation, absence in conflicts:
        logger.info(
            "Conflict: vacation %s of %s starts during a %d-day absence (%s)",
            vacation.id,
            vacation.registration,
            ((absence.end_date or OPEN_ABSENCE_SENTINEL) - absence.start_date).days,
            absence.reason,
        )

    cancelled_ids = [vacation.id for vacation, _ in conflicts]
    note = cancellation_note(today)
    await session.execute(
        update(VacationPeriod)
        .where(col(VacationPeriod.id).in_(cancelled_ids))
        .values(status=VacationStatus.CANCELLED.value, note=note)
    )

    for vacation, absence in conflicts:
        await write_audit_log(
            session,
            actor=SYSTEM_ACTOR,
            entity_type=AuditEntityType.VACATION_PERIOD,
            entity_id=vacation.id,
            action=AuditAction.CANCEL,
            after_json={"status": VacationStatus.CANCELLED.value, "note": note, "absence_id": str(absence.id)},
        )

    await session.commit()
    logger.info("Reconciliation complete: %d vacations cancelled", len(cancelled_ids))
    return ReconciliationResult(cancelled_count=len(cancelled_ids), cancelled_ids=cancelled_ids)
