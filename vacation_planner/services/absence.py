# ruff: noqa: TC003
"""Absence maintenance. Every change re-derives the owner's acquisition period."""

from __future__ import annotations

import uuid
from datetime import date
from typing import TYPE_CHECKING

from vacation_planner.exceptions import InvalidInputError, NotFoundError
from vacation_planner.models.absence import Absence
from vacation_planner.models.enums import AuditAction, AuditEntityType
from vacation_planner.schemas.absence import AbsenceResponse
from vacation_planner.services.accrual import categorize_absence, recompute_acquisition_period
from vacation_planner.services.audit import model_to_audit_dict, write_audit_log
from vacation_planner.services.employee import get_employee_or_404

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from vacation_planner.schemas.absence import CreateAbsenceRequest, UpdateAbsenceRequest


def _build_absence_response(absence: Absence) -> AbsenceResponse:
    return AbsenceResponse(
        id=absence.id,
        registration=absence.registration,
        reason=absence.reason,
        category=categorize_absence(absence.reason),
        start_date=absence.start_date,
        end_date=absence.end_date,
        affects_period=absence.affects_period,
    )


async def _get_absence_or_404(session: AsyncSession, absence_id: uuid.UUID) -> Absence:
    absence = await session.get(Absence, absence_id)
    if absence is None:
        raise NotFoundError("Absence not found")
    return absence


async def create_absence(
    session: AsyncSession,
    registration: str,
    payload: CreateAbsenceRequest,
    actor: str,
    *,
    today: date | None = None,
) -> AbsenceResponse:
    """Record an absence for an employee and recompute their period."""
    await get_employee_or_404(session, registration)

    absence = Absence(
        registration=registration,
        reason=payload.reason,
        start_date=payload.start_date,
        end_date=payload.end_date,
        affects_period=payload.affects_period,
    )
    session.add(absence)
    await session.flush()

    await write_audit_log(
        session,
        actor=actor,
        entity_type=AuditEntityType.ABSENCE,
        entity_id=absence.id,
        action=AuditAction.CREATE,
        after_json=model_to_audit_dict(absence),
    )

    await recompute_acquisition_period(session, registration, today=today, actor=actor)
    await session.refresh(absence)
    return _build_absence_response(absence)


async def update_absence(
    session: AsyncSession,
    absence_id: uuid.UUID,
    payload: UpdateAbsenceRequest,
    actor: str,
    *,
    today: date | None = None,
) -> AbsenceResponse:
    """Apply a partial update to an absence and recompute the owner's period."""
    absence = await _get_absence_or_404(session, absence_id)
    before = model_to_audit_dict(absence)

    for key, value in payload.model_dump(exclude_unset=True).items():
        # Only end_date is nullable; null there reopens the absence.
        if value is None and key != "end_date":
            continue
        setattr(absence, key, value)
    if absence.end_date is not None and absence.end_date < absence.start_date:
        raise InvalidInputError("end_date must be >= start_date")
    await session.flush()

    await write_audit_log(
        session,
        actor=actor,
        entity_type=AuditEntityType.ABSENCE,
        entity_id=absence.id,
        action=AuditAction.UPDATE,
        before_json=before,
        after_json=model_to_audit_dict(absence),
    )

    await recompute_acquisition_period(session, absence.registration, today=today, actor=actor)
    await session.refresh(absence)
    return _build_absence_response(absence)


async def delete_absence(
    session: AsyncSession,
    absence_id: uuid.UUID,
    actor: str,
    *,
    today: date | None = None,
) -> None:
    """Delete an absence and recompute the owner's period."""
    absence = await _get_absence_or_404(session, absence_id)
    registration = absence.registration

    await write_audit_log(
        session,
        actor=actor,
        entity_type=AuditEntityType.ABSENCE,
        entity_id=absence.id,
        action=AuditAction.DELETE,
        before_json=model_to_audit_dict(absence),
    )
    await session.delete(absence)
    await session.flush()

    await recompute_acquisition_period(session, registration, today=today, actor=actor)
