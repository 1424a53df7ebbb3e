# ruff: noqa: TC003
"""Manual vacation management: listing, hand entry and edits."""

from __future__ import annotations

import uuid
from datetime import date, timedelta
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlmodel import col

from vacation_planner.exceptions import NotFoundError
from vacation_planner.models.enums import AuditAction, AuditEntityType, PlanStatus, VacationStatus
from vacation_planner.models.plan import VacationPlan
from vacation_planner.models.substitute import Substitute
from vacation_planner.models.vacation import VacationPeriod
from vacation_planner.schemas.vacation import VacationListResponse, VacationResponse
from vacation_planner.services.audit import model_to_audit_dict, write_audit_log
from vacation_planner.services.employee import get_employee_or_404

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from vacation_planner.schemas.vacation import CreateVacationRequest, UpdateVacationRequest


def vacation_end_date(start_date: date, days: int) -> date:
    """Last day of a vacation of ``days`` days starting on ``start_date``."""
    return start_date + timedelta(days=days - 1)


def build_vacation_response(vacation: VacationPeriod) -> VacationResponse:
    return VacationResponse(
        id=vacation.id,
        registration=vacation.registration,
        plan_id=vacation.plan_id,
        start_date=vacation.start_date,
        end_date=vacation.end_date,
        days=vacation.days,
        status=VacationStatus(vacation.status),
        acquisition_start=vacation.acquisition_start,
        acquisition_end=vacation.acquisition_end,
        manual_adjustment=vacation.manual_adjustment,
        needs_replacement=vacation.needs_replacement,
        substitute_id=vacation.substitute_id,
        note=vacation.note,
        created_at=vacation.created_at,
    )


async def _get_vacation_or_404(session: AsyncSession, vacation_id: uuid.UUID) -> VacationPeriod:
    vacation = await session.get(VacationPeriod, vacation_id)
    if vacation is None:
        raise NotFoundError("Vacation period not found")
    return vacation


async def list_vacations(
    session: AsyncSession,
    *,
    active_plan_only: bool = False,
    registration: str | None = None,
    status: VacationStatus | None = None,
) -> VacationListResponse:
    """List vacation periods ordered by start date."""
    query = select(VacationPeriod)
    if active_plan_only:
        query = query.join(VacationPlan, col(VacationPlan.id) == col(VacationPeriod.plan_id)).where(
            col(VacationPlan.status) == PlanStatus.ACTIVE.value
        )
    if registration is not None:
        query = query.where(col(VacationPeriod.registration) == registration)
    if status is not None:
        query = query.where(col(VacationPeriod.status) == status.value)

    result = await session.execute(query.order_by(col(VacationPeriod.start_date), col(VacationPeriod.registration)))
    vacations = list(result.scalars().all())
    return VacationListResponse(items=[build_vacation_response(v) for v in vacations], total=len(vacations))


async def create_vacation(
    session: AsyncSession,
    payload: CreateVacationRequest,
    actor: str,
) -> VacationResponse:
    """Enter a vacation by hand, snapshotting the employee's current period."""
    employee = await get_employee_or_404(session, payload.registration)
    if payload.plan_id is not None and await session.get(VacationPlan, payload.plan_id) is None:
        raise NotFoundError("Vacation plan not found")

    vacation = VacationPeriod(
        registration=employee.registration,
        plan_id=payload.plan_id,
        start_date=payload.start_date,
        end_date=vacation_end_date(payload.start_date, payload.days),
        days=payload.days,
        status=payload.status.value,
        acquisition_start=employee.acquisition_start,
        acquisition_end=employee.acquisition_end,
        manual_adjustment=True,
        needs_replacement=payload.needs_replacement,
        note=payload.note,
    )
    session.add(vacation)
    await session.flush()

    await write_audit_log(
        session,
        actor=actor,
        entity_type=AuditEntityType.VACATION_PERIOD,
        entity_id=vacation.id,
        action=AuditAction.CREATE,
        after_json=model_to_audit_dict(vacation),
    )

    await session.commit()
    await session.refresh(vacation)
    return build_vacation_response(vacation)


async def update_vacation(
    session: AsyncSession,
    vacation_id: uuid.UUID,
    payload: UpdateVacationRequest,
    actor: str,
) -> VacationResponse:
    """Apply a manual edit. The period is flagged as manually adjusted."""
    vacation = await _get_vacation_or_404(session, vacation_id)
    before = model_to_audit_dict(vacation)
    changes = payload.model_dump(exclude_unset=True)

    if changes.get("substitute_id") is not None and await session.get(Substitute, changes["substitute_id"]) is None:
        raise NotFoundError("Substitute not found")

    if changes.get("start_date") is not None:
        vacation.start_date = changes["start_date"]
    if changes.get("days") is not None:
        vacation.days = changes["days"]
    if changes.get("status") is not None:
        vacation.status = VacationStatus(changes["status"]).value
    if changes.get("needs_replacement") is not None:
        vacation.needs_replacement = changes["needs_replacement"]
    if "substitute_id" in changes:
        vacation.substitute_id = changes["substitute_id"]
    if "note" in changes:
        vacation.note = changes["note"]

    vacation.end_date = vacation_end_date(vacation.start_date, vacation.days)
    vacation.manual_adjustment = True
    await session.flush()

    await write_audit_log(
        session,
        actor=actor,
        entity_type=AuditEntityType.VACATION_PERIOD,
        entity_id=vacation.id,
        action=AuditAction.UPDATE,
        before_json=before,
        after_json=model_to_audit_dict(vacation),
    )

    await session.commit()
    await session.refresh(vacation)
    return build_vacation_response(vacation)
