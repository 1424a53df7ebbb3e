# ruff: noqa: TC003
from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlmodel import col

from vacation_planner.exceptions import NotFoundError
from vacation_planner.models.enums import AuditAction, AuditEntityType, PlanStatus
from vacation_planner.models.plan import VacationPlan
from vacation_planner.schemas.plan import PlanListResponse, PlanResponse
from vacation_planner.services.audit import model_to_audit_dict, write_audit_log
from vacation_planner.services.distribution import archive_active_plans, lock_plan_year, year_locks

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


def _build_plan_response(plan: VacationPlan) -> PlanResponse:
    return PlanResponse(
        id=plan.id,
        year=plan.year,
        status=PlanStatus(plan.status),
        description=plan.description,
        created_at=plan.created_at,
    )


async def list_plans(session: AsyncSession, year: int | None = None) -> PlanListResponse:
    """List vacation plans, newest first, optionally for one year."""
    query = select(VacationPlan)
    if year is not None:
        query = query.where(col(VacationPlan.year) == year)
    result = await session.execute(query.order_by(col(VacationPlan.created_at).desc()))
    plans = list(result.scalars().all())
    return PlanListResponse(items=[_build_plan_response(p) for p in plans], total=len(plans))


async def activate_plan(session: AsyncSession, plan_id: uuid.UUID, actor: str) -> PlanResponse:
    """Restore an archived plan, archiving whichever plan was active for its year."""
    plan = await session.get(VacationPlan, plan_id)
    if plan is None:
        raise NotFoundError("Vacation plan not found")
    if plan.status == PlanStatus.ACTIVE:
        return _build_plan_response(plan)

    async with year_locks.hold(plan.year):
        await lock_plan_year(session, plan.year)
        before = model_to_audit_dict(plan)
        await archive_active_plans(session, plan.year)
        plan.status = PlanStatus.ACTIVE.value
        await session.flush()

        await write_audit_log(
            session,
            actor=actor,
            entity_type=AuditEntityType.VACATION_PLAN,
            entity_id=plan.id,
            action=AuditAction.ACTIVATE,
            before_json=before,
            after_json=model_to_audit_dict(plan),
        )
        await session.commit()

    await session.refresh(plan)
    return _build_plan_response(plan)
