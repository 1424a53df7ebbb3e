"""Dashboard summary counts."""

from __future__ import annotations

from datetime import date, timedelta
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlmodel import col

from vacation_planner.models.employee import Employee
from vacation_planner.models.enums import EmployeeStatus, PlanStatus, VacationStatus
from vacation_planner.models.plan import VacationPlan
from vacation_planner.models.vacation import VacationPeriod
from vacation_planner.schemas.dashboard import DashboardSummaryResponse
from vacation_planner.schemas.plan import PlanResponse

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

IMMINENT_DAYS = 30
UPCOMING_DAYS = 90


async def _count_active_employees(session: AsyncSession, *conditions) -> int:
    result = await session.execute(
        select(func.count())
        .select_from(Employee)
        .where(col(Employee.status) == EmployeeStatus.ACTIVE.value, *conditions)
    )
    return result.scalar_one()


async def get_summary(session: AsyncSession, *, today: date | None = None) -> DashboardSummaryResponse:
    """Active headcount, the current plan and deadline risk counts.

    Deadline windows are inclusive on both ends: a deadline on ``today`` or on
    ``today + 30`` counts as due within 30 days. Only active employees count.
    """
    if today is None:
        today = date.today()

    active_employees = await _count_active_employees(session)
    expired = await _count_active_employees(session, col(Employee.vacation_deadline) < today)
    due_30 = await _count_active_employees(
        session,
        col(Employee.vacation_deadline) >= today,
        col(Employee.vacation_deadline) <= today + timedelta(days=IMMINENT_DAYS),
    )
    due_90 = await _count_active_employees(
        session,
        col(Employee.vacation_deadline) >= today,
        col(Employee.vacation_deadline) <= today + timedelta(days=UPCOMING_DAYS),
    )

    pending = await session.execute(
        select(func.count())
        .select_from(VacationPeriod)
        .where(col(VacationPeriod.status) == VacationStatus.REQUESTED.value)
    )

    plan_result = await session.execute(
        select(VacationPlan)
        .where(col(VacationPlan.status) == PlanStatus.ACTIVE.value)
        .order_by(col(VacationPlan.created_at).desc())
        .limit(1)
    )
    plan = plan_result.scalars().first()

    return DashboardSummaryResponse(
        active_employees=active_employees,
        active_plan=(
            PlanResponse(
                id=plan.id,
                year=plan.year,
                status=PlanStatus(plan.status),
                description=plan.description,
                created_at=plan.created_at,
            )
            if plan is not None
            else None
        ),
        expired_deadlines=expired,
        due_within_30_days=due_30,
        due_within_90_days=due_90,
        pending_requests=pending.scalar_one(),
    )
