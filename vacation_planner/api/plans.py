# ruff: noqa: B008, TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter, Query

from vacation_planner.api.deps import ActorDep
from vacation_planner.db import SessionDep
from vacation_planner.schemas.plan import PlanListResponse, PlanResponse
from vacation_planner.services import plan as plan_service

plans_router = APIRouter(prefix="/plans", tags=["plans"])


@plans_router.get("", response_model=PlanListResponse)
async def list_plans(
    session: SessionDep,
    year: int | None = Query(default=None, ge=2000, le=2100),
) -> PlanListResponse:
    """List vacation plans, newest first."""
    return await plan_service.list_plans(session, year)


@plans_router.put("/{plan_id}/activate", response_model=PlanResponse)
async def activate_plan(
    plan_id: uuid.UUID,
    session: SessionDep,
    actor: ActorDep,
) -> PlanResponse:
    """Make an archived plan the active one for its year."""
    return await plan_service.activate_plan(session, plan_id, actor)
