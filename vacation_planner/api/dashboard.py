from __future__ import annotations

from fastapi import APIRouter

from vacation_planner.db import SessionDep
from vacation_planner.schemas.dashboard import DashboardSummaryResponse
from vacation_planner.services import dashboard as dashboard_service

dashboard_router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@dashboard_router.get("/summary", response_model=DashboardSummaryResponse)
async def summary(session: SessionDep) -> DashboardSummaryResponse:
    """Headcount, current plan and vacation deadline risk."""
    return await dashboard_service.get_summary(session)
