# ruff: noqa: B008
from __future__ import annotations

from fastapi import APIRouter, Query

from vacation_planner.db import SessionDep
from vacation_planner.schemas.alert import RescheduleCandidateResponse, UpcomingReturnResponse
from vacation_planner.services import alerts as alerts_service

alerts_router = APIRouter(prefix="/alerts", tags=["alerts"])


@alerts_router.get("/upcoming-returns", response_model=list[UpcomingReturnResponse])
async def upcoming_returns(
    session: SessionDep,
    days: int = Query(default=7),
) -> list[UpcomingReturnResponse]:
    """Employees coming back from an absence within ``days`` days."""
    return await alerts_service.find_upcoming_returns(session, days)


@alerts_router.get("/needs-reschedule", response_model=list[RescheduleCandidateResponse])
async def needs_reschedule(
    session: SessionDep,
    period: int = Query(default=30),
) -> list[RescheduleCandidateResponse]:
    """Employees recently back from an absence with no planned vacation ahead."""
    return await alerts_service.find_needing_reschedule(session, period)
