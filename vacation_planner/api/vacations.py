# ruff: noqa: B008, TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter, Query, status

from vacation_planner.api.deps import ActorDep, HolidayProviderDep
from vacation_planner.db import SessionDep
from vacation_planner.models.enums import VacationStatus
from vacation_planner.schemas.vacation import (
    CreateVacationRequest,
    DistributeRequest,
    DistributionResponse,
    ExcludedEmployeeResponse,
    UpdateVacationRequest,
    VacationListResponse,
    VacationResponse,
)
from vacation_planner.services import vacation as vacation_service
from vacation_planner.services.distribution import distribute_vacations

vacations_router = APIRouter(prefix="/vacations", tags=["vacations"])


@vacations_router.post("/distribute", response_model=DistributionResponse, status_code=status.HTTP_201_CREATED)
async def distribute(
    payload: DistributeRequest,
    session: SessionDep,
    holiday_provider: HolidayProviderDep,
    actor: ActorDep,
) -> DistributionResponse:
    """Replace the year's active plan with a freshly computed distribution."""
    result = await distribute_vacations(
        session,
        payload.year,
        payload.description,
        holiday_provider=holiday_provider,
        actor=actor,
    )
    return DistributionResponse(
        plan_id=result.plan_id,
        year=result.year,
        periods_created=result.periods_created,
        excluded=[
            ExcludedEmployeeResponse(registration=e.registration, name=e.name, reason=e.reason)
            for e in result.excluded
        ],
        unscheduled=result.unscheduled,
    )


@vacations_router.get("", response_model=VacationListResponse)
async def list_vacations(
    session: SessionDep,
    active_plan_only: bool = Query(default=False),
    registration: str | None = Query(default=None),
    status_filter: VacationStatus | None = Query(default=None, alias="status"),
) -> VacationListResponse:
    """List vacation periods with optional filters."""
    return await vacation_service.list_vacations(
        session,
        active_plan_only=active_plan_only,
        registration=registration,
        status=status_filter,
    )


@vacations_router.post("", response_model=VacationResponse, status_code=status.HTTP_201_CREATED)
async def create_vacation(
    payload: CreateVacationRequest,
    session: SessionDep,
    actor: ActorDep,
) -> VacationResponse:
    """Enter a vacation by hand."""
    return await vacation_service.create_vacation(session, payload, actor)


@vacations_router.put("/{vacation_id}", response_model=VacationResponse)
async def update_vacation(
    vacation_id: uuid.UUID,
    payload: UpdateVacationRequest,
    session: SessionDep,
    actor: ActorDep,
) -> VacationResponse:
    """Edit a vacation. The period is flagged as manually adjusted."""
    return await vacation_service.update_vacation(session, vacation_id, payload, actor)
