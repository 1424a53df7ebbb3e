# ruff: noqa: TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter, status

from vacation_planner.api.deps import ActorDep
from vacation_planner.db import SessionDep
from vacation_planner.schemas.absence import AbsenceResponse, CreateAbsenceRequest, UpdateAbsenceRequest
from vacation_planner.services import absence as absence_service

employee_absences_router = APIRouter(prefix="/employees/{registration}/absences", tags=["absences"])
absences_router = APIRouter(prefix="/absences", tags=["absences"])


@employee_absences_router.post("", response_model=AbsenceResponse, status_code=status.HTTP_201_CREATED)
async def create_absence(
    registration: str,
    payload: CreateAbsenceRequest,
    session: SessionDep,
    actor: ActorDep,
) -> AbsenceResponse:
    """Record an absence. The employee's acquisition period is recomputed."""
    return await absence_service.create_absence(session, registration, payload, actor)


@absences_router.put("/{absence_id}", response_model=AbsenceResponse)
async def update_absence(
    absence_id: uuid.UUID,
    payload: UpdateAbsenceRequest,
    session: SessionDep,
    actor: ActorDep,
) -> AbsenceResponse:
    return await absence_service.update_absence(session, absence_id, payload, actor)


@absences_router.delete("/{absence_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_absence(
    absence_id: uuid.UUID,
    session: SessionDep,
    actor: ActorDep,
) -> None:
    await absence_service.delete_absence(session, absence_id, actor)
