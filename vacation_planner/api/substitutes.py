from __future__ import annotations

from fastapi import APIRouter, status

from vacation_planner.api.deps import ActorDep
from vacation_planner.db import SessionDep
from vacation_planner.schemas.substitute import CreateSubstituteRequest, SubstituteResponse
from vacation_planner.services import substitute as substitute_service

substitutes_router = APIRouter(prefix="/substitutes", tags=["substitutes"])


@substitutes_router.post("", response_model=SubstituteResponse, status_code=status.HTTP_201_CREATED)
async def create_substitute(
    payload: CreateSubstituteRequest,
    session: SessionDep,
    actor: ActorDep,
) -> SubstituteResponse:
    """Register an employee as available to cover vacancies."""
    return await substitute_service.create_substitute(session, payload, actor)
