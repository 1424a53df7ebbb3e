from __future__ import annotations

from fastapi import APIRouter, status

from vacation_planner.api.deps import ActorDep
from vacation_planner.db import SessionDep
from vacation_planner.schemas.employee import CreateEmployeeRequest, EmployeeResponse
from vacation_planner.services import employee as employee_service
from vacation_planner.services.accrual import recompute_acquisition_period

employees_router = APIRouter(prefix="/employees", tags=["employees"])


@employees_router.post("", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
async def create_employee(
    payload: CreateEmployeeRequest,
    session: SessionDep,
    actor: ActorDep,
) -> EmployeeResponse:
    """Register an employee and derive their acquisition period."""
    return await employee_service.create_employee(session, payload, actor)


@employees_router.get("/{registration}", response_model=EmployeeResponse)
async def get_employee(registration: str, session: SessionDep) -> EmployeeResponse:
    """Get an employee with their current deadline and balance."""
    employee = await employee_service.get_employee_or_404(session, registration)
    return employee_service.build_employee_response(employee)


@employees_router.post("/{registration}/recompute", response_model=EmployeeResponse)
async def recompute_employee(
    registration: str,
    session: SessionDep,
    actor: ActorDep,
) -> EmployeeResponse:
    """Recompute the acquisition period, deadline and balance from the absence history."""
    employee = await recompute_acquisition_period(session, registration, actor=actor)
    return employee_service.build_employee_response(employee)
