from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from vacation_planner.exceptions import ConflictError, NotFoundError
from vacation_planner.models.employee import Employee
from vacation_planner.models.enums import AuditAction, AuditEntityType, EmployeeStatus
from vacation_planner.schemas.employee import EmployeeResponse
from vacation_planner.services.accrual import apply_acquisition_period, compute_acquisition_period
from vacation_planner.services.audit import model_to_audit_dict, write_audit_log

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from vacation_planner.schemas.employee import CreateEmployeeRequest


def build_employee_response(employee: Employee) -> EmployeeResponse:
    return EmployeeResponse(
        registration=employee.registration,
        name=employee.name,
        admission_date=employee.admission_date,
        status=EmployeeStatus(employee.status),
        acquisition_start=employee.acquisition_start,
        acquisition_end=employee.acquisition_end,
        vacation_deadline=employee.vacation_deadline,
        unexcused_absences=employee.unexcused_absences,
        vacation_balance=employee.vacation_balance,
        work_location=employee.work_location,
        union_convention=employee.union_convention,
        absence_status=employee.absence_status,
        created_at=employee.created_at,
    )


async def get_employee_or_404(session: AsyncSession, registration: str) -> Employee:
    """Fetch an employee by registration or raise 404."""
    employee = await session.get(Employee, registration)
    if employee is None:
        raise NotFoundError(f"Employee {registration} not found")
    return employee


async def create_employee(
    session: AsyncSession,
    payload: CreateEmployeeRequest,
    actor: str,
    *,
    today: date | None = None,
) -> EmployeeResponse:
    """Register an employee and derive their initial acquisition period."""
    if today is None:
        today = date.today()

    if await session.get(Employee, payload.registration) is not None:
        raise ConflictError(f"Employee {payload.registration} already exists")

    employee = Employee(
        registration=payload.registration,
        name=payload.name,
        admission_date=payload.admission_date,
        status=payload.status.value,
        unexcused_absences=payload.unexcused_absences,
        work_location=payload.work_location,
        union_convention=payload.union_convention,
        absence_status=payload.absence_status,
    )
    period = compute_acquisition_period(employee.admission_date, [], employee.unexcused_absences, today)
    apply_acquisition_period(employee, period)
    session.add(employee)
    await session.flush()

    await write_audit_log(
        session,
        actor=actor,
        entity_type=AuditEntityType.EMPLOYEE,
        entity_id=employee.registration,
        action=AuditAction.CREATE,
        after_json=model_to_audit_dict(employee),
    )

    await session.commit()
    await session.refresh(employee)
    return build_employee_response(employee)
