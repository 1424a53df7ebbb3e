from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy.exc import IntegrityError

from vacation_planner.exceptions import ConflictError
from vacation_planner.models.enums import AuditAction, AuditEntityType, SubstituteStatus
from vacation_planner.models.substitute import Substitute
from vacation_planner.schemas.substitute import SubstituteResponse
from vacation_planner.services.audit import model_to_audit_dict, write_audit_log
from vacation_planner.services.employee import get_employee_or_404

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from vacation_planner.schemas.substitute import CreateSubstituteRequest


async def create_substitute(
    session: AsyncSession,
    payload: CreateSubstituteRequest,
    actor: str,
) -> SubstituteResponse:
    """Mark an employee as available to cover vacancies."""
    await get_employee_or_404(session, payload.registration)

    substitute = Substitute(registration=payload.registration, eligible_roles=payload.eligible_roles)
    session.add(substitute)

    try:
        await session.flush()
    except IntegrityError:
        await session.rollback()
        raise ConflictError(f"Employee {payload.registration} is already a substitute") from None

    await write_audit_log(
        session,
        actor=actor,
        entity_type=AuditEntityType.SUBSTITUTE,
        entity_id=substitute.id,
        action=AuditAction.CREATE,
        after_json=model_to_audit_dict(substitute),
    )

    await session.commit()
    await session.refresh(substitute)
    return SubstituteResponse(
        id=substitute.id,
        registration=substitute.registration,
        eligible_roles=substitute.eligible_roles,
        status=SubstituteStatus(substitute.status),
    )
