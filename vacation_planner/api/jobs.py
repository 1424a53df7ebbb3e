from __future__ import annotations

from fastapi import APIRouter

from vacation_planner.db import SessionDep
from vacation_planner.schemas.vacation import ReconciliationResponse
from vacation_planner.services.reconciliation import reconcile_conflicts

jobs_router = APIRouter(prefix="/jobs", tags=["jobs"])


@jobs_router.post("/reconcile-conflicts", response_model=ReconciliationResponse)
async def trigger_reconciliation(session: SessionDep) -> ReconciliationResponse:
    """Run the absence conflict check now instead of waiting for the worker."""
    result = await reconcile_conflicts(session)
    return ReconciliationResponse(cancelled_count=result.cancelled_count, cancelled_ids=result.cancelled_ids)
