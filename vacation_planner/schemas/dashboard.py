from __future__ import annotations

from pydantic import BaseModel

from vacation_planner.schemas.plan import PlanResponse


class DashboardSummaryResponse(BaseModel):
    """Headline counts for the planning dashboard."""

    active_employees: int
    active_plan: PlanResponse | None
    expired_deadlines: int
    due_within_30_days: int
    due_within_90_days: int
    pending_requests: int
