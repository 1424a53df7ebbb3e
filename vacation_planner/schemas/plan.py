# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel

from vacation_planner.models.enums import PlanStatus


class PlanResponse(BaseModel):
    """Response schema for a vacation plan."""

    id: uuid.UUID
    year: int
    status: PlanStatus
    description: str | None
    created_at: datetime


class PlanListResponse(BaseModel):
    """List of vacation plans."""

    items: list[PlanResponse]
    total: int
