# ruff: noqa: TC003
from __future__ import annotations

import uuid

from pydantic import BaseModel, Field

from vacation_planner.models.enums import SubstituteStatus


class CreateSubstituteRequest(BaseModel):
    """Request body for marking an employee as a substitute."""

    registration: str = Field(min_length=1, max_length=50)
    eligible_roles: list[str] | None = None


class SubstituteResponse(BaseModel):
    """Response schema for a substitute."""

    id: uuid.UUID
    registration: str
    eligible_roles: list[str] | None
    status: SubstituteStatus
