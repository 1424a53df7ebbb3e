# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import date, datetime

from pydantic import BaseModel, Field

from vacation_planner.models.enums import VacationStatus

# ---------------------------------------------------------------------------
# Request payloads
# ---------------------------------------------------------------------------


class DistributeRequest(BaseModel):
    """Request body for POST /vacations/distribute."""

    year: int = Field(ge=2000, le=2100)
    description: str | None = Field(default=None, max_length=255)


class CreateVacationRequest(BaseModel):
    """Request body for entering a vacation by hand."""

    registration: str = Field(min_length=1, max_length=50)
    start_date: date
    days: int = Field(gt=0, le=30)
    plan_id: uuid.UUID | None = None
    status: VacationStatus = VacationStatus.REQUESTED
    needs_replacement: bool = True
    note: str | None = None


class UpdateVacationRequest(BaseModel):
    """Manual edit of a vacation. Omitted fields are left unchanged."""

    start_date: date | None = None
    days: int | None = Field(default=None, gt=0, le=30)
    status: VacationStatus | None = None
    needs_replacement: bool | None = None
    substitute_id: uuid.UUID | None = None
    note: str | None = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class VacationResponse(BaseModel):
    """Response schema for a vacation period."""

    id: uuid.UUID
    registration: str
    plan_id: uuid.UUID | None
    start_date: date
    end_date: date
    days: int
    status: VacationStatus
    acquisition_start: date | None
    acquisition_end: date | None
    manual_adjustment: bool
    needs_replacement: bool
    substitute_id: uuid.UUID | None
    note: str | None
    created_at: datetime


class VacationListResponse(BaseModel):
    """List of vacation periods ordered by start date."""

    items: list[VacationResponse]
    total: int


class ExcludedEmployeeResponse(BaseModel):
    """An employee left out of a distribution run."""

    registration: str
    name: str
    reason: str


class DistributionResponse(BaseModel):
    """Response from the distribution endpoint."""

    plan_id: uuid.UUID
    year: int
    periods_created: int
    excluded: list[ExcludedEmployeeResponse]
    unscheduled: list[str]


class ReconciliationResponse(BaseModel):
    """Response from the conflict reconciliation job."""

    cancelled_count: int
    cancelled_ids: list[uuid.UUID]
