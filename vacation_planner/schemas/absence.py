# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import date
from typing import Self

from pydantic import BaseModel, Field, model_validator

from vacation_planner.models.enums import AbsenceCategory


class CreateAbsenceRequest(BaseModel):
    """Request body for recording an absence."""

    reason: str = Field(min_length=1, max_length=255)
    start_date: date
    end_date: date | None = None
    affects_period: bool = True

    @model_validator(mode="after")
    def _validate_dates(self) -> Self:
        if self.end_date is not None and self.end_date < self.start_date:
            msg = "end_date must be >= start_date"
            raise ValueError(msg)
        return self


class UpdateAbsenceRequest(BaseModel):
    """Partial update of an absence. Omitted fields are left unchanged."""

    reason: str | None = Field(default=None, min_length=1, max_length=255)
    start_date: date | None = None
    end_date: date | None = None
    affects_period: bool | None = None


class AbsenceResponse(BaseModel):
    """Response schema for an absence."""

    id: uuid.UUID
    registration: str
    reason: str
    category: AbsenceCategory
    start_date: date
    end_date: date | None
    affects_period: bool
