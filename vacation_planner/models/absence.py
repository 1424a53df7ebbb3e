# ruff: noqa: TC003
from __future__ import annotations

from datetime import date

import sqlalchemy as sa
from sqlmodel import Field

from vacation_planner.models.base import TimestampMixin, UUIDBase


class Absence(UUIDBase, TimestampMixin, table=True):
    """A leave of absence. An open-ended absence has no end date."""

    __tablename__ = "absence"

    registration: str = Field(
        sa_column=sa.Column(
            sa.String(50), sa.ForeignKey("employee.registration", ondelete="CASCADE"), nullable=False, index=True
        ),
    )
    reason: str = Field(max_length=255)
    start_date: date
    end_date: date | None = None
    affects_period: bool = Field(default=True, sa_column_kwargs={"server_default": sa.true()})
