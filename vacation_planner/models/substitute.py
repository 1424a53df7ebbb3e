from __future__ import annotations

import sqlalchemy as sa
from sqlmodel import Field

from vacation_planner.models.base import TimestampMixin, UUIDBase
from vacation_planner.models.enums import SubstituteStatus


class Substitute(UUIDBase, TimestampMixin, table=True):
    """An employee available to cover for colleagues on vacation."""

    __tablename__ = "substitute"

    registration: str = Field(
        sa_column=sa.Column(
            sa.String(50),
            sa.ForeignKey("employee.registration", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
    )
    eligible_roles: list[str] | None = Field(default=None, sa_type=sa.JSON)
    status: str = Field(
        default=SubstituteStatus.AVAILABLE, max_length=50, sa_column_kwargs={"server_default": "AVAILABLE"}
    )
