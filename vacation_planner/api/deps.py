# ruff: noqa: B008
from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Header

from vacation_planner.services.audit import SYSTEM_ACTOR
from vacation_planner.services.holiday import HolidayProvider, get_holiday_provider


async def get_actor(x_user_id: str | None = Header(default=None, max_length=255)) -> str:
    """Identify who is making the change, for the audit log."""
    if x_user_id is None or not x_user_id.strip():
        return SYSTEM_ACTOR
    return x_user_id.strip()


ActorDep = Annotated[str, Depends(get_actor)]


def get_holiday_provider_dep() -> HolidayProvider:
    return get_holiday_provider()


HolidayProviderDep = Annotated[HolidayProvider, Depends(get_holiday_provider_dep)]
