"""Integration tests for listing and re-activating vacation plans."""

from __future__ import annotations

import uuid
from datetime import date
from typing import TYPE_CHECKING

from vacation_planner.models.enums import PlanStatus
from vacation_planner.models.plan import VacationPlan

if TYPE_CHECKING:
    from httpx import AsyncClient
    from sqlalchemy.ext.asyncio import AsyncSession


async def _plan(db_session: AsyncSession, year: int, status: PlanStatus) -> VacationPlan:
    plan = VacationPlan(year=year, status=status.value, description=f"{year} {status.value.lower()}")
    db_session.add(plan)
    await db_session.commit()
    return plan


async def test_list_plans(async_client: AsyncClient, db_session: AsyncSession) -> None:
    await _plan(db_session, 2025, PlanStatus.ARCHIVED)
    await _plan(db_session, 2026, PlanStatus.ACTIVE)

    data = (await async_client.get("/plans")).json()
    assert data["total"] == 2

    filtered = (await async_client.get("/plans", params={"year": 2025})).json()
    assert [p["year"] for p in filtered["items"]] == [2025]


async def test_activate_archived_plan(async_client: AsyncClient, db_session: AsyncSession) -> None:
    old = await _plan(db_session, 2026, PlanStatus.ARCHIVED)
    current = await _plan(db_session, 2026, PlanStatus.ACTIVE)
    other_year = await _plan(db_session, 2025, PlanStatus.ACTIVE)

    resp = await async_client.put(f"/plans/{old.id}/activate", headers={"X-User-Id": "manager"})

    assert resp.status_code == 200
    assert resp.json()["status"] == "ACTIVE"
    statuses = {p["id"]: p["status"] for p in (await async_client.get("/plans")).json()["items"]}
    assert statuses == {str(old.id): "ACTIVE", str(current.id): "ARCHIVED", str(other_year.id): "ACTIVE"}


async def test_activate_active_plan_is_noop(async_client: AsyncClient, db_session: AsyncSession) -> None:
    plan = await _plan(db_session, 2026, PlanStatus.ACTIVE)
    resp = await async_client.put(f"/plans/{plan.id}/activate")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ACTIVE"


async def test_activate_unknown_plan(async_client: AsyncClient) -> None:
    resp = await async_client.put(f"/plans/{uuid.uuid4()}/activate")
    assert resp.status_code == 404


async def test_activated_plan_vacations_are_listed(
    async_client: AsyncClient, db_session: AsyncSession, make_employee
) -> None:
    await make_employee("1001")
    old = await _plan(db_session, 2026, PlanStatus.ARCHIVED)
    await _plan(db_session, 2026, PlanStatus.ACTIVE)
    await async_client.post(
        "/vacations",
        json={"registration": "1001", "start_date": date(2026, 6, 1).isoformat(), "days": 30, "plan_id": str(old.id)},
    )
    assert (await async_client.get("/vacations", params={"active_plan_only": True})).json()["total"] == 0

    await async_client.put(f"/plans/{old.id}/activate")

    assert (await async_client.get("/vacations", params={"active_plan_only": True})).json()["total"] == 1
