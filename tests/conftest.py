from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Any

import httpx
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from vacation_planner.db import get_session
from vacation_planner.main import app
from vacation_planner.models import SQLModel
from vacation_planner.models.absence import Absence
from vacation_planner.models.employee import Employee
from vacation_planner.services.accrual import apply_acquisition_period, compute_acquisition_period
from vacation_planner.services.cache import TTLCache
from vacation_planner.services.distribution import year_locks
from vacation_planner.services.holiday import HolidayProvider, set_holiday_provider

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Awaitable, Callable, Iterator

    from sqlalchemy.ext.asyncio import AsyncEngine

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    """A fresh in-memory database per test, with every table created."""
    _engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with _engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield _engine
    await _engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    async with AsyncSession(bind=engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
async def async_client(db_session: AsyncSession) -> AsyncIterator[AsyncClient]:
    """Async HTTP client with the database session dependency overridden."""

    async def _override_get_session() -> AsyncIterator[AsyncSession]:
        yield db_session

    app.dependency_overrides[get_session] = _override_get_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


def holiday_transport(holidays: list[str] | None = None, *, status_code: int = 200) -> httpx.MockTransport:
    """Mock holiday API answering every year with the given ISO dates."""

    def _handler(request: httpx.Request) -> httpx.Response:
        if status_code != 200:
            return httpx.Response(status_code, json={"message": "unavailable"})
        return httpx.Response(200, json=[{"date": d, "name": "Holiday", "type": "national"} for d in holidays or []])

    return httpx.MockTransport(_handler)


@pytest.fixture(autouse=True)
def _isolate_process_state() -> Iterator[None]:
    """Keep tests off the network and away from each other's locks."""
    set_holiday_provider(HolidayProvider(cache=TTLCache(), transport=holiday_transport()))
    year_locks.clear()
    yield
    set_holiday_provider(None)
    year_locks.clear()


@pytest.fixture
def make_employee(db_session: AsyncSession) -> Callable[..., Awaitable[Employee]]:
    """Persist an employee. Derived fields are computed unless given explicitly."""

    async def _make(
        registration: str,
        *,
        name: str | None = None,
        admission_date: date = date(2020, 1, 10),
        today: date | None = None,
        absences: list[dict[str, Any]] | None = None,
        **fields: Any,
    ) -> Employee:
        employee = Employee(
            registration=registration,
            name=name or f"Employee {registration}",
            admission_date=admission_date,
        )
        unexcused = fields.get("unexcused_absences", 0)
        period = compute_acquisition_period(admission_date, [], unexcused, today or date.today())
        apply_acquisition_period(employee, period)
        for key, value in fields.items():
            setattr(employee, key, value)
        db_session.add(employee)
        await db_session.flush()
        for absence in absences or []:
            db_session.add(Absence(registration=registration, **absence))
        await db_session.commit()
        return employee

    return _make
