"""Annual vacation distribution.

Archives the year's active plan, creates a new one and assigns each eligible
employee the first admissible start date before their deadline, subject to a
per-location, per-month cap on vacation starts. The whole run is one
transaction: callers see either the complete new plan or no change at all.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import AsyncIterator, Collection, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import TYPE_CHECKING

from sqlalchemy import text, update
from sqlmodel import col

from vacation_planner.config import Settings, get_settings
from vacation_planner.exceptions import AppError, InvalidInputError, TransactionError
from vacation_planner.models.enums import (
    AuditAction,
    AuditEntityType,
    OccupancyKeyMode,
    PlanStatus,
    VacationStatus,
)
from vacation_planner.models.plan import VacationPlan
from vacation_planner.models.vacation import VacationPeriod
from vacation_planner.services.audit import SYSTEM_ACTOR, model_to_audit_dict, write_audit_log
from vacation_planner.services.date_rules import is_valid_start, iter_days
from vacation_planner.services.eligibility import ExcludedEmployee, fetch_candidates, filter_eligible
from vacation_planner.services.holiday import HolidayProvider, get_holiday_provider

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from vacation_planner.models.employee import Employee

logger = logging.getLogger(__name__)

MIN_YEAR = 2000
MAX_YEAR = 2100
UNKNOWN_LOCATION = "N/A"

_MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

# Namespace for pg_advisory_xact_lock keys so they do not collide with other users.
_ADVISORY_LOCK_NAMESPACE = 0x5641_0000


# ---------------------------------------------------------------------------
# Result dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Allocation:
    """A vacation assigned to one employee during a run."""

    registration: str
    start_date: date
    end_date: date
    days: int
    acquisition_start: date | None
    acquisition_end: date | None


@dataclass
class DistributionResult:
    """Summary of a distribution run."""

    plan_id: uuid.UUID
    year: int
    periods_created: int = 0
    excluded: list[ExcludedEmployee] = field(default_factory=list)
    unscheduled: list[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Per-run occupancy
# ---------------------------------------------------------------------------


OccupancyKey = tuple[str, ...]


class OccupancyCalendar:
    """Counts vacation starts per (work location, month) within one run.

    In ``MONTH`` mode the month is identified by its name only, so starts in
    March of different years share a bucket.
    """

    def __init__(self, capacity: int, mode: OccupancyKeyMode = OccupancyKeyMode.MONTH) -> None:
        self.capacity = capacity
        self.mode = mode
        self._counts: dict[OccupancyKey, int] = {}

    def key_for(self, location: str | None, day: date) -> OccupancyKey:
        site = location or UNKNOWN_LOCATION
        if self.mode == OccupancyKeyMode.YEAR_MONTH:
            return (site, f"{day.year:04d}-{day.month:02d}")
        return (site, _MONTH_NAMES[day.month - 1])

    def count(self, key: OccupancyKey) -> int:
        return self._counts.get(key, 0)

    def has_room(self, key: OccupancyKey) -> bool:
        return self.count(key) < self.capacity

    def reserve(self, key: OccupancyKey) -> None:
        self._counts[key] = self.count(key) + 1

    def snapshot(self) -> dict[OccupancyKey, int]:
        return dict(self._counts)


# ---------------------------------------------------------------------------
# Pure allocation (no DB)
# ---------------------------------------------------------------------------


def find_start_date(
    employee: Employee,
    holidays: Collection[date],
    today: date,
    occupancy: OccupancyCalendar,
    exception_conventions: Sequence[str],
) -> date | None:
    """Return the first admissible day with free capacity, reserving it.

    The scan runs from ``max(today, acquisition_start)`` up to, but not
    including, the employee's deadline.
    """
    if employee.vacation_deadline is None:
        return None
    cursor = today
    if employee.acquisition_start is not None and employee.acquisition_start > today:
        cursor = employee.acquisition_start

    for day in iter_days(cursor, employee.vacation_deadline):
        if not is_valid_start(day, employee, holidays, exception_conventions):
            continue
        key = occupancy.key_for(employee.work_location, day)
        if occupancy.has_room(key):
            occupancy.reserve(key)
            return day
    return None


def allocate(
    candidates: Sequence[Employee],
    holidays: Collection[date],
    today: date,
    occupancy: OccupancyCalendar,
    exception_conventions: Sequence[str],
) -> tuple[list[Allocation], list[str]]:
    """Assign vacations to candidates in the given order.

    Employees without balance are skipped. Employees for whom no day fits
    are returned in the second list.
    """
    allocations: list[Allocation] = []
    unscheduled: list[str] = []
    holiday_set = frozenset(holidays)

    for employee in candidates:
        days = employee.vacation_balance
        if days <= 0:
            continue
        start = find_start_date(employee, holiday_set, today, occupancy, exception_conventions)
        if start is None:
            unscheduled.append(employee.registration)
            continue
        allocations.append(
            Allocation(
                registration=employee.registration,
                start_date=start,
                end_date=start + timedelta(days=days - 1),
                days=days,
                acquisition_start=employee.acquisition_start,
                acquisition_end=employee.acquisition_end,
            )
        )
    return allocations, unscheduled


# ---------------------------------------------------------------------------
# Run serialization
# ---------------------------------------------------------------------------


class YearLockRegistry:
    """Named in-process locks, one per planning year."""

    def __init__(self) -> None:
        self._locks: dict[int, asyncio.Lock] = {}

    def lock_for(self, year: int) -> asyncio.Lock:
        lock = self._locks.get(year)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[year] = lock
        return lock

    def clear(self) -> None:
        self._locks.clear()

    @asynccontextmanager
    async def hold(self, year: int) -> AsyncIterator[None]:
        async with self.lock_for(year):
            yield


year_locks = YearLockRegistry()


async def lock_plan_year(session: AsyncSession, year: int) -> None:
    """Take a transaction-scoped database lock for ``year`` where supported."""
    if session.get_bind().dialect.name == "postgresql":
        await session.execute(
            text("SELECT pg_advisory_xact_lock(:key)"),
            {"key": _ADVISORY_LOCK_NAMESPACE + year},
        )


def validate_year(year: int) -> None:
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise InvalidInputError(f"Year must be between {MIN_YEAR} and {MAX_YEAR}, got {year}")


# ---------------------------------------------------------------------------
# DB-backed helpers
# ---------------------------------------------------------------------------


async def archive_active_plans(session: AsyncSession, year: int) -> None:
    """Archive whichever plan is currently active for ``year``."""
    await session.execute(
        update(VacationPlan)
        .where(
            col(VacationPlan.year) == year,
            col(VacationPlan.status) == PlanStatus.ACTIVE.value,
        )
        .values(status=PlanStatus.ARCHIVED.value)
    )


async def insert_periods(session: AsyncSession, plan_id: uuid.UUID, allocations: Sequence[Allocation]) -> None:
    """Stage one PLANNED vacation period per allocation and flush them."""
    session.add_all(
        [
            VacationPeriod(
                registration=allocation.registration,
                plan_id=plan_id,
                start_date=allocation.start_date,
                end_date=allocation.end_date,
                days=allocation.days,
                status=VacationStatus.PLANNED.value,
                acquisition_start=allocation.acquisition_start,
                acquisition_end=allocation.acquisition_end,
            )
            for allocation in allocations
        ]
    )
    await session.flush()


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------


async def distribute_vacations(
    session: AsyncSession,
    year: int,
    description: str | None = None,
    *,
    today: date | None = None,
    holiday_provider: HolidayProvider | None = None,
    settings: Settings | None = None,
    actor: str = SYSTEM_ACTOR,
) -> DistributionResult:
    """Create a new active plan for ``year`` and fill it with vacation periods.

    Raises:
        InvalidInputError: the year is out of range.
        TransactionError: anything failed; the whole run was rolled back.
    """
    validate_year(year)
    if today is None:
        today = date.today()
    settings = settings or get_settings()
    provider = holiday_provider or get_holiday_provider()

    async with year_locks.hold(year):
        logger.info("Starting vacation distribution for %s", year)
        try:
            await lock_plan_year(session, year)
            await archive_active_plans(session, year)

            plan = VacationPlan(
                year=year,
                status=PlanStatus.ACTIVE.value,
                description=description or f"Automatic distribution for {year}",
            )
            session.add(plan)
            await session.flush()
            plan_id = plan.id

            employees, absences = await fetch_candidates(session, settings.notice_status_marker)
            eligibility = filter_eligible(employees, absences, today, settings.notice_status_marker)
            logger.info(
                "Plan %s: %d candidates, %d excluded",
                plan_id,
                len(eligibility.candidates),
                len(eligibility.excluded),
            )

            holidays = await provider.holidays(year)
            occupancy = OccupancyCalendar(settings.occupancy_capacity, OccupancyKeyMode(settings.occupancy_key))
            allocations, unscheduled = allocate(
                eligibility.candidates,
                holidays,
                today,
                occupancy,
                settings.exception_conventions,
            )

            await insert_periods(session, plan_id, allocations)

            await write_audit_log(
                session,
                actor=actor,
                entity_type=AuditEntityType.VACATION_PLAN,
                entity_id=plan_id,
                action=AuditAction.CREATE,
                after_json={**model_to_audit_dict(plan), "periods_created": len(allocations)},
            )

            await session.commit()
        except Exception as exc:
            await session.rollback()
            logger.exception("Vacation distribution for %s failed; rolled back", year)
            cause = exc.message if isinstance(exc, AppError) else str(exc)
            raise TransactionError(f"Vacation distribution for {year} failed: {cause}") from exc

    if unscheduled:
        logger.info("No admissible start date before the deadline for: %s", ", ".join(unscheduled))
    logger.info("Distribution for %s complete: %d periods planned", year, len(allocations))

    return DistributionResult(
        plan_id=plan_id,
        year=year,
        periods_created=len(allocations),
        excluded=eligibility.excluded,
        unscheduled=unscheduled,
    )
