"""Admissibility rules for vacation start dates."""

from __future__ import annotations

from collections.abc import Collection, Iterator, Sequence
from datetime import date, timedelta
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vacation_planner.models.employee import Employee

_FRIDAY = 4
_SATURDAY = 5
_SUNDAY = 6
_BLOCKED_WEEKDAYS = frozenset({_FRIDAY, _SATURDAY, _SUNDAY})

DEFAULT_EXCEPTION_CONVENTIONS: tuple[str, ...] = ("SEEACEPI", "SECAPI Interior")


def has_exception_convention(convention: str | None, exception_conventions: Sequence[str]) -> bool:
    """True when the union convention contains one of the exception codes."""
    if not convention:
        return False
    return any(code in convention for code in exception_conventions)


def is_valid_start(
    day: date,
    employee: Employee,
    holidays: Collection[date],
    exception_conventions: Sequence[str] = DEFAULT_EXCEPTION_CONVENTIONS,
) -> bool:
    """Return whether ``day`` may be the first day of ``employee``'s vacation.

    Employees under an exception convention may start on any day but Sunday.
    Everyone else may not start on Friday, Saturday or Sunday, nor on a day
    followed by a holiday within the next two days.
    """
    weekday = day.weekday()

    if has_exception_convention(employee.union_convention, exception_conventions):
        return weekday != _SUNDAY

    if weekday in _BLOCKED_WEEKDAYS:
        return False

    one_day = timedelta(days=1)
    return day + one_day not in holidays and day + 2 * one_day not in holidays


def iter_days(start: date, stop: date) -> Iterator[date]:
    """Yield every calendar day in the half-open range [start, stop)."""
    one_day = timedelta(days=1)
    current = start
    while current < stop:
        yield current
        current += one_day
