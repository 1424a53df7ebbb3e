from __future__ import annotations

import enum


class EmployeeStatus(enum.StrEnum):
    """Employment status of an employee."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class PlanStatus(enum.StrEnum):
    """Lifecycle of a yearly vacation plan."""

    ACTIVE = "ACTIVE"
    ARCHIVED = "ARCHIVED"


class VacationStatus(enum.StrEnum):
    """State of a scheduled vacation period."""

    REQUESTED = "REQUESTED"
    PLANNED = "PLANNED"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"


class SubstituteStatus(enum.StrEnum):
    """Availability of a substitute."""

    AVAILABLE = "AVAILABLE"
    ALLOCATED = "ALLOCATED"


class AbsenceCategory(enum.StrEnum):
    """Keyword-derived category of an absence reason."""

    ILLNESS = "ILLNESS"
    UNPAID_LEAVE = "UNPAID_LEAVE"
    OTHER = "OTHER"


class OccupancyKeyMode(enum.StrEnum):
    """How vacation starts are bucketed for the capacity check."""

    MONTH = "month"
    YEAR_MONTH = "year_month"


class AuditEntityType(enum.StrEnum):
    """Entity type recorded in the audit log."""

    EMPLOYEE = "EMPLOYEE"
    ABSENCE = "ABSENCE"
    VACATION_PLAN = "VACATION_PLAN"
    VACATION_PERIOD = "VACATION_PERIOD"
    SUBSTITUTE = "SUBSTITUTE"


class AuditAction(enum.StrEnum):
    """Action recorded in the audit log."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    RECOMPUTE = "RECOMPUTE"
    ACTIVATE = "ACTIVATE"
    CANCEL = "CANCEL"
