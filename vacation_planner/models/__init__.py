from sqlmodel import SQLModel

from vacation_planner.models.absence import Absence
from vacation_planner.models.audit import AuditLog
from vacation_planner.models.base import TimestampMixin, UUIDBase
from vacation_planner.models.employee import Employee
from vacation_planner.models.enums import (
    AbsenceCategory,
    AuditAction,
    AuditEntityType,
    EmployeeStatus,
    OccupancyKeyMode,
    PlanStatus,
    SubstituteStatus,
    VacationStatus,
)
from vacation_planner.models.plan import VacationPlan
from vacation_planner.models.substitute import Substitute
from vacation_planner.models.vacation import VacationPeriod

__all__ = [
    "Absence",
    "AbsenceCategory",
    "AuditAction",
    "AuditEntityType",
    "AuditLog",
    "Employee",
    "EmployeeStatus",
    "OccupancyKeyMode",
    "PlanStatus",
    "SQLModel",
    "Substitute",
    "SubstituteStatus",
    "TimestampMixin",
    "UUIDBase",
    "VacationPeriod",
    "VacationPlan",
    "VacationStatus",
]
