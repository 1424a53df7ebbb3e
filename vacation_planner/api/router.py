from fastapi import APIRouter

from vacation_planner.api.absences import absences_router, employee_absences_router
from vacation_planner.api.alerts import alerts_router
from vacation_planner.api.dashboard import dashboard_router
from vacation_planner.api.employees import employees_router
from vacation_planner.api.jobs import jobs_router
from vacation_planner.api.plans import plans_router
from vacation_planner.api.substitutes import substitutes_router
from vacation_planner.api.vacations import vacations_router

api_router = APIRouter()
api_router.include_router(employees_router)
api_router.include_router(employee_absences_router)
api_router.include_router(absences_router)
api_router.include_router(vacations_router)
api_router.include_router(plans_router)
api_router.include_router(substitutes_router)
api_router.include_router(jobs_router)
api_router.include_router(alerts_router)
api_router.include_router(dashboard_router)
