"""
API router that aggregates all endpoint routers.
Every route except health, login and logout requires a session.
"""

from fastapi import APIRouter, Depends

from staff_attendance.api.v1.middleware import require_authentication, require_capability
from staff_attendance.core.access import Capability

from staff_attendance.api.v1.endpoints import (
    health,
    auth,
    admin,
    staff,
    holidays,
    attendance,
    reports,
)

api_router = APIRouter()

# Public routes (login and logout are public; /me and password change check the session themselves)
api_router.include_router(health.router, tags=["health"])
api_router.include_router(auth.router, tags=["authentication"])

# Protected routes
api_router.include_router(
    admin.router,
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(require_capability(Capability.MANAGE_USERS))],
)
api_router.include_router(
    staff.router,
    prefix="/staff",
    tags=["staff"],
    dependencies=[Depends(require_authentication)],
)
api_router.include_router(
    holidays.router,
    prefix="/holidays",
    tags=["holidays"],
    dependencies=[Depends(require_authentication)],
)
api_router.include_router(
    attendance.router,
    tags=["attendance"],
    dependencies=[Depends(require_authentication)],
)
api_router.include_router(
    reports.router,
    prefix="/reports",
    tags=["reports"],
    dependencies=[Depends(require_authentication)],
)
