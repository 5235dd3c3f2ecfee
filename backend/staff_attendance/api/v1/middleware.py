"""
API dependencies for authentication and role checks.
Centralized session enforcement for all protected routes.
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from staff_attendance.core.access import Capability, Principal
from staff_attendance.core.exceptions import AuthError
from staff_attendance.core.logging import get_logger
from staff_attendance.core.security import clear_session, read_session_user
from staff_attendance.db.session import get_db
from staff_attendance.services.auth_service import AuthService

logger = get_logger(__name__)


async def require_authentication(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> Principal:
    """
    Centralized authentication dependency.

    Usage:
        @router.get("/endpoint")
        async def my_endpoint(principal: Principal = Depends(require_authentication)):
            ...

    The session only stores the user id; role and staff link are reloaded so
    that a deleted account stops working immediately.

    Raises:
        AuthError: If there is no session or its user no longer exists
    """
    session_user = read_session_user(request)
    if not session_user or "id" not in session_user:
        raise AuthError("Not authenticated")

    principal = await AuthService(db).resolve_principal(session_user["id"])
    if principal is None:
        logger.warning("Session user no longer exists", extra={"user_id": session_user["id"]})
        clear_session(request)
        raise AuthError("Session expired, please log in again")

    request.state.principal = principal
    return principal


def require_capability(capability: Capability):
    """Router-level dependency that rejects callers whose role lacks ``capability``."""

    async def dependency(principal: Principal = Depends(require_authentication)) -> Principal:
        principal.require(capability)
        return principal

    return dependency
