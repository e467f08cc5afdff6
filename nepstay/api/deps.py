"""
Shared FastAPI dependencies: database handle, services and the admin guard.

Example usage in a router:
    from fastapi import Depends, APIRouter
    from nepstay.api import deps

    router = APIRouter()

    @router.get("/me")
    def read_me(admin = Depends(deps.get_current_admin)):
        return admin.to_summary()
"""

from typing import Callable, Optional

from fastapi import Depends, Request
from pymongo.database import Database

from nepstay.config.settings import settings
from nepstay.core.constants import LOGGED_OUT_TOKEN, ROLE_ADMIN
from nepstay.core.exceptions import AuthorizationError, BaseAppException
from nepstay.core.logging import admin_id as admin_id_ctx
from nepstay.db.session import get_db
from nepstay.models.admin import Admin
from nepstay.services.analytics import ClickTrackingService, DashboardAnalyticsService
from nepstay.services.auth import AuthenticationService
from nepstay.services.hostel import HostelService


# --- Services ------------------------------------------------------------------

def get_hostel_service(db: Database = Depends(get_db)) -> HostelService:
    return HostelService(db)


def get_auth_service(db: Database = Depends(get_db)) -> AuthenticationService:
    return AuthenticationService(db)


def get_click_tracking_service(db: Database = Depends(get_db)) -> ClickTrackingService:
    return ClickTrackingService(db)


def get_dashboard_service(db: Database = Depends(get_db)) -> DashboardAnalyticsService:
    return DashboardAnalyticsService(db)


# --- Authentication & Authorization -------------------------------------------

def get_session_token(request: Request) -> Optional[str]:
    return request.cookies.get(settings.JWT_COOKIE_NAME)


def get_current_admin(
    request: Request,
    auth_service: AuthenticationService = Depends(get_auth_service),
) -> Admin:
    """Admin behind the session cookie; raises a 401 application error otherwise."""
    admin = auth_service.authenticate_token(get_session_token(request))
    request.state.admin = admin
    admin_id_ctx.set(admin.id_str)
    return admin


def get_current_admin_optional(
    request: Request,
    auth_service: AuthenticationService = Depends(get_auth_service),
) -> Optional[Admin]:
    """Like ``get_current_admin`` but yields None for anonymous or invalid sessions."""
    token = get_session_token(request)
    if not token or token == LOGGED_OUT_TOKEN:
        return None
    try:
        return auth_service.authenticate_token(token)
    except BaseAppException:
        return None


def require_roles(*roles: str) -> Callable[..., Admin]:
    """Dependency factory restricting a route to the given roles."""

    def dependency(admin: Admin = Depends(get_current_admin)) -> Admin:
        if admin.role not in roles:
            raise AuthorizationError(required_roles=list(roles))
        return admin

    return dependency


require_admin = require_roles(ROLE_ADMIN)


__all__ = [
    "get_db",
    "get_hostel_service",
    "get_auth_service",
    "get_click_tracking_service",
    "get_dashboard_service",
    "get_current_admin",
    "get_current_admin_optional",
    "require_roles",
    "require_admin",
]
