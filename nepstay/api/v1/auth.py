"""
Admin authentication endpoints backed by an httpOnly session cookie.
"""

from fastapi import APIRouter, Depends, Request, Response

from nepstay.api.deps import get_auth_service, get_current_admin, get_session_token
from nepstay.core.exceptions import BaseAppException
from nepstay.core.logging import get_logger
from nepstay.core.rate_limiting import login_limiter
from nepstay.core.security import clear_session_cookie, set_session_cookie
from nepstay.models.admin import Admin
from nepstay.schemas.auth import LoginRequest
from nepstay.schemas.common.response import ErrorResponse, success_response
from nepstay.services.auth import AuthenticationService

logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/login",
    responses={
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
        423: {"model": ErrorResponse, "description": "Account locked"},
        429: {"model": ErrorResponse, "description": "Too many login attempts"},
    },
)
def login(
    request: Request,
    response: Response,
    payload: LoginRequest,
    auth_service: AuthenticationService = Depends(get_auth_service),
):
    login_limiter.check(request)
    try:
        result = auth_service.login(payload)
    except BaseAppException:
        login_limiter.record_failure(request)
        raise

    set_session_cookie(response, result.token)
    return success_response({"user": result.admin.to_summary()}, message="Login successful")


@router.get("/status")
def auth_status(
    request: Request,
    auth_service: AuthenticationService = Depends(get_auth_service),
):
    return auth_service.session_status(get_session_token(request))


@router.post("/logout")
def logout(response: Response, admin: Admin = Depends(get_current_admin)):
    clear_session_cookie(response)
    logger.info("Admin logged out", extra={"admin_id": admin.id_str})
    return success_response(message="Logout successful")


@router.get("/me")
def me(
    admin: Admin = Depends(get_current_admin),
    auth_service: AuthenticationService = Depends(get_auth_service),
):
    return success_response(auth_service.get_profile(admin))
