"""
Authentication service: admin login with attempt lockout, session checks.

Login rules:
- unknown or inactive email -> invalid credentials
- locked account -> refused before the password is compared
- wrong password -> failed attempt recorded (may lock the account)
- success -> attempts reset, ``lastLogin`` stamped, session token issued
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from pymongo.database import Database

from nepstay.core.constants import LOGGED_OUT_TOKEN
from nepstay.core.exceptions import (
    AccountLockedError,
    AuthenticationError,
    BaseAppException,
    ErrorCode,
    InvalidCredentialsError,
)
from nepstay.core.security import get_jwt_manager, verify_password
from nepstay.core.security.jwt_handler import JWTManager
from nepstay.models.admin import Admin
from nepstay.repositories.admin_repository import AdminRepository
from nepstay.schemas.auth.login import LoginRequest
from nepstay.services.base import BaseService
from nepstay.utils.datetime_utils import DateTimeHelper

SESSION_LOCKED_MESSAGE = "Account is temporarily locked due to too many failed login attempts"


@dataclass
class LoginResult:
    admin: Admin
    token: str


class AuthenticationService(BaseService[AdminRepository]):
    """
    Service for authenticating administrators.

    Features:
    - Email/password login with per-account lockout
    - Session token issuance and validation
    - Session status checks that never raise
    """

    def __init__(self, db: Database, jwt_manager: Optional[JWTManager] = None):
        super().__init__(AdminRepository(db), db)
        self.jwt_manager = jwt_manager or get_jwt_manager()

    # -------------------------------------------------------------------------
    # Login
    # -------------------------------------------------------------------------

    def login(self, request: LoginRequest, now: Optional[datetime] = None) -> LoginResult:
        """
        Authenticate an admin.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password
            AccountLockedError: Too many recent failures (HTTP 423)
        """
        now = now or DateTimeHelper.utcnow()
        admin = self.repository.find_active_by_email(request.email)

        if admin is None:
            self._logger.warning("Login failed: unknown email", extra={"email": request.email})
            raise InvalidCredentialsError()

        if admin.is_locked(now):
            self._logger.warning("Login refused: account locked", extra={"admin_id": admin.id_str})
            raise AccountLockedError()

        if not verify_password(request.password, admin.password_hash):
            self.repository.register_failed_attempt(admin, now)
            self._logger.warning(
                "Login failed: wrong password",
                extra={"admin_id": admin.id_str, "attempts": admin.login_attempts + 1},
            )
            raise InvalidCredentialsError()

        admin = self.repository.reset_login_attempts(admin, now) or admin
        token = self.jwt_manager.create_token(admin.id_str)

        self._logger.info("Admin logged in", extra={"admin_id": admin.id_str})
        return LoginResult(admin=admin, token=token)

    # -------------------------------------------------------------------------
    # Sessions
    # -------------------------------------------------------------------------

    def authenticate_token(self, token: Optional[str], now: Optional[datetime] = None) -> Admin:
        """
        Resolve the admin behind a session token.

        Raises:
            AuthenticationError: NO_TOKEN, USER_NOT_FOUND or ACCOUNT_INACTIVE
            InvalidTokenError / TokenExpiredError: Undecodable token
            AccountLockedError: Locked account (HTTP 401 on this path)
        """
        if not token:
            raise AuthenticationError("Not authorized to access this route", ErrorCode.NO_TOKEN)

        payload = self.jwt_manager.decode_token(token)
        admin = self.repository.find_by_id(payload["id"])

        if admin is None:
            raise AuthenticationError("User not found", ErrorCode.USER_NOT_FOUND)
        if not admin.is_active:
            raise AuthenticationError("Account is inactive", ErrorCode.ACCOUNT_INACTIVE)
        if admin.is_locked(now):
            raise AccountLockedError(SESSION_LOCKED_MESSAGE, status_code=401)
        return admin

    def session_status(self, token: Optional[str]) -> Dict[str, Any]:
        """Authentication status for the cookie; invalid sessions are reported, not raised."""
        if not token or token == LOGGED_OUT_TOKEN:
            return {"success": True, "authenticated": False, "message": "Not authenticated"}

        try:
            admin = self.authenticate_token(token)
        except BaseAppException as e:
            message = (
                "Invalid or expired token"
                if e.error_code in (ErrorCode.INVALID_TOKEN, ErrorCode.TOKEN_EXPIRED)
                else "Invalid or expired session"
            )
            return {"success": True, "authenticated": False, "message": message}

        return {
            "success": True,
            "authenticated": True,
            "data": {"user": admin.to_summary()},
        }

    def get_profile(self, admin: Admin) -> Dict[str, Any]:
        return {"user": admin.to_summary(include_created=True)}
