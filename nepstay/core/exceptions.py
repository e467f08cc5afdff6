"""
Custom Exceptions for the Hostel Marketplace API

This module defines custom exception classes used throughout the application.
Every exception carries a machine-readable error code and the HTTP status it
maps to, so the central handlers can render a uniform error envelope.
"""

from typing import Any, Dict, List, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # General errors
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    NOT_FOUND = "NOT_FOUND"
    HTTP_ERROR = "HTTP_ERROR"
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"

    # Authentication & Authorization
    NO_TOKEN = "NO_TOKEN"
    INVALID_TOKEN = "INVALID_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    ACCOUNT_INACTIVE = "ACCOUNT_INACTIVE"
    ACCOUNT_LOCKED = "ACCOUNT_LOCKED"
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    INSUFFICIENT_PERMISSIONS = "INSUFFICIENT_PERMISSIONS"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    QUERY_VALIDATION_ERROR = "QUERY_VALIDATION_ERROR"
    DUPLICATE_FIELD = "DUPLICATE_FIELD"

    # Domain
    HOSTEL_NOT_FOUND = "HOSTEL_NOT_FOUND"

    # Rate limiting
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    LOGIN_RATE_LIMIT_EXCEEDED = "LOGIN_RATE_LIMIT_EXCEEDED"

    # Database
    DATABASE_ERROR = "DATABASE_ERROR"


class BaseAppException(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_SERVER_ERROR,
        details: Optional[Any] = None,
        status_code: int = 500
    ):
        self.message = message
        self.error_code = error_code
        self.details = details
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to the error envelope"""
        error: Dict[str, Any] = {
            "code": self.error_code.value,
            "message": self.message,
        }
        if self.details:
            error["details"] = self.details
        return {"success": False, "error": error}

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


# ========================================
# Resource Not Found Exceptions
# ========================================

class ResourceNotFoundError(BaseAppException):
    """Exception raised when a requested resource is not found"""

    def __init__(
        self,
        message: str = "Resource not found",
        error_code: ErrorCode = ErrorCode.RESOURCE_NOT_FOUND,
    ):
        super().__init__(message, error_code, None, 404)


class HostelNotFoundError(ResourceNotFoundError):
    """Exception raised when a hostel is not found"""

    def __init__(self, message: str = "Hostel not found"):
        super().__init__(message, ErrorCode.HOSTEL_NOT_FOUND)


# ========================================
# Authentication & Authorization Exceptions
# ========================================

class AuthenticationError(BaseAppException):
    """Exception raised when authentication fails"""

    def __init__(
        self,
        message: str = "Not authorized to access this route",
        error_code: ErrorCode = ErrorCode.NOT_AUTHENTICATED,
    ):
        super().__init__(message, error_code, None, 401)


class InvalidCredentialsError(AuthenticationError):
    """Unknown email or wrong password; the two are indistinguishable"""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message, ErrorCode.INVALID_CREDENTIALS)


class InvalidTokenError(AuthenticationError):
    """Exception raised when a session token is malformed or badly signed"""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message, ErrorCode.INVALID_TOKEN)


class TokenExpiredError(AuthenticationError):
    """Exception raised when a session token has expired"""

    def __init__(self, message: str = "Token expired"):
        super().__init__(message, ErrorCode.TOKEN_EXPIRED)


class AccountLockedError(BaseAppException):
    """Exception raised when a login is attempted on a locked account"""

    def __init__(
        self,
        message: str = (
            "Account is temporarily locked due to too many failed login attempts. "
            "Please try again later."
        ),
        status_code: int = 423,
    ):
        super().__init__(message, ErrorCode.ACCOUNT_LOCKED, None, status_code)


class LoginRateLimitError(BaseAppException):
    """Exception raised when an IP has used up its failed login allowance"""

    def __init__(
        self,
        message: str = "Too many login attempts from this IP, please try again after 15 minutes.",
    ):
        super().__init__(message, ErrorCode.LOGIN_RATE_LIMIT_EXCEEDED, None, 429)


class AuthorizationError(BaseAppException):
    """Exception raised when the caller's role is not allowed"""

    def __init__(
        self,
        message: str = "User role is not authorized to access this route",
        required_roles: Optional[List[str]] = None,
    ):
        super().__init__(message, ErrorCode.INSUFFICIENT_PERMISSIONS, None, 403)
        self.required_roles = required_roles or []


# ========================================
# Validation Exceptions
# ========================================

class ValidationError(BaseAppException):
    """Exception raised when data validation fails"""

    def __init__(
        self,
        message: str = "Invalid input data",
        field_errors: Optional[List[Dict[str, str]]] = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
    ):
        super().__init__(message, error_code, field_errors, 400)


class DuplicateFieldError(BaseAppException):
    """Exception raised when a unique field collides with an existing document"""

    def __init__(self, message: str = "Duplicate field value entered", field: Optional[str] = None):
        super().__init__(message, ErrorCode.DUPLICATE_FIELD, None, 400)
        self.field = field


class PayloadTooLargeError(BaseAppException):
    """Exception raised when a request body exceeds the configured limit"""

    def __init__(self, message: str = "Request entity too large"):
        super().__init__(message, ErrorCode.PAYLOAD_TOO_LARGE, None, 413)


# ========================================
# Database Exceptions
# ========================================

class DatabaseConnectionError(BaseAppException):
    """Exception raised when the document store cannot be reached"""

    def __init__(self, message: str = "Database connection failed"):
        super().__init__(message, ErrorCode.DATABASE_ERROR, None, 503)


__all__ = [
    "ErrorCode",
    "BaseAppException",
    "ResourceNotFoundError",
    "HostelNotFoundError",
    "AuthenticationError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "TokenExpiredError",
    "AccountLockedError",
    "LoginRateLimitError",
    "AuthorizationError",
    "ValidationError",
    "DuplicateFieldError",
    "PayloadTooLargeError",
    "DatabaseConnectionError",
]
