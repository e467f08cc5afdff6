"""
Central exception-to-response mapping.

Every failure leaves the API as ``{"success": false, "error": {"code", "message"}}``
with a status derived from the exception: application exceptions carry their own
status, document-store and token errors are translated here.
"""

import traceback
from typing import Any, Dict, List

import jwt
from bson.errors import InvalidId
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import DuplicateKeyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from nepstay.config.settings import settings
from nepstay.core.exceptions import (
    BaseAppException,
    DuplicateFieldError,
    ErrorCode,
    InvalidTokenError,
    ResourceNotFoundError,
    TokenExpiredError,
    ValidationError,
)
from nepstay.core.logging import get_logger
from nepstay.core.middleware import get_request_id
from nepstay.core.rate_limiting import RateLimitExceeded, rate_limit_exceeded_handler

logger = get_logger(__name__)

DUPLICATE_MESSAGES = {
    "email": "Email already exists",
    "slug": "Hostel with this name already exists",
}


def _error_response(exc: BaseAppException, original: Exception = None) -> JSONResponse:
    body = exc.to_dict()
    if settings.DEBUG and original is not None:
        body["error"]["stack"] = "".join(
            traceback.format_exception(type(original), original, original.__traceback__)
        )
    return JSONResponse(status_code=exc.status_code, content=body)


def format_validation_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Flatten pydantic errors into ``{field, message}`` pairs."""
    formatted = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        formatted.append({
            "field": ".".join(loc),
            "message": str(error.get("msg", "Invalid value")).replace('"', ""),
        })
    return formatted


def duplicate_key_field(exc: DuplicateKeyError) -> str:
    details = exc.details or {}
    key_value = details.get("keyValue") or {}
    if key_value:
        return next(iter(key_value))
    key_pattern = details.get("keyPattern") or {}
    if key_pattern:
        return next(iter(key_pattern))
    message = str(details.get("errmsg") or exc)
    for field in DUPLICATE_MESSAGES:
        if field in message:
            return field
    return ""


async def app_exception_handler(request: Request, exc: BaseAppException) -> JSONResponse:
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        f"{exc.error_code.value}: {exc.message}",
        extra={"request_id": get_request_id(request), "url": str(request.url.path)},
    )
    return _error_response(exc, exc)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    in_query = bool(errors) and all(error.get("loc", ("",))[0] == "query" for error in errors)
    if in_query:
        error = ValidationError(
            "Invalid query parameters",
            format_validation_errors(errors),
            ErrorCode.QUERY_VALIDATION_ERROR,
        )
    else:
        error = ValidationError("Invalid input data", format_validation_errors(errors))
    return _error_response(error)


async def duplicate_key_handler(request: Request, exc: DuplicateKeyError) -> JSONResponse:
    field = duplicate_key_field(exc)
    error = DuplicateFieldError(
        DUPLICATE_MESSAGES.get(field, "Duplicate field value entered"),
        field=field or None,
    )
    logger.warning("Duplicate key rejected", extra={"field": field, "url": str(request.url.path)})
    return _error_response(error, exc)


async def invalid_id_handler(request: Request, exc: InvalidId) -> JSONResponse:
    return _error_response(ResourceNotFoundError(), exc)


async def jwt_error_handler(request: Request, exc: jwt.InvalidTokenError) -> JSONResponse:
    if isinstance(exc, jwt.ExpiredSignatureError):
        return _error_response(TokenExpiredError(), exc)
    return _error_response(InvalidTokenError("Invalid token"), exc)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        code = ErrorCode.NOT_FOUND
        message = f"Route {request.url.path} not found" if exc.detail == "Not Found" else str(exc.detail)
    elif exc.status_code == 413:
        code = ErrorCode.PAYLOAD_TOO_LARGE
        message = "Request entity too large"
    else:
        code = ErrorCode.HTTP_ERROR
        message = str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": {"code": code.value, "message": message}},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled error: {exc}",
        extra={"request_id": get_request_id(request), "url": str(request.url.path)},
        exc_info=exc,
    )
    error = BaseAppException("Internal Server Error", ErrorCode.INTERNAL_SERVER_ERROR)
    return _error_response(error, exc)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach every handler to the application."""
    app.add_exception_handler(BaseAppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(DuplicateKeyError, duplicate_key_handler)
    app.add_exception_handler(InvalidId, invalid_id_handler)
    app.add_exception_handler(jwt.InvalidTokenError, jwt_error_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = [
    "register_exception_handlers",
    "format_validation_errors",
    "duplicate_key_field",
]
