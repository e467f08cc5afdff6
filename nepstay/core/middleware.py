# nepstay/core/middleware.py
"""
HTTP middleware stack for the NepStay API.

Every request gets an id that follows it through the logs and back out in
``X-Request-ID``. Oversized bodies get a 413 whether or not they declare a
length. Responses are timed and carry the usual browser security headers.
"""
from __future__ import annotations

import time
import uuid
from typing import Callable, Optional

from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from nepstay.config.settings import settings
from nepstay.core.constants import HEADER_PROCESS_TIME, HEADER_REQUEST_ID
from nepstay.core.exceptions import PayloadTooLargeError
from nepstay.core.logging import get_logger, request_id as request_id_var

logger = get_logger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Tag each request with an id, reusing a client-supplied X-Request-ID.

    The id lives on ``request.state`` and in the logging context until the
    response is sent.
    """

    def __init__(self, app: ASGIApp, header_name: str = HEADER_REQUEST_ID):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(self.header_name) or str(uuid.uuid4())
        request.state.request_id = request_id
        token = request_id_var.set(request_id)

        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[self.header_name] = request_id
        return response


class TimingMiddleware(BaseHTTPMiddleware):
    """
    Log one line per request with its status and elapsed seconds.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()

        response = await call_next(request)

        process_time = time.time() - start_time
        response.headers[HEADER_PROCESS_TIME] = f"{process_time:.4f}"

        logger.info(
            "Request completed",
            extra={
                "request_id": getattr(request.state, "request_id", "unknown"),
                "method": request.method,
                "url": str(request.url.path),
                "status_code": response.status_code,
                "execution_time": process_time,
                "client_host": request.client.host if request.client else None,
            }
        )

        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Browser hardening headers; HSTS only in production.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if settings.is_production():
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        return response


class BodySizeLimitMiddleware:
    """
    Enforce ``MAX_REQUEST_BODY_SIZE`` on request bodies.

    A declared Content-Length over the limit is refused before routing.
    Bodies without one (chunked uploads) are counted as they stream in and
    the read fails with 413 once the limit is passed.
    """

    def __init__(self, app: ASGIApp, max_body_size: int):
        self.app = app
        self.max_body_size = max_body_size

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        path = scope.get("path", "")
        content_length = Headers(scope=scope).get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > self.max_body_size:
            logger.warning(
                "Request body too large",
                extra={"url": path, "content_length": int(content_length)},
            )
            error = PayloadTooLargeError()
            response = JSONResponse(status_code=error.status_code, content=error.to_dict())
            await response(scope, receive, send)
            return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_size:
                    logger.warning(
                        "Streamed request body too large",
                        extra={"url": path, "received_bytes": received},
                    )
                    raise HTTPException(status_code=413)
            return message

        await self.app(scope, limited_receive, send)


class ErrorLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that logs error responses and unhandled exceptions.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                f"Request processing failed: {exc}",
                extra={
                    "request_id": getattr(request.state, "request_id", "unknown"),
                    "method": request.method,
                    "url": str(request.url.path),
                    "error_type": type(exc).__name__,
                },
                exc_info=True
            )
            raise

        if response.status_code >= 400:
            logger.warning(
                f"Request returned error status {response.status_code}",
                extra={
                    "request_id": getattr(request.state, "request_id", "unknown"),
                    "method": request.method,
                    "url": str(request.url.path),
                    "status_code": response.status_code,
                }
            )

        return response


def register_middlewares(app: FastAPI, include_security: bool = True) -> None:
    """
    Register all core middlewares to the FastAPI application.

    Middlewares are registered in reverse order of execution (LIFO).
    The last middleware added is the first one to process the request.

    Execution order:
        1. RequestIDMiddleware (adds request ID first)
        2. BodySizeLimitMiddleware
        3. SecurityHeadersMiddleware
        4. TimingMiddleware
        5. ErrorLoggingMiddleware (closest to the routes)
    """
    app.add_middleware(ErrorLoggingMiddleware)
    app.add_middleware(TimingMiddleware)

    if include_security:
        app.add_middleware(SecurityHeadersMiddleware)

    app.add_middleware(BodySizeLimitMiddleware, max_body_size=settings.MAX_REQUEST_BODY_SIZE)
    app.add_middleware(RequestIDMiddleware)

    logger.debug("Core middlewares registered", extra={"security_headers": include_security})


def get_request_id(request: Request) -> Optional[str]:
    """Retrieve the request ID from the current request."""
    return getattr(request.state, "request_id", None)


__all__ = [
    "RequestIDMiddleware",
    "TimingMiddleware",
    "SecurityHeadersMiddleware",
    "BodySizeLimitMiddleware",
    "ErrorLoggingMiddleware",
    "register_middlewares",
    "get_request_id",
]
