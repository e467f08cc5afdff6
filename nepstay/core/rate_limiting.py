"""
Rate Limiting

Per-IP request limits backed by slowapi. The storage backend is configurable
(`memory://` by default, `redis://...` for multi-process deployments).

Login attempts have their own allowance which only failed attempts use up,
so an admin signing in correctly is never locked out by the limiter.
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from limits import parse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from nepstay.config.settings import settings
from nepstay.core.exceptions import ErrorCode, LoginRateLimitError
from nepstay.core.logging import get_logger

logger = get_logger(__name__)

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.get_default_rate_limit()],
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    enabled=settings.RATE_LIMIT_ENABLED,
    headers_enabled=False,
)


def login_rate_limit() -> str:
    return settings.LOGIN_RATE_LIMIT


class FailedLoginLimiter:
    """
    Counts failed logins per client IP in the limiter's storage.

    ``check`` runs before the credentials are looked at; ``record_failure``
    is called only when the attempt is rejected.
    """

    NAMESPACE = "failed-login"

    def __init__(self, base: Limiter):
        self.base = base

    def _item(self):
        return parse(login_rate_limit())

    def check(self, request: Request) -> None:
        if not self.base.enabled:
            return

        client = get_remote_address(request)
        if not self.base.limiter.test(self._item(), self.NAMESPACE, client):
            logger.warning(
                "Login rate limit exceeded",
                extra={"path": request.url.path, "client_host": client},
            )
            raise LoginRateLimitError()

    def record_failure(self, request: Request) -> None:
        if self.base.enabled:
            self.base.limiter.hit(self._item(), self.NAMESPACE, get_remote_address(request))


login_limiter = FailedLoginLimiter(limiter)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Render slowapi rejections in the standard error envelope."""
    logger.warning(
        "Rate limit exceeded",
        extra={
            "path": request.url.path,
            "client_host": get_remote_address(request),
            "limit": str(exc.detail),
        },
    )
    return JSONResponse(
        status_code=429,
        content={
            "success": False,
            "error": {
                "code": ErrorCode.RATE_LIMIT_EXCEEDED.value,
                "message": "Too many requests from this IP, please try again later.",
            },
        },
    )


__all__ = [
    "FailedLoginLimiter",
    "limiter",
    "login_limiter",
    "login_rate_limit",
    "rate_limit_exceeded_handler",
    "RateLimitExceeded",
]
