"""
Security helpers: password hashing, session tokens and the session cookie.
"""

from datetime import datetime, timedelta, timezone
from functools import lru_cache

from fastapi import Response

from nepstay.config.settings import settings
from nepstay.core.constants import LOGGED_OUT_TOKEN
from nepstay.core.security.jwt_handler import JWTManager
from nepstay.core.security.password_hasher import PasswordHasher


@lru_cache()
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=settings.BCRYPT_ROUNDS)


@lru_cache()
def get_jwt_manager() -> JWTManager:
    return JWTManager(
        secret_key=settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        expires_minutes=settings.JWT_EXPIRES_MINUTES,
    )


def hash_password(password: str) -> str:
    return get_password_hasher().hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    return get_password_hasher().verify(password, hashed_password)


def set_session_cookie(response: Response, token: str) -> None:
    """Attach the httpOnly, SameSite=Strict session cookie."""
    expires = datetime.now(timezone.utc) + timedelta(days=settings.JWT_COOKIE_EXPIRES_DAYS)
    response.set_cookie(
        key=settings.JWT_COOKIE_NAME,
        value=token,
        expires=expires,
        httponly=True,
        secure=settings.is_production(),
        samesite="strict",
    )


def clear_session_cookie(response: Response) -> None:
    """Overwrite the session cookie with a short-lived placeholder."""
    response.set_cookie(
        key=settings.JWT_COOKIE_NAME,
        value=LOGGED_OUT_TOKEN,
        expires=datetime.now(timezone.utc) + timedelta(seconds=10),
        httponly=True,
        secure=settings.is_production(),
        samesite="strict",
    )


__all__ = [
    "JWTManager",
    "PasswordHasher",
    "get_jwt_manager",
    "get_password_hasher",
    "hash_password",
    "verify_password",
    "set_session_cookie",
    "clear_session_cookie",
]
