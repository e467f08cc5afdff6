"""
JWT session token management.

Handles creation and validation of the signed token stored in the admin
session cookie.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from nepstay.core.exceptions import InvalidTokenError, TokenExpiredError
from nepstay.core.logging import get_logger

logger = get_logger(__name__)


class JWTManager:
    """
    JWT token manager for admin sessions.

    Tokens carry the admin id under the ``id`` claim plus ``iat``/``exp``.
    """

    DEFAULT_ALGORITHM = "HS256"

    def __init__(
        self,
        secret_key: str,
        algorithm: str = DEFAULT_ALGORITHM,
        expires_minutes: int = 7 * 24 * 60,
    ):
        if not secret_key:
            raise ValueError("JWT secret key must not be empty")

        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_minutes = expires_minutes

    def create_token(
        self,
        subject_id: str,
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        """
        Create a signed session token.

        Args:
            subject_id: Admin document id
            expires_delta: Custom lifetime (defaults to the configured expiry)
        """
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(minutes=self.expires_minutes))

        payload = {
            "id": str(subject_id),
            "iat": now,
            "exp": expire,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def decode_token(self, token: str) -> Dict[str, Any]:
        """
        Decode and validate a session token.

        Raises:
            TokenExpiredError: The token's ``exp`` is in the past
            InvalidTokenError: Bad signature, malformed token or missing ``id``
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            raise TokenExpiredError()
        except jwt.InvalidTokenError as e:
            logger.debug(f"Rejected session token: {e}")
            raise InvalidTokenError()

        if not payload.get("id"):
            raise InvalidTokenError()
        return payload
