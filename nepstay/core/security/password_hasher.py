"""
Admin password hashing on top of bcrypt.
"""

import bcrypt

from nepstay.core.logging import get_logger

logger = get_logger(__name__)

# bcrypt only reads the first 72 bytes of a secret; newer releases refuse longer input
BCRYPT_MAX_BYTES = 72


class PasswordHasher:
    """Salted bcrypt hashes with a configurable work factor."""

    MIN_ROUNDS = 4
    MAX_ROUNDS = 31

    def __init__(self, rounds: int = 12):
        if not (self.MIN_ROUNDS <= rounds <= self.MAX_ROUNDS):
            raise ValueError(
                f"bcrypt rounds must be between {self.MIN_ROUNDS} and {self.MAX_ROUNDS}, got {rounds}"
            )
        self.rounds = rounds

    @staticmethod
    def _encode(password: str) -> bytes:
        if not isinstance(password, str):
            raise TypeError("Password must be a string")
        if not password:
            raise ValueError("Password cannot be empty")

        secret = password.encode("utf-8")
        if len(secret) > BCRYPT_MAX_BYTES:
            raise ValueError(f"Password cannot exceed {BCRYPT_MAX_BYTES} bytes")
        return secret

    def hash(self, password: str) -> str:
        """Hash a new admin password."""
        secret = self._encode(password)
        return bcrypt.hashpw(secret, bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify(self, password: str, hashed_password: str) -> bool:
        """Compare a login password with the stored hash; bad input never matches."""
        if not password or not hashed_password:
            return False

        try:
            return bcrypt.checkpw(self._encode(password), hashed_password.encode("utf-8"))
        except ValueError as e:
            logger.warning(f"Password check rejected: {e}")
            return False
