"""
Admin repository: account lookup and login-attempt bookkeeping.
"""

from datetime import datetime
from typing import Optional

from pymongo.database import Database

from nepstay.config.settings import settings
from nepstay.core.logging import get_logger
from nepstay.models.admin import Admin
from nepstay.repositories.base.base_repository import BaseRepository

logger = get_logger(__name__)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class AdminRepository(BaseRepository[Admin]):
    """Repository for administrator accounts."""

    duplicate_messages = {"email": "Email already exists"}

    def __init__(self, db: Database):
        super().__init__(Admin, db)

    def find_active_by_email(self, email: str) -> Optional[Admin]:
        return self.find_one({"email": normalize_email(email), "isActive": True})

    def find_by_email(self, email: str) -> Optional[Admin]:
        return self.find_one({"email": normalize_email(email)})

    def register_failed_attempt(self, admin: Admin, now: datetime) -> Optional[Admin]:
        """Record a failed login; locks the account once the limit is reached."""
        update = admin.failed_attempt_update(
            now,
            max_attempts=settings.MAX_LOGIN_ATTEMPTS,
            lock_minutes=settings.LOCK_TIME_MINUTES,
        )
        updated = self.apply_update(admin.id, update)
        if updated is not None and updated.is_locked(now) and not admin.is_locked(now):
            logger.warning(
                "Admin account locked after repeated failed logins",
                extra={"admin_id": updated.id_str, "lock_until": str(updated.lock_until)},
            )
        return updated

    def reset_login_attempts(self, admin: Admin, now: datetime) -> Optional[Admin]:
        return self.apply_update(admin.id, Admin.reset_attempts_update(now))

    def create_admin(self, email: str, password_hash: str) -> Admin:
        admin = Admin(email=normalize_email(email), password_hash=password_hash)
        return self.create(admin)

    def count_active(self) -> int:
        return self.count({"isActive": True})
