"""
Admin account model and its login-attempt lockout transitions.

Transitions are expressed as MongoDB update documents so the repository can
apply them atomically against a single admin document.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, ClassVar, Dict, Optional

from nepstay.core.constants import ADMINS_COLLECTION, ROLE_ADMIN
from nepstay.models.base import BaseDocument
from nepstay.utils.datetime_utils import DateTimeHelper


@dataclass
class Admin(BaseDocument):
    """An administrator account in the ``admins`` collection."""

    __collection__: ClassVar[str] = ADMINS_COLLECTION

    email: str = ""
    password_hash: str = ""
    role: str = ROLE_ADMIN
    is_active: bool = True
    last_login: Optional[datetime] = None
    login_attempts: int = 0
    lock_until: Optional[datetime] = None

    def is_locked(self, now: Optional[datetime] = None) -> bool:
        now = now or DateTimeHelper.utcnow()
        return self.lock_until is not None and self.lock_until > now

    def failed_attempt_update(
        self,
        now: datetime,
        max_attempts: int,
        lock_minutes: int,
    ) -> Dict[str, Any]:
        """
        Update document recording one failed login.

        An expired lock restarts the count at 1. Otherwise the counter is
        incremented, and reaching ``max_attempts`` on an unlocked account
        sets ``lockUntil`` to ``now + lock_minutes``.
        """
        if self.lock_until is not None and self.lock_until <= now:
            return {
                "$set": {"loginAttempts": 1, "updatedAt": now},
                "$unset": {"lockUntil": ""},
            }

        update: Dict[str, Any] = {
            "$inc": {"loginAttempts": 1},
            "$set": {"updatedAt": now},
        }
        if self.login_attempts + 1 >= max_attempts and not self.is_locked(now):
            update["$set"]["lockUntil"] = now + timedelta(minutes=lock_minutes)
        return update

    @staticmethod
    def reset_attempts_update(now: datetime) -> Dict[str, Any]:
        """Update document for a successful login."""
        return {
            "$set": {"loginAttempts": 0, "lastLogin": now, "updatedAt": now},
            "$unset": {"lockUntil": ""},
        }

    def to_summary(self, include_created: bool = False) -> Dict[str, Any]:
        summary = {
            "id": self.id_str,
            "email": self.email,
            "role": self.role,
            "lastLogin": DateTimeHelper.to_iso(self.last_login),
        }
        if include_created:
            summary["createdAt"] = DateTimeHelper.to_iso(self.created_at)
        return summary
