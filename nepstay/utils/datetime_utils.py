"""
Date and time helpers.

Documents store naive UTC datetimes (pymongo's default decoding), so every
timestamp written or compared by the application goes through these helpers.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional


class DateTimeHelper:
    """UTC date arithmetic used by queries and the lockout logic"""

    @staticmethod
    def utcnow() -> datetime:
        """Current UTC time as a naive datetime, truncated to milliseconds"""
        now = datetime.now(timezone.utc).replace(tzinfo=None)
        return now.replace(microsecond=(now.microsecond // 1000) * 1000)

    @staticmethod
    def as_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
        """Normalize aware datetimes (tz-aware clients) to naive UTC"""
        if value is None or value.tzinfo is None:
            return value
        return value.astimezone(timezone.utc).replace(tzinfo=None)

    @staticmethod
    def start_of_day(value: datetime) -> datetime:
        return value.replace(hour=0, minute=0, second=0, microsecond=0)

    @staticmethod
    def start_of_month(value: datetime) -> datetime:
        return value.replace(day=1, hour=0, minute=0, second=0, microsecond=0)

    @staticmethod
    def months_back(value: datetime, months: int) -> datetime:
        """First day of the month `months` before `value`'s month"""
        month_index = value.year * 12 + (value.month - 1) - months
        year, month = divmod(month_index, 12)
        return datetime(year, month + 1, 1)

    @staticmethod
    def days_ago(value: datetime, days: int) -> datetime:
        return value - timedelta(days=days)

    @staticmethod
    def to_iso(value: Optional[datetime]) -> Optional[str]:
        """ISO-8601 with a trailing Z for naive UTC values"""
        if value is None:
            return None
        value = DateTimeHelper.as_naive_utc(value)
        return value.isoformat(timespec='milliseconds') + 'Z'


utcnow = DateTimeHelper.utcnow
