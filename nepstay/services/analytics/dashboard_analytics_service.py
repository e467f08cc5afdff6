"""
Admin dashboard analytics: listing metrics and system information.
"""

import platform
import time
from datetime import datetime
from typing import Any, Dict, Optional

import psutil
from pymongo.database import Database

from nepstay.config.settings import settings
from nepstay.db.session import describe_connection
from nepstay.models.hostel import Hostel
from nepstay.repositories.admin_repository import AdminRepository
from nepstay.repositories.hostel_repository import HostelRepository
from nepstay.services.base import BaseService
from nepstay.utils.datetime_utils import DateTimeHelper
from nepstay.utils.formatters import round_half_up

POPULAR_LIMIT = 10
RECENT_LIMIT = 10
FACILITIES_LIMIT = 15
TREND_MONTHS = 12

LISTING_FIELDS = ("id", "name", "slug", "clicks", "featured", "location", "pricePerNight", "formattedPrice")


def _listing(hostel: Hostel, *extra_fields: str) -> Dict[str, Any]:
    fields = LISTING_FIELDS + extra_fields
    return {key: value for key, value in hostel.to_public_dict().items() if key in fields}


class DashboardAnalyticsService(BaseService[HostelRepository]):
    """
    Aggregated figures for the admin dashboard.

    Counts are taken over all hostels; price figures, popularity and
    facility rankings only consider active listings.
    """

    def __init__(self, db: Database):
        super().__init__(HostelRepository(db), db)
        self.admin_repository = AdminRepository(db)

    def get_dashboard_metrics(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        now = now or DateTimeHelper.utcnow()
        repo = self.repository

        total = repo.count()
        active = repo.count({"isActive": True})
        total_clicks = repo.total_clicks()
        price_stats = repo.get_price_stats()

        return {
            "overview": {
                "totalHostels": total,
                "activeHostels": active,
                "inactiveHostels": total - active,
                "featuredHostels": repo.count({"featured": True, "isActive": True}),
                "totalClicks": total_clicks,
                "avgClicksPerHostel": round_half_up(total_clicks / active) if active else 0,
            },
            "growth": {
                "newHostelsToday": repo.count_created_since(DateTimeHelper.start_of_day(now)),
                "newHostelsThisWeek": repo.count_created_since(DateTimeHelper.days_ago(now, 7)),
                "newHostelsThisMonth": repo.count_created_since(DateTimeHelper.start_of_month(now)),
            },
            "pricing": {
                "avgPrice": round_half_up(price_stats.get("avgPrice") or 0),
                "minPrice": price_stats.get("minPrice") or 0,
                "maxPrice": price_stats.get("maxPrice") or 0,
                "priceDistribution": repo.get_price_distribution(),
            },
            "popularHostels": [_listing(hostel) for hostel in repo.get_top_by_clicks(POPULAR_LIMIT)],
            "recentHostels": [
                _listing(hostel, "createdAt") for hostel in repo.get_recent_hostels(RECENT_LIMIT)
            ],
            "topFacilities": repo.get_top_facilities(FACILITIES_LIMIT),
            "monthlyTrend": repo.get_monthly_trend(TREND_MONTHS),
        }

    def get_system_info(self) -> Dict[str, Any]:
        process = psutil.Process()
        memory = process.memory_info()

        return {
            "systemInfo": {
                "pythonVersion": platform.python_version(),
                "environment": settings.ENVIRONMENT,
                "uptime": int(time.time() - process.create_time()),
                "memoryUsage": {
                    "rss": memory.rss,
                    "vms": memory.vms,
                    "percent": round(process.memory_percent(), 2),
                },
                "database": describe_connection(self.db),
                "adminCount": self.admin_repository.count_active(),
                "serverTime": DateTimeHelper.to_iso(DateTimeHelper.utcnow()),
            }
        }
