"""
Click tracking: public click counter and the admin click analytics report.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pymongo.database import Database

from nepstay.core.constants import ANALYTICS_PERIODS
from nepstay.core.exceptions import HostelNotFoundError
from nepstay.repositories.hostel_repository import CreatedSinceSpecification, HostelRepository
from nepstay.schemas.analytics.click import ClickAnalyticsParams
from nepstay.services.base import BaseService
from nepstay.utils.datetime_utils import DateTimeHelper
from nepstay.utils.formatters import round_half_up

ANALYTICS_FIELDS = ("id", "name", "slug", "clicks", "featured", "createdAt", "location")


class ClickTrackingService(BaseService[HostelRepository]):
    def __init__(self, db: Database):
        super().__init__(HostelRepository(db), db)

    def track_click(self, hostel_id: str) -> Dict[str, Any]:
        """Atomically count one click on an active hostel."""
        hostel = self.repository.increment_clicks(hostel_id)
        if hostel is None:
            raise HostelNotFoundError()

        self._logger.debug("Click tracked", extra={"hostel_id": hostel.id_str, "clicks": hostel.clicks})
        return {"hostel": {"id": hostel.id_str, "name": hostel.name, "clicks": hostel.clicks}}

    def get_click_analytics(
        self,
        params: ClickAnalyticsParams,
        now: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """
        Click report over hostels created within ``period``.

        ``all`` (or an unknown period) applies no date filter.
        """
        now = now or DateTimeHelper.utcnow()
        days = ANALYTICS_PERIODS.get(params.period)
        since = DateTimeHelper.days_ago(now, days) if days else None

        query: Dict[str, Any] = {"isActive": True}
        query.update(CreatedSinceSpecification(since).to_filter())

        hostels = self.repository.get_top_by_clicks(params.limit, query, sort_by=params.sort_by)
        total_clicks = self.repository.total_clicks(query)
        total_hostels = self.repository.count(query)
        top = self.repository.get_top_by_clicks(1, query)

        return {
            "analytics": {
                "period": params.period,
                "totalClicks": total_clicks,
                "totalHostels": total_hostels,
                "avgClicks": round_half_up(total_clicks / total_hostels) if total_hostels else 0,
                "topHostel": (
                    {"id": top[0].id_str, "name": top[0].name, "clicks": top[0].clicks}
                    if top else None
                ),
            },
            "hostels": [
                {key: value for key, value in hostel.to_public_dict().items() if key in ANALYTICS_FIELDS}
                for hostel in hostels
            ],
        }
