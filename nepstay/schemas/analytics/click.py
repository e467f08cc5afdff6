"""
Click tracking and analytics schemas.
"""

from typing import Literal, Optional

from pydantic import Field

from nepstay.core.constants import DEFAULT_SORT
from nepstay.schemas.common.base import BaseCreateSchema, BaseFilterSchema
from nepstay.schemas.hostel.hostel_filter import HostelSortOption

__all__ = ["TrackClickRequest", "AnalyticsPeriod", "ClickAnalyticsParams"]

AnalyticsPeriod = Literal["1d", "7d", "30d", "all"]


class TrackClickRequest(BaseCreateSchema):
    hostel_id: str = Field(
        ...,
        pattern=r"^[0-9a-fA-F]{24}$",
        description="Hostel id (24 hex characters)",
    )


class ClickAnalyticsParams(BaseFilterSchema):
    period: AnalyticsPeriod = "7d"
    limit: int = Field(default=10, ge=1, le=100)
    sort_by: Optional[HostelSortOption] = DEFAULT_SORT
