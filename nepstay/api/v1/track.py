"""
Click tracking endpoints.
"""

from fastapi import APIRouter, Depends, Query

from nepstay.api.deps import get_click_tracking_service, require_admin
from nepstay.core.constants import DEFAULT_SORT
from nepstay.models.admin import Admin
from nepstay.schemas.analytics import AnalyticsPeriod, ClickAnalyticsParams, TrackClickRequest
from nepstay.schemas.common.response import success_response
from nepstay.schemas.hostel import HostelSortOption
from nepstay.services.analytics import ClickTrackingService

router = APIRouter(prefix="/track", tags=["Tracking"])


@router.post("/click")
def track_click(
    payload: TrackClickRequest,
    service: ClickTrackingService = Depends(get_click_tracking_service),
):
    """Count a click-through on a hostel listing."""
    return success_response(service.track_click(payload.hostel_id), message="Click tracked successfully")


@router.get("/analytics")
def click_analytics(
    period: AnalyticsPeriod = Query(default="7d"),
    limit: int = Query(default=10, ge=1, le=100),
    sort_by: HostelSortOption = Query(default=DEFAULT_SORT, alias="sortBy"),
    _: Admin = Depends(require_admin),
    service: ClickTrackingService = Depends(get_click_tracking_service),
):
    params = ClickAnalyticsParams(period=period, limit=limit, sort_by=sort_by)
    return success_response(service.get_click_analytics(params))
