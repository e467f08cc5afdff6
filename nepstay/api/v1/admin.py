"""
Admin dashboard endpoints.
"""

from fastapi import APIRouter, Depends

from nepstay.api.deps import get_dashboard_service, require_admin
from nepstay.schemas.common.response import success_response
from nepstay.services.analytics import DashboardAnalyticsService

router = APIRouter(
    prefix="/admin",
    tags=["Admin Dashboard"],
    dependencies=[Depends(require_admin)],
)


@router.get("/metrics")
def dashboard_metrics(service: DashboardAnalyticsService = Depends(get_dashboard_service)):
    return success_response(service.get_dashboard_metrics())


@router.get("/system-info")
def system_info(service: DashboardAnalyticsService = Depends(get_dashboard_service)):
    return success_response(service.get_system_info())
