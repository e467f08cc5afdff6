from nepstay.services.analytics.click_tracking_service import ClickTrackingService
from nepstay.services.analytics.dashboard_analytics_service import DashboardAnalyticsService

__all__ = ["ClickTrackingService", "DashboardAnalyticsService"]
