from nepstay.schemas.analytics.click import (
    AnalyticsPeriod,
    ClickAnalyticsParams,
    TrackClickRequest,
)

__all__ = ["AnalyticsPeriod", "ClickAnalyticsParams", "TrackClickRequest"]
