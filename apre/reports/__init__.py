"""
Reports Module

Report endpoints for the APRE dashboard, layered as router (API),
handlers (business logic), pipelines (query construction) and service
(data access).
"""

from .router import customer_feedback_router, sales_router, dashboard_router
from .service import ReportService
from .models import FeedbackByProduct, ChannelRatingByMonth, SalesByRegion, AgentPerformance, ErrorResponse

__all__ = [
    "customer_feedback_router",
    "sales_router",
    "dashboard_router",
    "ReportService",
    "FeedbackByProduct",
    "ChannelRatingByMonth",
    "SalesByRegion",
    "AgentPerformance",
    "ErrorResponse"
]
