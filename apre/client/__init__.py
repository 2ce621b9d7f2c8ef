"""
Report client: HTTP access to the APRE API and the report view components.
"""

from .api import ApiClient, SalesService
from .components import (
    ViewState,
    AgentPerformanceComponent,
    FeedbackByProductComponent,
    SalesReportComponent,
    totals_by_region
)

__all__ = [
    "ApiClient",
    "SalesService",
    "ViewState",
    "AgentPerformanceComponent",
    "FeedbackByProductComponent",
    "SalesReportComponent",
    "totals_by_region"
]
