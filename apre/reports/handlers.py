"""
Report Handlers (Business Logic Layer)

Report endpoint handlers. Each handler class covers one report category:
it validates its inputs, picks the pipeline and hands it to the report
service. Database errors are not caught here; the router turns them into
500 responses.
"""

import logging
import math
from typing import Any, Dict, List, Optional, Union

from fastapi import HTTPException

from .service import ReportService
from .pipelines import (
    FEEDBACK_COLLECTION,
    SALES_COLLECTION,
    AGENT_PERFORMANCE_COLLECTION,
    feedback_by_product_pipeline,
    channel_rating_by_month_pipeline,
    sales_by_region_pipeline,
    agent_performance_pipeline,
)

logger = logging.getLogger(__name__)

MONTH_REQUIRED_MESSAGE = 'month and channel are required'


def parse_month(month: Optional[str]) -> Union[int, float]:
    """
    Convert the month query parameter to a number.

    Only a missing or empty value is rejected. Anything else is converted
    numerically: '1.0' becomes 1, blank text becomes 0 and text that is not
    a number becomes NaN. Values that name no month simply match no
    feedback, so the report comes back empty.

    Raises:
        HTTPException: 400 when the value is missing or empty
    """
    if month is None or month == '':
        raise HTTPException(status_code=400, detail=MONTH_REQUIRED_MESSAGE)
    text = str(month).strip()
    if not text:
        return 0
    try:
        value = float(text)
    except ValueError:
        return math.nan
    if value.is_integer():
        return int(value)
    return value


class CustomerFeedbackReports:
    """Handlers for customer feedback reports"""

    def __init__(self, service: ReportService):
        self.service = service

    def get_feedback_by_product(self) -> List[Dict[str, Any]]:
        """Average rating, feedback count and rating total per product"""
        return self.service.aggregate(FEEDBACK_COLLECTION, feedback_by_product_pipeline())

    def get_channel_rating_by_month(self, month: Optional[str]) -> List[Dict[str, Any]]:
        """Average rating per channel for the requested month"""
        month_number = parse_month(month)
        logger.debug(f"Channel ratings requested for month {month_number}")
        return self.service.aggregate(
            FEEDBACK_COLLECTION,
            channel_rating_by_month_pipeline(month_number)
        )


class SalesReports:
    """Handlers for sales reports"""

    def __init__(self, service: ReportService):
        self.service = service

    def get_regions(self) -> List[str]:
        """Distinct sales regions"""
        return self.service.distinct(SALES_COLLECTION, 'region')

    def get_sales_by_region(self, region: str) -> List[Dict[str, Any]]:
        """Sales totals per salesperson for one region"""
        return self.service.aggregate(SALES_COLLECTION, sales_by_region_pipeline(region))

    def get_all_sales(self) -> List[Dict[str, Any]]:
        """Every raw sales record"""
        return self.service.find_all(SALES_COLLECTION)


class AgentPerformanceReports:
    """Handlers for the agent performance dashboard"""

    def __init__(self, service: ReportService):
        self.service = service

    def get_agent_performance(self) -> List[Dict[str, Any]]:
        """Average performance per agent"""
        return self.service.aggregate(AGENT_PERFORMANCE_COLLECTION, agent_performance_pipeline())
