"""
Report Router (API Layer)

FastAPI routers for the customer feedback, sales and agent performance
reports. Every endpoint returns the query result verbatim as a JSON array;
an empty result is a 200 with []. Validation errors keep their status and
any other failure becomes a 500 handled by the application error handlers.
"""

import logging
from typing import List, Optional
from fastapi import APIRouter, HTTPException, Query, Depends

from .handlers import (
    CustomerFeedbackReports,
    SalesReports,
    AgentPerformanceReports
)
from .models import (
    FeedbackByProduct,
    ChannelRatingByMonth,
    SalesByRegion,
    AgentPerformance,
    ErrorResponse
)
from .service import ReportService

logger = logging.getLogger(__name__)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}

customer_feedback_router = APIRouter(
    prefix="/reports/customer-feedback",
    tags=["customer-feedback"],
    responses=ERROR_RESPONSES
)
sales_router = APIRouter(prefix="/reports/sales", tags=["sales"], responses=ERROR_RESPONSES)
dashboard_router = APIRouter(prefix="/dashboard", tags=["dashboard"], responses=ERROR_RESPONSES)


def get_report_service():
    """Report service bound to the application's database manager"""
    from apre.app import app_state
    return ReportService(app_state["db_manager"])


def _server_error(endpoint: str, e: Exception) -> HTTPException:
    logger.error(f"Error in {endpoint}: {str(e)}", exc_info=True)
    return HTTPException(status_code=500, detail=str(e) or "Internal Server Error")


# ============================================================================
# CUSTOMER FEEDBACK ENDPOINTS
# ============================================================================

@customer_feedback_router.get(
    "/channel-rating-by-month",
    responses={200: {"model": List[ChannelRatingByMonth]}}
)
def get_channel_rating_by_month(
    month: Optional[str] = Query(None, description="Month number (1-12)"),
    service: ReportService = Depends(get_report_service)
):
    """
    Average customer feedback ratings by channel for a month.

    Example: GET /channel-rating-by-month?month=1
    """
    try:
        handler = CustomerFeedbackReports(service)
        return handler.get_channel_rating_by_month(month)
    except HTTPException:
        raise
    except Exception as e:
        raise _server_error("/channel-rating-by-month", e)


@customer_feedback_router.get(
    "/feedback-by-product",
    responses={200: {"model": List[FeedbackByProduct]}}
)
def get_feedback_by_product(service: ReportService = Depends(get_report_service)):
    """Customer feedback grouped by product, highest average rating first"""
    try:
        handler = CustomerFeedbackReports(service)
        return handler.get_feedback_by_product()
    except HTTPException:
        raise
    except Exception as e:
        raise _server_error("/feedback-by-product", e)


# ============================================================================
# SALES ENDPOINTS
# ============================================================================

@sales_router.get("/regions")
def get_regions(service: ReportService = Depends(get_report_service)):
    """Distinct list of sales regions"""
    try:
        return SalesReports(service).get_regions()
    except Exception as e:
        raise _server_error("/regions", e)


@sales_router.get("/regions/{region:path}", responses={200: {"model": List[SalesByRegion]}})
def get_sales_by_region(region: str, service: ReportService = Depends(get_report_service)):
    """Sales for one region, grouped by salesperson"""
    try:
        return SalesReports(service).get_sales_by_region(region)
    except Exception as e:
        raise _server_error(f"/regions/{region}", e)


@sales_router.get("/")
def get_all_sales(service: ReportService = Depends(get_report_service)):
    """All sales records"""
    try:
        return SalesReports(service).get_all_sales()
    except Exception as e:
        raise _server_error("/sales", e)


# ============================================================================
# DASHBOARD ENDPOINTS
# ============================================================================

@dashboard_router.get("/agent-performance", responses={200: {"model": List[AgentPerformance]}})
def get_agent_performance(service: ReportService = Depends(get_report_service)):
    """Average performance score per agent"""
    try:
        return AgentPerformanceReports(service).get_agent_performance()
    except Exception as e:
        raise _server_error("/agent-performance", e)
