"""
Report Models

Pydantic models for report API responses. Field names follow the JSON the
dashboard client consumes (camelCase).
"""

from typing import List, Optional, Union
from pydantic import BaseModel, Field


class FeedbackByProduct(BaseModel):
    """Customer feedback summarised per product"""
    product: str
    averageRating: float = Field(..., description="Average rating rounded to 2 decimals")
    feedbackCount: int = Field(..., ge=0)
    totalRating: float


class ChannelRatingByMonth(BaseModel):
    """Average rating per channel for one month, as parallel arrays"""
    channels: List[str]
    ratingAvg: List[List[float]]


class SalesByRegion(BaseModel):
    """Sales total for one salesperson within a region"""
    salesperson: str
    totalSales: float


class AgentPerformance(BaseModel):
    """Average performance metric value for one agent"""
    agentId: Union[int, str]
    name: str
    averagePerformance: float


class ErrorResponse(BaseModel):
    """Error body shared by every failing endpoint"""
    message: str
    status: int
    type: str = "error"


class ChartData(BaseModel):
    """Chart data for the chart widget"""
    type: str = "bar"
    label: str = ""
    labels: List[str]
    values: List[Optional[float]] = Field(..., description="None leaves a gap in the series")
