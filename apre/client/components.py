"""
Report View Components

View models for the dashboard's report pages. Each component issues a single
GET when initialized and reshapes the returned rows into what its chart or
table widget binds to: parallel label/value arrays for charts, row lists for
tables.

State flow: LOADING -> POPULATED | EMPTY | FAILED. The reached state is
final; components have no refresh.
"""

import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd
import requests

from apre.reports.models import ChartData
from .api import ApiClient, SalesService


class ViewState(Enum):
    """Display states of a report view"""
    LOADING = "loading"
    POPULATED = "populated"
    EMPTY = "empty"
    FAILED = "failed"


class ReportComponent:
    """Shared fetch-once lifecycle for report views"""

    def __init__(self):
        self.state = ViewState.LOADING
        self._initialized = False
        self.logger = logging.getLogger(self.__class__.__name__)

    def on_init(self):
        """Load the view's data; only the first call issues a request"""
        if self._initialized:
            self.logger.warning("Component already initialized; refresh is not supported")
            return
        self._initialized = True
        self.load()

    def load(self):
        raise NotImplementedError


class AgentPerformanceComponent(ReportComponent):
    """Bar chart of each agent's average performance"""

    endpoint = "/dashboard/agent-performance"
    chart_type = "bar"
    chart_label = "Agent Average Performance"

    def __init__(self, api: ApiClient):
        super().__init__()
        self.api = api
        self.agent_names: List[Optional[str]] = []
        self.agent_performance_data: List[Optional[float]] = []
        # False shows "Loading..." in place of the chart
        self.show_chart = False

    def load(self):
        try:
            data = self.api.get(self.endpoint)
        except requests.RequestException as e:
            # Errors are logged only; the view keeps showing "Loading..."
            self.logger.error(f"Error loading agent performance: {e}")
            self.state = ViewState.FAILED
            return

        self.agent_names = [row.get("name") for row in data]
        self.agent_performance_data = [row.get("averagePerformance") for row in data]
        self.show_chart = True
        self.state = ViewState.POPULATED

    def chart(self) -> ChartData:
        return ChartData(
            type=self.chart_type,
            label=self.chart_label,
            labels=[str(name) if name is not None else 'Unknown' for name in self.agent_names],
            values=self.agent_performance_data
        )


class FeedbackByProductComponent(ReportComponent):
    """
    Table of customer feedback per product.

    Unlike the chart views this one reports both an empty result and a failed
    request to the user through `error_message`.
    """

    endpoint = "/reports/customer-feedback/feedback-by-product"

    NO_DATA_MESSAGE = "No feedback data available for products"
    LOAD_FAILED_MESSAGE = "Failed to load customer feedback data. Please try again later."
    LOADING_MESSAGE = "Loading feedback data..."

    def __init__(self, api: ApiClient):
        super().__init__()
        self.api = api
        self.feedback_data: List[Dict[str, Any]] = []
        self.headers: List[str] = ["product", "averageRating", "feedbackCount", "totalRating"]
        self.sortable_columns: List[str] = ["product", "averageRating", "feedbackCount", "totalRating"]
        self.error_message = ""

    def load(self):
        try:
            data = self.api.get(self.endpoint)
        except requests.RequestException as e:
            self.logger.error(f"Error loading feedback data: {e}")
            self.error_message = self.LOAD_FAILED_MESSAGE
            self.feedback_data = []
            self.state = ViewState.FAILED
            return

        if len(data) == 0:
            self.error_message = self.NO_DATA_MESSAGE
            self.feedback_data = []
            self.state = ViewState.EMPTY
        else:
            self.feedback_data = data
            self.error_message = ""
            self.state = ViewState.POPULATED

    @property
    def status_message(self) -> Optional[str]:
        """Message shown instead of (or above) the table, if any"""
        if self.error_message:
            return self.error_message
        if not self.feedback_data:
            return self.LOADING_MESSAGE
        return None

    def sort_by(self, column: str, descending: bool = False) -> List[Dict[str, Any]]:
        """Re-order the table rows by a sortable column; rows missing it sort last"""
        if column not in self.sortable_columns:
            raise ValueError(f"Column '{column}' is not sortable")
        present = [row for row in self.feedback_data if row.get(column) is not None]
        missing = [row for row in self.feedback_data if row.get(column) is None]
        present.sort(key=lambda row: row[column], reverse=descending)
        self.feedback_data = present + missing
        return self.feedback_data

    def rows(self) -> List[List[Any]]:
        """Table cells in header order"""
        return [[row.get(header) for header in self.headers] for row in self.feedback_data]


def totals_by_region(rows: List[Dict[str, Any]]) -> Tuple[List[str], List[float]]:
    """
    Sum sales per region, keeping regions in first-seen order.

    Rows that already carry `totalSales` use it; raw sales records fall back
    to `amount`. Rows without a region are ignored.
    """
    if not rows:
        return [], []

    df = pd.DataFrame(rows)
    if "region" not in df.columns:
        return [], []

    values = pd.Series(0, index=df.index, dtype="float64")
    if "amount" in df.columns:
        values = pd.to_numeric(df["amount"], errors="coerce")
    if "totalSales" in df.columns:
        values = pd.to_numeric(df["totalSales"], errors="coerce").fillna(values)

    df = df.assign(value=values.fillna(0))
    totals = df.groupby("region", sort=False)["value"].sum()
    return [str(region) for region in totals.index], totals.tolist()


class SalesReportComponent(ReportComponent):
    """Bar chart of total sales per region"""

    chart_type = "bar"
    chart_label = "Total Sales"
    LOADING_MESSAGE = "Loading sales data..."

    def __init__(self, sales_service: SalesService):
        super().__init__()
        self.sales_service = sales_service
        self.chart_labels: List[str] = []
        self.chart_data: List[float] = []

    def load(self):
        try:
            data = self.sales_service.get_sales_data()
        except requests.RequestException as e:
            self.logger.error(f"Error loading sales data: {e}")
            self.state = ViewState.FAILED
            return

        self.chart_labels, self.chart_data = totals_by_region(data)
        self.state = ViewState.POPULATED

    @property
    def has_chart(self) -> bool:
        return len(self.chart_data) > 0

    @property
    def status_message(self) -> Optional[str]:
        return None if self.has_chart else self.LOADING_MESSAGE

    def chart(self) -> ChartData:
        return ChartData(
            type=self.chart_type,
            label=self.chart_label,
            labels=self.chart_labels,
            values=self.chart_data
        )
