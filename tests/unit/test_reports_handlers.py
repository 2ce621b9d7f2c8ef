"""
================================================================================
APRE Reports - Report Handlers Unit Tests
================================================================================
Description:
    Unit tests for the report handlers (business logic layer). The report
    service is mocked; tests check validation, the collection and pipeline
    each handler selects, and that results pass through unchanged.

Test Coverage:
    - parse_month: required check and numeric conversion
    - CustomerFeedbackReports
    - SalesReports
    - AgentPerformanceReports
================================================================================
"""
import math
import pytest
from fastapi import HTTPException

from apre.reports.handlers import (
    CustomerFeedbackReports,
    SalesReports,
    AgentPerformanceReports,
    parse_month,
    MONTH_REQUIRED_MESSAGE
)
from apre.reports.pipelines import (
    FEEDBACK_COLLECTION,
    SALES_COLLECTION,
    AGENT_PERFORMANCE_COLLECTION,
    feedback_by_product_pipeline,
    sales_by_region_pipeline,
    agent_performance_pipeline
)


class TestParseMonth:
    """Tests for month parameter conversion"""

    @pytest.mark.parametrize('value, expected', [
        ('1', 1), ('12', 12), (' 7 ', 7), ('06', 6), ('1.0', 1), ('13', 13), ('0', 0), ('-1', -1), ('   ', 0)
    ])
    def test_numeric_months(self, value, expected):
        result = parse_month(value)

        assert result == expected
        assert isinstance(result, int)

    def test_fractional_month_kept(self):
        assert parse_month('1.5') == 1.5

    def test_non_numeric_month_is_nan(self):
        assert math.isnan(parse_month('january'))

    @pytest.mark.parametrize('value', [None, ''])
    def test_missing_month(self, value):
        with pytest.raises(HTTPException) as exc_info:
            parse_month(value)

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail == MONTH_REQUIRED_MESSAGE


class TestCustomerFeedbackReports:
    """Test suite for CustomerFeedbackReports handler"""

    def test_feedback_by_product(self, mock_service, sample_feedback_by_product):
        mock_service.aggregate.return_value = sample_feedback_by_product

        handler = CustomerFeedbackReports(mock_service)
        result = handler.get_feedback_by_product()

        assert result == sample_feedback_by_product
        mock_service.aggregate.assert_called_once_with(FEEDBACK_COLLECTION, feedback_by_product_pipeline())

    def test_feedback_by_product_empty(self, mock_service):
        mock_service.aggregate.return_value = []

        result = CustomerFeedbackReports(mock_service).get_feedback_by_product()

        assert result == []

    def test_feedback_by_product_database_error_propagates(self, mock_service):
        mock_service.aggregate.side_effect = Exception("Database connection failed")

        with pytest.raises(Exception, match="Database connection failed"):
            CustomerFeedbackReports(mock_service).get_feedback_by_product()

    def test_channel_rating_by_month(self, mock_service):
        rows = [{'channels': ['Email', 'Phone'], 'ratingAvg': [[4.5], [3.8]]}]
        mock_service.aggregate.return_value = rows

        result = CustomerFeedbackReports(mock_service).get_channel_rating_by_month('2')

        assert result == rows
        collection, pipeline = mock_service.aggregate.call_args[0]
        assert collection == FEEDBACK_COLLECTION
        assert {'$match': {'_id.month': 2}} in pipeline

    def test_channel_rating_without_month_skips_query(self, mock_service):
        with pytest.raises(HTTPException) as exc_info:
            CustomerFeedbackReports(mock_service).get_channel_rating_by_month(None)

        assert exc_info.value.status_code == 400
        mock_service.aggregate.assert_not_called()


class TestSalesReports:
    """Test suite for SalesReports handler"""

    def test_get_regions(self, mock_service):
        mock_service.distinct.return_value = ['North', 'South', 'East', 'West']

        result = SalesReports(mock_service).get_regions()

        assert result == ['North', 'South', 'East', 'West']
        mock_service.distinct.assert_called_once_with(SALES_COLLECTION, 'region')

    def test_get_sales_by_region(self, mock_service):
        rows = [
            {'salesperson': 'Jane Smith', 'totalSales': 1500},
            {'salesperson': 'John Doe', 'totalSales': 1000}
        ]
        mock_service.aggregate.return_value = rows

        result = SalesReports(mock_service).get_sales_by_region('north')

        assert result == rows
        mock_service.aggregate.assert_called_once_with(SALES_COLLECTION, sales_by_region_pipeline('north'))

    def test_get_all_sales(self, mock_service, sample_sales_records):
        mock_service.find_all.return_value = sample_sales_records

        result = SalesReports(mock_service).get_all_sales()

        assert result == sample_sales_records
        mock_service.find_all.assert_called_once_with(SALES_COLLECTION)


class TestAgentPerformanceReports:
    """Test suite for AgentPerformanceReports handler"""

    def test_get_agent_performance(self, mock_service):
        rows = [
            {'agentId': 1000, 'name': 'Agent A', 'averagePerformance': 90},
            {'agentId': 1001, 'name': 'Agent B', 'averagePerformance': 85}
        ]
        mock_service.aggregate.return_value = rows

        result = AgentPerformanceReports(mock_service).get_agent_performance()

        assert result == rows
        mock_service.aggregate.assert_called_once_with(
            AGENT_PERFORMANCE_COLLECTION, agent_performance_pipeline()
        )
