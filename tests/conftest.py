"""
================================================================================
APRE Reports - Unified Test Configuration and Fixtures
================================================================================
Description:
    Shared pytest configuration and fixtures for unit and API tests.
    Provides a mocked report service, a FastAPI test client wired to it,
    and sample report rows.

Fixtures:
    - mock_service: Mock ReportService (no database needed)
    - client: FastAPI TestClient using mock_service
    - sample_feedback_by_product: Feedback rows as returned by the pipeline
    - sample_sales_records: Raw sales records
================================================================================
"""
import pytest
import sys
from pathlib import Path
from unittest.mock import Mock

# Add project root to path for all tests
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


@pytest.fixture
def mock_service():
    """Create a mock ReportService"""
    from apre.reports.service import ReportService
    return Mock(spec=ReportService)


@pytest.fixture
def client(mock_service):
    """Create a FastAPI test client whose report endpoints use mock_service"""
    from fastapi.testclient import TestClient
    from apre.app import app
    from apre.reports.router import get_report_service

    app.dependency_overrides[get_report_service] = lambda: mock_service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sample_feedback_by_product():
    """Feedback-by-product rows, highest rated first"""
    return [
        {'product': 'Product A', 'averageRating': 4.5, 'feedbackCount': 10, 'totalRating': 45},
        {'product': 'Product B', 'averageRating': 3.8, 'feedbackCount': 5, 'totalRating': 19}
    ]


@pytest.fixture
def sample_sales_records():
    """Raw sales records as stored in the sales collection"""
    return [
        {'_id': '1', 'salesperson': 'John Doe', 'region': 'North', 'amount': 1000},
        {'_id': '2', 'salesperson': 'Jane Smith', 'region': 'South', 'amount': 1500},
        {'_id': '3', 'salesperson': 'Jane Smith', 'region': 'North', 'amount': 250}
    ]
