"""
Report API Client

Thin HTTP client the report view components use to reach the APRE API.
One GET per call: no caching, retries or pagination.
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from apre.config import config

logger = logging.getLogger(__name__)


class ApiClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or config.client.api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else config.client.request_timeout
        self.session = session or requests.Session()

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """GET a JSON document; raises requests.HTTPError on non-2xx responses."""
        url = self.url(path)
        logger.debug(f"GET {url} params={params}")
        response = self.session.get(
            url,
            params=params,
            headers={"Accept": "application/json"},
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()


class SalesService:
    """Client-side access to the sales report endpoints"""

    def __init__(self, api: ApiClient):
        self.api = api

    def get_regions(self) -> List[str]:
        return self.api.get("/reports/sales/regions")

    def get_sales_by_region(self, region: str) -> List[Dict[str, Any]]:
        return self.api.get(f"/reports/sales/regions/{quote(region, safe='')}")

    def get_sales_data(self) -> List[Dict[str, Any]]:
        return self.api.get("/reports/sales/")
