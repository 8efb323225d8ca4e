"""CLI API client for interacting with the funnel-analytics server."""

import os
from typing import Optional

import httpx

# The base URL can be configured via an environment variable
API_BASE_URL = os.getenv("FUNNEL_ANALYTICS_API_URL", "http://127.0.0.1:8000")


class APIClient:
    """A client for making requests to the funnel-analytics API."""

    def __init__(self, base_url: str = API_BASE_URL, transport=None):
        self.base_url = base_url
        self.client = httpx.Client(base_url=self.base_url, transport=transport)

    def _get(self, url: str, params: Optional[dict] = None) -> httpx.Response:
        # Drop unset filters so the server applies its defaults.
        params = {k: v for k, v in (params or {}).items() if v is not None}
        response = self.client.get(url, params=params)
        response.raise_for_status()
        return response

    def list_events(
        self,
        page: int = 1,
        limit: int = 50,
        session_id: Optional[str] = None,
    ) -> httpx.Response:
        """Fetches one page of events, newest first."""
        params = {"page": page, "limit": limit, "session_id": session_id}
        return self._get("/api/events", params)

    def get_funnel(self) -> httpx.Response:
        return self._get("/api/funnel")

    def get_ab_results(self) -> httpx.Response:
        return self._get("/api/ab-test")

    def get_trends(self) -> httpx.Response:
        return self._get("/api/trends")

    def get_overview(
        self,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        device: Optional[str] = None,
        channel: Optional[str] = None,
    ) -> httpx.Response:
        """Fetches the overview summary with optional filters."""
        params = {
            "startDate": start_date,
            "endDate": end_date,
            "device": device,
            "channel": channel,
        }
        return self._get("/api/overview", params)

    def regenerate_data(self, token: Optional[str] = None) -> httpx.Response:
        """Asks the server to replace its data with fresh sample data."""
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        response = self.client.post(
            "/api/admin/regenerate-data", headers=headers, timeout=120.0
        )
        response.raise_for_status()
        return response
