from __future__ import annotations

import logging

import httpx

from transfer_mcp.domain.entities import RouteConfig
from transfer_mcp.domain.exceptions import ApiError
from transfer_mcp.domain.value_objects import Direction
from transfer_mcp.infrastructure.headers import make_form, make_headers

logger = logging.getLogger(__name__)

BASE_URL = "https://www.railway.gov.tw/tra-tip-web/tip/tip001/tip117"
DEFAULT_TIMEOUT = 15.0  # seconds

ENDPOINTS: dict[Direction, str] = {
    Direction.TRA2THSR: f"{BASE_URL}/sendTraTransferThsr",
    Direction.THSR2TRA: f"{BASE_URL}/sendThsrTransferTra",
}


class TraClient:
    """HTTP client for the railway.gov.tw TRA/THSR transfer search.

    A single httpx.AsyncClient instance is used throughout the process lifetime
    so that session cookies persist across requests.
    """

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self._http = http_client  # Shared client; cookie jar persists across calls

    async def fetch_timetable(
        self,
        direction: Direction,
        route: RouteConfig,
        query_date: str,  # YYYY/MM/DD
    ) -> str:
        """POST the transfer search form and return the result page HTML."""
        url = ENDPOINTS[direction]
        logger.info("Fetching %s timetable for %s", direction.value, query_date)
        response = await self._http.post(
            url,
            data=make_form(direction, route, query_date),
            headers=make_headers(),
        )
        self._raise_for_status(response)
        return response.text

    def _raise_for_status(self, response: httpx.Response) -> None:
        """Raise ApiError for non-2xx responses."""
        if response.status_code == 404:
            raise ApiError(404, f"Resource not found (404): {response.url}")
        if response.status_code >= 400:
            raise ApiError(response.status_code)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._http.aclose()
