from __future__ import annotations

from uuid import uuid4

from transfer_mcp.domain.entities import RouteConfig
from transfer_mcp.domain.value_objects import Direction

REFERER = "https://www.railway.gov.tw/tra-tip-web/tip/tip001/tip117/query"

USER_AGENT = "tra-thsr-transfer-mcp/0.1 (+https://www.railway.gov.tw)"


def make_headers() -> dict[str, str]:
    """Return the headers the railway.gov.tw transfer search form expects."""
    return {
        "Accept": (
            "text/html,application/xhtml+xml,application/xml;q=0.9,"
            "image/avif,image/webp,image/apng,*/*;q=0.8"
        ),
        "Accept-Language": "zh-TW,zh;q=0.9,en-US;q=0.8,en;q=0.7",
        "Content-Type": "application/x-www-form-urlencoded",
        "Referer": REFERER,
        "User-Agent": USER_AGENT,
    }


def make_form(direction: Direction, route: RouteConfig, query_date: str) -> dict[str, str]:
    """Build the url-encoded body of a transfer search.

    _csrf is a fresh uuid4 on every call; the site only checks that it is present.
    """
    return {
        "_csrf": str(uuid4()),
        "queryWay": "0" if direction is Direction.TRA2THSR else "1",
        "startStation": route.start_station,
        "endStation": route.end_station,
        "queryDate": query_date,
        "queryStartOrEnd": "s",
        "startTime": "00:00",
        "endTime": "23:59",
        "transferTime": "50",
        "hasTransferStation": "true",
        "_hasTransferStation": "on",
        "transferStation": route.transfer_station,
    }
