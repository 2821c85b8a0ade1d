"""Tests for TraClient using respx to mock HTTP calls."""
from __future__ import annotations

from urllib.parse import parse_qs

import httpx
import pytest
import respx

from transfer_mcp.config import ROUTES
from transfer_mcp.domain.exceptions import ApiError
from transfer_mcp.domain.value_objects import Direction
from transfer_mcp.infrastructure.tra_client import ENDPOINTS, TraClient


def make_client() -> TraClient:
    return TraClient(http_client=httpx.AsyncClient())


@respx.mock
async def test_fetch_posts_form_to_direction_endpoint() -> None:
    route = respx.post(ENDPOINTS[Direction.TRA2THSR]).mock(
        return_value=httpx.Response(200, text="<html>ok</html>")
    )

    client = make_client()
    html = await client.fetch_timetable(
        Direction.TRA2THSR, ROUTES[Direction.TRA2THSR], "2026/10/19"
    )

    assert html == "<html>ok</html>"
    assert route.called
    request = route.calls[0].request
    assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
    form = parse_qs(request.content.decode())
    assert form["queryWay"] == ["0"]
    assert form["startStation"] == ["1190-北新竹"]
    assert form["queryDate"] == ["2026/10/19"]
    await client.close()


@respx.mock
async def test_thsr2tra_endpoint() -> None:
    route = respx.post(ENDPOINTS[Direction.THSR2TRA]).mock(
        return_value=httpx.Response(200, text="")
    )

    client = make_client()
    await client.fetch_timetable(Direction.THSR2TRA, ROUTES[Direction.THSR2TRA], "2026/10/19")

    form = parse_qs(route.calls[0].request.content.decode())
    assert form["queryWay"] == ["1"]
    await client.close()


@respx.mock
async def test_api_error_on_non_2xx() -> None:
    respx.post(ENDPOINTS[Direction.TRA2THSR]).mock(return_value=httpx.Response(502))

    client = make_client()
    with pytest.raises(ApiError) as exc_info:
        await client.fetch_timetable(
            Direction.TRA2THSR, ROUTES[Direction.TRA2THSR], "2026/10/19"
        )

    assert exc_info.value.status_code == 502
    await client.close()


@respx.mock
async def test_api_error_on_404_mentions_url() -> None:
    respx.post(ENDPOINTS[Direction.TRA2THSR]).mock(return_value=httpx.Response(404))

    client = make_client()
    with pytest.raises(ApiError, match="404"):
        await client.fetch_timetable(
            Direction.TRA2THSR, ROUTES[Direction.TRA2THSR], "2026/10/19"
        )
    await client.close()
