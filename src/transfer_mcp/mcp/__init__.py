from __future__ import annotations

import httpx
from mcp.server.fastmcp import FastMCP

from transfer_mcp.application.transfer_service import TransferService
from transfer_mcp.config import ROUTES, THRESHOLDS
from transfer_mcp.infrastructure.cache import TTLCache
from transfer_mcp.infrastructure.tra_client import DEFAULT_TIMEOUT, TraClient
from transfer_mcp.mcp.tools import register_tools


def create_mcp_app() -> FastMCP:
    """Create and configure the FastMCP application with all services wired."""
    cache = TTLCache()
    http_client = httpx.AsyncClient(timeout=DEFAULT_TIMEOUT, follow_redirects=True)
    tra_client = TraClient(http_client=http_client)

    transfer_svc = TransferService(
        tra_client, cache, routes=ROUTES, thresholds=THRESHOLDS
    )

    mcp = FastMCP("TRA THSR Transfer MCP", stateless_http=True)
    register_tools(mcp, transfer_svc)
    return mcp
