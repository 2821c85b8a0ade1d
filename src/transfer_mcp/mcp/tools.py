from __future__ import annotations

import dataclasses
import json
import logging
from typing import Any

import httpx
from mcp import types
from mcp.server.fastmcp import FastMCP

from transfer_mcp.application.transfer_service import TransferBoard, TransferService
from transfer_mcp.domain.entities import ClassifiedTransfer
from transfer_mcp.domain.exceptions import ApiError, TimetableFormatError, ValidationError
from transfer_mcp.domain.value_objects import Direction

logger = logging.getLogger(__name__)

_RESULT_URI = "mcp://transfer-mcp/result"


def _as_resource(json_str: str) -> list[types.EmbeddedResource]:
    """Wrap a JSON string as an embedded resource so the LLM does not narrate it."""
    return [
        types.EmbeddedResource(
            type="resource",
            resource=types.TextResourceContents(
                uri=_RESULT_URI,  # type: ignore[arg-type]
                mimeType="application/json",
                text=json_str,
            ),
        )
    ]


def _error_json(message: str) -> str:
    return json.dumps({"error": message}, ensure_ascii=False)


def _error_message(exc: BaseException) -> str:
    if isinstance(exc, TimetableFormatError):
        return "Timetable format not recognised. The railway site layout may have changed."
    if isinstance(exc, ApiError):
        if exc.status_code == 404:
            return "Resource not found."
        if exc.status_code >= 500:
            return f"Upstream API error ({exc.status_code}). Please try again later."
        return str(exc)
    if isinstance(exc, httpx.TimeoutException):
        return "Request timed out. Please try again."
    if isinstance(exc, ValueError):
        return str(exc)
    logger.exception("Unexpected error in MCP tool: %s", exc, exc_info=exc)
    return "An unexpected error occurred."


def _handle_exception(exc: Exception) -> list[types.EmbeddedResource]:
    return _as_resource(_error_json(_error_message(exc)))


def _parse_direction(direction: str) -> Direction:
    try:
        return Direction(direction.strip().upper())
    except ValueError:
        valid = ", ".join(d.value for d in Direction)
        raise ValidationError(f"Unknown direction: {direction} (expected one of {valid})")


def _format_minutes(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def _transfer_dict(item: ClassifiedTransfer) -> dict[str, Any]:
    record = item.record
    return {
        **dataclasses.asdict(record),
        "TRA": dataclasses.asdict(record.tra),
        "THSR": dataclasses.asdict(record.thsr),
        "tier": item.tier.label,
    }


def _board_dict(board: TransferBoard) -> dict[str, Any]:
    return {
        "direction": board.direction.value,
        "legs": [board.direction.first, board.direction.second],
        "date": board.date,
        "now": _format_minutes(board.now_minutes),
        "transfers": [_transfer_dict(t) for t in board.transfers],
        "count": len(board.transfers),
        "scroll_to": board.scroll_to,
    }


def register_tools(mcp: FastMCP, transfer_svc: TransferService) -> None:
    """Bind all @mcp.tool decorators. Called once during server setup."""

    @mcp.tool()
    async def get_transfers(
        direction: str,
        query_date: str | None = None,
    ) -> list[types.EmbeddedResource]:
        """Get TRA/THSR transfer options for one direction, tiered by how catchable they are.

        Args:
            direction: "TRA2THSR" (TRA train first) or "THSR2TRA" (THSR train first).
            query_date: Travel date as YYYY/MM/DD or YYYY-MM-DD in Asia/Taipei.
                        Defaults to today when omitted.
        """
        try:
            parsed = _parse_direction(direction)
            board = await transfer_svc.get_board(parsed, query_date=query_date)
            return _as_resource(json.dumps(_board_dict(board), default=str, ensure_ascii=False))
        except Exception as exc:
            return _handle_exception(exc)

    @mcp.tool()
    async def get_transfer_board(
        query_date: str | None = None,
    ) -> list[types.EmbeddedResource]:
        """Get transfer options for both directions at once.

        A direction that fails reports an error in its own slot; the other is
        still returned.

        Args:
            query_date: Travel date as YYYY/MM/DD or YYYY-MM-DD in Asia/Taipei.
                        Defaults to today when omitted.
        """
        try:
            boards = await transfer_svc.get_boards(query_date=query_date)
            result: dict[str, Any] = {}
            for direction, board in boards.items():
                if isinstance(board, TransferBoard):
                    result[direction.value] = _board_dict(board)
                else:
                    result[direction.value] = {"error": _error_message(board)}
            return _as_resource(json.dumps(result, default=str, ensure_ascii=False))
        except Exception as exc:
            return _handle_exception(exc)
