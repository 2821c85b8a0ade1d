from __future__ import annotations


class TransferMcpError(Exception):
    """Base exception for all TRA/THSR transfer MCP errors."""


class TimetableFormatError(TransferMcpError):
    """Raised when the itinerary table is missing and no "no results" marker is present."""


class ApiError(TransferMcpError):
    """Raised when the upstream railway.gov.tw site returns an unexpected HTTP error status."""

    def __init__(self, status_code: int, message: str = "") -> None:
        self.status_code = status_code
        super().__init__(message or f"Upstream API error ({status_code})")


class ValidationError(TransferMcpError, ValueError):
    """Raised when input parameters fail validation before any network call."""
