"""Public interface for the längdspår.se adapter."""

from __future__ import annotations

from .client import RouteStatusClient
from .schema import RouteStatusPayload, RouteStatusResponse
from .translator import parse_status_record, parse_status_records

__all__ = [
    "RouteStatusClient",
    "RouteStatusPayload",
    "RouteStatusResponse",
    "parse_status_record",
    "parse_status_records",
]
