"""Public interface for the NGSI-LD context broker adapter."""

from __future__ import annotations

from .client import ContextBrokerClient, log_exchange
from .schema import EntityPayload
from .translator import encode_fragment, summary_from_payload

__all__ = [
    "ContextBrokerClient",
    "EntityPayload",
    "encode_fragment",
    "log_exchange",
    "summary_from_payload",
]
