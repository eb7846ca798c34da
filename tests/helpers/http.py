"""Helpers for driving adapters against ``httpx.MockTransport``."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from skidspar.adapters.http_resilience import ResilientClient

if TYPE_CHECKING:
    from collections.abc import Callable

    from skidspar.config.http_resilience import ResilienceConfig


def make_client_factory(
    handler: Callable[[httpx.Request], httpx.Response],
) -> Callable[[ResilienceConfig], ResilientClient]:
    async def async_handler(request: httpx.Request) -> httpx.Response:
        return handler(request)

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        return ResilientClient(resilience, transport=httpx.MockTransport(async_handler))

    return factory


def raise_connect_error(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)
