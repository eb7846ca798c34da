"""HTTP client for the längdspår.se route status feed."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING
from urllib.parse import quote

from opentelemetry import trace
from pydantic import ValidationError

from skidspar.adapters.http_resilience import ResilientClient, decode_json, get_checked
from skidspar.domain.errors import MalformedResponseError

from .schema import RouteStatusResponse
from .translator import parse_status_records

if TYPE_CHECKING:
    from collections.abc import Callable

    from skidspar.config.http_resilience import ResilienceConfig
    from skidspar.config.provider import ProviderConfig
    from skidspar.domain.model import ExternalStatusRecord

log = getLogger(__name__)
tracer = trace.get_tracer(__name__)

SOURCE = "längdspår.se"


class RouteStatusClient:
    """Fetches the current status of every route at one location."""

    def __init__(
        self,
        *,
        config: ProviderConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient

    async def fetch_route_status(self) -> list[ExternalStatusRecord]:
        with tracer.start_as_current_span("get-langdspar-status"):
            path = f"/api/locations/{quote(self._config.location, safe='')}/routes-status.json"
            async with self._client_factory(self._resilience) as client:
                response = await get_checked(
                    client,
                    path,
                    source=SOURCE,
                    params={"apiKey": self._config.api_key},
                )
            payload = decode_json(response, source=SOURCE)
            try:
                status = RouteStatusResponse.model_validate(payload)
            except ValidationError as exc:
                raise MalformedResponseError(
                    f"failed to decode route status: {exc}", source=SOURCE
                ) from exc

            records = parse_status_records(status)
            log.info("Received status for %s routes at %s", len(records), self._config.location)
            return records
