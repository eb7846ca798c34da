"""HTTP client for an NGSI-LD context broker."""

from __future__ import annotations

import dataclasses
from logging import getLogger
from typing import TYPE_CHECKING
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from skidspar.adapters.http_resilience import ResilientClient, decode_json, get_checked
from skidspar.config.broker import LINK_HEADER
from skidspar.domain.errors import (
    EntityNotFoundError,
    MalformedResponseError,
    SourceRejectedError,
    WriteFailureError,
)

from .schema import EntityListAdapter, EntityPayload
from .translator import encode_fragment, summary_from_payload

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from skidspar.config.broker import BrokerConfig
    from skidspar.config.http_resilience import ResilienceConfig
    from skidspar.domain.model import StoredEntitySummary
    from skidspar.domain.patch import PatchFragment

log = getLogger(__name__)

SOURCE = "context broker"
ENTITIES_PATH = "/ngsi-ld/v1/entities"
JSON_LD = "application/ld+json"
CONTEXT_LINK = {"Link": LINK_HEADER}


async def log_exchange(response: httpx.Response) -> None:
    """Response hook that logs a full broker request/response pair."""

    await response.aread()
    request = response.request
    log.debug(
        "%s %s -> %s\nrequest headers: %s\nrequest body: %s\nresponse body: %s",
        request.method,
        request.url,
        response.status_code,
        dict(request.headers),
        request.content.decode("utf-8", errors="replace"),
        response.text,
    )


def _entity_path(entity_id: str) -> str:
    return f"{ENTITIES_PATH}/{quote(entity_id, safe=':')}"


class ContextBrokerClient:
    """Reads entity summaries from, and merges fragments into, the context broker.

    One HTTP client is held open between ``__aenter__`` and ``__aexit__``.
    """

    def __init__(
        self,
        *,
        config: BrokerConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        resilience = config.resilience
        if config.debug:
            resilience = dataclasses.replace(
                resilience, response_hooks=(*resilience.response_hooks, log_exchange)
            )
        self._resilience = resilience
        self._client_factory = client_factory or ResilientClient
        self._client: ResilientClient | None = None

    async def __aenter__(self) -> ContextBrokerClient:
        self._client = self._client_factory(self._resilience)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> ResilientClient:
        if self._client is None:
            raise RuntimeError("ContextBrokerClient must be used as an async context manager")
        return self._client

    async def list_entities(
        self,
        entity_type: str,
        *,
        limit: int,
    ) -> list[StoredEntitySummary]:
        params = {"type": entity_type, "limit": str(limit), "options": "keyValues"}
        response = await get_checked(
            self.client,
            ENTITIES_PATH,
            source=SOURCE,
            params=params,
            headers={**CONTEXT_LINK, "Accept": "application/json"},
        )
        payload = decode_json(response, source=SOURCE)
        try:
            entities = EntityListAdapter.validate_python(payload)
        except ValidationError as exc:
            raise MalformedResponseError(
                f"failed to decode {entity_type} entities: {exc}", source=SOURCE
            ) from exc
        log.debug("Broker listed %s %s entities", len(entities), entity_type)
        return [summary_from_payload(entity) for entity in entities]

    async def retrieve_entity(self, entity_id: str) -> StoredEntitySummary:
        try:
            response = await get_checked(
                self.client,
                _entity_path(entity_id),
                source=SOURCE,
                headers={**CONTEXT_LINK, "Accept": JSON_LD},
            )
        except SourceRejectedError as exc:
            if exc.status_code == httpx.codes.NOT_FOUND:
                raise EntityNotFoundError(entity_id) from exc
            raise
        payload = decode_json(response, source=SOURCE)
        try:
            entity = EntityPayload.model_validate(payload)
        except ValidationError as exc:
            raise MalformedResponseError(
                f"failed to decode entity {entity_id}: {exc}", source=SOURCE
            ) from exc
        return summary_from_payload(entity)

    async def merge_entity(self, entity_id: str, fragment: PatchFragment) -> None:
        try:
            response = await self.client.patch(
                _entity_path(entity_id),
                json=encode_fragment(fragment),
                headers={"Content-Type": JSON_LD},
            )
        except httpx.TransportError as exc:
            raise WriteFailureError(
                f"failed to reach {SOURCE} to merge {entity_id}: {exc}", entity_id=entity_id
            ) from exc
        if not response.is_success:
            raise WriteFailureError(
                f"{SOURCE} rejected merge of {entity_id} with status {response.status_code}: "
                f"{response.text}",
                entity_id=entity_id,
            )
        log.info("Merged %s into %s", [prop.name for prop in fragment], entity_id)


__all__ = ["SOURCE", "ContextBrokerClient", "log_exchange"]
