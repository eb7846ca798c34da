"""Ports the reconciliation pass consumes from its adapters."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .model import ExternalStatusRecord, StoredEntitySummary
    from .patch import PatchFragment


@runtime_checkable
class EntityLister(Protocol):
    """Lists every broker entity of one type, reduced to its summary."""

    async def list_entities(
        self,
        entity_type: str,
        *,
        limit: int,
    ) -> Sequence[StoredEntitySummary]: ...


@runtime_checkable
class EntityMerger(Protocol):
    """Merges a partial update into one broker entity."""

    async def merge_entity(self, entity_id: str, fragment: PatchFragment) -> None: ...


@runtime_checkable
class ContextBroker(EntityLister, EntityMerger, Protocol):
    """Both broker ports, as provided by a single client."""


@runtime_checkable
class StatusFeed(Protocol):
    """Retrieves the current operational status of every facility."""

    async def fetch_route_status(self) -> Sequence[ExternalStatusRecord]: ...


__all__ = ["ContextBroker", "EntityLister", "EntityMerger", "StatusFeed"]
