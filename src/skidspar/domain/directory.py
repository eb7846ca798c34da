"""Directory of broker entities keyed by bare external identifier."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from logging import getLogger
from typing import TYPE_CHECKING

from opentelemetry import trace

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from .model import EntityTypeFormat, StoredEntitySummary
    from .ports import EntityLister

log = getLogger(__name__)
tracer = trace.get_tracer(__name__)

DEFAULT_PAGE_LIMIT = 1000


class EntityDirectory(Mapping[str, "StoredEntitySummary"]):
    """Read-only mapping from bare external identifier to stored entity summary."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, StoredEntitySummary] | None = None) -> None:
        self._entries: dict[str, StoredEntitySummary] = dict(entries or {})

    def __getitem__(self, bare_id: str) -> StoredEntitySummary:
        return self._entries[bare_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"EntityDirectory({len(self._entries)} entries)"


def index_entities(
    summaries: Iterable[StoredEntitySummary],
    type_format: EntityTypeFormat,
    into: dict[str, StoredEntitySummary],
) -> int:
    """Add ``summaries`` to ``into`` keyed by bare identifier; return how many were kept.

    An identifier that is already present keeps its existing summary.
    """

    added = 0
    for summary in summaries:
        bare_id = type_format.bare_id_of(summary.entity_id)
        if bare_id in into:
            log.debug(
                "Discarding %s: bare identifier %s already maps to %s",
                summary.entity_id,
                bare_id,
                into[bare_id].entity_id,
            )
            continue
        into[bare_id] = summary
        added += 1
    return added


async def build_directory(
    lister: EntityLister,
    type_formats: Sequence[EntityTypeFormat],
    *,
    limit: int = DEFAULT_PAGE_LIMIT,
) -> EntityDirectory:
    """Query every configured entity type and index the results.

    Types are queried in the given order, so earlier types win identifier
    collisions. Only the first page of each listing is read.
    """

    with tracer.start_as_current_span("build-entity-directory"):
        entries: dict[str, StoredEntitySummary] = {}
        for type_format in type_formats:
            summaries = await lister.list_entities(type_format.entity_type, limit=limit)
            if len(summaries) >= limit:
                log.warning(
                    "Listing %s returned a full page of %s entities; further pages are not read",
                    type_format.entity_type,
                    limit,
                )
            added = index_entities(summaries, type_format, entries)
            log.info(
                "Stored %s of %s %s entities (directory size %s)",
                added,
                len(summaries),
                type_format.entity_type,
                len(entries),
            )
        return EntityDirectory(entries)
