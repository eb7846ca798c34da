"""Translate between NGSI-LD payloads and reconciliation domain types."""

from __future__ import annotations

from typing import TYPE_CHECKING

from skidspar.config.broker import DEFAULT_CONTEXT_URL
from skidspar.domain.model import StoredEntitySummary
from skidspar.domain.patch import DateTimeProperty, TextProperty

if TYPE_CHECKING:
    from skidspar.domain.patch import PatchFragment

    from .schema import EntityPayload


def summary_from_payload(payload: EntityPayload) -> StoredEntitySummary:
    return StoredEntitySummary(
        entity_id=payload.id,
        entity_type=payload.type,
        status=payload.status,
        last_preparation=payload.date_last_preparation,
    )


def encode_fragment(fragment: PatchFragment) -> dict[str, object]:
    """Render a patch fragment as a JSON-LD merge body."""

    body: dict[str, object] = {"@context": [DEFAULT_CONTEXT_URL]}
    for prop in fragment:
        match prop:
            case TextProperty(name=name, value=value):
                body[name] = {"type": "Property", "value": value}
            case DateTimeProperty(name=name, value=value):
                body[name] = {"type": "Property", "value": {"@type": "DateTime", "@value": value}}
    return body
