"""Pydantic models describing the NGSI-LD entity payloads we read."""

from __future__ import annotations

from collections.abc import Mapping
from typing import cast

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


def _unwrap_property(value: object) -> object:
    """Reduce a normalised or key-value attribute to its plain value.

    Handles ``"open"``, ``{"type": "Property", "value": "open"}``,
    ``{"@type": "DateTime", "@value": "..."}`` and the property-wrapped form of the latter.
    """

    if isinstance(value, Mapping):
        mapping_value = cast(Mapping[str, object], value)
        if "@value" in mapping_value:
            return mapping_value["@value"]
        if "value" in mapping_value:
            return _unwrap_property(mapping_value["value"])
        return None
    return value


def _blank_to_empty(value: object) -> object:
    unwrapped = _unwrap_property(value)
    if unwrapped is None:
        return ""
    if isinstance(unwrapped, str):
        return unwrapped.strip()
    return unwrapped


class NgsiLdBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class EntityPayload(NgsiLdBaseModel):
    id: str
    type: str
    status: str = ""
    date_last_preparation: str = Field(default="", alias="dateLastPreparation")

    _normalize_status = field_validator("status", mode="before")(_blank_to_empty)
    _normalize_preparation = field_validator("date_last_preparation", mode="before")(
        _blank_to_empty
    )


EntityListAdapter = TypeAdapter(list[EntityPayload])
