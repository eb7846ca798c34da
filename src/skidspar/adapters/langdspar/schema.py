"""Pydantic models describing the längdspår.se route status payload."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def _none_to_empty(value: object) -> object:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    return value


def _none_to_false(value: object) -> object:
    return False if value is None else value


class LangdsparBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class RouteStatusPayload(LangdsparBaseModel):
    is_active: bool = Field(default=False, alias="isActive")
    external_id: str = Field(default="", alias="externalId")
    last_preparation: str | None = Field(default=None, alias="lastPreparation")

    _normalize_is_active = field_validator("is_active", mode="before")(_none_to_false)
    _normalize_external_id = field_validator("external_id", mode="before")(_none_to_empty)
    _normalize_last_preparation = field_validator("last_preparation", mode="before")(
        _blank_to_none
    )


class RouteStatusResponse(LangdsparBaseModel):
    ski: dict[str, RouteStatusPayload] = Field(default_factory=dict, alias="Ski")

    @field_validator("ski", mode="before")
    @classmethod
    def _null_to_empty(cls, value: object) -> object:
        return {} if value is None else value
