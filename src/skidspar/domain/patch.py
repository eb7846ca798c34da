"""Typed patch fragments produced by the reconciler."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

STATUS_ATTRIBUTE: Final[str] = "status"
PREPARATION_ATTRIBUTE: Final[str] = "dateLastPreparation"


@dataclass(frozen=True, slots=True)
class TextProperty:
    name: str
    value: str


@dataclass(frozen=True, slots=True)
class DateTimeProperty:
    name: str
    value: str


FragmentProperty = TextProperty | DateTimeProperty
PatchFragment = tuple[FragmentProperty, ...]
