"""Domain types shared by the directory builder and the reconciler."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Final

ID_PLACEHOLDER: Final[str] = "%s"


class FacilityStatus(StrEnum):
    OPEN = "open"
    CLOSED = "closed"


def status_from_activity(is_active: bool) -> FacilityStatus:  # noqa: FBT001
    return FacilityStatus.OPEN if is_active else FacilityStatus.CLOSED


class EntityType(StrEnum):
    EXERCISE_TRAIL = "ExerciseTrail"
    SPORTS_FIELD = "SportsField"


@dataclass(frozen=True, slots=True)
class EntityTypeFormat:
    """Identifier format for one broker entity type.

    ``id_format`` holds ``%s`` where the bare external identifier goes, e.g.
    ``urn:ngsi-ld:ExerciseTrail:se:sundsvall:facilities:%s``. The identity format
    ``%s`` performs no prefixing. A format without a placeholder is a literal prefix.
    """

    id_format: str
    entity_type: str

    @property
    def prefix(self) -> str:
        return self.id_format.partition(ID_PLACEHOLDER)[0]

    @property
    def suffix(self) -> str:
        return self.id_format.partition(ID_PLACEHOLDER)[2]

    def bare_id_of(self, entity_id: str) -> str:
        bare = entity_id.removeprefix(self.prefix)
        if self.suffix:
            bare = bare.removesuffix(self.suffix)
        return bare


@dataclass(frozen=True, slots=True)
class ExternalStatusRecord:
    """One facility as reported by the provider feed."""

    facility_key: str
    external_id: str
    is_active: bool
    last_preparation: str | None = None

    @property
    def status(self) -> FacilityStatus:
        return status_from_activity(self.is_active)


@dataclass(frozen=True, slots=True)
class StoredEntitySummary:
    """The broker's last-known view of one facility.

    Empty strings mean the broker never recorded a value for that attribute.
    """

    entity_id: str
    entity_type: str
    status: str = ""
    last_preparation: str = ""


__all__ = [
    "ID_PLACEHOLDER",
    "EntityType",
    "EntityTypeFormat",
    "ExternalStatusRecord",
    "FacilityStatus",
    "StoredEntitySummary",
    "status_from_activity",
]
