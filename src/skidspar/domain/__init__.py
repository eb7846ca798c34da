"""Reconciliation domain: directory building and diff/patch decisions."""

from __future__ import annotations

from .directory import DEFAULT_PAGE_LIMIT, EntityDirectory, build_directory, index_entities
from .errors import (
    EntityNotFoundError,
    IntegrationError,
    MalformedResponseError,
    SourceRejectedError,
    SourceUnavailableError,
    TimestampParseError,
    WriteFailureError,
)
from .model import (
    EntityType,
    EntityTypeFormat,
    ExternalStatusRecord,
    FacilityStatus,
    StoredEntitySummary,
    status_from_activity,
)
from .patch import DateTimeProperty, PatchFragment, TextProperty
from .reconciliation import (
    DEFAULT_RECORD_DELAY_SECONDS,
    ReconciliationDecision,
    ReconciliationReport,
    RecordOutcome,
    decide,
    reconcile,
)

__all__ = [
    "DEFAULT_PAGE_LIMIT",
    "DEFAULT_RECORD_DELAY_SECONDS",
    "DateTimeProperty",
    "EntityDirectory",
    "EntityNotFoundError",
    "EntityType",
    "EntityTypeFormat",
    "ExternalStatusRecord",
    "FacilityStatus",
    "IntegrationError",
    "MalformedResponseError",
    "PatchFragment",
    "ReconciliationDecision",
    "ReconciliationReport",
    "RecordOutcome",
    "SourceRejectedError",
    "SourceUnavailableError",
    "StoredEntitySummary",
    "TextProperty",
    "TimestampParseError",
    "WriteFailureError",
    "build_directory",
    "decide",
    "index_entities",
    "reconcile",
    "status_from_activity",
]
