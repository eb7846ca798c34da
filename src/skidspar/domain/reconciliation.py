"""Diff/patch decisions between the provider feed and the broker's last-known state.

Each feed record moves through a small state machine::

    no external id -> skipped
    unmatched      -> skipped (logged)
    matched        -> unchanged          (no write)
                   -> patched | failed   (one merge, failures logged)

There are no retries within a pass; the next scheduled pass is the retry.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from opentelemetry import trace

from .errors import TimestampParseError, WriteFailureError
from .patch import PREPARATION_ATTRIBUTE, STATUS_ATTRIBUTE, DateTimeProperty, TextProperty
from .timestamps import canonical_rfc3339

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterable, Mapping

    from .model import ExternalStatusRecord, FacilityStatus, StoredEntitySummary
    from .patch import FragmentProperty, PatchFragment
    from .ports import EntityMerger

log = getLogger(__name__)
tracer = trace.get_tracer(__name__)

DEFAULT_RECORD_DELAY_SECONDS = 1.0


class RecordOutcome(StrEnum):
    SKIPPED = "skipped"
    UNMATCHED = "unmatched"
    UNCHANGED = "unchanged"
    PATCHED = "patched"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class ReconciliationDecision:
    """What, if anything, must be written back for one matched record."""

    entity_id: str
    status: FacilityStatus | None = None
    last_preparation: str | None = None

    @property
    def status_changed(self) -> bool:
        return self.status is not None

    @property
    def preparation_changed(self) -> bool:
        return self.last_preparation is not None

    @property
    def is_noop(self) -> bool:
        return not (self.status_changed or self.preparation_changed)

    @property
    def fragment(self) -> PatchFragment:
        properties: list[FragmentProperty] = []
        if self.status is not None:
            properties.append(TextProperty(STATUS_ATTRIBUTE, str(self.status)))
        if self.last_preparation is not None:
            properties.append(DateTimeProperty(PREPARATION_ATTRIBUTE, self.last_preparation))
        return tuple(properties)


def _comparable(stored: str) -> str:
    """Canonical form of a stored preparation time, or the raw value if it does not parse.

    Broker values written with fractional seconds or `+00:00` compare equal to the
    canonical feed value instead of being rewritten on every pass.
    """

    try:
        return canonical_rfc3339(stored)
    except TimestampParseError:
        return stored


def decide(record: ExternalStatusRecord, summary: StoredEntitySummary) -> ReconciliationDecision:
    """Compare a feed record with the stored summary of the same facility."""

    current_status = record.status
    new_status: FacilityStatus | None = None
    # an empty stored status means the broker never had an opinion; do not assert one
    if summary.status and summary.status != current_status:
        log.info("Entity %s has changed status to %s", summary.entity_id, current_status)
        new_status = current_status

    new_preparation: str | None = None
    if record.last_preparation:
        try:
            prepared_at = canonical_rfc3339(record.last_preparation)
        except TimestampParseError:
            log.warning(
                "Failed to parse preparation timestamp %r for %s",
                record.last_preparation,
                summary.entity_id,
            )
        else:
            if prepared_at != _comparable(summary.last_preparation):
                log.info(
                    "Last known preparation of %s has changed from %r to %s",
                    summary.entity_id,
                    summary.last_preparation,
                    prepared_at,
                )
                new_preparation = prepared_at

    return ReconciliationDecision(
        entity_id=summary.entity_id,
        status=new_status,
        last_preparation=new_preparation,
    )


@dataclass(slots=True)
class ReconciliationReport:
    """Outcome of reconciling one status feed against the directory."""

    outcomes: dict[str, RecordOutcome] = field(default_factory=dict)

    def record(self, facility_key: str, outcome: RecordOutcome) -> None:
        self.outcomes[facility_key] = outcome

    def count(self, outcome: RecordOutcome) -> int:
        return sum(1 for value in self.outcomes.values() if value is outcome)

    @property
    def skipped(self) -> int:
        return self.count(RecordOutcome.SKIPPED)

    @property
    def unmatched(self) -> int:
        return self.count(RecordOutcome.UNMATCHED)

    @property
    def unchanged(self) -> int:
        return self.count(RecordOutcome.UNCHANGED)

    @property
    def patched(self) -> int:
        return self.count(RecordOutcome.PATCHED)

    @property
    def failed(self) -> int:
        return self.count(RecordOutcome.FAILED)


async def reconcile(
    records: Iterable[ExternalStatusRecord],
    directory: Mapping[str, StoredEntitySummary],
    merger: EntityMerger,
    *,
    delay_seconds: float = DEFAULT_RECORD_DELAY_SECONDS,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> ReconciliationReport:
    """Write back the changed attributes of every matched record.

    A merge failure is logged and the remaining records are still processed.
    ``sleep`` is awaited for ``delay_seconds`` after every matched record to bound
    the request rate against the broker.
    """

    report = ReconciliationReport()
    with tracer.start_as_current_span("update-broker-status") as span:
        for record in records:
            if not record.external_id:
                report.record(record.facility_key, RecordOutcome.SKIPPED)
                continue

            summary = directory.get(record.external_id)
            if summary is None:
                log.info("Entity %s (%s) not found", record.external_id, record.facility_key)
                report.record(record.facility_key, RecordOutcome.UNMATCHED)
                continue

            log.info(
                "Found preparation status for %s (%s)", summary.entity_id, record.facility_key
            )
            outcome = await _apply(decide(record, summary), merger)
            report.record(record.facility_key, outcome)
            await sleep(delay_seconds)

        span.set_attribute("reconcile.patched", report.patched)
        span.set_attribute("reconcile.failed", report.failed)
    return report


async def _apply(decision: ReconciliationDecision, merger: EntityMerger) -> RecordOutcome:
    if decision.is_noop:
        log.info("Neither status nor preparation time of %s has changed", decision.entity_id)
        return RecordOutcome.UNCHANGED
    try:
        await merger.merge_entity(decision.entity_id, decision.fragment)
    except WriteFailureError:
        log.exception("Failed to merge entity %s", decision.entity_id)
        return RecordOutcome.FAILED
    return RecordOutcome.PATCHED
