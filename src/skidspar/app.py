"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from opentelemetry import trace

from skidspar.adapters.langdspar import RouteStatusClient
from skidspar.adapters.ngsild import ContextBrokerClient
from skidspar.config import get_broker_config, get_provider_config
from skidspar.domain.directory import DEFAULT_PAGE_LIMIT, build_directory
from skidspar.domain.reconciliation import DEFAULT_RECORD_DELAY_SECONDS, reconcile

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from skidspar.adapters.http_resilience import ResilientClient
    from skidspar.config import BrokerConfig, ProviderConfig, ResilienceConfig
    from skidspar.domain.model import EntityTypeFormat
    from skidspar.domain.ports import ContextBroker, StatusFeed
    from skidspar.domain.reconciliation import ReconciliationReport

    ClientFactory = Callable[[ResilienceConfig], ResilientClient]

log = getLogger(__name__)
tracer = trace.get_tracer(__name__)


@dataclass(slots=True, frozen=True)
class SyncOutcome:
    """Outcome of one reconciliation pass."""

    directory_size: int
    feed_size: int
    report: ReconciliationReport


async def run_status_sync(
    *,
    broker: ContextBroker,
    feed: StatusFeed,
    type_formats: Sequence[EntityTypeFormat],
    page_limit: int = DEFAULT_PAGE_LIMIT,
    delay_seconds: float = DEFAULT_RECORD_DELAY_SECONDS,
) -> SyncOutcome:
    """Run one directory/fetch/reconcile pass.

    Failing to build the directory or to fetch the feed aborts the pass; failures
    while patching single entities do not.
    """

    with tracer.start_as_current_span("integrate-status-from-langdspar"):
        directory = await build_directory(broker, type_formats, limit=page_limit)
        records = await feed.fetch_route_status()
        report = await reconcile(records, directory, broker, delay_seconds=delay_seconds)

    log.info(
        "Finished status sync: directory=%s, feed=%s, patched=%s, unchanged=%s, "
        "unmatched=%s, failed=%s, skipped=%s",
        len(directory),
        len(records),
        report.patched,
        report.unchanged,
        report.unmatched,
        report.failed,
        report.skipped,
    )
    return SyncOutcome(directory_size=len(directory), feed_size=len(records), report=report)


def sync_facility_status(
    *,
    broker_config: BrokerConfig | None = None,
    provider_config: ProviderConfig | None = None,
    client_factory: ClientFactory | None = None,
    delay_seconds: float = DEFAULT_RECORD_DELAY_SECONDS,
) -> SyncOutcome:
    """Synchronise facility status from längdspår.se into the context broker."""

    effective_broker_config = broker_config or get_broker_config()
    effective_provider_config = provider_config or get_provider_config()
    log.info(
        "Starting status sync: broker=%s, tenant=%s, location=%s, types=%s",
        effective_broker_config.url,
        effective_broker_config.tenant,
        effective_provider_config.location,
        [type_format.entity_type for type_format in effective_broker_config.type_formats],
    )

    async def run() -> SyncOutcome:
        feed = RouteStatusClient(config=effective_provider_config, client_factory=client_factory)
        async with ContextBrokerClient(
            config=effective_broker_config, client_factory=client_factory
        ) as broker:
            return await run_status_sync(
                broker=broker,
                feed=feed,
                type_formats=effective_broker_config.type_formats,
                page_limit=effective_broker_config.page_limit,
                delay_seconds=delay_seconds,
            )

    return asyncio.run(run())
