from __future__ import annotations

import asyncio
import json
from typing import TYPE_CHECKING

import httpx
import pytest

from skidspar.app import SyncOutcome, run_status_sync, sync_facility_status
from skidspar.domain.errors import SourceRejectedError, SourceUnavailableError
from skidspar.domain.model import EntityType
from skidspar.domain.reconciliation import RecordOutcome
from tests.helpers.facilities import (
    TRAIL_PREFIX,
    FakeContextBroker,
    FakeStatusFeed,
    make_record,
    make_summary,
)
from tests.helpers.http import make_client_factory

if TYPE_CHECKING:
    from skidspar.config import BrokerConfig, ProviderConfig
    from skidspar.domain.model import EntityTypeFormat, ExternalStatusRecord


def test_run_status_sync_reconciles_feed_against_directory(
    type_formats: tuple[EntityTypeFormat, ...],
) -> None:
    broker = FakeContextBroker(
        {EntityType.EXERCISE_TRAIL: [make_summary("650", status="open"), make_summary("651")]}
    )
    feed = FakeStatusFeed(
        [make_record("650", is_active=False), make_record("651"), make_record("999")]
    )

    outcome = asyncio.run(
        run_status_sync(broker=broker, feed=feed, type_formats=type_formats, delay_seconds=0)
    )

    assert isinstance(outcome, SyncOutcome)
    assert outcome.directory_size == 2
    assert outcome.feed_size == 3
    assert outcome.report.patched == 1
    assert outcome.report.unchanged == 1
    assert outcome.report.unmatched == 1
    assert [entity_id for entity_id, _ in broker.merge_calls] == [f"{TRAIL_PREFIX}650"]


def test_run_status_sync_aborts_when_feed_is_unavailable(
    type_formats: tuple[EntityTypeFormat, ...],
) -> None:
    class UnavailableFeed(FakeStatusFeed):
        async def fetch_route_status(self) -> list[ExternalStatusRecord]:
            raise SourceUnavailableError("timed out", source="längdspår.se")

    broker = FakeContextBroker({EntityType.EXERCISE_TRAIL: [make_summary("650", status="open")]})

    with pytest.raises(SourceUnavailableError):
        asyncio.run(
            run_status_sync(
                broker=broker, feed=UnavailableFeed([]), type_formats=type_formats, delay_seconds=0
            )
        )

    assert broker.merge_calls == []


def test_sync_facility_status_end_to_end(
    broker_config: BrokerConfig,
    provider_config: ProviderConfig,
    exercise_trail_listing: list[dict[str, object]],
    sports_field_listing: list[dict[str, object]],
    route_status_payload: dict[str, object],
) -> None:
    merges: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "provider.example.com":
            return httpx.Response(200, json=route_status_payload)
        if request.method == "PATCH":
            merges.append(request)
            return httpx.Response(204)
        listing = {
            "ExerciseTrail": exercise_trail_listing,
            "SportsField": sports_field_listing,
        }[request.url.params["type"]]
        return httpx.Response(200, json=listing)

    outcome = sync_facility_status(
        broker_config=broker_config,
        provider_config=provider_config,
        client_factory=make_client_factory(handler),
        delay_seconds=0,
    )

    # 650 is closed in the broker but active in the feed, and was prepared at another time
    assert outcome.directory_size == 3
    assert outcome.report.outcomes == {
        "Kallaspåret:650": RecordOutcome.PATCHED,
        "Södra spåret:651": RecordOutcome.UNCHANGED,
        "Okänt spår": RecordOutcome.SKIPPED,
    }
    assert len(merges) == 1
    assert merges[0].url.path == f"/ngsi-ld/v1/entities/{TRAIL_PREFIX}650"
    body = json.loads(merges[0].content)
    assert body["status"] == {"type": "Property", "value": "open"}
    assert body["dateLastPreparation"]["value"]["@value"] == "2021-12-17T16:54:02Z"


def test_sync_facility_status_aborts_on_rejected_listing(
    broker_config: BrokerConfig,
    provider_config: ProviderConfig,
) -> None:
    requested_hosts: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested_hosts.append(request.url.host)
        return httpx.Response(500, text="internal error")

    with pytest.raises(SourceRejectedError):
        sync_facility_status(
            broker_config=broker_config,
            provider_config=provider_config,
            client_factory=make_client_factory(handler),
            delay_seconds=0,
        )

    assert requested_hosts == ["broker.example.com"]
