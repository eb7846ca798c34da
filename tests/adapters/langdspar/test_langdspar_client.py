from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import httpx
import pytest

from skidspar.adapters.langdspar import RouteStatusClient, RouteStatusResponse, parse_status_records
from skidspar.domain.errors import (
    MalformedResponseError,
    SourceRejectedError,
    SourceUnavailableError,
)
from skidspar.domain.model import ExternalStatusRecord
from tests.helpers.http import make_client_factory, raise_connect_error

if TYPE_CHECKING:
    from collections.abc import Callable

    from skidspar.config import ProviderConfig


def _fetch(
    config: ProviderConfig,
    handler: Callable[[httpx.Request], httpx.Response],
) -> list[ExternalStatusRecord]:
    client = RouteStatusClient(config=config, client_factory=make_client_factory(handler))
    return asyncio.run(client.fetch_route_status())


def test_fetch_route_status_requests_location_feed(
    provider_config: ProviderConfig,
    route_status_payload: dict[str, object],
) -> None:
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json=route_status_payload)

    records = _fetch(provider_config, handler)

    request = captured[0]
    assert request.method == "GET"
    assert request.url.host == "provider.example.com"
    assert request.url.path == "/api/locations/sundsvall/routes-status.json"
    assert request.url.params["apiKey"] == "secret"
    assert records == [
        ExternalStatusRecord(
            facility_key="Kallaspåret:650",
            external_id="650",
            is_active=True,
            last_preparation="2021-12-17T16:54:02Z",
        ),
        ExternalStatusRecord(
            facility_key="Södra spåret:651",
            external_id="651",
            is_active=False,
            last_preparation=None,
        ),
        ExternalStatusRecord(
            facility_key="Okänt spår",
            external_id="",
            is_active=True,
            last_preparation="2021-12-17T16:54:02Z",
        ),
    ]


def test_missing_ski_section_is_an_empty_feed(provider_config: ProviderConfig) -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"Ski": None})

    assert _fetch(provider_config, handler) == []


def test_missing_external_id_becomes_empty() -> None:
    response = RouteStatusResponse.model_validate({"Ski": {"Spår": {"isActive": False}}})

    assert parse_status_records(response) == [
        ExternalStatusRecord(facility_key="Spår", external_id="", is_active=False)
    ]


def test_entries_without_activity_are_inactive(provider_config: ProviderConfig) -> None:
    payload = {
        "Ski": {
            "Kallaspåret:650": {"isActive": True, "externalId": "650"},
            "Södra spåret:651": {"externalId": "651"},
            "Norra spåret:652": {"isActive": None, "externalId": "652"},
        }
    }

    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=payload)

    assert _fetch(provider_config, handler) == [
        ExternalStatusRecord(facility_key="Kallaspåret:650", external_id="650", is_active=True),
        ExternalStatusRecord(facility_key="Södra spåret:651", external_id="651", is_active=False),
        ExternalStatusRecord(facility_key="Norra spåret:652", external_id="652", is_active=False),
    ]


@pytest.mark.parametrize("status_code", [202, 401, 503])
def test_fetch_route_status_rejects_non_200(
    provider_config: ProviderConfig,
    status_code: int,
) -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, text="invalid api key")

    with pytest.raises(SourceRejectedError) as excinfo:
        _fetch(provider_config, handler)

    assert excinfo.value.status_code == status_code
    assert excinfo.value.body == "invalid api key"


def test_fetch_route_status_unreachable(provider_config: ProviderConfig) -> None:
    with pytest.raises(SourceUnavailableError) as excinfo:
        _fetch(provider_config, raise_connect_error)

    assert excinfo.value.source == "längdspår.se"


@pytest.mark.parametrize(
    "body",
    ["<html>maintenance</html>", '{"Ski": {"Spår": {"isActive": "maybe"}}}', '{"Ski": []}'],
)
def test_fetch_route_status_malformed(provider_config: ProviderConfig, body: str) -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text=body)

    with pytest.raises(MalformedResponseError):
        _fetch(provider_config, handler)
