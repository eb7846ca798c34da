from __future__ import annotations

import pytest

from skidspar.config import BrokerConfig, ProviderConfig, ResilienceConfig
from skidspar.config.broker import broker_headers
from skidspar.domain.model import EntityType, EntityTypeFormat
from tests.helpers.facilities import FIELD_PREFIX, TRAIL_PREFIX

BROKER_URL = "http://broker.example.com"


@pytest.fixture
def type_formats() -> tuple[EntityTypeFormat, ...]:
    return (
        EntityTypeFormat(f"{TRAIL_PREFIX}%s", EntityType.EXERCISE_TRAIL),
        EntityTypeFormat(f"{FIELD_PREFIX}%s", EntityType.SPORTS_FIELD),
    )


@pytest.fixture
def broker_config(type_formats: tuple[EntityTypeFormat, ...]) -> BrokerConfig:
    return BrokerConfig(
        url=BROKER_URL,
        type_formats=type_formats,
        resilience=ResilienceConfig(
            name="context-broker",
            base_url=BROKER_URL,
            default_headers=broker_headers("default"),
        ),
    )


@pytest.fixture
def provider_config() -> ProviderConfig:
    return ProviderConfig(
        location="sundsvall",
        api_key="secret",
        resilience=ResilienceConfig(name="langdspar", base_url="https://provider.example.com"),
    )


@pytest.fixture
def exercise_trail_listing() -> list[dict[str, object]]:
    return [
        {
            "@context": [
                "https://raw.githubusercontent.com/diwise/context-broker/main/assets/jsonldcontexts/default-context.jsonld"
            ],
            "id": f"{TRAIL_PREFIX}650",
            "type": "ExerciseTrail",
            "name": "Motion 1 km Kallaspåret",
            "dateLastPreparation": {"@type": "DateTime", "@value": "2022-04-27T04:07:15Z"},
            "status": "closed",
        },
        {
            "id": f"{TRAIL_PREFIX}651",
            "type": "ExerciseTrail",
            "name": "Motion 2.5 km",
        },
    ]


@pytest.fixture
def sports_field_listing() -> list[dict[str, object]]:
    return [
        {
            "id": f"{FIELD_PREFIX}796",
            "type": "SportsField",
            "name": "Skolans grusplan och isbana",
            "category": ["skating", "floodlit", "ice-rink"],
        },
    ]


@pytest.fixture
def route_status_payload() -> dict[str, object]:
    return {
        "Ski": {
            "Kallaspåret:650": {
                "isActive": True,
                "externalId": "650",
                "lastPreparation": "2021-12-17T16:54:02Z",
            },
            "Södra spåret:651": {
                "isActive": False,
                "externalId": "651",
                "lastPreparation": "",
            },
            "Okänt spår": {
                "isActive": True,
                "externalId": "",
                "lastPreparation": "2021-12-17T16:54:02Z",
            },
        }
    }
