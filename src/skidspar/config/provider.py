"""längdspår.se configuration values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .env import require_env_vars
from .http_resilience import ResilienceConfig, RetryPolicy

LANGDSPAR_BASE_URL: Final[str] = "https://xn--lngdspr-5wao.se"
LANGDSPAR_TIMEOUT_SECONDS: Final[float] = 10.0


@dataclass(frozen=True, slots=True)
class ProviderConfig:
    """Holds längdspår.se API configuration values."""

    location: str
    api_key: str
    resilience: ResilienceConfig


def default_provider_resilience() -> ResilienceConfig:
    return ResilienceConfig(
        name="langdspar",
        base_url=LANGDSPAR_BASE_URL,
        timeout_seconds=LANGDSPAR_TIMEOUT_SECONDS,
        retry=RetryPolicy(total=2),
    )


def get_provider_config(*, resilience: ResilienceConfig | None = None) -> ProviderConfig:
    values = require_env_vars(("LS_LOCATION", "LS_API_KEY"))
    return ProviderConfig(
        location=values["LS_LOCATION"],
        api_key=values["LS_API_KEY"],
        resilience=resilience or default_provider_resilience(),
    )
