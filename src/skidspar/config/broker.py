"""Context broker configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

from skidspar.domain.directory import DEFAULT_PAGE_LIMIT
from skidspar.domain.model import ID_PLACEHOLDER, EntityType, EntityTypeFormat

from .env import env_flag, env_or_default, require_env_var
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_TENANT: Final[str] = "default"
BROKER_TIMEOUT_SECONDS: Final[float] = 15.0

DEFAULT_CONTEXT_URL: Final[str] = (
    "https://raw.githubusercontent.com/diwise/context-broker/main/assets/jsonldcontexts/"
    "default-context.jsonld"
)
LINK_HEADER: Final[str] = (
    f'<{DEFAULT_CONTEXT_URL}>; rel="http://www.w3.org/ns/json-ld#context"; '
    'type="application/ld+json"'
)
TENANT_HEADER: Final[str] = "NGSILD-Tenant"

# ordered: trails are queried first and win identifier collisions
TYPE_FORMAT_VARIABLES: Final[tuple[tuple[str, EntityType], ...]] = (
    ("NGSI_TRAILID_FORMAT", EntityType.EXERCISE_TRAIL),
    ("NGSI_SPORTSFIELDID_FORMAT", EntityType.SPORTS_FIELD),
)


@dataclass(frozen=True, slots=True)
class BrokerConfig:
    """Holds NGSI-LD context broker configuration values."""

    url: str
    tenant: str = DEFAULT_TENANT
    debug: bool = False
    type_formats: tuple[EntityTypeFormat, ...] = ()
    page_limit: int = DEFAULT_PAGE_LIMIT
    resilience: ResilienceConfig = field(default_factory=lambda: ResilienceConfig(name="broker"))


def broker_headers(tenant: str) -> dict[str, str]:
    """Headers sent on every broker request.

    The JSON-LD context `Link` header is added per read. Merges carry the context
    in their `application/ld+json` body and must not send it.
    """

    headers: dict[str, str] = {}
    if tenant != DEFAULT_TENANT:
        headers[TENANT_HEADER] = tenant
    return headers


def default_broker_resilience(url: str, tenant: str = DEFAULT_TENANT) -> ResilienceConfig:
    return ResilienceConfig(
        name="context-broker",
        base_url=url.rstrip("/"),
        timeout_seconds=BROKER_TIMEOUT_SECONDS,
        retry=RetryPolicy(),
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        default_headers=broker_headers(tenant),
    )


def get_type_formats() -> tuple[EntityTypeFormat, ...]:
    formats: list[EntityTypeFormat] = []
    for variable, entity_type in TYPE_FORMAT_VARIABLES:
        id_format = env_or_default(variable, ID_PLACEHOLDER)
        if id_format:
            formats.append(EntityTypeFormat(id_format=id_format, entity_type=entity_type))
    return tuple(formats)


def get_broker_config(*, resilience: ResilienceConfig | None = None) -> BrokerConfig:
    url = require_env_var("CONTEXT_BROKER_URL")
    tenant = env_or_default("CONTEXT_BROKER_TENANT", DEFAULT_TENANT) or DEFAULT_TENANT
    return BrokerConfig(
        url=url,
        tenant=tenant,
        debug=env_flag("CONTEXT_BROKER_CLIENT_DEBUG"),
        type_formats=get_type_formats(),
        resilience=resilience or default_broker_resilience(url, tenant),
    )
