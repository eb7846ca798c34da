"""Application configuration helpers."""

from __future__ import annotations

from .broker import (
    DEFAULT_CONTEXT_URL,
    LINK_HEADER,
    BrokerConfig,
    broker_headers,
    default_broker_resilience,
    get_broker_config,
    get_type_formats,
)
from .env import env_flag, env_or_default, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging, get_log_level
from .provider import ProviderConfig, default_provider_resilience, get_provider_config

__all__ = [
    "DEFAULT_CONTEXT_URL",
    "LINK_HEADER",
    "BrokerConfig",
    "ConfigurationError",
    "MissingConfigurationError",
    "ProviderConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "broker_headers",
    "configure_logging",
    "default_broker_resilience",
    "default_provider_resilience",
    "env_flag",
    "env_or_default",
    "get_broker_config",
    "get_log_level",
    "get_provider_config",
    "get_type_formats",
    "require_env_var",
    "require_env_vars",
]
