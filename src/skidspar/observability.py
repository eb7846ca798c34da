"""OpenTelemetry tracing setup for the integration job."""

from __future__ import annotations

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider

from skidspar import __version__

SERVICE_NAME = "integration-cip-skidspar"

_provider: TracerProvider | None = None


def configure_tracing(service_name: str = SERVICE_NAME) -> TracerProvider:
    global _provider  # noqa: PLW0603
    if _provider is not None:
        return _provider
    _provider = TracerProvider(
        resource=Resource.create({"service.name": service_name, "service.version": __version__})
    )
    trace.set_tracer_provider(_provider)
    return _provider


def shutdown_tracing() -> None:
    """Flush pending spans and release the provider; safe to call when unconfigured."""

    global _provider  # noqa: PLW0603
    if _provider is None:
        return
    _provider.force_flush()
    _provider.shutdown()
    _provider = None
