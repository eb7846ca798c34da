"""Failure taxonomy for a reconciliation pass.

Only failures while building the directory or fetching the status feed abort a
pass. The remaining conditions are raised per record and isolated by the
reconciler.
"""

from __future__ import annotations


class IntegrationError(RuntimeError):
    """Base class for every failure raised while integrating facility status."""


class SourceUnavailableError(IntegrationError):
    """The provider or the context broker could not be reached."""

    def __init__(self, message: str, *, source: str) -> None:
        super().__init__(message)
        self.source = source


class SourceRejectedError(IntegrationError):
    """A source answered with an HTTP status other than the expected success code."""

    def __init__(
        self,
        *,
        source: str,
        status_code: int,
        content_type: str | None = None,
        body: str = "",
    ) -> None:
        super().__init__(
            f"{source} returned status code {status_code} "
            f"(content-type: {content_type or 'n/a'}, body: {body})"
        )
        self.source = source
        self.status_code = status_code
        self.content_type = content_type
        self.body = body


class MalformedResponseError(IntegrationError):
    """A payload could not be decoded into the expected shape."""

    def __init__(self, message: str, *, source: str) -> None:
        super().__init__(message)
        self.source = source


class EntityNotFoundError(IntegrationError):
    """The context broker holds no entity with the requested identifier."""

    def __init__(self, entity_id: str) -> None:
        super().__init__(f"no such entity in broker: {entity_id}")
        self.entity_id = entity_id


class TimestampParseError(IntegrationError, ValueError):
    """A preparation timestamp does not conform to RFC3339."""

    def __init__(self, value: str) -> None:
        super().__init__(f"not an RFC3339 timestamp: {value!r}")
        self.value = value


class WriteFailureError(IntegrationError):
    """The context broker rejected a merge, or could not be reached for it."""

    def __init__(self, message: str, *, entity_id: str) -> None:
        super().__init__(message)
        self.entity_id = entity_id


__all__ = [
    "EntityNotFoundError",
    "IntegrationError",
    "MalformedResponseError",
    "SourceRejectedError",
    "SourceUnavailableError",
    "TimestampParseError",
    "WriteFailureError",
]
