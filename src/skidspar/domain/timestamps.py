"""RFC3339 helpers for preparation timestamps."""

from __future__ import annotations

import re
from datetime import datetime, timedelta

from .errors import TimestampParseError

_RFC3339 = re.compile(
    r"^(?P<date>\d{4}-\d{2}-\d{2})T(?P<time>\d{2}:\d{2}:\d{2})(?:\.\d+)?"
    r"(?P<offset>Z|[+-]\d{2}:\d{2})$"
)


def parse_rfc3339(value: str) -> datetime:
    """Parse ``value`` as an RFC3339 timestamp, dropping fractional seconds."""

    match = _RFC3339.match(value.strip())
    if match is None:
        raise TimestampParseError(value)
    offset = match["offset"]
    if offset == "Z":
        offset = "+00:00"
    try:
        return datetime.fromisoformat(f"{match['date']}T{match['time']}{offset}")
    except ValueError as exc:
        raise TimestampParseError(value) from exc


def format_rfc3339(value: datetime) -> str:
    """Serialise an aware datetime with whole seconds and ``Z`` for UTC."""

    if value.tzinfo is None:
        raise ValueError("RFC3339 timestamps require a timezone")
    rendered = value.replace(microsecond=0).isoformat(timespec="seconds")
    if value.utcoffset() == timedelta(0):
        return rendered.removesuffix("+00:00") + "Z"
    return rendered


def canonical_rfc3339(value: str) -> str:
    return format_rfc3339(parse_rfc3339(value))
