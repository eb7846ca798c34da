"""Translate längdspår.se payloads into feed records."""

from __future__ import annotations

from typing import TYPE_CHECKING

from skidspar.domain.model import ExternalStatusRecord

if TYPE_CHECKING:
    from .schema import RouteStatusPayload, RouteStatusResponse


def parse_status_record(facility_key: str, payload: RouteStatusPayload) -> ExternalStatusRecord:
    return ExternalStatusRecord(
        facility_key=facility_key,
        external_id=payload.external_id,
        is_active=payload.is_active,
        last_preparation=payload.last_preparation,
    )


def parse_status_records(response: RouteStatusResponse) -> list[ExternalStatusRecord]:
    return [parse_status_record(key, payload) for key, payload in response.ski.items()]
