"""Export of the filtered set.

Pure transforms: nothing here touches tracker state.
"""

from __future__ import annotations

import json
import math
from collections.abc import Iterable
from datetime import UTC, datetime

from pydantic import TypeAdapter

from skytrack.models.aircraft import Aircraft
from skytrack.models.export import ExportRecord

_RECORDS_ADAPTER = TypeAdapter(list[ExportRecord])


def round_half_away(value: float | None) -> int | None:
    """Round to the nearest integer, halves away from zero."""
    if value is None:
        return None
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def to_export_record(aircraft: Aircraft) -> ExportRecord:
    position = aircraft.position
    return ExportRecord(
        icao24=aircraft.icao24,
        callsign=aircraft.callsign or "",
        origin_country=aircraft.origin_country,
        longitude=position.longitude if position is not None else None,
        latitude=position.latitude if position is not None else None,
        altitude_feet=round_half_away(aircraft.altitude_ft),
        on_ground=aircraft.on_ground,
        velocity_mph=round_half_away(aircraft.speed_mph),
        heading=aircraft.heading,
        vertical_rate_fpm=aircraft.vertical_rate_fpm,
        squawk=aircraft.squawk,
    )


def export_records(aircraft: Iterable[Aircraft]) -> list[ExportRecord]:
    return [to_export_record(item) for item in aircraft]


def export_json(records: Iterable[ExportRecord], *, indent: int | None = 2) -> str:
    """Serialize export rows to a JSON array."""
    payload = _RECORDS_ADAPTER.dump_python(list(records), mode="json")
    return json.dumps(payload, indent=indent)


def export_filename(now: datetime | None = None) -> str:
    """File name for an export taken at *now* (UTC), e.g. ``aircraft_2026-01-01T10-00-00.json``."""
    moment = now if now is not None else datetime.now(UTC)
    return f"aircraft_{moment.strftime('%Y-%m-%dT%H-%M-%S')}.json"
