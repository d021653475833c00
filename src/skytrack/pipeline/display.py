"""Display formatting for a single aircraft.

Absent values render as ``N/A``. Aggregation and sorting treat the
same fields as ``0``.
"""

from __future__ import annotations

from skytrack._constants import NOT_AVAILABLE
from skytrack.models.aircraft import Aircraft


def _number(value: float | None, digits: int = 0, unit: str = "") -> str:
    if value is None:
        return NOT_AVAILABLE
    text = f"{value:,.{digits}f}"
    return f"{text} {unit}" if unit else text


def describe(aircraft: Aircraft) -> dict[str, str]:
    """Human-readable fields for an aircraft detail view."""
    position = aircraft.position
    if position is None:
        position_text = NOT_AVAILABLE
    else:
        position_text = f"{position.latitude:.4f}, {position.longitude:.4f}"

    return {
        "callsign": aircraft.callsign or NOT_AVAILABLE,
        "icao24": aircraft.icao24,
        "country": aircraft.category,
        "altitude": _number(aircraft.altitude_ft, unit="ft"),
        "speed": _number(aircraft.speed_mph, unit="mph"),
        "heading": NOT_AVAILABLE if aircraft.heading is None else f"{aircraft.heading:.0f}°",
        "position": position_text,
        "vertical_rate": _number(aircraft.vertical_rate_fpm, unit="ft/min"),
        "on_ground": "Yes" if aircraft.on_ground else "No",
        "squawk": aircraft.squawk or NOT_AVAILABLE,
    }


def format_copy_text(aircraft: Aircraft) -> str:
    return f"Callsign: {aircraft.callsign or NOT_AVAILABLE}, ICAO24: {aircraft.icao24}"
