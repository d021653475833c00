"""Builders for aircraft and raw state vectors used across tests."""

from __future__ import annotations

from typing import Any

from skytrack.models.aircraft import Aircraft, Position


def state_vector(
    icao24: Any = "a1",
    *,
    callsign: Any = "TEST1   ",
    country: Any = "United States",
    lat: Any = 40.0,
    lon: Any = -74.0,
    alt_m: Any = 3048.0,
    ground: Any = False,
    velocity: Any = 200.0,
    heading: Any = 90.0,
    vertical_rate: Any = 0.0,
    squawk: Any = "1200",
) -> list[Any]:
    """Build an OpenSky-style state vector in source units."""
    return [
        icao24,
        callsign,
        country,
        1_700_000_000,
        1_700_000_001,
        lon,
        lat,
        alt_m,
        ground,
        velocity,
        heading,
        vertical_rate,
        None,
        alt_m,
        squawk,
        False,
        0,
    ]


def aircraft(
    icao24: str = "A1",
    *,
    lat: float | None = 40.0,
    lon: float | None = -74.0,
    altitude_ft: float | None = 10_000.0,
    speed_mph: float | None = 400.0,
    on_ground: bool = False,
    callsign: str | None = "TEST1",
    country: str | None = "United States",
) -> Aircraft:
    position = Position(latitude=lat, longitude=lon) if lat is not None and lon is not None else None
    return Aircraft(
        icao24=icao24,
        callsign=callsign,
        origin_country=country,
        position=position,
        altitude_ft=altitude_ft,
        speed_mph=speed_mph,
        on_ground=on_ground,
    )
