"""Filter predicate.

All criteria are conjunctive. Range bounds are inclusive and absent
numeric fields are compared as ``0``.
"""

from __future__ import annotations

from collections.abc import Iterable

from skytrack.models.aircraft import Aircraft
from skytrack.models.filters import FilterConfig


def matches(aircraft: Aircraft, config: FilterConfig) -> bool:
    """Return True if *aircraft* passes every criterion in *config*."""
    if aircraft.category not in config.categories:
        return False

    altitude = aircraft.altitude_or_zero
    if altitude < config.min_altitude_ft or altitude > config.max_altitude_ft:
        return False

    speed = aircraft.speed_or_zero
    if speed < config.min_speed_mph or speed > config.max_speed_mph:
        return False

    if config.search and config.search.casefold() not in (aircraft.callsign or "").casefold():
        return False

    # Both flags set is a conflict the mutators never produce; exclude nothing.
    if config.has_flag_conflict:
        return True
    if config.ground_only and not aircraft.on_ground:
        return False
    return not (config.air_only and aircraft.on_ground)


def filter_aircraft(aircraft: Iterable[Aircraft], config: FilterConfig) -> list[Aircraft]:
    return [item for item in aircraft if matches(item, config)]
