"""Deterministic configuration change policy.

Turns a :class:`ConfigChange` into a new :class:`FilterConfig`. The
previous value is never mutated, so a cycle that already captured it is
unaffected.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from skytrack.ingestion.normalize import safe_bool, safe_float
from skytrack.models.filters import FilterConfig
from skytrack.state.events import ConfigChange, ConfigCommand


def _number(change: ConfigChange) -> float:
    value = safe_float(change.value)
    if value is None:
        raise ValueError(f"{change.command} requires a numeric value, got {change.value!r}")
    return value


def _categories(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Iterable):
        return [str(item) for item in value]
    raise ValueError(f"expected a category or iterable of categories, got {value!r}")


def apply_change(
    config: FilterConfig,
    change: ConfigChange,
    *,
    defaults: FilterConfig | None = None,
) -> FilterConfig:
    """Return the configuration that results from *change*.

    Moving one range bound past the other drags the other bound along,
    so a range is never inverted. Display commands leave the filter
    unchanged.

    Raises
    ------
    ValueError
        If the change carries a value of the wrong kind.
    """
    command = change.command

    if change.is_display_change:
        return config

    if command == ConfigCommand.SET_SEARCH:
        return config.with_search(None if change.value is None else str(change.value))

    if command == ConfigCommand.SET_MIN_ALTITUDE:
        value = _number(change)
        return config.with_altitude_range(value, max(value, config.max_altitude_ft))
    if command == ConfigCommand.SET_MAX_ALTITUDE:
        value = _number(change)
        return config.with_altitude_range(min(value, config.min_altitude_ft), value)
    if command == ConfigCommand.SET_MIN_SPEED:
        value = _number(change)
        return config.with_speed_range(value, max(value, config.max_speed_mph))
    if command == ConfigCommand.SET_MAX_SPEED:
        value = _number(change)
        return config.with_speed_range(min(value, config.min_speed_mph), value)

    if command == ConfigCommand.SET_GROUND_ONLY:
        return config.with_ground_only(safe_bool(change.value))
    if command == ConfigCommand.SET_AIR_ONLY:
        return config.with_air_only(safe_bool(change.value))

    if command == ConfigCommand.SET_SORT_KEY:
        return config.with_sort_key(str(change.value))

    if command == ConfigCommand.SELECT_CATEGORY:
        return config.with_categories(config.categories | set(_categories(change.value)))
    if command == ConfigCommand.DESELECT_CATEGORY:
        return config.with_categories(config.categories - set(_categories(change.value)))
    if command == ConfigCommand.SELECT_ALL_CATEGORIES:
        return config.with_categories(config.categories | set(_categories(change.value)))
    if command == ConfigCommand.DESELECT_ALL_CATEGORIES:
        return config.with_categories(())

    if command == ConfigCommand.RESET_FILTERS:
        return config.reset(defaults)

    raise ValueError(f"unsupported command {command!r}")
