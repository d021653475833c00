"""Normalization helpers.

Centralizes defensive parsing of OpenSky state vectors. Every helper
degrades bad input to ``None`` instead of raising.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from typing import Any

#: Positional layout of an OpenSky ``/states/all`` state vector.
STATE_VECTOR_FIELDS: tuple[str, ...] = (
    "icao24",
    "callsign",
    "origin_country",
    "time_position",
    "last_contact",
    "longitude",
    "latitude",
    "baro_altitude",
    "on_ground",
    "velocity",
    "true_track",
    "vertical_rate",
    "sensors",
    "geo_altitude",
    "squawk",
    "spi",
    "position_source",
)


def safe_float(value: Any) -> float | None:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if math.isnan(result) or math.isinf(result):
        return None
    return result


def safe_int(value: Any) -> int | None:
    parsed = safe_float(value)
    if parsed is None:
        return None
    return int(parsed)


def safe_str(value: Any) -> str | None:
    """Stringify and strip *value*; blank strings become ``None``."""
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None


def safe_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes"}
    parsed = safe_float(value)
    return bool(parsed)


def scaled(value: Any, factor: float) -> float | None:
    """Parse *value* and multiply by *factor*, keeping absence."""
    parsed = safe_float(value)
    if parsed is None:
        return None
    return parsed * factor


def state_vector_to_dict(record: Any) -> dict[str, Any]:
    """Map a positional state vector onto field names.

    Short vectors leave trailing fields missing; extra trailing values are
    ignored. Mappings are passed through (copied) so already-keyed records
    from other providers normalize the same way.
    """

    if isinstance(record, Mapping):
        return dict(record)
    if isinstance(record, (str, bytes)) or not isinstance(record, Sequence):
        return {}
    return {name: value for name, value in zip(STATE_VECTOR_FIELDS, record)}
