"""Tracker configuration for skytrack."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from skytrack._constants import (
    API_URL,
    DEFAULT_MAX_ALTITUDE_FT,
    DEFAULT_MAX_SPEED_MPH,
    DEFAULT_MIN_ALTITUDE_FT,
    DEFAULT_MIN_SPEED_MPH,
    TRAIL_MAX_POINTS,
    TRAIL_TTL_SECONDS,
    UPDATE_INTERVAL,
)
from skytrack.exceptions import SkytrackConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_number(name: str, value: str, cast: type[float] | type[int]) -> float | int:
    try:
        return cast(value.strip())
    except ValueError as exc:
        raise SkytrackConfigError(f"{name} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class TrackerConfig:
    """Tracker configuration.

    Parameters
    ----------
    api_url : str
        Snapshot endpoint returning ``{"states": [...]}``.
    refresh_interval : float
        Seconds between automatic refresh cycles.
    request_timeout : float
        Total HTTP timeout for one snapshot fetch, in seconds.
    trail_max_points : int
        Maximum number of positions kept per trail.
    trail_ttl : float
        Seconds after which a drawn trail segment is removed.
    show_trails : bool
        Record trail segments on every position update.
    clustering : bool
        Start with the sink in aggregate (clustered) mode.
    auto_refresh : bool
        Start the refresh scheduler when the tracker is opened.
    default_categories : tuple of str
        Origin countries accepted by default once a snapshot first
        contains one of them and no category has been selected yet.
    min_altitude_ft, max_altitude_ft : float
        Default altitude filter bounds.
    min_speed_mph, max_speed_mph : float
        Default speed filter bounds.
    """

    api_url: str = API_URL
    refresh_interval: float = UPDATE_INTERVAL
    request_timeout: float = 20.0
    trail_max_points: int = TRAIL_MAX_POINTS
    trail_ttl: float = TRAIL_TTL_SECONDS
    show_trails: bool = False
    clustering: bool = False
    auto_refresh: bool = True
    default_categories: tuple[str, ...] = ("Armenia",)
    min_altitude_ft: float = DEFAULT_MIN_ALTITUDE_FT
    max_altitude_ft: float = DEFAULT_MAX_ALTITUDE_FT
    min_speed_mph: float = DEFAULT_MIN_SPEED_MPH
    max_speed_mph: float = DEFAULT_MAX_SPEED_MPH

    def __post_init__(self) -> None:
        if self.refresh_interval <= 0:
            raise SkytrackConfigError("refresh_interval must be positive")
        if self.trail_max_points < 2:
            raise SkytrackConfigError("trail_max_points must be at least 2")
        if self.trail_ttl < 0:
            raise SkytrackConfigError("trail_ttl must not be negative")
        if self.min_altitude_ft > self.max_altitude_ft:
            raise SkytrackConfigError("min_altitude_ft must not exceed max_altitude_ft")
        if self.min_speed_mph > self.max_speed_mph:
            raise SkytrackConfigError("min_speed_mph must not exceed max_speed_mph")

    @classmethod
    def from_env(cls, **overrides: Any) -> TrackerConfig:
        """Create configuration from environment variables.

        Reads optional ``SKYTRACK_*`` variables. Explicit keyword
        arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        TrackerConfig
            Populated configuration.

        Raises
        ------
        SkytrackConfigError
            If a numeric variable cannot be parsed.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        url = env.get("SKYTRACK_API_URL")
        if url is not None:
            config_kwargs["api_url"] = url

        _ENV_NUMERIC_MAP: dict[str, tuple[str, type[float] | type[int]]] = {
            "SKYTRACK_REFRESH_INTERVAL": ("refresh_interval", float),
            "SKYTRACK_REQUEST_TIMEOUT": ("request_timeout", float),
            "SKYTRACK_TRAIL_MAX_POINTS": ("trail_max_points", int),
            "SKYTRACK_TRAIL_TTL": ("trail_ttl", float),
            "SKYTRACK_MIN_ALTITUDE_FT": ("min_altitude_ft", float),
            "SKYTRACK_MAX_ALTITUDE_FT": ("max_altitude_ft", float),
            "SKYTRACK_MIN_SPEED_MPH": ("min_speed_mph", float),
            "SKYTRACK_MAX_SPEED_MPH": ("max_speed_mph", float),
        }
        for env_key, (field_name, cast) in _ENV_NUMERIC_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_number(env_key, val, cast)

        _ENV_BOOL_MAP = {
            "SKYTRACK_SHOW_TRAILS": ("show_trails", False),
            "SKYTRACK_CLUSTERING": ("clustering", False),
            "SKYTRACK_AUTO_REFRESH": ("auto_refresh", True),
        }
        for env_key, (field_name, default) in _ENV_BOOL_MAP.items():
            if field_name not in overrides:
                config_kwargs[field_name] = _env_bool(env.get(env_key), default)

        # Comma-separated; an empty value disables the default selection.
        categories = env.get("SKYTRACK_DEFAULT_CATEGORIES")
        if categories is not None and "default_categories" not in overrides:
            config_kwargs["default_categories"] = tuple(
                item.strip() for item in categories.split(",") if item.strip()
            )

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
