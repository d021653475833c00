"""Configuration change events.

Every configuration surface (widgets, CLI flags, tests) converts its
input into these events. Only :func:`skytrack.state.commands.apply_change`
turns them into a new :class:`~skytrack.models.filters.FilterConfig`.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ConfigCommand(StrEnum):
    # Filter configuration
    SET_SEARCH = "set_search"
    SET_MIN_ALTITUDE = "set_min_altitude"
    SET_MAX_ALTITUDE = "set_max_altitude"
    SET_MIN_SPEED = "set_min_speed"
    SET_MAX_SPEED = "set_max_speed"
    SET_GROUND_ONLY = "set_ground_only"
    SET_AIR_ONLY = "set_air_only"
    SET_SORT_KEY = "set_sort_key"
    SELECT_CATEGORY = "select_category"
    DESELECT_CATEGORY = "deselect_category"
    SELECT_ALL_CATEGORIES = "select_all_categories"
    DESELECT_ALL_CATEGORIES = "deselect_all_categories"
    RESET_FILTERS = "reset_filters"
    # Tracker display options
    SET_SHOW_TRAILS = "set_show_trails"
    SET_CLUSTERING = "set_clustering"
    SET_AUTO_REFRESH = "set_auto_refresh"
    CLEAR_TRAILS = "clear_trails"


#: Commands that only change tracker display options, not the filter.
DISPLAY_COMMANDS: frozenset[ConfigCommand] = frozenset(
    {
        ConfigCommand.SET_SHOW_TRAILS,
        ConfigCommand.SET_CLUSTERING,
        ConfigCommand.SET_AUTO_REFRESH,
        ConfigCommand.CLEAR_TRAILS,
    }
)


class ConfigChange(BaseModel):
    """A discrete configuration change."""

    model_config = ConfigDict(frozen=True)

    command: ConfigCommand
    value: Any = None
    observed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def is_display_change(self) -> bool:
        return self.command in DISPLAY_COMMANDS
