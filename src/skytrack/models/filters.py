"""Filter configuration model."""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from skytrack._constants import (
    DEFAULT_MAX_ALTITUDE_FT,
    DEFAULT_MAX_SPEED_MPH,
    DEFAULT_MIN_ALTITUDE_FT,
    DEFAULT_MIN_SPEED_MPH,
)


class SortKey(StrEnum):
    ALTITUDE_DESC = "altitude-desc"
    ALTITUDE_ASC = "altitude-asc"
    SPEED_DESC = "speed-desc"
    SPEED_ASC = "speed-asc"
    CALLSIGN = "callsign"


class FilterConfig(BaseModel):
    """Immutable filter and sort settings for one reconciliation cycle.

    Mutators never change an instance in place; they return a new value
    so a cycle that captured a config keeps seeing the same settings.

    ``ground_only`` and ``air_only`` are kept mutually exclusive by
    :meth:`with_ground_only` / :meth:`with_air_only`. A config built
    directly with both set is accepted; the predicate then treats the
    pair as "exclude nothing".
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    categories: frozenset[str] = Field(default_factory=frozenset)
    min_altitude_ft: float = DEFAULT_MIN_ALTITUDE_FT
    max_altitude_ft: float = DEFAULT_MAX_ALTITUDE_FT
    min_speed_mph: float = DEFAULT_MIN_SPEED_MPH
    max_speed_mph: float = DEFAULT_MAX_SPEED_MPH
    search: str = ""
    ground_only: bool = False
    air_only: bool = False
    sort_key: SortKey = SortKey.ALTITUDE_DESC

    @field_validator("categories", mode="before")
    @classmethod
    def _coerce_categories(cls, value: object) -> object:
        if isinstance(value, str):
            return frozenset({value})
        if isinstance(value, Iterable):
            return frozenset(value)
        return value

    @field_validator("search", mode="before")
    @classmethod
    def _coerce_search(cls, value: object) -> str:
        return "" if value is None else str(value)

    @model_validator(mode="after")
    def _check_ranges(self) -> FilterConfig:
        if self.min_altitude_ft > self.max_altitude_ft:
            raise ValueError("min_altitude_ft must not exceed max_altitude_ft")
        if self.min_speed_mph > self.max_speed_mph:
            raise ValueError("min_speed_mph must not exceed max_speed_mph")
        return self

    @property
    def has_flag_conflict(self) -> bool:
        return self.ground_only and self.air_only

    # ------------------------------------------------------------------
    # Mutators (return new values)
    # ------------------------------------------------------------------

    def with_ground_only(self, enabled: bool) -> FilterConfig:
        if enabled:
            return self.model_copy(update={"ground_only": True, "air_only": False})
        return self.model_copy(update={"ground_only": False})

    def with_air_only(self, enabled: bool) -> FilterConfig:
        if enabled:
            return self.model_copy(update={"air_only": True, "ground_only": False})
        return self.model_copy(update={"air_only": False})

    def with_categories(self, categories: Iterable[str]) -> FilterConfig:
        return self.model_copy(update={"categories": frozenset(categories)})

    def with_category(self, category: str, selected: bool) -> FilterConfig:
        if selected:
            return self.with_categories(self.categories | {category})
        return self.with_categories(self.categories - {category})

    def with_altitude_range(self, minimum: float | None = None, maximum: float | None = None) -> FilterConfig:
        """Return a copy with new altitude bounds.

        Validation runs on the resulting pair, so the bounds can be moved
        independently as long as the final range is not inverted.
        """
        return self._validated_copy(
            min_altitude_ft=self.min_altitude_ft if minimum is None else float(minimum),
            max_altitude_ft=self.max_altitude_ft if maximum is None else float(maximum),
        )

    def with_speed_range(self, minimum: float | None = None, maximum: float | None = None) -> FilterConfig:
        return self._validated_copy(
            min_speed_mph=self.min_speed_mph if minimum is None else float(minimum),
            max_speed_mph=self.max_speed_mph if maximum is None else float(maximum),
        )

    def with_search(self, search: str | None) -> FilterConfig:
        return self.model_copy(update={"search": search or ""})

    def with_sort_key(self, sort_key: SortKey | str) -> FilterConfig:
        return self.model_copy(update={"sort_key": SortKey(sort_key)})

    def reset(self, defaults: FilterConfig | None = None) -> FilterConfig:
        """Restore bounds, search, flags and sort; keep the category selection."""
        base = defaults if defaults is not None else FilterConfig()
        return base.model_copy(update={"categories": self.categories})

    def _validated_copy(self, **update: object) -> FilterConfig:
        # model_copy skips validation; round-trip through the constructor.
        data = self.model_dump()
        data.update(update)
        return FilterConfig.model_validate(data)
