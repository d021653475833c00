"""Aircraft state model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from skytrack._constants import METERS_TO_FEET, MPS_TO_FEET_PER_MINUTE, MPS_TO_MPH, UNKNOWN_CATEGORY
from skytrack.ingestion.normalize import safe_bool, safe_float, safe_int, safe_str, scaled, state_vector_to_dict


class Position(BaseModel):
    """A plottable latitude/longitude pair in degrees."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    latitude: float
    longitude: float

    def as_tuple(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)


class Aircraft(BaseModel):
    """One tracked aircraft, in display units.

    Numeric fields are ``None`` when the source did not report them.
    Aggregation and sorting read them through the ``*_or_zero``
    properties; display formatting shows them as ``N/A``.

    Parameters
    ----------
    icao24 : str
        Transponder address, unique within a snapshot.
    callsign : str or None
        Stripped callsign.
    origin_country : str or None
        Country of registration.
    position : Position or None
        Last reported position; ``None`` means not plottable.
    altitude_ft : float or None
        Barometric altitude in feet.
    on_ground : bool
        Whether the aircraft reports being on the ground.
    speed_mph : float or None
        Ground speed in mph.
    heading : float or None
        True track in degrees.
    vertical_rate_fpm : float or None
        Vertical rate in feet per minute.
    squawk : str or None
        Transponder code.
    raw : dict
        The state vector keyed by field name.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    icao24: str
    callsign: str | None = None
    origin_country: str | None = None
    position: Position | None = None
    time_position: int | None = None
    last_contact: int | None = None
    altitude_ft: float | None = None
    on_ground: bool = False
    speed_mph: float | None = None
    heading: float | None = None
    vertical_rate_fpm: float | None = None
    squawk: str | None = None
    raw: dict[str, Any] = Field(default_factory=dict)

    @field_validator("icao24", mode="before")
    @classmethod
    def _coerce_icao24(cls, value: Any) -> str:
        text = safe_str(value)
        if text is None:
            raise ValueError("icao24 must be non-empty")
        return text

    @field_validator("callsign", "origin_country", "squawk", mode="before")
    @classmethod
    def _coerce_labels(cls, value: Any) -> str | None:
        return safe_str(value)

    @field_validator("altitude_ft", "speed_mph", "heading", "vertical_rate_fpm", mode="before")
    @classmethod
    def _coerce_floats(cls, value: Any) -> float | None:
        return safe_float(value)

    @field_validator("time_position", "last_contact", mode="before")
    @classmethod
    def _coerce_ints(cls, value: Any) -> int | None:
        return safe_int(value)

    @field_validator("on_ground", mode="before")
    @classmethod
    def _coerce_on_ground(cls, value: Any) -> bool:
        return safe_bool(value)

    @model_validator(mode="before")
    @classmethod
    def _ensure_raw(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        merged = dict(values)
        merged.setdefault("raw", values)
        return merged

    @classmethod
    def from_state_vector(cls, record: Any) -> Aircraft:
        """Build an aircraft from a raw state vector in source units.

        Raises :class:`pydantic.ValidationError` if the record has no
        usable ``icao24``; every other field degrades to absent.
        """
        data = state_vector_to_dict(record)

        position: Position | None = None
        latitude = safe_float(data.get("latitude"))
        longitude = safe_float(data.get("longitude"))
        if latitude is not None and longitude is not None:
            position = Position(latitude=latitude, longitude=longitude)

        return cls(
            icao24=data.get("icao24"),
            callsign=data.get("callsign"),
            origin_country=data.get("origin_country"),
            position=position,
            time_position=data.get("time_position"),
            last_contact=data.get("last_contact"),
            altitude_ft=scaled(data.get("baro_altitude"), METERS_TO_FEET),
            on_ground=data.get("on_ground"),
            speed_mph=scaled(data.get("velocity"), MPS_TO_MPH),
            heading=data.get("true_track"),
            vertical_rate_fpm=scaled(data.get("vertical_rate"), MPS_TO_FEET_PER_MINUTE),
            squawk=data.get("squawk"),
            raw=data,
        )

    # ------------------------------------------------------------------
    # Convenience properties
    # ------------------------------------------------------------------

    @property
    def category(self) -> str:
        """Origin country, or ``"Unknown"`` when absent."""
        return self.origin_country or UNKNOWN_CATEGORY

    @property
    def is_plottable(self) -> bool:
        return self.position is not None

    @property
    def altitude_or_zero(self) -> float:
        return self.altitude_ft if self.altitude_ft is not None else 0.0

    @property
    def speed_or_zero(self) -> float:
        return self.speed_mph if self.speed_mph is not None else 0.0
