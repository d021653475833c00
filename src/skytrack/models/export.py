"""Export record model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ExportRecord(BaseModel):
    """One row of an aircraft export.

    Altitude and speed are whole feet / mph, ``None`` when not reported.
    Heading is in degrees, vertical rate in feet per minute.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    icao24: str
    callsign: str = ""
    origin_country: str | None = None
    longitude: float | None = None
    latitude: float | None = None
    altitude_feet: int | None = None
    on_ground: bool = False
    velocity_mph: int | None = None
    heading: float | None = None
    vertical_rate_fpm: float | None = None
    squawk: str | None = None
