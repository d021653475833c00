"""Aggregate statistics model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class AggregateStats(BaseModel):
    """Per-cycle projection of the filtered set.

    ``total`` counts the unfiltered snapshot; the means are taken over
    the ``visible`` aircraft only.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    total: int = 0
    visible: int = 0
    mean_altitude_ft: float = 0.0
    mean_speed_mph: float = 0.0
