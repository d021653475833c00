"""Data models for aircraft state, filters and derived views."""

from skytrack.models.aircraft import Aircraft, Position
from skytrack.models.export import ExportRecord
from skytrack.models.filters import FilterConfig, SortKey
from skytrack.models.stats import AggregateStats

__all__ = [
    "AggregateStats",
    "Aircraft",
    "ExportRecord",
    "FilterConfig",
    "Position",
    "SortKey",
]
