"""Pure per-cycle transforms: filter, sort, aggregate, export, display."""

from skytrack.pipeline.display import describe, format_copy_text
from skytrack.pipeline.export import export_filename, export_json, export_records
from skytrack.pipeline.filtering import filter_aircraft, matches
from skytrack.pipeline.sorting import sort_aircraft
from skytrack.pipeline.stats import category_counts, compute_stats, distinct_categories

__all__ = [
    "category_counts",
    "compute_stats",
    "describe",
    "distinct_categories",
    "export_filename",
    "export_json",
    "export_records",
    "filter_aircraft",
    "format_copy_text",
    "matches",
    "sort_aircraft",
]
