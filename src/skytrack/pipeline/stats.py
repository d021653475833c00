"""Statistics aggregator."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence

from skytrack.models.aircraft import Aircraft
from skytrack.models.stats import AggregateStats


def compute_stats(filtered: Sequence[Aircraft], total: Sequence[Aircraft] | int) -> AggregateStats:
    """Project the filtered set into :class:`AggregateStats`.

    Absent altitude/speed contribute ``0`` to the sums but still count in
    the denominator. An empty filtered set yields zero means.
    """
    total_count = total if isinstance(total, int) else len(total)
    visible = len(filtered)
    if visible == 0:
        return AggregateStats(total=total_count, visible=0)

    altitude_sum = sum(item.altitude_or_zero for item in filtered)
    speed_sum = sum(item.speed_or_zero for item in filtered)
    return AggregateStats(
        total=total_count,
        visible=visible,
        mean_altitude_ft=altitude_sum / visible,
        mean_speed_mph=speed_sum / visible,
    )


def distinct_categories(aircraft: Iterable[Aircraft]) -> list[str]:
    """Sorted origin countries present in a snapshot (absent ones skipped)."""
    return sorted({item.origin_country for item in aircraft if item.origin_country})


def category_counts(aircraft: Iterable[Aircraft]) -> dict[str, int]:
    """Aircraft per category; absent countries count as ``"Unknown"``."""
    return dict(Counter(item.category for item in aircraft))
