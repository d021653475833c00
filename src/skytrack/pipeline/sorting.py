"""Sort comparator over filtered aircraft."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from skytrack.models.aircraft import Aircraft
from skytrack.models.filters import SortKey


def _callsign_key(aircraft: Aircraft) -> tuple[str, str]:
    callsign = aircraft.callsign or ""
    return (callsign.casefold(), callsign)


_SORT_KEYS: dict[SortKey, tuple[Callable[[Aircraft], Any], bool]] = {
    SortKey.ALTITUDE_DESC: (lambda a: a.altitude_or_zero, True),
    SortKey.ALTITUDE_ASC: (lambda a: a.altitude_or_zero, False),
    SortKey.SPEED_DESC: (lambda a: a.speed_or_zero, True),
    SortKey.SPEED_ASC: (lambda a: a.speed_or_zero, False),
    SortKey.CALLSIGN: (_callsign_key, False),
}


def sort_aircraft(aircraft: Iterable[Aircraft], sort_key: SortKey | str) -> list[Aircraft]:
    """Return a new list ordered by *sort_key*.

    ``sorted`` is stable, and stays stable with ``reverse=True``, so
    aircraft with equal keys keep their snapshot order.
    """
    key, reverse = _SORT_KEYS[SortKey(sort_key)]
    return sorted(aircraft, key=key, reverse=reverse)
