"""Reconciliation engine.

This is the only component allowed to read or write the rendered set.
Given the filtered, sorted aircraft of a cycle it issues the minimal
create/update/release calls against the sink.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from skytrack.models.aircraft import Aircraft, Position
from skytrack.sink import RenderSink
from skytrack.state.trails import TrailManager

_logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _RenderedEntry:
    handle: Any
    position: Position


@dataclass(frozen=True, slots=True)
class ReconcileResult:
    """Identifiers touched by one cycle, in processing order."""

    created: tuple[str, ...] = ()
    updated: tuple[str, ...] = ()
    removed: tuple[str, ...] = ()
    skipped: int = 0
    """Aircraft without a position; they neither render nor block removal."""

    @property
    def changed(self) -> bool:
        return bool(self.created or self.removed)


class Reconciler:
    """Keeps at most one sink handle per identifier.

    After every :meth:`reconcile` call the rendered key set equals the set
    of plottable identifiers in that call's sequence.
    """

    def __init__(
        self,
        sink: RenderSink,
        *,
        trails: TrailManager | None = None,
        clustering: bool = False,
    ) -> None:
        self._sink = sink
        self._trails = trails
        self._clustering = False
        self._rendered: dict[str, _RenderedEntry] = {}
        if clustering:
            self.set_clustering(True)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def clustering(self) -> bool:
        return self._clustering

    def __len__(self) -> int:
        return len(self._rendered)

    def __contains__(self, icao24: object) -> bool:
        return icao24 in self._rendered

    def identifiers(self) -> frozenset[str]:
        return frozenset(self._rendered)

    def position_of(self, icao24: str) -> Position | None:
        entry = self._rendered.get(icao24)
        return entry.position if entry is not None else None

    # ------------------------------------------------------------------
    # Cycle
    # ------------------------------------------------------------------

    def reconcile(self, aircraft: Iterable[Aircraft], *, record_trails: bool = False) -> ReconcileResult:
        """Diff *aircraft* against the rendered set and apply the result.

        Aircraft without a position are skipped entirely. A repeated
        identifier within one sequence is handled once, on its first
        occurrence. When *record_trails* is set, every update hands the
        previous and new position to the trail manager after all handle
        changes of the cycle have been applied.
        """
        seen: set[str] = set()
        created: list[str] = []
        updated: list[str] = []
        trails = self._trails if record_trails else None
        segments: list[tuple[str, Position, Position]] = []
        skipped = 0

        for item in aircraft:
            position = item.position
            if position is None:
                skipped += 1
                continue
            if item.icao24 in seen:
                _logger.debug("Duplicate identifier %s in cycle; keeping first", item.icao24)
                continue
            seen.add(item.icao24)

            entry = self._rendered.get(item.icao24)
            if entry is None:
                handle = self._sink.create_handle(item)
                self._rendered[item.icao24] = _RenderedEntry(handle=handle, position=position)
                created.append(item.icao24)
                continue

            previous = entry.position
            self._sink.update_handle(entry.handle, item)
            entry.position = position
            updated.append(item.icao24)
            if trails is not None:
                segments.append((item.icao24, previous, position))

        removed = [icao24 for icao24 in self._rendered if icao24 not in seen]
        for icao24 in removed:
            entry = self._rendered.pop(icao24)
            self._sink.release_handle(entry.handle)

        result = ReconcileResult(
            created=tuple(created),
            updated=tuple(updated),
            removed=tuple(removed),
            skipped=skipped,
        )
        _logger.debug(
            "Reconciled: %d created, %d updated, %d removed, %d without position",
            len(result.created),
            len(result.updated),
            len(result.removed),
            result.skipped,
        )
        # Trails are recorded only after the rendered set is final.
        if trails is not None:
            for icao24, previous, position in segments:
                trails.record(icao24, previous, position)
        return result

    def set_clustering(self, enabled: bool) -> None:
        """Switch the sink container mode, re-attaching every live handle.

        No handle is created or released; only the container changes.
        """
        if enabled == self._clustering:
            return
        handles = [entry.handle for entry in self._rendered.values()]
        self._sink.set_aggregate_mode(enabled, handles)
        self._clustering = enabled

    def clear(self) -> list[str]:
        """Release every handle, leaving the rendered set empty."""
        return list(self.reconcile(()).removed)
