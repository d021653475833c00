"""Per-aircraft trail histories with timed artifact expiry.

The trail manager owns the histories and every pending expiry. Expiries
are scheduled with ``loop.call_later`` and tracked by artifact, so
:meth:`TrailManager.clear_all` can cancel them deterministically.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
from collections import deque
from dataclasses import dataclass
from typing import Any

from skytrack._constants import TRAIL_MAX_POINTS, TRAIL_TTL_SECONDS
from skytrack.exceptions import SkytrackStateError
from skytrack.models.aircraft import Position
from skytrack.sink import RenderSink

_logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _PendingArtifact:
    icao24: str
    artifact: Any
    timer: asyncio.TimerHandle


class TrailManager:
    """Bounded FIFO position history per identifier.

    Parameters
    ----------
    sink
        Receives one trail artifact per recorded segment once a history
        holds at least two points.
    max_points
        History bound; the oldest point is evicted on overflow.
    ttl
        Seconds before each artifact is removed, regardless of later
        updates to the same trail.
    loop
        Event loop used for expiry. Defaults to the running loop at the
        time of each :meth:`record` call; without either, recording a
        second point raises :class:`SkytrackStateError` before anything
        is drawn.
    """

    def __init__(
        self,
        sink: RenderSink,
        *,
        max_points: int = TRAIL_MAX_POINTS,
        ttl: float = TRAIL_TTL_SECONDS,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        if max_points < 2:
            raise ValueError("max_points must be at least 2")
        self._sink = sink
        self._max_points = max_points
        self._ttl = ttl
        self._loop = loop
        self._histories: dict[str, deque[Position]] = {}
        self._pending: dict[int, _PendingArtifact] = {}
        self._keys = itertools.count(1)

    @property
    def max_points(self) -> int:
        return self._max_points

    @property
    def pending_artifacts(self) -> int:
        return len(self._pending)

    def record(self, icao24: str, from_position: Position, to_position: Position) -> None:
        """Append *to_position* to the history of *icao24*.

        ``from_position`` is the point the engine last rendered; the
        history itself stores destinations only, so an aircraft that
        re-enters visibility is never backfilled.
        """
        history = self._histories.get(icao24)
        if history is None:
            history = deque(maxlen=self._max_points)
            self._histories[icao24] = history
        # A non-empty history reaches two points with this append.
        loop = self._resolve_loop() if history else None
        history.append(to_position)
        _logger.debug("Trail %s: %s -> %s (%d points)", icao24, from_position, to_position, len(history))

        if loop is None:
            return

        artifact = self._sink.create_trail_artifact(tuple(history))
        key = next(self._keys)
        timer = loop.call_later(self._ttl, self._expire, key)
        self._pending[key] = _PendingArtifact(icao24=icao24, artifact=artifact, timer=timer)

    def history(self, icao24: str) -> tuple[Position, ...]:
        history = self._histories.get(icao24)
        return tuple(history) if history is not None else ()

    def identifiers(self) -> frozenset[str]:
        return frozenset(self._histories)

    def clear_all(self) -> None:
        """Drop every history and remove every live artifact now."""
        pending = list(self._pending.values())
        self._pending.clear()
        self._histories.clear()
        for entry in pending:
            entry.timer.cancel()
            self._sink.remove_artifact(entry.artifact)
        if pending:
            _logger.debug("Cleared trails, removed %d artifacts", len(pending))

    def _resolve_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is not None:
            return self._loop
        try:
            return asyncio.get_running_loop()
        except RuntimeError as exc:
            raise SkytrackStateError(
                "Trail expiry needs a running event loop; pass loop= when recording from synchronous code"
            ) from exc

    def _expire(self, key: int) -> None:
        entry = self._pending.pop(key, None)
        if entry is None:
            return
        try:
            self._sink.remove_artifact(entry.artifact)
        except Exception:
            _logger.warning("Failed to remove expired trail artifact for %s", entry.icao24, exc_info=True)
