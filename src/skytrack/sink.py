"""Rendering sink interface and an in-memory implementation.

The reconciliation engine and trail manager only talk to a sink through
:class:`RenderSink`. Handles and artifacts are opaque to them.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

from skytrack.models.aircraft import Aircraft, Position

_logger = logging.getLogger(__name__)


class RenderSink(Protocol):
    """Structural sink interface used by the reconciliation engine.

    A map widget fits it as well as :class:`RecordingSink` does.
    """

    def create_handle(self, aircraft: Aircraft) -> Any: ...

    def update_handle(self, handle: Any, aircraft: Aircraft) -> None: ...

    def release_handle(self, handle: Any) -> None: ...

    def create_trail_artifact(self, points: Sequence[Position]) -> Any: ...

    def remove_artifact(self, artifact: Any) -> None: ...

    def set_aggregate_mode(self, enabled: bool, handles: Sequence[Any]) -> None:
        """Tear down the current container and re-attach *handles* to a new one."""
        ...


@dataclass(slots=True)
class MarkerHandle:
    """A marker owned by :class:`RecordingSink`."""

    handle_id: int
    icao24: str
    aircraft: Aircraft
    container: int
    updates: int = 0


@dataclass(slots=True)
class TrailArtifact:
    """A drawn trail path owned by :class:`RecordingSink`."""

    artifact_id: int
    points: tuple[Position, ...]


@dataclass
class RecordingSink:
    """Headless sink that keeps live markers/artifacts and a call log.

    Containers are numbered; container ``0`` means markers are attached
    individually. Every aggregate-mode switch tears the old container
    down and allocates a fresh number.
    """

    markers: dict[int, MarkerHandle] = field(default_factory=dict)
    artifacts: dict[int, TrailArtifact] = field(default_factory=dict)
    calls: list[tuple[str, str]] = field(default_factory=list)
    aggregate_mode: bool = False
    container: int = 0
    _ids: itertools.count = field(default_factory=lambda: itertools.count(1))
    _containers: itertools.count = field(default_factory=lambda: itertools.count(1))

    def create_handle(self, aircraft: Aircraft) -> MarkerHandle:
        handle = MarkerHandle(
            handle_id=next(self._ids),
            icao24=aircraft.icao24,
            aircraft=aircraft,
            container=self.container,
        )
        self.markers[handle.handle_id] = handle
        self.calls.append(("create", aircraft.icao24))
        return handle

    def update_handle(self, handle: MarkerHandle, aircraft: Aircraft) -> None:
        if handle.handle_id not in self.markers:
            raise KeyError(f"unknown marker handle {handle.handle_id}")
        handle.aircraft = aircraft
        handle.updates += 1
        self.calls.append(("update", aircraft.icao24))

    def release_handle(self, handle: MarkerHandle) -> None:
        if self.markers.pop(handle.handle_id, None) is None:
            raise KeyError(f"unknown marker handle {handle.handle_id}")
        self.calls.append(("release", handle.icao24))

    def create_trail_artifact(self, points: Sequence[Position]) -> TrailArtifact:
        artifact = TrailArtifact(artifact_id=next(self._ids), points=tuple(points))
        self.artifacts[artifact.artifact_id] = artifact
        self.calls.append(("trail", str(artifact.artifact_id)))
        return artifact

    def remove_artifact(self, artifact: TrailArtifact) -> None:
        # Expiry and clear_all may race for the same artifact; removal is idempotent.
        if self.artifacts.pop(artifact.artifact_id, None) is not None:
            self.calls.append(("remove_trail", str(artifact.artifact_id)))

    def set_aggregate_mode(self, enabled: bool, handles: Sequence[MarkerHandle]) -> None:
        self.aggregate_mode = enabled
        self.container = next(self._containers) if enabled else 0
        for handle in handles:
            handle.container = self.container
        self.calls.append(("aggregate", "on" if enabled else "off"))
        _logger.debug("Aggregate mode %s, %d markers re-attached", enabled, len(handles))

    # ------------------------------------------------------------------
    # Inspection helpers
    # ------------------------------------------------------------------

    def live_identifiers(self) -> list[str]:
        return sorted(handle.icao24 for handle in self.markers.values())

    def count(self, action: str) -> int:
        return sum(1 for name, _ in self.calls if name == action)

    def clear_calls(self) -> None:
        self.calls.clear()
