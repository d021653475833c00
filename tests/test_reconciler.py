from __future__ import annotations

from typing import Any

import pytest
from factories import aircraft

from skytrack.exceptions import SkytrackStateError
from skytrack.models.aircraft import Position
from skytrack.sink import RecordingSink
from skytrack.state.reconciler import Reconciler
from skytrack.state.trails import TrailManager


class _TrailSpy:
    def __init__(self) -> None:
        self.calls: list[tuple[str, Position, Position]] = []

    def record(self, icao24: str, from_position: Position, to_position: Position) -> None:
        self.calls.append((icao24, from_position, to_position))


def _engine(sink: RecordingSink, trails: Any = None, **kwargs: Any) -> Reconciler:
    return Reconciler(sink, trails=trails, **kwargs)


def test_first_appearance_creates_handle(sink: RecordingSink) -> None:
    engine = _engine(sink)

    result = engine.reconcile([aircraft("A1")])

    assert result.created == ("A1",)
    assert result.updated == ()
    assert sink.calls == [("create", "A1")]
    assert engine.identifiers() == frozenset({"A1"})


def test_second_cycle_updates_in_place(sink: RecordingSink) -> None:
    engine = _engine(sink)
    engine.reconcile([aircraft("A1", lat=40.0)])
    (handle,) = sink.markers.values()

    result = engine.reconcile([aircraft("A1", lat=41.0)])

    assert result.updated == ("A1",)
    assert result.created == ()
    assert len(engine) == 1
    assert list(sink.markers.values()) == [handle]
    assert handle.updates == 1
    assert engine.position_of("A1") == Position(latitude=41.0, longitude=-74.0)


def test_update_hands_segment_to_trails_when_enabled(sink: RecordingSink) -> None:
    trails = _TrailSpy()
    engine = _engine(sink, trails)
    engine.reconcile([aircraft("A1", lat=40.0)], record_trails=True)

    engine.reconcile([aircraft("A1", lat=41.0)], record_trails=True)

    assert trails.calls == [
        ("A1", Position(latitude=40.0, longitude=-74.0), Position(latitude=41.0, longitude=-74.0)),
    ]


def test_no_trail_record_when_disabled(sink: RecordingSink) -> None:
    trails = _TrailSpy()
    engine = _engine(sink, trails)
    engine.reconcile([aircraft("A1", lat=40.0)])

    engine.reconcile([aircraft("A1", lat=41.0)], record_trails=False)

    assert trails.calls == []


def test_reentry_creates_without_backfilling_trail(sink: RecordingSink) -> None:
    trails = _TrailSpy()
    engine = _engine(sink, trails)
    engine.reconcile([aircraft("A1", lat=40.0)], record_trails=True)
    engine.reconcile([aircraft("A1", lat=41.0)], record_trails=True)
    engine.reconcile([], record_trails=True)
    sink.clear_calls()

    result = engine.reconcile([aircraft("A1", lat=45.0)], record_trails=True)

    assert result.created == ("A1",)
    assert result.updated == ()
    assert sink.calls == [("create", "A1")]
    assert trails.calls == [
        ("A1", Position(latitude=40.0, longitude=-74.0), Position(latitude=41.0, longitude=-74.0)),
    ]


def test_trail_failure_leaves_cycle_fully_applied(sink: RecordingSink) -> None:
    # No running loop: the trail manager cannot schedule expiry.
    trails = TrailManager(sink, ttl=60.0)
    engine = _engine(sink, trails)
    engine.reconcile([aircraft("A1", lat=40.0), aircraft("B2")], record_trails=True)
    engine.reconcile([aircraft("A1", lat=41.0), aircraft("B2")], record_trails=True)

    with pytest.raises(SkytrackStateError):
        engine.reconcile([aircraft("A1", lat=42.0)], record_trails=True)

    assert engine.identifiers() == frozenset({"A1"})
    assert sink.live_identifiers() == ["A1"]
    assert engine.position_of("A1") == Position(latitude=42.0, longitude=-74.0)
    assert sink.artifacts == {}
    assert trails.pending_artifacts == 0
    assert trails.history("A1") == (Position(latitude=41.0, longitude=-74.0),)


def test_absent_identifier_is_released(sink: RecordingSink) -> None:
    engine = _engine(sink)
    engine.reconcile([aircraft("A1"), aircraft("B2")])
    sink.clear_calls()

    result = engine.reconcile([aircraft("B2")])

    assert result.removed == ("A1",)
    assert ("release", "A1") in sink.calls
    assert engine.identifiers() == frozenset({"B2"})
    assert sink.live_identifiers() == ["B2"]


def test_positionless_aircraft_never_rendered(sink: RecordingSink) -> None:
    engine = _engine(sink)

    result = engine.reconcile([aircraft("NOPOS", lat=None), aircraft("A1")])

    assert result.skipped == 1
    assert "NOPOS" not in engine
    assert ("create", "NOPOS") not in sink.calls


def test_positionless_aircraft_does_not_block_removal(sink: RecordingSink) -> None:
    engine = _engine(sink)
    engine.reconcile([aircraft("A1")])

    # Same identifier, but the position dropped out this cycle.
    result = engine.reconcile([aircraft("A1", lat=None)])

    assert result.removed == ("A1",)
    assert len(engine) == 0


def test_idempotent_second_run(sink: RecordingSink) -> None:
    engine = _engine(sink)
    cycle = [aircraft("A1"), aircraft("B2"), aircraft("C3", lat=None)]
    engine.reconcile(cycle)
    sink.clear_calls()

    result = engine.reconcile(cycle)

    assert result.created == ()
    assert result.removed == ()
    assert sink.count("create") == 0
    assert sink.count("release") == 0
    assert not result.changed


def test_one_call_per_identifier_even_with_duplicates(sink: RecordingSink) -> None:
    engine = _engine(sink)
    engine.reconcile([aircraft("A1", lat=40.0), aircraft("A1", lat=50.0)])

    assert sink.count("create") == 1
    assert engine.position_of("A1") == Position(latitude=40.0, longitude=-74.0)


@pytest.mark.parametrize("start_clustered", [False, True])
def test_clustering_toggle_preserves_handles(sink: RecordingSink, start_clustered: bool) -> None:
    engine = _engine(sink, clustering=start_clustered)
    engine.reconcile([aircraft("A1"), aircraft("B2")])
    handles_before = dict(sink.markers)
    sink.clear_calls()

    engine.set_clustering(not start_clustered)
    engine.set_clustering(start_clustered)
    engine.set_clustering(not start_clustered)

    assert sink.markers == handles_before
    assert sink.count("create") == 0
    assert sink.count("release") == 0
    assert sink.count("aggregate") == 3
    assert {handle.container for handle in sink.markers.values()} == {sink.container}
    assert engine.clustering is (not start_clustered)


def test_clustering_same_mode_is_noop(sink: RecordingSink) -> None:
    engine = _engine(sink)

    engine.set_clustering(False)

    assert sink.calls == []


def test_new_handles_join_current_container(sink: RecordingSink) -> None:
    engine = _engine(sink, clustering=True)

    engine.reconcile([aircraft("A1")])

    (handle,) = sink.markers.values()
    assert handle.container == sink.container != 0


def test_clear_releases_everything(sink: RecordingSink) -> None:
    engine = _engine(sink)
    engine.reconcile([aircraft("A1"), aircraft("B2")])

    assert sorted(engine.clear()) == ["A1", "B2"]
    assert sink.markers == {}
