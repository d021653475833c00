from __future__ import annotations

import asyncio

import pytest

from skytrack.exceptions import SkytrackStateError
from skytrack.models.aircraft import Position
from skytrack.sink import RecordingSink
from skytrack.state.trails import TrailManager


def _p(lat: float) -> Position:
    return Position(latitude=lat, longitude=10.0)


@pytest.mark.asyncio
async def test_history_is_bounded_fifo(sink: RecordingSink) -> None:
    trails = TrailManager(sink, max_points=20, ttl=60.0)

    for step in range(50):
        trails.record("A1", _p(step), _p(step + 1))
        assert len(trails.history("A1")) <= 20

    history = trails.history("A1")
    assert len(history) == 20
    assert history[0] == _p(31)
    assert history[-1] == _p(50)
    trails.clear_all()


@pytest.mark.asyncio
async def test_artifact_only_from_second_point(sink: RecordingSink) -> None:
    trails = TrailManager(sink, ttl=60.0)

    trails.record("A1", _p(0), _p(1))
    assert sink.artifacts == {}

    trails.record("A1", _p(1), _p(2))
    (artifact,) = sink.artifacts.values()
    assert artifact.points == (_p(1), _p(2))
    trails.clear_all()


@pytest.mark.asyncio
async def test_artifacts_expire_after_ttl(sink: RecordingSink) -> None:
    trails = TrailManager(sink, ttl=0.01)
    trails.record("A1", _p(0), _p(1))
    trails.record("A1", _p(1), _p(2))
    trails.record("A1", _p(2), _p(3))
    assert len(sink.artifacts) == 2
    assert trails.pending_artifacts == 2

    await asyncio.sleep(0.05)

    assert sink.artifacts == {}
    assert trails.pending_artifacts == 0
    # Expiry removes drawings, not the history.
    assert len(trails.history("A1")) == 3


@pytest.mark.asyncio
async def test_clear_all_cancels_pending_expiry(sink: RecordingSink) -> None:
    trails = TrailManager(sink, ttl=0.01)
    trails.record("A1", _p(0), _p(1))
    trails.record("A1", _p(1), _p(2))
    trails.record("B2", _p(5), _p(6))
    trails.record("B2", _p(6), _p(7))

    trails.clear_all()

    assert sink.artifacts == {}
    assert trails.pending_artifacts == 0
    assert trails.identifiers() == frozenset()
    assert trails.history("A1") == ()
    removals = sink.count("remove_trail")

    await asyncio.sleep(0.05)

    assert sink.count("remove_trail") == removals


@pytest.mark.asyncio
async def test_histories_are_independent(sink: RecordingSink) -> None:
    trails = TrailManager(sink)
    trails.record("A1", _p(0), _p(1))
    trails.record("B2", _p(0), _p(9))

    assert trails.history("A1") == (_p(1),)
    assert trails.history("B2") == (_p(9),)
    assert trails.history("missing") == ()


def test_max_points_must_allow_a_segment(sink: RecordingSink) -> None:
    with pytest.raises(ValueError):
        TrailManager(sink, max_points=1)


def test_recording_without_loop_draws_nothing(sink: RecordingSink) -> None:
    trails = TrailManager(sink, ttl=60.0)
    trails.record("A1", _p(0), _p(1))

    with pytest.raises(SkytrackStateError):
        trails.record("A1", _p(1), _p(2))

    assert sink.artifacts == {}
    assert trails.pending_artifacts == 0
    assert trails.history("A1") == (_p(1),)


def test_explicit_loop_allows_synchronous_recording(sink: RecordingSink) -> None:
    loop = asyncio.new_event_loop()
    try:
        trails = TrailManager(sink, ttl=60.0, loop=loop)
        trails.record("A1", _p(0), _p(1))
        trails.record("A1", _p(1), _p(2))

        assert len(sink.artifacts) == 1
        assert trails.pending_artifacts == 1
        trails.clear_all()
        assert sink.artifacts == {}
    finally:
        loop.close()
