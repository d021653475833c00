from __future__ import annotations

import asyncio

import pytest

from skytrack.scheduler import RefreshScheduler, SchedulerState


class _Counter:
    def __init__(self) -> None:
        self.calls = 0

    async def __call__(self) -> None:
        self.calls += 1


@pytest.mark.asyncio
async def test_runs_periodically_until_stopped() -> None:
    counter = _Counter()
    scheduler = RefreshScheduler(counter, interval=0.01)

    scheduler.start()
    assert scheduler.state == SchedulerState.RUNNING
    await asyncio.sleep(0.055)
    scheduler.stop()
    await scheduler.wait_idle()

    assert scheduler.state == SchedulerState.STOPPED
    ran = counter.calls
    assert ran >= 2

    await asyncio.sleep(0.05)
    assert counter.calls == ran


@pytest.mark.asyncio
async def test_start_twice_keeps_single_timer() -> None:
    counter = _Counter()
    scheduler = RefreshScheduler(counter, interval=10.0)

    scheduler.start()
    first = scheduler._timer  # noqa: SLF001
    scheduler.start()
    second = scheduler._timer  # noqa: SLF001
    await asyncio.sleep(0)

    assert first is not None and first is not second
    assert first.cancelled()
    assert scheduler.is_running
    await scheduler.aclose()


@pytest.mark.asyncio
async def test_refresh_now_does_not_disturb_timer() -> None:
    counter = _Counter()
    scheduler = RefreshScheduler(counter, interval=10.0)
    scheduler.start()
    timer = scheduler._timer  # noqa: SLF001

    await scheduler.refresh_now()

    assert counter.calls == 1
    assert scheduler._timer is timer  # noqa: SLF001
    assert scheduler.is_running
    await scheduler.aclose()


@pytest.mark.asyncio
async def test_refresh_now_works_while_stopped() -> None:
    counter = _Counter()
    scheduler = RefreshScheduler(counter, interval=10.0)

    await scheduler.refresh_now()

    assert counter.calls == 1
    assert scheduler.state == SchedulerState.STOPPED


@pytest.mark.asyncio
async def test_failing_cycle_does_not_stop_schedule() -> None:
    calls = 0

    async def _cycle() -> None:
        nonlocal calls
        calls += 1
        raise RuntimeError("boom")

    scheduler = RefreshScheduler(_cycle, interval=0.01)
    scheduler.start()
    await asyncio.sleep(0.055)
    await scheduler.aclose()

    assert calls >= 2


@pytest.mark.asyncio
async def test_stop_does_not_cancel_inflight_cycle() -> None:
    started = asyncio.Event()
    release = asyncio.Event()
    finished: list[bool] = []

    async def _cycle() -> None:
        started.set()
        await release.wait()
        finished.append(True)

    scheduler = RefreshScheduler(_cycle, interval=0.01)
    scheduler.start()
    await asyncio.wait_for(started.wait(), timeout=1.0)

    scheduler.stop()
    release.set()
    await scheduler.wait_idle()

    assert finished == [True]
    assert scheduler.state == SchedulerState.STOPPED


def test_interval_must_be_positive() -> None:
    with pytest.raises(ValueError):
        RefreshScheduler(_Counter(), interval=0)
