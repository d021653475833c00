"""Periodic refresh scheduling."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable
from enum import StrEnum

from skytrack._constants import UPDATE_INTERVAL

_logger = logging.getLogger(__name__)


class SchedulerState(StrEnum):
    STOPPED = "stopped"
    RUNNING = "running"


class RefreshScheduler:
    """Runs a refresh cycle every *interval* seconds while RUNNING.

    At most one timer task exists at a time; :meth:`start` cancels the
    current one before scheduling a new one. :meth:`refresh_now` runs a
    cycle out-of-band without touching the recurring timer.

    Stopping only cancels the timer. A cycle that is already running
    (e.g. awaiting its fetch) is shielded and completes normally.
    """

    def __init__(
        self,
        cycle: Callable[[], Awaitable[object]],
        *,
        interval: float = UPDATE_INTERVAL,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._cycle = cycle
        self._interval = interval
        self._timer: asyncio.Task[None] | None = None
        self._inflight: set[asyncio.Task[None]] = set()

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def state(self) -> SchedulerState:
        if self._timer is not None and not self._timer.done():
            return SchedulerState.RUNNING
        return SchedulerState.STOPPED

    @property
    def is_running(self) -> bool:
        return self.state == SchedulerState.RUNNING

    def start(self) -> None:
        """Enter RUNNING, replacing any existing timer."""
        self._cancel_timer()
        self._timer = asyncio.get_running_loop().create_task(self._run(), name="skytrack-refresh-timer")
        _logger.debug("Refresh scheduler started (every %.1fs)", self._interval)

    def stop(self) -> None:
        """Enter STOPPED; no further timed cycles will run."""
        if self._cancel_timer():
            _logger.debug("Refresh scheduler stopped")

    async def refresh_now(self) -> None:
        """Run one cycle immediately, independent of the timer."""
        await self._run_cycle()

    async def wait_idle(self) -> None:
        """Wait for cycles started by the timer to finish."""
        while self._inflight:
            await asyncio.gather(*self._inflight, return_exceptions=True)

    async def aclose(self) -> None:
        self.stop()
        await self.wait_idle()

    def _cancel_timer(self) -> bool:
        timer = self._timer
        self._timer = None
        if timer is None or timer.done():
            return False
        timer.cancel()
        return True

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            task = asyncio.get_running_loop().create_task(self._run_cycle())
            self._inflight.add(task)
            task.add_done_callback(self._inflight.discard)
            # Shielded so that stop() during a fetch cancels only the timer.
            with contextlib.suppress(asyncio.CancelledError):
                await asyncio.shield(task)
            if self._timer is None or self._timer is not asyncio.current_task():
                return

    async def _run_cycle(self) -> None:
        try:
            await self._cycle()
        except asyncio.CancelledError:
            raise
        except Exception:
            _logger.exception("Refresh cycle failed")
