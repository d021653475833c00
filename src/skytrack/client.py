"""High-level async tracker tying snapshot ingestion to the render sink."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from typing import Any

import aiohttp

from skytrack._transport import HttpTransport
from skytrack.config import TrackerConfig
from skytrack.exceptions import SkytrackStateError
from skytrack.ingestion.snapshot import OpenSkyProvider, SnapshotProvider, normalize_states
from skytrack.models.aircraft import Aircraft, Position
from skytrack.models.export import ExportRecord
from skytrack.models.filters import FilterConfig
from skytrack.models.stats import AggregateStats
from skytrack.pipeline.display import describe, format_copy_text
from skytrack.pipeline.export import export_records
from skytrack.pipeline.filtering import filter_aircraft
from skytrack.pipeline.sorting import sort_aircraft
from skytrack.pipeline.stats import category_counts, compute_stats, distinct_categories
from skytrack.scheduler import RefreshScheduler
from skytrack.sink import RenderSink
from skytrack.state.commands import apply_change
from skytrack.state.events import ConfigChange, ConfigCommand
from skytrack.state.reconciler import ReconcileResult, Reconciler
from skytrack.state.trails import TrailManager

_logger = logging.getLogger(__name__)


class TrackerClient:
    """Async live-aircraft tracker.

    Usage::

        async with TrackerClient(config, sink) as tracker:
            await tracker.refresh()
            print(tracker.stats)

    With ``config.auto_refresh`` one cycle runs on enter (a failure is
    logged, not raised), then the refresh scheduler starts; it stops on
    exit.
    """

    def __init__(
        self,
        config: TrackerConfig,
        sink: RenderSink,
        *,
        provider: SnapshotProvider | None = None,
        session: aiohttp.ClientSession | None = None,
        filters: FilterConfig | None = None,
        on_stats: Callable[[AggregateStats], None] | None = None,
    ) -> None:
        self._config = config
        self._sink = sink
        self._external_session = session is not None
        self._http_session = session
        self._provider = provider
        self._on_stats = on_stats

        self._defaults = FilterConfig(
            min_altitude_ft=config.min_altitude_ft,
            max_altitude_ft=config.max_altitude_ft,
            min_speed_mph=config.min_speed_mph,
            max_speed_mph=config.max_speed_mph,
        )
        self._filters = filters if filters is not None else self._defaults
        self._defaults_applied = bool(self._filters.categories)

        self._trails = TrailManager(sink, max_points=config.trail_max_points, ttl=config.trail_ttl)
        self._reconciler = Reconciler(sink, trails=self._trails, clustering=config.clustering)
        self._scheduler = RefreshScheduler(self.refresh, interval=config.refresh_interval)
        self._show_trails = config.show_trails

        self._snapshot: list[Aircraft] = []
        self._visible: list[Aircraft] = []
        self._stats = AggregateStats()
        self._cycle_lock = asyncio.Lock()
        self._opened = False

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> TrackerClient:
        if self._provider is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            transport = HttpTransport(self._http_session, timeout=self._config.request_timeout)
            self._provider = OpenSkyProvider(transport, url=self._config.api_url)
        self._opened = True
        if self._config.auto_refresh:
            # First cycle runs now; the timer only fires after a full interval.
            await self._scheduler.refresh_now()
            self._scheduler.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self._scheduler.aclose()
        self._trails.clear_all()
        self._reconciler.clear()
        self._opened = False
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def filters(self) -> FilterConfig:
        return self._filters

    @property
    def stats(self) -> AggregateStats:
        return self._stats

    @property
    def snapshot(self) -> Sequence[Aircraft]:
        return tuple(self._snapshot)

    @property
    def visible(self) -> Sequence[Aircraft]:
        """Filtered and sorted aircraft of the latest cycle."""
        return tuple(self._visible)

    @property
    def scheduler(self) -> RefreshScheduler:
        return self._scheduler

    @property
    def trails(self) -> TrailManager:
        return self._trails

    @property
    def rendered(self) -> frozenset[str]:
        return self._reconciler.identifiers()

    @property
    def show_trails(self) -> bool:
        return self._show_trails

    @property
    def clustering(self) -> bool:
        return self._reconciler.clustering

    def categories(self) -> list[str]:
        return distinct_categories(self._snapshot)

    def category_counts(self) -> dict[str, int]:
        return category_counts(self._snapshot)

    # ------------------------------------------------------------------
    # Cycles
    # ------------------------------------------------------------------

    async def refresh(self) -> ReconcileResult:
        """Fetch a snapshot and run one full cycle.

        A failed fetch yields an empty snapshot, which reconciles like any
        other: rendered aircraft are released, trails are kept.
        """
        provider = self._require_provider()
        # The cycle runs with the filters in force when it started; changes
        # made while the fetch is pending apply from the next cycle.
        filters = self._filters
        records = await provider.fetch()
        return await self.apply_snapshot(records, filters=filters)

    async def apply_snapshot(
        self,
        records: Sequence[Any],
        *,
        filters: FilterConfig | None = None,
    ) -> ReconcileResult:
        """Normalize *records* and reconcile them as the new snapshot.

        *filters* defaults to the current configuration.
        """
        aircraft = normalize_states(records)
        async with self._cycle_lock:
            self._snapshot = aircraft
            captured = self._seed_default_categories(filters if filters is not None else self._filters)
            return self._run_cycle(captured)

    async def reconcile(self) -> ReconcileResult:
        """Re-run the pipeline on the current snapshot."""
        async with self._cycle_lock:
            return self._run_cycle(self._filters)

    def _run_cycle(self, filters: FilterConfig) -> ReconcileResult:
        visible = sort_aircraft(filter_aircraft(self._snapshot, filters), filters.sort_key)
        result = self._reconciler.reconcile(visible, record_trails=self._show_trails)
        self._visible = visible
        self._stats = compute_stats(visible, self._snapshot)
        if self._on_stats is not None:
            try:
                self._on_stats(self._stats)
            except Exception:
                _logger.debug("on_stats callback failed", exc_info=True)
        return result

    def _seed_default_categories(self, filters: FilterConfig) -> FilterConfig:
        """Select the configured default categories once, on first sight."""
        if self._defaults_applied or self._filters.categories:
            return filters
        present = set(self.categories())
        chosen = [name for name in self._config.default_categories if name in present]
        if not chosen:
            return filters
        self._filters = self._filters.with_categories(chosen)
        self._defaults_applied = True
        _logger.debug("Default categories selected: %s", ", ".join(chosen))
        return filters if filters.categories else filters.with_categories(chosen)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    async def apply_change(self, change: ConfigChange) -> ReconcileResult | None:
        """Apply a configuration change and re-reconcile when the filter changed.

        Returns ``None`` for changes that do not need a new cycle.
        """
        command = change.command
        if command == ConfigCommand.SET_SHOW_TRAILS:
            self.set_show_trails(bool(change.value))
            return None
        if command == ConfigCommand.CLEAR_TRAILS:
            self._trails.clear_all()
            return None
        if command == ConfigCommand.SET_AUTO_REFRESH:
            self.set_auto_refresh(bool(change.value))
            return None
        if command == ConfigCommand.SET_CLUSTERING:
            self.set_clustering(bool(change.value))
            return None

        if command == ConfigCommand.SELECT_ALL_CATEGORIES and change.value is None:
            change = change.model_copy(update={"value": self.categories()})
        updated = apply_change(self._filters, change, defaults=self._defaults)
        if updated == self._filters:
            return None
        self._filters = updated
        self._defaults_applied = True
        return await self.reconcile()

    async def set_filters(self, filters: FilterConfig) -> ReconcileResult:
        self._filters = filters
        self._defaults_applied = True
        return await self.reconcile()

    async def reset_filters(self) -> ReconcileResult | None:
        return await self.apply_change(ConfigChange(command=ConfigCommand.RESET_FILTERS))

    async def select_all_categories(self) -> ReconcileResult | None:
        return await self.apply_change(ConfigChange(command=ConfigCommand.SELECT_ALL_CATEGORIES))

    async def deselect_all_categories(self) -> ReconcileResult | None:
        return await self.apply_change(ConfigChange(command=ConfigCommand.DESELECT_ALL_CATEGORIES))

    def set_show_trails(self, enabled: bool) -> None:
        """Enable or disable trail recording; disabling clears every trail."""
        self._show_trails = enabled
        if not enabled:
            self._trails.clear_all()

    def set_clustering(self, enabled: bool) -> None:
        self._reconciler.set_clustering(enabled)

    def set_auto_refresh(self, enabled: bool) -> None:
        if enabled:
            self._scheduler.start()
        else:
            self._scheduler.stop()

    # ------------------------------------------------------------------
    # Per-aircraft views
    # ------------------------------------------------------------------

    def find(self, icao24: str) -> Aircraft | None:
        for item in self._snapshot:
            if item.icao24 == icao24:
                return item
        return None

    def locate(self, icao24: str) -> Position | None:
        """Last rendered position of *icao24*, or ``None`` if not on the map."""
        return self._reconciler.position_of(icao24)

    def describe(self, icao24: str) -> dict[str, str] | None:
        aircraft = self.find(icao24)
        if aircraft is None:
            return None
        details = describe(aircraft)
        details["copy_text"] = format_copy_text(aircraft)
        return details

    def export(self) -> list[ExportRecord]:
        """Export rows for the aircraft passing the current filter."""
        return export_records(filter_aircraft(self._snapshot, self._filters))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_provider(self) -> SnapshotProvider:
        if self._provider is None or not self._opened:
            raise SkytrackStateError("Tracker not initialized. Use 'async with TrackerClient(...) as tracker:'")
        return self._provider
