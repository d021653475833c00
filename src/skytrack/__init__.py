"""skytrack - Async live aircraft tracker with incremental render reconciliation."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("skytrack")
except PackageNotFoundError:
    __version__ = "0+local"
from skytrack.client import TrackerClient
from skytrack.config import TrackerConfig
from skytrack.exceptions import (
    SkytrackConfigError,
    SkytrackError,
    SkytrackStateError,
    SkytrackTransportError,
)
from skytrack.ingestion.snapshot import OpenSkyProvider, SnapshotProvider
from skytrack.models import (
    AggregateStats,
    Aircraft,
    ExportRecord,
    FilterConfig,
    Position,
    SortKey,
)
from skytrack.scheduler import RefreshScheduler, SchedulerState
from skytrack.sink import RecordingSink, RenderSink
from skytrack.state.events import ConfigChange, ConfigCommand
from skytrack.state.reconciler import ReconcileResult, Reconciler
from skytrack.state.trails import TrailManager

__all__ = [
    "__version__",
    "AggregateStats",
    "Aircraft",
    "ConfigChange",
    "ConfigCommand",
    "ExportRecord",
    "FilterConfig",
    "OpenSkyProvider",
    "Position",
    "RecordingSink",
    "ReconcileResult",
    "Reconciler",
    "RefreshScheduler",
    "RenderSink",
    "SchedulerState",
    "SkytrackConfigError",
    "SkytrackError",
    "SkytrackStateError",
    "SkytrackTransportError",
    "SnapshotProvider",
    "SortKey",
    "TrackerClient",
    "TrackerConfig",
    "TrailManager",
]
