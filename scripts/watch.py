#!/usr/bin/env python3
"""Headless live tracker.

Runs the tracker against the OpenSky snapshot endpoint with an in-memory
sink and prints aggregate statistics after every cycle.

Examples::

    scripts/watch.py --once --country Germany --country France
    scripts/watch.py --interval 30 --trails
    scripts/watch.py --once --export out.json
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from skytrack import (  # noqa: E402
    AggregateStats,
    ConfigChange,
    ConfigCommand,
    RecordingSink,
    SkytrackError,
    SortKey,
    TrackerClient,
    TrackerConfig,
)
from skytrack.pipeline.export import export_filename, export_json  # noqa: E402


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--once", action="store_true", help="Run a single cycle and exit")
    parser.add_argument("--interval", type=float, default=None, help="Seconds between cycles")
    parser.add_argument(
        "--country",
        action="append",
        default=[],
        help="Accepted origin country (repeatable; default: every country in the first snapshot)",
    )
    parser.add_argument("--search", default="", help="Callsign substring filter")
    parser.add_argument("--sort", choices=[key.value for key in SortKey], default=SortKey.ALTITUDE_DESC.value)
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--ground-only", action="store_true")
    group.add_argument("--air-only", action="store_true")
    parser.add_argument("--trails", action="store_true", help="Record trail segments")
    parser.add_argument("--top", type=int, default=5, help="Number of aircraft to list per cycle")
    parser.add_argument(
        "--export",
        nargs="?",
        const="",
        default=None,
        help="Write the filtered set as JSON after the first cycle (default file name if no path)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def _print_stats(stats: AggregateStats) -> None:
    print(
        f"Showing {stats.visible:,} of {stats.total:,} aircraft | "
        f"avg altitude {stats.mean_altitude_ft:,.0f} ft | avg speed {stats.mean_speed_mph:,.0f} mph"
    )


def _initial_changes(args: argparse.Namespace) -> list[ConfigChange]:
    changes = [
        ConfigChange(command=ConfigCommand.SET_SEARCH, value=args.search),
        ConfigChange(command=ConfigCommand.SET_SORT_KEY, value=args.sort),
    ]
    if args.ground_only:
        changes.append(ConfigChange(command=ConfigCommand.SET_GROUND_ONLY, value=True))
    if args.air_only:
        changes.append(ConfigChange(command=ConfigCommand.SET_AIR_ONLY, value=True))
    if args.country:
        changes.append(ConfigChange(command=ConfigCommand.SELECT_CATEGORY, value=args.country))
    return changes


async def _run(args: argparse.Namespace) -> int:
    overrides: dict[str, object] = {"auto_refresh": False, "show_trails": args.trails}
    if args.interval is not None:
        overrides["refresh_interval"] = args.interval
    if not args.country:
        overrides["default_categories"] = ()
    config = TrackerConfig.from_env(**overrides)
    sink = RecordingSink()
    live = asyncio.Event()

    def _on_stats(stats: AggregateStats) -> None:
        if live.is_set():
            _print_stats(stats)

    async with TrackerClient(config, sink, on_stats=_on_stats) as tracker:
        for change in _initial_changes(args):
            await tracker.apply_change(change)

        await tracker.refresh()
        if not args.country:
            await tracker.select_all_categories()
        _print_stats(tracker.stats)
        for aircraft in tracker.visible[: args.top]:
            details = tracker.describe(aircraft.icao24) or {}
            print(f"  {details.get('callsign')} ({aircraft.icao24}) {details.get('altitude')} {details.get('speed')}")

        if args.export is not None:
            path = Path(args.export or export_filename())
            path.write_text(export_json(tracker.export()), encoding="utf-8")
            print(f"Exported {len(tracker.export())} aircraft to {path}")

        if args.once:
            return 0

        live.set()
        tracker.set_auto_refresh(True)
        await asyncio.Event().wait()
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return asyncio.run(_run(args))
    except KeyboardInterrupt:
        return 130
    except SkytrackError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
