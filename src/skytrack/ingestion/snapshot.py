"""Snapshot ingestion.

This module owns "how data enters": fetching a raw snapshot and turning
its records into :class:`~skytrack.models.aircraft.Aircraft` values.
Merging into the rendered view is the reconciliation engine's job.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, Protocol

from pydantic import ValidationError

from skytrack._constants import API_URL
from skytrack._transport import Transport
from skytrack.exceptions import SkytrackTransportError
from skytrack.models.aircraft import Aircraft

_logger = logging.getLogger(__name__)


class SnapshotProvider(Protocol):
    """Source of raw state vectors.

    Implementations return an empty list instead of raising when the
    snapshot cannot be retrieved.
    """

    async def fetch(self) -> list[Any]: ...


class OpenSkyProvider:
    """Fetches ``/states/all`` from the OpenSky REST API."""

    def __init__(self, transport: Transport, *, url: str = API_URL) -> None:
        self._transport = transport
        self._url = url

    async def fetch(self) -> list[Any]:
        try:
            body = await self._transport.get_json(self._url)
        except SkytrackTransportError as exc:
            _logger.warning("Snapshot fetch failed, using empty snapshot: %s", exc)
            return []
        return extract_states(body)


def extract_states(body: Any) -> list[Any]:
    """Pull the ``states`` list out of a response body.

    OpenSky sends ``"states": null`` when nothing is in range.
    """
    if not isinstance(body, dict):
        _logger.warning("Snapshot body is not an object; using empty snapshot")
        return []
    states = body.get("states")
    if states is None:
        return []
    if not isinstance(states, list):
        _logger.warning("Snapshot 'states' is %s, not a list; using empty snapshot", type(states).__name__)
        return []
    return states


def normalize_states(records: Iterable[Any]) -> list[Aircraft]:
    """Normalize raw records, dropping those without a usable identifier.

    When an identifier repeats, the first record wins.
    """
    aircraft: list[Aircraft] = []
    seen: set[str] = set()
    dropped = 0
    for record in records:
        try:
            item = Aircraft.from_state_vector(record)
        except ValidationError:
            dropped += 1
            continue
        if item.icao24 in seen:
            dropped += 1
            continue
        seen.add(item.icao24)
        aircraft.append(item)
    if dropped:
        _logger.debug("Dropped %d records without a usable or unique identifier", dropped)
    return aircraft
