"""Custom exception hierarchy for skytrack."""

from __future__ import annotations


class SkytrackError(Exception):
    """Base exception for all skytrack errors."""


class SkytrackConfigError(SkytrackError):
    """Invalid or missing configuration."""


class SkytrackStateError(SkytrackError):
    """Tracker used in a state that does not allow the operation."""


class SkytrackTransportError(SkytrackError):
    """HTTP-level failure (network, non-200, invalid JSON).

    Never escapes the snapshot provider: a failed fetch is logged and
    replaced with an empty snapshot for that cycle.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)
