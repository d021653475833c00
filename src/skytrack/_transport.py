"""HTTP transport for snapshot endpoints."""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

import aiohttp

from skytrack._constants import USER_AGENT
from skytrack.exceptions import SkytrackTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Anything that can GET a URL and return its decoded JSON body."""

    async def get_json(self, url: str) -> Any: ...


class HttpTransport:
    """aiohttp-backed JSON GET with uniform error mapping."""

    def __init__(self, http_session: aiohttp.ClientSession, *, timeout: float = 20.0) -> None:
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    async def get_json(self, url: str) -> Any:
        """GET *url* and decode the JSON body.

        Raises
        ------
        SkytrackTransportError
            On network errors, timeouts, non-200 responses or invalid JSON.
        """
        headers = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }

        _logger.debug("GET %s", url)

        try:
            async with self._http.get(url, headers=headers, timeout=self._timeout) as resp:
                text = await resp.text()
                if resp.status != 200:
                    raise SkytrackTransportError(
                        f"HTTP {resp.status} from {url}: {text[:200]}",
                        status_code=resp.status,
                        url=url,
                    )
        except SkytrackTransportError:
            raise
        except TimeoutError as exc:
            raise SkytrackTransportError(f"Request to {url} timed out", url=url) from exc
        except aiohttp.ClientError as exc:
            raise SkytrackTransportError(f"Request to {url} failed: {exc}", url=url) from exc

        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise SkytrackTransportError(f"Invalid JSON from {url}: {text[:200]}", url=url) from exc
