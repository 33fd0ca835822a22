"""HKO open data fetchers.

The parsers never talk to the network; they take bytes from a
:class:`Fetcher`. ``HkoFetcher`` is the real HTTP implementation and
``InMemoryFetcher`` serves canned payloads (tests, offline demos).
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Protocol

import httpx

from hk_nowcast.common.http import HttpClient
from hk_nowcast.config import Settings, get_settings
from hk_nowcast.feeds.errors import FeedFetchError, NetworkUnavailableError

logger = logging.getLogger(__name__)


class Feed(Enum):
    """The HKO feeds consumed by the app."""

    RAINFALL_NOWCAST = "rainfall_nowcast"
    WEATHER_WARNING = "weather_warning"
    REGIONAL_TEMPERATURE = "regional_temperature"

    def url(self, settings: Settings | None = None) -> str:
        settings = settings or get_settings()
        return getattr(settings, f"{self.value}_url")


# File names read by InMemoryFetcher.from_directory
FEED_FILES: dict[Feed, str] = {
    Feed.RAINFALL_NOWCAST: "rainfall.csv",
    Feed.WEATHER_WARNING: "warnings.json",
    Feed.REGIONAL_TEMPERATURE: "temperature.csv",
}


class Fetcher(Protocol):
    """Anything that can produce the raw payload of a feed."""

    async def fetch(self, feed: Feed) -> bytes:
        """Return the raw payload for ``feed``.

        Raises:
            NetworkUnavailableError: the source could not be reached
            FeedFetchError: the source answered without a usable payload
        """
        ...


class HkoFetcher:
    """Fetch feeds from data.weather.gov.hk over HTTP."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()

    async def fetch(self, feed: Feed) -> bytes:
        url = feed.url(self._settings)
        async with HttpClient() as client:
            try:
                payload = await client.fetch_bytes(url)
            except httpx.HTTPStatusError as exc:
                logger.warning("HKO %s HTTP %d", feed.value, exc.response.status_code)
                raise FeedFetchError(
                    f"{feed.value}: HTTP {exc.response.status_code}"
                ) from exc
            except httpx.TransportError as exc:
                logger.warning("HKO %s unreachable: %s", feed.value, exc)
                raise NetworkUnavailableError(f"{feed.value}: {exc}") from exc

        logger.debug("Fetched %s (%d bytes)", feed.value, len(payload))
        return payload


class InMemoryFetcher:
    """Serve fixed payloads per feed."""

    def __init__(self, payloads: dict[Feed, bytes] | None = None) -> None:
        self._payloads = dict(payloads or {})
        self.calls: list[Feed] = []

    @classmethod
    def from_directory(cls, directory: Path) -> InMemoryFetcher:
        """Load whichever of ``rainfall.csv``, ``warnings.json`` and
        ``temperature.csv`` exist in ``directory``."""
        payloads = {}
        for feed, filename in FEED_FILES.items():
            path = directory / filename
            if path.is_file():
                payloads[feed] = path.read_bytes()
            else:
                logger.debug("No %s in %s", filename, directory)
        return cls(payloads)

    async def fetch(self, feed: Feed) -> bytes:
        self.calls.append(feed)
        payload = self._payloads.get(feed)
        if payload is None:
            raise FeedFetchError(f"{feed.value}: no payload")
        return payload
