"""Top-level refresh orchestrator.

Wires together: fetch → parse for the three HKO feeds. Feeds are fetched
concurrently with asyncio.gather; one failing feed does not discard the
others.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Awaitable, Callable, TypeVar

from hk_nowcast.bulletins.dataset import WeatherWarningDataset
from hk_nowcast.config import get_settings
from hk_nowcast.feeds.client import Feed, Fetcher
from hk_nowcast.feeds.errors import ErrorMessage, FeedDecodeError
from hk_nowcast.nowcast.dataset import RainfallDataset
from hk_nowcast.temperature.dataset import RegionalTemperatureDataset

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def load_rainfall(fetcher: Fetcher) -> RainfallDataset:
    payload = await fetcher.fetch(Feed.RAINFALL_NOWCAST)
    dataset = RainfallDataset.from_bytes(payload)
    if dataset is None:
        raise FeedDecodeError("rainfall nowcast payload is not UTF-8 text")
    return dataset


async def load_warnings(fetcher: Fetcher) -> WeatherWarningDataset:
    payload = await fetcher.fetch(Feed.WEATHER_WARNING)
    return WeatherWarningDataset.from_bytes(payload)


async def load_temperature(fetcher: Fetcher) -> RegionalTemperatureDataset:
    payload = await fetcher.fetch(Feed.REGIONAL_TEMPERATURE)
    dataset = RegionalTemperatureDataset.from_bytes(payload)
    if dataset is None:
        raise FeedDecodeError("regional temperature payload is not UTF-8 text")
    return dataset


@dataclass
class Snapshot:
    """Result of one refresh. A dataset is None when its feed failed."""

    rainfall: RainfallDataset | None = None
    warnings: WeatherWarningDataset | None = None
    temperature: RegionalTemperatureDataset | None = None
    error: ErrorMessage = ErrorMessage.NONE
    refreshed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def _worst_error(errors: list[BaseException]) -> ErrorMessage:
    """Network outages outrank data errors in the banner."""
    messages = [ErrorMessage.for_exception(exc) for exc in errors]
    if ErrorMessage.NETWORK in messages:
        return ErrorMessage.NETWORK
    if messages:
        return ErrorMessage.DATA
    return ErrorMessage.NONE


async def refresh(fetcher: Fetcher) -> Snapshot:
    """Fetch and parse all feeds concurrently."""
    results = await asyncio.gather(
        load_rainfall(fetcher),
        load_warnings(fetcher),
        load_temperature(fetcher),
        return_exceptions=True,
    )

    errors: list[BaseException] = []
    datasets: list[object] = []
    for feed, result in zip(
        (Feed.RAINFALL_NOWCAST, Feed.WEATHER_WARNING, Feed.REGIONAL_TEMPERATURE), results,
    ):
        if isinstance(result, asyncio.CancelledError):
            raise result
        if isinstance(result, Exception):
            logger.warning("Refresh of %s failed: %s", feed.value, result)
            errors.append(result)
            datasets.append(None)
        else:
            datasets.append(result)

    rainfall, warnings, temperature = datasets
    snapshot = Snapshot(
        rainfall=rainfall,  # type: ignore[arg-type]
        warnings=warnings,  # type: ignore[arg-type]
        temperature=temperature,  # type: ignore[arg-type]
        error=_worst_error(errors),
    )
    logger.info(
        "Refreshed feeds: %d ok, %d failed", len(datasets) - len(errors), len(errors),
    )
    return snapshot


def is_stale(
    snapshot: Snapshot | None,
    now: datetime | None = None,
    max_age: float | None = None,
) -> bool:
    """Whether a snapshot should be refetched on foreground re-entry.

    ``now`` defaults to the current UTC time; a naive ``now`` is taken as
    local time. ``max_age`` defaults to ``Settings.stale_after``.
    """
    if snapshot is None:
        return True
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.astimezone()
    if max_age is None:
        max_age = get_settings().stale_after
    return now - snapshot.refreshed_at > timedelta(seconds=max_age)


class FeedRefresher:
    """At most one in-flight fetch per feed.

    Starting a fetch of a feed that is already loading cancels the older
    task; its caller sees ``asyncio.CancelledError``.
    """

    def __init__(self, fetcher: Fetcher) -> None:
        self._fetcher = fetcher
        self._in_flight: dict[Feed, asyncio.Task] = {}

    def _start(self, feed: Feed, loader: Callable[[Fetcher], Awaitable[T]]) -> asyncio.Task[T]:
        previous = self._in_flight.get(feed)
        if previous is not None and not previous.done():
            logger.debug("Cancelling in-flight %s fetch", feed.value)
            previous.cancel()

        task = asyncio.ensure_future(loader(self._fetcher))
        self._in_flight[feed] = task

        def _forget(done: asyncio.Task) -> None:
            if self._in_flight.get(feed) is done:
                del self._in_flight[feed]

        task.add_done_callback(_forget)
        return task

    def rainfall(self) -> asyncio.Task[RainfallDataset]:
        return self._start(Feed.RAINFALL_NOWCAST, load_rainfall)

    def warnings(self) -> asyncio.Task[WeatherWarningDataset]:
        return self._start(Feed.WEATHER_WARNING, load_warnings)

    def temperature(self) -> asyncio.Task[RegionalTemperatureDataset]:
        return self._start(Feed.REGIONAL_TEMPERATURE, load_temperature)

    def in_flight(self, feed: Feed) -> bool:
        task = self._in_flight.get(feed)
        return task is not None and not task.done()
