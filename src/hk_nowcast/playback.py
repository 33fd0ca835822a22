"""Timeline playback and warning carousel scheduling.

Both are async generators: the caller drives them with ``async for`` and
stops them by breaking out or cancelling the enclosing task.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Sequence
from datetime import datetime

from hk_nowcast.bulletins.dataset import WeatherWarningDataset, next_warning_id
from hk_nowcast.config import get_settings

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


def next_index(index: int, count: int) -> int | None:
    """Next playback frame, or None when ``index`` is the last one."""
    if count <= 0 or index >= count - 1:
        return None
    return index + 1


async def autoplay(
    timestamps: Sequence[datetime],
    interval: float | None = None,
    *,
    sleep: Sleep = asyncio.sleep,
) -> AsyncIterator[tuple[int, datetime]]:
    """Yield ``(index, timestamp)`` from the first frame, one per ``interval``.

    Stops after the last timestamp. ``interval`` defaults to
    ``Settings.autoplay_interval``.
    """
    if interval is None:
        interval = get_settings().autoplay_interval
    if not timestamps:
        return

    index: int | None = 0
    while index is not None:
        yield index, timestamps[index]
        index = next_index(index, len(timestamps))
        if index is not None:
            await sleep(interval)
    logger.debug("Playback finished after %d frame(s)", len(timestamps))


async def rotate_warnings(
    dataset: WeatherWarningDataset,
    interval: float | None = None,
    *,
    sleep: Sleep = asyncio.sleep,
) -> AsyncIterator[str]:
    """Yield the selected warning id, advancing every ``interval`` seconds.

    A single warning is yielded once and never rotates; with none, nothing
    is yielded. Otherwise runs until cancelled. ``interval`` defaults to
    ``Settings.warning_rotation_interval``.
    """
    if interval is None:
        interval = get_settings().warning_rotation_interval
    warnings = dataset.active_warnings
    selection = next_warning_id(warnings, None)
    if selection is None:
        return
    yield selection
    if len(warnings) < 2:
        return

    while True:
        await sleep(interval)
        selection = next_warning_id(warnings, selection)
        yield selection  # type: ignore[misc]
