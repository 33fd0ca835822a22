"""Device position capability."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Protocol

from hk_nowcast.common.types import LatLon


class PositionSource(Protocol):
    """Platform location service as seen by the core."""

    def current_position(self) -> Iterator[LatLon]:
        """Positions received so far, oldest first."""
        ...


class StaticPositionSource:
    """Replays a fixed list of positions."""

    def __init__(self, positions: Iterable[LatLon] = ()) -> None:
        self._positions = list(positions)

    def current_position(self) -> Iterator[LatLon]:
        return iter(self._positions)


def latest_position(source: PositionSource) -> LatLon | None:
    """The most recent position, or None if the source has none yet."""
    latest = None
    for position in source.current_position():
        latest = position
    return latest
