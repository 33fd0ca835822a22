"""Rainfall nowcast data models."""

from __future__ import annotations

import math
import re
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from hk_nowcast.common.timestamps import parse_timestamp
from hk_nowcast.common.types import BoundingBox, LatLon

# Nominal half-size of one upstream grid cell, in degrees.
CELL_HALF_HEIGHT = 0.009
CELL_HALF_WIDTH = 0.01

# Plain decimal or exponent notation, no surrounding whitespace or underscores
_NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


class RainfallLevel(Enum):
    """Discrete rainfall band used for colouring the map.

    Each member carries its half-open ``[low, high)`` range in mm.
    """

    BLUE = (0.5, 2.5)
    GREEN = (2.5, 5.0)
    YELLOW = (5.0, 10.0)
    ORANGE = (10.0, 20.0)
    RED = (20.0, 999.0)

    @property
    def low(self) -> float:
        return self.value[0]

    @property
    def high(self) -> float:
        return self.value[1]

    @property
    def color(self) -> str:
        return self.name.lower()

    @property
    def legend_label(self) -> str:
        if self is RainfallLevel.RED:
            return f"> {self.low:g}mm"
        return f"{self.low:g}mm - {self.high:g}mm"

    @classmethod
    def classify(cls, rainfall_mm: float) -> RainfallLevel | None:
        """Map a rainfall amount to its band, or None outside [0.5, 999)."""
        for level in cls:
            if level.low <= rainfall_mm < level.high:
                return level
        return None


def _lenient_float(s: str) -> float:
    """Parse a float, falling back to 0.0 instead of failing the row."""
    if not _NUMBER_PATTERN.fullmatch(s):
        return 0.0
    value = float(s)
    # overflow ("1e999") parses to inf
    if not math.isfinite(value):
        return 0.0
    return value


def cell_bounds(lat: float, lon: float) -> BoundingBox:
    """The fixed-size grid cell centred on (lat, lon)."""
    return BoundingBox(
        south_west=(lat - CELL_HALF_HEIGHT, lon - CELL_HALF_WIDTH),
        north_east=(lat + CELL_HALF_HEIGHT, lon + CELL_HALF_WIDTH),
    )


@dataclass(frozen=True)
class RainfallObservation:
    """One grid point of the nowcast feed.

    Attributes:
        issued_at: when HKO issued the nowcast
        forecast_at: the time the rainfall amount applies to
        latitude: grid point latitude
        longitude: grid point longitude
        rainfall_mm: accumulated rainfall in mm for the forecast step
    """

    issued_at: datetime
    forecast_at: datetime
    latitude: float
    longitude: float
    rainfall_mm: float

    @property
    def level(self) -> RainfallLevel | None:
        return RainfallLevel.classify(self.rainfall_mm)

    @property
    def position(self) -> LatLon:
        return (self.latitude, self.longitude)

    @property
    def cell(self) -> BoundingBox:
        return cell_bounds(self.latitude, self.longitude)

    @classmethod
    def from_csv_row(cls, row: Sequence[str]) -> RainfallObservation | None:
        """Build an observation from one already-split CSV row.

        Rows without exactly 5 fields, or with an unparseable issue or
        forecast timestamp, yield None. Bad numeric fields become 0.0.
        """
        if len(row) != 5:
            return None

        issued_at = parse_timestamp(row[0])
        if issued_at is None:
            return None
        forecast_at = parse_timestamp(row[1])
        if forecast_at is None:
            return None

        return cls(
            issued_at=issued_at,
            forecast_at=forecast_at,
            latitude=_lenient_float(row[2]),
            longitude=_lenient_float(row[3]),
            rainfall_mm=_lenient_float(row[4]),
        )


@dataclass(frozen=True)
class MergedGridPolygon:
    """Rectangle covering a run of same-row, same-level grid cells."""

    level: RainfallLevel
    south: float
    west: float
    north: float
    east: float

    @property
    def corners(self) -> list[LatLon]:
        """SW, SE, NE, NW corners, ready to be drawn as a closed polygon."""
        return [
            (self.south, self.west),
            (self.south, self.east),
            (self.north, self.east),
            (self.north, self.west),
        ]

    @property
    def bounds(self) -> BoundingBox:
        return BoundingBox(south_west=(self.south, self.west), north_east=(self.north, self.east))
