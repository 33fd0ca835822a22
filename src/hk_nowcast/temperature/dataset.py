"""Regional temperature feed parsing."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Literal, Mapping

from hk_nowcast.common.text import split_csv_rows
from hk_nowcast.common.types import LatLon
from hk_nowcast.temperature.stations import station_position

logger = logging.getLogger(__name__)

ThermometerBand = Literal["low", "medium", "high"]

_LOW_MAX_C = 15.0
_HIGH_MIN_C = 30.0


def _to_celsius(reading: str | None) -> float | None:
    if reading is None:
        return None
    try:
        return float(reading)
    except ValueError:
        return None


def thermometer_band(reading: str | None) -> ThermometerBand:
    """Icon band for a raw reading; unparseable readings are "medium"."""
    celsius = _to_celsius(reading)
    if celsius is None:
        return "medium"
    if celsius <= _LOW_MAX_C:
        return "low"
    if celsius >= _HIGH_MIN_C:
        return "high"
    return "medium"


@dataclass(frozen=True)
class RegionalTemperatureDataset:
    """Latest reading per station, kept as the feed's raw text."""

    readings: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    created_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc), compare=False,
    )

    @classmethod
    def from_text(cls, text: str) -> RegionalTemperatureDataset:
        """Parse ``<time>,<station>,<temperature>`` rows.

        Rows without exactly 3 fields are discarded first; the first
        remaining row is the header.
        """
        rows = [row for row in split_csv_rows(text) if len(row) == 3]
        if len(rows) < 2:
            return cls()

        readings = {row[1]: row[2] for row in rows[1:]}
        logger.debug("Parsed %d regional temperature reading(s)", len(readings))
        return cls(readings=MappingProxyType(readings))

    @classmethod
    def from_bytes(cls, payload: bytes) -> RegionalTemperatureDataset | None:
        """Parse a raw feed payload; None if it is not UTF-8."""
        try:
            text = payload.decode("utf-8")
        except UnicodeDecodeError as exc:
            logger.debug("Regional temperature payload is not UTF-8: %s", exc)
            return None
        return cls.from_text(text)

    def reading(self, station: str) -> str | None:
        return self.readings.get(station)

    def temperature_of(self, station: str) -> float | None:
        """Numeric reading in Celsius, if the feed's text parses."""
        return _to_celsius(self.readings.get(station))

    def placed_readings(self) -> list[tuple[str, LatLon, str]]:
        """(station, position, reading) for stations that can be drawn."""
        placed = []
        for station, reading in self.readings.items():
            position = station_position(station)
            if position is None:
                continue
            placed.append((station, position, reading))
        return placed
