"""Parsed rainfall nowcast dataset: grouped observations plus merged polygons."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime, timezone
from functools import cached_property
from types import MappingProxyType
from typing import Mapping

import numpy as np
from numpy.typing import NDArray

from hk_nowcast.common.text import split_csv_rows
from hk_nowcast.common.types import HK_MERGE_BOUNDS, BoundingBox, LatLon
from hk_nowcast.nowcast.merge import merge_observations, scan_order_key
from hk_nowcast.nowcast.models import (
    CELL_HALF_HEIGHT,
    CELL_HALF_WIDTH,
    MergedGridPolygon,
    RainfallObservation,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RainfallDataset:
    """One fetch of the gridded rainfall nowcast.

    Attributes:
        observations: forecast time -> observations sorted north-to-south,
            east-to-west (the order the merge pass depends on)
        polygons: forecast time -> merged rendering polygons
        created_at: when this dataset was built (not the data time)
    """

    observations: Mapping[datetime, tuple[RainfallObservation, ...]]
    polygons: Mapping[datetime, tuple[MergedGridPolygon, ...]]
    created_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc), compare=False,
    )

    @classmethod
    def empty(cls) -> RainfallDataset:
        return cls(observations=MappingProxyType({}), polygons=MappingProxyType({}))

    @classmethod
    def from_observations(
        cls,
        observations: list[RainfallObservation],
        merge_bounds: BoundingBox = HK_MERGE_BOUNDS,
    ) -> RainfallDataset:
        """Group, sort and merge already-parsed observations."""
        buckets: dict[datetime, list[RainfallObservation]] = defaultdict(list)
        for obs in observations:
            buckets[obs.forecast_at].append(obs)

        grouped: dict[datetime, tuple[RainfallObservation, ...]] = {}
        merged: dict[datetime, tuple[MergedGridPolygon, ...]] = {}
        for forecast_at, bucket in buckets.items():
            ordered = tuple(sorted(bucket, key=scan_order_key))
            grouped[forecast_at] = ordered
            merged[forecast_at] = tuple(merge_observations(ordered, merge_bounds))
            logger.debug(
                "Forecast %s: %d cells merged into %d polygons",
                forecast_at.isoformat(), len(ordered), len(merged[forecast_at]),
            )

        return cls(observations=MappingProxyType(grouped), polygons=MappingProxyType(merged))

    @classmethod
    def from_text(
        cls,
        text: str,
        merge_bounds: BoundingBox = HK_MERGE_BOUNDS,
    ) -> RainfallDataset:
        """Parse CSV text. Row 0 is always treated as the header."""
        rows = split_csv_rows(text)
        if len(rows) < 2:
            return cls.empty()

        observations: list[RainfallObservation] = []
        dropped = 0
        for row in rows[1:]:
            obs = RainfallObservation.from_csv_row(row)
            if obs is None:
                dropped += 1
                continue
            observations.append(obs)

        if dropped:
            logger.debug("Dropped %d malformed nowcast row(s) of %d", dropped, len(rows) - 1)

        return cls.from_observations(observations, merge_bounds)

    @classmethod
    def from_bytes(
        cls,
        payload: bytes,
        merge_bounds: BoundingBox = HK_MERGE_BOUNDS,
    ) -> RainfallDataset | None:
        """Parse a raw feed payload.

        Returns None when the payload is not UTF-8. Malformed rows are
        dropped; a payload with no data rows yields an empty dataset.
        """
        try:
            text = payload.decode("utf-8")
        except UnicodeDecodeError as exc:
            logger.debug("Rainfall nowcast payload is not UTF-8: %s", exc)
            return None
        return cls.from_text(text, merge_bounds)

    @property
    def timestamps(self) -> list[datetime]:
        """Forecast times in playback order."""
        return sorted(self.observations)

    def observations_at(self, forecast_at: datetime) -> tuple[RainfallObservation, ...]:
        return self.observations.get(forecast_at, ())

    def polygons_at(self, forecast_at: datetime) -> tuple[MergedGridPolygon, ...]:
        return self.polygons.get(forecast_at, ())

    @cached_property
    def _grid_arrays(self) -> list[tuple[NDArray[np.float64], NDArray[np.float64], NDArray[np.float64]]]:
        """(lat, lon, rainfall) columns per forecast step, in scan order."""
        arrays = []
        for group in self.observations.values():
            arrays.append((
                np.array([o.latitude for o in group], dtype=np.float64),
                np.array([o.longitude for o in group], dtype=np.float64),
                np.array([o.rainfall_mm for o in group], dtype=np.float64),
            ))
        return arrays

    def range_at(
        self,
        point: LatLon,
        south_west: LatLon,
        north_east: LatLon,
    ) -> tuple[float, float] | None:
        """Min/max rainfall forecast over all steps for the cell containing ``point``.

        Returns None when ``point`` is outside ``[south_west, north_east]``
        or no grid cell contains it. Within one forecast step only the first
        matching cell (in scan order) counts.
        """
        if not BoundingBox(south_west, north_east).contains(point):
            return None

        lat, lon = point
        hits: list[float] = []
        for lats, lons, rainfall in self._grid_arrays:
            inside = (
                (lats - CELL_HALF_HEIGHT <= lat) & (lat <= lats + CELL_HALF_HEIGHT)
                & (lons - CELL_HALF_WIDTH <= lon) & (lon <= lons + CELL_HALF_WIDTH)
            )
            matches = np.flatnonzero(inside)
            if matches.size:
                hits.append(float(rainfall[matches[0]]))

        if not hits:
            return None
        return (min(hits), max(hits))
