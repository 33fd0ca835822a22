"""Run-length merge of sorted grid cells into rendering polygons.

The nowcast grid has several thousand points per forecast step. Drawing one
square per point is wasteful, so consecutive points on the same latitude row
with the same rainfall level are coalesced into a single rectangle.

The merge relies on its input being sorted latitude-descending, then
longitude-descending: same-row neighbours are then adjacent in the sequence.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from hk_nowcast.common.types import HK_MERGE_BOUNDS, BoundingBox
from hk_nowcast.nowcast.models import (
    CELL_HALF_HEIGHT,
    CELL_HALF_WIDTH,
    MergedGridPolygon,
    RainfallObservation,
)


def scan_order_key(obs: RainfallObservation) -> tuple[float, float]:
    """Sort key giving north-to-south rows, east-to-west within a row."""
    return (-obs.latitude, -obs.longitude)


def polygon_for_run(run: Sequence[RainfallObservation]) -> MergedGridPolygon | None:
    """Bounding rectangle of a run of same-level cells, or None for an empty run."""
    if not run:
        return None
    level = run[0].level
    if level is None:
        return None

    lats = [obs.latitude for obs in run]
    lons = [obs.longitude for obs in run]
    return MergedGridPolygon(
        level=level,
        south=min(lats) - CELL_HALF_HEIGHT,
        west=min(lons) - CELL_HALF_WIDTH,
        north=max(lats) + CELL_HALF_HEIGHT,
        east=max(lons) + CELL_HALF_WIDTH,
    )


def _continues_run(run: list[RainfallObservation], obs: RainfallObservation) -> bool:
    last = run[-1]
    return (
        last.latitude == obs.latitude
        and last.level == obs.level
        and last.forecast_at == obs.forecast_at
    )


def merge_observations(
    observations: Iterable[RainfallObservation],
    bounds: BoundingBox = HK_MERGE_BOUNDS,
) -> list[MergedGridPolygon]:
    """Merge pre-sorted observations into polygons.

    Args:
        observations: one forecast step, already in :func:`scan_order_key` order
        bounds: points not strictly inside this box are skipped entirely

    Returns:
        Polygons in scan order. Cells with no rainfall level break a run
        and produce nothing.
    """
    polygons: list[MergedGridPolygon] = []
    run: list[RainfallObservation] = []

    def _flush() -> None:
        polygon = polygon_for_run(run)
        if polygon is not None:
            polygons.append(polygon)

    for obs in observations:
        if not bounds.contains_strictly(obs.position):
            continue

        if obs.level is None:
            _flush()
            run = []
            continue

        if not run or _continues_run(run, obs):
            run.append(obs)
            continue

        _flush()
        run = [obs]

    _flush()
    return polygons
