"""Derived display values for the current location.

Pure functions from (dataset, inputs) to what the map overlay shows. The
caller decides when to recompute.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from hk_nowcast.common.types import HK_QUERY_BOUNDS, BoundingBox, LatLon
from hk_nowcast.nowcast.dataset import RainfallDataset
from hk_nowcast.nowcast.models import RainfallLevel


class SummaryKind(Enum):
    NONE = "none"
    NO_LOCATION_ACCESS = "no_location_access"
    NO_INFO = "no_info"
    CURRENT_LOCATION = "current_location"


_MESSAGES = {
    SummaryKind.NONE: "",
    SummaryKind.NO_LOCATION_ACCESS: (
        "Location permission is required for current location rainfall nowcast."
    ),
    SummaryKind.NO_INFO: "Rainfall nowcast is not available for current location.",
}

_ICONS = {
    SummaryKind.NONE: "ellipsis",
    SummaryKind.NO_LOCATION_ACCESS: "location.slash.circle",
    SummaryKind.NO_INFO: "info.circle",
}


@dataclass(frozen=True)
class NowcastSummary:
    """Rainfall outlook banner for the user's position."""

    kind: SummaryKind
    min_mm: float = 0.0
    max_mm: float = 0.0

    @property
    def expects_rain(self) -> bool:
        return self.kind is SummaryKind.CURRENT_LOCATION and self.max_mm > 0

    @property
    def message(self) -> str:
        if self.kind is not SummaryKind.CURRENT_LOCATION:
            return _MESSAGES[self.kind]
        if self.expects_rain:
            return "Your location's rainfall in next 2 hours: "
        return "No rainfall is expected at your location in next 2 hours"

    @property
    def range_text(self) -> str | None:
        if not self.expects_rain:
            return None
        return f"{self.min_mm}mm - {self.max_mm}mm"

    @property
    def icon(self) -> str:
        if self.kind is not SummaryKind.CURRENT_LOCATION:
            return _ICONS[self.kind]
        level = RainfallLevel.classify(self.max_mm)
        if level is None:
            return "cloud"
        if level in (RainfallLevel.BLUE, RainfallLevel.GREEN):
            return "cloud.rain"
        return "cloud.heavyrain"


def summarize_location(
    dataset: RainfallDataset | None,
    position: LatLon | None,
    *,
    has_permission: bool,
    is_fetching: bool = False,
    bounds: BoundingBox = HK_QUERY_BOUNDS,
) -> NowcastSummary:
    """Compute the banner shown above the map."""
    if dataset is None and not is_fetching:
        return NowcastSummary(SummaryKind.NONE)
    if not has_permission:
        return NowcastSummary(SummaryKind.NO_LOCATION_ACCESS)
    if dataset is None or position is None:
        return NowcastSummary(SummaryKind.NO_INFO)

    rainfall_range = dataset.range_at(position, bounds.south_west, bounds.north_east)
    if rainfall_range is None:
        return NowcastSummary(SummaryKind.NO_INFO)
    low, high = rainfall_range
    return NowcastSummary(SummaryKind.CURRENT_LOCATION, min_mm=low, max_mm=high)
