"""Shared type aliases and Hong Kong map geometry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

# Latitude/longitude pair
LatLon: TypeAlias = tuple[float, float]


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned lat/lon rectangle."""

    south_west: LatLon
    north_east: LatLon

    @property
    def south(self) -> float:
        return self.south_west[0]

    @property
    def west(self) -> float:
        return self.south_west[1]

    @property
    def north(self) -> float:
        return self.north_east[0]

    @property
    def east(self) -> float:
        return self.north_east[1]

    def contains(self, point: LatLon) -> bool:
        """Closed containment test (edges count as inside)."""
        lat, lon = point
        return self.south <= lat <= self.north and self.west <= lon <= self.east

    def contains_strictly(self, point: LatLon) -> bool:
        """Open containment test (edges count as outside)."""
        lat, lon = point
        return self.south < lat < self.north and self.west < lon < self.east


# Grid cells outside this box are never merged into polygons.
HK_MERGE_BOUNDS = BoundingBox(south_west=(22.02, 113.66), north_east=(22.73, 114.46))

# Point queries (current location) outside this box have no answer.
HK_QUERY_BOUNDS = BoundingBox(south_west=(22.15, 113.84), north_east=(22.564, 114.405))

# Victoria Harbour
MAP_CENTER: LatLon = (22.345, 114.12)
