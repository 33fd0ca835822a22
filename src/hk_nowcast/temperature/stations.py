"""HKO regional temperature station registry.

Maps the station names used in the regional temperature feed to their
coordinates. Names not listed here cannot be placed on the map.
"""

from __future__ import annotations

from collections.abc import Iterable

from geopy.distance import geodesic

from hk_nowcast.common.types import LatLon

STATIONS: dict[str, LatLon] = {
    "Chek Lap Kok":               (22.3094444, 113.9219444),
    "Cheung Chau":                (22.2011111, 114.0266667),
    "Clear Water Bay":            (22.2633333, 114.2997222),
    "Happy Valley":               (22.2705556, 114.1836111),
    "HK Observatory":             (22.3019444, 114.1741667),
    "HK Park":                    (22.2783333, 114.1622222),
    "Kai Tak Runway Park":        (22.3047222, 114.2169444),
    "Kau Sai Chau":               (22.3702778, 114.3125),
    "King's Park":                (22.3119444, 114.1727778),
    "Kowloon City":               (22.335, 114.1847222),
    "Kwun Tong":                  (22.3186111, 114.2247222),
    "Lau Fau Shan":               (22.4688889, 113.9836111),
    "Ngong Ping":                 (22.2586111, 113.9127778),
    "Pak Tam Chung":              (22.4027778, 114.3230556),
    "Peng Chau":                  (22.2911111, 114.0433333),
    "Sai Kung":                   (22.3755556, 114.2744444),
    "Sha Tin":                    (22.4025, 114.21),
    "Sham Shui Po":               (22.3358333, 114.1369444),
    "Shau Kei Wan":               (22.2816667, 114.2361111),
    "Shek Kong":                  (22.4361111, 114.0847222),
    "Sheung Shui":                (22.5019444, 114.1111111),
    "Stanley":                    (22.2141667, 114.2186111),
    "Ta Kwu Ling":                (22.5286111, 114.1566667),
    "Tai Lung":                   (22.4847222, 114.1175),
    "Tai Mei Tuk":                (22.4752778, 114.2375),
    "Tai Mo Shan":                (22.4105556, 114.1244444),
    "Tai Po":                     (22.4461111, 114.1788889),
    "Tate's Cairn":               (22.3577778, 114.2177778),
    "The Peak":                   (22.2641667, 114.155),
    "Tseung Kwan O":              (22.3158333, 114.2555556),
    "Tsing Yi":                   (22.3441667, 114.11),
    "Tsuen Wan Ho Koon":          (22.3836111, 114.1077778),
    "Tsuen Wan Shing Mun Valley": (22.3755556, 114.1266667),
    "Tuen Mun":                   (22.3858333, 113.9641667),
    "Waglan Island":              (22.1822222, 114.3033333),
    "Wetland Park":               (22.4666667, 114.0088889),
    "Wong Chuk Hang":             (22.2477778, 114.1736111),
    "Wong Tai Sin":               (22.3394444, 114.2052778),
    "Yuen Long Park":             (22.4408333, 114.0183333),
}


def station_position(name: str) -> LatLon | None:
    """Coordinates of a station by its exact feed name."""
    return STATIONS.get(name)


def nearest_station(names: Iterable[str], position: LatLon) -> str | None:
    """The station among ``names`` closest to ``position``.

    Names without a known position are only returned when no listed
    station is available.
    """
    best: str | None = None
    best_km = float("inf")
    for name in names:
        coords = station_position(name)
        if coords is None:
            if best is None:
                best = name
            continue
        km = geodesic(position, coords).km
        if km < best_km:
            best, best_km = name, km
    return best
