"""Shared test fixtures."""

from __future__ import annotations

import json
from datetime import datetime

import pytest

from hk_nowcast.feeds.client import Feed, InMemoryFetcher
from hk_nowcast.nowcast.models import RainfallObservation

ISSUED = datetime(2024, 1, 1, 0, 0)
STEP_1 = datetime(2024, 1, 1, 0, 30)
STEP_2 = datetime(2024, 1, 1, 1, 0)


def make_obs(
    lat: float,
    lon: float,
    rainfall: float,
    forecast_at: datetime = STEP_1,
) -> RainfallObservation:
    return RainfallObservation(
        issued_at=ISSUED,
        forecast_at=forecast_at,
        latitude=lat,
        longitude=lon,
        rainfall_mm=rainfall,
    )


@pytest.fixture
def rainfall_csv() -> str:
    """Two forecast steps over a small patch of Kowloon.

    Step 1 (00:30): a blue run of two cells on row 22.30, a green cell on
    row 22.28, and a dry cell. Step 2 (01:00): heavier rain on the same
    cells plus one point far outside Hong Kong.
    """
    return (
        "Time,Forecast time,Latitude,Longitude,Rainfall(mm)\n"
        "202401010000,202401010030,22.30,114.16,1.0\n"
        "202401010000,202401010030,22.30,114.18,1.5\n"
        "202401010000,202401010030,22.28,114.16,3.0\n"
        "202401010000,202401010030,22.28,114.18,0.0\n"
        "202401010000,202401010100,22.30,114.16,12.0\n"
        "202401010000,202401010100,22.30,114.18,25.0\n"
        "202401010000,202401010100,22.28,114.16,6.0\n"
        "202401010000,202401010100,22.28,114.18,0.2\n"
        "202401010000,202401010100,23.50,114.16,5.0\n"
    )


@pytest.fixture
def rainfall_payload(rainfall_csv) -> bytes:
    return rainfall_csv.encode("utf-8")


@pytest.fixture
def warnings_summary() -> dict:
    """HKO warnsum-shaped summary with one cancelled entry."""
    return {
        "WTCSGNL": {
            "name": "Tropical Cyclone Warning Signal",
            "code": "TC8NE",
            "actionCode": "ISSUE",
            "issueTime": "2024-07-01T10:40:00+08:00",
        },
        "WRAIN": {
            "name": "Rainstorm Warning Signal",
            "code": "WRAINA",
            "actionCode": "ISSUE",
        },
        "WTS": {
            "name": "Thunderstorm Warning",
            "code": "WTS",
            "actionCode": "EXTEND",
        },
        "WL": {
            "name": "Landslip Warning",
            "code": "WL",
            "actionCode": "CANCEL",
        },
    }


@pytest.fixture
def warnings_payload(warnings_summary) -> bytes:
    return json.dumps(warnings_summary).encode("utf-8")


@pytest.fixture
def temperature_csv() -> str:
    return (
        "Date time,Automatic Weather Station,Air Temperature(degree Celsius)\n"
        "202401011200,Chek Lap Kok,18.5\n"
        "202401011200,HK Observatory,19.2\n"
        "202401011200,Sha Tin,17.9\n"
        "202401011200,Tai Mo Shan,N/A\n"
        "202401011200,Somewhere New,16.0\n"
    )


@pytest.fixture
def temperature_payload(temperature_csv) -> bytes:
    return temperature_csv.encode("utf-8")


@pytest.fixture
def fetcher(rainfall_payload, warnings_payload, temperature_payload) -> InMemoryFetcher:
    return InMemoryFetcher({
        Feed.RAINFALL_NOWCAST: rainfall_payload,
        Feed.WEATHER_WARNING: warnings_payload,
        Feed.REGIONAL_TEMPERATURE: temperature_payload,
    })


@pytest.fixture
def feed_dir(tmp_path, rainfall_payload, warnings_payload, temperature_payload):
    """A directory laid out for InMemoryFetcher.from_directory."""
    (tmp_path / "rainfall.csv").write_bytes(rainfall_payload)
    (tmp_path / "warnings.json").write_bytes(warnings_payload)
    (tmp_path / "temperature.csv").write_bytes(temperature_payload)
    return tmp_path
