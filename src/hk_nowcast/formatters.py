"""Dataset output formatters: Rich tables and JSON."""

from __future__ import annotations

import json

from rich.console import Console
from rich.table import Table

from hk_nowcast.bulletins.dataset import WeatherWarningDataset
from hk_nowcast.common.timestamps import format_timestamp, time_of_day
from hk_nowcast.common.types import LatLon
from hk_nowcast.nowcast.dataset import RainfallDataset
from hk_nowcast.nowcast.models import RainfallLevel
from hk_nowcast.temperature.dataset import RegionalTemperatureDataset, thermometer_band
from hk_nowcast.temperature.stations import station_position


def level_counts(dataset: RainfallDataset) -> dict[str, dict[str, int]]:
    """Polygons per level per forecast time, keyed by ``YYYYMMDDHHMM``."""
    counts: dict[str, dict[str, int]] = {}
    for ts in dataset.timestamps:
        per_level = {level.color: 0 for level in RainfallLevel}
        for polygon in dataset.polygons_at(ts):
            per_level[polygon.level.color] += 1
        counts[format_timestamp(ts)] = per_level
    return counts


def format_rainfall_table(dataset: RainfallDataset, console: Console | None = None) -> None:
    """Print one row per forecast step with cell and polygon counts."""
    if console is None:
        console = Console()

    if not dataset.timestamps:
        console.print("[yellow]Rainfall nowcast contains no forecast steps.[/yellow]")
        return

    table = Table(title="Rainfall Nowcast", show_lines=False)
    table.add_column("Time", width=6)
    table.add_column("Forecast", width=12)
    table.add_column("Cells", justify="right", width=7)
    table.add_column("Polygons", justify="right", width=8)
    for level in RainfallLevel:
        table.add_column(f"[{level.color}]{level.legend_label}[/{level.color}]", justify="right")

    counts = level_counts(dataset)
    for ts in dataset.timestamps:
        key = format_timestamp(ts)
        table.add_row(
            time_of_day(ts),
            key,
            str(len(dataset.observations_at(ts))),
            str(len(dataset.polygons_at(ts))),
            *(str(counts[key][level.color]) for level in RainfallLevel),
        )

    console.print(table)


def format_rainfall_json(dataset: RainfallDataset) -> str:
    """Merged polygons per forecast step as JSON."""
    return json.dumps(
        {
            "created_at": dataset.created_at.isoformat(),
            "steps": [
                {
                    "forecast_at": format_timestamp(ts),
                    "cells": len(dataset.observations_at(ts)),
                    "polygons": [
                        {"level": p.level.color, "corners": p.corners}
                        for p in dataset.polygons_at(ts)
                    ],
                }
                for ts in dataset.timestamps
            ],
        },
        indent=2,
    )


def format_warnings_table(dataset: WeatherWarningDataset, console: Console | None = None) -> None:
    """Print active warnings in carousel order."""
    if console is None:
        console = Console()

    if not dataset.active_warnings:
        console.print("[green]No weather warnings in force.[/green]")
        return

    table = Table(title="Weather Warnings in Force", show_lines=True)
    table.add_column("ID", width=18)
    table.add_column("Warning", width=36, no_wrap=False)
    table.add_column("Signal", width=18)
    table.add_column("Action", width=8)

    for w in dataset.active_warnings:
        table.add_row(w.id, w.description, w.code_description or "", w.action_code)

    console.print(table)


def format_temperature_table(
    dataset: RegionalTemperatureDataset,
    console: Console | None = None,
    highlight: str | None = None,
) -> None:
    """Print station readings; ``highlight`` marks one station in bold."""
    if console is None:
        console = Console()

    if not dataset.readings:
        console.print("[yellow]No regional temperature readings.[/yellow]")
        return

    band_color = {"low": "blue", "medium": "white", "high": "red"}

    table = Table(title="Regional Temperatures")
    table.add_column("Station", width=28)
    table.add_column("°C", justify="right", width=6)
    table.add_column("Position", width=22)

    for station, reading in sorted(dataset.readings.items()):
        position = station_position(station)
        color = band_color[thermometer_band(reading)]
        name = f"[bold]{station}[/bold]" if station == highlight else station
        table.add_row(
            name,
            f"[{color}]{reading}[/{color}]",
            _format_latlon(position) if position else "[dim]unknown[/dim]",
        )

    console.print(table)


def _format_latlon(position: LatLon) -> str:
    return f"{position[0]:.4f}, {position[1]:.4f}"
