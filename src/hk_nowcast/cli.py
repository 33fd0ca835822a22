"""Typer CLI: hk-nowcast rainfall, range, warnings, temperatures, play."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from hk_nowcast.feeds.client import Fetcher, HkoFetcher, InMemoryFetcher
from hk_nowcast.feeds.errors import ErrorMessage, FeedError

app = typer.Typer(
    name="hk-nowcast",
    help="Hong Kong rainfall nowcast, weather warnings and regional temperatures",
    no_args_is_help=True,
)
console = Console()

_FROM_DIR_HELP = "Read rainfall.csv / warnings.json / temperature.csv from this directory instead of HKO"


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _fetcher(from_dir: Optional[Path]) -> Fetcher:
    if from_dir is not None:
        return InMemoryFetcher.from_directory(from_dir)
    return HkoFetcher()


def _run(coro):
    """Run a loader, turning feed failures into a red message and exit code 1."""
    try:
        return asyncio.run(coro)
    except FeedError as exc:
        message = ErrorMessage.for_exception(exc)
        console.print(f"[red]{message.value}: {exc}[/red]")
        raise typer.Exit(code=1) from exc


@app.command()
def rainfall(
    output: str = typer.Option(
        "table", "--output", "-o",
        help="Output format: table, json",
    ),
    from_dir: Optional[Path] = typer.Option(None, "--from-dir", help=_FROM_DIR_HELP),
) -> None:
    """Show forecast steps of the rainfall nowcast with merged polygon counts."""
    from hk_nowcast.formatters import format_rainfall_json, format_rainfall_table
    from hk_nowcast.pipeline import load_rainfall

    dataset = _run(load_rainfall(_fetcher(from_dir)))

    if output == "json":
        console.print_json(format_rainfall_json(dataset))
    else:
        format_rainfall_table(dataset, console)


@app.command(name="range")
def rainfall_range(
    lat: float = typer.Argument(help="Latitude, e.g. 22.30"),
    lon: float = typer.Argument(help="Longitude, e.g. 114.17"),
    from_dir: Optional[Path] = typer.Option(None, "--from-dir", help=_FROM_DIR_HELP),
) -> None:
    """Rainfall expected in the next 2 hours at a point."""
    from hk_nowcast.pipeline import load_rainfall
    from hk_nowcast.presentation import summarize_location

    dataset = _run(load_rainfall(_fetcher(from_dir)))
    summary = summarize_location(dataset, (lat, lon), has_permission=True)

    line = summary.message
    if summary.range_text:
        line += f"[bold]{summary.range_text}[/bold]"
    console.print(line)


@app.command()
def warnings(
    from_dir: Optional[Path] = typer.Option(None, "--from-dir", help=_FROM_DIR_HELP),
) -> None:
    """List weather warnings in force."""
    from hk_nowcast.formatters import format_warnings_table
    from hk_nowcast.pipeline import load_warnings

    dataset = _run(load_warnings(_fetcher(from_dir)))
    format_warnings_table(dataset, console)


@app.command()
def temperatures(
    near: Optional[tuple[float, float]] = typer.Option(
        None, "--near", help="LAT LON: highlight the closest station",
    ),
    from_dir: Optional[Path] = typer.Option(None, "--from-dir", help=_FROM_DIR_HELP),
) -> None:
    """Show regional temperature readings per station."""
    from hk_nowcast.formatters import format_temperature_table
    from hk_nowcast.pipeline import load_temperature
    from hk_nowcast.temperature.stations import nearest_station

    dataset = _run(load_temperature(_fetcher(from_dir)))

    highlight = None
    if near is not None:
        highlight = nearest_station(dataset.readings.keys(), near)
        if highlight is not None:
            console.print(
                f"Nearest station: [bold]{highlight}[/bold] "
                f"({dataset.reading(highlight)}°C)"
            )

    format_temperature_table(dataset, console, highlight=highlight)


@app.command()
def play(
    interval: Optional[float] = typer.Option(
        None, "--interval", min=0.0,
        help="Seconds between frames (default from settings)",
    ),
    from_dir: Optional[Path] = typer.Option(None, "--from-dir", help=_FROM_DIR_HELP),
) -> None:
    """Step through the nowcast timeline, one frame per interval."""
    from hk_nowcast.common.timestamps import time_of_day
    from hk_nowcast.pipeline import load_rainfall
    from hk_nowcast.playback import autoplay

    async def _play() -> None:
        dataset = await load_rainfall(_fetcher(from_dir))
        if not dataset.timestamps:
            console.print("[yellow]Rainfall nowcast contains no forecast steps.[/yellow]")
            return

        total = len(dataset.timestamps)
        async for index, ts in autoplay(dataset.timestamps, interval):
            polygons = dataset.polygons_at(ts)
            console.print(
                f"{index + 1}/{total} {time_of_day(ts)}  {len(polygons)} polygon(s)"
            )

    _run(_play())


if __name__ == "__main__":
    app()
