"""Tests for CLI commands against on-disk feed payloads."""

from __future__ import annotations

from typer.testing import CliRunner

from hk_nowcast.cli import app

runner = CliRunner()

# Keep Rich from wrapping table cells
ENV = {"COLUMNS": "200"}


def _invoke(*args: str):
    return runner.invoke(app, list(args), env=ENV)


class TestRainfallCommand:
    def test_table(self, feed_dir):
        result = _invoke("rainfall", "--from-dir", str(feed_dir))
        assert result.exit_code == 0
        assert "Rainfall Nowcast" in result.output
        assert "202401010030" in result.output

    def test_json(self, feed_dir):
        result = _invoke("rainfall", "--output", "json", "--from-dir", str(feed_dir))
        assert result.exit_code == 0
        assert '"forecast_at": "202401010100"' in result.output

    def test_missing_feed_file(self, tmp_path):
        result = _invoke("rainfall", "--from-dir", str(tmp_path))
        assert result.exit_code == 1
        assert "Failed to fetch weather data" in result.output


class TestRangeCommand:
    def test_rain_at_point(self, feed_dir):
        result = _invoke("range", "22.30", "114.16", "--from-dir", str(feed_dir))
        assert result.exit_code == 0
        assert "1.0mm - 12.0mm" in result.output

    def test_outside_hong_kong(self, feed_dir):
        result = _invoke("range", "22.70", "114.00", "--from-dir", str(feed_dir))
        assert result.exit_code == 0
        assert "not available" in result.output


def test_warnings_command(feed_dir):
    result = _invoke("warnings", "--from-dir", str(feed_dir))
    assert result.exit_code == 0
    assert "WTS_WTS" in result.output
    assert "Landslip" not in result.output


class TestTemperaturesCommand:
    def test_table(self, feed_dir):
        result = _invoke("temperatures", "--from-dir", str(feed_dir))
        assert result.exit_code == 0
        assert "Chek Lap Kok" in result.output
        assert "Nearest station" not in result.output

    def test_near(self, feed_dir):
        result = _invoke("temperatures", "--near", "22.30", "114.17", "--from-dir", str(feed_dir))
        assert result.exit_code == 0
        assert "Nearest station: HK Observatory" in result.output


def test_play_command(feed_dir):
    result = _invoke("play", "--interval", "0", "--from-dir", str(feed_dir))
    assert result.exit_code == 0
    assert "1/2 00:30  2 polygon(s)" in result.output
    assert "2/2 01:00  3 polygon(s)" in result.output


def test_no_args_shows_help():
    result = _invoke()
    assert "rainfall" in result.output
