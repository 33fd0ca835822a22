"""Tests for the position source helpers."""

from __future__ import annotations

from hk_nowcast.location import StaticPositionSource, latest_position


def test_latest_position_is_most_recent():
    source = StaticPositionSource([(22.30, 114.17), (22.28, 114.16)])
    assert latest_position(source) == (22.28, 114.16)


def test_no_fix_yet():
    assert latest_position(StaticPositionSource()) is None
