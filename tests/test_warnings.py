"""Tests for the weather warning summary parser."""

from __future__ import annotations

import json
import sys

import pytest

from hk_nowcast.bulletins.dataset import WeatherWarningDataset, next_warning_id
from hk_nowcast.bulletins.models import WeatherWarning


def _warning(summary_code: str, code: str) -> WeatherWarning:
    return WeatherWarning(summary_code=summary_code, description="", code=code, action_code="ISSUE")


def test_cancelled_warning_is_excluded():
    payload = json.dumps({
        "WTS1": {"name": "Thunderstorm", "code": "WTS", "actionCode": "ISSUE"},
        "X": {"name": "Cancelled", "code": "WL", "actionCode": "CANCEL"},
    }).encode()
    dataset = WeatherWarningDataset.from_bytes(payload)

    assert len(dataset.active_warnings) == 1
    warning = dataset.active_warnings[0]
    assert warning.summary_code == "WTS1"
    assert warning.description == "Thunderstorm"
    assert warning.id == "WTS1_WTS"


def test_sorted_by_descending_priority_value(warnings_payload):
    dataset = WeatherWarningDataset.from_bytes(warnings_payload)

    # Ranked by specific code: TC8NE and WRAINA are both unranked
    assert [w.id for w in dataset.active_warnings] == [
        "WTCSGNL_TC8NE", "WRAIN_WRAINA", "WTS_WTS",
    ]


def test_sort_is_stable_for_equal_priority():
    payload = json.dumps({
        "A": {"name": "a", "code": "WHOT", "actionCode": "ISSUE"},
        "B": {"name": "b", "code": "ZZZ", "actionCode": "ISSUE"},
        "C": {"name": "c", "code": "WCOLD", "actionCode": "ISSUE"},
        "D": {"name": "d", "code": "WRAIN", "actionCode": "ISSUE"},
    }).encode()
    dataset = WeatherWarningDataset.from_bytes(payload)
    assert [w.summary_code for w in dataset.active_warnings] == ["B", "A", "C", "D"]


@pytest.mark.parametrize("code,priority", [
    ("WTCSGNL", 0),
    ("WRAIN", 1),
    ("WTS", 2),
    ("WL", 2),
    ("WCOLD", 2),
    ("WHOT", 2),
    ("WRAINA", sys.maxsize),
    ("WFIREY", sys.maxsize),
])
def test_priority(code, priority):
    assert _warning("X", code).priority == priority


def test_code_description():
    assert _warning("WTCSGNL", "TC8NE").code_description == "No. 8 North East"
    assert _warning("WRAIN", "WRAINB").code_description == "Black"
    assert _warning("WTS", "WTS").code_description is None


@pytest.mark.parametrize("detail", [
    "not an object",
    {"code": "WTS", "actionCode": "ISSUE"},
    {"name": "Thunderstorm", "actionCode": "ISSUE"},
    {"name": "Thunderstorm", "code": "WTS"},
    {"name": "Thunderstorm", "code": 3, "actionCode": "ISSUE"},
    {"name": None, "code": "WTS", "actionCode": "ISSUE"},
])
def test_malformed_entries_are_dropped(detail):
    payload = json.dumps({
        "BAD": detail,
        "WHOT": {"name": "Very Hot Weather Warning", "code": "WHOT", "actionCode": "ISSUE"},
    }).encode()
    dataset = WeatherWarningDataset.from_bytes(payload)
    assert [w.summary_code for w in dataset.active_warnings] == ["WHOT"]


@pytest.mark.parametrize("payload", [
    b"",
    b"not json",
    b"[1, 2, 3]",
    b'"WTS"',
    b"null",
    b"\xff\xfe\x00",
    b"{}",
])
def test_bad_top_level_gives_no_warnings(payload):
    dataset = WeatherWarningDataset.from_bytes(payload)
    assert dataset.active_warnings == ()


def test_get_by_id(warnings_payload):
    dataset = WeatherWarningDataset.from_bytes(warnings_payload)
    assert dataset.get("WTS_WTS").description == "Thunderstorm Warning"
    assert dataset.get("WL_WL") is None


class TestNextWarningId:
    warnings = [_warning("A", "1"), _warning("B", "2"), _warning("C", "3")]

    def test_advances(self):
        assert next_warning_id(self.warnings, "A_1") == "B_2"

    def test_wraps_after_last(self):
        assert next_warning_id(self.warnings, "C_3") == "A_1"

    def test_unknown_selection_restarts(self):
        assert next_warning_id(self.warnings, None) == "A_1"
        assert next_warning_id(self.warnings, "gone") == "A_1"

    def test_no_warnings(self):
        assert next_warning_id([], "A_1") is None
