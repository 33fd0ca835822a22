"""Fixed-width HKO timestamp codec (YYYYMMDDHHMM)."""

from __future__ import annotations

import re
from datetime import datetime

_TIMESTAMP_PATTERN = re.compile(r"\d{12}", re.ASCII)


def parse_timestamp(s: str) -> datetime | None:
    """Parse a 12-digit ``YYYYMMDDHHMM`` string into a naive local datetime.

    Returns None for anything that is not exactly 12 ASCII digits, or when
    the fields do not form a real calendar date (e.g. month 13).
    """
    if not _TIMESTAMP_PATTERN.fullmatch(s):
        return None
    try:
        return datetime(
            year=int(s[0:4]),
            month=int(s[4:6]),
            day=int(s[6:8]),
            hour=int(s[8:10]),
            minute=int(s[10:12]),
        )
    except ValueError:
        return None


def format_timestamp(ts: datetime) -> str:
    """Inverse of :func:`parse_timestamp`."""
    return f"{ts.year:04d}{ts.month:02d}{ts.day:02d}{ts.hour:02d}{ts.minute:02d}"


def time_of_day(ts: datetime) -> str:
    """Playback label, e.g. ``"09:30"``."""
    return f"{ts.hour:02d}:{ts.minute:02d}"
