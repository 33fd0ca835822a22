"""Weather warning summary parsing and carousel ordering."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from hk_nowcast.bulletins.models import WeatherWarning

logger = logging.getLogger(__name__)


def _warning_from_entry(key: str, detail: object) -> WeatherWarning | None:
    """Build an active warning, or None for cancelled/malformed entries."""
    if not isinstance(detail, dict):
        return None

    name = detail.get("name")
    code = detail.get("code")
    action_code = detail.get("actionCode")
    if not (isinstance(name, str) and isinstance(code, str) and isinstance(action_code, str)):
        return None

    warning = WeatherWarning(
        summary_code=key, description=name, code=code, action_code=action_code,
    )
    if not warning.is_active:
        return None
    return warning


@dataclass(frozen=True)
class WeatherWarningDataset:
    """Active warnings in display order.

    Warnings are ordered by descending priority value, i.e. unlisted codes
    first and tropical cyclone signals last. The sort is stable, so ties
    keep the feed's key order.
    """

    active_warnings: tuple[WeatherWarning, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: object) -> WeatherWarningDataset:
        if not isinstance(data, dict):
            logger.debug("Warning summary is not a JSON object: %s", type(data).__name__)
            return cls()

        warnings = []
        for key, detail in data.items():
            warning = _warning_from_entry(str(key), detail)
            if warning is None:
                logger.debug("Skipping warning entry %s", key)
                continue
            warnings.append(warning)

        warnings.sort(key=lambda w: w.priority, reverse=True)
        return cls(active_warnings=tuple(warnings))

    @classmethod
    def from_bytes(cls, payload: bytes) -> WeatherWarningDataset:
        """Parse the warning summary. Never fails: bad input means no warnings."""
        try:
            data = json.loads(payload)
        except (ValueError, RecursionError) as exc:
            logger.debug("Warning summary is not valid JSON: %s", exc)
            return cls()
        return cls.from_dict(data)

    def get(self, warning_id: str) -> WeatherWarning | None:
        for warning in self.active_warnings:
            if warning.id == warning_id:
                return warning
        return None


def next_warning_id(warnings: Sequence[WeatherWarning], current_id: str | None) -> str | None:
    """Carousel rotation: the id after ``current_id``, wrapping around.

    An unknown or missing ``current_id`` restarts at the first warning.
    """
    if not warnings:
        return None
    ids = [w.id for w in warnings]
    if current_id not in ids:
        return ids[0]
    return ids[(ids.index(current_id) + 1) % len(ids)]
