"""Weather warning models."""

from __future__ import annotations

import sys
from dataclasses import dataclass

# Lower value = more urgent. Codes not listed here get sys.maxsize.
_PRIORITY: dict[str, int] = {
    "WTCSGNL": 0,  # tropical cyclone signal
    "WRAIN": 1,    # rainstorm
    "WTS": 2,      # thunderstorm
    "WL": 2,       # landslip
    "WCOLD": 2,
    "WHOT": 2,
}

_CODE_DESCRIPTIONS: dict[str, str] = {
    "WRAINA": "Amber",
    "WRAINR": "Red",
    "WRAINB": "Black",
    "TC1": "No. 1",
    "TC3": "No. 3",
    "TC8NE": "No. 8 North East",
    "TC8SE": "No. 8 South East",
    "TC8SW": "No. 8 South West",
    "TC8NW": "No. 8 North West",
    "TC9": "No. 9",
    "TC10": "No. 10",
    "WFIREY": "Yellow Fire",
    "WFIRER": "Red Fire",
}

CANCEL_ACTION = "CANCEL"


@dataclass(frozen=True)
class WeatherWarning:
    """An entry of the HKO warning summary.

    Attributes:
        summary_code: key of the entry in the summary, e.g. "WTCSGNL"
        description: human-readable name, e.g. "Tropical Cyclone Warning Signal"
        code: specific warning code, e.g. "TC8NE"
        action_code: "ISSUE", "REISSUE", "EXTEND", "UPDATE" or "CANCEL"
    """

    summary_code: str
    description: str
    code: str
    action_code: str

    @property
    def id(self) -> str:
        return f"{self.summary_code}_{self.code}"

    @property
    def priority(self) -> int:
        # Exact match only: "WRAINA" is not "WRAIN".
        return _PRIORITY.get(self.code, sys.maxsize)

    @property
    def code_description(self) -> str | None:
        """Short label for the specific signal/colour, if known."""
        return _CODE_DESCRIPTIONS.get(self.code)

    @property
    def is_active(self) -> bool:
        return self.action_code != CANCEL_ACTION
