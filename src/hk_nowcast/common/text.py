"""Plain-text feed helpers."""

from __future__ import annotations


def split_csv_rows(text: str) -> list[list[str]]:
    """Split feed text into rows of fields.

    Lines are split on ``\\n`` (a trailing ``\\r`` is dropped) and fields on
    ``,``. Blank lines and empty fields are skipped, so ``a,,b,`` has two
    fields. No quoting rules apply; the HKO feeds never quote.
    """
    rows: list[list[str]] = []
    for line in text.split("\n"):
        line = line.rstrip("\r")
        if not line:
            continue
        rows.append([f for f in line.split(",") if f])
    return rows
