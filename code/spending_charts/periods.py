from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Tuple

class Granularity(Enum):
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"

    @classmethod
    def parse(cls, value: "str | Granularity") -> "Granularity":
        if isinstance(value, cls):
            return value
        s = str(value).strip().lower()
        for g in cls:
            if g.value == s:
                return g
        raise ValueError(
            f"Unknown granularity: {value!r} (expected one of {[g.value for g in cls]})"
        )


def quarter_of(month: int) -> int:
    return (month - 1) // 3 + 1


def derive(d: date, granularity: Granularity) -> str:
    """
    Map a calendar date to its period label.

    month   -> "2023-01"
    quarter -> "2023-q1"
    year    -> "2023"

    Year and month are zero-padded so that string order is chronological.
    """
    if granularity is Granularity.MONTH:
        return f"{d.year:04d}-{d.month:02d}"
    if granularity is Granularity.QUARTER:
        return f"{d.year:04d}-q{quarter_of(d.month)}"
    return f"{d.year:04d}"


def period_sort_key(label: str) -> Tuple[int, int]:
    """Numeric (year, month-or-quarter) key for a period label; 0 for yearly labels."""
    year, _, rest = label.partition("-")
    if not rest:
        return int(year), 0
    return int(year), int(rest.lstrip("q"))
