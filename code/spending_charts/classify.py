"""
classify.py

Statistical predicates that decide which categories appear on which chart.

- spending: the median per-period value is positive, i.e. the category is
  typically a net expense over the window.
- regular: spending, and mean and median are within a factor of 2 of each
  other. One or two outlier periods (an annual insurance payment, a one-off
  purchase) pull the mean far above the median and fail this test.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Sequence

import numpy as np

from .series import Series


def median(values: Sequence[float]) -> float:
    return float(np.median(np.asarray(values, dtype=float)))


def mean(values: Sequence[float]) -> float:
    return float(np.mean(np.asarray(values, dtype=float)))


def is_spending(values: Sequence[float]) -> bool:
    if len(values) == 0:
        return False
    return median(values) > 0.0


def is_regular(values: Sequence[float]) -> bool:
    if not is_spending(values):
        return False
    avg = mean(values)
    med = median(values)
    return avg < 2.0 * med and med < 2.0 * avg


class Variant(Enum):
    REGULAR_SPENDINGS = "regular"
    ALL_SPENDINGS = "all"

    @property
    def title(self) -> str:
        return _TITLES[self]

    def accepts(self, values: Sequence[float]) -> bool:
        if self is Variant.REGULAR_SPENDINGS:
            return is_regular(values)
        return is_spending(values)


_TITLES = {
    Variant.REGULAR_SPENDINGS: "Regular spendings",
    Variant.ALL_SPENDINGS: "All spendings",
}

DEFAULT_VARIANTS = (Variant.REGULAR_SPENDINGS, Variant.ALL_SPENDINGS)


def select(series: Dict[str, Series], variant: Variant) -> List[Series]:
    return [s for s in series.values() if variant.accepts(s.values)]
