from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

import numpy as np
import pandas as pd

from .ledger import Ledger


@dataclass(frozen=True)
class Series:
    label: str
    values: Tuple[float, ...]


def materialize(ledger: Ledger, window: Sequence[str]) -> Dict[str, Series]:
    """Dense, window-aligned values per category; 0.0 where a period has no bucket."""
    window = list(window)
    out: Dict[str, Series] = {}
    for category in sorted(ledger):
        values = (
            pd.Series(ledger[category], dtype=float)
              .reindex(window, fill_value=0.0)
              .tolist()
        )
        out[category] = Series(label=category, values=tuple(float(v) for v in values))
    return out


def total_series(series: Iterable[Series], length: int) -> List[float]:
    total = np.zeros(length, dtype=float)
    for s in series:
        total += np.asarray(s.values, dtype=float)
    return total.tolist()
