from typing import List, Sequence

from .periods import period_sort_key


def select_window(universe: Sequence[str], size: int) -> List[str]:
    """
    Trailing window of at most `size` periods.

    The most recent period is always dropped: it is treated as still in
    progress, even when the data happens to end on a period boundary.
    """
    if size < 0:
        raise ValueError(f"Window size must be non-negative, got {size}")
    ordered = sorted(universe, key=period_sort_key)
    closed = ordered[:-1]
    if size == 0:
        return []
    return closed[-size:]
