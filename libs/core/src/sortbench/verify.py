from __future__ import annotations
from typing import Sequence


def is_sorted(values: Sequence[int]) -> bool:
    """True when `values` is non-decreasing; stops at the first inversion."""
    for i in range(1, len(values)):
        if values[i] < values[i - 1]:
            return False
    return True
