from __future__ import annotations
import random
from typing import Tuple

from .config import VALUE_MAX, VALUE_MIN
from .errors import InvalidArgument

Dataset = Tuple[int, ...]


def generate(size: int, rng: random.Random | None = None) -> Dataset:
    """Return `size` independent uniform integers in [VALUE_MIN, VALUE_MAX].

    The dataset is a tuple so it cannot be mutated by a run; each run sorts
    its own list copy. Pass a seeded `random.Random` for reproducible data.
    """
    if isinstance(size, bool) or not isinstance(size, int):
        raise InvalidArgument(f"dataset size must be an integer, got {size!r}")
    if size <= 0:
        raise InvalidArgument(f"dataset size must be positive, got {size}")
    source = rng if rng is not None else random.Random()
    return tuple(source.randint(VALUE_MIN, VALUE_MAX) for _ in range(size))
