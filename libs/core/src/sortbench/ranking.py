from __future__ import annotations
from dataclasses import replace
from typing import Iterable, List

from .metrics import BenchmarkResult


def rank(results: Iterable[BenchmarkResult]) -> List[BenchmarkResult]:
    """Order results by ascending duration and assign dense 1-based ranks.

    Returns new result objects; the inputs are left untouched. Equal durations
    keep completion order (`sorted` is stable). Failed runs get no rank and
    follow the ranked ones in completion order.
    """
    items = list(results)
    ok = sorted((r for r in items if r.succeeded), key=lambda r: r.duration_ms)
    ranked = [replace(r, rank=i) for i, r in enumerate(ok, start=1)]
    ranked.extend(replace(r, rank=None) for r in items if not r.succeeded)
    return ranked
