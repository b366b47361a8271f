from __future__ import annotations

from collections import Counter
from pathlib import Path
import random
import sys
from typing import List

ROOT = Path(__file__).resolve().parents[1]
CORE_SRC = ROOT / "libs" / "core" / "src"
core_str = str(CORE_SRC)
if core_str not in sys.path:
    sys.path.insert(0, core_str)

import pytest  # noqa: E402

from sortbench import generate, is_sorted, registry  # noqa: E402

ALGORITHM_IDS = list(registry.list())

_rng = random.Random(1234)
INPUTS = {
    "empty": [],
    "single": [42],
    "pair": [2, 1],
    "all_equal": [7] * 50,
    "already_sorted": list(range(1, 101)),
    "reverse_sorted": list(range(100, 0, -1)),
    "duplicates": [3, 1, 2, 3, 1],
    "random": [_rng.randint(1, 1_000_000) for _ in range(300)],
    "few_distinct": [_rng.randint(1, 4) for _ in range(200)],
}


@pytest.mark.parametrize("algo_id", ALGORITHM_IDS)
@pytest.mark.parametrize("case", list(INPUTS))
def test_output_is_sorted_permutation(algo_id: str, case: str) -> None:
    values = INPUTS[case]
    out = registry.get(algo_id).sort_fn(values)
    assert is_sorted(out)
    assert Counter(out) == Counter(values)
    assert out == sorted(values)


@pytest.mark.parametrize("algo_id", ALGORITHM_IDS)
def test_duplicate_example(algo_id: str) -> None:
    assert registry.get(algo_id).sort_fn([3, 1, 2, 3, 1]) == [1, 1, 2, 3, 3]


@pytest.mark.parametrize("algo_id", ALGORITHM_IDS)
def test_input_not_mutated(algo_id: str) -> None:
    values = [5, 4, 3, 2, 1, 5, 4]
    snapshot = list(values)
    out = registry.get(algo_id).sort_fn(values)
    assert values == snapshot
    assert out is not values


@pytest.mark.parametrize("algo_id", ALGORITHM_IDS)
def test_accepts_tuple_dataset(algo_id: str) -> None:
    data = generate(257, random.Random(9))
    out = registry.get(algo_id).sort_fn(data)
    assert isinstance(out, list)
    assert out == sorted(data)


def test_quicksort_handles_large_equal_run() -> None:
    values = [9] * 5000 + [1, 2, 3]
    out = registry.get("quicksort").sort_fn(values)
    assert out[:3] == [1, 2, 3]
    assert out[3:] == [9] * 5000


def test_mergesort_is_stable() -> None:
    class Key:
        def __init__(self, value: int, tag: str) -> None:
            self.value = value
            self.tag = tag

        def __le__(self, other: "Key") -> bool:
            return self.value <= other.value

        def __lt__(self, other: "Key") -> bool:
            return self.value < other.value

    items = [Key(2, "a"), Key(1, "b"), Key(2, "c"), Key(1, "d")]
    out = registry.get("mergesort").sort_fn(items)  # type: ignore[arg-type]
    assert [k.tag for k in out] == ["b", "d", "a", "c"]


class _Counted:
    comparisons = 0

    def __init__(self, value: int) -> None:
        self.value = value

    def __lt__(self, other: "_Counted") -> bool:
        _Counted.comparisons += 1
        return self.value < other.value

    def __gt__(self, other: "_Counted") -> bool:
        _Counted.comparisons += 1
        return self.value > other.value

    def __le__(self, other: "_Counted") -> bool:
        _Counted.comparisons += 1
        return self.value <= other.value

    def __eq__(self, other: object) -> bool:
        _Counted.comparisons += 1
        return isinstance(other, _Counted) and self.value == other.value

    __hash__ = None  # type: ignore[assignment]


def _count_comparisons(algo_id: str, values: List[int]) -> int:
    _Counted.comparisons = 0
    registry.get(algo_id).sort_fn([_Counted(v) for v in values])  # type: ignore[arg-type]
    return _Counted.comparisons


@pytest.mark.parametrize("n", [2, 10, 64])
def test_bubblesort_makes_every_pass_on_sorted_input(n: int) -> None:
    # n-1 passes even when the first pass finds nothing to swap
    assert _count_comparisons("bubblesort", list(range(n))) == n * (n - 1) // 2


@pytest.mark.parametrize("n", [2, 10, 64])
@pytest.mark.parametrize("order", ["sorted", "reversed", "random"])
def test_selectionsort_is_quadratic_for_any_order(n: int, order: str) -> None:
    values = list(range(n))
    if order == "reversed":
        values.reverse()
    elif order == "random":
        random.Random(n).shuffle(values)
    assert _count_comparisons("selectionsort", values) == n * (n - 1) // 2


def test_comparison_counts_are_deterministic() -> None:
    values = [random.Random(11).randint(1, 100) for _ in range(200)]
    for algo_id in ALGORITHM_IDS:
        assert _count_comparisons(algo_id, values) == _count_comparisons(algo_id, values)
