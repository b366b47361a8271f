from __future__ import annotations
"""Textbook sorting implementations registered into the catalog.

Every function takes a sequence and returns a new list; inputs are never
sorted in place. Importing this module fills and then freezes the registry.
"""

from typing import List, Sequence

from .interfaces import Complexity
from .registry import registry


@registry.register(
    "quicksort",
    display_name="Quick Sort",
    complexity=Complexity("O(n log n)", "O(n log n)", "O(n²)", "O(log n)"),
    description="Efficient divide-and-conquer algorithm with good average performance",
)
def quicksort(values: Sequence[int]) -> List[int]:
    # Three-way split on the middle element; the equal band is never recursed into.
    if len(values) <= 1:
        return list(values)
    pivot = values[len(values) // 2]
    less = [x for x in values if x < pivot]
    equal = [x for x in values if x == pivot]
    greater = [x for x in values if x > pivot]
    return quicksort(less) + equal + quicksort(greater)


def _merge(left: List[int], right: List[int]) -> List[int]:
    out: List[int] = []
    i = j = 0
    while i < len(left) and j < len(right):
        # <= keeps equal elements in left-run order (stable)
        if left[i] <= right[j]:
            out.append(left[i])
            i += 1
        else:
            out.append(right[j])
            j += 1
    out.extend(left[i:])
    out.extend(right[j:])
    return out


@registry.register(
    "mergesort",
    display_name="Merge Sort",
    complexity=Complexity("O(n log n)", "O(n log n)", "O(n log n)", "O(n)"),
    description="Stable sorting algorithm with guaranteed O(n log n) performance",
)
def mergesort(values: Sequence[int]) -> List[int]:
    if len(values) <= 1:
        return list(values)
    mid = len(values) // 2
    return _merge(mergesort(values[:mid]), mergesort(values[mid:]))


def _sift_down(heap: List[int], start: int, end: int) -> None:
    root = start
    while True:
        largest = root
        left = 2 * root + 1
        right = left + 1
        if left < end and heap[left] > heap[largest]:
            largest = left
        if right < end and heap[right] > heap[largest]:
            largest = right
        if largest == root:
            return
        heap[root], heap[largest] = heap[largest], heap[root]
        root = largest


@registry.register(
    "heapsort",
    display_name="Heap Sort",
    complexity=Complexity("O(n log n)", "O(n log n)", "O(n log n)", "O(1)"),
    description="In-place sorting algorithm using a binary heap data structure",
)
def heapsort(values: Sequence[int]) -> List[int]:
    heap = list(values)
    n = len(heap)
    for i in range(n // 2 - 1, -1, -1):
        _sift_down(heap, i, n)
    for end in range(n - 1, 0, -1):
        heap[0], heap[end] = heap[end], heap[0]
        _sift_down(heap, 0, end)
    return heap


@registry.register(
    "bubblesort",
    display_name="Bubble Sort",
    complexity=Complexity("O(n)", "O(n²)", "O(n²)", "O(1)"),
    description="Simple comparison-based algorithm, inefficient for large datasets",
)
def bubblesort(values: Sequence[int]) -> List[int]:
    # No early exit on a swap-free pass: always n-1 passes.
    out = list(values)
    n = len(out)
    for i in range(n - 1):
        for j in range(n - i - 1):
            if out[j] > out[j + 1]:
                out[j], out[j + 1] = out[j + 1], out[j]
    return out


@registry.register(
    "insertionsort",
    display_name="Insertion Sort",
    complexity=Complexity("O(n)", "O(n²)", "O(n²)", "O(1)"),
    description="Efficient for small datasets and partially sorted arrays",
)
def insertionsort(values: Sequence[int]) -> List[int]:
    out = list(values)
    for i in range(1, len(out)):
        key = out[i]
        j = i - 1
        while j >= 0 and out[j] > key:
            out[j + 1] = out[j]
            j -= 1
        out[j + 1] = key
    return out


@registry.register(
    "selectionsort",
    display_name="Selection Sort",
    complexity=Complexity("O(n²)", "O(n²)", "O(n²)", "O(1)"),
    description="Simple in-place comparison-based sorting algorithm",
)
def selectionsort(values: Sequence[int]) -> List[int]:
    out = list(values)
    n = len(out)
    for i in range(n - 1):
        min_idx = i
        for j in range(i + 1, n):
            if out[j] < out[min_idx]:
                min_idx = j
        if min_idx != i:
            out[i], out[min_idx] = out[min_idx], out[i]
    return out


registry.freeze()
