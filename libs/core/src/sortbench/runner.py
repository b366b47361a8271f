from __future__ import annotations
"""Benchmark orchestration.

One dataset is generated per batch and every algorithm sorts its own copy of
it. Only the `sort_fn` call sits between the two `perf_counter` reads. Sorts
run to completion once started; the gaps between algorithms are the only
points where a caller regains control (generator `yield`, progress callback,
`should_stop`, or the awaited sleep in the async variant).

There is no timeout: a pathological pairing such as bubble sort on 100K
values simply takes as long as it takes.
"""

import asyncio
import logging
import random
import time
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional

from .config import SELECT_ALL, yield_delay
from .dataset import Dataset, generate
from .interfaces import AlgorithmDescriptor
from .metrics import BenchmarkBatch, BenchmarkRequest, BenchmarkResult
from .ranking import rank
from .registry import registry
from .verify import is_sorted

log = logging.getLogger(__name__)

Catalog = Mapping[str, AlgorithmDescriptor]
ProgressCallback = Callable[[int, int, BenchmarkResult], None]
StopCallback = Callable[[], bool]


def list_algorithms(catalog: Optional[Catalog] = None) -> List[Dict[str, Any]]:
    """Metadata (id, display name, complexity labels) in registry order."""
    items = registry.list() if catalog is None else catalog
    return [d.metadata() for d in items.values()]


def _failed(descriptor: AlgorithmDescriptor, size: int, duration_ms: float, error: str) -> BenchmarkResult:
    return BenchmarkResult(
        algorithm_id=descriptor.id,
        algorithm_name=descriptor.display_name,
        array_size=size,
        duration_ms=duration_ms,
        is_sorted=False,
        status="error",
        error=error,
    )


def _run_one(descriptor: AlgorithmDescriptor, dataset: Dataset) -> BenchmarkResult:
    work = list(dataset)
    t0 = time.perf_counter()
    try:
        output = descriptor.sort_fn(work)
    except Exception as exc:
        duration_ms = (time.perf_counter() - t0) * 1000.0
        log.exception("sort %s failed on %d values", descriptor.id, len(dataset))
        return _failed(descriptor, len(dataset), duration_ms, f"{type(exc).__name__}: {exc}")
    duration_ms = (time.perf_counter() - t0) * 1000.0
    if output is None:
        return _failed(descriptor, len(dataset), duration_ms, "sort function returned no output")
    # Output that is not an indexable sequence of comparable values is a failed run
    try:
        ordered = is_sorted(output)
    except Exception as exc:
        log.exception("sort %s returned output that cannot be verified", descriptor.id)
        return _failed(descriptor, len(dataset), duration_ms, f"{type(exc).__name__}: {exc}")
    return BenchmarkResult(
        algorithm_id=descriptor.id,
        algorithm_name=descriptor.display_name,
        array_size=len(dataset),
        duration_ms=duration_ms,
        is_sorted=ordered,
    )


def _execute(plan: List[AlgorithmDescriptor], dataset: Dataset) -> Iterator[BenchmarkResult]:
    for descriptor in plan:
        result = _run_one(descriptor, dataset)
        log.debug(
            "%s: %.3f ms sorted=%s status=%s",
            result.algorithm_id, result.duration_ms, result.is_sorted, result.status,
        )
        yield result


def _prepare(
    request: BenchmarkRequest,
    catalog: Optional[Catalog],
    rng: Optional[random.Random],
) -> tuple[List[AlgorithmDescriptor], Dataset]:
    plan = request.validate(registry.list() if catalog is None else catalog)
    dataset = generate(request.array_size, rng)
    log.info(
        "benchmark batch: %d algorithm(s) on %d values",
        len(plan), request.array_size,
    )
    return plan, dataset


def iter_benchmark(
    request: BenchmarkRequest,
    *,
    catalog: Optional[Catalog] = None,
    rng: Optional[random.Random] = None,
) -> Iterator[BenchmarkResult]:
    """Yield unranked results one algorithm at a time.

    The request is validated and the dataset generated before this returns,
    so bad input raises `InvalidArgument` here rather than on first `next()`.
    """
    plan, dataset = _prepare(request, catalog, rng)
    return _execute(plan, dataset)


def _notify(progress: Optional[ProgressCallback], done: int, total: int, result: BenchmarkResult) -> None:
    if progress is None:
        return
    try:
        progress(done, total, result)
    except Exception:
        # Progress reporting must not break measurements
        log.exception("progress callback failed after %s", result.algorithm_id)


def _finish(request: BenchmarkRequest, results: List[BenchmarkResult], cancelled: bool) -> BenchmarkBatch:
    batch = BenchmarkBatch(request=request, results=rank(results), cancelled=cancelled)
    if cancelled:
        batch.notes = f"stopped after {len(results)} algorithm(s)"
    log.info(
        "benchmark batch done: %d result(s), %d failed%s",
        len(batch), len(batch.failures), " (cancelled)" if cancelled else "",
    )
    return batch


def run_benchmark(
    array_size: int,
    selection: str = SELECT_ALL,
    *,
    catalog: Optional[Catalog] = None,
    rng: Optional[random.Random] = None,
    progress: Optional[ProgressCallback] = None,
    should_stop: Optional[StopCallback] = None,
) -> BenchmarkBatch:
    """Run one batch and return its ranked results.

    `selection` is "all" or a single algorithm id. `progress(done, total,
    result)` fires after each algorithm; `should_stop()` is polled between
    algorithms and ends the batch early when it returns true.
    """
    request = BenchmarkRequest.from_selection(array_size, selection)
    plan, dataset = _prepare(request, catalog, rng)
    results: List[BenchmarkResult] = []
    cancelled = False
    for result in _execute(plan, dataset):
        results.append(result)
        _notify(progress, len(results), len(plan), result)
        if len(results) < len(plan) and should_stop is not None and should_stop():
            cancelled = True
            break
    return _finish(request, results, cancelled)


async def run_benchmark_async(
    array_size: int,
    selection: str = SELECT_ALL,
    *,
    catalog: Optional[Catalog] = None,
    rng: Optional[random.Random] = None,
    progress: Optional[ProgressCallback] = None,
    should_stop: Optional[StopCallback] = None,
    delay: Optional[float] = None,
) -> BenchmarkBatch:
    """asyncio variant of `run_benchmark`.

    Sorts still run synchronously on the loop thread; between algorithms the
    coroutine awaits `asyncio.sleep(delay)` so other tasks get a turn.
    """
    request = BenchmarkRequest.from_selection(array_size, selection)
    plan, dataset = _prepare(request, catalog, rng)
    pause = yield_delay() if delay is None else delay
    results: List[BenchmarkResult] = []
    cancelled = False
    for descriptor in plan:
        if results:
            await asyncio.sleep(pause)
            if should_stop is not None and should_stop():
                cancelled = True
                break
        result = _run_one(descriptor, dataset)
        results.append(result)
        _notify(progress, len(results), len(plan), result)
    return _finish(request, results, cancelled)
