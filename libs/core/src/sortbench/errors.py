from __future__ import annotations
from typing import Sequence


class SortBenchError(Exception):
    """Base class for sortbench errors."""


class InvalidArgument(SortBenchError, ValueError):
    """Rejected input: unknown algorithm id, disallowed array size, bad dataset size.

    Always raised before any dataset is generated or any sort is timed.
    """


class RegistryFrozen(SortBenchError, RuntimeError):
    """Raised when registering into the catalog after it has been frozen."""


class AlgorithmExecutionFailure(SortBenchError, RuntimeError):
    """One or more sort functions raised during a batch.

    The runner never raises this itself; failed runs are recorded on their
    results. `BenchmarkBatch.raise_for_failures()` turns them into this error
    for callers that want a hard failure.
    """

    def __init__(self, algorithm_ids: Sequence[str], errors: Sequence[str]) -> None:
        self.algorithm_ids = list(algorithm_ids)
        self.errors = list(errors)
        detail = "; ".join(f"{a}: {e}" for a, e in zip(self.algorithm_ids, self.errors))
        super().__init__(f"sort failed for {len(self.algorithm_ids)} algorithm(s): {detail}")

    @property
    def algorithm_id(self) -> str | None:
        return self.algorithm_ids[0] if self.algorithm_ids else None
