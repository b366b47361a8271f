from .errors import AlgorithmExecutionFailure, InvalidArgument, RegistryFrozen, SortBenchError
from .interfaces import AlgorithmDescriptor, Complexity, SortFunction
from .registry import registry
from . import algorithms as _algorithms  # noqa: F401  (fills and freezes the registry)
from .dataset import Dataset, generate
from .verify import is_sorted
from .metrics import BenchmarkBatch, BenchmarkRequest, BenchmarkResult
from .ranking import rank
from .runner import iter_benchmark, list_algorithms, run_benchmark, run_benchmark_async

__all__ = [
    "AlgorithmExecutionFailure",
    "InvalidArgument",
    "RegistryFrozen",
    "SortBenchError",
    "AlgorithmDescriptor",
    "Complexity",
    "SortFunction",
    "registry",
    "Dataset",
    "generate",
    "is_sorted",
    "BenchmarkBatch",
    "BenchmarkRequest",
    "BenchmarkResult",
    "rank",
    "iter_benchmark",
    "list_algorithms",
    "run_benchmark",
    "run_benchmark_async",
]
