from __future__ import annotations
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional

from .config import ALLOWED_ARRAY_SIZES, SELECT_ALL
from .errors import AlgorithmExecutionFailure, InvalidArgument
from .interfaces import AlgorithmDescriptor

"""Request and result containers shared by the runner, the CLI and the web app."""

MODE_SINGLE = "single"
MODE_ALL = "all"


@dataclass(frozen=True)
class BenchmarkRequest:
    array_size: int
    mode: str  # 'single' or 'all'
    algorithm_id: Optional[str] = None

    @classmethod
    def from_selection(cls, array_size: int, selection: str = SELECT_ALL) -> "BenchmarkRequest":
        """Build a request from a UI-style selection: "all" or one algorithm id."""
        if selection == SELECT_ALL:
            return cls(array_size=array_size, mode=MODE_ALL)
        return cls(array_size=array_size, mode=MODE_SINGLE, algorithm_id=selection)

    def validate(self, catalog: Mapping[str, AlgorithmDescriptor]) -> List[AlgorithmDescriptor]:
        """Check the request and return the descriptors to run, in catalog order."""
        if isinstance(self.array_size, bool) or self.array_size not in ALLOWED_ARRAY_SIZES:
            allowed = ", ".join(str(s) for s in ALLOWED_ARRAY_SIZES)
            raise InvalidArgument(f"array size {self.array_size!r} not in allowed set ({allowed})")
        if self.mode == MODE_ALL:
            if not catalog:
                raise InvalidArgument("no algorithms registered")
            return list(catalog.values())
        if self.mode == MODE_SINGLE:
            descriptor = catalog.get(self.algorithm_id) if self.algorithm_id else None
            if descriptor is None:
                raise InvalidArgument(f"unknown algorithm id {self.algorithm_id!r}")
            return [descriptor]
        raise InvalidArgument(f"unknown mode {self.mode!r}")

    @property
    def selection(self) -> str:
        return SELECT_ALL if self.mode == MODE_ALL else str(self.algorithm_id)


@dataclass
class BenchmarkResult:
    algorithm_id: str
    algorithm_name: str
    array_size: int
    duration_ms: float  # sort call only; clone and verification excluded
    is_sorted: bool
    rank: Optional[int] = None  # set by ranking.rank once the batch completes
    status: str = "ok"  # 'ok' or 'error'
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status == "ok"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class BenchmarkBatch:
    request: BenchmarkRequest
    results: List[BenchmarkResult] = field(default_factory=list)
    cancelled: bool = False
    notes: str = ""

    def __iter__(self) -> Iterator[BenchmarkResult]:
        return iter(self.results)

    def __len__(self) -> int:
        return len(self.results)

    def __getitem__(self, index: int) -> BenchmarkResult:
        return self.results[index]

    @property
    def fastest(self) -> Optional[BenchmarkResult]:
        for result in self.results:
            if result.rank == 1:
                return result
        return None

    @property
    def slowest(self) -> Optional[BenchmarkResult]:
        ranked = [r for r in self.results if r.rank is not None]
        return max(ranked, key=lambda r: r.rank) if ranked else None

    @property
    def speedup(self) -> Optional[float]:
        """How many times faster the fastest ranked run was than the slowest.

        None with fewer than two ranked runs or a zero fastest duration.
        """
        fastest, slowest = self.fastest, self.slowest
        if fastest is None or slowest is None or fastest is slowest:
            return None
        if fastest.duration_ms <= 0:
            return None
        return slowest.duration_ms / fastest.duration_ms

    def insights(self) -> Optional[Dict[str, Any]]:
        fastest, slowest, speedup = self.fastest, self.slowest, self.speedup
        if fastest is None:
            return None
        return {
            "fastest": fastest.algorithm_name,
            "fastest_ms": fastest.duration_ms,
            "slowest": slowest.algorithm_name if slowest is not None else None,
            "slowest_ms": slowest.duration_ms if slowest is not None else None,
            "speedup": speedup,
        }

    @property
    def failures(self) -> List[BenchmarkResult]:
        return [r for r in self.results if not r.succeeded]

    def raise_for_failures(self) -> None:
        failed = self.failures
        if failed:
            raise AlgorithmExecutionFailure(
                [r.algorithm_id for r in failed],
                [r.error or "unknown error" for r in failed],
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "array_size": self.request.array_size,
            "mode": self.request.mode,
            "selection": self.request.selection,
            "cancelled": self.cancelled,
            "notes": self.notes,
            "results": [r.to_dict() for r in self.results],
            "insights": self.insights(),
        }
