from __future__ import annotations
"""Algorithm contracts shared by the registry, the runner and the apps.

Sort implementations only need to satisfy `SortFunction`; everything the UI
layers show about an algorithm comes from its `AlgorithmDescriptor`.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Protocol, Sequence


class SortFunction(Protocol):
    """Pure sort contract.

    Reads `values` and returns a new non-decreasing list holding the same
    multiset. It must not rely on mutating `values` in place.
    """
    def __call__(self, values: Sequence[int]) -> List[int]: ...


@dataclass(frozen=True)
class Complexity:
    best: str
    average: str
    worst: str
    space: str

    def as_dict(self) -> Dict[str, str]:
        return {
            "best": self.best,
            "average": self.average,
            "worst": self.worst,
            "space": self.space,
        }


@dataclass(frozen=True)
class AlgorithmDescriptor:
    id: str
    display_name: str
    complexity: Complexity
    sort_fn: SortFunction
    description: str = ""

    def metadata(self) -> Dict[str, Any]:
        """JSON-safe view used to populate selection UIs."""
        return {
            "id": self.id,
            "display_name": self.display_name,
            "complexity": self.complexity.as_dict(),
            "description": self.description,
        }
