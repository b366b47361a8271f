from __future__ import annotations
import logging
from typing import Callable, Dict, Iterator

from .errors import InvalidArgument, RegistryFrozen
from .interfaces import AlgorithmDescriptor, Complexity, SortFunction

log = logging.getLogger(__name__)


class _Registry:
    """Process-wide algorithm catalog.

    Filled once at import time through `register`, then frozen; lookups keep
    registration order, which is also the order batches run in.
    """

    def __init__(self) -> None:
        self._items: Dict[str, AlgorithmDescriptor] = {}
        self._frozen = False

    def register(
        self,
        algorithm_id: str,
        *,
        display_name: str,
        complexity: Complexity,
        description: str = "",
    ) -> Callable[[SortFunction], SortFunction]:
        def _inner(fn: SortFunction) -> SortFunction:
            if self._frozen:
                raise RegistryFrozen(f"cannot register {algorithm_id!r}: catalog is frozen")
            if algorithm_id in self._items:
                raise InvalidArgument(f"duplicate algorithm id {algorithm_id!r}")
            self._items[algorithm_id] = AlgorithmDescriptor(
                id=algorithm_id,
                display_name=display_name,
                complexity=complexity,
                sort_fn=fn,
                description=description,
            )
            log.debug("registered sort algorithm %s", algorithm_id)
            return fn
        return _inner

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, algorithm_id: str) -> AlgorithmDescriptor:
        try:
            return self._items[algorithm_id]
        except KeyError:
            raise InvalidArgument(f"unknown algorithm id {algorithm_id!r}") from None

    def find(self, algorithm_id: str) -> AlgorithmDescriptor | None:
        return self._items.get(algorithm_id)

    def list(self) -> Dict[str, AlgorithmDescriptor]:
        return dict(self._items)

    def __contains__(self, algorithm_id: object) -> bool:
        return algorithm_id in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)


registry = _Registry()
