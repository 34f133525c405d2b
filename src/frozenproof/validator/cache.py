"""Classes already proven immutable."""

import threading
from typing import FrozenSet, Iterable, Set


class TypeCache:
    """
    Monotonically growing set of proven classes.

    ``lock`` is re-entrant and is held by the validator for a whole top-level
    check, so membership tests and the final insert form one critical section.
    """

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self._types: Set[type] = set()

    def __contains__(self, cls: object) -> bool:
        with self.lock:
            return cls in self._types

    def __len__(self) -> int:
        with self.lock:
            return len(self._types)

    def add(self, cls: type) -> None:
        with self.lock:
            self._types.add(cls)

    def update(self, classes: Iterable[type]) -> None:
        with self.lock:
            self._types.update(classes)

    def snapshot(self) -> FrozenSet[type]:
        with self.lock:
            return frozenset(self._types)
