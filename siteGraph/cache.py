"""Memoization for built graphs, owned by whoever drives the build."""

import threading
from typing import Callable

from .graph_types import GraphData


class GraphDataCache:
    """Key -> GraphData store with no eviction; cleared only by `invalidate`.

    Lookups and first population run under one reentrant lock, so a generator
    is called at most once per key even when several threads ask for it
    together, and a generator may itself read other keys from the same cache.
    """

    def __init__(self) -> None:
        self._data: dict[str, GraphData] = {}
        self._lock = threading.RLock()

    def get_cached(self, key: str, generator: Callable[[], GraphData]) -> GraphData:
        with self._lock:
            if key in self._data:
                return self._data[key]
            data = generator()
            self._data[key] = data
            return data

    def invalidate(self) -> None:
        with self._lock:
            self._data.clear()

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)
