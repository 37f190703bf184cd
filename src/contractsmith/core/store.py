"""
contractsmith/core/store.py

Insertion-ordered keyed collection used throughout the contract model.
"""

from __future__ import annotations

from typing import Callable, Dict, Generic, Iterator, List, Optional, Tuple, TypeVar

K = TypeVar("K")
V = TypeVar("V")


class KeyedStore(Generic[K, V]):
    """
    An ordered mapping from a unique key to a value with insert-if-absent semantics.

    Entries are kept in a list next to a key index so that iteration order is the
    order of first insertion, independent of how keys hash. Once a key is present
    its value is never replaced through this API; later writes for the same key
    are ignored and reported back to the caller.
    """

    def __init__(self) -> None:
        self._entries: List[Tuple[K, V]] = []
        self._index: Dict[K, int] = {}

    def add(self, key: K, value: V) -> bool:
        """
        Insert ``value`` under ``key`` unless the key already exists.

        Returns
        -------
        bool
            True if the entry was newly inserted, False if the key was present.
        """
        if key in self._index:
            return False
        self._index[key] = len(self._entries)
        self._entries.append((key, value))
        return True

    def setdefault(self, key: K, factory: Callable[[], V]) -> V:
        """Return the value for ``key``, creating it with ``factory`` on a miss."""
        position = self._index.get(key)
        if position is not None:
            return self._entries[position][1]
        value = factory()
        self.add(key, value)
        return value

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        position = self._index.get(key)
        if position is None:
            return default
        return self._entries[position][1]

    def values(self) -> List[V]:
        return [value for _, value in self._entries]

    def keys(self) -> List[K]:
        return [key for key, _ in self._entries]

    def items(self) -> List[Tuple[K, V]]:
        return list(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[K]:
        return iter(self.keys())

    def __repr__(self) -> str:
        return f"KeyedStore({self.keys()!r})"
