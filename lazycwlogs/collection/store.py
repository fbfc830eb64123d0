"""Deduplicated item container with derived orderings.

Items are unique under a caller-supplied primary key. Iteration follows the
primary-key order; alternate orders are materialized on demand and never
disturb the canonical set.
"""

from __future__ import annotations

import bisect
from collections.abc import Callable, Hashable, Iterable, Iterator
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class OrderedStore(Generic[T]):
    """Unique item set sorted by ``primary_key``."""

    def __init__(self, primary_key: Callable[[T], Any], items: Iterable[T] = ()) -> None:
        self._primary_key = primary_key
        self._items: dict[Hashable, T] = {}
        self._keys: list[Any] = []
        self.extend(items)

    def primary_key(self, item: T) -> Any:
        return self._primary_key(item)

    def insert(self, item: T) -> None:
        """Insert ``item``; an item with the same primary key is replaced."""
        key = self._primary_key(item)
        if key not in self._items:
            bisect.insort(self._keys, key)
        self._items[key] = item

    def extend(self, items: Iterable[T]) -> None:
        for item in items:
            self.insert(item)

    def clear(self) -> None:
        self._items.clear()
        self._keys.clear()

    def get(self, key: Any) -> T | None:
        return self._items.get(key)

    def iterate(self) -> Iterator[T]:
        """Yield items in primary-key order."""
        for key in self._keys:
            yield self._items[key]

    def order_by(self, key: Callable[[T], Any]) -> list[T]:
        """Return items sorted by ``(key(item), primary_key(item))``."""
        return sorted(self._items.values(), key=self._sort_key(key))

    def order_by_desc(self, key: Callable[[T], Any]) -> list[T]:
        """Return items sorted by ``(key(item), primary_key(item))`` descending."""
        return sorted(self._items.values(), key=self._sort_key(key), reverse=True)

    def _sort_key(self, key: Callable[[T], Any]) -> Callable[[T], tuple[Any, Any]]:
        primary_key = self._primary_key
        return lambda item: (key(item), primary_key(item))

    def __iter__(self) -> Iterator[T]:
        return self.iterate()

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, item: object) -> bool:
        try:
            key = self._primary_key(item)  # type: ignore[arg-type]
        except (AttributeError, TypeError):
            return False
        return key in self._items

    def __repr__(self) -> str:
        return f"OrderedStore({list(self.iterate())!r})"
