"""Query-filterable, orderable facade over an ``OrderedStore``."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from ..query import Query
from .store import OrderedStore

T = TypeVar("T")


@dataclass(frozen=True)
class Ordering:
    """Named derived ordering applied on top of the canonical store."""

    name: str
    key: Callable[[Any], Any]
    descending: bool = False


class ResourceRepository(Generic[T]):
    """Resource collection with an active query and a display label.

    Default iteration order is insertion order, tracked by a sequence number
    that never takes part in deduplication. ``clear`` plus ``extend`` is the
    wholesale replacement used when fresh results arrive.
    """

    def __init__(
        self,
        base_label: str,
        primary_key: Callable[[T], Any],
        display_name: Callable[[T], str],
        items: Iterable[T] = (),
        ordering: Ordering | None = None,
    ) -> None:
        self._base_label = base_label
        self._display_name = display_name
        self._store: OrderedStore[T] = OrderedStore(primary_key)
        self._sequence: dict[Any, int] = {}
        self._next_sequence = 1
        self._query: Query | None = None
        self._label = base_label
        self._ordering = ordering
        self.extend(items)

    @property
    def label(self) -> str:
        return self._label

    @property
    def query(self) -> Query | None:
        return self._query

    @property
    def ordering(self) -> Ordering | None:
        return self._ordering

    def set_query(self, query: Query | None) -> None:
        self._query = query
        if query is None:
            self._label = self._base_label
        else:
            self._label = f'{self._base_label} ("{query.word}")'

    def set_ordering(self, ordering: Ordering | None) -> None:
        self._ordering = ordering

    def insert(self, item: T) -> None:
        key = self._store.primary_key(item)
        if key not in self._sequence:
            self._sequence[key] = self._next_sequence
            self._next_sequence += 1
        self._store.insert(item)

    def extend(self, items: Iterable[T]) -> None:
        for item in items:
            self.insert(item)

    def clear(self) -> None:
        self._store.clear()
        self._sequence.clear()

    def display_name(self, item: T) -> str:
        return self._display_name(item)

    def iterate(self) -> Iterator[T]:
        """Yield items matching the active query, in the active ordering."""
        query = self._query
        for item in self._ordered():
            if query is None or query.matches(self._display_name(item)):
                yield item

    def item_at(self, index: int | None) -> T | None:
        if index is None or index < 0:
            return None
        for position, item in enumerate(self.iterate()):
            if position == index:
                return item
        return None

    def total_count(self) -> int:
        """Number of stored items, ignoring the query."""
        return len(self._store)

    def _ordered(self) -> list[T]:
        ordering = self._ordering
        if ordering is None:
            sequence = self._sequence
            primary_key = self._store.primary_key
            return self._store.order_by(lambda item: sequence[primary_key(item)])
        if ordering.descending:
            return self._store.order_by_desc(ordering.key)
        return self._store.order_by(ordering.key)

    def __iter__(self) -> Iterator[T]:
        return self.iterate()

    def __len__(self) -> int:
        return sum(1 for _ in self.iterate())
