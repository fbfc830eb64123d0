"""Token-continued iterator over a paginated listing endpoint.

A cursor is created per list request and handed to exactly one fetch thread.
It commits its continuation state only after a page has been fetched and
every record on it parsed, so a failed call can be retried from the same
position.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Protocol, TypeVar

from .group import LogGroup, parse_log_group

T = TypeVar("T")


@dataclass(frozen=True)
class ListingPage:
    """Raw result of one listing call."""

    items: Sequence[Mapping[str, Any]]
    next_token: str | None = None


FetchPage = Callable[[str | None, str | None], ListingPage]


class CursorState(Enum):
    READY = "ready"
    EXHAUSTED = "exhausted"


class PaginationCursor(Generic[T]):
    """Stateful page iterator.

    ``fetch_page(query, token)`` performs one remote call and may raise
    ``RemoteTransportError``; ``parse_item`` may raise ``RemoteParseError``.
    """

    def __init__(
        self,
        fetch_page: FetchPage,
        parse_item: Callable[[Mapping[str, Any]], T],
        query: str | None = None,
        start_token: str | None = None,
    ) -> None:
        self._fetch_page = fetch_page
        self._parse_item = parse_item
        self.query = query
        self._next_token = start_token
        self._page_token = start_token
        self._state = CursorState.READY

    @property
    def state(self) -> CursorState:
        return self._state

    @property
    def exhausted(self) -> bool:
        return self._state is CursorState.EXHAUSTED

    @property
    def next_token(self) -> str | None:
        """Token for the following page; ``None`` once exhausted."""
        if self.exhausted:
            return None
        return self._next_token

    @property
    def page_token(self) -> str | None:
        """Token that produced the most recently fetched page."""
        return self._page_token

    def next(self) -> list[T]:
        """Fetch the next page, or return ``[]`` without a call once exhausted."""
        if self.exhausted:
            return []
        token = self._next_token
        items, next_token = self._load(token)
        self._page_token = token
        self._next_token = next_token
        if next_token is None:
            self._state = CursorState.EXHAUSTED
        return items

    def refresh(self) -> list[T]:
        """Re-fetch the current page without touching cursor state."""
        items, _next_token = self._load(self._page_token)
        return items

    def _load(self, token: str | None) -> tuple[list[T], str | None]:
        page = self._fetch_page(self.query, token)
        parsed = [self._parse_item(record) for record in page.items]
        return parsed, page.next_token or None


class LogGroupLister(Protocol):
    def list_log_groups(self, name_prefix: str | None, token: str | None) -> ListingPage:
        ...


def log_group_cursor(
    lister: LogGroupLister,
    name_prefix: str | None = None,
    start_token: str | None = None,
) -> PaginationCursor[LogGroup]:
    return PaginationCursor(
        lister.list_log_groups,
        parse_log_group,
        query=name_prefix,
        start_token=start_token,
    )
