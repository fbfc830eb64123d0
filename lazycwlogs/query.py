"""Search query value used to filter local repositories."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Query:
    word: str

    def matches(self, text: str) -> bool:
        """Case-sensitive substring match."""
        return self.word in text


def query_from(text: str) -> Query | None:
    """Return ``None`` for empty input so an empty search clears the filter."""
    if not text:
        return None
    return Query(word=text)
