"""Ranked typeahead suggestions over a Mapping."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from itertools import chain, islice

from golinks.mapping import Mapping

DEFAULT_LIMIT = 5
HINT_COUNT = 3


@dataclass(frozen=True)
class Suggestion:
    """A candidate alias surfaced while the user is typing."""

    alias: str
    destination: str

    @property
    def description(self) -> str:
        return f"{self.alias} → {self.destination}"


class Suggestions:
    """Lazy, restartable view of the ranked candidates for one query.

    Iterating twice recomputes from the same Mapping snapshot and yields the
    same sequence.
    """

    def __init__(self, mapping: Mapping, query: str, limit: int) -> None:
        self._mapping = mapping
        self._query = query
        self._limit = max(limit, 0)

    @property
    def query(self) -> str:
        return self._query

    def _ranked(self) -> Iterator[tuple[str, str]]:
        entries = self._mapping.items()
        if not self._query:
            return iter(entries)
        query = self._query
        prefix = (item for item in entries if item[0].startswith(query))
        contains = (
            item
            for item in entries
            if not item[0].startswith(query) and query in item[0]
        )
        return chain(prefix, contains)

    def __iter__(self) -> Iterator[Suggestion]:
        for alias, url in islice(self._ranked(), self._limit):
            yield Suggestion(alias=alias, destination=url)

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __getitem__(self, index: int) -> Suggestion:
        return list(self)[index]

    def __bool__(self) -> bool:
        return next(iter(self), None) is not None

    def aliases(self) -> list[str]:
        return [item.alias for item in self]

    def __repr__(self) -> str:
        return f"Suggestions(query={self._query!r}, aliases={self.aliases()!r})"


def suggest(mapping: Mapping, query_text: str, limit: int = DEFAULT_LIMIT) -> Suggestions:
    """Rank aliases for a partial query.

    An empty query yields the first ``limit`` entries in mapping order.
    Otherwise aliases starting with the query come first, then aliases that
    merely contain it; both groups keep mapping order.
    """
    query = query_text.strip().lower() if isinstance(query_text, str) else ""
    return Suggestions(mapping, query, limit)


def default_suggestion(suggestions: Suggestions) -> str:
    """Inline hint text for the best candidate, or "" when there is none."""
    first = next(iter(suggestions), None)
    if first is None:
        return ""
    return f"Autocomplete: {first.description}"


def hint_text(mapping: Mapping, count: int = HINT_COUNT) -> str:
    aliases = mapping.aliases()
    if not aliases:
        return ""
    more = "..." if len(aliases) > count else ""
    return f"Try: {', '.join(aliases[:count])}{more}"
