"""Alias and destination validation plus the immutable ordered Mapping."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from urllib.parse import urlsplit

from golinks.errors import DuplicateAlias, InvalidAlias, InvalidDestination

SEPARATOR = ":"

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")


def normalize_alias(text: object) -> str:
    """Trim and lower-case an alias.

    Raises InvalidAlias when nothing is left, or when the alias holds the
    colon separator or a line break, which the bulk text format cannot carry.
    """
    if not isinstance(text, str):
        raise InvalidAlias(text)
    alias = text.strip().lower()
    if not alias:
        raise InvalidAlias(text)
    if SEPARATOR in alias or alias.splitlines() != [alias]:
        raise InvalidAlias(text, f"Go link names cannot contain \"{SEPARATOR}\" or line breaks")
    return alias


def is_valid_alias(text: object) -> bool:
    try:
        normalize_alias(text)
    except InvalidAlias:
        return False
    return True


def is_absolute_url(text: object) -> bool:
    """Return True for a well-formed absolute URL (scheme plus authority)."""
    if not isinstance(text, str):
        return False
    url = text.strip()
    if not url:
        return False
    if any(ch.isspace() or ord(ch) < 0x20 or ord(ch) == 0x7F for ch in url):
        return False
    try:
        parsed = urlsplit(url)
        # Accessing .port validates it.
        parsed.port
    except ValueError:
        return False
    if not _SCHEME_RE.match(parsed.scheme):
        return False
    return bool(parsed.netloc) and bool(parsed.hostname)


def validate_destination(text: object, line_number: int | None = None) -> str:
    """Return the trimmed URL or raise InvalidDestination."""
    if not is_absolute_url(text):
        raw = text.strip() if isinstance(text, str) else repr(text)
        raise InvalidDestination(raw, line_number)
    return text.strip()


class Mapping:
    """Ordered alias -> destination pairs with unique normalized aliases.

    Instances are never modified; edits return a new Mapping.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[tuple[str, str]] = ()) -> None:
        built: dict[str, str] = {}
        for alias, destination in entries:
            key = normalize_alias(alias)
            if key in built:
                raise DuplicateAlias(key)
            built[key] = validate_destination(destination)
        self._entries = built

    @classmethod
    def from_dict(cls, data: dict[str, str]) -> Mapping:
        return cls(data.items())

    @classmethod
    def _from_validated(cls, entries: dict[str, str]) -> Mapping:
        mapping = cls.__new__(cls)
        mapping._entries = entries
        return mapping

    def with_entry(self, alias: str, destination: str) -> Mapping:
        """Add or replace one entry. A replaced alias keeps its position."""
        key = normalize_alias(alias)
        url = validate_destination(destination)
        entries = dict(self._entries)
        entries[key] = url
        return Mapping._from_validated(entries)

    def without(self, *aliases: str) -> Mapping:
        """Drop the given aliases; unknown ones are ignored."""
        drop = {alias.strip().lower() for alias in aliases if isinstance(alias, str)}
        entries = {key: url for key, url in self._entries.items() if key not in drop}
        return Mapping._from_validated(entries)

    def get(self, alias: str) -> str | None:
        if not isinstance(alias, str):
            return None
        return self._entries.get(alias.strip().lower())

    def aliases(self) -> list[str]:
        return list(self._entries)

    def items(self) -> list[tuple[str, str]]:
        return list(self._entries.items())

    def to_dict(self) -> dict[str, str]:
        return dict(self._entries)

    def __contains__(self, alias: object) -> bool:
        return isinstance(alias, str) and alias.strip().lower() in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mapping):
            return NotImplemented
        return self.items() == other.items()

    def __hash__(self) -> int:
        return hash(tuple(self._entries.items()))

    def __repr__(self) -> str:
        body = ", ".join(f"{key!r}: {url!r}" for key, url in self._entries.items())
        return f"Mapping({{{body}}})"
