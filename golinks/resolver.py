"""Resolve a committed alias to its destination."""

from __future__ import annotations

from dataclasses import dataclass, field

from golinks.errors import InvalidDestination
from golinks.mapping import Mapping, is_absolute_url

DEFAULT_SCHEME = "https://"


@dataclass(frozen=True)
class Empty:
    """Nothing was typed."""

    @property
    def message(self) -> str:
        return "Please enter a go link"


@dataclass(frozen=True)
class Found:
    alias: str
    destination: str

    @property
    def message(self) -> str:
        return self.destination


@dataclass(frozen=True)
class NotFound:
    tried_alias: str
    available_aliases: list[str] = field(default_factory=list)

    @property
    def message(self) -> str:
        available = ", ".join(self.available_aliases) or "none"
        return f'Go link "{self.tried_alias}" not found. Available: {available}'


Resolution = Empty | Found | NotFound


def resolve(mapping: Mapping, alias_text: str) -> Resolution:
    alias = alias_text.strip().lower() if isinstance(alias_text, str) else ""
    if not alias:
        return Empty()
    destination = mapping.get(alias)
    if destination is None:
        return NotFound(tried_alias=alias, available_aliases=mapping.aliases())
    return Found(alias=alias, destination=destination)


def normalize_destination_input(raw_text: str) -> str:
    """Validate a URL typed for a single new link.

    Bare domains get ``https://`` prepended. The bulk editor never does
    this; there an invalid URL is always an error.
    """
    text = raw_text.strip() if isinstance(raw_text, str) else ""
    if is_absolute_url(text):
        return text
    candidate = f"{DEFAULT_SCHEME}{text}"
    if text and is_absolute_url(candidate):
        return candidate
    raise InvalidDestination(text)
