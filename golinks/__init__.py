"""Go links: short aliases for URLs with typeahead suggestions."""

from golinks.codec import format_mapping, parse_mapping
from golinks.mapping import Mapping, is_absolute_url, normalize_alias
from golinks.resolver import Empty, Found, NotFound, normalize_destination_input, resolve
from golinks.suggestions import Suggestion, suggest

__all__ = [
    "Empty",
    "Found",
    "Mapping",
    "NotFound",
    "Suggestion",
    "format_mapping",
    "is_absolute_url",
    "normalize_alias",
    "normalize_destination_input",
    "parse_mapping",
    "resolve",
    "suggest",
]
