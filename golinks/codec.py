"""Line-oriented ``alias:destination`` text format for bulk editing."""

from __future__ import annotations

from pathlib import Path

from golinks.errors import (
    EmptyInput,
    MissingAlias,
    MissingDestination,
    MissingSeparator,
    NoEntries,
)
from golinks.mapping import SEPARATOR, Mapping, validate_destination
from utils.file_utils import read_text, write_text_atomic


def format_mapping(mapping: Mapping) -> str:
    """Render one ``alias:destination`` line per entry, in mapping order."""
    return "\n".join(f"{alias}{SEPARATOR}{url}" for alias, url in mapping.items())


def parse_mapping(text: str) -> Mapping:
    """Parse editor text into a Mapping.

    Lines are split on the first colon. Destinations must already be
    absolute URLs; no scheme is inserted here. A repeated alias replaces
    the earlier entry and moves to the position of the later line.

    Raises:
        EmptyInput, NoEntries, MissingSeparator, MissingAlias,
        MissingDestination, InvalidDestination
    """
    content = text.strip() if isinstance(text, str) else ""
    if not content:
        raise EmptyInput()

    entries: dict[str, str] = {}
    for line_number, raw_line in enumerate(content.splitlines(), start=1):
        line = raw_line.strip()
        if not line:
            continue

        alias, sep, destination = line.partition(SEPARATOR)
        if not sep:
            raise MissingSeparator(line_number)

        alias = alias.strip()
        destination = destination.strip()
        if not alias:
            raise MissingAlias(line_number)
        if not destination:
            raise MissingDestination(line_number)
        url = validate_destination(destination, line_number)

        key = alias.lower()
        entries.pop(key, None)
        entries[key] = url

    if not entries:
        raise NoEntries()
    return Mapping._from_validated(entries)


def read_mapping_file(path: str | Path) -> Mapping:
    return parse_mapping(read_text(path))


def write_mapping_file(path: str | Path, mapping: Mapping) -> None:
    write_text_atomic(path, format_mapping(mapping))
