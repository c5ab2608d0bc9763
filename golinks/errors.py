"""Error taxonomy for go link parsing, validation, storage and navigation."""

from __future__ import annotations


class GoLinksError(ValueError):
    """Base class for user-input problems (bad alias, URL or editor text)."""


class InvalidAlias(GoLinksError):
    def __init__(self, raw: object, message: str = "Please enter a short link") -> None:
        super().__init__(message)
        self.raw = raw


class DuplicateAlias(GoLinksError):
    def __init__(self, alias: str) -> None:
        super().__init__(f'Duplicate go link "{alias}"')
        self.alias = alias


class ParseError(GoLinksError):
    """Bulk editor text could not be turned into a Mapping.

    ``code`` is stable and safe to switch on; ``line_number`` is 1-based
    when the failure belongs to a specific line.
    """

    code = "PARSE_ERROR"

    def __init__(self, message: str, line_number: int | None = None) -> None:
        super().__init__(message)
        self.line_number = line_number


class EmptyInput(ParseError):
    code = "EMPTY_INPUT"

    def __init__(self) -> None:
        super().__init__("Editor is empty")


class NoEntries(ParseError):
    code = "NO_ENTRIES"

    def __init__(self) -> None:
        super().__init__("No valid go links found")


class MissingSeparator(ParseError):
    code = "MISSING_SEPARATOR"

    def __init__(self, line_number: int) -> None:
        super().__init__(
            f"Invalid format on line {line_number}: missing colon separator",
            line_number,
        )


class MissingAlias(ParseError):
    code = "MISSING_ALIAS"

    def __init__(self, line_number: int) -> None:
        super().__init__(f"Invalid format on line {line_number}: missing key", line_number)


class MissingDestination(ParseError):
    code = "MISSING_DESTINATION"

    def __init__(self, line_number: int) -> None:
        super().__init__(f"Invalid format on line {line_number}: missing URL", line_number)


class InvalidDestination(ParseError):
    """Destination is not an absolute URL.

    Raised with a line number by the bulk parser and without one by
    single-entry validation.
    """

    code = "INVALID_DESTINATION"

    def __init__(self, raw: str, line_number: int | None = None) -> None:
        if line_number is None:
            message = f'Invalid URL: "{raw}"'
        else:
            message = f'Invalid URL on line {line_number}: "{raw}"'
        super().__init__(message, line_number)
        self.raw = raw


class StoreError(RuntimeError):
    """Failure reported by an AliasStore; surfaced to callers as-is."""


class NavigationError(RuntimeError):
    """Structured error from a navigation attempt."""

    def __init__(self, code: str, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.url = url
