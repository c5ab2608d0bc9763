"""Holds the current Mapping for one process and applies edits to it."""

from __future__ import annotations

from collections.abc import Iterable

from golinks.codec import format_mapping, parse_mapping
from golinks.errors import GoLinksError, NavigationError
from golinks.mapping import Mapping, is_valid_alias, normalize_alias
from golinks.navigation import NavigationAdapter, NavigationMode
from golinks.resolver import Found, Resolution, normalize_destination_input, resolve
from golinks.store import AliasStore, load_or_default
from golinks.suggestions import DEFAULT_LIMIT, Suggestions, hint_text, suggest
from utils.log_utils import tprint
from utils.settings_store import deep_log, is_deep_logging


class MissingURL(GoLinksError):
    def __init__(self) -> None:
        super().__init__("Please enter a URL")


class NoSelection(GoLinksError):
    def __init__(self) -> None:
        super().__init__("Please select at least one link to delete")


class GoLinksSession:
    """Owns the current go links snapshot.

    Edits follow read-then-replace: read the whole mapping from the store,
    derive a new one, save it whole, and only then swap the snapshot.
    """

    def __init__(
        self,
        store: AliasStore,
        navigator: NavigationAdapter | None = None,
        *,
        suggestion_limit: int = DEFAULT_LIMIT,
    ) -> None:
        self._store = store
        self._navigator = navigator
        self._suggestion_limit = suggestion_limit
        self._mapping = Mapping()

    @property
    def mapping(self) -> Mapping:
        return self._mapping

    def load(self) -> Mapping:
        self._mapping = load_or_default(self._store)
        if is_deep_logging():
            deep_log(f"[DEEP][SESSION] Go links loaded from storage: {self._mapping!r}")
        return self._mapping

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def suggest(self, query: str, limit: int | None = None) -> Suggestions:
        return suggest(self._mapping, query, self._suggestion_limit if limit is None else limit)

    def resolve(self, alias: str) -> Resolution:
        return resolve(self._mapping, alias)

    def hint_text(self) -> str:
        return hint_text(self._mapping)

    def export_text(self) -> str:
        return format_mapping(self._mapping)

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------

    def save_text(self, text: str) -> Mapping:
        """Replace every link with the parsed editor text."""
        return self.replace(parse_mapping(text))

    def replace(self, mapping: Mapping) -> Mapping:
        self._commit(mapping)
        tprint(f"[SESSION] Successfully saved {len(mapping)} go link(s)")
        return mapping

    def add_link(self, alias: str, raw_destination: str) -> Mapping:
        key = normalize_alias(alias)
        if not isinstance(raw_destination, str) or not raw_destination.strip():
            raise MissingURL()
        url = normalize_destination_input(raw_destination)
        # Edits build on the stored mapping; a failed read must not turn into a
        # save of the defaults.
        mapping = self._store.load().with_entry(key, url)
        self._commit(mapping)
        tprint(f'[SESSION] Saved go link "{key}" → {url}')
        return mapping

    def delete_links(self, aliases: Iterable[str]) -> int:
        """Delete the selected aliases and return how many were stored."""
        selected = [alias for alias in aliases if is_valid_alias(alias)]
        if not selected:
            raise NoSelection()
        current = self._store.load()
        mapping = current.without(*selected)
        self._commit(mapping)
        deleted = len(current) - len(mapping)
        tprint(f"[SESSION] Deleted {deleted} go link(s)")
        return deleted

    def _commit(self, mapping: Mapping) -> None:
        # Save errors propagate and leave the snapshot untouched.
        self._store.save(mapping)
        self._mapping = mapping

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def go(self, alias: str, mode: NavigationMode | str = NavigationMode.REPLACE_CURRENT) -> Resolution:
        resolution = self.resolve(alias)
        if not isinstance(resolution, Found):
            tprint(f"[SESSION][WARN] {resolution.message}")
            return resolution
        if self._navigator is None:
            raise NavigationError(code="NAV_UNAVAILABLE", message="No navigator configured")
        try:
            self._navigator.navigate(resolution.destination, NavigationMode.parse(mode))
        except NavigationError as exc:
            tprint(f"[SESSION][ERROR] Error navigating to {resolution.destination}: {exc}")
            raise
        return resolution
