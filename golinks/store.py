"""Durable alias storage: a JSON file store and an in-memory store."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Protocol

from golinks.errors import GoLinksError, StoreError
from golinks.mapping import Mapping
from utils.file_utils import load_json, save_json
from utils.log_utils import tprint
from utils.settings_store import deep_log, is_deep_logging

STORAGE_KEY = "goLinks"

DEFAULT_LINKS: dict[str, str] = {
    "google": "https://google.com",
    "youtube": "https://youtube.com",
}


def default_mapping() -> Mapping:
    return Mapping.from_dict(DEFAULT_LINKS)


class AliasStore(Protocol):
    """Whole-mapping storage. Loads never return duplicate aliases."""

    def load(self) -> Mapping:
        ...

    def save(self, mapping: Mapping) -> None:
        ...


class JsonFileAliasStore:
    """Persist the mapping as ``{"goLinks": {alias: url, ...}}`` in a JSON file.

    An absent file or an empty ``goLinks`` object is seeded with the default
    links on load. A file that cannot be parsed raises StoreError and is left
    as it is. Saves replace the whole file atomically.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Mapping:
        try:
            document = load_json(self._path)
        except ValueError as exc:
            raise StoreError(f"{self._path} is not valid JSON: {exc}") from exc
        except OSError as exc:
            raise StoreError(f"Could not read {self._path}: {exc}") from exc

        if not isinstance(document, dict):
            raise StoreError(f"{self._path} does not hold a JSON object")
        stored = document.get(STORAGE_KEY)
        if stored is not None and not isinstance(stored, dict):
            raise StoreError(f"\"{STORAGE_KEY}\" in {self._path} is not a JSON object")
        if not stored:
            tprint(f"[STORE] No stored go links in {self._path}; seeding defaults")
            mapping = default_mapping()
            self.save(mapping)
            return mapping

        try:
            mapping = Mapping.from_dict(stored)
        except GoLinksError as exc:
            raise StoreError(f"Stored go links in {self._path} are invalid: {exc}") from exc
        if is_deep_logging():
            deep_log(f"[DEEP][STORE] Loaded {len(mapping)} go link(s) from {self._path}")
        return mapping

    def save(self, mapping: Mapping) -> None:
        with self._lock:
            try:
                save_json(self._path, {STORAGE_KEY: mapping.to_dict()})
            except OSError as exc:
                raise StoreError(f"Could not write {self._path}: {exc}") from exc
        tprint(f"[STORE] Saved {len(mapping)} go link(s) to {self._path}")


class InMemoryAliasStore:
    """Process-local store with the same seeding contract as the file store."""

    def __init__(
        self,
        initial: Mapping | None = None,
        *,
        fail_load: bool = False,
        fail_save: bool = False,
    ) -> None:
        self._mapping = initial if initial is not None else Mapping()
        self._lock = threading.Lock()
        self.fail_load = fail_load
        self.fail_save = fail_save
        self.save_count = 0

    def load(self) -> Mapping:
        if self.fail_load:
            raise StoreError("In-memory store configured to fail on load")
        with self._lock:
            if not self._mapping:
                self._mapping = default_mapping()
            return self._mapping

    def save(self, mapping: Mapping) -> None:
        if self.fail_save:
            raise StoreError("In-memory store configured to fail on save")
        with self._lock:
            self._mapping = mapping
            self.save_count += 1

    def peek(self) -> Mapping:
        """Return what is stored without seeding defaults."""
        with self._lock:
            return self._mapping


def load_or_default(store: AliasStore) -> Mapping:
    """Load the mapping, falling back to the defaults when the store fails."""
    try:
        return store.load()
    except StoreError as exc:
        tprint(f"[STORE][ERROR] Error loading go links from storage: {exc}")
        return default_mapping()
