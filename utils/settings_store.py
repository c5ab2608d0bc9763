"""In-memory cache for go link settings."""

from __future__ import annotations

import os
import threading
from typing import Any

from utils.file_utils import load_json
from utils.log_utils import tprint

DEFAULT_SETTINGS_PATH = "config/golinks_settings.json"

DEFAULT_SETTINGS: dict[str, Any] = {
    "log_level": "INFO",
    "store_path": os.path.join("user_data", "golinks.json"),
    "suggestion_limit": 5,
    "navigator": "system",
    "playwright_profile_dir": os.path.join("user_data", "playwright_profile"),
    "playwright_headless": False,
    "playwright_navigation_timeout_ms": 30000,
    "http_access_log": False,
}

_lock = threading.Lock()
_settings_cache: dict[str, Any] = {}


def settings_path() -> str:
    return os.getenv("GOLINKS_SETTINGS", DEFAULT_SETTINGS_PATH)


def refresh_settings() -> dict[str, Any]:
    """Reload settings from disk and replace the cache."""
    try:
        data = load_json(settings_path())
    except ValueError as exc:
        tprint(f"[SETTINGS][WARN] Ignoring unreadable settings file: {exc}")
        data = {}
    if not isinstance(data, dict):
        data = {}
    merged = {**DEFAULT_SETTINGS, **data}
    with _lock:
        _settings_cache.clear()
        _settings_cache.update(merged)
        return dict(_settings_cache)


def get_settings() -> dict[str, Any]:
    """Return a copy of the cached settings."""
    with _lock:
        if _settings_cache:
            return dict(_settings_cache)
    return refresh_settings()


def is_deep_logging() -> bool:
    """Return True when log_level requests deep tracing."""
    level = str(get_settings().get("log_level", "")).upper()
    return level in {"DEEP"}


def deep_log(message: str) -> None:
    if is_deep_logging():
        tprint(message)
