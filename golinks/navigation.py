"""Open resolved destinations in a browser."""

from __future__ import annotations

import os
import threading
import webbrowser
from enum import Enum
from pathlib import Path
from typing import Protocol

from playwright.sync_api import (
    sync_playwright,
    Error as PlaywrightError,
    TimeoutError as PlaywrightTimeoutError,
)

from golinks.errors import NavigationError
from golinks.mapping import is_absolute_url
from utils.log_utils import tprint
from utils.settings_store import get_settings, deep_log, is_deep_logging


class NavigationMode(str, Enum):
    """Where a destination opens. Values match the host's disposition names."""

    REPLACE_CURRENT = "currentTab"
    OPEN_FOREGROUND = "newForegroundTab"
    OPEN_BACKGROUND = "newBackgroundTab"

    @classmethod
    def parse(cls, value: object) -> NavigationMode:
        """Map a disposition string or enum name; unknown values replace the current tab."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return cls.REPLACE_CURRENT
        text = value.strip().lower().replace("-", "_")
        if text in {"newforegroundtab", "open_foreground", "foreground", "new_tab"}:
            return cls.OPEN_FOREGROUND
        if text in {"newbackgroundtab", "open_background", "background"}:
            return cls.OPEN_BACKGROUND
        return cls.REPLACE_CURRENT


class NavigationAdapter(Protocol):
    def navigate(self, destination: str, mode: NavigationMode | str = ...) -> None:
        ...


def _require_url(destination: str) -> str:
    if not is_absolute_url(destination):
        raise NavigationError(
            code="NAV_INVALID_URL",
            message=f"Refusing to open invalid URL: {destination!r}",
            url=destination,
        )
    return destination.strip()


class BrowserNavigator:
    """Drives a persistent Playwright Chromium context.

    The browser is launched on first use and bound to the launching thread;
    a call from another thread restarts it.
    """

    def __init__(self, settings: dict | None = None) -> None:
        self._settings = settings or get_settings()
        self._playwright = None
        self._browser = None
        self._page = None
        self._initialized = False
        self._playwright_thread_id: int | None = None
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Lazy initialisation
    # ------------------------------------------------------------------

    def _ensure_browser(self) -> None:
        """Launch a persistent Chromium context on first call."""
        if self._initialized:
            current_thread_id = threading.get_ident()
            if self._playwright_thread_id != current_thread_id:
                tprint("[NAV] Playwright initialized on different thread; restarting browser context.")
                self._shutdown_browser()
            else:
                return

        profile_dir = self._settings.get(
            "playwright_profile_dir",
            os.path.join("user_data", "playwright_profile"),
        )
        headless = self._settings.get("playwright_headless", False)
        Path(profile_dir).mkdir(parents=True, exist_ok=True)

        self._playwright = sync_playwright().start()
        try:
            self._browser = self._playwright.chromium.launch_persistent_context(
                user_data_dir=profile_dir,
                headless=headless,
                accept_downloads=False,
            )
        except PlaywrightError as exc:
            self._playwright.stop()
            self._playwright = None
            raise NavigationError(
                code="NAV_PLAYWRIGHT_MISSING",
                message=(
                    f"Failed to launch browser: {exc}\n"
                    "If Chromium is not installed, run: playwright install chromium"
                ),
            ) from exc
        self._page = self._browser.pages[0] if self._browser.pages else self._browser.new_page()
        self._initialized = True
        self._playwright_thread_id = threading.get_ident()
        tprint("[NAV] Playwright browser context initialized")

    def _shutdown_browser(self) -> None:
        if self._browser:
            try:
                self._browser.close()
            except PlaywrightError as exc:
                tprint(f"[NAV][WARN] Failed to close browser: {exc}")
        if self._playwright:
            try:
                self._playwright.stop()
            except PlaywrightError as exc:
                tprint(f"[NAV][WARN] Failed to stop Playwright: {exc}")
        self._browser = None
        self._page = None
        self._playwright = None
        self._initialized = False
        self._playwright_thread_id = None

    def _active_page(self):
        if self._page is None or self._page.is_closed():
            self._page = self._browser.new_page()
        return self._page

    # ------------------------------------------------------------------
    # Public entry points
    # ------------------------------------------------------------------

    def navigate(self, destination: str, mode: NavigationMode | str = NavigationMode.REPLACE_CURRENT) -> None:
        url = _require_url(destination)
        mode = NavigationMode.parse(mode)
        timeout_ms = self._settings.get("playwright_navigation_timeout_ms", 30000)

        with self._lock:
            self._ensure_browser()
            if is_deep_logging():
                deep_log(f"[DEEP][NAV] Opening url={url} mode={mode.value}")
            try:
                if mode is NavigationMode.REPLACE_CURRENT:
                    page = self._active_page()
                    page.goto(url, wait_until="domcontentloaded", timeout=timeout_ms)
                    return
                current = self._active_page()
                page = self._browser.new_page()
                page.goto(url, wait_until="domcontentloaded", timeout=timeout_ms)
                if mode is NavigationMode.OPEN_FOREGROUND:
                    page.bring_to_front()
                    self._page = page
                else:
                    current.bring_to_front()
            except PlaywrightTimeoutError as exc:
                raise NavigationError(
                    code="NAV_TIMEOUT",
                    message=f"Timeout opening URL: {url}",
                    url=url,
                ) from exc
            except PlaywrightError as exc:
                raise NavigationError(
                    code="NAV_FAILED",
                    message=f"Error: Could not navigate to {url}",
                    url=url,
                ) from exc
        tprint(f"[NAV] Opened {url} ({mode.value})")

    def shutdown(self) -> None:
        with self._lock:
            self._shutdown_browser()


class SystemBrowserNavigator:
    """Hands the URL to the platform's default browser."""

    _NEW = {
        NavigationMode.REPLACE_CURRENT: 0,
        NavigationMode.OPEN_FOREGROUND: 2,
        NavigationMode.OPEN_BACKGROUND: 2,
    }

    def navigate(self, destination: str, mode: NavigationMode | str = NavigationMode.REPLACE_CURRENT) -> None:
        url = _require_url(destination)
        mode = NavigationMode.parse(mode)
        autoraise = mode is not NavigationMode.OPEN_BACKGROUND
        try:
            opened = webbrowser.open(url, new=self._NEW[mode], autoraise=autoraise)
        except webbrowser.Error as exc:
            raise NavigationError(code="NAV_FAILED", message=f"Error: Could not navigate to {url}", url=url) from exc
        if not opened:
            raise NavigationError(
                code="NAV_FAILED",
                message=f"Error: Could not navigate to {url}",
                url=url,
            )
        tprint(f"[NAV] Opened {url} in default browser ({mode.value})")

    def shutdown(self) -> None:
        return None


def make_navigator(settings: dict | None = None) -> BrowserNavigator | SystemBrowserNavigator:
    settings = settings or get_settings()
    kind = str(settings.get("navigator", "system")).strip().lower()
    if kind == "browser":
        return BrowserNavigator(settings)
    return SystemBrowserNavigator()
