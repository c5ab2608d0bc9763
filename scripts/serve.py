"""Launch the go links API as a local-only server."""

from __future__ import annotations

import os
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from utils.settings_store import get_settings


def _load_env_files() -> None:
    """Load .env files from the working directory and home, first wins."""
    cwd = Path.cwd()
    home = Path.home()
    for path in (cwd / "env/.env", cwd / ".env", home / ".golinks.env"):
        if path.exists():
            load_dotenv(dotenv_path=str(path), override=False)


def main() -> None:
    _load_env_files()
    host = os.getenv("GOLINKS_API_HOST", "127.0.0.1")
    port = int(os.getenv("GOLINKS_API_PORT", "8000"))
    settings = get_settings()
    access_log = bool(settings.get("http_access_log", False))
    log_level = str(settings.get("log_level", "INFO")).upper()
    if log_level == "DEEP":
        log_level = "DEBUG"
    uvicorn.run(
        "api.server:app",
        host=host,
        port=port,
        log_level=log_level.lower(),
        access_log=access_log,
    )


if __name__ == "__main__":
    main()
