"""Safe loading/saving helpers."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path


def load_json(path: str | Path) -> dict:
    """Return the parsed document, or {} when the file is missing or blank.

    Malformed JSON raises ValueError.
    """
    p = Path(path)
    if not p.exists():
        return {}
    text = p.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    return json.loads(text)


def save_json(path: str | Path, data: dict) -> None:
    write_text_atomic(path, json.dumps(data, indent=2, ensure_ascii=False))


def read_text(path: str | Path) -> str:
    return Path(path).read_text(encoding="utf-8")


def write_text_atomic(path: str | Path, text: str) -> None:
    """Write through a temp file in the same directory, then rename over."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{p.name}.", dir=p.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(text)
        os.replace(tmp_name, p)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
