"""FastAPI server exposing go link lookup, suggestions and editing."""

from __future__ import annotations

import threading
from typing import Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from golinks.errors import GoLinksError, NavigationError, ParseError, StoreError
from golinks.navigation import NavigationMode, make_navigator
from golinks.resolver import Empty, Found, NotFound, Resolution
from golinks.session import GoLinksSession
from golinks.store import JsonFileAliasStore
from golinks.suggestions import default_suggestion
from utils.log_utils import tprint
from utils.settings_store import get_settings

app = FastAPI(title="Go Links API", version="0.1.0")

# Allow local dev origins (extension popup, Vite, etc.)
_origins = ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

_session_lock = threading.Lock()
_session: GoLinksSession | None = None


def _build_session() -> GoLinksSession:
    settings = get_settings()
    session = GoLinksSession(
        JsonFileAliasStore(settings.get("store_path")),
        make_navigator(settings),
        suggestion_limit=int(settings.get("suggestion_limit", 5)),
    )
    session.load()
    return session


def get_session() -> GoLinksSession:
    global _session
    with _session_lock:
        if _session is None:
            _session = _build_session()
        return _session


def set_session(session: GoLinksSession | None) -> None:
    """Swap the process session (used by tests and embedding hosts)."""
    global _session
    with _session_lock:
        _session = session


class BulkTextRequest(BaseModel):
    text: str


class AddLinkRequest(BaseModel):
    alias: str
    url: str


class DeleteLinksRequest(BaseModel):
    aliases: list[str] = Field(default_factory=list)


class GoRequest(BaseModel):
    alias: str
    mode: Optional[str] = NavigationMode.REPLACE_CURRENT.value


def _pairs(items) -> list[dict]:
    return [{"alias": alias, "destination": url} for alias, url in items]


def _input_error(exc: GoLinksError) -> HTTPException:
    detail = {"message": str(exc)}
    if isinstance(exc, ParseError):
        detail["code"] = exc.code
        detail["line_number"] = exc.line_number
    return HTTPException(status_code=400, detail=detail)


def _store_error(exc: StoreError) -> HTTPException:
    tprint(f"[API][ERROR] Error saving go links: {exc}")
    return HTTPException(status_code=500, detail={"message": str(exc)})


@app.get("/links")
def list_links():
    session = get_session()
    return {"items": _pairs(session.mapping.items()), "hint": session.hint_text()}


@app.get("/links/text")
def export_links():
    return {"text": get_session().export_text()}


@app.put("/links/text")
def save_links(req: BulkTextRequest):
    session = get_session()
    try:
        mapping = session.save_text(req.text)
    except GoLinksError as exc:
        raise _input_error(exc)
    except StoreError as exc:
        raise _store_error(exc)
    return {"status": "ok", "count": len(mapping), "text": session.export_text()}


@app.post("/links")
def add_link(req: AddLinkRequest):
    try:
        mapping = get_session().add_link(req.alias, req.url)
    except GoLinksError as exc:
        raise _input_error(exc)
    except StoreError as exc:
        raise _store_error(exc)
    alias = req.alias.strip().lower()
    return {"status": "ok", "alias": alias, "destination": mapping.get(alias)}


@app.post("/links/delete")
def delete_links(req: DeleteLinksRequest):
    try:
        deleted = get_session().delete_links(req.aliases)
    except GoLinksError as exc:
        raise _input_error(exc)
    except StoreError as exc:
        raise _store_error(exc)
    return {"status": "ok", "deleted": deleted}


@app.post("/links/reload")
def reload_links():
    mapping = get_session().load()
    return {"status": "ok", "count": len(mapping)}


@app.get("/suggest")
def suggest_links(q: str = "", limit: Optional[int] = Query(default=None, ge=0, le=50)):
    suggestions = get_session().suggest(q, limit)
    items = [
        {"alias": s.alias, "destination": s.destination, "description": s.description}
        for s in suggestions
    ]
    return {"items": items, "default_suggestion": default_suggestion(suggestions)}


def _found_or_error(resolution: Resolution) -> Found:
    if isinstance(resolution, Empty):
        raise HTTPException(status_code=400, detail={"message": resolution.message})
    if isinstance(resolution, NotFound):
        raise HTTPException(
            status_code=404,
            detail={
                "message": resolution.message,
                "alias": resolution.tried_alias,
                "available": resolution.available_aliases,
            },
        )
    return resolution


@app.get("/resolve")
def resolve_link(alias: str = ""):
    found = _found_or_error(get_session().resolve(alias))
    return {"alias": found.alias, "destination": found.destination}


@app.post("/go")
def go(req: GoRequest):
    try:
        resolution = get_session().go(req.alias, NavigationMode.parse(req.mode))
    except NavigationError as exc:
        raise HTTPException(status_code=502, detail={"code": exc.code, "message": str(exc)})
    found = _found_or_error(resolution)
    return {"status": "ok", "alias": found.alias, "destination": found.destination}


@app.get("/status")
def status():
    return {"links": len(get_session().mapping)}


@app.get("/", response_class=HTMLResponse)
def root():
    return "<html><body><h1>Go Links API</h1><p>Status: OK</p></body></html>"
