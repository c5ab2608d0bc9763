"""CLI for go links."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Literal

from golinks.codec import read_mapping_file, write_mapping_file
from golinks.errors import GoLinksError, NavigationError, StoreError
from golinks.navigation import NavigationMode, make_navigator
from golinks.resolver import Found
from golinks.session import GoLinksSession
from golinks.store import JsonFileAliasStore
from golinks.suggestions import default_suggestion
from utils.settings_store import get_settings

OutputFormat = Literal["text", "json"]

_MODES = {
    "replace": NavigationMode.REPLACE_CURRENT,
    "foreground": NavigationMode.OPEN_FOREGROUND,
    "background": NavigationMode.OPEN_BACKGROUND,
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="golinks", description="Manage and open go links.")
    parser.add_argument("--store", help="Path to the go links JSON file.")
    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format for list/suggest/resolve.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="Show every go link.")

    p_suggest = sub.add_parser("suggest", help="Rank go links for a partial alias.")
    p_suggest.add_argument("query", nargs="?", default="")
    p_suggest.add_argument("--limit", type=int, default=None)

    p_resolve = sub.add_parser("resolve", help="Print the URL for an alias.")
    p_resolve.add_argument("alias")

    p_go = sub.add_parser("go", help="Open the URL for an alias.")
    p_go.add_argument("alias")
    p_go.add_argument("--mode", choices=sorted(_MODES), default="replace")

    p_add = sub.add_parser("add", help="Add or replace one go link.")
    p_add.add_argument("alias")
    p_add.add_argument("url", help="Destination; https:// is added to bare domains.")

    p_rm = sub.add_parser("rm", help="Delete go links.")
    p_rm.add_argument("aliases", nargs="+")

    p_export = sub.add_parser("export", help="Write go links in alias:url format.")
    p_export.add_argument("file", nargs="?", help="Destination file (stdout if omitted).")

    p_import = sub.add_parser("import", help="Replace all go links from an alias:url file.")
    p_import.add_argument("file")
    return parser


def _print_pairs(pairs: list[tuple[str, str]], fmt: OutputFormat) -> None:
    if fmt == "json":
        print(json.dumps([{"alias": a, "destination": d} for a, d in pairs], ensure_ascii=False, indent=2))
        return
    for alias, url in pairs:
        print(f"{alias} → {url}")


def _run(args: argparse.Namespace, session: GoLinksSession) -> int:
    fmt: OutputFormat = args.format
    command = args.command

    if command == "list":
        _print_pairs(session.mapping.items(), fmt)
        return 0

    if command == "suggest":
        suggestions = session.suggest(args.query, args.limit)
        _print_pairs([(s.alias, s.destination) for s in suggestions], fmt)
        hint = default_suggestion(suggestions)
        if hint and fmt == "text":
            print(hint, file=sys.stderr)
        return 0

    if command == "resolve":
        resolution = session.resolve(args.alias)
        if isinstance(resolution, Found):
            if fmt == "json":
                print(json.dumps({"alias": resolution.alias, "destination": resolution.destination}))
            else:
                print(resolution.destination)
            return 0
        print(resolution.message, file=sys.stderr)
        return 1

    if command == "go":
        resolution = session.go(args.alias, _MODES[args.mode])
        if isinstance(resolution, Found):
            return 0
        print(resolution.message, file=sys.stderr)
        return 1

    if command == "add":
        mapping = session.add_link(args.alias, args.url)
        alias = args.alias.strip().lower()
        print(f'Saved "{alias}" → {mapping.get(alias)}')
        return 0

    if command == "rm":
        deleted = session.delete_links(args.aliases)
        print(f"Deleted {deleted} go link(s)")
        return 0

    if command == "export":
        if args.file:
            write_mapping_file(args.file, session.mapping)
            print(f"Exported {len(session.mapping)} go link(s) to {args.file}")
        else:
            print(session.export_text())
        return 0

    if command == "import":
        mapping = read_mapping_file(args.file)
        session.replace(mapping)
        print(f"Successfully saved {len(mapping)} go link(s)!")
        return 0

    raise AssertionError(f"unhandled command {command!r}")


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    store = JsonFileAliasStore(args.store or settings.get("store_path"))
    navigator = make_navigator(settings) if args.command == "go" else None
    session = GoLinksSession(
        store,
        navigator,
        suggestion_limit=int(settings.get("suggestion_limit", 5)),
    )
    session.load()

    try:
        return _run(args, session)
    except (GoLinksError, StoreError, NavigationError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        if navigator is not None:
            navigator.shutdown()


if __name__ == "__main__":
    raise SystemExit(main())
