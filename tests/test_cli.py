"""Tests for the golinks command line."""

import json
from unittest.mock import Mock, patch

import pytest

from golinks.cli import main
from golinks.errors import NavigationError
from golinks.navigation import NavigationMode


@pytest.fixture
def store_path(tmp_path):
    path = tmp_path / "golinks.json"
    path.write_text(
        json.dumps(
            {
                "goLinks": {
                    "google": "https://google.com",
                    "gmail": "https://mail.google.com",
                    "youtube": "https://youtube.com",
                }
            }
        )
    )
    return path


def _run(store_path, *argv):
    return main(["--store", str(store_path), *argv])


def _stored(store_path):
    return json.loads(store_path.read_text())["goLinks"]


class TestCLIQueries:
    """Test suite for read-only commands."""

    def test_list(self, store_path, capsys):
        assert _run(store_path, "list") == 0
        out = capsys.readouterr().out
        assert "google → https://google.com" in out
        assert "youtube → https://youtube.com" in out

    def test_suggest_json(self, store_path, capsys):
        assert _run(store_path, "--format", "json", "suggest", "g") == 0
        items = json.loads(capsys.readouterr().out)
        assert [item["alias"] for item in items] == ["google", "gmail"]

    def test_suggest_prints_inline_hint(self, store_path, capsys):
        _run(store_path, "suggest", "you")
        assert "Autocomplete: youtube → https://youtube.com" in capsys.readouterr().err

    def test_resolve_found(self, store_path, capsys):
        assert _run(store_path, "resolve", "  GMAIL ") == 0
        assert capsys.readouterr().out.strip().splitlines()[-1] == "https://mail.google.com"

    def test_resolve_not_found(self, store_path, capsys):
        assert _run(store_path, "resolve", "bogus") == 1
        assert 'Go link "bogus" not found. Available: google, gmail, youtube' in capsys.readouterr().err


class TestCLIEdits:
    """Test suite for commands that write the store."""

    def test_add_prepends_scheme(self, store_path):
        assert _run(store_path, "add", "Docs", "docs.example.com") == 0
        assert _stored(store_path)["docs"] == "https://docs.example.com"

    def test_add_invalid_url(self, store_path, capsys):
        assert _run(store_path, "add", "bad", "not a url at all") == 1
        assert "Error: Invalid URL" in capsys.readouterr().err
        assert "bad" not in _stored(store_path)

    def test_rm(self, store_path, capsys):
        assert _run(store_path, "rm", "google", "youtube") == 0
        assert list(_stored(store_path)) == ["gmail"]
        assert "Deleted 2 go link(s)" in capsys.readouterr().out

    def test_rm_counts_only_stored_links(self, store_path, capsys):
        assert _run(store_path, "rm", "google", "nope") == 0
        assert "Deleted 1 go link(s)" in capsys.readouterr().out

    def test_add_alias_with_colon(self, store_path, capsys):
        assert _run(store_path, "add", "team:docs", "https://docs.com") == 1
        assert "cannot contain" in capsys.readouterr().err
        assert list(_stored(store_path)) == ["google", "gmail", "youtube"]

    def test_export_to_stdout(self, store_path, capsys):
        assert _run(store_path, "export") == 0
        out = capsys.readouterr().out
        assert "google:https://google.com\ngmail:https://mail.google.com\nyoutube:https://youtube.com" in out

    def test_import_replaces_all(self, store_path, tmp_path):
        source = tmp_path / "links.txt"
        source.write_text("wiki:https://wiki.example.com\n\nhr:https://hr.example.com\n", encoding="utf-8")

        assert _run(store_path, "import", str(source)) == 0
        assert list(_stored(store_path)) == ["wiki", "hr"]

    def test_import_reports_line_errors(self, store_path, tmp_path, capsys):
        source = tmp_path / "links.txt"
        source.write_text("wiki:https://wiki.example.com\nbroken\n", encoding="utf-8")

        assert _run(store_path, "import", str(source)) == 1
        assert "line 2: missing colon separator" in capsys.readouterr().err
        assert "google" in _stored(store_path)

    def test_export_then_import_round_trip(self, store_path, tmp_path):
        export_path = tmp_path / "out.txt"
        before = _stored(store_path)
        _run(store_path, "export", str(export_path))
        _run(store_path, "import", str(export_path))
        assert _stored(store_path) == before


class TestCLIGo:
    """Test suite for the go command."""

    def test_go_navigates(self, store_path):
        navigator = Mock()
        with patch("golinks.cli.make_navigator", return_value=navigator):
            assert _run(store_path, "go", "google", "--mode", "background") == 0
        navigator.navigate.assert_called_once_with("https://google.com", NavigationMode.OPEN_BACKGROUND)
        navigator.shutdown.assert_called_once()

    def test_go_unknown_alias(self, store_path):
        navigator = Mock()
        with patch("golinks.cli.make_navigator", return_value=navigator):
            assert _run(store_path, "go", "nope") == 1
        navigator.navigate.assert_not_called()

    def test_go_navigation_failure(self, store_path, capsys):
        navigator = Mock()
        navigator.navigate.side_effect = NavigationError("NAV_FAILED", "Error: Could not navigate to https://google.com")
        with patch("golinks.cli.make_navigator", return_value=navigator):
            assert _run(store_path, "go", "google") == 1
        assert "Could not navigate" in capsys.readouterr().err
