"""Tests for logging, settings and file helpers."""

import json

import pytest

from utils import settings_store
from utils.file_utils import load_json, save_json, write_text_atomic
from utils.log_utils import log, tprint


@pytest.fixture
def settings_file(tmp_path, monkeypatch):
    path = tmp_path / "settings.json"
    monkeypatch.setenv("GOLINKS_SETTINGS", str(path))
    yield path
    settings_store._settings_cache.clear()


class TestLogUtils:
    """Test suite for tprint/log tag normalization."""

    def test_system_and_level(self, capsys):
        tprint("[INFO][STORE] saved")
        assert capsys.readouterr().out.rstrip().endswith("[STORE][INFO] saved")

    def test_untagged_message_gets_default_system(self, capsys):
        tprint("hello")
        assert capsys.readouterr().out.rstrip().endswith("[GOLINKS] hello")

    def test_errors_go_to_stderr(self, capsys):
        log("NAV", "could not open", "ERROR")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "[NAV][ERROR] could not open" in captured.err


class TestSettingsStore:
    """Test suite for cached settings."""

    def test_defaults_when_file_missing(self, settings_file):
        settings = settings_store.refresh_settings()
        assert settings["suggestion_limit"] == 5
        assert settings["navigator"] == "system"

    def test_file_overrides_defaults(self, settings_file):
        settings_file.write_text(json.dumps({"suggestion_limit": 8, "log_level": "deep"}))
        settings_store.refresh_settings()

        assert settings_store.get_settings()["suggestion_limit"] == 8
        assert settings_store.is_deep_logging() is True

    def test_deep_log_silent_by_default(self, settings_file, capsys):
        settings_store.refresh_settings()
        settings_store.deep_log("[DEEP][STORE] hidden")
        assert capsys.readouterr().out == ""

    def test_corrupt_file_falls_back(self, settings_file):
        settings_file.write_text("{oops")
        assert settings_store.refresh_settings()["log_level"] == "INFO"

    def test_get_settings_returns_copy(self, settings_file):
        settings_store.refresh_settings()
        settings_store.get_settings()["suggestion_limit"] = 99
        assert settings_store.get_settings()["suggestion_limit"] == 5


class TestFileUtils:
    """Test suite for JSON/text helpers."""

    def test_load_missing_returns_empty(self, tmp_path):
        assert load_json(tmp_path / "missing.json") == {}

    def test_load_blank_returns_empty(self, tmp_path):
        path = tmp_path / "blank.json"
        path.write_text(" \n", encoding="utf-8")
        assert load_json(path) == {}

    def test_load_malformed_raises(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{oops", encoding="utf-8")
        with pytest.raises(ValueError):
            load_json(path)

    def test_save_creates_parents(self, tmp_path):
        path = tmp_path / "a" / "b" / "data.json"
        save_json(path, {"k": "v"})
        assert load_json(path) == {"k": "v"}

    def test_atomic_write_leaves_no_temp_files(self, tmp_path):
        path = tmp_path / "out.txt"
        write_text_atomic(path, "one")
        write_text_atomic(path, "two")
        assert path.read_text(encoding="utf-8") == "two"
        assert [p.name for p in tmp_path.iterdir()] == ["out.txt"]
