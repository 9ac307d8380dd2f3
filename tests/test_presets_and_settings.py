"""Tests for presets loading and runtime settings."""

import json
import logging
import os

import pytest

from field_header_filter import settings
from field_header_filter.field_filter import FieldFilter
from field_header_filter.handlers import parse_explicit_text
from field_header_filter.presets import find_preset, load_presets


def test_bundled_presets_load_and_parse():
    presets = load_presets()
    assert presets
    for preset in presets:
        # Every bundled preset must be a valid filter configuration.
        field_filter = FieldFilter(
            include=preset["include"],
            exclude=preset["exclude"],
            explicit_fields=parse_explicit_text(preset["explicit"]),
        )
        field_filter.apply(preset["response"])


def test_routes_preset_hides_explicit_points():
    preset = find_preset(load_presets(), "Routes")
    field_filter = FieldFilter(
        include=preset["include"],
        exclude=preset["exclude"],
        explicit_fields=parse_explicit_text(preset["explicit"]),
    )
    leg = field_filter.apply(preset["response"])["routes"][0]["legs"][0]
    assert "points" not in leg
    assert "address" not in leg["end"]
    assert leg["start"]["address"] == "Dam Square"


def test_load_presets_skips_malformed_entries(tmp_path, caplog):
    path = tmp_path / "presets.json"
    path.write_text(json.dumps([
        {"preset": {"name": "ok", "include": "a", "response": {"a": 1}}},
        {"preset": {"include": "a"}},
        "junk",
    ]), encoding="utf-8")

    with caplog.at_level(logging.WARNING):
        presets = load_presets(path)

    assert [p["name"] for p in presets] == ["ok"]
    assert presets[0]["exclude"] == ""
    assert "malformed" in caplog.text


def test_presets_path_override(monkeypatch, tmp_path):
    target = tmp_path / "custom.json"
    monkeypatch.setenv("FIELD_FILTER_PRESETS_PATH", str(target))
    assert settings.presets_path() == target.resolve()


def test_presets_path_default(monkeypatch):
    monkeypatch.delenv("FIELD_FILTER_PRESETS_PATH", raising=False)
    assert settings.presets_path() == settings.PACKAGE_DIR / "presets.json"


def test_find_preset_missing():
    assert find_preset([], "nothing") is None


@pytest.mark.parametrize("raw, expected", [("7860", 7860), ("", None), ("abc", None)])
def test_server_port(monkeypatch, raw, expected):
    monkeypatch.setenv("FIELD_FILTER_SERVER_PORT", raw)
    assert settings.server_port() == expected


def test_server_name(monkeypatch):
    monkeypatch.setenv("FIELD_FILTER_SERVER_NAME", "0.0.0.0")
    assert settings.server_name() == "0.0.0.0"
    monkeypatch.delenv("FIELD_FILTER_SERVER_NAME")
    assert settings.server_name() is None


def test_load_env_once_reads_explicit_file(monkeypatch, tmp_path):
    env_file = tmp_path / "test.env"
    env_file.write_text("FIELD_FILTER_TEST_VALUE=from-dotenv\n", encoding="utf-8")
    monkeypatch.setenv("FIELD_FILTER_ENV_FILE", str(env_file))
    monkeypatch.delenv("FIELD_FILTER_TEST_VALUE", raising=False)
    settings.load_env_once.cache_clear()
    try:
        assert settings.load_env_once() == env_file.resolve()
        assert os.environ["FIELD_FILTER_TEST_VALUE"] == "from-dotenv"
    finally:
        settings.load_env_once.cache_clear()
        monkeypatch.delenv("FIELD_FILTER_TEST_VALUE", raising=False)


def test_configure_logging_installs_one_handler(monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)
    monkeypatch.setenv("FIELD_FILTER_LOG_LEVEL", "debug")

    settings.configure_logging()
    assert len(root.handlers) == 1
    assert root.level == logging.DEBUG

    installed = list(root.handlers)
    monkeypatch.setenv("FIELD_FILTER_LOG_LEVEL", "error")
    settings.configure_logging()
    assert root.handlers == installed
    assert root.level == logging.DEBUG


def test_configure_logging_keeps_existing_handlers(monkeypatch):
    root = logging.getLogger()
    existing = logging.NullHandler()
    monkeypatch.setattr(root, "handlers", [existing])
    monkeypatch.setattr(root, "level", logging.WARNING)

    settings.configure_logging()
    assert root.handlers == [existing]
    assert root.level == logging.WARNING
