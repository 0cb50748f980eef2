"""Shared fixtures: every test runs against its own config.json."""

import json

import pytest

from Calculator import config_manager


@pytest.fixture
def write_config(tmp_path, monkeypatch):
    """Point config_manager at a temporary config.json and return a writer for it."""
    config_path = tmp_path / "config.json"
    monkeypatch.setattr(config_manager, "config_json", config_path)
    monkeypatch.setattr(config_manager, "ui_strings", tmp_path / "ui_strings.json")

    def write(**settings):
        values = dict(config_manager.DEFAULT_SETTINGS)
        values.update(settings)
        config_path.write_text(json.dumps(values), encoding="utf-8")
        return config_path

    return write


@pytest.fixture(autouse=True)
def default_config(write_config):
    return write_config()
