"""Tests for configuration management."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from todoflow.config import Config, ConfigManager, get_config_manager


def test_defaults():
    config = Config()
    assert config.storage.backend == "sqlite"
    assert config.storage.db_path is None
    assert config.schedule.timezone is None
    assert config.output.format == "pretty"


def test_unknown_timezone_is_rejected():
    with pytest.raises(ValidationError):
        Config(schedule={"timezone": "Mars/Olympus"})


def test_set_and_reload(isolated_dirs):
    manager = ConfigManager()
    manager.set("schedule.timezone", "Asia/Tokyo")

    saved = json.loads((isolated_dirs / "config" / "default.json").read_text())
    assert saved["schedule"]["timezone"] == "Asia/Tokyo"
    assert ConfigManager().get("schedule.timezone") == "Asia/Tokyo"


def test_set_unknown_key():
    manager = ConfigManager()
    with pytest.raises(KeyError):
        manager.set("storage.colour", "blue")
    with pytest.raises(KeyError):
        manager.set("nothing.here", 1)


def test_get_section_returns_dict():
    assert ConfigManager().get("storage")["backend"] == "sqlite"
    assert ConfigManager().get("storage.backend.deeper") is None


def test_reset_single_key_and_all():
    manager = ConfigManager()
    manager.set("output.format", "json")
    manager.set("logging.level", "DEBUG")

    manager.reset("output.format")
    assert manager.get("output.format") == "pretty"
    assert manager.get("logging.level") == "DEBUG"

    manager.reset()
    assert manager.get("logging.level") == "INFO"


def test_corrupt_file_falls_back_to_defaults(isolated_dirs):
    config_dir = isolated_dirs / "config"
    config_dir.mkdir(parents=True)
    (config_dir / "default.json").write_text("{not json")

    assert ConfigManager().config == Config()


def test_profiles_use_separate_files(isolated_dirs):
    get_config_manager("work").set("output.format", "yaml")
    assert (isolated_dirs / "config" / "work.json").exists()
    assert get_config_manager("default").get("output.format") == "pretty"
