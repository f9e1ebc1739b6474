"""
Tests for configuration loading.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from pettime.config import AppConfig, ReminderConfig


def test_defaults():
    config = AppConfig()

    assert config.api_base_url == "http://localhost:3000/api"
    assert config.timezone == "UTC"
    assert config.role == "user"
    assert config.reminders.window_minutes == 1
    assert config.reminders.poll_interval_seconds == 60


def test_load_from_yaml(tmp_path: Path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        "api_base_url: https://pets.example.com/api/\n"
        "timezone: Asia/Manila\n"
        "role: shop_owner\n"
        "reminders:\n"
        "  window_minutes: 2\n"
        "  store_path: " + str(tmp_path / "pending.json") + "\n",
        encoding="utf-8",
    )

    config = AppConfig.load_from_yaml(config_file)

    assert config.api_base_url == "https://pets.example.com/api"
    assert config.timezone == "Asia/Manila"
    assert config.role == "shop_owner"
    assert config.reminders.window_minutes == 2
    assert config.reminders.get_store_path() == tmp_path / "pending.json"


def test_missing_file_raises(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        AppConfig.load_from_yaml(tmp_path / "missing.yaml")


def test_load_or_default_without_file(tmp_path: Path, monkeypatch):
    """No config file in the default locations means defaults."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("pettime.config.get_default_config_path", lambda: tmp_path / "config.yaml")

    assert AppConfig.load_or_default() == AppConfig()


def test_invalid_yaml_raises_value_error(tmp_path: Path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("timezone: [unclosed\n", encoding="utf-8")

    with pytest.raises(ValueError, match="Invalid YAML"):
        AppConfig.load_from_yaml(config_file)


def test_non_mapping_root(tmp_path: Path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ValueError, match="mapping"):
        AppConfig.load_from_yaml(config_file)


@pytest.mark.parametrize(
    "data",
    [
        {"timezone": "Mars/Olympus_Mons"},
        {"role": "superuser"},
        {"api_base_url": "localhost:3000"},
    ],
)
def test_invalid_values(data):
    with pytest.raises(ValidationError):
        AppConfig(**data)


def test_reminder_validation():
    with pytest.raises(ValidationError):
        ReminderConfig(poll_interval_seconds=0)
    with pytest.raises(ValidationError):
        ReminderConfig(window_minutes=-1)
