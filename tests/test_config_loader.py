"""Tests for YAML config loading."""

import pytest

from cowcatalog.config import loader
from cowcatalog.config.loader import default_config, load_config


def test_missing_default_file_returns_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    config = load_config()

    assert config == default_config()
    assert config["storage"]["slot_key"] == "cow_catalog_data"
    assert config["storage"]["backend"] == "sqlite"


def test_explicit_missing_path_raises(tmp_path):
    with pytest.raises(FileNotFoundError, match="Config file not found"):
        load_config(tmp_path / "nope.yaml")


def test_partial_file_is_merged_with_defaults(tmp_path):
    path = tmp_path / "cowcatalog.config.yaml"
    path.write_text("storage:\n  sqlite_path: /data/herd.db\nlogging:\n  level: debug\n", encoding="utf-8")

    config = load_config(path)

    assert config["storage"]["sqlite_path"] == "/data/herd.db"
    assert config["storage"]["slot_key"] == "cow_catalog_data"
    assert config["logging"]["level"] == "DEBUG"


def test_default_file_in_working_directory_is_used(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "cowcatalog.config.yaml").write_text("storage:\n  backend: memory\n", encoding="utf-8")

    assert load_config()["storage"]["backend"] == "memory"


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    assert load_config(path) == default_config()


@pytest.mark.parametrize(
    "content, message",
    [
        ("- just\n- a list\n", "Config must be a dictionary"),
        ("storage: 5\n", "Config section 'storage' must be a dictionary"),
        ("storage:\n  backend: postgres\n", "storage.backend must be one of"),
        ("storage:\n  slot_key: ''\n", "storage.slot_key must be a non-empty string"),
        ("logging:\n  level: chatty\n", "logging.level must be one of"),
    ],
)
def test_invalid_config_raises_value_error(tmp_path, content, message):
    path = tmp_path / "bad.yaml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ValueError, match=message):
        load_config(path)


def test_default_config_is_a_fresh_copy():
    config = default_config()
    config["storage"]["backend"] = "memory"

    assert loader.BASE_CONFIG["storage"]["backend"] == "sqlite"
