from __future__ import annotations

"""
Unit tests for Settings loading, validation and config factories.
"""

import json

import pytest

from prettylogger.domain import constants as const
from prettylogger.domain.config import (
    build_disk_config,
    build_formatter_config,
    get_default_settings,
    load_settings,
    validate_settings,
)
from prettylogger.domain.models import DiskConfig, LogRecord, Priority, priority_label


def test_default_settings_shape():
    settings = get_default_settings()

    assert settings["formatter"] == {
        "method_count": 2,
        "method_offset": 0,
        "show_thread_info": True,
        "tag": "PRETTY_LOGGER",
    }
    assert settings["disk"]["max_file_size"] == const.DEFAULT_MAX_FILE_SIZE
    assert settings["disk"]["file_prefix"] == "logs"
    assert settings["disk"]["folder"].endswith(const.DEFAULT_LOG_FOLDER_NAME)


def test_load_settings_without_path_returns_defaults():
    assert load_settings(None) == get_default_settings()


def test_load_settings_missing_file(tmp_path, caplog):
    settings = load_settings(str(tmp_path / "absent.json"))

    assert settings == get_default_settings()
    assert any("not found" in r.getMessage() for r in caplog.records)


def test_load_settings_corrupt_file(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{broken", encoding="utf-8")

    assert load_settings(str(path)) == get_default_settings()


def test_load_settings_non_dict_file(tmp_path):
    path = tmp_path / "list.json"
    path.write_text("[1, 2]", encoding="utf-8")

    assert load_settings(str(path)) == get_default_settings()


def test_load_settings_merges_partial_sections(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(
        json.dumps({"formatter": {"method_count": 5}, "disk": {"folder": str(tmp_path)}}),
        encoding="utf-8",
    )

    settings = load_settings(str(path))

    assert settings["formatter"]["method_count"] == 5
    assert settings["formatter"]["tag"] == "PRETTY_LOGGER"
    assert settings["disk"]["folder"] == str(tmp_path)
    assert settings["disk"]["file_prefix"] == "logs"


def test_validate_coerces_and_falls_back():
    raw = get_default_settings()
    raw["formatter"].update({"method_count": "3", "method_offset": -1, "show_thread_info": "no"})
    raw["disk"].update({"max_file_size": True, "file_prefix": "  "})

    clean, warnings = validate_settings(raw)

    assert clean["formatter"]["method_count"] == 3
    assert clean["formatter"]["method_offset"] == 0
    assert clean["formatter"]["show_thread_info"] is False
    assert clean["disk"]["max_file_size"] == const.DEFAULT_MAX_FILE_SIZE
    assert clean["disk"]["file_prefix"] == "logs"
    assert len(warnings) == 2


def test_validate_allows_null_tag():
    raw = get_default_settings()
    raw["formatter"]["tag"] = None

    clean, warnings = validate_settings(raw)

    assert clean["formatter"]["tag"] is None
    assert warnings == []


def test_validate_rejects_non_string_tag():
    raw = get_default_settings()
    raw["formatter"]["tag"] = 12

    clean, warnings = validate_settings(raw)

    assert clean["formatter"]["tag"] == "PRETTY_LOGGER"
    assert len(warnings) == 1


def test_validate_strict_raises():
    raw = get_default_settings()
    raw["disk"]["max_file_size"] = 0

    with pytest.raises(ValueError):
        validate_settings(raw, strict=True)

    with pytest.raises(TypeError):
        validate_settings("not a dict", strict=True)


def test_validate_non_dict_returns_defaults():
    clean, warnings = validate_settings(["x"])

    assert clean == get_default_settings()
    assert len(warnings) == 1


def test_build_configs(recording_sink, tmp_path):
    settings = get_default_settings()
    settings["formatter"]["method_count"] = 0
    settings["disk"]["folder"] = str(tmp_path)

    formatter_config = build_formatter_config(settings, recording_sink)
    disk_config = build_disk_config(settings)

    assert formatter_config.method_count == 0
    assert formatter_config.sink is recording_sink
    assert disk_config == DiskConfig(folder=str(tmp_path))


@pytest.mark.parametrize("kwargs", [{"max_file_size": 0}, {"file_prefix": ""}])
def test_disk_config_rejects_invalid_values(kwargs, tmp_path):
    with pytest.raises(ValueError):
        DiskConfig(folder=str(tmp_path), **kwargs)


def test_priority_labels_and_record_immutability():
    assert priority_label(Priority.ASSERT) == "ASSERT"
    assert priority_label(1) == "UNKNOWN"

    entry = LogRecord(Priority.INFO, None, "x")
    with pytest.raises(AttributeError):
        entry.message = "y"  # type: ignore[misc]
