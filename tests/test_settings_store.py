from __future__ import annotations

import json

import settings_store


def test_set_setting_writes_json_atomic(isolated_settings):
    settings_store.set_setting("locale", "de_DE")

    data = json.loads(isolated_settings.read_text(encoding="utf-8"))
    assert data["locale"] == "de_DE"
    assert not isolated_settings.with_suffix(".tmp").exists()


def test_set_setting_none_removes_key(isolated_settings):
    isolated_settings.write_text(json.dumps({"a": 1, "b": 2}), encoding="utf-8")

    settings_store.set_setting("a", None)
    data = json.loads(isolated_settings.read_text(encoding="utf-8"))
    assert "a" not in data
    assert data["b"] == 2


def test_get_setting_falls_back_to_defaults():
    assert settings_store.get_setting("loader_timeout") == 30
    assert settings_store.get_setting("calendar_base_path") == "/h5p/editor/"
    assert settings_store.get_setting("unknown", "x") == "x"


def test_broken_settings_file_is_ignored(isolated_settings, caplog):
    isolated_settings.write_text("{not json", encoding="utf-8")

    assert settings_store.load_settings() == {}
    assert settings_store.get_setting("locale") is None
    assert "Ignoring unreadable settings file" in caplog.text
