"""Tests for the JSON settings store."""

import json

from qbraid_chat.settings_store import (
    API_KEY_SETTING,
    DEFAULT_MODEL_SETTING,
    SettingsStore,
)


class TestSettingsStore:
    """Tests for SettingsStore get/update."""

    def test_missing_file_returns_default(self, settings):
        assert settings.get(API_KEY_SETTING) is None
        assert settings.get(API_KEY_SETTING, "fallback") == "fallback"

    def test_update_then_get(self, settings):
        settings.update(API_KEY_SETTING, "abc123")

        assert settings.get(API_KEY_SETTING) == "abc123"

    def test_values_persist_across_instances(self, settings_path):
        SettingsStore(settings_path).update(DEFAULT_MODEL_SETTING, "gpt-4o-mini")

        assert SettingsStore(settings_path).get(DEFAULT_MODEL_SETTING) == "gpt-4o-mini"

    def test_update_keeps_other_keys(self, settings):
        settings.update(API_KEY_SETTING, "abc123")
        settings.update(DEFAULT_MODEL_SETTING, "gpt-4o-mini")

        assert settings.get(API_KEY_SETTING) == "abc123"
        assert settings.get(DEFAULT_MODEL_SETTING) == "gpt-4o-mini"

    def test_none_removes_key(self, settings, settings_path):
        settings.update(API_KEY_SETTING, "abc123")
        settings.update(API_KEY_SETTING, None)

        assert settings.get(API_KEY_SETTING) is None
        assert API_KEY_SETTING not in json.loads(settings_path.read_text())

    def test_creates_parent_directories(self, tmp_path):
        store = SettingsStore(tmp_path / "nested" / "dir" / "settings.json")
        store.update(API_KEY_SETTING, "abc123")

        assert (tmp_path / "nested" / "dir" / "settings.json").exists()

    def test_malformed_json_is_ignored(self, settings, settings_path):
        settings_path.write_text("{not json")

        assert settings.get(API_KEY_SETTING, "fallback") == "fallback"

    def test_non_object_json_is_ignored(self, settings, settings_path):
        settings_path.write_text('["a", "b"]')

        assert settings.get(API_KEY_SETTING) is None

    def test_update_recovers_from_malformed_file(self, settings, settings_path):
        settings_path.write_text("{not json")
        settings.update(API_KEY_SETTING, "abc123")

        assert json.loads(settings_path.read_text()) == {API_KEY_SETTING: "abc123"}
