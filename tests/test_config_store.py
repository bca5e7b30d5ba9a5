"""Tests for schedule configuration persistence."""

import json
from datetime import time

import pytest
from pydantic import ValidationError

from appearance_switch.services.settings import SETTINGS_KEYS, ConfigStore, SettingsStore


class TestDefaults:
    def test_missing_keys_load_documented_defaults(self, config_store):
        config = config_store.load()

        assert config.enabled is False
        assert (config.light_hour, config.light_minute) == (7, 0)
        assert (config.dark_hour, config.dark_minute) == (19, 0)
        assert config.show_window_on_launch is True

    def test_show_window_default_only_applies_when_missing(self, config_store, settings_path):
        config_store.set_show_window_on_launch(False)

        reloaded = ConfigStore(SettingsStore(settings_path)).load()

        assert reloaded.show_window_on_launch is False

    def test_invalid_stored_value_falls_back_to_default(self, settings_path):
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text(
            json.dumps({"lightModeHour": 99, "darkModeHour": "late", "darkModeMinute": 30}),
            encoding="utf-8",
        )

        config = ConfigStore(SettingsStore(settings_path)).load()

        assert config.light_hour == 7
        assert config.dark_hour == 19
        assert config.dark_minute == 30


class TestSave:
    @pytest.mark.parametrize(
        "field,value",
        [
            ("enabled", True),
            ("light_hour", 0),
            ("light_hour", 23),
            ("light_minute", 59),
            ("dark_hour", 0),
            ("dark_minute", 0),
            ("show_window_on_launch", False),
        ],
    )
    def test_round_trip(self, config_store, settings_path, field, value):
        config_store.save(field, value)

        assert getattr(config_store.load(), field) == value
        assert getattr(ConfigStore(SettingsStore(settings_path)).load(), field) == value

    def test_writes_flat_keys(self, config_store, settings_path):
        config_store.set_enabled(True)
        config_store.set_dark_time(time(22, 15))

        data = json.loads(settings_path.read_text(encoding="utf-8"))

        assert data == {"scheduleEnabled": True, "darkModeHour": 22, "darkModeMinute": 15}
        assert set(data) <= set(SETTINGS_KEYS.values())

    @pytest.mark.parametrize(
        "field,value",
        [("light_hour", 24), ("light_minute", 60), ("dark_hour", -1), ("dark_minute", "x")],
    )
    def test_invalid_value_rejected_and_not_written(self, config_store, settings_path, field, value):
        with pytest.raises(ValidationError):
            config_store.save(field, value)

        assert not settings_path.exists()

    def test_unknown_field_rejected(self, config_store):
        with pytest.raises(KeyError):
            config_store.save("sunrise", 6)

    def test_time_helpers_drop_seconds(self, config_store):
        config_store.set_light_time(time(6, 45, 30))

        assert config_store.light_time() == time(6, 45)
        assert config_store.dark_time() == time(19, 0)

    def test_each_field_persisted_independently(self, config_store, settings_path):
        config_store.save("light_hour", 8)
        config_store.save("dark_hour", 20)

        data = json.loads(settings_path.read_text(encoding="utf-8"))

        assert data["lightModeHour"] == 8
        assert data["darkModeHour"] == 20

    def test_save_keeps_other_stored_fields(self, config_store):
        config_store.save("dark_hour", 21)
        config_store.save("enabled", True)

        config = config_store.load()

        assert config.dark_hour == 21
        assert config.enabled is True
        assert config.light_hour == 7


class TestLoadedSnapshot:
    def test_loaded_config_cannot_be_mutated(self, config_store, settings_path):
        config = config_store.load()

        with pytest.raises(ValidationError):
            config.enabled = True
        with pytest.raises(ValidationError):
            config.dark_hour = 21

        reloaded = ConfigStore(SettingsStore(settings_path)).load()
        assert reloaded.enabled is False
        assert reloaded.dark_hour == 19
        assert not settings_path.exists()
