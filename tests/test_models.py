"""Tests for core enums, models and logging setup."""

import logging
from datetime import time

import pytest
from pydantic import ValidationError

from appearance_switch.core.enums import AppearanceBackend, AppearanceEvent, AppearanceMode
from appearance_switch.core.models import AppearanceStatus, ScheduleConfig, TimeWindow
from appearance_switch.utils import configure_logging


class TestEnums:
    def test_appearance_mode_from_is_dark(self):
        assert AppearanceMode.from_is_dark(True) is AppearanceMode.DARK
        assert AppearanceMode.from_is_dark(False) is AppearanceMode.LIGHT
        assert AppearanceMode.DARK.is_dark
        assert not AppearanceMode.LIGHT.is_dark

    def test_string_values(self):
        assert AppearanceMode("dark") is AppearanceMode.DARK
        assert AppearanceBackend("gnome") is AppearanceBackend.GNOME
        assert str(AppearanceBackend.MACOS) == "macos"

    def test_single_event(self):
        assert list(AppearanceEvent) == [AppearanceEvent.APPEARANCE_CHANGED]


class TestScheduleConfig:
    def test_defaults(self):
        config = ScheduleConfig()

        assert config.enabled is False
        assert config.light_time == time(7, 0)
        assert config.dark_time == time(19, 0)
        assert config.show_window_on_launch is True

    def test_minute_of_day(self):
        config = ScheduleConfig(light_hour=6, light_minute=30, dark_hour=21, dark_minute=15)

        assert config.light_minute_of_day == 390
        assert config.dark_minute_of_day == 1275
        assert config.time_window() == TimeWindow(light_minute=390, dark_minute=1275)

    @pytest.mark.parametrize("field,value", [("light_hour", 24), ("dark_minute", 60), ("dark_hour", -1)])
    def test_out_of_range_rejected(self, field, value):
        with pytest.raises(ValidationError):
            ScheduleConfig(**{field: value})

    def test_frozen(self):
        config = ScheduleConfig()

        with pytest.raises(ValidationError):
            config.light_minute = 30
        assert config.light_minute == 0


class TestTimeWindow:
    def test_normal_and_inverted(self):
        assert not TimeWindow(light_minute=420, dark_minute=1140).is_inverted
        assert TimeWindow(light_minute=360, dark_minute=1320).is_inverted is False
        assert TimeWindow(light_minute=1320, dark_minute=360).is_inverted
        assert TimeWindow(light_minute=600, dark_minute=600).is_inverted

    def test_bounds(self):
        with pytest.raises(ValidationError):
            TimeWindow(light_minute=1440, dark_minute=0)


class TestAppearanceStatus:
    def _status(self, is_dark, mode):
        return AppearanceStatus(
            is_dark=is_dark,
            schedule_enabled=True,
            light_time=time(7, 0),
            dark_time=time(19, 0),
            desired_mode=mode,
        )

    def test_in_sync(self):
        assert self._status(True, AppearanceMode.DARK).in_sync
        assert not self._status(False, AppearanceMode.DARK).in_sync
        assert not self._status(None, AppearanceMode.LIGHT).in_sync


class TestConfigureLogging:
    def test_sets_package_level(self):
        configure_logging("debug")
        assert logging.getLogger("appearance_switch").level == logging.DEBUG

        configure_logging(logging.WARNING)
        assert logging.getLogger("appearance_switch").level == logging.WARNING

    def test_unknown_level(self):
        with pytest.raises(ValueError):
            configure_logging("chatty")
