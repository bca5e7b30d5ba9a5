"""Schedule configuration persisted field by field in the settings store."""

from datetime import time
from typing import Any

from pydantic import ValidationError

from appearance_switch.core.models import ScheduleConfig
from appearance_switch.services.settings.store import SettingsStore
from appearance_switch.utils.logger import get_logger

logger = get_logger(__name__)

# ScheduleConfig field -> persisted key
SETTINGS_KEYS: dict[str, str] = {
    "enabled": "scheduleEnabled",
    "light_hour": "lightModeHour",
    "light_minute": "lightModeMinute",
    "dark_hour": "darkModeHour",
    "dark_minute": "darkModeMinute",
    "show_window_on_launch": "showWindowOnLaunch",
}


class ConfigStore:
    """Loads :class:`ScheduleConfig` with defaults and writes each field through on change."""

    def __init__(self, store: SettingsStore):
        self._store = store

    @property
    def store(self) -> SettingsStore:
        return self._store

    def load(self) -> ScheduleConfig:
        """Build the config from stored values.

        Missing keys and stored values that fail validation fall back to the
        field default.
        """
        values = {
            field: self._store.get(key)
            for field, key in SETTINGS_KEYS.items()
            if self._store.contains(key)
        }

        while True:
            try:
                return ScheduleConfig.model_validate(values)
            except ValidationError as e:
                invalid = {err["loc"][0] for err in e.errors() if err["loc"] and err["loc"][0] in values}
                if not invalid:
                    raise
                for field in invalid:
                    logger.warning(
                        f"[CONFIG_STORE] Ignoring invalid stored {SETTINGS_KEYS[field]}={values[field]!r}, "
                        "using default"
                    )
                    values.pop(field)

    def save(self, field: str, value: Any) -> None:
        """Validate ``value`` for ``field`` and persist it immediately.

        Raises:
            KeyError: ``field`` is not a schedule setting.
            pydantic.ValidationError: ``value`` is not valid for ``field``.
        """
        if field not in SETTINGS_KEYS:
            raise KeyError(f"Unknown schedule setting: {field}")

        config = self.load()
        updated = ScheduleConfig.model_validate({**config.model_dump(), field: value})
        validated = getattr(updated, field)

        self._store.set(SETTINGS_KEYS[field], validated)
        logger.info(f"[CONFIG_STORE] {SETTINGS_KEYS[field]} = {validated!r}")

    def set_enabled(self, enabled: bool) -> None:
        self.save("enabled", enabled)

    def set_show_window_on_launch(self, show: bool) -> None:
        self.save("show_window_on_launch", show)

    def set_light_time(self, value: time) -> None:
        """Set the light switch point from a time of day. Seconds are dropped."""
        self.save("light_hour", value.hour)
        self.save("light_minute", value.minute)

    def set_dark_time(self, value: time) -> None:
        """Set the dark switch point from a time of day. Seconds are dropped."""
        self.save("dark_hour", value.hour)
        self.save("dark_minute", value.minute)

    def light_time(self) -> time:
        return self.load().light_time

    def dark_time(self) -> time:
        return self.load().dark_time
