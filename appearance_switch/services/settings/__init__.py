from .config_store import SETTINGS_KEYS, ConfigStore
from .store import SettingsStore

__all__ = [
    "SETTINGS_KEYS",
    "ConfigStore",
    "SettingsStore",
]
