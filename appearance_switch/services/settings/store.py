"""Flat key/value settings file with write-through persistence."""

import json
import os
import threading
from pathlib import Path
from typing import Any

import yaml

from appearance_switch.utils.logger import get_logger

logger = get_logger(__name__)

_YAML_SUFFIXES = (".yaml", ".yml")


class SettingsStore:
    """Flat key/value store backed by a single JSON or YAML document.

    Values are cached in memory after the initial load. Every :meth:`set`
    rewrites the document through a temporary file and ``os.replace``, so a
    crash mid-write leaves the previous document intact.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()
        self._lock = threading.Lock()
        self._values: dict[str, Any] = self._read_file()

    @property
    def is_yaml(self) -> bool:
        return self.path.suffix in _YAML_SUFFIXES

    def _read_file(self) -> dict[str, Any]:
        if not self.path.exists():
            logger.info(f"[SETTINGS] No settings file at {self.path}, using defaults")
            return {}

        try:
            with open(self.path, encoding="utf-8") as f:
                data = yaml.safe_load(f) if self.is_yaml else json.load(f)
        except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
            logger.warning(f"[SETTINGS] Could not read {self.path}: {e}; using defaults")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"[SETTINGS] {self.path} does not hold a mapping; using defaults")
            return {}
        return data

    def contains(self, key: str) -> bool:
        with self._lock:
            return key in self._values

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._values.get(key, default)

    def snapshot(self) -> dict[str, Any]:
        with self._lock:
            return dict(self._values)

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key`` and persist immediately."""
        with self._lock:
            self._values[key] = value
            self._write_file(dict(self._values))

    def reload(self) -> None:
        """Re-read the document, dropping the in-memory cache."""
        values = self._read_file()
        with self._lock:
            self._values = values

    def _write_file(self, values: dict[str, Any]) -> None:
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                if self.is_yaml:
                    yaml.safe_dump(values, f, default_flow_style=False, sort_keys=False)
                else:
                    json.dump(values, f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
            logger.debug(f"[SETTINGS] Saved {len(values)} keys to {self.path}")
        except OSError as e:
            logger.error(f"[SETTINGS] Failed to save {self.path}: {e}", exc_info=True)
