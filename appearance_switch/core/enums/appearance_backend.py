"""Appearance backend selection enum."""

from enum import StrEnum


class AppearanceBackend(StrEnum):
    """Mechanisms used to read and change the system appearance."""

    AUTO = "auto"
    MACOS = "macos"
    GNOME = "gnome"
