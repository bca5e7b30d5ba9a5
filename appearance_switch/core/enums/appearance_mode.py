"""Appearance mode enum for the system light/dark setting."""

from enum import StrEnum


class AppearanceMode(StrEnum):
    """Appearance mode options for the system theme."""

    DARK = "dark"
    LIGHT = "light"

    @classmethod
    def from_is_dark(cls, is_dark: bool) -> "AppearanceMode":
        return cls.DARK if is_dark else cls.LIGHT

    @property
    def is_dark(self) -> bool:
        return self is AppearanceMode.DARK
