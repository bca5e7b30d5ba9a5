"""System appearance backends."""

from .base import AppearanceError, CommandAppearancePort
from .factory import create_appearance_port, detect_backend
from .gnome import GnomeAppearancePort
from .macos import MacOSAppearancePort
from .monitor import AppearanceMonitor

__all__ = [
    "AppearanceError",
    "AppearanceMonitor",
    "CommandAppearancePort",
    "GnomeAppearancePort",
    "MacOSAppearancePort",
    "create_appearance_port",
    "detect_backend",
]
