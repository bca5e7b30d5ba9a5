"""Core enums."""

from .appearance_backend import AppearanceBackend
from .appearance_event import AppearanceEvent
from .appearance_mode import AppearanceMode

__all__ = [
    "AppearanceBackend",
    "AppearanceEvent",
    "AppearanceMode",
]
