"""Interfaces the core depends on."""

from .appearance_port import IAppearancePort
from .event_bus import IEventBus
from .scheduler import IScheduler

__all__ = [
    "IAppearancePort",
    "IEventBus",
    "IScheduler",
]
