"""Appearance event enum for change notifications."""

from enum import Enum, auto


class AppearanceEvent(Enum):
    """Appearance change event types.

    Carries no payload: subscribers re-query the appearance port themselves.
    """

    APPEARANCE_CHANGED = auto()
