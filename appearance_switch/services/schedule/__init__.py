"""Schedule evaluation, reconciliation and manual override."""

from .evaluator import (
    current_minute_of_day,
    desired_is_dark,
    desired_mode,
    is_dark_in,
    minute_of_day,
    next_transition,
    next_transition_in,
)
from .override import ManualOverride
from .reconciler import ScheduleReconciler

__all__ = [
    "ManualOverride",
    "ScheduleReconciler",
    "current_minute_of_day",
    "desired_is_dark",
    "desired_mode",
    "is_dark_in",
    "minute_of_day",
    "next_transition",
    "next_transition_in",
]
