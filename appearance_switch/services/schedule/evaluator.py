"""Time-of-day evaluation of the light/dark schedule.

All functions are pure and work at minute resolution:

* Normal window (light point earlier than dark point, e.g. 07:00 / 19:00):
  dark when ``now < light`` or ``now >= dark``.
* Inverted window (dark point earlier than or equal to light point, e.g.
  22:00 / 06:00): dark when ``dark <= now < light``.

Equal points fall in the inverted branch and give an empty dark interval,
so the schedule asks for light all day.

Each boundary minute belongs to the mode it switches into. Out-of-range
minutes raise ValueError (pydantic.ValidationError for the window points).
"""

from datetime import datetime

from appearance_switch.core.enums import AppearanceMode
from appearance_switch.core.models import MINUTES_PER_DAY, TimeWindow


def _check_minute(name: str, value: int) -> None:
    if not 0 <= value < MINUTES_PER_DAY:
        raise ValueError(f"{name} must be within [0, {MINUTES_PER_DAY - 1}], got {value}")


def minute_of_day(hour: int, minute: int) -> int:
    if not 0 <= hour <= 23:
        raise ValueError(f"hour must be within [0, 23], got {hour}")
    if not 0 <= minute <= 59:
        raise ValueError(f"minute must be within [0, 59], got {minute}")
    return hour * 60 + minute


def current_minute_of_day(now: datetime | None = None) -> int:
    """Minute of day of ``now`` (local time by default). Seconds are ignored."""
    if now is None:
        now = datetime.now()
    return minute_of_day(now.hour, now.minute)


def is_dark_in(window: TimeWindow, now_minute: int) -> bool:
    """Whether ``window`` asks for dark mode at ``now_minute``."""
    _check_minute("now_minute", now_minute)
    if window.is_inverted:
        return window.dark_minute <= now_minute < window.light_minute
    return now_minute < window.light_minute or now_minute >= window.dark_minute


def desired_is_dark(now_minute: int, light_minute: int, dark_minute: int) -> bool:
    return is_dark_in(TimeWindow(light_minute=light_minute, dark_minute=dark_minute), now_minute)


def desired_mode(now_minute: int, light_minute: int, dark_minute: int) -> AppearanceMode:
    return AppearanceMode.from_is_dark(desired_is_dark(now_minute, light_minute, dark_minute))


def next_transition_in(window: TimeWindow, now_minute: int) -> tuple[int, AppearanceMode] | None:
    """Return the next boundary of ``window`` strictly after ``now_minute`` and the mode it enters.

    Returns None when both points are equal, since the desired mode never changes.
    """
    _check_minute("now_minute", now_minute)
    if window.light_minute == window.dark_minute:
        return None

    def minutes_until(boundary: int) -> int:
        # a boundary at the current minute has already been crossed
        return (boundary - now_minute - 1) % MINUTES_PER_DAY + 1

    if minutes_until(window.light_minute) < minutes_until(window.dark_minute):
        return window.light_minute, AppearanceMode.LIGHT
    return window.dark_minute, AppearanceMode.DARK


def next_transition(
    now_minute: int, light_minute: int, dark_minute: int
) -> tuple[int, AppearanceMode] | None:
    return next_transition_in(TimeWindow(light_minute=light_minute, dark_minute=dark_minute), now_minute)
