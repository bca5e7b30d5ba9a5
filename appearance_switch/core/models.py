"""Data models for the appearance schedule."""

from datetime import time

from pydantic import BaseModel, ConfigDict, Field

from appearance_switch.core.enums import AppearanceMode

MINUTES_PER_DAY = 24 * 60


class TimeWindow(BaseModel):
    """Light and dark switch points as minutes since midnight.

    Derived from :class:`ScheduleConfig` on every evaluation, never stored.
    """

    model_config = ConfigDict(frozen=True)

    light_minute: int = Field(ge=0, lt=MINUTES_PER_DAY, description="Minute of day light mode starts")
    dark_minute: int = Field(ge=0, lt=MINUTES_PER_DAY, description="Minute of day dark mode starts")

    @property
    def is_inverted(self) -> bool:
        """True when dark starts at or before light, so the dark interval spans midnight."""
        return self.light_minute >= self.dark_minute


class ScheduleConfig(BaseModel):
    """Persisted schedule configuration.

    Immutable snapshot; changes go through ConfigStore.save so each one is persisted.
    """

    model_config = ConfigDict(frozen=True)

    enabled: bool = Field(default=False, description="Whether the schedule drives the appearance")
    light_hour: int = Field(default=7, ge=0, le=23, description="Hour light mode starts")
    light_minute: int = Field(default=0, ge=0, le=59, description="Minute light mode starts")
    dark_hour: int = Field(default=19, ge=0, le=23, description="Hour dark mode starts")
    dark_minute: int = Field(default=0, ge=0, le=59, description="Minute dark mode starts")
    show_window_on_launch: bool = Field(
        default=True, description="Show the settings window when the application starts"
    )

    @property
    def light_minute_of_day(self) -> int:
        return self.light_hour * 60 + self.light_minute

    @property
    def dark_minute_of_day(self) -> int:
        return self.dark_hour * 60 + self.dark_minute

    @property
    def light_time(self) -> time:
        return time(self.light_hour, self.light_minute)

    @property
    def dark_time(self) -> time:
        return time(self.dark_hour, self.dark_minute)

    def time_window(self) -> TimeWindow:
        return TimeWindow(light_minute=self.light_minute_of_day, dark_minute=self.dark_minute_of_day)


class AppearanceStatus(BaseModel):
    """Snapshot of the schedule and the observed appearance, for presentation layers."""

    is_dark: bool | None = Field(default=None, description="Observed appearance, None when unreadable")
    schedule_enabled: bool = Field(description="Whether the schedule is active")
    light_time: time = Field(description="Time light mode starts")
    dark_time: time = Field(description="Time dark mode starts")
    desired_mode: AppearanceMode = Field(description="Mode the schedule asks for right now")
    next_transition_minute: int | None = Field(
        default=None, description="Minute of day of the next switch, None when the points are equal"
    )
    next_transition_mode: AppearanceMode | None = Field(
        default=None, description="Mode entered at the next switch"
    )

    @property
    def in_sync(self) -> bool:
        return self.is_dark is not None and self.is_dark == self.desired_mode.is_dark
