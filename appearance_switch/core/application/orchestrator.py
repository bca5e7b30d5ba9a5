"""Application Orchestrator - composition root for the scheduling engine."""

from collections.abc import Callable
from datetime import datetime

from appearance_switch.core.config import AppConfig, get_config
from appearance_switch.core.enums import AppearanceEvent, AppearanceMode
from appearance_switch.core.interfaces import IAppearancePort, IScheduler
from appearance_switch.core.models import AppearanceStatus
from appearance_switch.services.appearance import AppearanceError, AppearanceMonitor, create_appearance_port
from appearance_switch.services.events import EventBus
from appearance_switch.services.schedule import (
    ManualOverride,
    ScheduleReconciler,
    current_minute_of_day,
    is_dark_in,
    next_transition_in,
)
from appearance_switch.services.settings import ConfigStore, SettingsStore
from appearance_switch.utils.logger import get_logger

logger = get_logger(__name__)


class ApplicationOrchestrator:
    """Builds and owns the single instance of every core component.

    Responsibilities:
    1. Create the settings store, config store and appearance port
    2. Create the event bus, reconciler, manual override and monitor on one scheduler
    3. Tie their lifecycle to :meth:`start` / :meth:`stop`

    Presentation layers subscribe to ``event_bus`` and call ``override``.
    """

    def __init__(
        self,
        scheduler: IScheduler,
        config: AppConfig | None = None,
        appearance: IAppearancePort | None = None,
        settings_store: SettingsStore | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        if config is None:
            config = get_config()
        self.config: AppConfig = config
        self.scheduler = scheduler
        self._clock = clock

        self.settings_store = settings_store or SettingsStore(config.storage.settings_path)
        self.config_store = ConfigStore(self.settings_store)
        self.appearance: IAppearancePort = appearance or create_appearance_port(
            config.appearance.backend,
            command_timeout=config.appearance.command_timeout_seconds,
            read_timeout=config.appearance.read_timeout_seconds,
        )

        self.event_bus: EventBus[AppearanceEvent] = EventBus(
            AppearanceEvent, scheduler, poll_interval_ms=config.scheduler.event_poll_interval_ms
        )
        self.monitor: AppearanceMonitor | None = None
        if config.scheduler.monitor_enabled:
            self.monitor = AppearanceMonitor(
                self.appearance,
                scheduler,
                self.event_bus,
                interval_ms=config.scheduler.monitor_interval_ms,
            )
        self.reconciler = ScheduleReconciler(
            self.config_store,
            self.appearance,
            scheduler,
            event_bus=self.event_bus,
            clock=clock,
            interval_ms=config.scheduler.tick_interval_ms,
            startup_delay_ms=config.scheduler.startup_delay_ms,
            monitor=self.monitor,
        )
        self.override = ManualOverride(
            self.appearance, scheduler, event_bus=self.event_bus, monitor=self.monitor
        )

        logger.info(f"[ORCHESTRATOR] Initialized, settings at {self.settings_store.path}")

    def start(self) -> None:
        self.reconciler.start()
        if self.monitor is not None:
            self.monitor.start()
        logger.info("[ORCHESTRATOR] Started")

    def stop(self) -> None:
        self.reconciler.stop()
        if self.monitor is not None:
            self.monitor.stop()
        self.event_bus.stop_processing()
        logger.info("[ORCHESTRATOR] Stopped")

    def should_show_window_on_launch(self) -> bool:
        return self.config_store.load().show_window_on_launch

    def get_status(self) -> AppearanceStatus:
        """Snapshot of the schedule and the observed appearance."""
        schedule = self.config_store.load()
        now_minute = current_minute_of_day(self._clock())
        window = schedule.time_window()

        try:
            is_dark = self.appearance.read()
        except AppearanceError as e:
            logger.warning(f"[ORCHESTRATOR] Could not read appearance: {e}")
            is_dark = None

        upcoming = next_transition_in(window, now_minute)
        return AppearanceStatus(
            is_dark=is_dark,
            schedule_enabled=schedule.enabled,
            light_time=schedule.light_time,
            dark_time=schedule.dark_time,
            desired_mode=AppearanceMode.from_is_dark(is_dark_in(window, now_minute)),
            next_transition_minute=upcoming[0] if upcoming else None,
            next_transition_mode=upcoming[1] if upcoming else None,
        )
