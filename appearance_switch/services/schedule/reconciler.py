"""Periodic reconciliation of the system appearance against the schedule."""

import threading
from collections.abc import Callable
from datetime import datetime

from appearance_switch.core.enums import AppearanceEvent
from appearance_switch.core.interfaces import IAppearancePort, IEventBus, IScheduler
from appearance_switch.services.appearance.base import AppearanceError
from appearance_switch.services.appearance.monitor import AppearanceMonitor
from appearance_switch.services.schedule.evaluator import current_minute_of_day, is_dark_in
from appearance_switch.services.settings.config_store import ConfigStore
from appearance_switch.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_INTERVAL_MS = 60_000
DEFAULT_STARTUP_DELAY_MS = 1_000


class ScheduleReconciler:
    """Keeps the observed appearance aligned with the schedule.

    Each tick re-reads the config and the live appearance and requests a
    change only when they disagree. The request is fire-and-forget; a failed
    change shows up as a mismatch on a later tick and is requested again, so
    a wrong mode lasts at most one period.

    Only one correction issued by the loop is in flight at a time. Manual
    changes made between ticks are left alone until the schedule disagrees
    with them on the next tick.

    All work happens on the scheduler's thread.
    """

    def __init__(
        self,
        config_store: ConfigStore,
        appearance: IAppearancePort,
        scheduler: IScheduler,
        event_bus: IEventBus[AppearanceEvent] | None = None,
        clock: Callable[[], datetime] = datetime.now,
        interval_ms: int = DEFAULT_INTERVAL_MS,
        startup_delay_ms: int = DEFAULT_STARTUP_DELAY_MS,
        monitor: AppearanceMonitor | None = None,
    ):
        self._config_store = config_store
        self._appearance = appearance
        self._scheduler = scheduler
        self._event_bus = event_bus
        self._clock = clock
        self._interval_ms = interval_ms
        self._startup_delay_ms = startup_delay_ms
        self._monitor = monitor

        self._lock = threading.Lock()
        self._running = False
        self._startup_id: str | None = None
        self._tick_id: str | None = None
        self._pending_target: bool | None = None

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def correction_in_flight(self) -> bool:
        return self._pending_target is not None

    def start(self) -> None:
        """Start ticking. Calling while already running is a no-op."""
        with self._lock:
            if self._running:
                logger.debug("[RECONCILER] Already running")
                return
            self._running = True
            self._startup_id = self._scheduler.after(self._startup_delay_ms, self._on_startup)
            self._tick_id = self._scheduler.after(self._interval_ms, self._on_tick)

        # surfaces any OS permission prompt before the first real change
        try:
            self._appearance.request_permissions()
        except Exception as e:
            logger.warning(f"[RECONCILER] Permission warm-up failed: {e}")

        logger.info(
            f"[RECONCILER] Started: first check in {self._startup_delay_ms} ms, "
            f"then every {self._interval_ms} ms"
        )

    def stop(self) -> None:
        """Cancel pending ticks. Safe to call when not started."""
        with self._lock:
            if not self._running:
                return
            self._running = False
            for after_id in (self._startup_id, self._tick_id):
                if after_id is not None:
                    self._scheduler.after_cancel(after_id)
            self._startup_id = None
            self._tick_id = None
        logger.info("[RECONCILER] Stopped")

    def _on_startup(self) -> None:
        with self._lock:
            if not self._running:
                return
            self._startup_id = None
        self._safe_reconcile()

    def _on_tick(self) -> None:
        with self._lock:
            if not self._running:
                return
            self._tick_id = self._scheduler.after(self._interval_ms, self._on_tick)
        self._safe_reconcile()

    def _safe_reconcile(self) -> None:
        try:
            self.reconcile()
        except Exception as e:
            logger.error(f"[RECONCILER] Error during reconciliation: {e}", exc_info=True)

    def reconcile(self) -> bool:
        """Run one reconciliation step. Returns True when a change was requested."""
        config = self._config_store.load()
        if not config.enabled:
            logger.debug("[RECONCILER] Schedule disabled, skipping")
            return False

        if self._pending_target is not None:
            logger.debug("[RECONCILER] Correction still in flight, skipping")
            return False

        now_minute = current_minute_of_day(self._clock())
        desired = is_dark_in(config.time_window(), now_minute)

        try:
            actual = self._appearance.read()
        except AppearanceError as e:
            logger.warning(f"[RECONCILER] Could not read appearance, retrying next tick: {e}")
            return False

        if desired == actual:
            logger.debug(f"[RECONCILER] In sync ({'dark' if actual else 'light'})")
            return False

        logger.info(
            f"[RECONCILER] Schedule wants {'dark' if desired else 'light'}, "
            f"system is {'dark' if actual else 'light'}; requesting change"
        )
        self._pending_target = desired
        if self._monitor is not None:
            self._monitor.begin_change()
        try:
            self._appearance.request_change(desired, self._on_change_complete)
        except Exception:
            self._pending_target = None
            if self._monitor is not None:
                self._monitor.end_change()
            raise
        return True

    def _on_change_complete(self) -> None:
        # runs on the port's worker thread
        self._scheduler.after(0, self._finish_change)

    def _finish_change(self) -> None:
        self._pending_target = None
        if self._monitor is not None:
            self._monitor.end_change()
        if self._event_bus is not None:
            self._event_bus.publish(AppearanceEvent.APPEARANCE_CHANGED)
