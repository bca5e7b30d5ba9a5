"""Polls the system appearance and reports changes made outside the application."""

from appearance_switch.core.enums import AppearanceEvent
from appearance_switch.core.interfaces import IAppearancePort, IEventBus, IScheduler
from appearance_switch.services.appearance.base import AppearanceError
from appearance_switch.utils.logger import get_logger

logger = get_logger(__name__)


class AppearanceMonitor:
    """Publishes ``APPEARANCE_CHANGED`` when the observed appearance flips.

    Catches changes made through the OS settings or by another process, which
    the change-request completion path never sees. Changes the application
    requests itself are bracketed by :meth:`begin_change` and :meth:`end_change`
    and are reported by their requester, not by the monitor.
    """

    def __init__(
        self,
        appearance: IAppearancePort,
        scheduler: IScheduler,
        event_bus: IEventBus[AppearanceEvent],
        interval_ms: int = 5000,
    ):
        self._appearance = appearance
        self._scheduler = scheduler
        self._event_bus = event_bus
        self._interval_ms = interval_ms
        self._after_id: str | None = None
        self._running = False
        self._last_seen: bool | None = None
        self._own_changes = 0

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._last_seen = None
        self._after_id = self._scheduler.after(0, self._on_poll)
        logger.info(f"[MONITOR] Started, polling every {self._interval_ms} ms")

    def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        if self._after_id is not None:
            self._scheduler.after_cancel(self._after_id)
            self._after_id = None
        logger.info("[MONITOR] Stopped")

    def _on_poll(self) -> None:
        if not self._running:
            return
        self._after_id = self._scheduler.after(self._interval_ms, self._on_poll)
        self.poll()

    def begin_change(self) -> None:
        """Mark a change requested by the application as in flight."""
        self._own_changes += 1

    def end_change(self) -> None:
        """Close a change opened with :meth:`begin_change` and take the current appearance as baseline."""
        self._own_changes = max(0, self._own_changes - 1)
        try:
            self._last_seen = self._appearance.read()
        except AppearanceError as e:
            logger.debug(f"[MONITOR] Could not read appearance after change: {e}")
            self._last_seen = None

    def poll(self) -> bool:
        """Read the appearance once. Returns True when a change was published."""
        try:
            current = self._appearance.read()
        except AppearanceError as e:
            logger.debug(f"[MONITOR] Could not read appearance: {e}")
            return False

        previous, self._last_seen = self._last_seen, current
        if previous is None or previous == current:
            return False
        if self._own_changes:
            logger.debug("[MONITOR] Change requested by the application in flight, not reporting")
            return False

        logger.info(f"[MONITOR] Appearance changed to {'dark' if current else 'light'}")
        self._event_bus.publish(AppearanceEvent.APPEARANCE_CHANGED)
        return True
