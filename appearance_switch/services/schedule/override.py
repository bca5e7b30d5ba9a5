"""Manual appearance changes outside the schedule."""

from appearance_switch.core.enums import AppearanceEvent, AppearanceMode
from appearance_switch.core.interfaces import IAppearancePort, IEventBus, IScheduler
from appearance_switch.services.appearance.base import AppearanceError
from appearance_switch.services.appearance.monitor import AppearanceMonitor
from appearance_switch.utils.logger import get_logger

logger = get_logger(__name__)


class ManualOverride:
    """Toggle or set the appearance on user request.

    Calls may come from any thread; the work is marshalled onto the
    scheduler's thread. Completion is reported through ``APPEARANCE_CHANGED``
    on the event bus, not a return value. While the schedule is enabled the
    next reconciliation tick may switch the mode back.
    """

    def __init__(
        self,
        appearance: IAppearancePort,
        scheduler: IScheduler,
        event_bus: IEventBus[AppearanceEvent] | None = None,
        monitor: AppearanceMonitor | None = None,
    ):
        self._appearance = appearance
        self._scheduler = scheduler
        self._event_bus = event_bus
        self._monitor = monitor

    def toggle(self) -> None:
        self._scheduler.after(0, self._toggle)

    def set_dark(self, target: bool) -> None:
        self._scheduler.after(0, self._apply, target)

    def set_mode(self, mode: AppearanceMode) -> None:
        self.set_dark(mode.is_dark)

    def _toggle(self) -> None:
        try:
            current = self._appearance.read()
        except AppearanceError as e:
            logger.warning(f"[OVERRIDE] Cannot toggle, appearance unreadable: {e}")
            return
        self._request(not current)

    def _apply(self, target: bool) -> None:
        try:
            if self._appearance.read() == target:
                logger.debug(f"[OVERRIDE] Already {'dark' if target else 'light'}, nothing to do")
                return
        except AppearanceError as e:
            logger.debug(f"[OVERRIDE] Could not read appearance, requesting anyway: {e}")
        self._request(target)

    def _request(self, target: bool) -> None:
        logger.info(f"[OVERRIDE] Switching to {'dark' if target else 'light'} mode")
        if self._monitor is not None:
            self._monitor.begin_change()
        try:
            self._appearance.request_change(target, self._on_change_complete)
        except Exception:
            if self._monitor is not None:
                self._monitor.end_change()
            raise

    def _on_change_complete(self) -> None:
        self._scheduler.after(0, self._notify)

    def _notify(self) -> None:
        if self._monitor is not None:
            self._monitor.end_change()
        if self._event_bus is not None:
            self._event_bus.publish(AppearanceEvent.APPEARANCE_CHANGED)
