"""Thread-safe event bus using Observer pattern with queue-based dispatch."""

import queue
import threading
from collections.abc import Callable
from enum import Enum
from typing import Any, Generic, TypeVar

from appearance_switch.core.interfaces.scheduler import IScheduler
from appearance_switch.utils.logger import get_logger

logger = get_logger(__name__)

E = TypeVar("E", bound=Enum)


class EventBus(Generic[E]):
    """Thread-safe event bus: any thread publishes, the owning thread dispatches."""

    def __init__(self, event_type: type[E], root: IScheduler | None = None, poll_interval_ms: int = 50):
        self._event_type = event_type
        self._listeners: dict[E, list[Callable[..., None]]] = {event: [] for event in event_type}
        self._event_queue: queue.Queue = queue.Queue()
        self._root = root
        self._poll_interval_ms = poll_interval_ms
        self._processing = False
        self._after_id: str | None = None
        self._lock = threading.Lock()

        if self._root:
            self._start_processing()
        else:
            logger.debug(f"[EVENT_BUS] {event_type.__name__}: no root yet, events will queue")

    def set_root(self, root: IScheduler) -> None:
        """Set the owning scheduler and start processing."""
        self._root = root
        self._start_processing()

    def subscribe(self, event: E, callback: Callable[..., None]) -> None:
        with self._lock:
            self._listeners.setdefault(event, []).append(callback)
            logger.debug(
                f"[EVENT_BUS] Subscribed to {event.name}, total listeners: {len(self._listeners[event])}"
            )

    def unsubscribe(self, event: E, callback: Callable[..., None]) -> None:
        with self._lock:
            if callback in self._listeners.get(event, []):
                self._listeners[event].remove(callback)
                logger.debug(f"[EVENT_BUS] Unsubscribed from {event.name}")

    def listener_count(self, event: E) -> int:
        with self._lock:
            return len(self._listeners.get(event, []))

    def publish(self, event: E, **kwargs: Any) -> None:
        """Queue an event for dispatch on the owning thread."""
        self._event_queue.put((event, kwargs))
        logger.debug(f"[EVENT_BUS] Event {event.name} queued, queue size: {self._event_queue.qsize()}")

    def _start_processing(self) -> None:
        if not self._root:
            logger.warning("[EVENT_BUS] Cannot start processing - no scheduler")
            return

        if self._processing:
            return

        self._processing = True
        self._after_id = self._root.after(self._poll_interval_ms, self._process_events)

    def _process_events(self) -> None:
        """Dispatch every queued event, then schedule the next cycle."""
        try:
            self.flush()
        except Exception as e:
            logger.error(f"[EVENT_BUS] Error processing events: {e}", exc_info=True)
        finally:
            if self._processing and self._root:
                self._after_id = self._root.after(self._poll_interval_ms, self._process_events)

    def flush(self) -> int:
        """Dispatch queued events on the calling thread. Returns how many were dispatched."""
        processed = 0
        while True:
            try:
                event, kwargs = self._event_queue.get_nowait()
            except queue.Empty:
                break
            self._dispatch_event(event, kwargs)
            processed += 1
        return processed

    def _dispatch_event(self, event: E, kwargs: dict[str, Any]) -> None:
        with self._lock:
            listeners = list(self._listeners.get(event, []))

        if not listeners:
            logger.debug(f"[EVENT_BUS] No listeners for {event.name}, dropped")
            return

        for i, callback in enumerate(listeners):
            try:
                callback(**kwargs)
            except Exception as e:
                logger.error(
                    f"[EVENT_BUS] Error in {event.name} callback {i + 1}: {e}",
                    exc_info=True,
                )

    def stop_processing(self) -> None:
        """Stop the dispatch cycle. Queued events stay queued."""
        self._processing = False
        if self._after_id and self._root:
            self._root.after_cancel(self._after_id)
        self._after_id = None
        logger.debug("[EVENT_BUS] Stopped event processing")

    def clear(self) -> None:
        """Clear all subscriptions and queued events."""
        with self._lock:
            for listeners in self._listeners.values():
                listeners.clear()

        while True:
            try:
                self._event_queue.get_nowait()
            except queue.Empty:
                break

        logger.debug("[EVENT_BUS] Cleared all listeners and queued events")
