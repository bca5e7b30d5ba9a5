"""Single-threaded callback loop with Tk-style ``after`` scheduling."""

import heapq
import itertools
import threading
import time
from collections.abc import Callable
from typing import Any

from appearance_switch.utils.logger import get_logger

logger = get_logger(__name__)


class RunLoop:
    """Owning thread for timers and marshalled callbacks.

    Callbacks run one at a time on the loop thread in due-time order, ties in
    submission order. ``after`` and ``after_cancel`` are safe to call from any
    thread.
    """

    def __init__(self, name: str = "appearance-switch", clock: Callable[[], float] = time.monotonic):
        self._name = name
        self._clock = clock
        self._cond = threading.Condition()
        self._heap: list[tuple[float, int, str]] = []
        self._pending: dict[str, tuple[Callable[..., Any], tuple[Any, ...]]] = {}
        self._counter = itertools.count(1)
        self._running = False
        self._thread: threading.Thread | None = None
        self._owner_ident: int | None = None

    def after(self, delay_ms: int, callback: Callable[..., Any], *args: Any) -> str:
        """Schedule ``callback(*args)`` to run on the loop thread after ``delay_ms``."""
        seq = next(self._counter)
        after_id = f"after#{seq}"
        due = self._clock() + max(0, delay_ms) / 1000.0
        with self._cond:
            self._pending[after_id] = (callback, args)
            heapq.heappush(self._heap, (due, seq, after_id))
            self._cond.notify()
        return after_id

    def after_cancel(self, after_id: str) -> None:
        """Cancel a scheduled callback. Unknown or already-run ids are ignored."""
        with self._cond:
            self._pending.pop(after_id, None)

    @property
    def is_running(self) -> bool:
        return self._running

    def in_loop_thread(self) -> bool:
        return self._owner_ident == threading.get_ident()

    def run(self) -> None:
        """Serve callbacks on the calling thread until :meth:`quit` is called."""
        self._begin()
        self._serve()

    def start(self) -> threading.Thread:
        """Run the loop in a daemon thread."""
        self._begin()
        thread = threading.Thread(target=self._serve, name=self._name, daemon=True)
        self._thread = thread
        thread.start()
        return thread

    def _begin(self) -> None:
        with self._cond:
            if self._running:
                raise RuntimeError("RunLoop is already running")
            self._running = True

    def _serve(self) -> None:
        self._owner_ident = threading.get_ident()
        logger.info(f"[RUN_LOOP] '{self._name}' started")

        try:
            while True:
                entry = self._next_due()
                if entry is None:
                    break
                callback, args = entry
                try:
                    callback(*args)
                except Exception as e:
                    logger.error(f"[RUN_LOOP] Error in scheduled callback {callback!r}: {e}", exc_info=True)
        finally:
            self._owner_ident = None
            logger.info(f"[RUN_LOOP] '{self._name}' stopped")

    def quit(self, timeout: float | None = None) -> None:
        """Stop serving callbacks. Waits for the background thread when one was started."""
        with self._cond:
            self._running = False
            self._cond.notify_all()

        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
            self._thread = None

    def _next_due(self) -> tuple[Callable[..., Any], tuple[Any, ...]] | None:
        with self._cond:
            while self._running:
                while self._heap and self._heap[0][2] not in self._pending:
                    heapq.heappop(self._heap)

                if not self._heap:
                    self._cond.wait()
                    continue

                due, _, after_id = self._heap[0]
                remaining = due - self._clock()
                if remaining > 0:
                    self._cond.wait(remaining)
                    continue

                heapq.heappop(self._heap)
                return self._pending.pop(after_id)
            return None
