from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class IScheduler(Protocol):
    """Tk-style timer API of the thread that owns reconciliation.

    ``after`` returns an identifier accepted by ``after_cancel``. A Tk root
    satisfies this protocol as well as :class:`~appearance_switch.utils.run_loop.RunLoop`.
    """

    def after(self, delay_ms: int, callback: Callable[..., Any], *args: Any) -> str: ...

    def after_cancel(self, after_id: str) -> None: ...
