from collections.abc import Callable
from typing import Protocol, runtime_checkable


@runtime_checkable
class IAppearancePort(Protocol):
    """External light/dark appearance setting.

    ``read`` queries the live system property and must return quickly.
    ``request_change`` dispatches the change to a worker and returns at once;
    ``on_complete`` fires after the external command exits, whatever its
    exit status. Failures are logged by the port, never raised to the caller.
    """

    def read(self) -> bool: ...

    def request_change(self, target: bool, on_complete: Callable[[], None] | None = None) -> None: ...

    def request_permissions(self) -> None: ...
