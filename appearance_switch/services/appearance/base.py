"""Base appearance port that changes the system appearance with external commands."""

import subprocess
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable

from appearance_switch.utils.logger import get_logger

logger = get_logger(__name__)


class AppearanceError(Exception):
    """Exception raised when the system appearance cannot be read or no backend is usable."""

    def __init__(self, message: str, backend: str = ""):
        self.message = message
        self.backend = backend
        super().__init__(f"{backend}: {message}" if backend else message)


class CommandAppearancePort(ABC):
    """Appearance port whose changes run as out-of-process commands on worker threads.

    Subclasses supply :meth:`read` and the command lines. Command failures
    (non-zero exit, launch error, timeout) are logged and never raised; the
    completion callback fires in every case.
    """

    name: str = "command"

    def __init__(self, command_timeout: float = 10.0, read_timeout: float = 2.0):
        self.command_timeout = command_timeout
        self.read_timeout = read_timeout

    @abstractmethod
    def read(self) -> bool:
        """Return True when the system is currently in dark mode."""

    @abstractmethod
    def _change_command(self, target: bool) -> list[str]:
        """Command line that switches the system to ``target``."""

    def _permission_command(self) -> list[str] | None:
        """Command line that triggers any OS permission prompt, if the backend needs one."""
        return None

    def request_change(self, target: bool, on_complete: Callable[[], None] | None = None) -> None:
        logger.info(f"[APPEARANCE] Requesting {'dark' if target else 'light'} mode via {self.name}")
        self._dispatch(self._change_command(target), on_complete)

    def request_permissions(self) -> None:
        command = self._permission_command()
        if command is None:
            return
        logger.info(f"[APPEARANCE] Requesting automation permission via {self.name}")
        self._dispatch(command, None)

    def _dispatch(self, command: list[str], on_complete: Callable[[], None] | None) -> None:
        threading.Thread(
            target=self._run_command,
            args=(command, on_complete),
            name=f"{self.name}-command",
            daemon=True,
        ).start()

    def _run_command(self, command: list[str], on_complete: Callable[[], None] | None) -> None:
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self.command_timeout,
                check=False,
            )
            if result.returncode != 0:
                stderr = (result.stderr or "").strip()
                logger.error(
                    f"[APPEARANCE] {command[0]} exited with {result.returncode}"
                    + (f": {stderr}" if stderr else "")
                )
        except subprocess.TimeoutExpired:
            logger.error(f"[APPEARANCE] {command[0]} timed out after {self.command_timeout}s")
        except OSError as e:
            logger.error(f"[APPEARANCE] Failed to run {command[0]}: {e}")
        finally:
            if on_complete is not None:
                try:
                    on_complete()
                except Exception as e:
                    logger.error(f"[APPEARANCE] Error in completion callback: {e}", exc_info=True)

    def _read_output(self, command: list[str]) -> subprocess.CompletedProcess:
        """Run a short query command synchronously, raising :class:`AppearanceError` on launch failure."""
        try:
            return subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self.read_timeout,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise AppearanceError(f"Could not query appearance with {command[0]}: {e}", self.name) from e
