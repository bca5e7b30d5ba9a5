"""Selection of the appearance port for the running platform."""

import platform
import shutil

from appearance_switch.core.enums import AppearanceBackend
from appearance_switch.services.appearance.base import AppearanceError, CommandAppearancePort
from appearance_switch.services.appearance.gnome import GnomeAppearancePort
from appearance_switch.services.appearance.macos import MacOSAppearancePort
from appearance_switch.utils.logger import get_logger

logger = get_logger(__name__)

_PORTS: dict[AppearanceBackend, type[CommandAppearancePort]] = {
    AppearanceBackend.MACOS: MacOSAppearancePort,
    AppearanceBackend.GNOME: GnomeAppearancePort,
}


def detect_backend() -> AppearanceBackend:
    """Pick the backend for the current platform."""
    system = platform.system().lower()
    if system == "darwin":
        return AppearanceBackend.MACOS
    if system == "linux" and shutil.which("gsettings"):
        return AppearanceBackend.GNOME
    raise AppearanceError(f"No appearance backend available for platform '{system}'")


def create_appearance_port(
    backend: AppearanceBackend = AppearanceBackend.AUTO,
    command_timeout: float = 10.0,
    read_timeout: float = 2.0,
) -> CommandAppearancePort:
    if backend == AppearanceBackend.AUTO:
        backend = detect_backend()

    port = _PORTS[backend](command_timeout=command_timeout, read_timeout=read_timeout)
    logger.info(f"[APPEARANCE] Using {backend.value} backend")
    return port
