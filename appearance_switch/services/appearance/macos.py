"""macOS appearance port using ``defaults`` and ``osascript``."""

from appearance_switch.services.appearance.base import AppearanceError, CommandAppearancePort

_SET_DARK_MODE_SCRIPT = """
tell application "System Events"
    tell appearance preferences
        set dark mode to {value}
    end tell
end tell
"""

# Touching System Events prompts for the Automation permission on first use.
_PERMISSION_SCRIPT = """
tell application "System Events"
    return name
end tell
"""


class MacOSAppearancePort(CommandAppearancePort):
    """Reads ``AppleInterfaceStyle`` and switches through System Events."""

    name = "macos"

    def read(self) -> bool:
        result = self._read_output(["defaults", "read", "-g", "AppleInterfaceStyle"])
        if result.returncode == 0:
            return result.stdout.strip().lower() == "dark"
        # the key is absent while the system is in light mode
        if "does not exist" in (result.stderr or ""):
            return False
        raise AppearanceError(
            f"defaults exited with {result.returncode}: {(result.stderr or '').strip()}", self.name
        )

    def _change_command(self, target: bool) -> list[str]:
        script = _SET_DARK_MODE_SCRIPT.format(value="true" if target else "false")
        return ["osascript", "-e", script]

    def _permission_command(self) -> list[str] | None:
        return ["osascript", "-e", _PERMISSION_SCRIPT]
