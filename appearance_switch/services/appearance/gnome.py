"""GNOME appearance port using the ``color-scheme`` GSettings key."""

from appearance_switch.services.appearance.base import AppearanceError, CommandAppearancePort

SCHEMA = "org.gnome.desktop.interface"
KEY = "color-scheme"
DARK_VALUE = "prefer-dark"
LIGHT_VALUE = "default"


class GnomeAppearancePort(CommandAppearancePort):
    name = "gnome"

    def read(self) -> bool:
        result = self._read_output(["gsettings", "get", SCHEMA, KEY])
        if result.returncode != 0:
            raise AppearanceError(
                f"gsettings exited with {result.returncode}: {(result.stderr or '').strip()}", self.name
            )
        return result.stdout.strip().strip("'\"") == DARK_VALUE

    def _change_command(self, target: bool) -> list[str]:
        return ["gsettings", "set", SCHEMA, KEY, DARK_VALUE if target else LIGHT_VALUE]
