"""Theme preference persistence.

A small JSON key-value file holds a single "theme" key ("light" or "dark").
It is read once at startup and written on every toggle.
"""

import json
import os
from pathlib import Path
from typing import Callable, Literal, Optional, Union

from pantry_chef.utils.logger import logger


Theme = Literal["light", "dark"]

THEME_KEY = "theme"
THEMES = ("light", "dark")
DEFAULT_THEME: Theme = "light"


def detect_system_theme() -> Optional[Theme]:
    """Guess the terminal's color scheme from COLORFGBG ("fg;bg").

    Background colors 0-6 and 8 are the dark ANSI colors.

    Returns:
        "dark" or "light", or None when the terminal does not report it.
    """
    value = os.getenv("COLORFGBG", "")
    if not value:
        return None
    background = value.split(";")[-1]
    try:
        color = int(background)
    except ValueError:
        return None
    return "dark" if color in (0, 1, 2, 3, 4, 5, 6, 8) else "light"


class ThemeStore:
    """Loads and saves the theme preference."""

    def __init__(
        self,
        path: Union[str, Path],
        system_theme: Callable[[], Optional[Theme]] = detect_system_theme,
    ) -> None:
        self.path = Path(path)
        self._system_theme = system_theme

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable preferences file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def load(self) -> Theme:
        """Stored theme, else the system preference, else light."""
        stored = self._read().get(THEME_KEY)
        if stored in THEMES:
            return stored
        system = self._system_theme()
        if system in THEMES:
            return system
        return DEFAULT_THEME

    def save(self, theme: Theme) -> None:
        if theme not in THEMES:
            raise ValueError(f"theme must be 'light' or 'dark', got: {theme}")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({THEME_KEY: theme}), encoding="utf-8")
        logger.debug(f"Saved theme preference '{theme}' to {self.path}")

    def toggle(self, current: Theme) -> Theme:
        """Flip light/dark and persist the result."""
        new_theme: Theme = "dark" if current == "light" else "light"
        self.save(new_theme)
        return new_theme
