"""
Terminal handle for iso-chooser-menu.
"""

import curses
import locale
import logging
from typing import Any, Optional, Tuple

from .errors import TerminalInitError
from .styles import StyleSet, apply_style, resolve_style

# Set up logging
logger = logging.getLogger(__name__)


def init_locale() -> None:
    """Use a UTF-8 locale so the button and banner glyphs render."""
    for name in ("C.UTF-8", ""):
        try:
            locale.setlocale(locale.LC_ALL, name)
            return
        except locale.Error:
            continue
    logger.warning("No usable locale, box drawing glyphs may not render")


class TerminalSession:
    """Owns the curses screen for the lifetime of one selection.

    Use as a context manager: entering puts the terminal in cbreak/noecho
    mode with colours configured, leaving always restores it, whatever
    happened in between.
    """

    def __init__(self, color_mode: str = "auto"):
        self.color_mode = color_mode
        self.stdscr: Optional[Any] = None
        self.style: Optional[StyleSet] = None

    def __enter__(self) -> "TerminalSession":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def open(self) -> None:
        """Acquire and configure the screen."""
        init_locale()
        try:
            self.stdscr = curses.initscr()
        except curses.error as e:
            raise TerminalInitError(f"initscr failure: {e}") from e

        try:
            self._configure()
        except BaseException:
            self.close()
            raise

    def _configure(self) -> None:
        curses.noecho()

        if not curses.has_colors():
            raise TerminalInitError("has_colors failure")
        try:
            curses.start_color()
        except curses.error as e:
            raise TerminalInitError(f"start_color failure: {e}") from e

        self.screen.keypad(True)
        curses.cbreak()
        try:
            curses.curs_set(0)
        except curses.error:
            pass  # terminal cannot hide the cursor

        self.style = resolve_style(
            curses.can_change_color(), curses.COLORS, self.color_mode
        )
        try:
            apply_style(self.style)
        except curses.error as e:
            raise TerminalInitError(
                f"cannot set up {self.style.mode} colours: {e}"
            ) from e

    def close(self) -> None:
        """Clear the screen and hand the terminal back. Safe to call twice."""
        if self.stdscr is None:
            return
        try:
            self.stdscr.erase()
            self.stdscr.refresh()
        finally:
            curses.endwin()
            self.stdscr = None

    @property
    def screen(self) -> Any:
        if self.stdscr is None:
            raise TerminalInitError("terminal session is not open")
        return self.stdscr

    @property
    def size(self) -> Tuple[int, int]:
        """Screen size as (lines, columns)."""
        lines, cols = self.screen.getmaxyx()
        return lines, cols

    def new_window(self, height: int, width: int, top: int, left: int) -> Any:
        """Create a keypad-enabled window inside the screen."""
        window = curses.newwin(height, width, top, left)
        window.keypad(True)
        return window

    def refresh(self) -> None:
        self.screen.refresh()
