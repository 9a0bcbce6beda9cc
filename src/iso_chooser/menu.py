"""
Menu system implementation for iso-chooser-menu.

The menu is a column of fixed-width "buttons" under a three row banner,
styled after the Subiquity installer. Layout and cursor movement are plain
functions of their inputs; only SelectionSession touches the terminal.
"""

import curses
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Self, Tuple

from .constants import (
    BANNER_HEIGHT,
    BANNER_LOWER_GLYPH,
    BANNER_UPPER_GLYPH,
    BUTTON_DECORATION_WIDTH,
    BUTTON_GLYPH,
    DEFAULT_CAPTION,
)
from .errors import TerminalInitError
from .models import ChoiceSet, ImageRecord
from .styles import BLACK_ON_ORANGE, WHITE_ON_GREEN, WHITE_ON_ORANGE
from .terminal import TerminalSession

DOWN_KEYS = frozenset({curses.KEY_DOWN})
UP_KEYS = frozenset({curses.KEY_UP})
COMMIT_KEYS = frozenset({curses.KEY_ENTER, ord("\r"), ord("\n"), ord(" ")})


@dataclass(slots=True, frozen=True)
class MenuState:
    """Highlight position within a list of ``count`` entries."""

    count: int
    cursor: int = 0

    def __post_init__(self):
        if self.count < 1:
            raise ValueError(f"menu needs at least one entry, got {self.count}")
        if not 0 <= self.cursor < self.count:
            raise ValueError(f"cursor {self.cursor} outside 0..{self.count - 1}")

    def down(self) -> "MenuState":
        return MenuState(self.count, min(self.cursor + 1, self.count - 1))

    def up(self) -> "MenuState":
        return MenuState(self.count, max(self.cursor - 1, 0))


def handle_key(state: MenuState, key: int) -> Tuple[MenuState, bool]:
    """Apply one key press, returning the new state and whether it committed."""
    if key in DOWN_KEYS:
        return state.down(), False
    if key in UP_KEYS:
        return state.up(), False
    if key in COMMIT_KEYS:
        return state, True
    return state, False


def button_text(label: str, width: int) -> str:
    """Render a label as a button, e.g. '[ Ubuntu Server   ▸ ]'."""
    return f"[ {label:<{width}} {BUTTON_GLYPH} ]"


def horizontal_center(length: int, cols: int) -> int:
    return max(0, (cols - length) // 2)


def vertical_center(length: int, lines: int, banner_height: int = BANNER_HEIGHT) -> int:
    """Centre within the area below the banner."""
    return banner_height + max(0, (lines - banner_height - length) // 2)


@dataclass(slots=True, frozen=True)
class MenuLayout:
    """Where and how the button list is drawn."""

    buttons: Tuple[str, ...]
    width: int
    top: int
    left: int

    @property
    def height(self) -> int:
        return len(self.buttons)

    @classmethod
    def compute(
        cls,
        labels: Sequence[str],
        lines: int,
        cols: int,
        banner_height: int = BANNER_HEIGHT,
    ) -> Self:
        """Lay out one equal-width button per label, centred on screen."""
        longest = max(len(label) for label in labels)
        width = longest + BUTTON_DECORATION_WIDTH
        return cls(
            buttons=tuple(button_text(label, longest) for label in labels),
            width=width,
            top=vertical_center(len(labels), lines, banner_height),
            left=horizontal_center(width, cols),
        )


class SelectionSession:
    """Lets the operator pick one image from a choice set."""

    def __init__(
        self,
        terminal: TerminalSession,
        choices: ChoiceSet,
        caption: str = DEFAULT_CAPTION,
    ):
        self.terminal = terminal
        self.choices = choices
        self.caption = caption
        self.state = MenuState(len(choices))
        self.layout: Optional[MenuLayout] = None
        self.window: Optional[Any] = None

    @property
    def selected(self) -> ImageRecord:
        """The currently highlighted record."""
        return self.choices[self.state.cursor]

    def render(self) -> None:
        """Draw the banner and the button list with the first entry highlighted."""
        self._render()

    def _render(self) -> Tuple[Any, MenuLayout]:
        lines, cols = self.terminal.size
        layout = MenuLayout.compute(self.choices.labels, lines, cols)
        try:
            self._draw_banner(cols)
            window = self.terminal.new_window(
                layout.height, layout.width, layout.top, layout.left
            )
        except curses.error as e:
            raise TerminalInitError(
                f"screen too small for menu ({cols}x{lines}, "
                f"need {layout.width}x{layout.top + layout.height})"
            ) from e

        self.layout = layout
        self.window = window
        self.terminal.refresh()
        self._draw_buttons(window, layout)
        return window, layout

    def _draw_banner(self, cols: int) -> None:
        screen = self.terminal.screen
        half_block = curses.color_pair(BLACK_ON_ORANGE)
        text = curses.color_pair(WHITE_ON_ORANGE)

        # insstr never moves the cursor, so filling the last column is safe
        screen.insstr(0, 0, BANNER_UPPER_GLYPH * cols, half_block)
        screen.insstr(1, 0, " " * cols, text)
        screen.insstr(2, 0, BANNER_LOWER_GLYPH * cols, half_block)

        caption = self.caption[:cols]
        screen.insstr(1, horizontal_center(len(caption), cols), caption, text)

    def _draw_buttons(self, window: Any, layout: MenuLayout) -> None:
        highlight = curses.color_pair(WHITE_ON_GREEN)
        for row, text in enumerate(layout.buttons):
            attr = highlight if row == self.state.cursor else curses.A_NORMAL
            window.move(row, 0)
            window.clrtoeol()
            window.insstr(row, 0, text, attr)

    def run(self) -> ImageRecord:
        """Block on the keyboard until the operator commits a choice."""
        window, layout = self._render()

        committed = False
        while not committed:
            window.refresh()
            key = window.getch()
            self.state, committed = handle_key(self.state, key)
            self._draw_buttons(window, layout)

        return self.selected
