"""
Colour style resolution for the chooser screen.

The screen mimics the Subiquity installer: an orange banner and green
highlighted buttons. How those colours are produced depends on what the
terminal can do, so the choice is made once, before anything is drawn.
"""

import curses
from dataclasses import dataclass
from enum import StrEnum
from typing import Tuple

RGB = Tuple[int, int, int]

UBUNTU_ORANGE_RGB: RGB = (0xE9, 0x54, 0x20)
TEXT_WHITE_RGB: RGB = (0xFF, 0xFF, 0xFF)
BACK_GREEN_RGB: RGB = (0x0E, 0x84, 0x20)
BLACK_RGB: RGB = (0x00, 0x00, 0x00)

# Colour pair numbers; pair 0 is reserved by curses
BLACK_ON_ORANGE = 1
WHITE_ON_ORANGE = 2
WHITE_ON_GREEN = 3


class StyleMode(StrEnum):
    """How the palette is produced on this terminal."""

    CUSTOM = "custom"
    PALETTE_256 = "palette"
    BASIC = "basic"


COLOR_MODES = {"auto", *(mode.value for mode in StyleMode)}


@dataclass(slots=True, frozen=True)
class StyleSet:
    """Colour numbers for the four colours the screen uses."""

    mode: StyleMode
    orange: int
    white: int
    green: int
    black: int

    @property
    def pairs(self) -> Tuple[Tuple[int, int, int], ...]:
        """(pair number, foreground, background) for each colour pair."""
        return (
            (BLACK_ON_ORANGE, self.black, self.orange),
            (WHITE_ON_ORANGE, self.white, self.orange),
            (WHITE_ON_GREEN, self.white, self.green),
        )


def color_byte_to_curses(color_byte: int) -> int:
    """Scale a 0-255 colour component to curses' 0-1000 range."""
    return int(color_byte / 255.0 * 1000)


def _custom_style() -> StyleSet:
    return StyleSet(
        mode=StyleMode.CUSTOM,
        orange=curses.COLOR_RED,
        white=curses.COLOR_WHITE,
        green=curses.COLOR_GREEN,
        black=curses.COLOR_BLACK,
    )


def _palette_style() -> StyleSet:
    # xterm 256 colour indices; 202 is the closest to Ubuntu orange
    return StyleSet(
        mode=StyleMode.PALETTE_256, orange=202, white=231, green=28, black=0
    )


def _basic_style() -> StyleSet:
    return StyleSet(
        mode=StyleMode.BASIC,
        orange=curses.COLOR_RED,
        white=curses.COLOR_WHITE,
        green=curses.COLOR_GREEN,
        black=curses.COLOR_BLACK,
    )


def resolve_style(can_change_color: bool, colors: int, mode: str = "auto") -> StyleSet:
    """Pick the style set for a terminal's colour capabilities.

    ``mode`` forces a particular style; ``auto`` prefers redefining the
    colours, then the 256 colour palette, then the eight basic colours.
    A forced mode the terminal cannot honour degrades the same way.
    """
    if mode not in COLOR_MODES:
        raise ValueError(f"color_mode must be one of {sorted(COLOR_MODES)}, got '{mode}'")

    if mode in ("auto", StyleMode.CUSTOM) and can_change_color:
        return _custom_style()
    if mode in ("auto", StyleMode.CUSTOM, StyleMode.PALETTE_256) and colors >= 256:
        return _palette_style()
    return _basic_style()


def apply_style(style: StyleSet) -> None:
    """Program the terminal's colours and colour pairs for ``style``."""
    if style.mode is StyleMode.CUSTOM:
        for number, rgb in (
            (style.orange, UBUNTU_ORANGE_RGB),
            (style.white, TEXT_WHITE_RGB),
            (style.green, BACK_GREEN_RGB),
            (style.black, BLACK_RGB),
        ):
            curses.init_color(number, *(color_byte_to_curses(c) for c in rgb))

    for pair, foreground, background in style.pairs:
        curses.init_pair(pair, foreground, background)
