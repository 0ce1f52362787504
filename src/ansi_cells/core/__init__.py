"""Core data structures: colors, styles and cell widths."""

from ansi_cells.core.cells import cached_cell_len, cell_len, char_width
from ansi_cells.core.color import Color, ColorSystem, ColorType
from ansi_cells.core.errors import ColorParseError, InvalidColor
from ansi_cells.core.style import Attribute, Style
from ansi_cells.core.theme import TerminalTheme
from ansi_cells.core.triplet import ColorTriplet

__all__ = [
    "Attribute",
    "Color",
    "ColorParseError",
    "ColorSystem",
    "ColorTriplet",
    "ColorType",
    "InvalidColor",
    "Style",
    "TerminalTheme",
    "cached_cell_len",
    "cell_len",
    "char_width",
]
