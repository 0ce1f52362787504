"""
ansi-cells: styled terminal text and ANSI rendering

Colors, styles, cell-width aware text layout, and the serializer that
turns styled segments into ANSI escape codes.

Quick Start:
    >>> from ansi_cells import ColorSystem, Style, Text
    >>> text = Text("Hello, ").append("World", style="bold red")
    >>> text.render(ColorSystem.STANDARD)
    'Hello, \\x1b[1;31mWorld\\x1b[0m'
    >>> Style.parse("italic #ff5500").render(ColorSystem.EIGHT_BIT)
    '\\x1b[3;38;5;202m'

Features:
    - Colors in default, 16-color, 256-color, truecolor and Windows tiers
    - Downgrading to whatever a terminal supports
    - Immutable, combinable styles with a text grammar
    - Terminal column widths for wide and zero-width characters
    - Word wrap, slicing and layered spans on styled text
    - Console markup ('[bold]hi[/]') and ANSI decoding
"""

import logging

__version__ = "0.1.0"

# Core types
from ansi_cells.core.cells import cell_len
from ansi_cells.core.color import Color, ColorSystem, ColorType
from ansi_cells.core.errors import ColorParseError, InvalidColor
from ansi_cells.core.style import Attribute, Style
from ansi_cells.core.theme import DEFAULT_TERMINAL_THEME, TerminalTheme
from ansi_cells.core.triplet import ColorTriplet

# Caching
from ansi_cells.config import CacheSettings
from ansi_cells.core.cache import RenderCaches, use_caches

# Text and rendering
from ansi_cells.render.control import ControlType
from ansi_cells.render.segment import Segment
from ansi_cells.text.span import Span
from ansi_cells.text.text import Text

# Decoding
from ansi_cells.codec.ansi_decoder import AnsiDecoder

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Version
    "__version__",
    # Core types
    "Attribute",
    "Color",
    "ColorParseError",
    "ColorSystem",
    "ColorTriplet",
    "ColorType",
    "DEFAULT_TERMINAL_THEME",
    "InvalidColor",
    "Style",
    "TerminalTheme",
    "cell_len",
    # Caching
    "CacheSettings",
    "RenderCaches",
    "use_caches",
    # Text and rendering
    "ControlType",
    "Segment",
    "Span",
    "Text",
    # Decoding
    "AnsiDecoder",
]
