"""Terminal themes: the concrete RGB a terminal shows for system colors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ansi_cells.core.palettes import WINDOWS_PALETTE
from ansi_cells.core.triplet import ColorTriplet


@dataclass(frozen=True)
class TerminalTheme:
    """
    RGB values for the default foreground/background and the 16 ANSI colors.

    Used to resolve system-defined colors (default and standard) to real
    colors, e.g. when rendering them for a truecolor terminal.
    """
    foreground: ColorTriplet
    background: ColorTriplet
    ansi_colors: tuple[ColorTriplet, ...]

    def __post_init__(self) -> None:
        colors = tuple(self.ansi_colors)
        if len(colors) != 16:
            raise ValueError(f"ansi_colors must have exactly 16 colors, got {len(colors)}")
        object.__setattr__(self, "ansi_colors", colors)

    @classmethod
    def from_rgb(
        cls,
        foreground: tuple[int, int, int],
        background: tuple[int, int, int],
        ansi_colors: Sequence[tuple[int, int, int]],
    ) -> TerminalTheme:
        """Build a theme from plain (r, g, b) tuples."""
        return cls(
            ColorTriplet(*foreground),
            ColorTriplet(*background),
            tuple(ColorTriplet(*rgb) for rgb in ansi_colors),
        )


DEFAULT_TERMINAL_THEME = TerminalTheme.from_rgb(
    (230, 230, 230),
    (12, 12, 12),
    [
        (12, 12, 12),
        (205, 49, 49),
        (13, 188, 121),
        (229, 229, 16),
        (36, 114, 200),
        (188, 63, 188),
        (17, 168, 205),
        (229, 229, 229),
        (102, 102, 102),
        (241, 76, 76),
        (35, 209, 139),
        (245, 245, 67),
        (59, 142, 234),
        (214, 112, 214),
        (41, 184, 219),
        (255, 255, 255),
    ],
)

MONOKAI_THEME = TerminalTheme.from_rgb(
    (248, 248, 242),
    (39, 40, 34),
    [
        (39, 40, 34),
        (249, 38, 114),
        (166, 226, 46),
        (244, 191, 117),
        (102, 217, 239),
        (174, 129, 255),
        (161, 239, 228),
        (248, 248, 242),
        (117, 113, 94),
        (249, 38, 114),
        (166, 226, 46),
        (244, 191, 117),
        (102, 217, 239),
        (174, 129, 255),
        (161, 239, 228),
        (248, 248, 242),
    ],
)

WINDOWS_TERMINAL_THEME = TerminalTheme(
    ColorTriplet(204, 204, 204),
    ColorTriplet(12, 12, 12),
    tuple(WINDOWS_PALETTE),
)
