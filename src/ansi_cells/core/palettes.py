"""Fixed palettes for the 16-color, legacy console and 256-color tiers."""

from __future__ import annotations

from typing import Iterator, Optional, Sequence

from ansi_cells.core.triplet import ColorTriplet


class Palette:
    """An indexed, read-only list of colors with nearest-color search."""

    def __init__(self, colors: Sequence[ColorTriplet | tuple[int, int, int]]):
        self._colors: tuple[ColorTriplet, ...] = tuple(
            color if isinstance(color, ColorTriplet) else ColorTriplet(*color)
            for color in colors
        )

    def __getitem__(self, index: int) -> ColorTriplet:
        return self._colors[index]

    def __len__(self) -> int:
        return len(self._colors)

    def __iter__(self) -> Iterator[ColorTriplet]:
        return iter(self._colors)

    def get(self, index: int) -> ColorTriplet:
        """Get a color with the index clamped into range."""
        return self._colors[max(0, min(len(self._colors) - 1, index))]

    def match(self, triplet: ColorTriplet, start: int = 0, end: Optional[int] = None) -> int:
        """Index of the closest color in [start, end); ties go to the lowest index."""
        return match_color(triplet, self, start, end)


def match_color(
    triplet: ColorTriplet,
    palette: Palette,
    start: int = 0,
    end: Optional[int] = None,
) -> int:
    """
    Find the palette index nearest to a color.

    Uses ColorTriplet.weighted_distance. Only a strictly smaller distance
    replaces the current best, so the first minimum found wins.
    """
    if end is None:
        end = len(palette)

    best_index = start
    best_distance = float("inf")
    for index in range(start, end):
        distance = triplet.weighted_distance(palette[index])
        if distance < best_distance:
            best_distance = distance
            best_index = index
    return best_index


STANDARD_PALETTE = Palette([
    (0, 0, 0),        # 0 - Black
    (128, 0, 0),      # 1 - Red
    (0, 128, 0),      # 2 - Green
    (128, 128, 0),    # 3 - Yellow
    (0, 0, 128),      # 4 - Blue
    (128, 0, 128),    # 5 - Magenta
    (0, 128, 128),    # 6 - Cyan
    (192, 192, 192),  # 7 - White
    (128, 128, 128),  # 8 - Bright Black
    (255, 0, 0),      # 9 - Bright Red
    (0, 255, 0),      # 10 - Bright Green
    (255, 255, 0),    # 11 - Bright Yellow
    (0, 0, 255),      # 12 - Bright Blue
    (255, 0, 255),    # 13 - Bright Magenta
    (0, 255, 255),    # 14 - Bright Cyan
    (255, 255, 255),  # 15 - Bright White
])

# Legacy Windows console colors
WINDOWS_PALETTE = Palette([
    (12, 12, 12),     # 0 - Black
    (197, 15, 31),    # 1 - Red
    (19, 161, 14),    # 2 - Green
    (193, 156, 0),    # 3 - Yellow
    (0, 55, 218),     # 4 - Blue
    (136, 23, 152),   # 5 - Magenta
    (58, 150, 221),   # 6 - Cyan
    (204, 204, 204),  # 7 - White
    (118, 118, 118),  # 8 - Bright Black
    (231, 72, 86),    # 9 - Bright Red
    (22, 198, 12),    # 10 - Bright Green
    (249, 241, 165),  # 11 - Bright Yellow
    (59, 120, 255),   # 12 - Bright Blue
    (180, 0, 158),    # 13 - Bright Magenta
    (97, 214, 214),   # 14 - Bright Cyan
    (242, 242, 242),  # 15 - Bright White
])

CUBE_STEPS: tuple[int, ...] = (0, 95, 135, 175, 215, 255)


def _build_eight_bit() -> Palette:
    colors: list[ColorTriplet] = list(STANDARD_PALETTE)
    # 16-231: 6x6x6 cube, index = 16 + 36r + 6g + b
    for r in CUBE_STEPS:
        for g in CUBE_STEPS:
            for b in CUBE_STEPS:
                colors.append(ColorTriplet(r, g, b))
    # 232-255: grayscale ramp
    for i in range(24):
        gray = 8 + i * 10
        colors.append(ColorTriplet(gray, gray, gray))
    return Palette(colors)


EIGHT_BIT_PALETTE = _build_eight_bit()


def match_standard(triplet: ColorTriplet) -> int:
    return STANDARD_PALETTE.match(triplet)


def match_eight_bit(triplet: ColorTriplet) -> int:
    return EIGHT_BIT_PALETTE.match(triplet)


def match_windows(triplet: ColorTriplet) -> int:
    return WINDOWS_PALETTE.match(triplet)


def get_standard(index: int) -> ColorTriplet:
    return STANDARD_PALETTE.get(index)


def get_eight_bit(index: int) -> ColorTriplet:
    return EIGHT_BIT_PALETTE.get(index)


def get_windows(index: int) -> ColorTriplet:
    return WINDOWS_PALETTE.get(index)
