"""RGB color triplets and color math."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Iterator

from ansi_cells.core.errors import ColorParseError

_HEX_PATTERN = re.compile(r'[0-9a-fA-F]{6}')


def _clamp(value: float) -> int:
    return max(0, min(255, int(value)))


@dataclass(frozen=True)
class ColorTriplet:
    """
    An immutable RGB color with 8-bit components.

    Components are clamped to 0-255 on construction rather than rejected.
    """
    red: int
    green: int
    blue: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "red", _clamp(self.red))
        object.__setattr__(self, "green", _clamp(self.green))
        object.__setattr__(self, "blue", _clamp(self.blue))

    def __iter__(self) -> Iterator[int]:
        yield self.red
        yield self.green
        yield self.blue

    def __str__(self) -> str:
        return self.hex

    @property
    def hex(self) -> str:
        """CSS style hex, e.g. '#ff0000'."""
        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}"

    @property
    def rgb(self) -> str:
        """CSS style rgb, e.g. 'rgb(255,0,0)'."""
        return f"rgb({self.red},{self.green},{self.blue})"

    @property
    def normalized(self) -> tuple[float, float, float]:
        """Components as floats between 0 and 1."""
        return (self.red / 255.0, self.green / 255.0, self.blue / 255.0)

    def luminance(self) -> float:
        """WCAG 2.0 relative luminance (0.0-1.0)."""
        r, g, b = (
            c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4
            for c in self.normalized
        )
        return 0.2126 * r + 0.7152 * g + 0.0722 * b

    @property
    def is_dark(self) -> bool:
        return self.luminance() < 0.5

    @property
    def is_light(self) -> bool:
        return not self.is_dark

    def blend(self, other: ColorTriplet, factor: float = 0.5) -> ColorTriplet:
        """Blend towards another color (0.0 = this color, 1.0 = other)."""
        factor = max(0.0, min(1.0, factor))
        return ColorTriplet(
            round(self.red + (other.red - self.red) * factor),
            round(self.green + (other.green - self.green) * factor),
            round(self.blue + (other.blue - self.blue) * factor),
        )

    def distance(self, other: ColorTriplet) -> float:
        """Euclidean distance in RGB space."""
        return math.sqrt(
            (self.red - other.red) ** 2
            + (self.green - other.green) ** 2
            + (self.blue - other.blue) ** 2
        )

    def weighted_distance(self, other: ColorTriplet) -> float:
        """
        Distance weighted for human perception.

        Red and blue differences are weighted by the mean red level of the
        two colors; this is the metric used for every palette lookup.
        """
        red_mean = (self.red + other.red) / 2.0
        dr = self.red - other.red
        dg = self.green - other.green
        db = self.blue - other.blue
        return math.sqrt(
            (2.0 + red_mean / 256.0) * dr * dr
            + 4.0 * dg * dg
            + (2.0 + (255.0 - red_mean) / 256.0) * db * db
        )

    @classmethod
    def from_hex(cls, hex_color: str) -> ColorTriplet:
        """Parse six hex digits, with or without a leading '#'."""
        digits = hex_color[1:] if hex_color.startswith("#") else hex_color
        if not _HEX_PATTERN.fullmatch(digits):
            raise ColorParseError(hex_color, f"{hex_color!r} is not a valid hex color")
        return cls(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))

    @classmethod
    def from_normalized(cls, red: float, green: float, blue: float) -> ColorTriplet:
        return cls(round(red * 255), round(green * 255), round(blue * 255))

    @classmethod
    def from_hsl(cls, hue: float, saturation: float, lightness: float) -> ColorTriplet:
        """
        Build a color from HSL.

        Args:
            hue: Degrees, taken modulo 360
            saturation: Percentage 0-100
            lightness: Percentage 0-100
        """
        hue = hue % 360
        s = saturation / 100.0
        l = lightness / 100.0

        chroma = (1 - abs(2 * l - 1)) * s
        x = chroma * (1 - abs((hue / 60.0) % 2 - 1))
        m = l - chroma / 2.0

        sector = int(hue // 60)
        if sector == 0:
            r, g, b = chroma, x, 0.0
        elif sector == 1:
            r, g, b = x, chroma, 0.0
        elif sector == 2:
            r, g, b = 0.0, chroma, x
        elif sector == 3:
            r, g, b = 0.0, x, chroma
        elif sector == 4:
            r, g, b = x, 0.0, chroma
        else:
            r, g, b = chroma, 0.0, x

        return cls(round((r + m) * 255), round((g + m) * 255), round((b + m) * 255))
