"""Color representation, parsing and downgrading between color systems."""

from __future__ import annotations

import colorsys
import re
from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar, Optional, Union

from ansi_cells.core import palettes
from ansi_cells.core.cache import get_caches
from ansi_cells.core.errors import ColorParseError
from ansi_cells.core.theme import TerminalTheme
from ansi_cells.core.triplet import ColorTriplet


class ColorSystem(IntEnum):
    """Color tiers a terminal can display."""
    STANDARD = 1    # 16 colors (SGR 30-37, 40-47, 90-97, 100-107)
    EIGHT_BIT = 2   # 256 colors (SGR 38;5;n, 48;5;n)
    TRUECOLOR = 3   # 24-bit (SGR 38;2;r;g;b, 48;2;r;g;b)
    WINDOWS = 4     # Legacy Windows console, 16 colors


class ColorType(IntEnum):
    """How a Color stores its value."""
    DEFAULT = 0
    STANDARD = 1
    EIGHT_BIT = 2
    TRUECOLOR = 3
    WINDOWS = 4


ANSI_COLOR_NAMES: dict[str, int] = {
    "black": 0,
    "red": 1,
    "green": 2,
    "yellow": 3,
    "blue": 4,
    "magenta": 5,
    "cyan": 6,
    "white": 7,
    "bright_black": 8,
    "bright_red": 9,
    "bright_green": 10,
    "bright_yellow": 11,
    "bright_blue": 12,
    "bright_magenta": 13,
    "bright_cyan": 14,
    "bright_white": 15,
    "grey0": 16,
    "gray0": 16,
    "navy_blue": 17,
    "dark_blue": 18,
    "blue3": 20,
    "blue1": 21,
    "dark_green": 22,
    "deep_sky_blue4": 25,
    "dodger_blue3": 26,
    "dodger_blue2": 27,
    "green4": 28,
    "spring_green4": 29,
    "turquoise4": 30,
    "deep_sky_blue3": 32,
    "dodger_blue1": 33,
    "green3": 40,
    "spring_green3": 41,
    "dark_cyan": 36,
    "light_sea_green": 37,
    "deep_sky_blue2": 38,
    "deep_sky_blue1": 39,
    "spring_green2": 47,
    "cyan3": 43,
    "dark_turquoise": 44,
    "turquoise2": 45,
    "green1": 46,
    "spring_green1": 48,
    "medium_spring_green": 49,
    "cyan2": 50,
    "cyan1": 51,
    "dark_red": 88,
    "deep_pink4": 125,
    "purple4": 55,
    "purple3": 56,
    "blue_violet": 57,
    "orange4": 94,
    "grey37": 59,
    "gray37": 59,
    "medium_purple4": 60,
    "slate_blue3": 62,
    "royal_blue1": 63,
    "chartreuse4": 64,
    "dark_sea_green4": 71,
    "pale_turquoise4": 66,
    "steel_blue": 67,
    "steel_blue3": 68,
    "cornflower_blue": 69,
    "chartreuse3": 76,
    "cadet_blue": 73,
    "sky_blue3": 74,
    "steel_blue1": 81,
    "pale_green3": 114,
    "sea_green3": 78,
    "aquamarine3": 79,
    "medium_turquoise": 80,
    "chartreuse2": 112,
    "sea_green2": 83,
    "sea_green1": 85,
    "aquamarine1": 122,
    "dark_slate_gray2": 87,
    "dark_magenta": 91,
    "dark_violet": 128,
    "purple": 129,
    "light_pink4": 95,
    "plum4": 96,
    "medium_purple3": 98,
    "slate_blue1": 99,
    "yellow4": 106,
    "wheat4": 101,
    "grey53": 102,
    "gray53": 102,
    "light_slate_grey": 103,
    "light_slate_gray": 103,
    "medium_purple": 104,
    "light_slate_blue": 105,
    "dark_olive_green3": 149,
    "dark_sea_green": 108,
    "light_sky_blue3": 110,
    "sky_blue2": 111,
    "dark_sea_green3": 150,
    "dark_slate_gray3": 116,
    "sky_blue1": 117,
    "chartreuse1": 118,
    "light_green": 120,
    "pale_green1": 156,
    "dark_slate_gray1": 123,
    "red3": 160,
    "medium_violet_red": 126,
    "magenta3": 164,
    "dark_orange3": 166,
    "indian_red": 167,
    "hot_pink3": 168,
    "medium_orchid3": 133,
    "medium_orchid": 134,
    "medium_purple2": 140,
    "dark_goldenrod": 136,
    "light_salmon3": 173,
    "rosy_brown": 138,
    "grey63": 139,
    "gray63": 139,
    "medium_purple1": 141,
    "gold3": 178,
    "dark_khaki": 143,
    "navajo_white3": 144,
    "grey69": 145,
    "gray69": 145,
    "light_steel_blue3": 146,
    "light_steel_blue": 147,
    "yellow3": 184,
    "dark_sea_green2": 157,
    "light_cyan3": 152,
    "light_sky_blue1": 153,
    "green_yellow": 154,
    "dark_olive_green2": 155,
    "dark_sea_green1": 193,
    "pale_turquoise1": 159,
    "deep_pink3": 162,
    "magenta2": 200,
    "hot_pink2": 169,
    "orchid": 170,
    "medium_orchid1": 207,
    "orange3": 172,
    "light_pink3": 174,
    "pink3": 175,
    "plum3": 176,
    "violet": 177,
    "light_goldenrod3": 179,
    "tan": 180,
    "misty_rose3": 181,
    "thistle3": 182,
    "plum2": 183,
    "khaki3": 185,
    "light_goldenrod2": 222,
    "light_yellow3": 187,
    "grey84": 188,
    "gray84": 188,
    "light_steel_blue1": 189,
    "yellow2": 190,
    "dark_olive_green1": 192,
    "honeydew2": 194,
    "light_cyan1": 195,
    "red1": 196,
    "deep_pink2": 197,
    "deep_pink1": 199,
    "magenta1": 201,
    "orange_red1": 202,
    "indian_red1": 204,
    "hot_pink": 206,
    "dark_orange": 208,
    "salmon1": 209,
    "light_coral": 210,
    "pale_violet_red1": 211,
    "orchid2": 212,
    "orchid1": 213,
    "orange1": 214,
    "sandy_brown": 215,
    "light_salmon1": 216,
    "light_pink1": 217,
    "pink1": 218,
    "plum1": 219,
    "gold1": 220,
    "navajo_white1": 223,
    "misty_rose1": 224,
    "thistle1": 225,
    "yellow1": 226,
    "light_goldenrod1": 227,
    "khaki1": 228,
    "wheat1": 229,
    "cornsilk1": 230,
    "grey100": 231,
    "gray100": 231,
    "grey3": 232,
    "gray3": 232,
    "grey7": 233,
    "gray7": 233,
    "grey11": 234,
    "gray11": 234,
    "grey15": 235,
    "gray15": 235,
    "grey19": 236,
    "gray19": 236,
    "grey23": 237,
    "gray23": 237,
    "grey27": 238,
    "gray27": 238,
    "grey30": 239,
    "gray30": 239,
    "grey35": 240,
    "gray35": 240,
    "grey39": 241,
    "gray39": 241,
    "grey42": 242,
    "gray42": 242,
    "grey46": 243,
    "gray46": 243,
    "grey50": 244,
    "gray50": 244,
    "grey54": 245,
    "gray54": 245,
    "grey58": 246,
    "gray58": 246,
    "grey62": 247,
    "gray62": 247,
    "grey66": 248,
    "gray66": 248,
    "grey70": 249,
    "gray70": 249,
    "grey74": 250,
    "gray74": 250,
    "grey78": 251,
    "gray78": 251,
    "grey82": 252,
    "gray82": 252,
    "grey85": 253,
    "gray85": 253,
    "grey89": 254,
    "gray89": 254,
    "grey93": 255,
    "gray93": 255,
}

# First name listed for each number
COLOR_NUMBER_TO_NAME: dict[int, str] = {}
for _name, _number in ANSI_COLOR_NAMES.items():
    COLOR_NUMBER_TO_NAME.setdefault(_number, _name)

_COLOR_PATTERN = re.compile(
    r'^\#(?P<hex>[0-9a-f]{6})$'
    r'|^color\((?P<color8>\d{1,3})\)$'
    r'|^rgb\((?P<rgb>[\d\s,]+)\)$'
)


@dataclass(frozen=True)
class Color:
    """
    A terminal color.

    One of: the terminal default, a standard 16-color index, an 8-bit
    index, an RGB triplet, or a legacy Windows console index. The name
    it was parsed from is kept for display but ignored for equality.
    """
    name: str = field(compare=False)
    type: ColorType
    number: Optional[int] = None
    triplet: Optional[ColorTriplet] = None

    # Standard 16 colors
    BLACK: ClassVar[Color]
    RED: ClassVar[Color]
    GREEN: ClassVar[Color]
    YELLOW: ClassVar[Color]
    BLUE: ClassVar[Color]
    MAGENTA: ClassVar[Color]
    CYAN: ClassVar[Color]
    WHITE: ClassVar[Color]
    BRIGHT_BLACK: ClassVar[Color]
    BRIGHT_RED: ClassVar[Color]
    BRIGHT_GREEN: ClassVar[Color]
    BRIGHT_YELLOW: ClassVar[Color]
    BRIGHT_BLUE: ClassVar[Color]
    BRIGHT_MAGENTA: ClassVar[Color]
    BRIGHT_CYAN: ClassVar[Color]
    BRIGHT_WHITE: ClassVar[Color]
    DEFAULT: ClassVar[Color]

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        if self.type == ColorType.DEFAULT:
            return "<color 'default'>"
        if self.type == ColorType.TRUECOLOR:
            assert self.triplet is not None
            return f"<color {self.name!r} ({self.triplet.hex})>"
        return f"<color {self.name!r} ({self.type.name.lower()}:{self.number})>"

    @property
    def system(self) -> ColorSystem:
        """The color system this color natively belongs to."""
        if self.type == ColorType.DEFAULT:
            return ColorSystem.STANDARD
        return ColorSystem(int(self.type))

    @property
    def is_system_defined(self) -> bool:
        """True if the terminal decides the actual RGB (default and standard colors)."""
        return self.type in (ColorType.DEFAULT, ColorType.STANDARD)

    @property
    def is_default(self) -> bool:
        return self.type == ColorType.DEFAULT

    def get_truecolor(
        self, theme: Optional[TerminalTheme] = None, foreground: bool = True
    ) -> ColorTriplet:
        """
        Resolve this color to RGB.

        Args:
            theme: Theme for system-defined colors; palettes are used without one
            foreground: Which default to use for the default color
        """
        if self.type == ColorType.TRUECOLOR:
            assert self.triplet is not None
            return self.triplet
        if self.type == ColorType.EIGHT_BIT:
            assert self.number is not None
            return palettes.get_eight_bit(self.number)
        if self.type == ColorType.STANDARD:
            assert self.number is not None
            if theme is not None:
                return theme.ansi_colors[self.number]
            return palettes.get_standard(self.number)
        if self.type == ColorType.WINDOWS:
            assert self.number is not None
            return palettes.get_windows(self.number)
        # Default
        if theme is not None:
            return theme.foreground if foreground else theme.background
        return ColorTriplet(255, 255, 255) if foreground else ColorTriplet(0, 0, 0)

    def ansi_codes(self, foreground: bool = True) -> tuple[str, ...]:
        """SGR parameters selecting this color as foreground or background."""
        if self.type == ColorType.DEFAULT:
            return ("39" if foreground else "49",)
        if self.type in (ColorType.STANDARD, ColorType.WINDOWS):
            assert self.number is not None
            if self.number < 8:
                base = 30 if foreground else 40
            else:
                base = 90 if foreground else 100
            return (str(base + self.number % 8),)
        if self.type == ColorType.EIGHT_BIT:
            return ("38" if foreground else "48", "5", str(self.number))
        assert self.triplet is not None
        red, green, blue = self.triplet
        return ("38" if foreground else "48", "2", str(red), str(green), str(blue))

    def downgrade(self, system: ColorSystem) -> Color:
        """
        Convert to the nearest color representable in a coarser system.

        Never upgrades: a color already at or below the target tier, or the
        default color, is returned unchanged. Results are memoized.
        """
        if self.type == ColorType.DEFAULT or self.system == system:
            return self
        if system == ColorSystem.TRUECOLOR:
            return self
        if system == ColorSystem.EIGHT_BIT and self.system != ColorSystem.TRUECOLOR:
            return self
        if system == ColorSystem.STANDARD and self.system == ColorSystem.WINDOWS:
            return self

        key = (self.type, self.number, self.triplet, system)
        return get_caches().downgrades.get_or_compute(key, lambda: self._downgrade(system))

    def _downgrade(self, system: ColorSystem) -> Color:
        if system == ColorSystem.EIGHT_BIT:
            assert self.triplet is not None
            return Color(self.name, ColorType.EIGHT_BIT, number=_truecolor_to_eight_bit(self.triplet))

        triplet = self.get_truecolor()
        if system == ColorSystem.WINDOWS:
            return Color(self.name, ColorType.WINDOWS, number=palettes.match_windows(triplet))
        return Color(self.name, ColorType.STANDARD, number=palettes.match_standard(triplet))

    def for_system(self, system: ColorSystem, theme: Optional[TerminalTheme] = None) -> Color:
        """
        The color to emit for a terminal using the given system.

        Coarser systems get a downgrade. Truecolor terminals get indexed
        colors as their RGB value, resolved through the theme if one is
        given and the standard palettes otherwise.
        """
        if system == ColorSystem.TRUECOLOR and self.type in (
            ColorType.STANDARD, ColorType.EIGHT_BIT, ColorType.WINDOWS
        ):
            return Color(self.name, ColorType.TRUECOLOR, triplet=self.get_truecolor(theme))
        return self.downgrade(system)

    @classmethod
    def parse(cls, color: ColorLike) -> Color:
        """
        Parse a color definition.

        Accepts 'default', a color name, '#rrggbb', 'color(N)' or
        'rgb(R,G,B)', case-insensitive and whitespace-trimmed.

        Raises:
            ColorParseError: If the definition is not a valid color
        """
        if isinstance(color, Color):
            return color
        return get_caches().colors.get_or_compute(color, lambda: cls._parse(color))

    @classmethod
    def _parse(cls, original: str) -> Color:
        color = original.strip().lower()

        if color == "default":
            return cls.default()

        number = ANSI_COLOR_NAMES.get(color)
        if number is not None:
            color_type = ColorType.STANDARD if number < 16 else ColorType.EIGHT_BIT
            return cls(color, color_type, number=number)

        match = _COLOR_PATTERN.match(color)
        if match is None:
            raise ColorParseError(original)

        hex_digits, color8, rgb = match.groups()
        if hex_digits:
            return cls(color, ColorType.TRUECOLOR, triplet=ColorTriplet.from_hex(hex_digits))

        if color8:
            number = int(color8)
            if number > 255:
                raise ColorParseError(original, f"color number must be <= 255 in {original!r}")
            color_type = ColorType.STANDARD if number < 16 else ColorType.EIGHT_BIT
            return cls(color, color_type, number=number)

        components = rgb.split(",")
        if len(components) != 3:
            raise ColorParseError(original, f"expected 3 components in {original!r}")
        try:
            red, green, blue = (int(component) for component in components)
        except ValueError:
            raise ColorParseError(original, f"invalid components in {original!r}") from None
        if max(red, green, blue) > 255:
            raise ColorParseError(original, f"color components must be <= 255 in {original!r}")
        return cls(color, ColorType.TRUECOLOR, triplet=ColorTriplet(red, green, blue))

    @classmethod
    def default(cls) -> Color:
        """The terminal's default color."""
        return cls.DEFAULT

    @classmethod
    def from_ansi(cls, number: int) -> Color:
        """A color from an ANSI number (0-255, clamped)."""
        number = max(0, min(255, number))
        color_type = ColorType.STANDARD if number < 16 else ColorType.EIGHT_BIT
        name = COLOR_NUMBER_TO_NAME.get(number, f"color({number})")
        return cls(name, color_type, number=number)

    @classmethod
    def from_triplet(cls, triplet: ColorTriplet) -> Color:
        return cls(triplet.hex, ColorType.TRUECOLOR, triplet=triplet)

    @classmethod
    def from_rgb(cls, red: float, green: float, blue: float) -> Color:
        return cls.from_triplet(ColorTriplet(int(red), int(green), int(blue)))


ColorLike = Union[Color, str]


def resolve_color(color: Optional[ColorLike]) -> Optional[Color]:
    """Parse a color given as a string, pass through a Color or None."""
    if color is None:
        return None
    return Color.parse(color)


def _round_half_up(value: float) -> int:
    # Ties go up, not to even
    return int(value + 0.5)


def _truecolor_to_eight_bit(triplet: ColorTriplet) -> int:
    _hue, lightness, saturation = colorsys.rgb_to_hls(*triplet.normalized)

    # Near-grays use the grayscale ramp; its ends are shared with the cube
    if saturation < 0.15:
        gray = _round_half_up(lightness * 25.0)
        if gray == 0:
            return 16
        if gray == 25:
            return 231
        return 231 + gray

    def to_step(component: int) -> int:
        if component < 95:
            return _round_half_up(component / 95.0)
        return _round_half_up(1 + (component - 95) / 40.0)

    red, green, blue = triplet
    return 16 + 36 * to_step(red) + 6 * to_step(green) + to_step(blue)


_STANDARD_NAMES = (
    "BLACK", "RED", "GREEN", "YELLOW", "BLUE", "MAGENTA", "CYAN", "WHITE",
    "BRIGHT_BLACK", "BRIGHT_RED", "BRIGHT_GREEN", "BRIGHT_YELLOW",
    "BRIGHT_BLUE", "BRIGHT_MAGENTA", "BRIGHT_CYAN", "BRIGHT_WHITE",
)

# Initialize class-level color constants
for _number, _attr in enumerate(_STANDARD_NAMES):
    setattr(Color, _attr, Color(_attr.lower(), ColorType.STANDARD, number=_number))
Color.DEFAULT = Color("default", ColorType.DEFAULT)
