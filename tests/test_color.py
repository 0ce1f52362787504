"""Tests for triplets, palettes, colors and themes."""

import pytest

from ansi_cells.core import palettes
from ansi_cells.core.color import Color, ColorSystem, ColorType
from ansi_cells.core.errors import ColorParseError, InvalidColor
from ansi_cells.core.theme import DEFAULT_TERMINAL_THEME, TerminalTheme
from ansi_cells.core.triplet import ColorTriplet


class TestColorTriplet:
    """Tests for ColorTriplet."""

    def test_components_are_clamped(self) -> None:
        triplet = ColorTriplet(300, -5, 128)
        assert tuple(triplet) == (255, 0, 128)

    def test_hex_and_rgb(self) -> None:
        triplet = ColorTriplet(255, 85, 0)
        assert triplet.hex == "#ff5500"
        assert triplet.rgb == "rgb(255,85,0)"
        assert str(triplet) == "#ff5500"

    @pytest.mark.parametrize("value", ["#ff5500", "ff5500", "FF5500"])
    def test_from_hex(self, value: str) -> None:
        assert ColorTriplet.from_hex(value) == ColorTriplet(255, 85, 0)

    @pytest.mark.parametrize("value", ["#ff55", "#gg0000", "", "#ff55000"])
    def test_from_hex_invalid(self, value: str) -> None:
        with pytest.raises(ColorParseError):
            ColorTriplet.from_hex(value)

    def test_normalized(self) -> None:
        assert ColorTriplet(255, 0, 0).normalized == (1.0, 0.0, 0.0)
        assert ColorTriplet.from_normalized(1.0, 0.5, 0.0) == ColorTriplet(255, 128, 0)

    def test_from_hsl(self) -> None:
        assert ColorTriplet.from_hsl(0, 100, 50) == ColorTriplet(255, 0, 0)
        assert ColorTriplet.from_hsl(120, 100, 50) == ColorTriplet(0, 255, 0)
        assert ColorTriplet.from_hsl(240, 100, 50) == ColorTriplet(0, 0, 255)

    def test_light_and_dark(self) -> None:
        assert ColorTriplet(255, 255, 255).is_light
        assert ColorTriplet(0, 0, 0).is_dark

    def test_blend(self) -> None:
        black = ColorTriplet(0, 0, 0)
        white = ColorTriplet(255, 255, 255)
        assert black.blend(white, 0.0) == black
        assert black.blend(white, 1.0) == white
        assert black.blend(white) == ColorTriplet(128, 128, 128)

    def test_distance(self) -> None:
        assert ColorTriplet(0, 0, 0).distance(ColorTriplet(3, 4, 0)) == 5.0
        red = ColorTriplet(255, 0, 0)
        assert red.weighted_distance(red) == 0.0


class TestPalettes:
    """Tests for the fixed palettes."""

    def test_sizes(self) -> None:
        assert len(palettes.STANDARD_PALETTE) == 16
        assert len(palettes.WINDOWS_PALETTE) == 16
        assert len(palettes.EIGHT_BIT_PALETTE) == 256

    def test_eight_bit_layout(self) -> None:
        assert palettes.get_eight_bit(16) == ColorTriplet(0, 0, 0)
        assert palettes.get_eight_bit(202) == ColorTriplet(255, 95, 0)
        assert palettes.get_eight_bit(231) == ColorTriplet(255, 255, 255)
        assert palettes.get_eight_bit(232) == ColorTriplet(8, 8, 8)
        assert palettes.get_eight_bit(255) == ColorTriplet(238, 238, 238)

    def test_get_clamps_index(self) -> None:
        assert palettes.get_standard(-1) == palettes.STANDARD_PALETTE[0]
        assert palettes.get_standard(99) == palettes.STANDARD_PALETTE[15]

    def test_exact_match(self) -> None:
        assert palettes.match_standard(ColorTriplet(128, 0, 0)) == 1
        assert palettes.match_windows(ColorTriplet(197, 15, 31)) == 1

    def test_first_minimum_wins(self) -> None:
        # Index 0 and 16 are both pure black
        assert palettes.match_eight_bit(ColorTriplet(0, 0, 0)) == 0

    def test_match_range(self) -> None:
        black = ColorTriplet(0, 0, 0)
        assert palettes.EIGHT_BIT_PALETTE.match(black, start=16) == 16


class TestColorParse:
    """Tests for the color grammar."""

    def test_default(self) -> None:
        color = Color.parse("default")
        assert color.type == ColorType.DEFAULT
        assert color.is_default
        assert color == Color.default()

    def test_named_standard(self) -> None:
        color = Color.parse("red")
        assert color.type == ColorType.STANDARD
        assert color.number == 1
        assert color == Color.RED

    def test_named_eight_bit(self) -> None:
        color = Color.parse("grey0")
        assert color.type == ColorType.EIGHT_BIT
        assert color.number == 16

    def test_case_and_whitespace(self) -> None:
        assert Color.parse("  Bright_Blue ") == Color.BRIGHT_BLUE

    def test_hex(self) -> None:
        color = Color.parse("#FF5500")
        assert color.type == ColorType.TRUECOLOR
        assert color.triplet == ColorTriplet(255, 85, 0)

    def test_color_number(self) -> None:
        assert Color.parse("color(3)").type == ColorType.STANDARD
        assert Color.parse("color(100)") == Color.from_ansi(100)

    def test_rgb(self) -> None:
        assert Color.parse("rgb(10, 20, 30)").triplet == ColorTriplet(10, 20, 30)

    @pytest.mark.parametrize(
        "value",
        ["nope", "color(256)", "rgb(1,2)", "rgb(256,0,0)", "#12345", "", "rgb(1,,2)"],
    )
    def test_invalid(self, value: str) -> None:
        with pytest.raises(InvalidColor) as info:
            Color.parse(value)
        assert info.value.literal == value

    def test_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            Color.parse("not-a-color")

    def test_parse_is_cached(self, isolated_caches) -> None:
        first = Color.parse("magenta")
        assert "magenta" in isolated_caches.colors
        assert Color.parse("magenta") is first

    def test_passes_color_through(self) -> None:
        assert Color.parse(Color.RED) is Color.RED

    def test_equality_ignores_name(self) -> None:
        assert Color.parse("color(1)") == Color.parse("red")
        assert hash(Color.parse("color(1)")) == hash(Color.parse("red"))


class TestColorConstructors:
    """Tests for the alternate constructors."""

    def test_from_ansi_clamps(self) -> None:
        assert Color.from_ansi(-3).number == 0
        assert Color.from_ansi(999).number == 255

    def test_from_ansi_names(self) -> None:
        assert Color.from_ansi(9).name == "bright_red"
        assert Color.from_ansi(9).type == ColorType.STANDARD

    def test_from_rgb(self) -> None:
        color = Color.from_rgb(255, 85, 0)
        assert color.type == ColorType.TRUECOLOR
        assert color.name == "#ff5500"


class TestColorProperties:
    """Tests for system, truecolor resolution and SGR codes."""

    def test_system(self) -> None:
        assert Color.parse("red").system == ColorSystem.STANDARD
        assert Color.parse("color(200)").system == ColorSystem.EIGHT_BIT
        assert Color.parse("#010203").system == ColorSystem.TRUECOLOR

    def test_is_system_defined(self) -> None:
        assert Color.parse("default").is_system_defined
        assert Color.parse("red").is_system_defined
        assert not Color.parse("color(200)").is_system_defined

    def test_get_truecolor(self) -> None:
        assert Color.parse("red").get_truecolor() == ColorTriplet(128, 0, 0)
        assert Color.parse("red").get_truecolor(DEFAULT_TERMINAL_THEME) == ColorTriplet(205, 49, 49)
        assert Color.parse("color(202)").get_truecolor() == ColorTriplet(255, 95, 0)

    def test_default_truecolor_uses_theme(self) -> None:
        default = Color.default()
        theme = DEFAULT_TERMINAL_THEME
        assert default.get_truecolor(theme) == theme.foreground
        assert default.get_truecolor(theme, foreground=False) == theme.background

    @pytest.mark.parametrize(
        "definition, foreground, background",
        [
            ("default", ("39",), ("49",)),
            ("red", ("31",), ("41",)),
            ("bright_red", ("91",), ("101",)),
            ("color(202)", ("38", "5", "202"), ("48", "5", "202")),
            ("#ff5500", ("38", "2", "255", "85", "0"), ("48", "2", "255", "85", "0")),
        ],
    )
    def test_ansi_codes(self, definition: str, foreground: tuple, background: tuple) -> None:
        color = Color.parse(definition)
        assert color.ansi_codes(foreground=True) == foreground
        assert color.ansi_codes(foreground=False) == background


class TestDowngrade:
    """Tests for converting colors to coarser systems."""

    def test_orange_to_eight_bit(self) -> None:
        downgraded = Color.parse("#ff5500").downgrade(ColorSystem.EIGHT_BIT)
        assert downgraded.type == ColorType.EIGHT_BIT
        assert downgraded.number == 202

    def test_downgrade_independent_of_cache(self, isolated_caches) -> None:
        first = Color.parse("#ff5500").downgrade(ColorSystem.EIGHT_BIT)
        isolated_caches.clear()
        assert Color.parse("#ff5500").downgrade(ColorSystem.EIGHT_BIT) == first

    @pytest.mark.parametrize("value", ["#000000", "#ff5500", "#123456", "#ffffff", "#7f7f7f"])
    def test_truecolor_is_idempotent(self, value: str) -> None:
        color = Color.parse(value)
        assert color.downgrade(ColorSystem.TRUECOLOR) == color

    def test_grays_use_ramp(self) -> None:
        assert Color.parse("#808080").downgrade(ColorSystem.EIGHT_BIT).number == 244
        assert Color.parse("#000000").downgrade(ColorSystem.EIGHT_BIT).number == 16
        assert Color.parse("#ffffff").downgrade(ColorSystem.EIGHT_BIT).number == 231

    def test_to_standard(self) -> None:
        downgraded = Color.parse("#fe0000").downgrade(ColorSystem.STANDARD)
        assert downgraded.type == ColorType.STANDARD
        assert downgraded.number == 9

    def test_eight_bit_to_standard(self) -> None:
        assert Color.parse("color(196)").downgrade(ColorSystem.STANDARD).number == 9

    def test_to_windows(self) -> None:
        downgraded = Color.parse("red").downgrade(ColorSystem.WINDOWS)
        assert downgraded.type == ColorType.WINDOWS
        assert downgraded.number == 1

    @pytest.mark.parametrize("name", ["cyan", "yellow", "bright_black", "white"])
    def test_standard_to_windows_matches_by_rgb(self, name: str) -> None:
        color = Color.parse(name)
        expected = palettes.match_windows(palettes.get_standard(color.number))
        assert color.downgrade(ColorSystem.WINDOWS).number == expected

    def test_cyan_to_windows(self) -> None:
        assert Color.parse("cyan").downgrade(ColorSystem.WINDOWS).number == 8

    @pytest.mark.parametrize("value, number", [("#ff9b00", 214), ("#7f8080", 244)])
    def test_ties_round_up(self, value: str, number: int) -> None:
        assert Color.parse(value).downgrade(ColorSystem.EIGHT_BIT).number == number

    def test_never_upgrades(self) -> None:
        red = Color.parse("red")
        assert red.downgrade(ColorSystem.EIGHT_BIT) is red
        assert red.downgrade(ColorSystem.TRUECOLOR) is red

    def test_default_unchanged(self) -> None:
        default = Color.default()
        for system in ColorSystem:
            assert default.downgrade(system) is default


class TestForSystem:
    """Tests for the color actually emitted per terminal tier."""

    def test_indexed_becomes_rgb_on_truecolor(self) -> None:
        color = Color.parse("red").for_system(ColorSystem.TRUECOLOR)
        assert color.type == ColorType.TRUECOLOR
        assert color.triplet == ColorTriplet(128, 0, 0)

    def test_theme_is_used(self) -> None:
        color = Color.parse("red").for_system(ColorSystem.TRUECOLOR, DEFAULT_TERMINAL_THEME)
        assert color.triplet == ColorTriplet(205, 49, 49)

    def test_default_stays_default(self) -> None:
        assert Color.default().for_system(ColorSystem.TRUECOLOR).is_default

    def test_coarser_systems_downgrade(self) -> None:
        color = Color.parse("#ff5500").for_system(ColorSystem.EIGHT_BIT)
        assert color.number == 202


class TestTerminalTheme:
    """Tests for TerminalTheme."""

    def test_requires_sixteen_colors(self) -> None:
        with pytest.raises(ValueError):
            TerminalTheme.from_rgb((0, 0, 0), (255, 255, 255), [(0, 0, 0)] * 15)

    def test_from_rgb(self) -> None:
        theme = TerminalTheme.from_rgb((1, 2, 3), (4, 5, 6), [(7, 8, 9)] * 16)
        assert theme.foreground == ColorTriplet(1, 2, 3)
        assert len(theme.ansi_colors) == 16
