"""Text styles: colors plus boolean attributes, immutable and combinable."""

from __future__ import annotations

import logging
from enum import IntEnum
from functools import reduce
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

from ansi_cells.core.cache import get_caches
from ansi_cells.core.color import Color, ColorLike, ColorSystem, resolve_color
from ansi_cells.core.constants import CSI
from ansi_cells.core.errors import ColorParseError
from ansi_cells.core.theme import TerminalTheme

logger = logging.getLogger(__name__)


class Attribute(IntEnum):
    """Text attributes, valued by their bit position in the style masks."""
    BOLD = 0
    DIM = 1
    ITALIC = 2
    UNDERLINE = 3
    BLINK = 4
    BLINK2 = 5          # rapid blink
    REVERSE = 6
    CONCEAL = 7
    STRIKE = 8
    UNDERLINE2 = 9      # double underline
    FRAME = 10
    ENCIRCLE = 11
    OVERLINE = 12

    @property
    def bit(self) -> int:
        return 1 << self.value

    @property
    def sgr(self) -> str:
        return SGR_CODES[self]


SGR_CODES: dict[Attribute, str] = {
    Attribute.BOLD: "1",
    Attribute.DIM: "2",
    Attribute.ITALIC: "3",
    Attribute.UNDERLINE: "4",
    Attribute.BLINK: "5",
    Attribute.BLINK2: "6",
    Attribute.REVERSE: "7",
    Attribute.CONCEAL: "8",
    Attribute.STRIKE: "9",
    Attribute.UNDERLINE2: "21",
    Attribute.FRAME: "51",
    Attribute.ENCIRCLE: "52",
    Attribute.OVERLINE: "53",
}

ATTRIBUTE_NAMES: dict[str, Attribute] = {attribute.name.lower(): attribute for attribute in Attribute}

ALL_ATTRIBUTES_MASK = (1 << len(Attribute)) - 1


class _AttributeBit:
    """Read one attribute from a style: True, False, or None when unset."""

    def __init__(self, attribute: Attribute):
        self.bit = attribute.bit

    def __get__(self, style: Optional[Style], owner: type) -> Any:
        if style is None:
            return self
        if style._set_attributes & self.bit:
            return bool(style._attributes & self.bit)
        return None


class Style:
    """
    A terminal style.

    Holds optional foreground and background colors, a hyperlink, metadata,
    and 13 boolean attributes. Each attribute is either unset (None) or
    explicitly True/False; the two are tracked in separate bit masks so
    that an explicit False can override an inherited True when combining.

    Example:
        >>> style = Style.parse("bold red on blue")
        >>> style.bold, style.italic
        (True, None)
        >>> (style + Style(bold=False)).bold
        False
    """

    __slots__ = ("_color", "_bgcolor", "_set_attributes", "_attributes", "_link", "_meta", "_hash")

    bold = _AttributeBit(Attribute.BOLD)
    dim = _AttributeBit(Attribute.DIM)
    italic = _AttributeBit(Attribute.ITALIC)
    underline = _AttributeBit(Attribute.UNDERLINE)
    blink = _AttributeBit(Attribute.BLINK)
    blink2 = _AttributeBit(Attribute.BLINK2)
    reverse = _AttributeBit(Attribute.REVERSE)
    conceal = _AttributeBit(Attribute.CONCEAL)
    strike = _AttributeBit(Attribute.STRIKE)
    underline2 = _AttributeBit(Attribute.UNDERLINE2)
    frame = _AttributeBit(Attribute.FRAME)
    encircle = _AttributeBit(Attribute.ENCIRCLE)
    overline = _AttributeBit(Attribute.OVERLINE)

    def __init__(
        self,
        *,
        color: Optional[ColorLike] = None,
        bgcolor: Optional[ColorLike] = None,
        bold: Optional[bool] = None,
        dim: Optional[bool] = None,
        italic: Optional[bool] = None,
        underline: Optional[bool] = None,
        blink: Optional[bool] = None,
        blink2: Optional[bool] = None,
        reverse: Optional[bool] = None,
        conceal: Optional[bool] = None,
        strike: Optional[bool] = None,
        underline2: Optional[bool] = None,
        frame: Optional[bool] = None,
        encircle: Optional[bool] = None,
        overline: Optional[bool] = None,
        link: Optional[str] = None,
        meta: Optional[Mapping[str, Any]] = None,
    ):
        values = (
            bold, dim, italic, underline, blink, blink2, reverse,
            conceal, strike, underline2, frame, encircle, overline,
        )
        set_attributes = 0
        attributes = 0
        for attribute, value in zip(Attribute, values):
            if value is None:
                continue
            set_attributes |= attribute.bit
            if value:
                attributes |= attribute.bit

        self._init(
            resolve_color(color),
            resolve_color(bgcolor),
            set_attributes,
            attributes,
            link,
            meta,
        )

    def _init(
        self,
        color: Optional[Color],
        bgcolor: Optional[Color],
        set_attributes: int,
        attributes: int,
        link: Optional[str],
        meta: Optional[Mapping[str, Any]],
    ) -> None:
        self._color = color
        self._bgcolor = bgcolor
        self._set_attributes = set_attributes & ALL_ATTRIBUTES_MASK
        self._attributes = attributes & self._set_attributes
        self._link = link or None
        self._meta = MappingProxyType(dict(meta)) if meta else None
        self._hash = hash((color, bgcolor, self._set_attributes, self._attributes, self._link))

    @classmethod
    def _from_parts(
        cls,
        color: Optional[Color],
        bgcolor: Optional[Color],
        set_attributes: int,
        attributes: int,
        link: Optional[str] = None,
        meta: Optional[Mapping[str, Any]] = None,
    ) -> Style:
        style = cls.__new__(cls)
        style._init(color, bgcolor, set_attributes, attributes, link, meta)
        return style

    @property
    def color(self) -> Optional[Color]:
        return self._color

    @property
    def bgcolor(self) -> Optional[Color]:
        return self._bgcolor

    @property
    def link(self) -> Optional[str]:
        return self._link

    @property
    def meta(self) -> Optional[Mapping[str, Any]]:
        return self._meta

    @property
    def set_mask(self) -> int:
        """Bit mask of attributes that are explicitly set."""
        return self._set_attributes

    @property
    def value_mask(self) -> int:
        """Bit mask of attribute values; only meaningful where set_mask has the bit."""
        return self._attributes

    def get(self, attribute: Attribute | str) -> Optional[bool]:
        """Get an attribute by enum member or name."""
        if isinstance(attribute, str):
            attribute = ATTRIBUTE_NAMES[attribute.lower()]
        if self._set_attributes & attribute.bit:
            return bool(self._attributes & attribute.bit)
        return None

    @property
    def is_blank(self) -> bool:
        """True if no color, background, attribute or link is set."""
        return (
            self._color is None
            and self._bgcolor is None
            and not self._set_attributes
            and self._link is None
        )

    @property
    def _is_null(self) -> bool:
        return self.is_blank and self._meta is None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Style):
            return NotImplemented
        return (
            self._hash == other._hash
            and self._color == other._color
            and self._bgcolor == other._bgcolor
            and self._set_attributes == other._set_attributes
            and self._attributes == other._attributes
            and self._link == other._link
            and self._meta == other._meta
        )

    def __hash__(self) -> int:
        return self._hash

    def __str__(self) -> str:
        """A definition that parses back to an equal style (metadata aside)."""
        parts: list[str] = []
        for attribute in Attribute:
            value = self.get(attribute)
            if value is None:
                continue
            name = attribute.name.lower()
            parts.append(name if value else f"not {name}")
        if self._color is not None:
            parts.append(_color_token(self._color))
        if self._bgcolor is not None:
            parts.append(f"on {_color_token(self._bgcolor)}")
        if self._link is not None:
            parts.append(f"link {self._link}")
        return " ".join(parts) or "none"

    def __repr__(self) -> str:
        return f"Style.parse({str(self)!r})"

    def __add__(self, other: Optional[Style]) -> Style:
        if other is not None and not isinstance(other, Style):
            return NotImplemented
        return self.combine(other)

    def combine(self, other: Optional[Style]) -> Style:
        """
        Layer another style on top of this one.

        Colors and link come from `other` when it has them. Attributes
        explicitly set in `other` win outright, including an explicit False;
        everything else is inherited. Metadata is merged with `other` winning
        per key. The operation is associative and the null style is its
        identity.
        """
        if other is None or other._is_null:
            return self
        if self._is_null:
            return other

        if self._meta and other._meta:
            meta: Optional[Mapping[str, Any]] = {**self._meta, **other._meta}
        else:
            meta = other._meta or self._meta

        return Style._from_parts(
            other._color or self._color,
            other._bgcolor or self._bgcolor,
            self._set_attributes | other._set_attributes,
            (self._attributes & ~other._set_attributes) | (other._attributes & other._set_attributes),
            other._link or self._link,
            meta,
        )

    @classmethod
    def chain(cls, *styles: Optional[Style]) -> Style:
        """Combine styles left to right."""
        return reduce(lambda combined, style: combined.combine(style), styles, cls.null())

    def without_color(self) -> Style:
        """A copy with foreground and background removed."""
        return Style._from_parts(
            None, None, self._set_attributes, self._attributes, self._link, self._meta
        )

    def background_style(self) -> Style:
        """A style with only this style's background color."""
        return Style._from_parts(None, self._bgcolor, 0, 0)

    def render(
        self,
        color_system: ColorSystem = ColorSystem.TRUECOLOR,
        theme: Optional[TerminalTheme] = None,
    ) -> str:
        """
        The SGR escape sequence for this style, or '' if it sets nothing.

        Attribute codes come first in attribute order, then the foreground
        and background color codes converted for `color_system`.
        """
        codes: list[str] = []
        enabled = self._attributes & self._set_attributes
        if enabled:
            codes.extend(attribute.sgr for attribute in Attribute if enabled & attribute.bit)
        if self._color is not None:
            codes.extend(self._color.for_system(color_system, theme).ansi_codes(foreground=True))
        if self._bgcolor is not None:
            codes.extend(self._bgcolor.for_system(color_system, theme).ansi_codes(foreground=False))
        if not codes:
            return ""
        return f"{CSI}{';'.join(codes)}m"

    @classmethod
    def null(cls) -> Style:
        """The empty style: nothing set, no metadata."""
        return NULL_STYLE

    @classmethod
    def blank(cls) -> Style:
        return NULL_STYLE

    @classmethod
    def from_color(
        cls, color: Optional[ColorLike] = None, bgcolor: Optional[ColorLike] = None
    ) -> Style:
        return cls(color=color, bgcolor=bgcolor)

    @classmethod
    def from_meta(cls, meta: Mapping[str, Any]) -> Style:
        return cls(meta=meta)

    @classmethod
    def normalize(cls, definition: str) -> str:
        """Parse a definition and print it back in canonical form."""
        return str(cls.parse(definition))

    @classmethod
    def parse(cls, definition: StyleLike) -> Style:
        """
        Parse a style definition such as 'bold not italic red on #003366'.

        Tokens are attribute names (optionally after 'not'), 'link <url>',
        and colors (optionally after 'on' for the background). Tokens that
        are neither an attribute nor a valid color are logged and dropped.
        Results are memoized per definition string.
        """
        if isinstance(definition, Style):
            return definition
        return get_caches().styles.get_or_compute(definition, lambda: cls._parse(definition))

    @classmethod
    def _parse(cls, definition: str) -> Style:
        tokens = definition.split()
        if not tokens or (len(tokens) == 1 and tokens[0].lower() == "none"):
            return cls.null()

        color: Optional[Color] = None
        bgcolor: Optional[Color] = None
        link: Optional[str] = None
        set_attributes = 0
        attributes = 0

        index = 0
        while index < len(tokens):
            token = tokens[index]
            word = token.lower()
            index += 1
            following = tokens[index] if index < len(tokens) else None

            if word == "not" and following is not None and following.lower() in ATTRIBUTE_NAMES:
                attribute = ATTRIBUTE_NAMES[following.lower()]
                set_attributes |= attribute.bit
                attributes &= ~attribute.bit
                index += 1
            elif word in ATTRIBUTE_NAMES:
                attribute = ATTRIBUTE_NAMES[word]
                set_attributes |= attribute.bit
                attributes |= attribute.bit
            elif word == "link" and following is not None:
                link = following
                index += 1
            elif word == "on" and following is not None:
                bgcolor = _parse_token_color(following, definition) or bgcolor
                index += 1
            else:
                color = _parse_token_color(token, definition) or color

        return cls._from_parts(color, bgcolor, set_attributes, attributes, link)


StyleLike = Union[Style, str]

NULL_STYLE = Style()


def _parse_token_color(token: str, definition: str) -> Optional[Color]:
    try:
        return Color.parse(token)
    except ColorParseError:
        logger.warning("Ignoring unrecognized token %r in style %r", token, definition)
        return None


def _color_token(color: Color) -> str:
    if color.triplet is not None and any(char.isspace() for char in color.name):
        return color.triplet.hex
    return color.name


def resolve_style(style: Optional[StyleLike]) -> Optional[Style]:
    """Parse a style given as a string, pass through a Style or None."""
    if style is None:
        return None
    return Style.parse(style)
