"""Decode text containing ANSI escape sequences back into styled Text."""

from __future__ import annotations

import re
from typing import Iterator, Optional

from ansi_cells.core.color import Color
from ansi_cells.core.style import ALL_ATTRIBUTES_MASK, Attribute, Style
from ansi_cells.text.text import Text

# SGR code -> attribute it switches on
_SGR_ON: dict[int, Attribute] = {
    1: Attribute.BOLD,
    2: Attribute.DIM,
    3: Attribute.ITALIC,
    4: Attribute.UNDERLINE,
    5: Attribute.BLINK,
    6: Attribute.BLINK2,
    7: Attribute.REVERSE,
    8: Attribute.CONCEAL,
    9: Attribute.STRIKE,
    21: Attribute.UNDERLINE2,
    51: Attribute.FRAME,
    52: Attribute.ENCIRCLE,
    53: Attribute.OVERLINE,
}

# SGR code -> attributes it switches off
_SGR_OFF: dict[int, tuple[Attribute, ...]] = {
    22: (Attribute.BOLD, Attribute.DIM),
    23: (Attribute.ITALIC,),
    24: (Attribute.UNDERLINE, Attribute.UNDERLINE2),
    25: (Attribute.BLINK, Attribute.BLINK2),
    27: (Attribute.REVERSE,),
    28: (Attribute.CONCEAL,),
    29: (Attribute.STRIKE,),
    54: (Attribute.FRAME, Attribute.ENCIRCLE),
    55: (Attribute.OVERLINE,),
}


class AnsiDecoder:
    """
    Stateful decoder turning ANSI-styled text into Text objects.

    Interprets SGR sequences into styles; other CSI and OSC sequences are
    dropped. The current style carries over from one line to the next, as
    it would on a terminal, and across calls until reset() or an SGR 0.

    Example:
        >>> decoder = AnsiDecoder()
        >>> [line.plain for line in decoder.decode("\\x1b[1mbold\\x1b[0m\\nplain")]
        ['bold', 'plain']
    """

    # SGR, other CSI, OSC, charset designation, or a stray ESC
    ESCAPE_PATTERN = re.compile(
        r'\x1b\[(?P<params>[0-9;:?]*)(?P<command>[A-Za-z~])'
        r'|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)'
        r'|\x1b[()][0-9AB]'
        r'|\x1b'
    )

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        """Return to the unstyled state."""
        self.color: Optional[Color] = None
        self.bgcolor: Optional[Color] = None
        self.attributes = 0

    @property
    def style(self) -> Optional[Style]:
        """The style in effect, or None if nothing is set."""
        if self.color is None and self.bgcolor is None and not self.attributes:
            return None
        return Style._from_parts(self.color, self.bgcolor, self.attributes, self.attributes)

    def decode(self, text: str) -> Iterator[Text]:
        """Decode text into one Text per line."""
        for line in text.splitlines():
            yield self.decode_line(line)

    def decode_line(self, line: str) -> Text:
        """Decode a single line; a carriage return restarts the line."""
        line = line.rsplit("\r", 1)[-1]
        text = Text()
        position = 0
        for match in self.ESCAPE_PATTERN.finditer(line):
            if match.start() > position:
                text.append(line[position:match.start()], self.style)
            position = match.end()
            if match.group("command") == "m":
                self._handle_sgr(match.group("params"))
        if position < len(line):
            text.append(line[position:], self.style)
        return text

    def _handle_sgr(self, params_str: str) -> None:
        """Apply SGR parameters to the current state."""
        params: list[int] = []
        for part in params_str.replace(":", ";").split(";"):
            try:
                params.append(int(part) if part else 0)
            except ValueError:
                return
        if not params:
            params = [0]

        i = 0
        while i < len(params):
            p = params[i]

            if p == 0:
                self.reset()
            elif p in _SGR_ON:
                self.attributes |= _SGR_ON[p].bit
            elif p in _SGR_OFF:
                for attribute in _SGR_OFF[p]:
                    self.attributes &= ~attribute.bit
            elif 30 <= p <= 37:
                self.color = Color.from_ansi(p - 30)
            elif 40 <= p <= 47:
                self.bgcolor = Color.from_ansi(p - 40)
            elif 90 <= p <= 97:
                self.color = Color.from_ansi(p - 90 + 8)
            elif 100 <= p <= 107:
                self.bgcolor = Color.from_ansi(p - 100 + 8)
            elif p == 39:
                self.color = None
            elif p == 49:
                self.bgcolor = None
            elif p in (38, 48):
                color, consumed = self._extended_color(params, i + 1)
                if color is not None:
                    if p == 38:
                        self.color = color
                    else:
                        self.bgcolor = color
                i += consumed

            i += 1

        self.attributes &= ALL_ATTRIBUTES_MASK

    @staticmethod
    def _extended_color(params: list[int], index: int) -> tuple[Optional[Color], int]:
        """Read '5;n' or '2;r;g;b' after a 38/48; returns the color and params consumed."""
        if index >= len(params):
            return None, 0
        mode = params[index]
        if mode == 5 and index + 1 < len(params):
            return Color.from_ansi(params[index + 1]), 2
        if mode == 2 and index + 3 < len(params):
            red, green, blue = params[index + 1:index + 4]
            return Color.from_rgb(red, green, blue), 4
        return None, len(params) - index
