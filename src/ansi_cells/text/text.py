"""Styled text: a plain string plus style spans layered over it."""

from __future__ import annotations

import re
from bisect import insort
from typing import Iterable, Optional, Pattern, Union

from ansi_cells.core.cells import cached_cell_len, cell_len, char_width
from ansi_cells.core.color import ColorSystem
from ansi_cells.core.style import Style, StyleLike, resolve_style
from ansi_cells.core.theme import TerminalTheme
from ansi_cells.render.segment import Segment
from ansi_cells.text.span import Span

_WHITESPACE_SPLIT = re.compile(r"(\s+)")

TextPart = Union[str, "Text", tuple[str, Optional[StyleLike]]]


class Text:
    """
    Mutable styled text.

    The buffer is a plain string; styling is a list of Spans in the order
    they were attached. Overlapping spans are kept as they are and only
    resolved when the text is turned into segments, where later spans
    layer on top of earlier ones and all of them on top of the base style.

    Mutating methods return the Text so calls can be chained.

    Example:
        >>> text = Text("Hello, ")
        >>> text.append("World", style="bold red")
        Text('Hello, World', spans=1)
        >>> text.render(ColorSystem.STANDARD)
        'Hello, \\x1b[1;31mWorld\\x1b[0m'
    """

    def __init__(
        self,
        text: str = "",
        style: Optional[StyleLike] = None,
        spans: Optional[Iterable[Span]] = None,
    ):
        self._plain = text
        self._style = resolve_style(style)
        self._spans: list[Span] = list(spans) if spans else []

    @property
    def plain(self) -> str:
        return self._plain

    @property
    def spans(self) -> list[Span]:
        return self._spans

    @property
    def style(self) -> Optional[Style]:
        """Base style, under every span."""
        return self._style

    @style.setter
    def style(self, style: Optional[StyleLike]) -> None:
        self._style = resolve_style(style)

    @property
    def cell_length(self) -> int:
        return cached_cell_len(self._plain)

    def __len__(self) -> int:
        return len(self._plain)

    def __bool__(self) -> bool:
        return bool(self._plain)

    def __str__(self) -> str:
        return self._plain

    def __repr__(self) -> str:
        return f"Text({self._plain!r}, spans={len(self._spans)})"

    def __contains__(self, other: object) -> bool:
        if isinstance(other, Text):
            return other._plain in self._plain
        if isinstance(other, str):
            return other in self._plain
        return False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Text):
            return NotImplemented
        return (
            self._plain == other._plain
            and self._style == other._style
            and self._spans == other._spans
        )

    __hash__ = None  # type: ignore[assignment]

    def __add__(self, other: Union[Text, str]) -> Text:
        if not isinstance(other, (Text, str)):
            return NotImplemented
        result = self.copy()
        result.append(other)
        return result

    def __getitem__(self, key: Union[int, slice]) -> Text:
        if isinstance(key, int):
            length = len(self._plain)
            index = key + length if key < 0 else key
            if not 0 <= index < length:
                raise IndexError("Text index out of range")
            return self.slice(index, index + 1)
        if key.step not in (None, 1):
            raise TypeError("Text slices do not support a step")
        return self.slice(key.start or 0, key.stop)

    def _bounds(self, start: int, end: Optional[int]) -> tuple[int, int]:
        """Resolve negative indices and clamp to the buffer."""
        length = len(self._plain)
        if end is None:
            end = length
        if start < 0:
            start += length
        if end < 0:
            end += length
        return min(max(start, 0), length), min(max(end, 0), length)

    def copy(self) -> Text:
        return Text(self._plain, style=self._style, spans=self._spans)

    def append(self, text: Union[Text, str], style: Optional[StyleLike] = None) -> Text:
        """
        Append a string or another Text.

        With a style, a span covering exactly the appended characters is
        added (on top of any spans an appended Text brings along).
        """
        start = len(self._plain)
        if isinstance(text, Text):
            self.append_text(text)
        else:
            self._plain += text
        if style is not None and len(self._plain) > start:
            self._spans.append(Span(start, len(self._plain), Style.parse(style)))
        return self

    def append_text(self, text: Text) -> Text:
        """Append another Text, moving its spans to the new offset."""
        offset = len(self._plain)
        self._plain += text._plain
        self._spans.extend(span.move(offset) for span in text._spans)
        return self

    def stylize(self, style: StyleLike, start: int = 0, end: Optional[int] = None) -> Text:
        """
        Apply a style to [start, end).

        Indices are clamped to the text and may be negative to count from
        the end. Nothing is added for an empty range.
        """
        start, end = self._bounds(start, end)
        if start < end:
            self._spans.append(Span(start, end, Style.parse(style)))
        return self

    def stylize_all(self, style: StyleLike) -> Text:
        return self.stylize(style, 0, len(self._plain))

    def slice(self, start: int, end: Optional[int] = None) -> Text:
        """
        A new Text with the characters in [start, end).

        Spans overlapping the range are clipped to it and re-based to 0.
        """
        start, end = self._bounds(start, end)
        if start >= end:
            return Text("", style=self._style)

        spans = []
        for span in self._spans:
            clipped = span.clip(start, end)
            if clipped is not None:
                spans.append(clipped.move(-start))
        return Text(self._plain[start:end], style=self._style, spans=spans)

    def split(self, separator: str = "\n") -> list[Text]:
        """Split on a separator; every part keeps its slice of the spans."""
        if not separator:
            raise ValueError("separator must not be empty")

        parts: list[Text] = []
        position = 0
        for part in self._plain.split(separator):
            parts.append(self.slice(position, position + len(part)))
            position += len(part) + len(separator)
        return parts

    def rstrip(self) -> Text:
        """Remove trailing whitespace, clipping spans to what is left."""
        stripped = self._plain.rstrip()
        if len(stripped) < len(self._plain):
            length = len(stripped)
            self._plain = stripped
            self._spans = [
                Span(span.start, min(span.end, length), span.style)
                for span in self._spans
                if span.start < length
            ]
        return self

    def highlight_words(
        self, words: Iterable[str], style: StyleLike, case_sensitive: bool = True
    ) -> int:
        """Stylize every occurrence of the given words. Returns the number of matches."""
        alternatives = "|".join(re.escape(word) for word in words if word)
        if not alternatives:
            return 0
        flags = 0 if case_sensitive else re.IGNORECASE
        return self.highlight_regex(re.compile(alternatives, flags), style)

    def highlight_regex(self, pattern: Union[str, Pattern[str]], style: StyleLike) -> int:
        """Stylize every non-empty match of a regex. Returns the number of matches."""
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        count = 0
        for match in regex.finditer(self._plain):
            start, end = match.span()
            if start < end:
                self.stylize(style, start, end)
                count += 1
        return count

    def wrap(self, width: int) -> list[Text]:
        """
        Greedy word wrap to `width` columns.

        Words are runs of non-whitespace; whitespace between them is kept
        while it fits on the line and dropped where the line breaks. A word
        wider than `width` is broken one character at a time. Each line
        carries the spans of the characters it took, re-based to the line.

        A width of 0 or less, or text that already fits, gives a single
        copy of the text.
        Text that is nothing but whitespace wider than `width` gives one
        empty line.
        """
        if width <= 0 or self.cell_length <= width:
            return [self.copy()]

        lines: list[Text] = []
        line = Text("", style=self._style)
        line_width = 0

        def flush() -> None:
            nonlocal line, line_width
            line.rstrip()
            if line:
                lines.append(line)
            line = Text("", style=self._style)
            line_width = 0

        position = 0
        for token in _WHITESPACE_SPLIT.split(self._plain):
            if not token:
                continue
            start = position
            position += len(token)
            token_width = cell_len(token)

            if token.isspace():
                if lines and not line:
                    continue
                if line_width + token_width <= width:
                    line.append_text(self.slice(start, position))
                    line_width += token_width
                else:
                    flush()
            elif line_width + token_width <= width:
                line.append_text(self.slice(start, position))
                line_width += token_width
            elif token_width > width:
                if line:
                    flush()
                for offset, char in enumerate(token, start):
                    size = char_width(char)
                    if line and line_width + size > width:
                        flush()
                    line.append_text(self.slice(offset, offset + 1))
                    line_width += size
            else:
                flush()
                line.append_text(self.slice(start, position))
                line_width = token_width

        flush()
        if not lines:
            return [Text("", style=self._style)]
        return lines

    def to_segments(self) -> list[Segment]:
        """
        Resolve spans into a flat list of styled segments.

        Each maximal run of characters covered by the same set of spans
        becomes one segment, styled by the base style combined with the
        active spans in the order they were attached. A span ending where
        another starts does not cover the new span's first character.
        """
        if not self._plain:
            return []
        if not self._spans:
            return [Segment(self._plain, self._style)]

        length = len(self._plain)
        # (offset, 0 for end / 1 for start, span index): ends sort first
        events: list[tuple[int, int, int]] = []
        for index, span in enumerate(self._spans):
            start, end = min(span.start, length), min(span.end, length)
            if start < end:
                events.append((start, 1, index))
                events.append((end, 0, index))
        events.sort()

        segments: list[Segment] = []
        active: list[int] = []
        position = 0
        for offset, is_start, index in events:
            if offset > position:
                segments.append(Segment(self._plain[position:offset], self._style_for(active)))
                position = offset
            if is_start:
                insort(active, index)
            else:
                active.remove(index)
        if position < length:
            segments.append(Segment(self._plain[position:], self._style_for(active)))
        return segments

    def _style_for(self, active: list[int]) -> Optional[Style]:
        if not active:
            return self._style
        return Style.chain(self._style, *(self._spans[index].style for index in active))

    def render(
        self,
        color_system: ColorSystem = ColorSystem.TRUECOLOR,
        theme: Optional[TerminalTheme] = None,
    ) -> str:
        """The text as a string with ANSI escape codes."""
        return Segment.render(Segment.simplify(self.to_segments()), color_system, theme)

    @classmethod
    def assemble(cls, *parts: TextPart, style: Optional[StyleLike] = None) -> Text:
        """
        Build a Text from strings, (string, style) pairs and Texts.

        Example:
            >>> Text.assemble("Status: ", ("OK", "bold green")).plain
            'Status: OK'
        """
        text = cls(style=style)
        for part in parts:
            if isinstance(part, tuple):
                content, part_style = part
                text.append(content, part_style)
            else:
                text.append(part)
        return text

    @classmethod
    def styled(cls, content: str, style: StyleLike) -> Text:
        """Text with one span covering all of it."""
        return cls(content).stylize_all(style)

    @classmethod
    def from_markup(cls, markup: str, style: Optional[StyleLike] = None) -> Text:
        """Parse console markup such as '[bold red]alert[/]'."""
        from ansi_cells.text.markup import parse

        text = parse(markup)
        text.style = style
        return text
