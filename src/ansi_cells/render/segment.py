"""Segments: the unit of styled output, and the ANSI serializer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from ansi_cells.core.cells import cached_cell_len, char_width
from ansi_cells.core.color import ColorSystem
from ansi_cells.core.constants import RESET
from ansi_cells.core.style import Style
from ansi_cells.core.theme import TerminalTheme
from ansi_cells.render.control import ControlCode, generate


@dataclass(frozen=True)
class Segment:
    """
    A piece of text with an optional style, or a control segment.

    Control segments carry control codes and no text; a segment with both
    is rejected.
    """
    text: str = ""
    style: Optional[Style] = None
    control: Optional[tuple[ControlCode, ...]] = None

    def __post_init__(self) -> None:
        if self.control is not None:
            if self.text:
                raise ValueError("a control segment cannot carry text")
            object.__setattr__(self, "control", tuple(self.control))

    def __repr__(self) -> str:
        if self.control is not None:
            return f"Segment(control={self.control!r})"
        if self.style is not None:
            return f"Segment({self.text!r}, {self.style!r})"
        return f"Segment({self.text!r})"

    @property
    def is_control(self) -> bool:
        return self.control is not None

    @property
    def cell_length(self) -> int:
        """Columns this segment occupies; 0 for control segments."""
        if self.control is not None:
            return 0
        return cached_cell_len(self.text)

    def split_cells(self, cut: int) -> tuple[Segment, Segment]:
        """
        Split at a column offset, clamped to the segment's width.

        If the cut falls inside a double-width glyph, that glyph is replaced
        by a space on each side of the cut so both halves have exact widths.
        """
        if self.control is not None or cut >= self.cell_length:
            return self, Segment("", self.style)
        if cut <= 0:
            return Segment("", self.style), self

        before, after = _split_text(self.text, cut)
        return Segment(before, self.style), Segment(after, self.style)

    @classmethod
    def line(cls) -> Segment:
        """A newline segment."""
        return cls("\n")

    @classmethod
    def blank(cls, cell_count: int, style: Optional[Style] = None) -> Segment:
        """Spaces filling `cell_count` columns."""
        return cls(" " * max(0, cell_count), style)

    @classmethod
    def from_control(cls, *codes: ControlCode) -> Segment:
        """A control segment, e.g. Segment.from_control((ControlType.CURSOR_UP, 2))."""
        return cls("", None, codes)

    @classmethod
    def apply_style(
        cls,
        segments: Iterable[Segment],
        style: Optional[Style] = None,
        post_style: Optional[Style] = None,
    ) -> list[Segment]:
        """
        Layer styles around each text segment's own style.

        `style` goes underneath the segment style, `post_style` on top.
        """
        result: list[Segment] = []
        for segment in segments:
            if segment.control is not None:
                result.append(segment)
                continue
            new_style = Style.chain(style, segment.style, post_style)
            result.append(cls(segment.text, None if new_style == Style.null() else new_style))
        return result

    @classmethod
    def filter_control(cls, segments: Iterable[Segment], is_control: bool = False) -> list[Segment]:
        return [segment for segment in segments if segment.is_control == is_control]

    @classmethod
    def split_lines(cls, segments: Iterable[Segment]) -> list[list[Segment]]:
        """
        Split segments into lines on every newline.

        Text on either side of a newline keeps its segment's style. A
        trailing newline does not start an extra empty line.
        """
        lines: list[list[Segment]] = []
        current: list[Segment] = []

        for segment in segments:
            if segment.control is not None or "\n" not in segment.text:
                current.append(segment)
                continue
            parts = segment.text.split("\n")
            for index, part in enumerate(parts):
                if part:
                    current.append(cls(part, segment.style))
                if index < len(parts) - 1:
                    lines.append(current)
                    current = []

        if current:
            lines.append(current)
        return lines

    @classmethod
    def split_and_crop_lines(
        cls,
        segments: Iterable[Segment],
        width: int,
        style: Optional[Style] = None,
        pad: bool = True,
        include_new_lines: bool = True,
    ) -> list[list[Segment]]:
        """Split into lines and fit each line to `width` columns."""
        result: list[list[Segment]] = []
        for line in cls.split_lines(segments):
            adjusted = cls.adjust_line_length(line, width, style=style, pad=pad)
            if include_new_lines:
                adjusted = adjusted + [cls.line()]
            result.append(adjusted)
        return result

    @classmethod
    def adjust_line_length(
        cls,
        line: list[Segment],
        length: int,
        style: Optional[Style] = None,
        pad: bool = True,
    ) -> list[Segment]:
        """Crop a line that is too long; pad one that is too short if `pad`."""
        line_length = cls.get_line_length(line)
        if line_length < length:
            if pad:
                return line + [cls.blank(length - line_length, style)]
            return list(line)
        if line_length > length:
            return cls.crop_line(line, length)
        return list(line)

    @classmethod
    def crop_line(cls, line: Iterable[Segment], max_width: int) -> list[Segment]:
        """Keep segments up to `max_width` columns, splitting the one that crosses it."""
        result: list[Segment] = []
        remaining = max_width
        for segment in line:
            if remaining <= 0:
                break
            width = segment.cell_length
            if width <= remaining:
                result.append(segment)
                remaining -= width
            else:
                before, _after = segment.split_cells(remaining)
                result.append(before)
                break
        return result

    @classmethod
    def get_line_length(cls, line: Iterable[Segment]) -> int:
        return sum(segment.cell_length for segment in line)

    @classmethod
    def get_shape(cls, lines: list[list[Segment]]) -> tuple[int, int]:
        """(width, height) of a list of lines."""
        width = max((cls.get_line_length(line) for line in lines), default=0)
        return width, len(lines)

    @classmethod
    def simplify(cls, segments: Iterable[Segment]) -> list[Segment]:
        """
        Merge runs of adjacent text segments that share a style.

        Appearance is unchanged; only the number of style transitions drops.
        Control segments always break a run.
        """
        result: list[Segment] = []
        for segment in segments:
            if (
                result
                and segment.control is None
                and result[-1].control is None
                and result[-1].style == segment.style
            ):
                last = result.pop()
                result.append(cls(last.text + segment.text, last.style))
            else:
                result.append(segment)
        return result

    @classmethod
    def render(
        cls,
        segments: Iterable[Segment],
        color_system: ColorSystem = ColorSystem.TRUECOLOR,
        theme: Optional[TerminalTheme] = None,
    ) -> str:
        """
        Serialize segments to a string with ANSI escape codes.

        SGR codes are only written when the style changes between text
        segments: a reset if a style is active, then the new style. One
        reset closes the output if a style is still active at the end.
        """
        output: list[str] = []
        last_style: Optional[Style] = None
        active = False

        for segment in segments:
            if segment.control is not None:
                output.extend(generate(code) for code in segment.control)
                continue
            if not segment.text:
                continue

            style = segment.style
            if style != last_style:
                if active:
                    output.append(RESET)
                    active = False
                if style is not None:
                    sgr = style.render(color_system, theme)
                    if sgr:
                        output.append(sgr)
                        active = True
                last_style = style
            output.append(segment.text)

        if active:
            output.append(RESET)
        return "".join(output)


def _split_text(text: str, cut: int) -> tuple[str, str]:
    """Split text at column `cut` (0 < cut < width of text)."""
    width = 0
    for index, char in enumerate(text):
        char_size = char_width(char)
        if width + char_size > cut:
            # Wide glyph straddling the cut
            return text[:index] + " ", " " + text[index + 1:]
        width += char_size
        if width == cut:
            end = index + 1
            # Combining marks stay with their base character
            while end < len(text) and char_width(text[end]) == 0:
                end += 1
            return text[:end], text[end:]
    return text, ""
