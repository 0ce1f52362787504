"""Spans: half-open style ranges over a text buffer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ansi_cells.core.style import Style, StyleLike


@dataclass(frozen=True)
class Span:
    """A style applied to the characters in [start, end)."""
    start: int
    end: int
    style: StyleLike

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"span start {self.start} is after end {self.end}")
        if not isinstance(self.style, Style):
            object.__setattr__(self, "style", Style.parse(self.style))

    def __len__(self) -> int:
        return self.end - self.start

    def __repr__(self) -> str:
        return f"Span({self.start}, {self.end}, {str(self.style)!r})"

    def overlaps(self, start: int, end: int) -> bool:
        """True if this span shares at least one position with [start, end)."""
        return self.start < end and self.end > start

    def move(self, offset: int) -> Span:
        return Span(self.start + offset, self.end + offset, self.style)

    def clip(self, start: int, end: int) -> Optional[Span]:
        """The part of this span inside [start, end), or None if they don't overlap."""
        if not self.overlaps(start, end):
            return None
        return Span(max(self.start, start), min(self.end, end), self.style)

    def adjust_insert(self, position: int, length: int) -> Span:
        """Shift or stretch after `length` characters are inserted at `position`."""
        if position <= self.start:
            return self.move(length)
        if position < self.end:
            return Span(self.start, self.end + length, self.style)
        return self

    def adjust_delete(self, position: int, length: int) -> Optional[Span]:
        """
        Shift or shrink after `length` characters are deleted at `position`.

        Returns None when the deletion covers the whole span.
        """
        delete_end = position + length
        if delete_end <= self.start:
            return self.move(-length)
        if position >= self.end:
            return self
        if position <= self.start and delete_end >= self.end:
            return None
        if position <= self.start:
            return Span(position, self.end - length, self.style)
        if delete_end >= self.end:
            return Span(self.start, position, self.style)
        return Span(self.start, self.end - length, self.style)
