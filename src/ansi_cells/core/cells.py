"""Terminal cell widths: how many columns a string occupies."""

from __future__ import annotations

from wcwidth import wcwidth

from ansi_cells.core.cache import get_caches


def char_width(char: str) -> int:
    """
    Columns taken by a single code point: 0, 1 or 2.

    Combining marks and zero-width format characters are 0, East Asian
    wide/fullwidth characters are 2. Control characters that are not
    zero-width (tab, newline, ...) count as 1 and are not expanded.
    """
    if not char:
        return 0
    if char.isascii() and char.isprintable():
        return 1
    return get_caches().widths.get_or_compute(char, lambda: _code_point_width(char))


def _code_point_width(char: str) -> int:
    width = wcwidth(char)
    if width < 0:
        return 1
    return width


def is_zero_width(char: str) -> bool:
    return bool(char) and char_width(char) == 0


def is_wide(char: str) -> bool:
    return bool(char) and char_width(char) == 2


def cell_len(text: str) -> int:
    """Width of a string in terminal columns (uncached)."""
    if text.isascii() and text.isprintable():
        return len(text)
    return sum(char_width(char) for char in text)


def cached_cell_len(text: str) -> int:
    """Width of a string in terminal columns, memoized per string."""
    if text.isascii() and text.isprintable():
        return len(text)
    return get_caches().widths.get_or_compute(text, lambda: cell_len(text))


def set_cell_size(text: str, total: int) -> str:
    """Crop or pad text with spaces so it is exactly `total` columns wide."""
    if total <= 0:
        return ""
    size = cached_cell_len(text)
    if size == total:
        return text
    if size < total:
        return text + " " * (total - size)

    chars: list[str] = []
    width = 0
    for char in text:
        char_size = char_width(char)
        if width + char_size > total:
            break
        chars.append(char)
        width += char_size
    # A wide glyph straddling the edge leaves one column to fill
    return "".join(chars) + " " * (total - width)


def chop_cells(text: str, width: int) -> list[str]:
    """
    Break text into pieces of at most `width` columns.

    A glyph wider than `width` gets a piece of its own.
    """
    if width <= 0:
        return [text] if text else []

    lines: list[str] = []
    current: list[str] = []
    current_width = 0
    for char in text:
        char_size = char_width(char)
        if current and current_width + char_size > width:
            lines.append("".join(current))
            current = []
            current_width = 0
        current.append(char)
        current_width += char_size
    if current:
        lines.append("".join(current))
    return lines
