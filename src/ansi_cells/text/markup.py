"""
Console markup: inline style tags such as '[bold red]alert[/]'.

An opening tag holds a style definition. '[/]' closes the innermost open
tag and '[/name]' the innermost open tag with that exact definition;
closers with nothing to close are ignored. Backslash escapes ('\\[',
'\\]', '\\\\') produce literal characters, and bracketed text that does not
look like a style ('[1, 2]', '[]') is kept as is.
"""

from __future__ import annotations

import re
from operator import attrgetter
from typing import NamedTuple, Optional

from ansi_cells.core.color import ColorSystem
from ansi_cells.core.style import Style, StyleLike
from ansi_cells.core.theme import TerminalTheme
from ansi_cells.text.span import Span
from ansi_cells.text.text import Text

_TOKEN_PATTERN = re.compile(r"(?P<escape>\\[\[\]\\])|\[(?P<closing>/)?(?P<tag>[^\[\]]*)\]")
_TAG_NAME = re.compile(r"[a-zA-Z#@]")
_ESCAPE_PATTERN = re.compile(r"([\[\]\\])")
_UNESCAPE_PATTERN = re.compile(r"\\([\[\]\\])")


class Tag(NamedTuple):
    """A style tag found in markup."""
    position: int
    closing: bool
    name: str
    markup: str


def _is_tag(closing: bool, name: str) -> bool:
    if closing:
        return not name or bool(_TAG_NAME.match(name))
    return bool(_TAG_NAME.match(name))


def parse(markup: str, style: Optional[StyleLike] = None) -> Text:
    """Parse markup into a Text with one span per closed (or unclosed) tag."""
    text = Text(style=style)
    pieces: list[str] = []
    length = 0
    # (tag name, style, start offset)
    open_tags: list[tuple[str, Style, int]] = []
    spans: list[Span] = []

    position = 0
    for match in _TOKEN_PATTERN.finditer(markup):
        literal = markup[position:match.start()]
        pieces.append(literal)
        length += len(literal)
        position = match.end()

        if match.group("escape"):
            pieces.append(match.group("escape")[1])
            length += 1
            continue

        closing = match.group("closing") is not None
        name = match.group("tag").strip()
        if not _is_tag(closing, name):
            pieces.append(match.group())
            length += len(match.group())
            continue

        if not closing:
            open_tags.append((name, Style.parse(name), length))
            continue

        index = _find_open_tag(open_tags, name)
        if index is None:
            continue
        _name, tag_style, start = open_tags.pop(index)
        if start < length:
            spans.append(Span(start, length, tag_style))

    tail = markup[position:]
    pieces.append(tail)
    length += len(tail)

    # Tags left open run to the end
    while open_tags:
        _name, tag_style, start = open_tags.pop()
        if start < length:
            spans.append(Span(start, length, tag_style))

    text.append("".join(pieces))
    # Outer tags first so inner tags layer on top of them
    text.spans.extend(sorted(reversed(spans), key=attrgetter("start")))
    return text


def _find_open_tag(open_tags: list[tuple[str, Style, int]], name: str) -> Optional[int]:
    if not open_tags:
        return None
    if not name:
        return len(open_tags) - 1
    for index in range(len(open_tags) - 1, -1, -1):
        if open_tags[index][0] == name:
            return index
    return None


def render(
    markup: str,
    color_system: ColorSystem = ColorSystem.TRUECOLOR,
    theme: Optional[TerminalTheme] = None,
) -> str:
    """Parse markup and render it straight to an ANSI string."""
    return parse(markup).render(color_system, theme)


def escape(text: str) -> str:
    """Escape brackets and backslashes so text is taken literally by parse()."""
    return _ESCAPE_PATTERN.sub(r"\\\1", text)


def unescape(text: str) -> str:
    return _UNESCAPE_PATTERN.sub(r"\1", text)


def strip(markup: str) -> str:
    """The plain text of markup, tags removed and escapes resolved."""
    return parse(markup).plain


def contains_markup(text: str) -> bool:
    return bool(extract_tags(text))


def extract_tags(markup: str) -> list[Tag]:
    tags: list[Tag] = []
    for match in _TOKEN_PATTERN.finditer(markup):
        if match.group("escape"):
            continue
        closing = match.group("closing") is not None
        name = match.group("tag").strip()
        if _is_tag(closing, name):
            tags.append(Tag(match.start(), closing, name, match.group()))
    return tags


def validate(markup: str) -> list[str]:
    """
    Problems with the tag structure of markup; empty when it is well formed.

    Reports closing tags with nothing to close and tags never closed.
    """
    errors: list[str] = []
    open_tags: list[str] = []

    for tag in extract_tags(markup):
        if not tag.closing:
            open_tags.append(tag.name)
            continue
        if not open_tags:
            errors.append(f"Unexpected closing tag {tag.markup} at position {tag.position}")
            continue
        if not tag.name:
            open_tags.pop()
        elif tag.name in open_tags:
            del open_tags[len(open_tags) - 1 - open_tags[::-1].index(tag.name)]
        else:
            errors.append(f"Unmatched closing tag {tag.markup} at position {tag.position}")

    errors.extend(f"Unclosed tag [{name}]" for name in open_tags)
    return errors


def is_valid(markup: str) -> bool:
    return not validate(markup)
