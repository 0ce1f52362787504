"""Styled text, spans and console markup."""

from ansi_cells.text.span import Span
from ansi_cells.text.text import Text

__all__ = ["Span", "Text"]
