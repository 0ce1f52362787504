"""Segments and their serialization to ANSI escape codes."""

from ansi_cells.render.control import ControlCode, ControlType, strip_ansi, visible_len
from ansi_cells.render.segment import Segment

__all__ = ["ControlCode", "ControlType", "Segment", "strip_ansi", "visible_len"]
