"""Terminal control codes carried by control segments."""

from __future__ import annotations

import re
from enum import Enum
from typing import Callable, Union

from ansi_cells.core.cells import cell_len
from ansi_cells.core.constants import BEL, CSI, OSC, ST


class ControlType(Enum):
    """Control operations a control segment may carry."""
    BELL = "bell"
    CARRIAGE_RETURN = "carriage_return"
    HOME = "home"
    CLEAR = "clear"
    SHOW_CURSOR = "show_cursor"
    HIDE_CURSOR = "hide_cursor"
    ENABLE_ALT_SCREEN = "enable_alt_screen"
    DISABLE_ALT_SCREEN = "disable_alt_screen"
    CURSOR_UP = "cursor_up"
    CURSOR_DOWN = "cursor_down"
    CURSOR_FORWARD = "cursor_forward"
    CURSOR_BACKWARD = "cursor_backward"
    CURSOR_MOVE_TO_COLUMN = "cursor_move_to_column"
    CURSOR_MOVE_TO = "cursor_move_to"
    ERASE_IN_LINE = "erase_in_line"
    SET_WINDOW_TITLE = "set_window_title"


# (ControlType, *params), e.g. (ControlType.CURSOR_MOVE_TO, 10, 5)
ControlCode = Union[
    tuple[ControlType],
    tuple[ControlType, Union[int, str]],
    tuple[ControlType, int, int],
]

# CSI/OSC sequences and charset designations
_ANSI_PATTERN = re.compile(
    r'\x1b\[[0-9;?]*[A-Za-z~]'
    r'|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)'
    r'|\x1b[()][0-9AB]'
)


def bell() -> str:
    return BEL


def carriage_return() -> str:
    return "\r"


def home() -> str:
    return f"{CSI}H"


def clear(mode: int = 2) -> str:
    """Erase in display: 0 = cursor to end, 1 = start to cursor, 2 = whole screen."""
    return f"{CSI}{mode}J"


def show_cursor() -> str:
    return f"{CSI}?25h"


def hide_cursor() -> str:
    return f"{CSI}?25l"


def enable_alt_screen() -> str:
    return f"{CSI}?1049h"


def disable_alt_screen() -> str:
    return f"{CSI}?1049l"


def cursor_up(count: int = 1) -> str:
    return f"{CSI}{count}A" if count > 0 else ""


def cursor_down(count: int = 1) -> str:
    return f"{CSI}{count}B" if count > 0 else ""


def cursor_forward(count: int = 1) -> str:
    return f"{CSI}{count}C" if count > 0 else ""


def cursor_backward(count: int = 1) -> str:
    return f"{CSI}{count}D" if count > 0 else ""


def cursor_move_to_column(column: int = 1) -> str:
    """Move to a 1-based column."""
    return f"{CSI}{column}G"


def cursor_move_to(row: int = 1, column: int = 1) -> str:
    """Move to a 1-based row and column."""
    return f"{CSI}{row};{column}H"


def erase_in_line(mode: int = 2) -> str:
    """Erase in line: 0 = cursor to end, 1 = start to cursor, 2 = whole line."""
    return f"{CSI}{mode}K"


def set_window_title(title: str) -> str:
    return f"{OSC}2;{title}{ST}"


_GENERATORS: dict[ControlType, Callable[..., str]] = {
    ControlType.BELL: bell,
    ControlType.CARRIAGE_RETURN: carriage_return,
    ControlType.HOME: home,
    ControlType.CLEAR: clear,
    ControlType.SHOW_CURSOR: show_cursor,
    ControlType.HIDE_CURSOR: hide_cursor,
    ControlType.ENABLE_ALT_SCREEN: enable_alt_screen,
    ControlType.DISABLE_ALT_SCREEN: disable_alt_screen,
    ControlType.CURSOR_UP: cursor_up,
    ControlType.CURSOR_DOWN: cursor_down,
    ControlType.CURSOR_FORWARD: cursor_forward,
    ControlType.CURSOR_BACKWARD: cursor_backward,
    ControlType.CURSOR_MOVE_TO_COLUMN: cursor_move_to_column,
    ControlType.CURSOR_MOVE_TO: cursor_move_to,
    ControlType.ERASE_IN_LINE: erase_in_line,
    ControlType.SET_WINDOW_TITLE: set_window_title,
}


def generate(code: ControlCode) -> str:
    """Escape sequence for a control code tuple."""
    control_type, *params = code
    return _GENERATORS[control_type](*params)


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from text."""
    return _ANSI_PATTERN.sub("", text)


def contains_ansi(text: str) -> bool:
    return _ANSI_PATTERN.search(text) is not None


def visible_len(text: str) -> int:
    """Columns a string takes on screen, ignoring escape sequences."""
    return cell_len(strip_ansi(text))
