"""Shared constants for ANSI output."""

# ANSI escape sequences
ESC = "\x1b"
CSI = f"{ESC}["
OSC = f"{ESC}]"
ST = f"{ESC}\\"
BEL = "\x07"
RESET = f"{CSI}0m"
