"""Decoding of ANSI-styled text."""

from ansi_cells.codec.ansi_decoder import AnsiDecoder

__all__ = ["AnsiDecoder"]
