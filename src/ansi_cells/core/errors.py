"""Exceptions raised by the color and style layer."""


class ColorParseError(ValueError):
    """A color definition could not be parsed."""

    def __init__(self, literal: str, message: str | None = None):
        self.literal = literal
        super().__init__(message or f"{literal!r} is not a valid color")


# Shorter name used by callers that only care about validity
InvalidColor = ColorParseError
