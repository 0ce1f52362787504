"""Pytest configuration and shared fixtures."""

from typing import Iterator

import pytest

from ansi_cells.core.cache import RenderCaches, use_caches
from ansi_cells.core.style import Style
from ansi_cells.render.segment import Segment


@pytest.fixture(autouse=True)
def isolated_caches() -> Iterator[RenderCaches]:
    """Give every test its own empty caches."""
    with use_caches() as caches:
        yield caches


@pytest.fixture
def bold_red() -> Style:
    return Style.parse("bold red")


@pytest.fixture
def hi_segments(bold_red: Style) -> list[Segment]:
    """Two adjacent segments sharing one style."""
    return [Segment("Hi", bold_red), Segment("!", bold_red)]
