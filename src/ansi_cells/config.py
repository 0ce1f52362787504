"""Runtime settings for the memo caches."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_CACHE_SIZE = 4096

# Environment variable -> CacheSettings field
ENV_VARS: dict[str, str] = {
    "ANSI_CELLS_COLOR_CACHE": "color_cache_size",
    "ANSI_CELLS_STYLE_CACHE": "style_cache_size",
    "ANSI_CELLS_DOWNGRADE_CACHE": "downgrade_cache_size",
    "ANSI_CELLS_WIDTH_CACHE": "width_cache_size",
}


@dataclass(frozen=True)
class CacheSettings:
    """
    Bounds for the parse, downgrade and width caches.

    A size of None means the cache is unbounded. Short-lived processes
    can afford that; long-running services should keep a bound.
    """
    color_cache_size: Optional[int] = DEFAULT_CACHE_SIZE
    style_cache_size: Optional[int] = DEFAULT_CACHE_SIZE
    downgrade_cache_size: Optional[int] = DEFAULT_CACHE_SIZE
    width_cache_size: Optional[int] = DEFAULT_CACHE_SIZE

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> CacheSettings:
        """
        Build settings from ANSI_CELLS_*_CACHE environment variables.

        Each variable holds a non-negative integer; 0 means unbounded.
        Malformed values are logged and the default is kept.
        """
        if environ is None:
            environ = os.environ

        overrides: dict[str, Optional[int]] = {}
        for var, field_name in ENV_VARS.items():
            raw = environ.get(var)
            if raw is None or not raw.strip():
                continue
            try:
                size = int(raw)
            except ValueError:
                logger.warning("Ignoring %s=%r: not an integer", var, raw)
                continue
            if size < 0:
                logger.warning("Ignoring %s=%r: must be >= 0", var, raw)
                continue
            overrides[field_name] = size or None

        return cls(**overrides)
