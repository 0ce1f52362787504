"""Tests for cell widths, caches and cache settings."""

import logging

import pytest

from ansi_cells.config import CacheSettings
from ansi_cells.core.cache import LRUCache, RenderCaches, get_caches, use_caches
from ansi_cells.core.cells import (
    cached_cell_len,
    cell_len,
    char_width,
    chop_cells,
    is_wide,
    is_zero_width,
    set_cell_size,
)
from ansi_cells.core.color import Color


class TestCellWidth:
    """Tests for per-character and per-string widths."""

    @pytest.mark.parametrize(
        "text, width",
        [
            ("", 0),
            ("A", 1),
            ("中", 2),
            ("e\u0301", 1),
            ("hello", 5),
            ("中文", 4),
            ("a\tb", 3),
            ("\u200b", 0),
        ],
    )
    def test_cell_len(self, text: str, width: int) -> None:
        assert cell_len(text) == width
        assert cached_cell_len(text) == width

    def test_char_width(self) -> None:
        assert char_width("a") == 1
        assert char_width("中") == 2
        assert char_width("\u0301") == 0
        assert char_width("") == 0

    def test_classification(self) -> None:
        assert is_wide("中")
        assert not is_wide("a")
        assert is_zero_width("\u0301")
        assert not is_zero_width("")

    def test_cached_width_is_stored(self, isolated_caches: RenderCaches) -> None:
        cached_cell_len("中文字")
        assert "中文字" in isolated_caches.widths

    def test_char_width_uses_active_caches(self, isolated_caches: RenderCaches) -> None:
        with use_caches() as inner:
            char_width("字")
            assert "字" in inner.widths
        assert "字" not in isolated_caches.widths


class TestCellHelpers:
    """Tests for cropping and chopping by width."""

    def test_set_cell_size_pads(self) -> None:
        assert set_cell_size("ab", 4) == "ab  "

    def test_set_cell_size_crops(self) -> None:
        assert set_cell_size("abcdef", 3) == "abc"

    def test_set_cell_size_wide_edge(self) -> None:
        assert set_cell_size("中文", 3) == "中 "

    def test_set_cell_size_zero(self) -> None:
        assert set_cell_size("abc", 0) == ""

    def test_chop_cells(self) -> None:
        assert chop_cells("abcdefg", 3) == ["abc", "def", "g"]
        assert chop_cells("中文字", 4) == ["中文", "字"]

    def test_chop_cells_glyph_wider_than_width(self) -> None:
        assert chop_cells("中a", 1) == ["中", "a"]


class TestLRUCache:
    """Tests for the memo cache."""

    def test_evicts_least_recently_used(self) -> None:
        cache: LRUCache[str, int] = LRUCache(maxsize=2)
        cache.put("a", 1)
        cache.put("b", 2)
        cache.get("a")
        cache.put("c", 3)
        assert "a" in cache
        assert "b" not in cache
        assert len(cache) == 2

    def test_unbounded(self) -> None:
        cache: LRUCache[int, int] = LRUCache(maxsize=None)
        for i in range(10_000):
            cache.put(i, i)
        assert len(cache) == 10_000

    def test_first_writer_wins(self) -> None:
        cache: LRUCache[str, int] = LRUCache()
        assert cache.put("a", 1) == 1
        assert cache.put("a", 2) == 1

    def test_get_or_compute(self) -> None:
        cache: LRUCache[str, int] = LRUCache()
        calls = []

        def compute() -> int:
            calls.append(1)
            return 42

        assert cache.get_or_compute("x", compute) == 42
        assert cache.get_or_compute("x", compute) == 42
        assert len(calls) == 1

    def test_invalid_size(self) -> None:
        with pytest.raises(ValueError):
            LRUCache(maxsize=0)

    def test_clear(self) -> None:
        cache: LRUCache[str, int] = LRUCache()
        cache.put("a", 1)
        cache.clear()
        assert cache.get("a") is None


class TestUseCaches:
    """Tests for swapping the active cache set."""

    def test_nested_caches_are_isolated(self, isolated_caches: RenderCaches) -> None:
        with use_caches() as inner:
            Color.parse("cyan")
            assert "cyan" in inner.colors
            assert get_caches() is inner
        assert "cyan" not in isolated_caches.colors
        assert get_caches() is isolated_caches

    def test_explicit_caches(self) -> None:
        caches = RenderCaches.from_settings(CacheSettings(color_cache_size=1))
        with use_caches(caches):
            Color.parse("red")
            Color.parse("blue")
        assert len(caches.colors) == 1


class TestCacheSettings:
    """Tests for reading cache bounds from the environment."""

    def test_defaults(self) -> None:
        settings = CacheSettings.from_env({})
        assert settings.color_cache_size == 4096
        assert settings.width_cache_size == 4096

    def test_overrides(self) -> None:
        settings = CacheSettings.from_env({
            "ANSI_CELLS_STYLE_CACHE": "128",
            "ANSI_CELLS_WIDTH_CACHE": "0",
        })
        assert settings.style_cache_size == 128
        assert settings.width_cache_size is None
        assert settings.color_cache_size == 4096

    @pytest.mark.parametrize("value", ["lots", "-1"])
    def test_invalid_values_keep_default(
        self, value: str, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="ansi_cells.config"):
            settings = CacheSettings.from_env({"ANSI_CELLS_COLOR_CACHE": value})
        assert settings.color_cache_size == 4096
        assert "ANSI_CELLS_COLOR_CACHE" in caplog.text

    def test_reads_os_environ(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ANSI_CELLS_DOWNGRADE_CACHE", "16")
        assert CacheSettings.from_env().downgrade_cache_size == 16
