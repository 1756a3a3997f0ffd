"""
Tests for MemoCache, Cacheable and cached_getter.
"""

import logging
from dataclasses import dataclass

import pytest

from shcontroller.core import (
    Cacheable,
    MemoCache,
    MissingTotalError,
    cached_getter,
    flex,
    measure_time,
    seq_val,
)


class Counter(Cacheable):
    """Cacheable that counts how often its property is computed."""

    def __init__(self, width):
        self.width = width
        self.calls = 0

    @cached_getter
    def half_width(self):
        self.calls += 1
        return self.width / 2

    @cached_getter
    def outline(self):
        self.calls += 1
        return [(0, 0), (self.width, 0)]

    @cached_getter
    def nothing(self):
        self.calls += 1
        return None


@dataclass(frozen=True)
class FrozenPart(Cacheable):
    width: float

    @cached_getter
    def doubled(self):
        return [self.width * 2]


class TestMemoCache:
    """Tests for the MemoCache container."""

    def test_get_missing_returns_default(self):
        cache = MemoCache()
        assert cache.get("missing") is None
        assert cache.get("missing", 42) == 42

    def test_set_and_get(self):
        cache = MemoCache()
        cache.set("a", 1)
        assert cache.get("a") == 1
        assert "a" in cache
        assert len(cache) == 1
        assert list(cache) == ["a"]

    def test_stored_none_distinct_from_missing(self):
        """get() cannot tell a stored None from a missing key; `in` can."""
        cache = MemoCache()
        cache.set("empty", None)
        assert cache.get("empty") is None
        assert cache.get("missing") is None
        assert "empty" in cache
        assert "missing" not in cache
        assert cache.get("empty", 42) is None
        assert cache.get("missing", 42) == 42

    def test_get_or_compute_computes_once(self):
        cache = MemoCache()
        calls = []

        def compute():
            calls.append(1)
            return "value"

        assert cache.get_or_compute("k", compute) == "value"
        assert cache.get_or_compute("k", compute) == "value"
        assert len(calls) == 1

    def test_failed_compute_is_not_stored(self):
        cache = MemoCache()

        def fail():
            raise RuntimeError("boom")

        for _ in range(2):
            with pytest.raises(RuntimeError, match="boom"):
                cache.get_or_compute("k", fail)
        assert "k" not in cache
        assert cache.get_or_compute("k", lambda: 3) == 3

    def test_logs_cached_key(self, caplog):
        cache = MemoCache()
        with caplog.at_level(logging.DEBUG, logger="shcontroller.core.cache"):
            cache.get_or_compute("outline", lambda: 1)
        assert "Cached outline" in caplog.text


class TestCachedGetter:
    """Tests for cached_getter on Cacheable instances."""

    def test_computed_once(self):
        part = Counter(10)
        assert part.half_width == 5
        assert part.half_width == 5
        assert part.calls == 1

    def test_returns_identical_object(self):
        part = Counter(10)
        assert part.outline is part.outline

    def test_none_is_cached(self):
        part = Counter(10)
        assert part.nothing is None
        assert part.nothing is None
        assert part.calls == 1

    def test_instances_have_separate_caches(self):
        a = Counter(10)
        b = Counter(20)
        assert a.half_width == 5
        assert b.half_width == 10
        assert a.memo_cache is not b.memo_cache

    def test_stored_under_method_name(self):
        part = Counter(10)
        part.half_width
        assert "half_width" in part.memo_cache
        assert "outline" not in part.memo_cache

    def test_read_only(self):
        part = Counter(10)
        with pytest.raises(AttributeError):
            part.half_width = 3

    def test_frozen_dataclass(self):
        part = FrozenPart(2.0)
        assert part.doubled == [4.0]
        assert part.doubled is part.doubled

    def test_chain_values_memoized(self, flex_chain):
        assert flex_chain.values is flex_chain.values

    def test_chain_failure_not_memoized(self):
        chain = seq_val([("a", flex())])
        with pytest.raises(MissingTotalError):
            chain.values
        assert "values" not in chain.memo_cache


class TestMeasureTime:
    """Tests for the measure_time decorator."""

    def test_logs_duration(self, caplog):
        @measure_time
        def work():
            return 7

        with caplog.at_level(logging.DEBUG, logger="shcontroller.core.cache"):
            assert work() == 7
        assert "time " in caplog.text
        assert "work" in caplog.text
        assert "ms" in caplog.text

    def test_custom_label(self, caplog):
        @measure_time(label="Skeleton.build")
        def work():
            return 7

        with caplog.at_level(logging.DEBUG, logger="shcontroller.core.cache"):
            work()
        assert "time Skeleton.build" in caplog.text

    def test_logs_even_on_error(self, caplog):
        @measure_time(label="failing")
        def work():
            raise ValueError("bad")

        with caplog.at_level(logging.DEBUG, logger="shcontroller.core.cache"):
            with pytest.raises(ValueError):
                work()
        assert "time failing" in caplog.text
