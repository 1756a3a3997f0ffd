"""
Per-instance memoization for derived properties.

Every measurement, transform and point set of a part is derived from its
parameters on read. Parts are immutable after construction, so each derived
value is computed once per instance and kept for the instance's lifetime.

Example:
    >>> class Board(Cacheable):
    ...     def __init__(self, width):
    ...         self.width = width
    ...
    ...     @cached_getter
    ...     def half_width(self):
    ...         return self.width / 2
"""

import functools
import logging
import time
from typing import Any, Callable, Dict, Hashable, Iterator, Optional

logger = logging.getLogger(__name__)


class MemoCache:
    """Map from computation name to its stored result.

    There is no invalidation: entries live as long as the owning object.
    Storing the same key twice with an equal value is harmless, so
    concurrent readers of a fully constructed owner need no locking.
    """

    def __init__(self):
        self._values: Dict[Hashable, Any] = {}

    def get(self, key: Hashable, default: Any = None) -> Any:
        """Return the stored value for key, or default if absent.

        A stored None and an absent key both return None with the default
        default; use `key in cache` to tell them apart.
        """
        return self._values.get(key, default)

    def set(self, key: Hashable, value: Any) -> None:
        self._values[key] = value

    def get_or_compute(self, key: Hashable, compute: Callable[[], Any]) -> Any:
        """Return the stored value for key, computing and storing it first if absent.

        Exceptions from compute propagate and nothing is stored, so a
        failing computation fails the same way on every call.
        """
        if key in self._values:
            return self._values[key]
        value = compute()
        self._values[key] = value
        logger.debug(f"Cached {key}")
        return value

    def __contains__(self, key: Hashable) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._values)


class Cacheable:
    """Mixin giving each instance its own MemoCache.

    The cache is attached in __new__ so it exists before any __init__ runs,
    including dataclass-generated ones and frozen dataclasses.
    """

    def __new__(cls, *args, **kwargs):
        instance = super().__new__(cls)
        object.__setattr__(instance, "_memo_cache", MemoCache())
        return instance

    @property
    def memo_cache(self) -> MemoCache:
        return self._memo_cache


def cached_getter(func: Callable[[Any], Any]) -> property:
    """Turn a pure zero-argument method into a memoized read-only property.

    The result is stored under the method's name in the instance's
    MemoCache. Later reads return the stored object without calling func.
    """
    key = func.__name__

    @functools.wraps(func)
    def getter(self):
        return self.memo_cache.get_or_compute(key, lambda: func(self))

    return property(getter)


def measure_time(func: Optional[Callable] = None, *, label: Optional[str] = None):
    """Log the wall-clock duration of each call at debug level.

    Can be stacked under cached_getter to time only the first computation.
    """
    def decorator(inner: Callable) -> Callable:
        name = label or inner.__qualname__

        @functools.wraps(inner)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                return inner(*args, **kwargs)
            finally:
                elapsed_ms = (time.perf_counter() - start) * 1000
                logger.debug(f"time {name} {elapsed_ms:.1f}ms")

        return wrapper

    if func is not None:
        return decorator(func)
    return decorator
