"""
Dimension chains: named measurements laid out along an axis.

A chain is an ordered list of (name, size) entries. Each size is either a
fixed distance from the previous entry or a FlexWeight, which takes a
weighted share of whatever the fixed sizes leave of the chain's total
(the same idea as flex-grow in UI layout). Resolving a chain prefix-sums the
sizes into absolute positions, one per name.

Example:
    >>> chain = seq_val(
    ...     [("a", 10), ("b", flex()), ("c", flex()), ("d", 20)],
    ...     total=50,
    ... )
    >>> chain.value_at("c")
    30.0
    >>> chain.split_values(["b", "d"])
    [[10.0, 20.0], [30.0, 50.0]]
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, TypeVar, Union

from ..constants import DEFAULT_FLEX_WEIGHT, DEFAULT_TOTAL_POLICY, POINT_TOLERANCE_MM
from ..enums import TotalPolicy
from .cache import Cacheable, cached_getter
from .errors import (
    ChainError,
    DuplicateNameError,
    InvalidNameOrderError,
    MissingTotalError,
    NameNotFoundError,
    OverconstrainedChainError,
    UnderconstrainedChainError,
    ZeroWeightSumError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class FlexWeight:
    """Share of a chain's remaining length, proportional to weight.

    Attributes:
        weight: Non-negative weight relative to the other flexible entries
    """
    weight: float = DEFAULT_FLEX_WEIGHT

    def __post_init__(self):
        if not math.isfinite(self.weight):
            raise ValueError(f"Flex weight must be finite, got {self.weight}")
        if self.weight < 0:
            raise ValueError(f"Flex weight must be non-negative, got {self.weight}")


def flex(weight: float = DEFAULT_FLEX_WEIGHT) -> FlexWeight:
    """Shorthand for FlexWeight(weight)."""
    return FlexWeight(weight)


Size = Union[float, FlexWeight]
Vec2 = Tuple[float, float]
FlexibleVec2 = Tuple[Size, Size]


def fill_flex(
    sizes: Sequence[Size],
    total: Optional[float],
    label: Optional[str] = None,
    policy: TotalPolicy = DEFAULT_TOTAL_POLICY,
) -> List[float]:
    """
    Replace every FlexWeight in sizes by its share of the remaining length.

    remaining = total - sum(fixed sizes), and each flexible entry receives
    remaining * weight / sum(weights). Order is preserved.

    Args:
        sizes: Fixed sizes and FlexWeights, in chain order
        total: Total length of the chain (required if any FlexWeight is present)
        label: Chain label for error messages
        policy: Whether an all-fixed chain must match total

    Returns:
        Resolved relative sizes, one per input

    Raises:
        MissingTotalError: Flexible sizes but no total
        OverconstrainedChainError: Fixed sizes exceed total
        UnderconstrainedChainError: All-fixed sizes fall short of total (strict policy)
        ZeroWeightSumError: Nonzero remaining length but all weights are zero
    """
    fixed_sum = sum(size for size in sizes if not isinstance(size, FlexWeight))
    flex_weights = [size.weight for size in sizes if isinstance(size, FlexWeight)]

    if not flex_weights:
        if total is not None and policy == TotalPolicy.STRICT:
            if fixed_sum - total > POINT_TOLERANCE_MM:
                raise OverconstrainedChainError(fixed_sum, total, label)
            if total - fixed_sum > POINT_TOLERANCE_MM:
                raise UnderconstrainedChainError(fixed_sum, total, label)
        return [float(size) for size in sizes]

    if total is None:
        raise MissingTotalError(label)

    remaining = total - fixed_sum
    if remaining < -POINT_TOLERANCE_MM:
        raise OverconstrainedChainError(fixed_sum, total, label)
    # Floating point noise, e.g. 0.1 + 0.2 against 0.3
    if abs(remaining) <= POINT_TOLERANCE_MM:
        remaining = 0.0

    weight_sum = sum(flex_weights)
    if weight_sum == 0:
        if remaining != 0.0:
            raise ZeroWeightSumError(remaining, label)
        return [0.0 if isinstance(size, FlexWeight) else float(size) for size in sizes]

    return [
        remaining * size.weight / weight_sum if isinstance(size, FlexWeight) else float(size)
        for size in sizes
    ]


def relatives_to_absolutes(relatives: Sequence[float]) -> List[float]:
    """Running sum of relative sizes."""
    absolutes = []
    current = 0.0
    for relative in relatives:
        current += relative
        absolutes.append(current)
    return absolutes


def _check_names(names: Sequence[str], label: Optional[str]) -> None:
    seen = set()
    for name in names:
        if name in seen:
            raise DuplicateNameError(name, label)
        seen.add(name)


def _check_fixed(size: Size, name: str, label: Optional[str]) -> None:
    if isinstance(size, FlexWeight):
        return
    if isinstance(size, bool) or not isinstance(size, (int, float)):
        raise TypeError(f"Size of '{name}' must be a number or FlexWeight, got {size!r}")
    if not math.isfinite(size):
        raise ChainError(f"Size of '{name}' must be finite, got {size} (chain {label})")
    if size < 0:
        raise ChainError(f"Size of '{name}' must be non-negative, got {size} (chain {label})")


def _index_of(names: Sequence[str], name: str, label: Optional[str]) -> int:
    try:
        return names.index(name)
    except ValueError:
        raise NameNotFoundError(name, label) from None


def _split(
    names: Sequence[str],
    values: Sequence[T],
    split_names: Sequence[str],
    label: Optional[str],
) -> List[List[T]]:
    # Each listed name closes its group and belongs to it.
    chunks = []
    last_end = 0
    for name in split_names:
        end = _index_of(names, name, label) + 1
        if last_end >= end:
            raise InvalidNameOrderError(split_names, label)
        chunks.append(list(values[last_end:end]))
        last_end = end
    return chunks


class DimensionChain(Cacheable):
    """
    Ordered named positions along one axis.

    Args:
        items: Sequence of (name, size) where size is a non-negative number
            or a FlexWeight
        total: Length of the whole chain. Required if any size is flexible.
        label: Optional name used in error messages
        policy: Whether an all-fixed chain's sizes must add up to total

    Resolution is lazy: the first query resolves and caches the positions.
    Resolution errors are not cached and are raised again on every query.
    """

    def __init__(
        self,
        items: Sequence[Tuple[str, Size]],
        total: Optional[float] = None,
        label: Optional[str] = None,
        policy: TotalPolicy = DEFAULT_TOTAL_POLICY,
    ):
        self.items: Tuple[Tuple[str, Size], ...] = tuple((name, size) for name, size in items)
        self.total = total
        self.label = label
        self.policy = policy

        _check_names(self.names, label)
        for name, size in self.items:
            _check_fixed(size, name, label)

    def __repr__(self):
        return f"DimensionChain(items={list(self.items)!r}, total={self.total!r})"

    def __len__(self) -> int:
        return len(self.items)

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.items)

    @cached_getter
    def values(self) -> Tuple[float, ...]:
        """Absolute position of each entry, in declaration order."""
        relatives = fill_flex([size for _, size in self.items], self.total, self.label, self.policy)
        values = tuple(relatives_to_absolutes(relatives))
        logger.debug(f"Resolved chain {self.label or ''}: {values}")
        return values

    def value_at(self, name: str) -> float:
        """Absolute position of name."""
        return self.values[_index_of(self.names, name, self.label)]

    def values_to(self, name: str) -> List[float]:
        """Absolute positions of the entries before name (name excluded)."""
        return list(self.values[:_index_of(self.names, name, self.label)])

    @property
    def total_value(self) -> float:
        """The declared total, or the last resolved position if there is none."""
        if self.total is not None:
            return self.total
        if not self.values:
            return 0.0
        return self.values[-1]

    def total_from_to(self, start: str, end: str) -> float:
        """Distance from start to end; negative when end lies before start."""
        return self.value_at(end) - self.value_at(start)

    def split_values(self, names: Sequence[str]) -> List[List[float]]:
        """
        Partition the resolved positions into groups ending at each name.

        Each name closes its group and is included in it; the next group
        starts right after it. Entries after the last name are dropped.

        Raises:
            InvalidNameOrderError: Names not in chain order, or repeated
        """
        return _split(self.names, self.values, names, self.label)


class DimensionChain2D(Cacheable):
    """
    Ordered named 2D points, resolved independently per axis.

    Each size is either a pair of per-axis sizes (number or FlexWeight each)
    or a single FlexWeight that applies to both axes.

    Args:
        items: Sequence of (name, size)
        total: (x, y) lengths of the chain. Needed for any axis that has a
            flexible size.
        label: Optional name used in error messages
        policy: Total policy applied to each axis
    """

    def __init__(
        self,
        items: Sequence[Tuple[str, Union[FlexibleVec2, FlexWeight]]],
        total: Optional[Vec2] = None,
        label: Optional[str] = None,
        policy: TotalPolicy = DEFAULT_TOTAL_POLICY,
    ):
        self.items = tuple((name, size) for name, size in items)
        self.total = tuple(total) if total is not None else None
        self.label = label
        self.policy = policy

        for name, size in self.items:
            if not isinstance(size, FlexWeight) and len(size) != 2:
                raise TypeError(f"Size of '{name}' must be a pair or FlexWeight, got {size!r}")

        self.x = self._axis(0, "x")
        self.y = self._axis(1, "y")

    def __repr__(self):
        return f"DimensionChain2D(items={list(self.items)!r}, total={self.total!r})"

    def __len__(self) -> int:
        return len(self.items)

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.items)

    def _axis(self, index: int, axis_name: str) -> DimensionChain:
        label = f"{self.label}.{axis_name}" if self.label else axis_name
        return DimensionChain(
            [
                (name, size if isinstance(size, FlexWeight) else size[index])
                for name, size in self.items
            ],
            total=self.total[index] if self.total is not None else None,
            label=label,
            policy=self.policy,
        )

    @cached_getter
    def vecs(self) -> Tuple[Vec2, ...]:
        """Absolute point of each entry, in declaration order."""
        return tuple(zip(self.x.values, self.y.values))

    def vec_at(self, name: str) -> Vec2:
        return self.vecs[_index_of(self.names, name, self.label)]

    @property
    def total_vec(self) -> Vec2:
        return (self.x.total_value, self.y.total_value)

    def split_vecs(self, names: Sequence[str]) -> List[List[Vec2]]:
        """Same grouping as DimensionChain.split_values, over points."""
        return _split(self.names, self.vecs, names, self.label)


def seq_val(
    items: Sequence[Tuple[str, Size]],
    total: Optional[float] = None,
    **kwargs,
) -> DimensionChain:
    """Build a DimensionChain."""
    return DimensionChain(items, total, **kwargs)


def seq_vec2(
    items: Sequence[Tuple[str, Union[FlexibleVec2, FlexWeight]]],
    total: Optional[Vec2] = None,
    **kwargs,
) -> DimensionChain2D:
    """Build a DimensionChain2D."""
    return DimensionChain2D(items, total, **kwargs)
