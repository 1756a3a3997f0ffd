"""
Exceptions raised by dimension chains and transform chains.

All of them derive from ValueError: they describe a static mistake in how a
part declared its measurements or transforms, so callers that only care
about "bad input" can keep catching ValueError.
"""

from typing import Optional


def _prefix(label: Optional[str]) -> str:
    return f"[{label}] " if label else ""


class ChainError(ValueError):
    """Base class for dimension chain errors."""
    pass


class NameNotFoundError(ChainError):
    """A query referenced a name the chain does not declare."""

    def __init__(self, name: str, label: Optional[str] = None):
        self.name = name
        self.label = label
        super().__init__(f"{_prefix(label)}Item not found. name={name}")


class DuplicateNameError(ChainError):
    """The same name was declared twice in one chain."""

    def __init__(self, name: str, label: Optional[str] = None):
        self.name = name
        self.label = label
        super().__init__(f"{_prefix(label)}Duplicate item name: {name}")


class InvalidNameOrderError(ChainError):
    """split_values/split_vecs got names out of order or repeated."""

    def __init__(self, names, label: Optional[str] = None):
        self.names = tuple(names)
        self.label = label
        super().__init__(f"{_prefix(label)}Invalid name order: {list(self.names)}")


class MissingTotalError(ChainError):
    """A chain has flexible entries but no total to distribute."""

    def __init__(self, label: Optional[str] = None):
        self.label = label
        super().__init__(f"{_prefix(label)}Flexible sizes require a total")


class OverconstrainedChainError(ChainError):
    """Fixed sizes add up to more than the total."""

    def __init__(self, fixed_sum: float, total: float, label: Optional[str] = None):
        self.fixed_sum = fixed_sum
        self.total = total
        self.label = label
        super().__init__(
            f"{_prefix(label)}Fixed sizes sum to {fixed_sum:g}, "
            f"which exceeds total {total:g}"
        )


class UnderconstrainedChainError(ChainError):
    """Fixed sizes of an all-fixed chain fall short of the total (strict policy)."""

    def __init__(self, fixed_sum: float, total: float, label: Optional[str] = None):
        self.fixed_sum = fixed_sum
        self.total = total
        self.label = label
        super().__init__(
            f"{_prefix(label)}Fixed sizes sum to {fixed_sum:g}, "
            f"which is less than total {total:g}"
        )


class ZeroWeightSumError(ChainError):
    """Remaining length is nonzero but every flexible weight is zero."""

    def __init__(self, remaining: float, label: Optional[str] = None):
        self.remaining = remaining
        self.label = label
        super().__init__(
            f"{_prefix(label)}Cannot distribute remaining {remaining:g} "
            f"across flexible sizes whose weights are all zero"
        )


class TransformError(ValueError):
    """A transform operation was declared with an invalid tag or axis."""
    pass
