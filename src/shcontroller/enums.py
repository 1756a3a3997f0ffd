"""Type-safe enums for the controller skeleton and transform algebra."""

from enum import Enum


class Axis(Enum):
    """Cartesian axis used by rotate and mirror operations"""
    X = "x"
    Y = "y"
    Z = "z"


class TotalPolicy(Enum):
    """How an all-fixed dimension chain treats an explicit total.

    Chains with flexible entries always need the total; this policy only
    matters when every entry is a fixed size.
    """
    IGNORE = "ignore"  # Total is reported by total_value but never checked
    STRICT = "strict"  # Fixed sizes must add up to the total
