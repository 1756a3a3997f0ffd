"""
Shared constants for the controller skeleton.

Constants are grouped by category:
- Numeric tolerances used when comparing resolved lengths and points
- Dimension chain defaults
- Skeleton viewer defaults

Always include units in constant names (_MM, _DEG, _RAD).
"""

from typing import Tuple

from .enums import TotalPolicy

# =============================================================================
# Numeric tolerances
# =============================================================================

# Absolute tolerance for comparing lengths that went through floating point
# arithmetic (prefix sums, trigonometry). Well below printer resolution.
POINT_TOLERANCE_MM: float = 1e-9

# =============================================================================
# Dimension chains
# =============================================================================

# Weight of flex() when called without an argument
DEFAULT_FLEX_WEIGHT: float = 1.0

# Policy for all-fixed chains that also carry a total
DEFAULT_TOTAL_POLICY: TotalPolicy = TotalPolicy.IGNORE

# =============================================================================
# Skeleton viewer
# =============================================================================

# Marker size for points without an explicit radius
DEFAULT_POINT_RADIUS_MM: float = 0.5

# Colours (RGB, 0-1) shared between parts
BOARD_COLOR: Tuple[float, float, float] = (0.2, 0.7, 0.2)
SWITCH_COLOR: Tuple[float, float, float] = (0.8, 0.4, 0.4)
