"""
build123d adapter for transform chains.

Maps each transform operation onto the matching build123d primitive. Shapes
are treated as values: every call returns a new shape and leaves the input
untouched. Works for solids, faces and sketches alike since they share the
Shape API.
"""

import math
from typing import Tuple

from build123d import Axis as B3dAxis, Box, Align, Plane, Shape

from ..enums import Axis

_ROTATION_AXES = {
    Axis.X: B3dAxis.X,
    Axis.Y: B3dAxis.Y,
    Axis.Z: B3dAxis.Z,
}

# Mirroring across the plane whose normal is the axis negates that component
_MIRROR_PLANES = {
    Axis.X: Plane.YZ,
    Axis.Y: Plane.XZ,
    Axis.Z: Plane.XY,
}


def translate_shape(shape: Shape, offset: Tuple[float, float, float]) -> Shape:
    return shape.translate(offset)


def rotate_shape(shape: Shape, axis: Axis, angle_rad: float) -> Shape:
    """Rotate about a global axis through the origin; build123d takes degrees."""
    return shape.rotate(_ROTATION_AXES[axis], math.degrees(angle_rad))


def mirror_shape(shape: Shape, axis: Axis) -> Shape:
    return shape.mirror(_MIRROR_PLANES[axis])


def corner_box(size: Tuple[float, float, float]) -> Shape:
    """
    Box spanning from the origin to size (all corners in the positive octant).

    Parts are laid out from a corner rather than a centre, so this is the
    shape most skeleton outlines start from.
    """
    if any(dim <= 0 for dim in size):
        raise ValueError(f"Box dimensions must be positive, got {size}")
    return Box(*size, align=(Align.MIN, Align.MIN, Align.MIN))
