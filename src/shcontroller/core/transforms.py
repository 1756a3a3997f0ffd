"""
Composable rigid transforms in 2D and 3D.

A transform chain is an ordered tuple of translate, rotate and mirror
operations. Applying a chain runs its operations first to last, which maps
a part's local frame into its parent's frame; reversed() maps back.

Example:
    >>> from math import radians
    >>> to_parent = Transform2D.from_items([("rotate", radians(76)), ("translate", 16, -40)])
    >>> p = to_parent.apply_point((10.0, 0.0))
    >>> to_parent.reversed().apply_point(p)  # ~ (10.0, 0.0)

Angles are in radians. Rotations are right-handed about their axis.
"""

import math
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Sequence, Tuple, Union

from ..enums import Axis
from .errors import TransformError

Vec2D = Tuple[float, float]
Vec3D = Tuple[float, float, float]


def rotate_vec2(vec: Sequence[float], rad: float) -> Vec2D:
    """Rotate a 2D vector counter-clockwise by rad about the origin."""
    cos_a = math.cos(rad)
    sin_a = math.sin(rad)
    return (vec[0] * cos_a - vec[1] * sin_a, vec[0] * sin_a + vec[1] * cos_a)


def _coerce_axis(axis: Union[Axis, str], allowed: Tuple[Axis, ...]) -> Axis:
    try:
        axis = Axis(axis.lower() if isinstance(axis, str) else axis)
    except ValueError:
        raise TransformError(f"Unknown axis: {axis!r}") from None
    if axis not in allowed:
        valid = ", ".join(a.value for a in allowed)
        raise TransformError(f"Axis must be one of {valid}, got '{axis.value}'")
    return axis


# ─── 3D operations ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class Translate3D:
    x: float
    y: float
    z: float

    def apply_vec(self, point: Vec3D) -> Vec3D:
        return (point[0] + self.x, point[1] + self.y, point[2] + self.z)

    def inverted(self) -> "Translate3D":
        return Translate3D(-self.x, -self.y, -self.z)

    def to_item(self) -> tuple:
        return ("translate", self.x, self.y, self.z)

    def apply_shape(self, shape):
        from .geometry import translate_shape
        return translate_shape(shape, (self.x, self.y, self.z))


@dataclass(frozen=True)
class Rotate3D:
    axis: Axis
    angle: float

    def __post_init__(self):
        object.__setattr__(self, "axis", _coerce_axis(self.axis, (Axis.X, Axis.Y, Axis.Z)))

    def apply_vec(self, point: Vec3D) -> Vec3D:
        if self.axis == Axis.X:
            y, z = rotate_vec2((point[1], point[2]), self.angle)
            return (point[0], y, z)
        if self.axis == Axis.Y:
            z, x = rotate_vec2((point[2], point[0]), self.angle)
            return (x, point[1], z)
        x, y = rotate_vec2((point[0], point[1]), self.angle)
        return (x, y, point[2])

    def inverted(self) -> "Rotate3D":
        return Rotate3D(self.axis, -self.angle)

    def to_item(self) -> tuple:
        return ("rotate", self.axis.value, self.angle)

    def apply_shape(self, shape):
        from .geometry import rotate_shape
        return rotate_shape(shape, self.axis, self.angle)


@dataclass(frozen=True)
class Mirror3D:
    axis: Axis

    def __post_init__(self):
        object.__setattr__(self, "axis", _coerce_axis(self.axis, (Axis.X, Axis.Y, Axis.Z)))

    def apply_vec(self, point: Vec3D) -> Vec3D:
        if self.axis == Axis.X:
            return (-point[0], point[1], point[2])
        if self.axis == Axis.Y:
            return (point[0], -point[1], point[2])
        return (point[0], point[1], -point[2])

    def inverted(self) -> "Mirror3D":
        return self

    def to_item(self) -> tuple:
        return ("mirror", self.axis.value)

    def apply_shape(self, shape):
        from .geometry import mirror_shape
        return mirror_shape(shape, self.axis)


Op3D = Union[Translate3D, Rotate3D, Mirror3D]


# ─── 2D operations ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class Translate2D:
    x: float
    y: float

    def apply_vec(self, point: Vec2D) -> Vec2D:
        return (point[0] + self.x, point[1] + self.y)

    def inverted(self) -> "Translate2D":
        return Translate2D(-self.x, -self.y)

    def to_item(self) -> tuple:
        return ("translate", self.x, self.y)

    def to_3d(self) -> Translate3D:
        return Translate3D(self.x, self.y, 0.0)


@dataclass(frozen=True)
class Rotate2D:
    angle: float

    def apply_vec(self, point: Vec2D) -> Vec2D:
        return rotate_vec2(point, self.angle)

    def inverted(self) -> "Rotate2D":
        return Rotate2D(-self.angle)

    def to_item(self) -> tuple:
        return ("rotate", self.angle)

    def to_3d(self) -> Rotate3D:
        return Rotate3D(Axis.Z, self.angle)


@dataclass(frozen=True)
class Mirror2D:
    axis: Axis

    def __post_init__(self):
        object.__setattr__(self, "axis", _coerce_axis(self.axis, (Axis.X, Axis.Y)))

    def apply_vec(self, point: Vec2D) -> Vec2D:
        if self.axis == Axis.X:
            return (-point[0], point[1])
        return (point[0], -point[1])

    def inverted(self) -> "Mirror2D":
        return self

    def to_item(self) -> tuple:
        return ("mirror", self.axis.value)

    def to_3d(self) -> Mirror3D:
        return Mirror3D(self.axis)


Op2D = Union[Translate2D, Rotate2D, Mirror2D]


def parse_item_3d(item: Sequence[Any]) -> Op3D:
    """Build a 3D op from ("translate", x, y, z), ("rotate", axis, rad) or ("mirror", axis)."""
    if isinstance(item, (Translate3D, Rotate3D, Mirror3D)):
        return item
    if not isinstance(item, (tuple, list)) or not item:
        raise TransformError(f"Invalid 3D transform item: {item!r}")
    kind, *args = item
    if kind == "translate" and len(args) == 3:
        return Translate3D(*args)
    if kind == "rotate" and len(args) == 2:
        return Rotate3D(*args)
    if kind == "mirror" and len(args) == 1:
        return Mirror3D(*args)
    raise TransformError(f"Invalid 3D transform item: {tuple(item)!r}")


def parse_item_2d(item: Sequence[Any]) -> Op2D:
    """Build a 2D op from ("translate", x, y), ("rotate", rad) or ("mirror", axis)."""
    if isinstance(item, (Translate2D, Rotate2D, Mirror2D)):
        return item
    if not isinstance(item, (tuple, list)) or not item:
        raise TransformError(f"Invalid 2D transform item: {item!r}")
    kind, *args = item
    if kind == "translate" and len(args) == 2:
        return Translate2D(*args)
    if kind == "rotate" and len(args) == 1:
        return Rotate2D(*args)
    if kind == "mirror" and len(args) == 1:
        return Mirror2D(*args)
    raise TransformError(f"Invalid 2D transform item: {tuple(item)!r}")


# ─── Chains ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Transform3D:
    """Ordered 3D transform chain. Immutable; combine with join()."""
    ops: Tuple[Op3D, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "ops", tuple(parse_item_3d(op) for op in self.ops))

    @classmethod
    def from_items(cls, items: Iterable[Sequence[Any]]) -> "Transform3D":
        return cls(tuple(items))

    @classmethod
    def join(cls, *transforms: "Transform3D") -> "Transform3D":
        """Chain that applies each transform in turn."""
        return cls(tuple(op for transform in transforms for op in transform.ops))

    def __len__(self) -> int:
        return len(self.ops)

    def __iter__(self) -> Iterator[Op3D]:
        return iter(self.ops)

    def to_items(self) -> list:
        """Tagged-tuple form accepted by from_items()."""
        return [op.to_item() for op in self.ops]

    def apply_point(self, point: Sequence[float]) -> Vec3D:
        result = (float(point[0]), float(point[1]), float(point[2]))
        for op in self.ops:
            result = op.apply_vec(result)
        return result

    def apply_points(self, points: Iterable[Sequence[float]]) -> Tuple[Vec3D, ...]:
        return tuple(self.apply_point(point) for point in points)

    def apply_geometry(self, shape):
        """Apply the chain to a build123d shape, returning a new shape."""
        for op in self.ops:
            shape = op.apply_shape(shape)
        return shape

    def apply_geometries(self, shapes: Iterable[Any]) -> list:
        return [self.apply_geometry(shape) for shape in shapes]

    def reversed(self) -> "Transform3D":
        """Chain that undoes this one (parent frame back to local frame)."""
        return Transform3D(tuple(op.inverted() for op in reversed(self.ops)))


@dataclass(frozen=True)
class Transform2D:
    """Ordered 2D transform chain. Immutable; combine with join()."""
    ops: Tuple[Op2D, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "ops", tuple(parse_item_2d(op) for op in self.ops))

    @classmethod
    def from_items(cls, items: Iterable[Sequence[Any]]) -> "Transform2D":
        return cls(tuple(items))

    @classmethod
    def join(cls, *transforms: "Transform2D") -> "Transform2D":
        """Chain that applies each transform in turn."""
        return cls(tuple(op for transform in transforms for op in transform.ops))

    def __len__(self) -> int:
        return len(self.ops)

    def __iter__(self) -> Iterator[Op2D]:
        return iter(self.ops)

    def to_items(self) -> list:
        """Tagged-tuple form accepted by from_items()."""
        return [op.to_item() for op in self.ops]

    def apply_point(self, point: Sequence[float]) -> Vec2D:
        result = (float(point[0]), float(point[1]))
        for op in self.ops:
            result = op.apply_vec(result)
        return result

    def apply_points(self, points: Iterable[Sequence[float]]) -> Tuple[Vec2D, ...]:
        return tuple(self.apply_point(point) for point in points)

    def apply_geometry(self, shape):
        """Apply the chain to a planar build123d face/sketch on the XY plane."""
        return self.to_3d().apply_geometry(shape)

    def apply_geometries(self, shapes: Iterable[Any]) -> list:
        return [self.apply_geometry(shape) for shape in shapes]

    def reversed(self) -> "Transform2D":
        """Chain that undoes this one (parent frame back to local frame)."""
        return Transform2D(tuple(op.inverted() for op in reversed(self.ops)))

    def to_3d(self) -> Transform3D:
        """Same chain in 3D: rotations about Z, translations with z = 0."""
        return Transform3D(tuple(op.to_3d() for op in self.ops))


def mirror_vec2ds(vecs: Iterable[Sequence[float]], axis: Union[Axis, str] = Axis.X) -> list:
    """Negate the given component of each 2D point."""
    op = Mirror2D(axis)
    return [op.apply_vec(vec) for vec in vecs]


def mirror_vec3ds(vecs: Iterable[Sequence[float]], axis: Union[Axis, str]) -> list:
    """Negate the given component of each 3D point."""
    op = Mirror3D(axis)
    return [op.apply_vec(vec) for vec in vecs]
