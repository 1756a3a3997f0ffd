"""
Shcontroller Core - dimension chains, transform algebra and skeleton trees.

Everything here is pure Python. The build123d adapter lives in
shcontroller.core.geometry and is only imported when a transform chain is
applied to a shape.

Example:
    >>> from math import radians
    >>> from shcontroller.core import seq_val, flex, Transform3D
    >>>
    >>> z = seq_val([("board", 1.5), ("gap", flex()), ("lid", 1.0)], total=12)
    >>> z.value_at("gap")
    11.0
    >>>
    >>> to_parent = Transform3D.from_items([("rotate", "y", radians(-90)), ("mirror", "x")])
    >>> to_parent.reversed().apply_point(to_parent.apply_point((1.0, 2.0, 3.0)))
"""

from .cache import MemoCache, Cacheable, cached_getter, measure_time

from .errors import (
    ChainError,
    NameNotFoundError,
    DuplicateNameError,
    InvalidNameOrderError,
    MissingTotalError,
    OverconstrainedChainError,
    UnderconstrainedChainError,
    ZeroWeightSumError,
    TransformError,
)

from .values import (
    FlexWeight,
    flex,
    fill_flex,
    relatives_to_absolutes,
    DimensionChain,
    DimensionChain2D,
    seq_val,
    seq_vec2,
)

from .transforms import (
    Translate2D,
    Rotate2D,
    Mirror2D,
    Translate3D,
    Rotate3D,
    Mirror3D,
    Transform2D,
    Transform3D,
    rotate_vec2,
    mirror_vec2ds,
    mirror_vec3ds,
)

from .skeleton import (
    SkeletonNode,
    PointViewNode,
    ListViewNode,
    MapViewNode,
    VisiblePoint,
    is_vec3,
    points_to_view_node,
    skeleton_to_view_node,
    visible_points,
    skeleton_points_to_dict,
    view_node_to_dict,
)

__all__ = [
    # Memoization
    "MemoCache",
    "Cacheable",
    "cached_getter",
    "measure_time",

    # Errors
    "ChainError",
    "NameNotFoundError",
    "DuplicateNameError",
    "InvalidNameOrderError",
    "MissingTotalError",
    "OverconstrainedChainError",
    "UnderconstrainedChainError",
    "ZeroWeightSumError",
    "TransformError",

    # Dimension chains
    "FlexWeight",
    "flex",
    "fill_flex",
    "relatives_to_absolutes",
    "DimensionChain",
    "DimensionChain2D",
    "seq_val",
    "seq_vec2",

    # Transforms
    "Translate2D",
    "Rotate2D",
    "Mirror2D",
    "Translate3D",
    "Rotate3D",
    "Mirror3D",
    "Transform2D",
    "Transform3D",
    "rotate_vec2",
    "mirror_vec2ds",
    "mirror_vec3ds",

    # Skeleton trees
    "SkeletonNode",
    "PointViewNode",
    "ListViewNode",
    "MapViewNode",
    "VisiblePoint",
    "is_vec3",
    "points_to_view_node",
    "skeleton_to_view_node",
    "visible_points",
    "skeleton_points_to_dict",
    "view_node_to_dict",
]

