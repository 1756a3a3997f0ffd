"""
Shcontroller - parametric skeleton of a 3D-printable handheld controller.

Dimension chains lay out named measurements along an axis, transform chains
place each part's frame inside its parent, and the device skeleton combines
both into a tree of diagnostic points.

Example:
    >>> from shcontroller import seq_val, flex, build_skeleton
    >>>
    >>> chain = seq_val([("a", 10), ("b", flex()), ("c", flex()), ("d", 20)], total=50)
    >>> chain.value_at("c")
    30.0
    >>>
    >>> root = build_skeleton()
    >>> root.child("Trigger.ButtonFace.Board").points["switches"]

Note: All imports are lazy-loaded for fast startup. The algebra can be
imported without triggering geometry (build123d) imports.
"""

__version__ = "1.1.0"

# Define which names come from which submodule
# All imports are lazy to minimize startup time

_ENUMS = {"Axis", "TotalPolicy"}

_CORE = {
    "MemoCache",
    "Cacheable",
    "cached_getter",
    "measure_time",
    "ChainError",
    "NameNotFoundError",
    "DuplicateNameError",
    "InvalidNameOrderError",
    "MissingTotalError",
    "OverconstrainedChainError",
    "UnderconstrainedChainError",
    "ZeroWeightSumError",
    "TransformError",
    "FlexWeight",
    "flex",
    "DimensionChain",
    "DimensionChain2D",
    "seq_val",
    "seq_vec2",
    "Transform2D",
    "Transform3D",
    "SkeletonNode",
    "skeleton_to_view_node",
    "visible_points",
}

_IO = {
    "PointViewMeta",
    "SkeletonParams",
    "load_skeleton_params",
}

_DEVICE = {
    "ControllerSkeleton",
    "build_skeleton",
}

# Cache for lazy-loaded modules
_modules = {}


def __getattr__(name):
    """Lazy load submodules when their attributes are accessed."""
    global _modules

    for names, module_name in (
        (_ENUMS, "enums"),
        (_CORE, "core"),
        (_IO, "io"),
        (_DEVICE, "device"),
    ):
        if name in names:
            if module_name not in _modules:
                import importlib
                _modules[module_name] = importlib.import_module(f".{module_name}", __name__)
            return getattr(_modules[module_name], name)

    raise AttributeError(f"module 'shcontroller' has no attribute {name!r}")


__all__ = [
    # Version
    "__version__",

    # Enums (lazy loaded from enums)
    "Axis",
    "TotalPolicy",

    # Memoization (lazy loaded from core)
    "MemoCache",
    "Cacheable",
    "cached_getter",
    "measure_time",

    # Errors (lazy loaded from core)
    "ChainError",
    "NameNotFoundError",
    "DuplicateNameError",
    "InvalidNameOrderError",
    "MissingTotalError",
    "OverconstrainedChainError",
    "UnderconstrainedChainError",
    "ZeroWeightSumError",
    "TransformError",

    # Dimension chains and transforms (lazy loaded from core)
    "FlexWeight",
    "flex",
    "DimensionChain",
    "DimensionChain2D",
    "seq_val",
    "seq_vec2",
    "Transform2D",
    "Transform3D",

    # Skeleton trees (lazy loaded from core)
    "SkeletonNode",
    "skeleton_to_view_node",
    "visible_points",

    # Parameters (lazy loaded from io)
    "PointViewMeta",
    "SkeletonParams",
    "load_skeleton_params",

    # Device skeleton (lazy loaded from device)
    "ControllerSkeleton",
    "build_skeleton",
]
