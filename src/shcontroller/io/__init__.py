"""
Shcontroller IO - parameter models.

Example:
    >>> from shcontroller.io import load_skeleton_params
    >>>
    >>> params = load_skeleton_params({"grip": {"x_total_mm": 80}})
    >>> params.grip.x_total_mm
    80.0
"""

from .params import (
    PointViewMeta,
    TactileSwitchParams,
    ButtonPadParams,
    TriggerBoardParams,
    ButtonFaceParams,
    TriggerParams,
    XiaoBoardParams,
    GripBoardParams,
    GripEndParams,
    GripParams,
    SkeletonParams,
    load_skeleton_params,
    skeleton_params_to_dict,
)

__all__ = [
    "PointViewMeta",
    "TactileSwitchParams",
    "ButtonPadParams",
    "TriggerBoardParams",
    "ButtonFaceParams",
    "TriggerParams",
    "XiaoBoardParams",
    "GripBoardParams",
    "GripEndParams",
    "GripParams",
    "SkeletonParams",
    "load_skeleton_params",
    "skeleton_params_to_dict",
]
