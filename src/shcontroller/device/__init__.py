"""
Shcontroller Device - skeleton of the v1.1 handheld controller.

Example:
    >>> from shcontroller.device import build_skeleton
    >>> from shcontroller.core import skeleton_to_view_node, visible_points
    >>>
    >>> root = build_skeleton()
    >>> points = visible_points(skeleton_to_view_node(root), force_visible=True)
"""

from .skeleton import (
    PartSkeleton,
    TactileSwitchSkeleton,
    TriggerBoardSkeleton,
    ButtonFaceSkeleton,
    TriggerSkeleton,
    XiaoBoardSkeleton,
    GripEndSkeleton,
    GripBoardSkeleton,
    GripSkeleton,
    ButtonPadSkeleton,
    ControllerSkeleton,
    build_skeleton,
    grip_board_z_chain,
    rectangle_outline,
    with_z,
)

__all__ = [
    "PartSkeleton",
    "TactileSwitchSkeleton",
    "TriggerBoardSkeleton",
    "ButtonFaceSkeleton",
    "TriggerSkeleton",
    "XiaoBoardSkeleton",
    "GripEndSkeleton",
    "GripBoardSkeleton",
    "GripSkeleton",
    "ButtonPadSkeleton",
    "ControllerSkeleton",
    "build_skeleton",
    "grip_board_z_chain",
    "rectangle_outline",
    "with_z",
]
