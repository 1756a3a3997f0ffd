"""
Skeleton of the v1.1 handheld controller.

Each part is a small object built from its parameter model plus whatever
sibling dimensions it depends on, passed in explicitly. Every measurement,
transform and point set is a memoized property, so building the whole tree
and querying it repeatedly costs one computation per value.

Coordinate conventions (global frame):
    x: from the stick towards the buttons
    y: left/right, the controller is symmetric about y = 0
    z: stick side up

Example:
    >>> from shcontroller.device import ControllerSkeleton
    >>>
    >>> skeleton = ControllerSkeleton()
    >>> skeleton.tactile_switch.total
    9.5
    >>> node = skeleton.node  # SkeletonNode tree for the viewer
"""

import logging
import math
from typing import Dict, List, Optional, Sequence

from ..constants import BOARD_COLOR, SWITCH_COLOR
from ..core.cache import Cacheable, cached_getter, measure_time
from ..core.skeleton import PointTree, SkeletonNode
from ..core.transforms import (
    Mirror2D,
    Mirror3D,
    Rotate2D,
    Rotate3D,
    Transform2D,
    Transform3D,
    Translate2D,
    Translate3D,
    Vec2D,
    Vec3D,
    mirror_vec3ds,
)
from ..core.values import DimensionChain, DimensionChain2D, flex, seq_val, seq_vec2
from ..enums import Axis
from ..io.params import (
    ButtonFaceParams,
    ButtonPadParams,
    GripBoardParams,
    GripEndParams,
    GripParams,
    PointViewMeta,
    SkeletonParams,
    TactileSwitchParams,
    TriggerBoardParams,
    TriggerParams,
    XiaoBoardParams,
)

logger = logging.getLogger(__name__)


def with_z(points: Sequence[Sequence[float]], z: float) -> List[Vec3D]:
    """Lift 2D points onto the plane at height z."""
    return [(float(p[0]), float(p[1]), float(z)) for p in points]


def rectangle_outline(x_total: float, y_total_half: float) -> List[Vec2D]:
    """Rectangle from x = 0 to x_total, centred on y = 0."""
    return [
        (0.0, y_total_half),
        (x_total, y_total_half),
        (x_total, -y_total_half),
        (0.0, -y_total_half),
    ]


class PartSkeleton(Cacheable):
    """Base for skeleton parts. Subclasses override the properties they have."""

    name: str = "part"

    @property
    def transform_self(self) -> Optional[Transform3D]:
        return None

    @property
    def points(self) -> Dict[str, PointTree]:
        return {}

    @property
    def points_view_meta(self) -> Dict[str, PointViewMeta]:
        return {}

    @property
    def children(self) -> Dict[str, "PartSkeleton"]:
        return {}

    def build_node(self) -> SkeletonNode:
        logger.debug(f"Building skeleton node {self.name}")
        return SkeletonNode(
            name=self.name,
            points=self.points,
            points_view_meta=self.points_view_meta,
            transform_self=self.transform_self,
            children={key: child.node for key, child in self.children.items()},
        )

    @cached_getter
    def node(self) -> SkeletonNode:
        """This part and its children as a SkeletonNode tree."""
        return self.build_node()


# ─── Common parts ────────────────────────────────────────────────────────


class TactileSwitchSkeleton(PartSkeleton):
    name = "TactileSwitch"

    def __init__(self, params: Optional[TactileSwitchParams] = None):
        self.params = params or TactileSwitchParams()

    @cached_getter
    def z_seq(self) -> DimensionChain:
        return seq_val(
            [("baseTop", self.params.base_top_mm), ("switchTop", self.params.switch_height_mm)],
            label="TactileSwitch.z",
        )

    @property
    def subterranean_height(self) -> float:
        """Height of the part embedded in the housing."""
        return self.z_seq.total_value - self.params.exposed_height_mm

    @property
    def total(self) -> float:
        return self.z_seq.value_at("switchTop")


# ─── Trigger ─────────────────────────────────────────────────────────────


class TriggerBoardSkeleton(PartSkeleton):
    """Switch board, in the button face frame once transformed."""

    name = "Board"

    def __init__(self, params: TriggerBoardParams, switch: TactileSwitchSkeleton):
        self.params = params
        self.switch = switch

    @cached_getter
    def x_top_to_bottom(self) -> DimensionChain:
        return seq_val(
            [
                ("topSwitch", self.params.top_switch_mm),
                ("bottomSwitch", self.params.top_to_bottom_switch_mm),
                ("bottom", self.params.bottom_switch_to_edge_mm),
            ],
            label="TriggerBoard.x",
        )

    @cached_getter
    def transform_self(self) -> Transform3D:
        return Transform3D((
            Translate3D(self.params.offset_x_mm, 0.0, -self.switch.subterranean_height),
            Rotate3D(Axis.Y, math.radians(-90)),
        ))

    @cached_getter
    def switch_point2ds(self) -> Dict[str, Vec2D]:
        top = self.x_top_to_bottom.value_at("topSwitch")
        return {
            "right": (top, self.params.y_bottom_switch_mm),
            "left": (top, -self.params.y_bottom_switch_mm),
            "bottom": (self.x_top_to_bottom.value_at("bottomSwitch"), 0.0),
        }

    @cached_getter
    def outline2d(self) -> List[Vec2D]:
        return rectangle_outline(self.x_top_to_bottom.value_at("bottom"), self.params.y_total_half_mm)

    @cached_getter
    def points(self) -> Dict[str, PointTree]:
        switches = list(self.switch_point2ds.values())
        return {
            "switches": with_z(switches, 0.0),
            "switches_top": with_z(switches, self.switch.total),
            "board_top": with_z(self.outline2d, 0.0),
            "board_bottom": with_z(self.outline2d, -self.params.thickness_mm),
        }

    @property
    def points_view_meta(self) -> Dict[str, PointViewMeta]:
        return {
            "switches": PointViewMeta(color=SWITCH_COLOR, default_visible=True),
            "switches_top": PointViewMeta(color=SWITCH_COLOR, default_visible=True),
            "board_top": PointViewMeta(color=BOARD_COLOR, default_visible=True),
        }

    @cached_getter
    def board_solid(self):
        """Board blank as a build123d solid, placed in the button face frame."""
        from ..core.geometry import corner_box

        blank = corner_box((
            self.x_top_to_bottom.total_value,
            self.params.y_total_half_mm * 2,
            self.params.thickness_mm,
        ))
        local = Transform3D((
            Translate3D(0.0, -self.params.y_total_half_mm, -self.params.thickness_mm),
        ))
        return Transform3D.join(local, self.transform_self).apply_geometry(blank)


class ButtonFaceSkeleton(PartSkeleton):
    """Face of the trigger the index finger rests on."""

    name = "ButtonFace"

    def __init__(
        self,
        params: ButtonFaceParams,
        trigger_x_total: float,
        trigger_y_total_half: float,
        switch: TactileSwitchSkeleton,
    ):
        self.params = params
        self.trigger_x_total = trigger_x_total
        self.trigger_y_total_half = trigger_y_total_half
        self.switch = switch

    @property
    def rotate_rad(self) -> float:
        return math.radians(self.params.rotate_deg)

    @cached_getter
    def board(self) -> TriggerBoardSkeleton:
        return TriggerBoardSkeleton(self.params.board, self.switch)

    @cached_getter
    def transform_self(self) -> Transform3D:
        return Transform3D((
            Mirror3D(Axis.X),
            Rotate3D(Axis.Y, self.rotate_rad),
            Translate3D(self.trigger_x_total, 0.0, 0.0),
        ))

    @cached_getter
    def bottom_outer_seq(self) -> DimensionChain2D:
        curve_x, curve_y = self.params.curve_end_mm
        # Runs out to the y edge of the trigger
        return seq_vec2(
            [
                ("start", (0.0, 0.0)),
                ("curveStart", (0.0, flex())),
                ("curveEnd", (curve_x, curve_y)),
                ("end", (flex(), self.params.y_corner_mm - curve_y)),
            ],
            total=(self.params.x_corner_mm, self.trigger_y_total_half),
            label="ButtonFace.bottomOuter",
        )

    @cached_getter
    def bottom_inner(self) -> List[Vec2D]:
        board_edge = self.board.params.y_total_half_mm + 1
        sunk = self.switch.subterranean_height
        return [
            (self.params.x_total_mm, self.trigger_y_total_half),
            (self.params.x_total_mm, board_edge),
            (sunk, board_edge),
            (sunk, 0.0),
        ]

    @property
    def bottom_outline(self) -> List[Vec2D]:
        return list(self.bottom_outer_seq.vecs) + self.bottom_inner

    @cached_getter
    def points(self) -> Dict[str, PointTree]:
        return {"bottom_outline": with_z(self.bottom_outline, 0.0)}

    @property
    def points_view_meta(self) -> Dict[str, PointViewMeta]:
        return {"bottom_outline": PointViewMeta(color=(0.5, 1.0, 0.5), default_visible=True)}

    @property
    def children(self) -> Dict[str, PartSkeleton]:
        return {"Board": self.board}


class TriggerSkeleton(PartSkeleton):
    name = "Trigger"

    def __init__(self, params: TriggerParams, switch: TactileSwitchSkeleton):
        self.params = params
        self.switch = switch

    @cached_getter
    def button_face(self) -> ButtonFaceSkeleton:
        return ButtonFaceSkeleton(
            self.params.button_face,
            trigger_x_total=self.params.x_total_mm,
            trigger_y_total_half=self.params.y_total_half_mm,
            switch=self.switch,
        )

    @cached_getter
    def transform_self(self) -> Transform3D:
        return Transform3D((Mirror3D(Axis.Z),))

    @property
    def top_base_x(self) -> float:
        """x of the hull top, where the slanted button face meets the top."""
        p = self.params
        return p.x_total_mm + p.z_total_mm * math.tan(self.button_face.rotate_rad)

    @cached_getter
    def hull_half(self) -> Dict[str, PointTree]:
        """Points whose convex hull (as spheres) gives the trigger its rounded shape."""
        p = self.params
        top_x = self.top_base_x
        base_y = p.y_bottom_width_half_mm
        top_z = p.z_total_mm - 1 - p.hull_sphere_radius_mm
        small_z = p.z_total_mm - p.hull_small_sphere_radius_mm
        return {
            "top": {
                # Side points sit slightly back so the front forms a wedge
                "standard": [
                    (top_x - 1, 0.0, top_z),
                    (top_x - 2, base_y - 3, top_z),
                    (top_x - 3, base_y, top_z),
                ],
                # Same x and z so the trigger rests flat when put down
                "small": [
                    (top_x - 3, 0.0, small_z),
                    (top_x - 3, base_y - 5, small_z),
                ],
            },
            "side": [
                (top_x - 8, p.y_total_half_mm - 4, 12.0),
                (top_x - 10, p.y_total_half_mm, 0.0),
            ],
        }

    @cached_getter
    def points(self) -> Dict[str, PointTree]:
        return {"hull_half": self.hull_half}

    @property
    def children(self) -> Dict[str, PartSkeleton]:
        return {"ButtonFace": self.button_face}


# ─── Grip ────────────────────────────────────────────────────────────────


class XiaoBoardSkeleton(PartSkeleton):
    """Microcontroller board on top of the grip board."""

    name = "XiaoBoard"

    def __init__(self, params: XiaoBoardParams):
        self.params = params

    @cached_getter
    def z_bottom_to_top(self) -> DimensionChain:
        return seq_val(
            [
                ("boardBottom", self.params.bottom_mm),
                ("boardTop", self.params.board_thickness_mm),
                ("chipTop", self.params.chip_height_mm),
            ],
            label="XiaoBoard.z",
        )

    @property
    def z_total(self) -> float:
        return self.z_bottom_to_top.total_value

    @cached_getter
    def points(self) -> Dict[str, PointTree]:
        outline = rectangle_outline(self.params.x_total_mm, self.params.y_total_mm / 2)
        return {"bottom_outline": with_z(outline, 0.0)}

    @property
    def points_view_meta(self) -> Dict[str, PointViewMeta]:
        return {"bottom_outline": PointViewMeta(color=BOARD_COLOR, default_visible=True)}


def grip_board_z_chain(params: GripBoardParams, xiao: XiaoBoardSkeleton) -> DimensionChain:
    """Heights stacked on the grip board: board itself, then the Xiao board."""
    return seq_val(
        [("boardTop", params.thickness_mm), ("xiaoTop", xiao.z_total)],
        label="GripBoard.z",
    )


class GripEndSkeleton(PartSkeleton):
    """End cap. Its x axis runs from the grip top wall down to the bottom."""

    name = "End"

    def __init__(self, params: GripEndParams, board_z_total: float):
        self.params = params
        self.board_z_total = board_z_total

    @cached_getter
    def x_top_to_bottom(self) -> DimensionChain:
        p = self.params
        return seq_val(
            [
                ("topWallEnd", p.top_thickness_mm),
                ("boardStart", p.board_gap_mm),
                ("boardEnd", self.board_z_total),
                ("boardLegBottom", p.board_leg_mm),
                ("bottomWallStart", p.bottom_gap_mm),
                ("bottom", p.bottom_thickness_mm),
            ],
            label="GripEnd.x",
        )

    @property
    def x_total(self) -> float:
        return self.x_top_to_bottom.total_value

    @property
    def y_total_half(self) -> float:
        return self.params.y_total_mm / 2

    @cached_getter
    def transform_self(self) -> Transform3D:
        return Transform3D((Rotate3D(Axis.Y, math.radians(-90)), Mirror3D(Axis.X)))

    @cached_getter
    def outline_half(self) -> List[Vec2D]:
        radius = self.params.corner_radius_mm
        return [
            (0.0, 0.0),
            (0.0, self.y_total_half - radius),
            (radius, self.y_total_half),
            (self.x_total, self.y_total_half),
            (self.x_total, 0.0),
        ]

    @cached_getter
    def points(self) -> Dict[str, PointTree]:
        return {"bottom_half": with_z(self.outline_half, 0.0)}


class GripBoardSkeleton(PartSkeleton):
    """Main board, placed inside the grip just below the end cap top wall."""

    name = "Board"

    def __init__(
        self,
        params: GripBoardParams,
        xiao: XiaoBoardSkeleton,
        end_thickness: float,
        offset_z: float,
    ):
        self.params = params
        self.xiao = xiao
        self.end_thickness = end_thickness
        self.offset_z = offset_z

    @cached_getter
    def z_bottom_to_top(self) -> DimensionChain:
        return grip_board_z_chain(self.params, self.xiao)

    @property
    def z_total(self) -> float:
        return self.z_bottom_to_top.total_value

    @cached_getter
    def transform_self(self) -> Transform3D:
        return Transform3D((Translate3D(self.end_thickness, 0.0, self.offset_z),))

    @cached_getter
    def points(self) -> Dict[str, PointTree]:
        outline = rectangle_outline(self.params.x_total_mm, self.params.y_total_mm / 2)
        return {"bottom_outline": with_z(outline, 0.0)}

    @property
    def points_view_meta(self) -> Dict[str, PointViewMeta]:
        return {"bottom_outline": PointViewMeta(color=BOARD_COLOR, default_visible=True)}

    @property
    def children(self) -> Dict[str, PartSkeleton]:
        return {"XiaoBoard": self.xiao}


class GripSkeleton(PartSkeleton):
    name = "Grip"

    def __init__(self, params: GripParams, trigger_z_back: float):
        self.params = params
        self.trigger_z_back = trigger_z_back

    @cached_getter
    def xiao(self) -> XiaoBoardSkeleton:
        return XiaoBoardSkeleton(self.params.board.xiao)

    @cached_getter
    def end(self) -> GripEndSkeleton:
        board_z = grip_board_z_chain(self.params.board, self.xiao)
        return GripEndSkeleton(self.params.end, board_z_total=board_z.total_value)

    @cached_getter
    def board(self) -> GripBoardSkeleton:
        return GripBoardSkeleton(
            self.params.board,
            self.xiao,
            end_thickness=self.params.x_end_thickness_mm,
            offset_z=self.end.x_top_to_bottom.total_from_to("boardEnd", "bottom"),
        )

    @property
    def y_total(self) -> float:
        return self.end.params.y_total_mm

    @property
    def y_total_half(self) -> float:
        return self.end.y_total_half

    @property
    def z_total(self) -> float:
        return self.end.x_total

    @cached_getter
    def transform_self(self) -> Transform3D:
        return Transform3D((
            Translate3D(-self.params.x_total_mm, 0.0, -self.trigger_z_back),
            Rotate3D(Axis.Y, math.radians(self.params.rotate_deg)),
        ))

    @property
    def children(self) -> Dict[str, PartSkeleton]:
        return {"End": self.end, "Board": self.board}


# ─── Button pad ──────────────────────────────────────────────────────────


class ButtonPadSkeleton(PartSkeleton):
    """Button pad cover. Laid out in 2D, then lifted to 3D."""

    name = "ButtonPad"

    def __init__(self, params: ButtonPadParams, grip_y_total_half: float):
        self.params = params
        self.grip_y_total_half = grip_y_total_half

    @cached_getter
    def transform2d(self) -> Transform2D:
        offset_x, offset_y = self.params.offset_mm
        return Transform2D((
            Rotate2D(math.radians(self.params.rotate_deg)),
            Translate2D(offset_x, offset_y),
        ))

    @cached_getter
    def counter_screw_transform(self) -> Transform2D:
        """Screw position mirrored in the pad frame, then mirrored back globally."""
        to_local = self.transform2d.reversed()
        flip = Transform2D((Mirror2D(Axis.Y),))
        return Transform2D.join(to_local, flip, self.transform2d, flip, to_local)

    @cached_getter
    def transform_self(self) -> Transform3D:
        return self.transform2d.to_3d()

    @cached_getter
    def point2ds(self) -> Dict[str, PointTree]:
        p = self.params
        side_half = list(self.transform2d.reversed().apply_points([
            (0.0, self.grip_y_total_half),
            (0.0, -self.grip_y_total_half),
        ]))
        outline_half = [
            (p.x_total_mm, 0.0),
            (p.x_total_mm, p.y_end_mm),
            *side_half,
            (0.0, p.y_start_mm),
            (0.0, 0.0),
        ]
        global_screw = (p.edge_to_screw_mm, 0.0)
        return {
            "side_half": side_half,
            "outline_half": outline_half,
            "screw": self.transform2d.reversed().apply_point(global_screw),
            "counter_screw": self.counter_screw_transform.apply_point(global_screw),
        }

    def _finger_subtraction_half(self) -> Dict[str, List[Vec3D]]:
        # Clearance so the index finger does not catch on the cover edge
        x_end = self.params.x_total_mm
        y = self.params.y_end_mm
        return {
            "thin": [
                (x_end - 4, 4.0, 0.0),
                (x_end - 17, 6.0, 0.0),
                (x_end - 2, y + 1, 0.0),
                (x_end - 20, y + 2.5, 0.0),
                (x_end - 6, y + 5, 3.0),
                (x_end - 18, y + 7, 3.0),
            ],
            "bowl": [
                (x_end, y, 0.0),
                (x_end - 7, y - 1, 0.0),
                (x_end - 20, y + 2.5, 0.0),
                (x_end - 26, y + 8, 0.0),
                (x_end - 32, y + 15.8, 0.0),
                (x_end - 26, y + 16, 11.0),
                (x_end - 2, y + 6, 11.0),
            ],
        }

    @cached_getter
    def points(self) -> Dict[str, PointTree]:
        z_total = self.params.z_total_mm
        outline_top = with_z(self.point2ds["outline_half"], z_total)
        outline_bottom = with_z(self.point2ds["outline_half"], 0.0)
        screw_top = (*self.point2ds["screw"], z_total)
        screw_counter = (*self.point2ds["counter_screw"], z_total)
        return {
            "outline_half": {"top": outline_top, "bottom": outline_bottom},
            "outline": [
                *outline_top,
                *outline_bottom,
                *mirror_vec3ds(outline_top + outline_bottom, Axis.Y),
            ],
            "screw": {
                "top": [screw_top, *mirror_vec3ds([screw_top], Axis.Y)],
                "counter": [screw_counter, *mirror_vec3ds([screw_counter], Axis.Y)],
            },
            "finger_subtraction_half": self._finger_subtraction_half(),
        }

    @property
    def points_view_meta(self) -> Dict[str, PointViewMeta]:
        return {
            "outline": PointViewMeta(radius=1.5, default_visible=True),
            "screw": PointViewMeta(default_visible=True),
            "finger_subtraction_half": PointViewMeta(color=(0.8, 0.8, 1.0), default_visible=True),
        }


# ─── Whole controller ────────────────────────────────────────────────────


class ControllerSkeleton(PartSkeleton):
    """Root of the skeleton. Wires sibling dimensions between parts."""

    name = "Skeleton"

    def __init__(self, params: Optional[SkeletonParams] = None):
        self.params = params or SkeletonParams()

    @cached_getter
    def tactile_switch(self) -> TactileSwitchSkeleton:
        return TactileSwitchSkeleton(self.params.tactile_switch)

    @cached_getter
    def trigger(self) -> TriggerSkeleton:
        return TriggerSkeleton(self.params.trigger, self.tactile_switch)

    @cached_getter
    def grip(self) -> GripSkeleton:
        return GripSkeleton(self.params.grip, trigger_z_back=self.params.trigger.z_back_mm)

    @cached_getter
    def button_pad(self) -> ButtonPadSkeleton:
        return ButtonPadSkeleton(self.params.button_pad, grip_y_total_half=self.grip.y_total_half)

    @property
    def children(self) -> Dict[str, PartSkeleton]:
        return {
            "ButtonPad": self.button_pad,
            "Grip": self.grip,
            "Trigger": self.trigger,
        }

    @measure_time(label="ControllerSkeleton.build_node")
    def build_node(self) -> SkeletonNode:
        return super().build_node()


def build_skeleton(params: Optional[SkeletonParams] = None) -> SkeletonNode:
    """Resolve the whole controller skeleton into a SkeletonNode tree."""
    return ControllerSkeleton(params).node
