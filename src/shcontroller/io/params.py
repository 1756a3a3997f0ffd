"""
Parameter models for the controller skeleton.

Each part's dimensions (mm) and angles (degrees) live in a Pydantic model
whose defaults describe the v1.1 controller. Models are frozen so a part
built from them can safely memoize everything it derives.

Uses Pydantic for validation and coercion of plain dicts.
"""

from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Params(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class PointViewMeta(_Params):
    """How the skeleton viewer draws a group of points."""
    color: Optional[Tuple[float, float, float]] = None  # RGB, 0-1
    radius: Optional[float] = None  # mm, viewer default if None
    default_visible: bool = False

    @field_validator("color")
    @classmethod
    def check_color(cls, v):
        if v is not None and not all(0.0 <= c <= 1.0 for c in v):
            raise ValueError(f"Color components must be within 0-1, got {v}")
        return v


class TactileSwitchParams(_Params):
    """Tactile switch heights, measured from the bottom of its base."""
    base_top_mm: float = 3.5
    switch_height_mm: float = 6.0  # From base top to actuator top
    exposed_height_mm: float = 2.0  # Part above the housing surface


class ButtonPadParams(_Params):
    """Button pad cover. x: stick towards buttons, y: symmetric, z: stick side up."""
    y_start_mm: float = 10.0
    y_end_mm: float = 13.0
    x_total_mm: float = 82.0
    z_total_mm: float = 12.0
    top_thickness_mm: float = 1.5
    side_thickness_mm: float = 1.5
    edge_to_screw_mm: float = 6.5
    rotate_deg: float = 76.0
    offset_mm: Tuple[float, float] = (16.0, -40.0)


class TriggerBoardParams(_Params):
    """Switch board inside the trigger button face."""
    top_switch_mm: float = 7.0
    top_to_bottom_switch_mm: float = 17.0
    bottom_switch_to_edge_mm: float = 5.0
    y_total_half_mm: float = 11.0
    y_bottom_switch_mm: float = 7.0
    thickness_mm: float = 1.5
    offset_x_mm: float = 9.0


class ButtonFaceParams(_Params):
    """Trigger button face, the part the index finger rests on."""
    x_corner_mm: float = 15.0
    x_total_mm: float = 25.0
    y_corner_mm: float = 18.0
    z_total_mm: float = 50.0
    rotate_deg: float = -34.0
    curve_end_mm: Tuple[float, float] = (4.0, 10.0)
    board: TriggerBoardParams = Field(default_factory=TriggerBoardParams)


class TriggerParams(_Params):
    """Trigger body."""
    x_total_mm: float = 50.0
    y_total_half_mm: float = 25.0
    y_bottom_width_half_mm: float = 11.0
    z_total_mm: float = 32.5
    z_back_mm: float = 15.0
    hull_sphere_radius_mm: float = 3.0
    hull_small_sphere_radius_mm: float = 2.0
    button_face: ButtonFaceParams = Field(default_factory=ButtonFaceParams)


class XiaoBoardParams(_Params):
    """Microcontroller board stacked on the grip board."""
    x_total_mm: float = 20.5
    y_total_mm: float = 17.5
    bottom_mm: float = 10.7  # Grip board top to Xiao board bottom
    board_thickness_mm: float = 1.5
    chip_height_mm: float = 1.5


class GripBoardParams(_Params):
    """Main board inside the grip."""
    x_total_mm: float = 60.0
    y_total_mm: float = 22.0
    thickness_mm: float = 1.5
    xiao: XiaoBoardParams = Field(default_factory=XiaoBoardParams)


class GripEndParams(_Params):
    """End cap closing the bottom of the grip."""
    top_thickness_mm: float = 1.0
    board_gap_mm: float = 0.5
    board_leg_mm: float = 2.0
    bottom_gap_mm: float = 0.5
    bottom_thickness_mm: float = 1.0
    y_total_mm: float = 30.0
    corner_radius_mm: float = 6.0


class GripParams(_Params):
    """Grip body."""
    x_total_mm: float = 75.0
    x_end_thickness_mm: float = 1.2
    rotate_deg: float = -24.0
    end: GripEndParams = Field(default_factory=GripEndParams)
    board: GripBoardParams = Field(default_factory=GripBoardParams)


class SkeletonParams(_Params):
    """All controller dimensions."""
    button_pad: ButtonPadParams = Field(default_factory=ButtonPadParams)
    trigger: TriggerParams = Field(default_factory=TriggerParams)
    grip: GripParams = Field(default_factory=GripParams)
    tactile_switch: TactileSwitchParams = Field(default_factory=TactileSwitchParams)


def load_skeleton_params(data: Optional[Dict[str, Any]] = None) -> SkeletonParams:
    """
    Validate a (possibly partial) nested dict of skeleton dimensions.

    Missing sections and fields take the v1.1 defaults; unknown keys are
    ignored.

    Raises:
        pydantic.ValidationError: If a value has the wrong type
    """
    return SkeletonParams.model_validate(data or {})


def skeleton_params_to_dict(params: SkeletonParams) -> Dict[str, Any]:
    """Plain-dict form of the parameters, suitable for JSON."""
    return params.model_dump(mode="json")
