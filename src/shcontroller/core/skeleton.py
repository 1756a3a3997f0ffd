"""
Skeleton trees: named diagnostic points per part, nested by assembly.

A SkeletonNode holds a part's points in its own local frame, the transform
placing that frame inside the parent, and child nodes. Points are a
recursive structure: a single (x, y, z) point, a list of point trees, or a
name -> point tree mapping.

For display the tree is converted into view nodes (map, list, point) and
flattened with visible_points(), which maps every point into the root
frame. Nothing here mutates the skeleton or any cached value.
"""

from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from ..constants import DEFAULT_POINT_RADIUS_MM
from ..io.params import PointViewMeta
from .transforms import Transform3D, Vec3D

PointTree = Union[Sequence[float], Sequence["PointTree"], Mapping[str, "PointTree"]]


@dataclass(frozen=True)
class SkeletonNode:
    """
    One part of the skeleton.

    Attributes:
        name: Part name
        points: Named point trees in the part's local frame
        points_view_meta: Display settings per top-level point key
        transform_self: Local frame -> parent frame (None = identity)
        children: Sub-parts, whose frames are relative to this part
    """
    name: str
    points: Mapping[str, PointTree] = field(default_factory=dict)
    points_view_meta: Mapping[str, PointViewMeta] = field(default_factory=dict)
    transform_self: Optional[Transform3D] = None
    children: Mapping[str, "SkeletonNode"] = field(default_factory=dict)

    def child(self, path: str) -> "SkeletonNode":
        """Descendant by dotted path, e.g. "Trigger.ButtonFace.Board"."""
        node = self
        for part in path.split("."):
            try:
                node = node.children[part]
            except KeyError:
                raise KeyError(f"No child '{part}' under '{node.name}'") from None
        return node


@dataclass(frozen=True)
class PointViewNode:
    point: Vec3D
    meta: Optional[PointViewMeta] = None
    is_visible: Optional[bool] = None


@dataclass(frozen=True)
class ListViewNode:
    children: Tuple["ViewNode", ...]
    is_visible: Optional[bool] = None


@dataclass(frozen=True)
class MapViewNode:
    children: Mapping[str, "ViewNode"]
    transform_self: Optional[Transform3D] = None
    is_visible: Optional[bool] = None


ViewNode = Union[MapViewNode, ListViewNode, PointViewNode]


@dataclass(frozen=True)
class VisiblePoint:
    point: Vec3D
    color: Optional[Tuple[float, float, float]]
    radius: float


def is_vec3(value: Any) -> bool:
    """True for a flat sequence of exactly three numbers."""
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Sequence):
        return False
    return len(value) == 3 and all(
        isinstance(item, Real) and not isinstance(item, bool) for item in value
    )


def points_to_view_node(points: PointTree, meta: Optional[PointViewMeta] = None) -> ViewNode:
    """Convert a point tree into view nodes, passing meta down to every point."""
    if isinstance(points, Mapping):
        return MapViewNode(
            children={key: points_to_view_node(value, meta) for key, value in points.items()},
        )
    if is_vec3(points):
        return PointViewNode(point=tuple(float(v) for v in points), meta=meta)
    if isinstance(points, Sequence) and not isinstance(points, (str, bytes)):
        return ListViewNode(children=tuple(points_to_view_node(item, meta) for item in points))
    raise TypeError(f"Not a point tree: {points!r}")


def skeleton_to_view_node(skeleton: SkeletonNode) -> MapViewNode:
    """View tree for a skeleton: its point groups, then its children."""
    children: Dict[str, ViewNode] = {}
    for key, points in skeleton.points.items():
        children[key] = points_to_view_node(points, skeleton.points_view_meta.get(key))
    for key, child in skeleton.children.items():
        children[key] = skeleton_to_view_node(child)
    return MapViewNode(children=children, transform_self=skeleton.transform_self)


def visible_points(node: ViewNode, force_visible: bool = False) -> List[VisiblePoint]:
    """
    Points to draw, in the frame of node's parent.

    A node marked visible forces its whole subtree visible. Points with view
    meta are only forced visible when their meta says default_visible, and
    a point's own is_visible always shows it.
    """
    if isinstance(node, MapViewNode):
        force = force_visible or bool(node.is_visible)
        found = [p for child in node.children.values() for p in visible_points(child, force)]
        if node.transform_self is not None:
            transform = node.transform_self
            found = [
                VisiblePoint(transform.apply_point(p.point), p.color, p.radius) for p in found
            ]
        return found

    if isinstance(node, ListViewNode):
        force = force_visible or bool(node.is_visible)
        return [p for child in node.children for p in visible_points(child, force)]

    if isinstance(node, PointViewNode):
        if node.meta is not None:
            visible = (force_visible and node.meta.default_visible) or bool(node.is_visible)
        else:
            visible = force_visible or bool(node.is_visible)
        if not visible:
            return []
        color = node.meta.color if node.meta is not None else None
        radius = node.meta.radius if node.meta is not None and node.meta.radius is not None else DEFAULT_POINT_RADIUS_MM
        return [VisiblePoint(node.point, color, radius)]

    raise TypeError(f"Unknown view node: {node!r}")


def _transform_tree(points: PointTree, transform: Transform3D) -> Any:
    if isinstance(points, Mapping):
        return {key: _transform_tree(value, transform) for key, value in points.items()}
    if is_vec3(points):
        return list(transform.apply_point(points))
    return [_transform_tree(item, transform) for item in points]


def _plain_tree(points: PointTree) -> Any:
    if isinstance(points, Mapping):
        return {key: _plain_tree(value) for key, value in points.items()}
    if is_vec3(points):
        return [float(v) for v in points]
    return [_plain_tree(item) for item in points]


def skeleton_points_to_dict(skeleton: SkeletonNode, global_frame: bool = False) -> Dict[str, Any]:
    """
    Nested plain-dict form of a skeleton's points, suitable for JSON.

    Args:
        skeleton: Root of the tree to convert
        global_frame: If True, every point is mapped into the frame of the
            given root's parent (each node's transform_self applied up the
            chain); if False, points stay in their own part's local frame
            and the transform is reported alongside.

    Returns:
        {"points": {...}, "children": {...}} plus "transform" when
        global_frame is False and the node has one
    """
    if global_frame:
        return _global_points(skeleton, Transform3D())

    result: Dict[str, Any] = {
        "points": {key: _plain_tree(value) for key, value in skeleton.points.items()},
        "children": {
            key: skeleton_points_to_dict(child) for key, child in skeleton.children.items()
        },
    }
    if skeleton.transform_self is not None:
        result["transform"] = [list(item) for item in skeleton.transform_self.to_items()]
    return result


def _global_points(skeleton: SkeletonNode, outer: Transform3D) -> Dict[str, Any]:
    to_global = Transform3D.join(skeleton.transform_self or Transform3D(), outer)
    return {
        "points": {
            key: _transform_tree(value, to_global) for key, value in skeleton.points.items()
        },
        "children": {
            key: _global_points(child, to_global) for key, child in skeleton.children.items()
        },
    }


def view_node_to_dict(node: ViewNode) -> Dict[str, Any]:
    """Plain-dict form of a view tree, suitable for JSON."""
    if isinstance(node, MapViewNode):
        result = {
            "type": "map",
            "children": {key: view_node_to_dict(child) for key, child in node.children.items()},
        }
        if node.transform_self is not None:
            result["transform"] = [list(item) for item in node.transform_self.to_items()]
        return result
    if isinstance(node, ListViewNode):
        return {"type": "list", "children": [view_node_to_dict(child) for child in node.children]}
    if isinstance(node, PointViewNode):
        result = {"type": "point", "point": list(node.point)}
        if node.meta is not None:
            result["meta"] = node.meta.model_dump(mode="json")
        return result
    raise TypeError(f"Unknown view node: {node!r}")
