"""
Tests for 2D and 3D transform chains.

Point math only; applying chains to build123d shapes is covered in
test_geometry.py.
"""

import math
import random

import pytest

from shcontroller.core import (
    Mirror2D,
    Mirror3D,
    Rotate2D,
    Rotate3D,
    Transform2D,
    Transform3D,
    TransformError,
    Translate2D,
    Translate3D,
    mirror_vec2ds,
    mirror_vec3ds,
    rotate_vec2,
)
from shcontroller.enums import Axis
from tests.helpers.chains import (
    assert_vec_close,
    random_point_2d,
    random_point_3d,
    random_transform_2d,
    random_transform_3d,
)


class TestRotateVec2:
    """Tests for rotate_vec2."""

    def test_quarter_turn_is_counter_clockwise(self):
        assert_vec_close(rotate_vec2((1, 0), math.pi / 2), (0, 1))
        assert_vec_close(rotate_vec2((0, 1), math.pi / 2), (-1, 0))

    def test_full_turn(self):
        assert_vec_close(rotate_vec2((3, 4), 2 * math.pi), (3, 4))

    def test_preserves_length(self):
        x, y = rotate_vec2((3, 4), 1.234)
        assert math.hypot(x, y) == pytest.approx(5)


class TestOps3D:
    """Single 3D operations."""

    def test_translate(self):
        assert Translate3D(1, 2, 3).apply_vec((1, 1, 1)) == (2, 3, 4)

    def test_rotate_x(self):
        assert_vec_close(Rotate3D(Axis.X, math.pi / 2).apply_vec((0, 1, 0)), (0, 0, 1))

    def test_rotate_y(self):
        """Right-handed about Y: +z goes to +x, +x goes to -z."""
        op = Rotate3D(Axis.Y, math.pi / 2)
        assert_vec_close(op.apply_vec((0, 0, 1)), (1, 0, 0))
        assert_vec_close(op.apply_vec((1, 0, 0)), (0, 0, -1))

    def test_rotate_z(self):
        assert_vec_close(Rotate3D(Axis.Z, math.pi / 2).apply_vec((1, 0, 0)), (0, 1, 0))

    def test_rotate_leaves_axis_component(self):
        result = Rotate3D(Axis.Z, 0.7).apply_vec((1, 2, 5))
        assert result[2] == 5

    @pytest.mark.parametrize("axis,expected", [
        (Axis.X, (-1, 2, 3)),
        (Axis.Y, (1, -2, 3)),
        (Axis.Z, (1, 2, -3)),
    ])
    def test_mirror(self, axis, expected):
        assert Mirror3D(axis).apply_vec((1, 2, 3)) == expected

    def test_axis_from_string(self):
        assert Rotate3D("y", 1.0).axis == Axis.Y
        assert Mirror3D("Z").axis == Axis.Z

    def test_unknown_axis(self):
        with pytest.raises(TransformError, match="Unknown axis"):
            Rotate3D("w", 1.0)

    def test_inverted(self):
        assert Translate3D(1, -2, 3).inverted() == Translate3D(-1, 2, -3)
        assert Rotate3D(Axis.X, 0.5).inverted() == Rotate3D(Axis.X, -0.5)
        assert Mirror3D(Axis.Y).inverted() == Mirror3D(Axis.Y)


class TestOps2D:
    """Single 2D operations."""

    def test_translate(self):
        assert Translate2D(1, -1).apply_vec((2, 2)) == (3, 1)

    def test_rotate(self):
        assert_vec_close(Rotate2D(math.pi).apply_vec((1, 0)), (-1, 0))

    def test_mirror(self):
        assert Mirror2D(Axis.X).apply_vec((1, 2)) == (-1, 2)
        assert Mirror2D(Axis.Y).apply_vec((1, 2)) == (1, -2)

    def test_mirror_z_rejected(self):
        with pytest.raises(TransformError, match="Axis must be one of x, y"):
            Mirror2D("z")


class TestTransform3D:
    """Tests for Transform3D chains."""

    def test_empty_is_identity(self):
        assert Transform3D().apply_point((1, 2, 3)) == (1.0, 2.0, 3.0)

    def test_ops_applied_in_order(self):
        """Translate then rotate differs from rotate then translate."""
        translate_first = Transform3D((Translate3D(1, 0, 0), Rotate3D(Axis.Z, math.pi / 2)))
        rotate_first = Transform3D((Rotate3D(Axis.Z, math.pi / 2), Translate3D(1, 0, 0)))
        assert_vec_close(translate_first.apply_point((0, 0, 0)), (0, 1, 0))
        assert_vec_close(rotate_first.apply_point((0, 0, 0)), (1, 0, 0))

    def test_apply_point_returns_floats(self):
        result = Transform3D().apply_point([1, 2, 3])
        assert isinstance(result, tuple)
        assert all(isinstance(c, float) for c in result)

    def test_apply_points_keeps_order(self):
        t = Transform3D((Translate3D(0, 0, 1),))
        assert t.apply_points([(0, 0, 0), (1, 1, 1)]) == ((0, 0, 1), (1, 1, 2))

    def test_reversed_structure(self):
        t = Transform3D((Translate3D(1, 2, 3), Rotate3D(Axis.Y, 0.3), Mirror3D(Axis.X)))
        assert t.reversed() == Transform3D((
            Mirror3D(Axis.X),
            Rotate3D(Axis.Y, -0.3),
            Translate3D(-1, -2, -3),
        ))

    @pytest.mark.parametrize("seed", range(10))
    def test_reversed_round_trip(self, seed):
        rng = random.Random(seed)
        t = random_transform_3d(rng, rng.randint(1, 8))
        point = random_point_3d(rng)
        assert_vec_close(t.reversed().apply_point(t.apply_point(point)), point)
        assert_vec_close(t.apply_point(t.reversed().apply_point(point)), point)

    @pytest.mark.parametrize("seed", range(5))
    def test_join_applies_in_turn(self, seed):
        rng = random.Random(seed)
        a = random_transform_3d(rng, 4)
        b = random_transform_3d(rng, 4)
        point = random_point_3d(rng)
        assert_vec_close(Transform3D.join(a, b).apply_point(point), b.apply_point(a.apply_point(point)))

    def test_join_length(self):
        a = Transform3D((Translate3D(1, 0, 0),))
        b = Transform3D((Mirror3D(Axis.X), Mirror3D(Axis.Y)))
        assert len(Transform3D.join(a, b)) == 3
        assert len(Transform3D.join()) == 0

    def test_from_items(self):
        t = Transform3D.from_items([("translate", 1, 2, 3), ("rotate", "z", 0.5), ("mirror", "x")])
        assert list(t) == [Translate3D(1, 2, 3), Rotate3D(Axis.Z, 0.5), Mirror3D(Axis.X)]

    def test_to_items(self):
        t = Transform3D((Translate3D(1, 2, 3), Rotate3D(Axis.Z, 0.5), Mirror3D(Axis.X)))
        assert t.to_items() == [("translate", 1, 2, 3), ("rotate", "z", 0.5), ("mirror", "x")]
        assert Transform3D.from_items(t.to_items()) == t

    def test_from_items_accepts_lists(self):
        t = Transform3D.from_items([["translate", 0, 0, 1]])
        assert t.apply_point((0, 0, 0)) == (0, 0, 1)

    @pytest.mark.parametrize("item", [
        ("scale", 2),
        ("translate", 1, 2),
        ("rotate", "x"),
        ("mirror",),
        (),
        "translate",
    ])
    def test_invalid_items(self, item):
        with pytest.raises(TransformError):
            Transform3D.from_items([item])

    def test_immutable(self):
        t = Transform3D()
        with pytest.raises(AttributeError):
            t.ops = ()


class TestTransform2D:
    """Tests for Transform2D chains."""

    @pytest.mark.parametrize("seed", range(10))
    def test_reversed_round_trip(self, seed):
        rng = random.Random(seed)
        t = random_transform_2d(rng, rng.randint(1, 8))
        point = random_point_2d(rng)
        assert_vec_close(t.reversed().apply_point(t.apply_point(point)), point)

    def test_reversed_structure(self):
        t = Transform2D((Rotate2D(0.5), Mirror2D(Axis.Y), Translate2D(3, 4)))
        assert t.reversed() == Transform2D((Translate2D(-3, -4), Mirror2D(Axis.Y), Rotate2D(-0.5)))

    def test_from_items(self):
        t = Transform2D.from_items([("rotate", 0.5), ("translate", 16, -40), ("mirror", "y")])
        assert list(t) == [Rotate2D(0.5), Translate2D(16, -40), Mirror2D(Axis.Y)]
        assert Transform2D.from_items(t.to_items()) == t

    def test_invalid_item(self):
        with pytest.raises(TransformError):
            Transform2D.from_items([("rotate", "z", 0.5)])

    def test_to_3d_ops(self):
        t = Transform2D((Rotate2D(0.5), Translate2D(1, 2), Mirror2D(Axis.X)))
        assert t.to_3d() == Transform3D((
            Rotate3D(Axis.Z, 0.5),
            Translate3D(1, 2, 0.0),
            Mirror3D(Axis.X),
        ))

    @pytest.mark.parametrize("seed", range(5))
    def test_to_3d_matches_on_plane(self, seed):
        rng = random.Random(seed)
        t = random_transform_2d(rng, 6)
        x, y = random_point_2d(rng)
        x2, y2 = t.apply_point((x, y))
        assert_vec_close(t.to_3d().apply_point((x, y, 0.0)), (x2, y2, 0.0))

    def test_counter_screw_composition(self):
        """R, flip y, T, flip y, R mirrors a point's placement across y = 0."""
        t = Transform2D((Rotate2D(math.radians(76)), Translate2D(16, -40)))
        flip = Transform2D((Mirror2D(Axis.Y),))
        counter = Transform2D.join(t.reversed(), flip, t, flip, t.reversed())
        point = (6.5, 0.0)
        expected = t.reversed().apply_point(
            flip.apply_point(t.apply_point(flip.apply_point(t.reversed().apply_point(point))))
        )
        assert_vec_close(counter.apply_point(point), expected)


class TestMirrorHelpers:
    """Tests for mirror_vec2ds and mirror_vec3ds."""

    def test_mirror_vec2ds_default_axis(self):
        assert mirror_vec2ds([(1, 2), (3, 4)]) == [(-1, 2), (-3, 4)]

    def test_mirror_vec2ds_y(self):
        assert mirror_vec2ds([(1, 2)], "y") == [(1, -2)]

    def test_mirror_vec3ds(self):
        assert mirror_vec3ds([(1, 2, 3)], Axis.Z) == [(1, 2, -3)]

    def test_mirror_twice_is_identity(self):
        points = [(1.5, -2.0), (0.0, 3.0)]
        assert mirror_vec2ds(mirror_vec2ds(points, "y"), "y") == points
