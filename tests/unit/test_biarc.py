"""Unit tests for biarc corner fitting."""

import math

import pytest

from vectorcam.core.biarc import biarc_points, fit_biarc
from vectorcam.domain import ArcSpec, Point


def _tangent(spec: ArcSpec, point: Point) -> tuple[float, float]:
    """Unit direction of travel along a circular arc at a point on it."""
    rx = point.x - spec.center.x
    ry = point.y - spec.center.y
    length = math.hypot(rx, ry)
    tx, ty = -ry / length, rx / length
    if spec.clockwise:
        tx, ty = -tx, -ty
    return tx, ty


def _unit(dx: float, dy: float) -> tuple[float, float]:
    length = math.hypot(dx, dy)
    return dx / length, dy / length


CORNERS = [
    # Quarter turn with equal legs
    (Point(0, 0), Point(4, 4), Point(2, 0), Point(4, 2)),
    # Rounded rect corner with rx=4, ry=6
    (Point(6, 0), Point(10, 6), Point(8, 0), Point(10, 3)),
    # Same corner turning the other way
    (Point(10, 6), Point(6, 12), Point(10, 9), Point(8, 12)),
    # Unequal tangent legs
    (Point(8, 0), Point(10, 3), Point(9, 0), Point(10, 2)),
]


class TestFitBiarc:
    """Tests for fit_biarc function."""

    def test_symmetric_corner_radii(self) -> None:
        """Test that a symmetric corner gives two equal arcs."""
        biarc = fit_biarc(Point(0, 0), Point(4, 4), Point(2, 0), Point(4, 2))
        assert biarc.first is not None and biarc.second is not None
        assert biarc.first.radius_x == pytest.approx(4.0)
        assert biarc.second.radius_x == pytest.approx(4.0)

    @pytest.mark.parametrize(("p1", "p2", "c1", "c2"), CORNERS)
    def test_tangent_continuity_at_joint(self, p1: Point, p2: Point, c1: Point, c2: Point) -> None:
        """Test that both arcs share the tangent direction at the joint."""
        biarc = fit_biarc(p1, p2, c1, c2)
        assert biarc.first is not None and biarc.second is not None
        t1 = _tangent(biarc.first, biarc.joint)
        t2 = _tangent(biarc.second, biarc.joint)
        assert t1[0] == pytest.approx(t2[0], abs=1e-9)
        assert t1[1] == pytest.approx(t2[1], abs=1e-9)

    @pytest.mark.parametrize(("p1", "p2", "c1", "c2"), CORNERS)
    def test_tangent_at_end_points(self, p1: Point, p2: Point, c1: Point, c2: Point) -> None:
        """Test that the arcs leave p1 towards c1 and arrive at p2 from c2."""
        biarc = fit_biarc(p1, p2, c1, c2)
        assert biarc.first is not None and biarc.second is not None
        leave = _tangent(biarc.first, p1)
        arrive = _tangent(biarc.second, p2)
        assert leave == pytest.approx(_unit(c1.x - p1.x, c1.y - p1.y), abs=1e-9)
        assert arrive == pytest.approx(_unit(p2.x - c2.x, p2.y - c2.y), abs=1e-9)

    @pytest.mark.parametrize(("p1", "p2", "c1", "c2"), CORNERS)
    def test_arcs_pass_through_points(self, p1: Point, p2: Point, c1: Point, c2: Point) -> None:
        """Test that each arc runs through its end points."""
        biarc = fit_biarc(p1, p2, c1, c2)
        assert biarc.first is not None and biarc.second is not None
        assert biarc.first.center.distance_to(p1) == pytest.approx(biarc.first.radius_x)
        assert biarc.first.center.distance_to(biarc.joint) == pytest.approx(biarc.first.radius_x)
        assert biarc.second.center.distance_to(p2) == pytest.approx(biarc.second.radius_x)
        assert biarc.second.center.distance_to(biarc.joint) == pytest.approx(
            biarc.second.radius_x
        )

    def test_parallel_tangents_use_midpoint(self) -> None:
        """Test that parallel tangent lines put the joint on the chord midpoint."""
        biarc = fit_biarc(Point(0, 0), Point(0, 2), Point(1, 0), Point(1, 2))
        assert biarc.joint == Point(0, 1)
        assert biarc.first is not None
        assert biarc.first.center.x == pytest.approx(0.0)
        assert biarc.first.center.y == pytest.approx(0.5)

    def test_turn_point_on_end_point(self) -> None:
        """Test that a turn point equal to its end point borrows the other one."""
        biarc = fit_biarc(Point(0, 0), Point(4, 4), Point(0, 0), Point(4, 2))
        assert biarc.joint not in (Point(0, 0), Point(4, 4))
        assert biarc.first is not None


class TestBiarcPoints:
    """Tests for biarc_points function."""

    @pytest.mark.parametrize(("p1", "p2", "c1", "c2"), CORNERS)
    def test_points_span_end_points(self, p1: Point, p2: Point, c1: Point, c2: Point) -> None:
        """Test that sampling starts and ends exactly on the end points."""
        points = biarc_points(fit_biarc(p1, p2, c1, c2))
        assert points[0] == p1
        assert points[-1] == p2
        assert len(points) > 3

    def test_joint_not_repeated(self) -> None:
        """Test that the joint appears once."""
        biarc = fit_biarc(Point(0, 0), Point(4, 4), Point(2, 0), Point(4, 2))
        points = biarc_points(biarc)
        assert points.count(biarc.joint) == 1
