"""Unit tests for elliptical arc reconstruction and sampling."""

import math

import pytest

from vectorcam.core.arc import (
    arc_step_count,
    circular_arc_spec,
    resolve_endpoint_arc,
    sample_arc,
    sample_circular_arc,
    to_arc_shape,
)
from vectorcam.domain import ArcSpec, Point, Style


class TestResolveEndpointArc:
    """Tests for resolve_endpoint_arc function."""

    def test_half_circle(self) -> None:
        """Test a half circle over a diameter."""
        spec = resolve_endpoint_arc(Point(0, 0), Point(10, 0), 5, 5, 0, False, True)
        assert spec is not None
        assert spec.center.x == pytest.approx(5.0)
        assert spec.center.y == pytest.approx(0.0)
        assert spec.radius_x == pytest.approx(5.0)

    @pytest.mark.parametrize(
        ("p1", "p2", "r"),
        [
            (Point(0, 0), Point(3, 4), 5.0),
            (Point(1, 2), Point(4, -2), 2.5),
            (Point(-3, 1), Point(2, 2), 10.0),
            (Point(100, 50), Point(101, 50), 0.75),
        ],
    )
    @pytest.mark.parametrize("large_arc", [False, True])
    @pytest.mark.parametrize("sweep", [False, True])
    def test_center_equidistant(
        self, p1: Point, p2: Point, r: float, large_arc: bool, sweep: bool
    ) -> None:
        """Test that the center lies at distance r from both end points."""
        spec = resolve_endpoint_arc(p1, p2, r, r, 0, large_arc, sweep)
        assert spec is not None
        assert spec.center.distance_to(p1) == pytest.approx(r, rel=1e-6)
        assert spec.center.distance_to(p2) == pytest.approx(r, rel=1e-6)

    def test_sweep_direction(self) -> None:
        """Test that the sweep flag sets the sign of the sweep angle."""
        positive = resolve_endpoint_arc(Point(0, 0), Point(3, 4), 5, 5, 0, False, True)
        negative = resolve_endpoint_arc(Point(0, 0), Point(3, 4), 5, 5, 0, False, False)
        assert positive is not None and negative is not None
        assert positive.sweep_angle > 0
        assert negative.sweep_angle < 0

    def test_large_arc_flag(self) -> None:
        """Test that the large arc flag picks the arc over 180 degrees."""
        small = resolve_endpoint_arc(Point(0, 0), Point(3, 4), 5, 5, 0, False, True)
        large = resolve_endpoint_arc(Point(0, 0), Point(3, 4), 5, 5, 0, True, True)
        assert small is not None and large is not None
        assert abs(small.sweep_angle) < math.pi
        assert abs(large.sweep_angle) > math.pi

    def test_radii_scaled_up(self) -> None:
        """Test that radii too small for the chord are enlarged."""
        spec = resolve_endpoint_arc(Point(0, 0), Point(10, 0), 1, 1, 0, False, True)
        assert spec is not None
        assert spec.radius_x == pytest.approx(5.0)
        assert spec.center.x == pytest.approx(5.0)

    def test_negative_radius(self) -> None:
        """Test that radius signs are ignored."""
        spec = resolve_endpoint_arc(Point(0, 0), Point(10, 0), -5, -5, 0, False, True)
        assert spec is not None
        assert spec.radius_x == pytest.approx(5.0)

    def test_end_point_reached(self) -> None:
        """Test that evaluating the end angle gives the second end point."""
        spec = resolve_endpoint_arc(Point(0.3, 0.1), Point(9.7, 4.2), 7, 3, 30, True, False)
        assert spec is not None
        start = spec.point_at(spec.start_angle)
        end = spec.point_at(spec.end_angle)
        assert start.x == pytest.approx(0.3, abs=1e-9)
        assert start.y == pytest.approx(0.1, abs=1e-9)
        assert end.x == pytest.approx(9.7, abs=1e-9)
        assert end.y == pytest.approx(4.2, abs=1e-9)

    @pytest.mark.parametrize(
        ("p2", "rx", "ry"),
        [(Point(10, 0), 0, 5), (Point(10, 0), 5, 0), (Point(0, 0), 5, 5)],
    )
    def test_degenerate(self, p2: Point, rx: float, ry: float) -> None:
        """Test that zero radii and zero chords give no arc."""
        assert resolve_endpoint_arc(Point(0, 0), p2, rx, ry, 0, False, True) is None


class TestSampling:
    """Tests for arc sampling."""

    def test_step_count(self) -> None:
        """Test the larger of angular and length based counts."""
        assert arc_step_count(math.pi, 10.0) == 32
        assert arc_step_count(math.pi, 0.1) == 8
        assert arc_step_count(-math.pi, 10.0) == 32
        assert arc_step_count(math.pi, 10.0, import_resolution=2.0) == 16

    def test_sample_ends_exactly(self) -> None:
        """Test that the last sample is the given end point."""
        spec = resolve_endpoint_arc(Point(0, 0), Point(3, 4), 5, 5, 0, True, False)
        assert spec is not None
        points = sample_arc(spec, Point(3, 4))
        assert points[-1] == Point(3, 4)
        assert points[0].x == pytest.approx(0.0, abs=1e-9)
        assert len(points) == arc_step_count(spec.sweep_angle, 5.0) + 1

    def test_rotated_ellipse_samples_on_curve(self) -> None:
        """Test that rotated samples keep their distance from the center."""
        spec = ArcSpec(Point(0, 0), 4.0, 2.0, math.pi / 4, 0.0, math.pi)
        for p in sample_arc(spec, spec.point_at(spec.end_angle))[:-1]:
            assert p.distance_to(spec.center) <= 4.0 + 1e-9
            assert p.distance_to(spec.center) >= 2.0 - 1e-9


class TestCircularArcs:
    """Tests for circular arc helpers."""

    def test_quarter_counter_clockwise(self) -> None:
        """Test a quarter circle spec."""
        spec = circular_arc_spec(Point(0, 0), Point(1, 0), Point(0, 1))
        assert spec is not None
        assert spec.sweep_angle == pytest.approx(math.pi / 2)

    def test_quarter_clockwise_goes_long_way(self) -> None:
        """Test that clockwise from 0 to 90 degrees sweeps three quarters."""
        spec = circular_arc_spec(Point(0, 0), Point(1, 0), Point(0, 1), clockwise=True)
        assert spec is not None
        assert spec.sweep_angle == pytest.approx(-1.5 * math.pi)

    def test_zero_radius(self) -> None:
        """Test that a start point on the center gives no arc."""
        assert circular_arc_spec(Point(0, 0), Point(0, 0), Point(1, 0)) is None

    def test_sample_circular_arc_end_points(self) -> None:
        """Test that sampled arcs start and end exactly on the given points."""
        points = sample_circular_arc(Point(0, 0), Point(10, 0), Point(0, 10))
        assert points[0] == Point(10, 0)
        assert points[-1] == Point(0, 10)
        assert len(points) > 2

    def test_to_arc_shape(self) -> None:
        """Test conversion to an Arc primitive in degrees."""
        spec = circular_arc_spec(Point(1, 1), Point(3, 1), Point(1, 3))
        assert spec is not None
        arc = to_arc_shape(spec, Style(layer="L"), "corner")
        assert arc.radius == pytest.approx(2.0)
        assert arc.start_angle_deg == pytest.approx(0.0)
        assert arc.end_angle_deg == pytest.approx(90.0)
        assert not arc.clockwise
        assert arc.style.layer == "L"
        assert arc.tag == "corner"

    def test_to_arc_shape_rejects_ellipse(self) -> None:
        """Test that elliptical specs cannot become Arc primitives."""
        spec = ArcSpec(Point(0, 0), 2.0, 1.0, 0.0, 0.0, 1.0)
        with pytest.raises(ValueError):
            to_arc_shape(spec)
