"""Unit tests for Bezier flattening helpers."""

import pytest

from vectorcam.core._bezier import cubic_samples, delta_step, quadratic_samples
from vectorcam.domain import Point


class TestDeltaStep:
    """Tests for delta_step function."""

    def test_zero_chord(self) -> None:
        """Test that coincident end points give a single step."""
        assert delta_step(Point(3, 3), Point(3, 3), 1.0) == 1.0

    def test_chord_length(self) -> None:
        """Test one segment per four units of chord."""
        assert delta_step(Point(0, 0), Point(40, 0), 1.0) == pytest.approx(0.1)

    def test_minimum_step(self) -> None:
        """Test that long chords are clamped to the minimum step."""
        assert delta_step(Point(0, 0), Point(1000, 0), 1.0) == 0.01
        assert delta_step(Point(0, 0), Point(1000, 0), 1.0, min_step=0.05) == 0.05

    def test_short_chord(self) -> None:
        """Test that short chords never exceed one step."""
        assert delta_step(Point(0, 0), Point(2, 0), 1.0) == 1.0

    def test_resolution(self) -> None:
        """Test that the chord is measured in canonical units."""
        assert delta_step(Point(0, 0), Point(40, 0), 2.0) == pytest.approx(0.2)


class TestSamples:
    """Tests for curve evaluation."""

    def test_cubic_midpoint(self) -> None:
        """Test the cubic polynomial at t = 0.5."""
        samples = cubic_samples(0.5, Point(0, 0), Point(0, 10), Point(10, 10), Point(10, 0))
        assert len(samples) == 1
        assert samples[0].x == pytest.approx(5.0)
        assert samples[0].y == pytest.approx(7.5)

    def test_quadratic_midpoint(self) -> None:
        """Test the quadratic polynomial at t = 0.5."""
        samples = quadratic_samples(0.5, Point(0, 0), Point(5, 10), Point(10, 0))
        assert samples == [Point(5.0, 5.0)]

    def test_single_step_has_no_interior(self) -> None:
        """Test that a full step gives no interior points."""
        assert cubic_samples(1.0, Point(0, 0), Point(1, 1), Point(2, 1), Point(3, 0)) == []
        assert quadratic_samples(1.0, Point(0, 0), Point(1, 1), Point(2, 0)) == []

    def test_interior_count(self) -> None:
        """Test that n segments give n - 1 interior points."""
        samples = cubic_samples(0.1, Point(0, 0), Point(1, 1), Point(2, 1), Point(3, 0))
        assert len(samples) == 9

    def test_straight_cubic_stays_on_line(self) -> None:
        """Test that collinear control points give collinear samples."""
        samples = cubic_samples(0.25, Point(0, 0), Point(1, 0), Point(2, 0), Point(3, 0))
        assert all(p.y == 0.0 for p in samples)
        assert [round(p.x, 9) for p in samples] == sorted(round(p.x, 9) for p in samples)
