"""Unit tests for document editing operations."""

import math

import pytest

from vectorcam.core.assembler import rebuild
from vectorcam.core.geometry import render_circle
from vectorcam.core.operations import (
    circles_to_layers,
    flatten,
    join_lines,
    polylines_to_circles,
    rotate,
    transform_shape,
    translate,
    trim,
)
from vectorcam.core.transform import Matrix2D
from vectorcam.domain import (
    Arc,
    Circle,
    DrawingDocument,
    Line,
    Point,
    Polyline,
    Shape,
    Style,
)


def _document(*shapes: Shape) -> DrawingDocument:
    return rebuild(DrawingDocument(file_name="test.svg"), shapes)


class TestTransformShape:
    """Tests for transform_shape function."""

    def test_line(self) -> None:
        """Test that both end points move."""
        line = transform_shape(Line(Point(0, 0), Point(1, 0)), Matrix2D.translation(2, 3))
        assert line == Line(Point(2, 3), Point(3, 3))

    def test_circle_similarity(self) -> None:
        """Test that a circle under uniform scale stays a circle."""
        circle = transform_shape(Circle(Point(1, 1), 2.0, tag="c"), Matrix2D.scaling(3))
        assert isinstance(circle, Circle)
        assert circle.center == Point(3, 3)
        assert circle.radius == pytest.approx(6.0)
        assert circle.tag == "c"

    def test_circle_uneven_scale(self) -> None:
        """Test that an uneven scale renders a circle into a closed polyline."""
        shape = transform_shape(Circle(Point(0, 0), 2.0), Matrix2D.scaling(2, 1))
        assert isinstance(shape, Polyline)
        assert shape.closed
        xs = [p.x for p in shape.vertices]
        assert max(xs) == pytest.approx(4.0, abs=0.05)

    def test_arc_mirrored(self) -> None:
        """Test that a mirror flips the arc direction."""
        arc = Arc(Point(0, 0), 1.0, 0.0, 90.0)
        mirrored = transform_shape(arc, Matrix2D.scaling(1, -1))
        assert isinstance(mirrored, Arc)
        assert mirrored.clockwise
        assert mirrored.start_angle_deg == pytest.approx(0.0)
        assert mirrored.end_angle_deg == pytest.approx(270.0)

    def test_arc_sheared(self) -> None:
        """Test that a shear renders an arc into an open polyline."""
        shape = transform_shape(Arc(Point(0, 0), 5.0, 0.0, 90.0), Matrix2D.skew_x(30))
        assert isinstance(shape, Polyline)
        assert not shape.closed


class TestPlacement:
    """Tests for translate, rotate and trim."""

    def test_translate(self) -> None:
        """Test that bounds follow the translation."""
        document = translate(_document(Circle(Point(0, 0), 1.0)), 5, -5)
        assert document.circles[0].center == Point(5, -5)
        assert document.bounds.min_x == 4.0
        assert document.bounds.max_y == -4.0

    def test_rotate(self) -> None:
        """Test a quarter turn about the origin."""
        document = rotate(_document(Line(Point(1, 0), Point(2, 0))), 90)
        line = document.lines[0]
        assert line.start.x == pytest.approx(0.0, abs=1e-9)
        assert line.start.y == pytest.approx(1.0)
        assert line.end.y == pytest.approx(2.0)

    def test_trim(self) -> None:
        """Test that trim moves the lower-left corner to the origin."""
        document = trim(_document(Circle(Point(10, 20), 5.0)))
        assert document.circles[0].center == Point(5, 5)
        assert document.bounds.min_x == 0.0
        assert document.bounds.min_y == 0.0

    def test_trim_at_origin_is_noop(self) -> None:
        """Test that a trimmed document is returned unchanged."""
        document = _document(Line(Point(0, 0), Point(3, 3)))
        assert trim(document) is document

    def test_input_not_modified(self) -> None:
        """Test that operations return new documents."""
        document = _document(Circle(Point(10, 20), 5.0))
        translate(document, 1, 1)
        assert document.circles[0].center == Point(10, 20)


class TestPolylinesToCircles:
    """Tests for polylines_to_circles function."""

    def test_rendered_circle_converted(self) -> None:
        """Test that a polyline tracing a circle becomes a circle."""
        outline = Polyline(tuple(render_circle(Point(4, 4), 3.0)), style=Style(layer="L"), tag="p")
        document = polylines_to_circles(_document(outline))
        assert len(document.polylines) == 0
        circle = document.circles[0]
        assert circle.radius == pytest.approx(3.0, abs=0.05)
        assert circle.style.layer == "L"
        assert circle.tag == "p"

    def test_closed_flag_without_repeat(self) -> None:
        """Test that the closed flag counts even without a repeated point."""
        points = render_circle(Point(0, 0), 3.0)[:-1]
        document = polylines_to_circles(_document(Polyline(tuple(points), closed=True)))
        assert len(document.circles) == 1

    def test_open_and_square_kept(self) -> None:
        """Test that open polylines and squares are kept."""
        open_arc = Polyline(tuple(render_circle(Point(0, 0), 3.0)[:10]))
        square = Polyline(
            (Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1), Point(0, 0)), closed=True
        )
        document = polylines_to_circles(_document(open_arc, square))
        assert len(document.polylines) == 2
        assert len(document.circles) == 0

    def test_lines_joined_first(self) -> None:
        """Test that a circle drawn as separate lines is found when requested."""
        corners = [
            Point(5 * math.cos(math.radians(15 * i)), 5 * math.sin(math.radians(15 * i)))
            for i in range(24)
        ]
        lines = [Line(corners[i], corners[(i + 1) % 24]) for i in range(24)]

        assert len(polylines_to_circles(_document(*lines)).circles) == 0

        document = polylines_to_circles(_document(*lines), convert_lines=True)
        assert document.counts() == {"circle": 1, "line": 0, "arc": 0, "polyline": 0}
        assert document.circles[0].radius == pytest.approx(5.0)
        assert document.circles[0].center.x == pytest.approx(0.0, abs=1e-9)


class TestCirclesToLayers:
    """Tests for circles_to_layers function."""

    def test_grouped_by_diameter(self) -> None:
        """Test that circles of equal radius share a layer."""
        document = circles_to_layers(
            _document(
                Circle(Point(0, 0), 2.5),
                Circle(Point(10, 0), 2.5),
                Circle(Point(20, 0), 1.0),
                Line(Point(0, 0), Point(1, 1), style=Style(layer="outline")),
            )
        )
        assert [c.style.layer for c in document.circles] == [
            "Diameter_5.00",
            "Diameter_5.00",
            "Diameter_2.00",
        ]
        assert document.lines[0].style.layer == "outline"

    def test_radius_rounding(self) -> None:
        """Test that radii equal to two decimals share a layer."""
        document = circles_to_layers(
            _document(Circle(Point(0, 0), 1.001), Circle(Point(5, 0), 1.004))
        )
        layers = {c.style.layer for c in document.circles}
        assert layers == {"Diameter_2.00"}


class TestFlatten:
    """Tests for flatten function."""

    def test_connected_line_arc_line(self) -> None:
        """Test that a line, an arc and a line end to end become one polyline."""
        document = flatten(
            _document(
                Line(Point(0, 0), Point(10, 0), tag="first"),
                Arc(Point(10, 5), 5.0, 270.0, 90.0),
                Line(Point(10, 10), Point(0, 10)),
            )
        )
        assert document.counts() == {"circle": 0, "line": 0, "arc": 0, "polyline": 1}
        polyline = document.polylines[0]
        assert not polyline.closed
        assert polyline.tag == "first"
        assert polyline.vertices[0] == Point(0, 0)
        assert polyline.vertices[-1] == Point(0, 10)
        assert max(p.x for p in polyline.vertices) == pytest.approx(15.0, abs=0.05)

    def test_closed_chain(self) -> None:
        """Test that a chain returning to its start is closed."""
        document = flatten(
            _document(
                Line(Point(0, 0), Point(10, 0)),
                Arc(Point(10, 5), 5.0, 270.0, 90.0),
                Line(Point(10, 10), Point(0, 10)),
                Line(Point(0, 10), Point(0, 0)),
            )
        )
        polyline = document.polylines[0]
        assert len(document.polylines) == 1
        assert polyline.closed
        assert polyline.vertices[0] == polyline.vertices[-1]

    def test_lone_arc(self) -> None:
        """Test that an unconnected arc becomes an open polyline."""
        document = flatten(_document(Arc(Point(0, 0), 2.0, 0.0, 180.0, tag="a")))
        polyline = document.polylines[0]
        assert not polyline.closed
        assert polyline.vertices[0].x == pytest.approx(2.0)
        assert polyline.vertices[-1].x == pytest.approx(-2.0)

    def test_circles_kept_by_default(self) -> None:
        """Test that circles are left alone unless requested."""
        circle = Circle(Point(0, 0), 2.0, tag="c")
        document = flatten(_document(circle, Line(Point(5, 0), Point(6, 0))))
        assert document.circles == (circle,)
        assert document.counts() == {"circle": 1, "line": 0, "arc": 0, "polyline": 1}

    def test_convert_circles(self) -> None:
        """Test that circles become closed polylines when requested."""
        document = flatten(_document(Circle(Point(0, 0), 2.0, tag="c")), convert_circles=True)
        assert len(document.circles) == 0
        polyline = document.polylines[0]
        assert polyline.tag == "c"
        assert polyline.closed

    def test_layers_not_mixed(self) -> None:
        """Test that touching primitives on different layers stay apart."""
        document = flatten(
            _document(
                Line(Point(0, 0), Point(5, 0), style=Style(layer="a")),
                Line(Point(5, 0), Point(10, 0), style=Style(layer="b")),
            )
        )
        assert len(document.polylines) == 2
        assert {p.style.layer for p in document.polylines} == {"a", "b"}

    def test_existing_polylines_kept(self) -> None:
        """Test that polylines already in the drawing pass through."""
        polyline = Polyline((Point(0, 0), Point(1, 1)), tag="p")
        document = flatten(_document(polyline))
        assert document.polylines == (polyline,)


class TestJoinLines:
    """Tests for join_lines function."""

    def test_closed_square(self) -> None:
        """Test that four touching lines form a closed polyline."""
        document = join_lines(
            _document(
                Line(Point(0, 0), Point(10, 0)),
                Line(Point(10, 0), Point(10, 10)),
                Line(Point(0, 10), Point(10, 10)),
                Line(Point(0, 10), Point(0, 0)),
            )
        )
        assert len(document.lines) == 0
        polyline = document.polylines[0]
        assert polyline.closed
        assert polyline.vertices == (
            Point(0, 0),
            Point(10, 0),
            Point(10, 10),
            Point(0, 10),
            Point(0, 0),
        )

    def test_chain_extends_backwards(self) -> None:
        """Test that a chain also grows from its first point."""
        document = join_lines(
            _document(Line(Point(5, 0), Point(10, 0)), Line(Point(0, 0), Point(5, 0)))
        )
        polyline = document.polylines[0]
        assert not polyline.closed
        assert polyline.vertices == (Point(0, 0), Point(5, 0), Point(10, 0))

    def test_layers_not_mixed(self) -> None:
        """Test that lines on different layers are not joined."""
        document = join_lines(
            _document(
                Line(Point(0, 0), Point(5, 0), style=Style(layer="a")),
                Line(Point(5, 0), Point(10, 0), style=Style(layer="b")),
            )
        )
        assert len(document.lines) == 2
        assert len(document.polylines) == 0

    def test_isolated_line_kept(self) -> None:
        """Test that an unconnected line stays a line."""
        line = Line(Point(0, 0), Point(1, 0), tag="solo")
        document = join_lines(_document(line))
        assert document.lines == (line,)

    def test_invisible_lines_not_joined(self) -> None:
        """Test that hidden lines stay lines even when they touch."""
        hidden = Style(visible=False)
        first = Line(Point(0, 0), Point(5, 0), style=hidden)
        second = Line(Point(5, 0), Point(10, 0), style=hidden)
        document = join_lines(_document(first, second))
        assert document.lines == (first, second)
        assert len(document.polylines) == 0
