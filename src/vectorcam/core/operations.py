"""Editing operations on drawing documents.

Every operation takes a document and returns a new one; the input is never
modified.
"""

import math
from dataclasses import replace

import structlog

from vectorcam.config import GeometryConfig
from vectorcam.core.assembler import rebuild
from vectorcam.core.classifier import CircleMatch, classify_polygon_as_circle
from vectorcam.core.geometry import angle_radians, append_points, render_arc, render_circle
from vectorcam.core.transform import Matrix2D
from vectorcam.domain import Arc, Circle, DrawingDocument, Line, Point, Polyline, Shape

logger = structlog.get_logger(__name__)

# End points closer than this on both axes are treated as shared
JOIN_TOLERANCE = 1e-6

# Points of one line or arc, and the primitive they came from
_Run = tuple[list[Point], Line | Arc]


def transform_shape(shape: Shape, matrix: Matrix2D, curve_section: float = 1.0) -> Shape:
    """Map a primitive through an affine transform.

    Circles and arcs keep their kind under similarity transforms. Under a
    transform that shears or scales unevenly they are rendered into
    polylines first.

    Args:
        shape: Primitive to transform
        matrix: Transform to apply
        curve_section: Arc length per segment when rendering curves

    Returns:
        Transformed primitive (possibly of a different kind)
    """
    if isinstance(shape, Line):
        return replace(shape, start=matrix.apply_point(shape.start), end=matrix.apply_point(shape.end))

    if isinstance(shape, Polyline):
        return replace(shape, vertices=tuple(matrix.apply(list(shape.vertices))))

    if isinstance(shape, Circle):
        if matrix.is_similarity:
            return replace(
                shape,
                center=matrix.apply_point(shape.center),
                radius=shape.radius * matrix.scale_factor,
            )
        points = render_circle(shape.center, shape.radius, curve_section)
        return Polyline(
            vertices=tuple(matrix.apply(points)), closed=True, style=shape.style, tag=shape.tag
        )

    if isinstance(shape, Arc):
        if matrix.is_similarity:
            center = matrix.apply_point(shape.center)
            start = matrix.apply_point(shape.start_point)
            end = matrix.apply_point(shape.end_point)
            return replace(
                shape,
                center=center,
                radius=shape.radius * matrix.scale_factor,
                start_angle_deg=math.degrees(angle_radians(center, start)) % 360.0,
                end_angle_deg=math.degrees(angle_radians(center, end)) % 360.0,
                clockwise=shape.clockwise != matrix.flips,
            )
        points = _arc_points(shape, curve_section)
        return Polyline(vertices=tuple(matrix.apply(points)), style=shape.style, tag=shape.tag)

    raise TypeError(f"Unknown shape type: {type(shape).__name__}")


def _arc_points(arc: Arc, curve_section: float) -> list[Point]:
    return render_arc(
        arc.center,
        arc.radius,
        arc.start_angle_deg,
        arc.end_angle_deg,
        arc.clockwise,
        curve_section,
    )


def transform_document(
    document: DrawingDocument, matrix: Matrix2D, curve_section: float = 1.0
) -> DrawingDocument:
    """Apply an affine transform to every primitive."""
    return rebuild(document, (transform_shape(s, matrix, curve_section) for s in document.shapes()))


def translate(document: DrawingDocument, dx: float, dy: float) -> DrawingDocument:
    """Move every primitive by (dx, dy)."""
    return transform_document(document, Matrix2D.translation(dx, dy))


def rotate(document: DrawingDocument, degrees: float) -> DrawingDocument:
    """Rotate the drawing counter-clockwise about the origin.

    Args:
        document: Drawing to rotate
        degrees: Rotation angle

    Returns:
        Rotated drawing with recomputed bounds
    """
    return transform_document(document, Matrix2D.rotation(degrees))


def trim(document: DrawingDocument) -> DrawingDocument:
    """Move the drawing so its lower-left bounds corner is at the origin."""
    bounds = document.bounds
    if bounds.min_x == 0.0 and bounds.min_y == 0.0:
        return document
    return translate(document, -bounds.min_x, -bounds.min_y)


def polylines_to_circles(
    document: DrawingDocument,
    config: GeometryConfig | None = None,
    convert_lines: bool = False,
) -> DrawingDocument:
    """Replace polylines that trace circles with true circles.

    A polyline qualifies when it is closed (by flag or by repeating its first
    point) and the polygon-circle classifier accepts it. The circle keeps
    the polyline's style and tag.

    Args:
        document: Drawing to convert
        config: Classification tolerances
        convert_lines: Join connected lines into polylines first, so circles
            drawn as runs of short lines are found too

    Returns:
        Drawing with qualifying polylines replaced
    """
    config = config or GeometryConfig()
    if convert_lines:
        document = join_lines(document)

    circles = list(document.circles)
    polylines = []
    for polyline in document.polylines:
        vertices = list(polyline.vertices)
        is_closed = polyline.closed or (len(vertices) > 2 and vertices[0] == vertices[-1])
        if is_closed:
            if polyline.closed and vertices[0] != vertices[-1]:
                vertices.append(vertices[0])
            result = classify_polygon_as_circle(vertices, config)
            if isinstance(result, CircleMatch):
                circles.append(
                    Circle(
                        center=result.center,
                        radius=result.radius,
                        style=polyline.style,
                        tag=polyline.tag,
                    )
                )
                continue
        polylines.append(polyline)

    converted = len(document.polylines) - len(polylines)
    logger.debug("Polylines converted to circles", count=converted)
    return rebuild(document, [*circles, *document.lines, *document.arcs, *polylines])


def circles_to_layers(document: DrawingDocument) -> DrawingDocument:
    """Put circles on layers named after their diameter.

    Circles are grouped by radius rounded to two decimals. Each group goes on
    a layer named ``Diameter_<d>`` where ``d`` is the group's diameter with
    two decimals.

    Args:
        document: Drawing to relayer

    Returns:
        Drawing with every circle assigned to a diameter layer
    """
    layer_by_radius: dict[str, str] = {}
    circles = []
    for circle in document.circles:
        key = f"{circle.radius:.2f}"
        layer = layer_by_radius.setdefault(key, f"Diameter_{circle.radius * 2:.2f}")
        circles.append(replace(circle, style=circle.style.with_layer(layer)))
    return rebuild(document, [*circles, *document.lines, *document.arcs, *document.polylines])


def _coincident(a: Point, b: Point) -> bool:
    return abs(a.x - b.x) <= JOIN_TOLERANCE and abs(a.y - b.y) <= JOIN_TOLERANCE


def _take_connected(runs: list[_Run], point: Point) -> list[Point] | None:
    """Remove a run touching ``point`` and return its points starting exactly there."""
    for index, (points, _) in enumerate(runs):
        if _coincident(points[0], point):
            runs.pop(index)
            return [point, *points[1:]]
        if _coincident(points[-1], point):
            runs.pop(index)
            return [point, *points[-2::-1]]
    return None


def _chain_runs(runs: list[_Run]) -> list[tuple[list[Point], Line | Arc, int]]:
    """Join runs that share end points into chains.

    Each chain grows forward from its first run until it closes or finds no
    neighbour, then backward from its start. A closed chain ends on exactly
    its first point.

    Returns:
        (points, first primitive, number of runs) for every chain
    """
    remaining = list(runs)
    chains = []
    while remaining:
        first_points, first = remaining.pop(0)
        points = list(first_points)
        count = 1

        while not _coincident(points[-1], points[0]):
            following = _take_connected(remaining, points[-1])
            if following is None:
                break
            append_points(points, following)
            count += 1

        if count > 1 and _coincident(points[-1], points[0]):
            points[-1] = points[0]
        else:
            while True:
                preceding = _take_connected(remaining, points[0])
                if preceding is None:
                    break
                head = preceding[::-1]
                append_points(head, points)
                points = head
                count += 1

        chains.append((points, first, count))
    return chains


def flatten(
    document: DrawingDocument,
    config: GeometryConfig | None = None,
    convert_circles: bool = False,
) -> DrawingDocument:
    """Render lines and arcs into polylines.

    Lines and arcs on the same layer that share end points are chained and
    each chain becomes one polyline, closed when it returns to its start.
    Visible and invisible primitives are never chained together.

    Args:
        document: Drawing to flatten
        config: Sampling density
        convert_circles: Render circles into closed polylines as well

    Returns:
        Drawing without lines or arcs
    """
    config = config or GeometryConfig()
    groups: dict[tuple[str | None, bool], list[_Run]] = {}
    for line in document.lines:
        groups.setdefault((line.style.layer, line.style.visible), []).append(
            ([line.start, line.end], line)
        )
    for arc in document.arcs:
        groups.setdefault((arc.style.layer, arc.style.visible), []).append(
            (_arc_points(arc, config.curve_section), arc)
        )

    polylines = list(document.polylines)
    for runs in groups.values():
        for points, first, _ in _chain_runs(runs):
            polylines.append(
                Polyline(
                    vertices=tuple(points),
                    closed=len(points) > 2 and points[0] == points[-1],
                    style=first.style,
                    tag=first.tag,
                )
            )

    circles: list[Circle] = []
    for circle in document.circles:
        if not convert_circles:
            circles.append(circle)
            continue
        points = render_circle(circle.center, circle.radius, config.curve_section)
        polylines.append(
            Polyline(vertices=tuple(points), closed=True, style=circle.style, tag=circle.tag)
        )

    logger.debug("Drawing flattened", polylines=len(polylines) - len(document.polylines))
    return rebuild(document, [*circles, *polylines])


def join_lines(document: DrawingDocument) -> DrawingDocument:
    """Chain visible lines that share end points into polylines.

    Lines are only joined with lines on the same layer; invisible lines are
    left alone. A chain that returns to its first point becomes a closed
    polyline and a single unconnected line stays a line.

    Args:
        document: Drawing to join

    Returns:
        Drawing with connected lines merged
    """
    lines: list[Line] = []
    groups: dict[str | None, list[_Run]] = {}
    for line in document.lines:
        if not line.style.visible:
            lines.append(line)
            continue
        groups.setdefault(line.style.layer, []).append(([line.start, line.end], line))

    polylines: list[Polyline] = []
    for runs in groups.values():
        for points, first, count in _chain_runs(runs):
            if count == 1:
                lines.append(first)  # type: ignore[arg-type]
                continue
            polylines.append(
                Polyline(
                    vertices=tuple(points),
                    closed=points[0] == points[-1],
                    style=first.style,
                    tag=first.tag,
                )
            )

    return rebuild(
        document,
        [*document.circles, *lines, *document.arcs, *document.polylines, *polylines],
    )
