"""Bounding boxes of circular arcs and drawing primitives.

The arc bounding box is computed in closed form. Each end angle is sorted
into a quadrant, and a lookup table indexed by the two quadrants says, for
each side of the box, whether the arc reaches the circle's extreme on that
side or whether an end point is the limit.
"""

import math

from vectorcam.core.geometry import HALF_PI, TWO_PI
from vectorcam.domain import Arc, Bounds, Circle, Line, Polyline, Rect, Shape


def get_quadrant(angle: float) -> int:
    """Quadrant of an angle in radians.

    Args:
        angle: Any angle; it is reduced modulo 2*pi

    Returns:
        0 for [0, pi/2), 1 for [pi/2, pi), 2 for [pi, 3pi/2), 3 otherwise
    """
    reduced = angle % TWO_PI
    if 0.0 <= reduced < HALF_PI:
        return 0
    if HALF_PI <= reduced < math.pi:
        return 1
    if math.pi <= reduced < math.pi + HALF_PI:
        return 2
    return 3


def arc_bounds(start: float, end: float, radius: float, margin: float = 0.0) -> Rect:
    """Bounding box of a counter-clockwise arc centered at the origin.

    Args:
        start: Start angle in radians
        end: End angle in radians
        radius: Arc radius
        margin: Extra space added on every side

    Returns:
        Rect relative to the arc's center

    Examples:
        >>> arc_bounds(0.0, math.pi, 10.0)
        Rect(x=-10.0, y=0.0, width=20.0, height=10.0)
    """
    start_quad = get_quadrant(start)
    end_quad = get_quadrant(end)

    ix = math.cos(start) * radius
    iy = math.sin(start) * radius
    ex = math.cos(end) * radius
    ey = math.sin(end) * radius

    min_x = min(ix, ex)
    min_y = min(iy, ey)
    max_x = max(ix, ex)
    max_y = max(iy, ey)
    r = radius

    # Indexed [end_quad][start_quad]
    x_max = (
        (max_x, r, r, r),
        (max_x, max_x, r, r),
        (max_x, max_x, max_x, r),
        (max_x, max_x, max_x, max_x),
    )
    y_max = (
        (max_y, max_y, max_y, max_y),
        (r, max_y, r, r),
        (r, max_y, max_y, r),
        (r, max_y, max_y, max_y),
    )
    x_min = (
        (min_x, -r, min_x, min_x),
        (min_x, min_x, min_x, min_x),
        (-r, -r, min_x, -r),
        (-r, -r, min_x, min_x),
    )
    y_min = (
        (min_y, -r, -r, min_y),
        (min_y, min_y, -r, min_y),
        (min_y, min_y, min_y, min_y),
        (-r, -r, -r, min_y),
    )

    x1 = x_min[end_quad][start_quad]
    y1 = y_min[end_quad][start_quad]
    x2 = x_max[end_quad][start_quad]
    y2 = y_max[end_quad][start_quad]

    return Rect(
        x1 - margin,
        y1 - margin,
        (x2 - x1) + 2.0 * margin,
        (y2 - y1) + 2.0 * margin,
    )


def shape_bounds(shape: Shape) -> Bounds | None:
    """Bounds of a single primitive.

    Args:
        shape: Any primitive

    Returns:
        Bounds, or None for a polyline with fewer than two vertices
    """
    if isinstance(shape, Circle):
        c, r = shape.center, shape.radius
        return Bounds(c.x - r, c.x + r, c.y - r, c.y + r)
    if isinstance(shape, Line):
        return Bounds.from_points([shape.start, shape.end])
    if isinstance(shape, Arc):
        ccw = shape.counter_clockwise()
        rect = arc_bounds(
            math.radians(ccw.start_angle_deg), math.radians(ccw.end_angle_deg), ccw.radius
        )
        return rect.offset(ccw.center.x, ccw.center.y).to_bounds()
    if isinstance(shape, Polyline):
        if len(shape.vertices) < 2:
            return None
        return Bounds.from_points(list(shape.vertices))
    raise TypeError(f"Unknown shape type: {type(shape).__name__}")


def compute_bounds(shapes: list[Shape]) -> Bounds:
    """Bounds of all visible primitives.

    Invisible primitives are skipped. A drawing with nothing visible gets
    empty bounds.

    Args:
        shapes: Primitives of a drawing

    Returns:
        Union of the visible primitives' bounds
    """
    result: Bounds | None = None
    for shape in shapes:
        if not shape.style.visible:
            continue
        bounds = shape_bounds(shape)
        if bounds is None:
            continue
        result = bounds if result is None else result.union(bounds)
    return result if result is not None else Bounds.empty()
