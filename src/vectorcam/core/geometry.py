"""Geometric operations shared by the path and shape converters.

This module provides core mathematical utilities for:
- Signed area and centroid calculation (shoelace formula)
- Bounding rectangles
- Angles, reflections and rotations
- Line intersection
- Rendering circles and circular arcs into points

All functions are pure and stateless.
"""

import math

from vectorcam.domain import Point, Rect

TWO_PI = 2.0 * math.pi
HALF_PI = math.pi / 2.0


def signed_area(points: list[Point]) -> float:
    """Calculate signed area of a polygon using the shoelace formula.

    The sign of the area indicates winding direction:
    - Positive area: counter-clockwise winding
    - Negative area: clockwise winding

    Args:
        points: List of points forming the polygon boundary

    Returns:
        Signed area in square units. Returns 0.0 for degenerate polygons.

    Examples:
        >>> p1 = Point(0.0, 0.0)
        >>> p2 = Point(1.0, 0.0)
        >>> p3 = Point(1.0, 1.0)
        >>> p4 = Point(0.0, 1.0)
        >>> signed_area([p1, p2, p3, p4])  # CCW square
        1.0
        >>> signed_area([p1, p4, p3, p2])  # CW square
        -1.0
    """
    n = len(points)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += points[i].x * points[j].y
        area -= points[j].x * points[i].y

    return area / 2.0


def polygon_area(points: list[Point]) -> float:
    """Unsigned polygon area."""
    return abs(signed_area(points))


def polygon_centroid(points: list[Point]) -> Point | None:
    """Calculate the area-weighted centroid of a polygon.

    This is the true centroid of the enclosed region, not the average of
    the vertices, so unevenly spaced vertices do not pull it sideways.

    Args:
        points: Polygon vertices without a repeated closing point

    Returns:
        Centroid, or None when the polygon has no area
    """
    n = len(points)
    if n < 3:
        return None

    area_sum = 0.0
    cx = 0.0
    cy = 0.0
    for i in range(n):
        j = (i + 1) % n
        cross = points[i].x * points[j].y - points[j].x * points[i].y
        area_sum += cross
        cx += (points[i].x + points[j].x) * cross
        cy += (points[i].y + points[j].y) * cross

    if area_sum == 0.0:
        return None

    factor = 3.0 * area_sum
    return Point(cx / factor, cy / factor)


def bounding_rect(points: list[Point]) -> Rect:
    """Axis-aligned bounding rectangle of a point list.

    Args:
        points: Points to enclose

    Returns:
        Rect with the minimum corner and size. Empty input gives a zero rect.
    """
    if not points:
        return Rect(0.0, 0.0, 0.0, 0.0)
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return Rect(min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))


def distance(p1: Point, p2: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(p2.x - p1.x, p2.y - p1.y)


def midpoint(p1: Point, p2: Point) -> Point:
    return Point((p1.x + p2.x) / 2.0, (p1.y + p2.y) / 2.0)


def reflect(point: Point, origin: Point) -> Point:
    """Reflect a point through an origin (180 degree rotation).

    Args:
        point: Point to reflect, typically a curve's last control point
        origin: Center of reflection, typically the curve's end point

    Returns:
        Mirror image of ``point`` through ``origin``

    Examples:
        >>> reflect(Point(1.0, 1.0), Point(2.0, 2.0))
        Point(x=3.0, y=3.0)
    """
    return Point(2.0 * origin.x - point.x, 2.0 * origin.y - point.y)


def angle_radians(center: Point, target: Point) -> float:
    """Angle of the vector from center to target, in [0, 2*pi).

    Args:
        center: Origin of the vector
        target: Tip of the vector

    Returns:
        Counter-clockwise angle from the positive x axis
    """
    dx = target.x - center.x
    dy = target.y - center.y
    if dx == 0.0:
        if dy == 0.0:
            return 0.0
        angle = HALF_PI if dy > 0 else 3.0 * HALF_PI
    else:
        angle = math.atan(dy / dx)
        if dx < 0:
            angle += math.pi
    if angle < 0:
        angle += TWO_PI
    return angle


def line_intersection(p1: Point, p2: Point, p3: Point, p4: Point) -> Point | None:
    """Find the intersection of two infinite lines.

    The first line passes through p1 and p2, the second through p3 and p4.
    Unlike a segment test, the intersection may lie outside both point pairs.

    Args:
        p1: First point on line 1
        p2: Second point on line 1
        p3: First point on line 2
        p4: Second point on line 2

    Returns:
        Intersection point, or None if the lines are parallel or a line is
        given by two equal points

    Examples:
        >>> line_intersection(Point(0, 0), Point(1, 0), Point(5, 1), Point(5, 2))
        Point(x=5.0, y=0.0)
    """
    x1, y1 = p1.x, p1.y
    x2, y2 = p2.x, p2.y
    x3, y3 = p3.x, p3.y
    x4, y4 = p4.x, p4.y

    denom = (x1 - x2) * (y3 - y4) - (y1 - y2) * (x3 - x4)
    if abs(denom) < 1e-12:
        return None

    t = ((x1 - x3) * (y3 - y4) - (y1 - y3) * (x3 - x4)) / denom
    return Point(x1 + t * (x2 - x1), y1 + t * (y2 - y1))


def calculate_steps(angle: float, radius: float, curve_section: float = 1.0) -> float:
    """Number of segments needed to render an arc smoothly.

    The larger of 2.4 steps per radian and one step per ``curve_section``
    of arc length.

    Args:
        angle: Angular extent in radians
        radius: Arc radius
        curve_section: Arc length covered by one segment

    Returns:
        Fractional step count
    """
    length = radius * angle
    return max(angle * 2.4, length / curve_section)


def calculate_steps_as_int(angle: float, radius: float, curve_section: float = 1.0) -> int:
    """Whole number of segments for an arc, never less than one."""
    return max(1, math.ceil(calculate_steps(angle, radius, curve_section)))


def render_circle(center: Point, radius: float, curve_section: float = 1.0) -> list[Point]:
    """Render a circle into a closed point list.

    Sampling starts at the top of the circle and runs clockwise. The last
    point repeats the first.

    Args:
        center: Circle center
        radius: Circle radius
        curve_section: Arc length covered by one segment

    Returns:
        Points on the circle, first point repeated at the end
    """
    steps = calculate_steps(TWO_PI, radius, curve_section)
    step = math.pi / (steps / 2.0)
    count = math.ceil(TWO_PI / step - 1e-9)

    points = [
        Point(math.sin(i * step) * radius + center.x, math.cos(i * step) * radius + center.y)
        for i in range(count)
    ]
    points.append(points[0])
    return points


def render_arc(
    center: Point,
    radius: float,
    start_angle: float,
    end_angle: float,
    clockwise: bool = False,
    curve_section: float = 1.0,
) -> list[Point]:
    """Render a circular arc into points.

    Args:
        center: Arc center
        radius: Arc radius
        start_angle: Start angle in degrees
        end_angle: End angle in degrees
        clockwise: Direction of travel from start to end
        curve_section: Arc length covered by one segment

    Returns:
        Points from the start point to the end point
    """
    start = math.radians(start_angle)
    end = math.radians(end_angle)
    points = [Point(center.x + math.cos(start) * radius, center.y + math.sin(start) * radius)]

    angle_a, angle_b = (end, start) if clockwise else (start, end)
    if angle_b <= angle_a:
        angle_b += TWO_PI
    angle = angle_b - angle_a

    steps = calculate_steps_as_int(angle, radius, curve_section)
    for s in range(1, steps + 1):
        step = steps - s if clockwise else s
        current = angle * (step / steps) + angle_a
        points.append(
            Point(center.x + math.cos(current) * radius, center.y + math.sin(current) * radius)
        )
    return points


def append_points(target: list[Point], new_points: list[Point]) -> None:
    """Append a segment's points, skipping a repeated joint.

    When the first new point equals the last point already in ``target`` it
    is not added again.

    Args:
        target: Point list being built (modified in place)
        new_points: Points of the next segment
    """
    if not new_points:
        return
    if target and target[-1] == new_points[0]:
        target.extend(new_points[1:])
    else:
        target.extend(new_points)
