"""Biarc fitting for rounded corners.

A biarc is two circular arcs joined with a shared tangent. Given the two end
points of a corner and a turn point for each end (a point on the tangent
line through that end), the join point is placed at the incenter of the
triangle formed by the two end points and the intersection of the tangent
lines. With the join point fixed, each arc is the unique circle through its
two points that is tangent to the given line at its outer end.
"""

import math
from dataclasses import dataclass

import structlog

from vectorcam.core.arc import sample_arc
from vectorcam.core.geometry import TWO_PI, append_points, line_intersection, midpoint
from vectorcam.domain import ArcSpec, Point
from vectorcam.exceptions import GeometricDegeneracyError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class BiArc:
    """Two tangent-continuous arcs from ``start`` through ``joint`` to ``end``.

    An arc is None when that half of the biarc is a straight segment (the
    joint lies on the tangent line).

    Attributes:
        start: First end point
        joint: Shared point of the two arcs
        end: Second end point
        first: Arc from start to joint
        second: Arc from joint to end
    """

    start: Point
    joint: Point
    end: Point
    first: ArcSpec | None
    second: ArcSpec | None


def _tangent_arc(
    anchor: Point, direction: tuple[float, float], other: Point, anchor_is_start: bool
) -> ArcSpec | None:
    """Circular arc tangent to ``direction`` at ``anchor`` passing through ``other``.

    ``direction`` is the direction of travel at the anchor. When the anchor
    is the arc's end, travel arrives at the anchor along ``direction``.
    """
    dx, dy = direction
    length = math.hypot(dx, dy)
    if length == 0.0:
        return None
    dx /= length
    dy /= length
    # Left-hand normal of the travel direction
    nx, ny = -dy, dx

    vx = other.x - anchor.x
    vy = other.y - anchor.y
    chord_sq = vx * vx + vy * vy
    denominator = 2.0 * (nx * vx + ny * vy)
    if chord_sq == 0.0 or abs(denominator) < 1e-12 * math.sqrt(chord_sq):
        return None

    offset = chord_sq / denominator
    center = Point(anchor.x + nx * offset, anchor.y + ny * offset)
    radius = abs(offset)
    # Center on the left of travel means counter-clockwise travel
    counter_clockwise = offset > 0.0

    if anchor_is_start:
        start, end = anchor, other
    else:
        start, end = other, anchor

    start_angle = math.atan2(start.y - center.y, start.x - center.x)
    end_angle = math.atan2(end.y - center.y, end.x - center.x)
    sweep = end_angle - start_angle
    if counter_clockwise:
        if sweep <= 0.0:
            sweep += TWO_PI
    elif sweep >= 0.0:
        sweep -= TWO_PI

    return ArcSpec(
        center=center,
        radius_x=radius,
        radius_y=radius,
        rotation=0.0,
        start_angle=start_angle,
        sweep_angle=sweep,
    )


def fit_biarc(p1: Point, p2: Point, c1: Point, c2: Point) -> BiArc:
    """Fit a biarc between two points with known tangent lines.

    Args:
        p1: Start point
        p2: End point
        c1: Turn point for p1; travel leaves p1 towards c1
        c2: Turn point for p2; travel arrives at p2 coming from c2

    Returns:
        The fitted biarc

    Examples:
        >>> biarc = fit_biarc(Point(0, 0), Point(4, 4), Point(2, 0), Point(4, 2))
        >>> round(biarc.first.radius_x, 6), round(biarc.second.radius_x, 6)
        (4.0, 4.0)
    """
    c1, c2 = (c2 if c1 == p1 else c1), (c1 if c2 == p2 else c2)

    vertex = line_intersection(p1, c1, p2, c2)
    if vertex is None:
        logger.debug(
            "Biarc joint placed at chord midpoint",
            reason=str(GeometricDegeneracyError("biarc", "parallel tangent lines")),
        )
        joint = midpoint(p1, p2)
    else:
        d_p2_v = p2.distance_to(vertex)
        d_p1_v = p1.distance_to(vertex)
        d_p1_p2 = p1.distance_to(p2)
        total = d_p2_v + d_p1_v + d_p1_p2
        if total == 0.0:
            joint = p1
        else:
            joint = Point(
                (d_p2_v * p1.x + d_p1_v * p2.x + d_p1_p2 * vertex.x) / total,
                (d_p2_v * p1.y + d_p1_v * p2.y + d_p1_p2 * vertex.y) / total,
            )

    first = _tangent_arc(p1, (c1.x - p1.x, c1.y - p1.y), joint, anchor_is_start=True)
    second = _tangent_arc(p2, (p2.x - c2.x, p2.y - c2.y), joint, anchor_is_start=False)
    return BiArc(start=p1, joint=joint, end=p2, first=first, second=second)


def biarc_points(
    biarc: BiArc, import_resolution: float = 1.0, curve_section: float = 1.0
) -> list[Point]:
    """Sample both halves of a biarc.

    Args:
        biarc: Biarc to sample
        import_resolution: Source units per canonical unit
        curve_section: Canonical arc length covered by one segment

    Returns:
        Points from the biarc's start to its end, both included
    """
    points = [biarc.start]
    for spec, end in ((biarc.first, biarc.joint), (biarc.second, biarc.end)):
        if spec is None:
            append_points(points, [end])
            continue
        samples = sample_arc(spec, end, import_resolution, curve_section)
        append_points(points, samples[1:])
    return points
