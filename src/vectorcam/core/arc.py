"""Elliptical arc reconstruction and sampling.

SVG describes arcs by their end points, radii, rotation and two flags. This
module converts that form into a center-parameterized ArcSpec and samples
ArcSpecs into points. The conversion follows the endpoint-to-center
construction of the SVG implementation notes, with out-of-range radii scaled
up instead of rejected.
"""

import math

import structlog

from vectorcam.core.geometry import TWO_PI
from vectorcam.domain import Arc, ArcSpec, Point, Style
from vectorcam.exceptions import GeometricDegeneracyError

logger = structlog.get_logger(__name__)


def resolve_endpoint_arc(
    p1: Point,
    p2: Point,
    rx: float,
    ry: float,
    rotation_deg: float,
    large_arc: bool,
    sweep: bool,
) -> ArcSpec | None:
    """Convert an endpoint-parameterized arc into center form.

    Args:
        p1: Start point
        p2: End point
        rx: Radius along the ellipse's x axis
        ry: Radius along the ellipse's y axis
        rotation_deg: Rotation of the ellipse's x axis, in degrees
        large_arc: Select the arc spanning more than 180 degrees
        sweep: Select the arc running towards increasing angle

    Returns:
        The arc in center form, or None when the arc degenerates to a
        straight segment (a zero radius or coincident end points)

    Examples:
        >>> spec = resolve_endpoint_arc(Point(0, 0), Point(10, 0), 5, 5, 0, False, True)
        >>> spec.center, spec.radius_x
        (Point(x=5.0, y=0.0), 5.0)
    """
    rx = abs(float(rx))
    ry = abs(float(ry))
    if rx == 0.0 or ry == 0.0 or p1 == p2:
        logger.debug(
            "Arc treated as straight segment",
            reason=str(GeometricDegeneracyError("arc", "zero radius or zero-length chord")),
        )
        return None

    theta = math.radians(rotation_deg)
    cos_t = math.cos(theta)
    sin_t = math.sin(theta)

    # Half chord in the ellipse's unrotated frame
    hx = (p1.x - p2.x) / 2.0
    hy = (p1.y - p2.y) / 2.0
    x1p = cos_t * hx + sin_t * hy
    y1p = -sin_t * hx + cos_t * hy

    rx2 = rx * rx
    ry2 = ry * ry
    x1p2 = x1p * x1p
    y1p2 = y1p * y1p

    q_top = rx2 * ry2 - rx2 * y1p2 - ry2 * x1p2
    if q_top < 0.0:
        scale = math.sqrt(y1p2 / ry2 + x1p2 / rx2)
        rx *= scale
        ry *= scale
        rx2 = rx * rx
        ry2 = ry * ry
        q_top = 0.0

    q_bot = rx2 * y1p2 + ry2 * x1p2
    q = math.sqrt(q_top / q_bot) if q_bot != 0.0 else 0.0
    if large_arc == sweep:
        q = -q

    cxp = q * rx * y1p / ry
    cyp = -q * ry * x1p / rx

    center = Point(
        cos_t * cxp - sin_t * cyp + (p1.x + p2.x) / 2.0,
        sin_t * cxp + cos_t * cyp + (p1.y + p2.y) / 2.0,
    )

    start_angle = math.atan2((y1p - cyp) / ry, (x1p - cxp) / rx)
    end_angle = math.atan2((-y1p - cyp) / ry, (-x1p - cxp) / rx)
    sweep_angle = end_angle - start_angle
    if sweep and sweep_angle <= 0.0:
        sweep_angle += TWO_PI
    elif not sweep and sweep_angle >= 0.0:
        sweep_angle -= TWO_PI

    return ArcSpec(
        center=center,
        radius_x=rx,
        radius_y=ry,
        rotation=theta,
        start_angle=start_angle,
        sweep_angle=sweep_angle,
    )


def arc_step_count(
    sweep: float,
    radius: float,
    import_resolution: float = 1.0,
    curve_section: float = 1.0,
) -> int:
    """Number of segments used to sample an arc.

    The larger of 2.4 segments per radian and one segment per
    ``curve_section`` of arc length (measured in canonical units).

    Args:
        sweep: Angular extent in radians (sign ignored)
        radius: Largest radius of the arc, in source units
        import_resolution: Source units per canonical unit
        curve_section: Canonical arc length covered by one segment

    Returns:
        Segment count, at least 1
    """
    angle = abs(sweep)
    length = angle * radius / import_resolution
    return max(1, math.ceil(max(2.4 * angle, length / curve_section)))


def sample_arc(
    spec: ArcSpec,
    end: Point,
    import_resolution: float = 1.0,
    curve_section: float = 1.0,
) -> list[Point]:
    """Sample an arc into points.

    The parametric angle is stepped linearly. Each sample is built in the
    ellipse's unrotated frame and then placed by its angle and distance from
    the center, so the rotation never changes the radius.

    Args:
        spec: Arc to sample
        end: Exact end point, used as the last point
        import_resolution: Source units per canonical unit
        curve_section: Canonical arc length covered by one segment

    Returns:
        Points from the arc's start to ``end``, both included
    """
    steps = arc_step_count(
        spec.sweep_angle,
        max(spec.radius_x, spec.radius_y),
        import_resolution,
        curve_section,
    )
    cx = spec.center.x
    cy = spec.center.y
    points = []
    for i in range(steps):
        angle = spec.start_angle + spec.sweep_angle * (i / steps)
        local_x = spec.radius_x * math.cos(angle)
        local_y = spec.radius_y * math.sin(angle)
        radius = math.hypot(local_x, local_y)
        direction = math.atan2(local_y, local_x) + spec.rotation
        points.append(Point(cx + radius * math.cos(direction), cy + radius * math.sin(direction)))
    points.append(end)
    return points


def circular_arc_spec(
    center: Point, start: Point, end: Point, clockwise: bool = False
) -> ArcSpec | None:
    """Describe a circular arc by its center and two points on it.

    Args:
        center: Circle center
        start: First point (defines the radius)
        end: Last point
        clockwise: Direction of travel

    Returns:
        ArcSpec with equal radii, or None for a zero radius
    """
    radius = center.distance_to(start)
    if radius == 0.0:
        return None
    start_angle = math.atan2(start.y - center.y, start.x - center.x)
    end_angle = math.atan2(end.y - center.y, end.x - center.x)
    sweep = end_angle - start_angle
    if clockwise:
        if sweep >= 0.0:
            sweep -= TWO_PI
    elif sweep <= 0.0:
        sweep += TWO_PI
    return ArcSpec(
        center=center,
        radius_x=radius,
        radius_y=radius,
        rotation=0.0,
        start_angle=start_angle,
        sweep_angle=sweep,
    )


def sample_circular_arc(
    center: Point,
    start: Point,
    end: Point,
    clockwise: bool = False,
    import_resolution: float = 1.0,
    curve_section: float = 1.0,
) -> list[Point]:
    """Sample a circular arc given by its center and end points.

    Returns:
        Points from ``start`` to ``end``, both included
    """
    spec = circular_arc_spec(center, start, end, clockwise)
    if spec is None:
        return [start, end]
    points = sample_arc(spec, end, import_resolution, curve_section)
    points[0] = start
    return points


def to_arc_shape(spec: ArcSpec, style: Style | None = None, tag: str = "") -> Arc:
    """Convert a circular ArcSpec into an Arc primitive.

    Args:
        spec: Arc with equal radii
        style: Style for the primitive
        tag: Identifying tag

    Returns:
        Arc with angles in degrees

    Raises:
        ValueError: If the arc is elliptical
    """
    if not spec.is_circular:
        raise ValueError("Only circular arcs can become Arc primitives")
    return Arc(
        center=spec.center,
        radius=spec.radius_x,
        start_angle_deg=math.degrees(spec.start_angle + spec.rotation) % 360.0,
        end_angle_deg=math.degrees(spec.end_angle + spec.rotation) % 360.0,
        clockwise=spec.clockwise,
        style=style or Style(),
        tag=tag,
    )
