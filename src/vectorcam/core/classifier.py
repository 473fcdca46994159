"""Detection of polygons that approximate circles.

Drawings exported from other tools often contain circles that have already
been flattened into polylines. This module recognizes them so they can be
turned back into true circles.

Classification runs in two stages. A cheap check compares the bounding box
aspect ratio and the polygon area against an ideal circle. Only polygons that
pass are measured vertex by vertex against the area-weighted centroid.
"""

import math
from dataclasses import dataclass

from vectorcam.config import GeometryConfig
from vectorcam.core.geometry import bounding_rect, polygon_area, polygon_centroid
from vectorcam.domain import Point


@dataclass(frozen=True, slots=True)
class CircleMatch:
    """Positive classification: the polygon is a circle.

    Attributes:
        center: Area-weighted centroid of the polygon
        radius: Mean distance from the centroid to the vertices
    """

    center: Point
    radius: float


@dataclass(frozen=True, slots=True)
class NotACircle:
    """Negative classification.

    Attributes:
        reason: Which check rejected the polygon
    """

    reason: str


CircleClassification = CircleMatch | NotACircle


def classify_polygon_as_circle(
    points: list[Point], config: GeometryConfig | None = None
) -> CircleClassification:
    """Decide whether a closed polygon is really a circle.

    Args:
        points: Polygon vertices; a repeated closing point is allowed
        config: Tolerances (defaults to GeometryConfig())

    Returns:
        CircleMatch with the estimated center and radius, or NotACircle
    """
    config = config or GeometryConfig()

    if len(points) < config.circle_min_vertices:
        return NotACircle(f"only {len(points)} vertices")

    area = polygon_area(points)
    rect = bounding_rect(points)
    if rect.height == 0.0 or area == 0.0:
        return NotACircle("no area")

    box_radius = max(rect.width / 2.0, rect.height / 2.0)
    if abs(1.0 - rect.width / rect.height) > config.circle_shape_tolerance:
        return NotACircle("bounding box is not square")
    if abs(1.0 - area / (math.pi * box_radius * box_radius)) > config.circle_area_tolerance:
        return NotACircle("area differs from circle area")

    # Ignore the repeated closing point
    vertices = points[:-1] if len(points) > 2 and points[0] == points[-1] else points

    center = polygon_centroid(vertices)
    if center is None:
        return NotACircle("no centroid")

    total = 0.0
    for vertex in vertices:
        radius = center.distance_to(vertex)
        if abs(radius - box_radius) > config.circle_radius_deviation:
            return NotACircle("vertex off the circle")
        total += radius

    return CircleMatch(center=center, radius=total / len(vertices))
