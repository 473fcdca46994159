"""Internal Bezier curve flattening algorithms.

This is an internal module used by the path interpreter.
Not intended for public use.
"""

import math

from vectorcam.domain import Point


def delta_step(p0: Point, p3: Point, import_resolution: float, min_step: float = 0.01) -> float:
    """Parameter step for flattening a curve between two end points.

    Longer chords get a finer step, down to ``min_step`` (at most 100
    segments with the default).

    Args:
        p0: Curve start point
        p3: Curve end point
        import_resolution: Source units per canonical unit
        min_step: Smallest allowed step

    Returns:
        Step in parameter space, between ``min_step`` and 1.0
    """
    chord = math.hypot(p3.x - p0.x, p3.y - p0.y) / import_resolution
    segments = chord / 4.0
    if segments <= 0.0:
        return 1.0
    return min(1.0, max(min_step, 1.0 / segments))


def _segment_count(step: float) -> int:
    return max(1, math.ceil(1.0 / step - 1e-9))


def cubic_samples(step: float, p0: Point, p1: Point, p2: Point, p3: Point) -> list[Point]:
    """Evaluate the interior of a cubic Bezier curve.

    Uses direct polynomial evaluation at evenly spaced parameters. The end
    points are not included.

    Args:
        step: Parameter step from delta_step
        p0: Start point
        p1: First control point
        p2: Second control point
        p3: End point

    Returns:
        Points at t = step, 2*step, ... strictly inside (0, 1)
    """
    n = _segment_count(step)
    points = []
    for i in range(1, n):
        t = i / n
        mt = 1.0 - t
        a = mt * mt * mt
        b = 3.0 * mt * mt * t
        c = 3.0 * mt * t * t
        d = t * t * t
        points.append(
            Point(
                a * p0.x + b * p1.x + c * p2.x + d * p3.x,
                a * p0.y + b * p1.y + c * p2.y + d * p3.y,
            )
        )
    return points


def quadratic_samples(step: float, p0: Point, p1: Point, p2: Point) -> list[Point]:
    """Evaluate the interior of a quadratic Bezier curve.

    Args:
        step: Parameter step from delta_step
        p0: Start point
        p1: Control point
        p2: End point

    Returns:
        Points at t = step, 2*step, ... strictly inside (0, 1)
    """
    n = _segment_count(step)
    points = []
    for i in range(1, n):
        t = i / n
        mt = 1.0 - t
        a = mt * mt
        b = 2.0 * mt * t
        c = t * t
        points.append(
            Point(
                a * p0.x + b * p1.x + c * p2.x,
                a * p0.y + b * p1.y + c * p2.y,
            )
        )
    return points
