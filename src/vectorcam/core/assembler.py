"""Drawing model assembly.

The assembler collects primitives produced by the readers and publishes them
as one immutable DrawingDocument with precomputed bounds.
"""

from collections.abc import Iterable

import structlog

from vectorcam.config import GeometryConfig
from vectorcam.core.bounds import compute_bounds
from vectorcam.core.classifier import CircleMatch, classify_polygon_as_circle
from vectorcam.domain import (
    Arc,
    Circle,
    Contour,
    DrawingDocument,
    Line,
    Point,
    Polyline,
    Shape,
    Style,
)

logger = structlog.get_logger(__name__)


class DrawingAssembler:
    """Collects primitives for one drawing.

    Shapes are expected in canonical units. The assembler does not transform
    coordinates; readers do that before adding shapes.

    Args:
        config: Tolerances used for circle detection
        detect_circles: Rewrite closed near-circular contours as circles
    """

    def __init__(self, config: GeometryConfig | None = None, detect_circles: bool = True) -> None:
        self._config = config or GeometryConfig()
        self._detect_circles = detect_circles
        self._shapes: list[Shape] = []

    @property
    def shapes(self) -> tuple[Shape, ...]:
        return tuple(self._shapes)

    def __len__(self) -> int:
        return len(self._shapes)

    def add(self, shape: Shape) -> Shape:
        """Add a finished primitive."""
        self._shapes.append(shape)
        return shape

    def extend(self, shapes: Iterable[Shape]) -> None:
        self._shapes.extend(shapes)

    def add_line(self, start: Point, end: Point, style: Style | None = None, tag: str = "") -> Line:
        line = Line(start=start, end=end, style=style or Style(), tag=tag)
        self._shapes.append(line)
        return line

    def add_circle(
        self, center: Point, radius: float, style: Style | None = None, tag: str = ""
    ) -> Circle:
        circle = Circle(center=center, radius=radius, style=style or Style(), tag=tag)
        self._shapes.append(circle)
        return circle

    def add_arc(
        self,
        center: Point,
        radius: float,
        start_angle_deg: float,
        end_angle_deg: float,
        clockwise: bool = False,
        style: Style | None = None,
        tag: str = "",
    ) -> Arc:
        arc = Arc(
            center=center,
            radius=radius,
            start_angle_deg=start_angle_deg,
            end_angle_deg=end_angle_deg,
            clockwise=clockwise,
            style=style or Style(),
            tag=tag,
        )
        self._shapes.append(arc)
        return arc

    def add_polyline(
        self,
        vertices: Iterable[Point],
        closed: bool = False,
        style: Style | None = None,
        tag: str = "",
    ) -> Polyline:
        polyline = Polyline(
            vertices=tuple(vertices), closed=closed, style=style or Style(), tag=tag
        )
        self._shapes.append(polyline)
        return polyline

    def add_contour(self, contour: Contour, style: Style | None = None, tag: str = "") -> Shape:
        """Add a contour as a circle or a polyline.

        Closed contours that the polygon-circle classifier accepts become
        circles when circle detection is on. Everything else is kept as a
        polyline.

        Args:
            contour: Contour in canonical units
            style: Style for the primitive
            tag: Identifying tag

        Returns:
            The primitive that was added
        """
        if contour.closed and self._detect_circles:
            result = classify_polygon_as_circle(contour.points, self._config)
            if isinstance(result, CircleMatch):
                logger.debug("Contour classified as circle", tag=tag, radius=result.radius)
                return self.add_circle(result.center, result.radius, style, tag)
        return self.add_polyline(contour.points, contour.closed, style, tag)

    def build(self, file_name: str) -> DrawingDocument:
        """Publish the collected primitives.

        Args:
            file_name: Name of the source file

        Returns:
            New document with bounds over the visible primitives
        """
        return DrawingDocument.from_shapes(file_name, self._shapes, compute_bounds(self._shapes))


def rebuild(document: DrawingDocument, shapes: Iterable[Shape]) -> DrawingDocument:
    """New document with the same file name, different shapes and fresh bounds."""
    shape_list = list(shapes)
    return DrawingDocument.from_shapes(document.file_name, shape_list, compute_bounds(shape_list))
