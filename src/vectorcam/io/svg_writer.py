"""SVG output.

The page runs from the origin to the drawing's upper bounds, in
millimetres, and y is flipped back to point down. Each layer becomes an
Inkscape layer group so the file reads back with its layers. Invisible
primitives are not written.
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path

import structlog

from vectorcam.domain import Arc, Circle, Color, DrawingDocument, Line, Point, Polyline, Shape
from vectorcam.exceptions import DocumentWriteError

logger = structlog.get_logger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"
INKSCAPE_NS = "http://www.inkscape.org/namespaces/inkscape"

ET.register_namespace("", SVG_NS)
ET.register_namespace("inkscape", INKSCAPE_NS)

# Stroke for primitives without their own color
DEFAULT_STROKES: dict[str, Color] = {
    "circle": Color(0, 0, 255),
    "line": Color(0, 128, 0),
    "arc": Color(0, 0, 0),
    "polyline": Color(128, 0, 128),
}


def _svg(tag: str) -> str:
    return f"{{{SVG_NS}}}{tag}"


def _num(value: float) -> str:
    text = f"{value:.6f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


@dataclass(frozen=True, slots=True)
class _Page:
    """Maps drawing coordinates onto the SVG page."""

    width: float
    height: float

    def x(self, point: Point) -> str:
        return _num(point.x)

    def y(self, point: Point) -> str:
        return _num(self.height - point.y)

    def pair(self, point: Point) -> str:
        return f"{self.x(point)},{self.y(point)}"


def _arc_path(arc: Arc, page: _Page) -> str:
    """Path data for an arc.

    The y flip mirrors the direction of travel, so a counter-clockwise arc
    uses sweep flag 0. A full turn is split in two halves because an SVG
    arc with equal end points draws nothing.
    """
    ccw = arc.counter_clockwise()
    extent = (ccw.end_angle_deg - ccw.start_angle_deg) % 360.0
    radius = _num(arc.radius)
    sweep = "1" if arc.clockwise else "0"
    start = page.pair(arc.start_point)

    if extent == 0.0:
        middle = Arc(arc.center, arc.radius, arc.start_angle_deg + 180.0, 0.0).start_point
        return (
            f"M {start} A {radius} {radius} 0 0 {sweep} {page.pair(middle)} "
            f"A {radius} {radius} 0 0 {sweep} {start}"
        )

    large = "1" if extent > 180.0 else "0"
    return f"M {start} A {radius} {radius} 0 {large} {sweep} {page.pair(arc.end_point)}"


def _polyline_points(polyline: Polyline, page: _Page) -> str:
    vertices = list(polyline.vertices)
    if polyline.closed and len(vertices) > 2 and vertices[0] != vertices[-1]:
        vertices.append(vertices[0])
    return " ".join(page.pair(v) for v in vertices)


def _element(shape: Shape, page: _Page) -> ET.Element:
    if isinstance(shape, Line):
        return ET.Element(
            _svg("line"),
            {
                "x1": page.x(shape.start),
                "y1": page.y(shape.start),
                "x2": page.x(shape.end),
                "y2": page.y(shape.end),
            },
        )
    if isinstance(shape, Circle):
        return ET.Element(
            _svg("circle"),
            {"cx": page.x(shape.center), "cy": page.y(shape.center), "r": _num(shape.radius)},
        )
    if isinstance(shape, Arc):
        return ET.Element(_svg("path"), {"d": _arc_path(shape, page)})
    if isinstance(shape, Polyline):
        return ET.Element(_svg("polyline"), {"points": _polyline_points(shape, page)})
    raise TypeError(f"Unknown shape type: {type(shape).__name__}")


def build_svg(document: DrawingDocument) -> ET.Element:
    """Build the ``<svg>`` element for a drawing.

    Args:
        document: Drawing to convert

    Returns:
        Root element with one group per layer
    """
    bounds = document.bounds
    page = _Page(max(bounds.max_x, 0.0), max(bounds.max_y, 0.0))
    root = ET.Element(
        _svg("svg"),
        {
            "width": f"{_num(page.width)}mm",
            "height": f"{_num(page.height)}mm",
            "viewBox": f"0 0 {_num(page.width)} {_num(page.height)}",
            "fill": "none",
        },
    )

    groups: dict[str | None, ET.Element] = {}
    used_ids: set[str] = set()
    for shape in document.shapes():
        if not shape.style.visible:
            continue
        if isinstance(shape, Polyline) and len(shape.vertices) < 2:
            continue

        layer = shape.style.layer
        group = groups.get(layer)
        if group is None:
            attributes = {f"{{{INKSCAPE_NS}}}groupmode": "layer"}
            if layer:
                attributes[f"{{{INKSCAPE_NS}}}label"] = layer
            group = ET.SubElement(root, _svg("g"), attributes)
            groups[layer] = group

        element = _element(shape, page)
        stroke = shape.style.stroke or DEFAULT_STROKES[shape.kind]
        element.set("stroke", stroke.to_hex())
        element.set("stroke-width", _num(shape.style.stroke_width))
        if shape.tag and shape.tag not in used_ids:
            element.set("id", shape.tag)
            used_ids.add(shape.tag)
        group.append(element)
    return root


def write_svg(document: DrawingDocument, path: Path) -> None:
    """Write a drawing as an SVG file in millimetres.

    Args:
        document: Drawing to write
        path: Output file path

    Raises:
        DocumentWriteError: If the file cannot be written
    """
    tree = ET.ElementTree(build_svg(document))
    ET.indent(tree)
    try:
        tree.write(path, encoding="utf-8", xml_declaration=True)
    except OSError as e:
        raise DocumentWriteError(str(path), str(e)) from e
    logger.info("SVG written", path=str(path), shapes=sum(document.counts().values()))
