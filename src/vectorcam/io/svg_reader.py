"""SVG document reader.

Reads an SVG drawing into a DrawingDocument in millimetres with the y axis
pointing up. The document's declared size and viewBox give the import
resolution (user units per millimetre); a page transform built from it is the
root of every element's transform.

The element tree is walked recursively. Everything an element inherits from
its ancestors (transform, layer name, CSS classes) travels down the walk in
an immutable SvgContext; no state is shared between elements.
"""

import math
import re
import time
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import defusedxml.ElementTree as ET
import structlog
from defusedxml import DefusedXmlException

from vectorcam.config import VectorCamSettings
from vectorcam.core.arc import circular_arc_spec, sample_circular_arc, to_arc_shape
from vectorcam.core.assembler import DrawingAssembler
from vectorcam.core.biarc import biarc_points, fit_biarc
from vectorcam.core.geometry import append_points, render_circle
from vectorcam.core.interpreter import PathInterpreter
from vectorcam.core.operations import transform_shape, translate
from vectorcam.core.tokenizer import PathTokenizer
from vectorcam.core.transform import Matrix2D, parse_transform
from vectorcam.domain import Circle, Color, Contour, DrawingDocument, Line, Point, Shape, Style
from vectorcam.exceptions import DocumentParseError, NumericParseError
from vectorcam.utils.logging import ImportLogger

logger = structlog.get_logger(__name__)

INKSCAPE_LABEL = "{http://www.inkscape.org/namespaces/inkscape}label"

_LENGTH_PATTERN = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\s*([a-zA-Z%]*)\s*$")
_CSS_CLASS_PATTERN = re.compile(r"\.?([_a-zA-Z\-]+[\w\-]*)\s*(\{.*?\})", re.DOTALL)

_MM_PER_UNIT: dict[str, float] = {
    "": 1.0,
    "mm": 1.0,
    "cm": 10.0,
    "in": 25.4,
    "pt": 25.4 / 72.0,
    "pc": 25.4 / 6.0,
    "px": 25.4 / 96.0,
}

_SKIPPED_CONTAINERS = frozenset(
    {"defs", "symbol", "clipPath", "mask", "pattern", "marker", "metadata", "title", "desc", "style"}
)


def _local_name(tag: Any) -> str:
    if not isinstance(tag, str):
        return ""
    return tag.split("}")[-1]


def parse_length(text: str | None) -> tuple[float, str] | None:
    """Split a length attribute into value and unit.

    Args:
        text: Attribute value such as ``"210mm"`` or ``"8.5in"``

    Returns:
        Tuple of (value, unit), or None if absent or not a length

    Examples:
        >>> parse_length("210mm")
        (210.0, 'mm')
        >>> parse_length("auto") is None
        True
    """
    if text is None:
        return None
    match = _LENGTH_PATTERN.match(text)
    if not match:
        return None
    return float(match.group(1)), match.group(2).lower()


def length_to_mm(text: str | None) -> float | None:
    """Convert a length attribute to millimetres.

    Unitless values are taken as millimetres. Percentages and unknown units
    give None.
    """
    parsed = parse_length(text)
    if parsed is None:
        return None
    value, unit = parsed
    factor = _MM_PER_UNIT.get(unit)
    if factor is None:
        return None
    return value * factor


@dataclass(frozen=True, slots=True)
class PageGeometry:
    """Mapping from SVG user units to the drawing's millimetres.

    Attributes:
        resolution: User units per millimetre
        width_mm: Page width (0 if unknown)
        height_mm: Page height (None if unknown)
        view_x: viewBox x origin in user units
        view_y: viewBox y origin in user units
    """

    resolution: float = 1.0
    width_mm: float = 0.0
    height_mm: float | None = None
    view_x: float = 0.0
    view_y: float = 0.0

    def page_transform(self, flip_y: bool = True) -> Matrix2D:
        """Transform from user units to millimetres.

        With ``flip_y`` the y axis is inverted around the page height, or
        around zero when the height is unknown.
        """
        s = 1.0 / self.resolution
        if not flip_y:
            return Matrix2D(s, 0.0, 0.0, s, -self.view_x * s, -self.view_y * s)
        shift = self.height_mm if self.height_mm is not None else 0.0
        return Matrix2D(s, 0.0, 0.0, -s, -self.view_x * s, shift + self.view_y * s)


def page_geometry(attributes: Mapping[str, str], override: float | None = None) -> PageGeometry:
    """Derive the import resolution from the root element's attributes.

    The resolution is the viewBox width divided by the declared width in
    millimetres. A missing width or height falls back to the viewBox size.

    Args:
        attributes: Attributes of the ``<svg>`` element
        override: Fixed resolution to use instead of deriving one

    Returns:
        Page geometry for the document
    """
    width_mm = length_to_mm(attributes.get("width"))
    height_mm = length_to_mm(attributes.get("height"))

    view_box = [v for v in re.split(r"[\s,]+", attributes.get("viewBox", "").strip()) if v]
    view: list[float] = []
    if len(view_box) == 4:
        try:
            view = [float(v) for v in view_box]
        except ValueError:
            view = []

    if view:
        view_x, view_y, view_w, view_h = view
        if width_mm is None:
            width_mm = view_w
        resolution = view_w / width_mm if width_mm else 1.0
        if resolution <= 0.0:
            resolution = 1.0
        if override is not None:
            resolution = override
        if height_mm is None:
            height_mm = view_h / resolution
        return PageGeometry(resolution, width_mm, height_mm, view_x, view_y)

    resolution = override if override is not None else 1.0
    return PageGeometry(resolution, width_mm or 0.0, height_mm)


def parse_style(text: str | None) -> dict[str, str]:
    """Parse an inline ``style`` attribute into a property dict.

    Examples:
        >>> parse_style("stroke:#000; fill:none")
        {'stroke': '#000', 'fill': 'none'}
    """
    properties: dict[str, str] = {}
    if not text:
        return properties
    for declaration in text.split(";"):
        name, sep, value = declaration.partition(":")
        if sep and name.strip():
            properties[name.strip()] = value.strip()
    return properties


def parse_css_classes(text: str | None) -> dict[str, dict[str, str]]:
    """Parse class rules from a ``<style>`` block.

    Only simple class selectors are recognized.

    Examples:
        >>> parse_css_classes(".cut { stroke: red }")
        {'cut': {'stroke': 'red'}}
    """
    classes: dict[str, dict[str, str]] = {}
    if not text:
        return classes
    for match in _CSS_CLASS_PATTERN.finditer(text):
        name = match.group(1)
        body = match.group(2)[1:-1]
        classes.setdefault(name, {}).update(parse_style(body))
    return classes


@dataclass(frozen=True)
class SvgContext:
    """Inherited state passed down the element walk.

    Attributes:
        matrix: Transform from the element's user space to millimetres
        layer: Layer name inherited from the enclosing group
        classes: CSS class rules collected from the document
    """

    matrix: Matrix2D
    layer: str | None = None
    classes: Mapping[str, Mapping[str, str]] = field(default_factory=dict)

    def enter(self, element: Any) -> "SvgContext":
        """Context for the children of a group element."""
        context = self
        local = parse_transform(element.get("transform"))
        if not local.is_identity:
            context = replace(context, matrix=context.matrix.append(local))
        layer = _layer_name(element)
        if layer:
            context = replace(context, layer=layer)
        return context


def _layer_name(element: Any) -> str | None:
    label = element.get(INKSCAPE_LABEL) or element.get("label")
    if label:
        return label
    element_id = element.get("id")
    if element_id and element_id.lower().startswith("layer"):
        return element_id
    return None


def resolve_style(element: Any, context: SvgContext) -> Style:
    """Compute an element's style from classes, attributes and inline style.

    Later sources win: class rules, then presentation attributes, then the
    ``style`` attribute.
    """
    properties: dict[str, str] = {}
    for class_name in (element.get("class") or "").split():
        properties.update(context.classes.get(class_name, {}))
    for name in ("stroke", "stroke-width", "fill", "display", "visibility"):
        value = element.get(name)
        if value is not None:
            properties[name] = value
    properties.update(parse_style(element.get("style")))

    stroke_width = 1.0
    parsed_width = parse_length(properties.get("stroke-width"))
    if parsed_width is not None:
        stroke_width = parsed_width[0]

    visible = properties.get("display", "").strip() != "none" and properties.get(
        "visibility", ""
    ).strip() not in ("hidden", "collapse")

    return Style(
        stroke=Color.parse(properties.get("stroke")),
        stroke_width=stroke_width,
        fill=Color.parse(properties.get("fill")),
        visible=visible,
        layer=context.layer,
    )


def _number(element: Any, name: str, default: float = 0.0) -> float:
    text = element.get(name)
    if text is None or not text.strip():
        return default
    parsed = parse_length(text)
    if parsed is None:
        raise NumericParseError(text, 0)
    return parsed[0]


def _optional_number(element: Any, name: str) -> float | None:
    text = element.get(name)
    if text is None or not text.strip() or text.strip() == "auto":
        return None
    return _number(element, name)


def parse_points(text: str | None) -> list[Point]:
    """Parse a ``points`` attribute into points.

    A trailing unpaired coordinate is ignored.

    Raises:
        NumericParseError: If a coordinate is not a number
    """
    if not text:
        return []
    tokenizer = PathTokenizer(text)
    values: list[float] = []
    while True:
        tokenizer.skip_separators()
        if tokenizer.at_end:
            break
        position = tokenizer.position
        token = tokenizer.extract_number()
        try:
            values.append(float(token))
        except ValueError:
            raise NumericParseError(token or tokenizer.peek(), position) from None
    return [Point(values[i], values[i + 1]) for i in range(0, len(values) - 1, 2)]


class _SvgConversion:
    """State for converting one document."""

    def __init__(self, settings: VectorCamSettings, page: PageGeometry, file_name: str) -> None:
        self.settings = settings
        self.geometry = settings.geometry
        self.options = settings.importer
        self.page = page
        self.assembler = DrawingAssembler(self.geometry, detect_circles=self.options.detect_circles)
        self.interpreter = PathInterpreter.from_config(self.geometry, page.resolution)
        self.log = ImportLogger(logger, file_name)
        self._counter = 0

    def _tag(self, element: Any, name: str) -> str:
        self._counter += 1
        return element.get("id") or f"{name}{self._counter}"

    def _local_section(self, context: SvgContext) -> float:
        scale = context.matrix.scale_factor
        if scale <= 0.0:
            return self.geometry.curve_section
        return self.geometry.curve_section / scale

    def _emit(self, shape: Shape) -> None:
        self.assembler.add(shape)
        self.log.log_shape(shape.kind)

    def _emit_polyline(
        self, points: list[Point], closed: bool, style: Style, tag: str, context: SvgContext
    ) -> None:
        self._emit_contour(Contour(context.matrix.apply(points), closed), style, tag, False)

    def _emit_contour(
        self, contour: Contour, style: Style, tag: str, classify: bool
    ) -> None:
        if classify and not self.options.use_contours:
            shape = self.assembler.add_contour(contour, style, tag)
        else:
            shape = self.assembler.add_polyline(contour.points, contour.closed, style, tag)
        self.log.log_shape(shape.kind)

    def walk(self, element: Any, context: SvgContext) -> None:
        for child in element:
            name = _local_name(child.tag)
            if not name:
                continue
            if name in ("g", "svg", "a", "switch"):
                self.walk(child, context.enter(child))
            elif name in _SKIPPED_CONTAINERS:
                continue
            else:
                self.convert(child, name, context)

    def convert(self, element: Any, name: str, context: SvgContext) -> None:
        local = parse_transform(element.get("transform"))
        if not local.is_identity:
            context = replace(context, matrix=context.matrix.append(local))

        converter = {
            "line": self._line,
            "rect": self._rect,
            "circle": self._circle,
            "ellipse": self._ellipse,
            "polyline": self._polyline,
            "polygon": self._polygon,
            "path": self._path,
        }.get(name)
        if converter is None:
            self.log.log_element_skipped(name, "unsupported element")
            return

        self.log.log_element(name, element.get("id"))
        style = resolve_style(element, context)
        converter(element, context, style, self._tag(element, name))

    def _line(self, element: Any, context: SvgContext, style: Style, tag: str) -> None:
        start = Point(_number(element, "x1"), _number(element, "y1"))
        end = Point(_number(element, "x2"), _number(element, "y2"))
        if self.options.use_contours:
            self._emit_polyline([start, end], False, style, tag, context)
            return
        line = Line(start=start, end=end, style=style, tag=tag)
        self._emit(transform_shape(line, context.matrix, self.geometry.curve_section))

    def _rect(self, element: Any, context: SvgContext, style: Style, tag: str) -> None:
        x = _number(element, "x")
        y = _number(element, "y")
        width = _number(element, "width")
        height = _number(element, "height")
        if width <= 0.0 or height <= 0.0:
            self.log.log_element_skipped("rect", "zero size")
            return

        rx = _optional_number(element, "rx")
        ry = _optional_number(element, "ry")
        if rx is None:
            rx = ry if ry is not None else 0.0
        if ry is None:
            ry = rx
        rx = min(abs(rx), width / 2.0)
        ry = min(abs(ry), height / 2.0)

        # Outline runs clockwise on the page: top edge first, left to right
        p1 = Point(x + rx, y)
        p2 = Point(x + width - rx, y)
        p3 = Point(x + width, y + ry)
        p4 = Point(x + width, y + height - ry)
        p5 = Point(x + width - rx, y + height)
        p6 = Point(x + rx, y + height)
        p7 = Point(x, y + height - ry)
        p8 = Point(x, y + ry)
        edges = [(p1, p2), (p3, p4), (p5, p6), (p7, p8)]

        if rx == 0.0 or ry == 0.0:
            corners = []
        elif rx == ry:
            corners = [
                ("arc", p2, p3, Point(x + width - rx, y + ry), None),
                ("arc", p4, p5, Point(x + width - rx, y + height - ry), None),
                ("arc", p6, p7, Point(x + rx, y + height - ry), None),
                ("arc", p8, p1, Point(x + rx, y + ry), None),
            ]
        else:
            corners = [
                ("biarc", p2, p3, Point(x + width - rx / 2.0, y), Point(x + width, y + ry / 2.0)),
                (
                    "biarc",
                    p4,
                    p5,
                    Point(x + width, y + height - ry / 2.0),
                    Point(x + width - rx / 2.0, y + height),
                ),
                ("biarc", p6, p7, Point(x + rx / 2.0, y + height), Point(x, y + height - ry / 2.0)),
                ("biarc", p8, p1, Point(x, y + ry / 2.0), Point(x + rx / 2.0, y)),
            ]

        if self.options.use_contours:
            self._rect_contour(edges, corners, style, tag, context)
        else:
            self._rect_shapes(edges, corners, style, tag, context)

    def _rect_contour(
        self,
        edges: list[tuple[Point, Point]],
        corners: list[tuple[str, Point, Point, Point, Point | None]],
        style: Style,
        tag: str,
        context: SvgContext,
    ) -> None:
        section = self._local_section(context)
        points: list[Point] = []
        for index, (start, end) in enumerate(edges):
            append_points(points, [start, end])
            if not corners:
                continue
            kind, c_start, c_end, a, b = corners[index]
            if kind == "arc":
                append_points(points, sample_circular_arc(a, c_start, c_end, curve_section=section))
            else:
                biarc = fit_biarc(c_start, c_end, a, b)  # type: ignore[arg-type]
                append_points(points, biarc_points(biarc, curve_section=section))
        append_points(points, [points[0]])
        self._emit_polyline(points, True, style, tag, context)

    def _rect_shapes(
        self,
        edges: list[tuple[Point, Point]],
        corners: list[tuple[str, Point, Point, Point, Point | None]],
        style: Style,
        tag: str,
        context: SvgContext,
    ) -> None:
        section = self.geometry.curve_section
        local_shapes: list[Shape] = []
        for index, (start, end) in enumerate(edges):
            if start != end:
                local_shapes.append(Line(start=start, end=end, style=style, tag=tag))
            if not corners:
                continue
            kind, c_start, c_end, a, b = corners[index]
            if kind == "arc":
                spec = circular_arc_spec(a, c_start, c_end)
                if spec is not None:
                    local_shapes.append(to_arc_shape(spec, style, tag))
                continue
            biarc = fit_biarc(c_start, c_end, a, b)  # type: ignore[arg-type]
            halves = ((biarc.first, biarc.start, biarc.joint), (biarc.second, biarc.joint, biarc.end))
            for spec, half_start, half_end in halves:
                if spec is None:
                    local_shapes.append(Line(start=half_start, end=half_end, style=style, tag=tag))
                else:
                    local_shapes.append(to_arc_shape(spec, style, tag))
        for shape in local_shapes:
            self._emit(transform_shape(shape, context.matrix, section))

    def _circle(self, element: Any, context: SvgContext, style: Style, tag: str) -> None:
        center = Point(_number(element, "cx"), _number(element, "cy"))
        radius = _number(element, "r")
        if radius <= 0.0:
            self.log.log_element_skipped("circle", "zero radius")
            return
        if self.options.use_contours or not context.matrix.is_similarity:
            points = render_circle(center, radius, self._local_section(context))
            self._emit_polyline(points, True, style, tag, context)
            return
        self._emit(
            Circle(
                center=context.matrix.apply_point(center),
                radius=radius * context.matrix.scale_factor,
                style=style,
                tag=tag,
            )
        )

    def _ellipse(self, element: Any, context: SvgContext, style: Style, tag: str) -> None:
        cx = _number(element, "cx")
        cy = _number(element, "cy")
        rx = _number(element, "rx")
        ry = _number(element, "ry")
        if rx <= 0.0 or ry <= 0.0:
            self.log.log_element_skipped("ellipse", "zero radius")
            return
        step = self.geometry.ellipse_step_degrees
        if rx > self.geometry.ellipse_fine_threshold or ry > self.geometry.ellipse_fine_threshold:
            step = self.geometry.ellipse_fine_step_degrees

        points = []
        count = max(3, round(360.0 / step))
        for i in range(count):
            angle = 2.0 * math.pi * i / count
            points.append(Point(cx + rx * math.cos(angle), cy + ry * math.sin(angle)))
        points.append(points[0])

        contour = Contour(context.matrix.apply(points), closed=True)
        self._emit_contour(contour, style, tag, classify=True)

    def _polyline(self, element: Any, context: SvgContext, style: Style, tag: str) -> None:
        points = parse_points(element.get("points"))
        if len(points) < 2:
            self.log.log_element_skipped("polyline", "fewer than two points")
            return
        closed = len(points) > 2 and points[0] == points[-1]
        contour = Contour(context.matrix.apply(points), closed=closed)
        self._emit_contour(contour, style, tag, classify=False)

    def _polygon(self, element: Any, context: SvgContext, style: Style, tag: str) -> None:
        points = parse_points(element.get("points"))
        if len(points) < 2:
            self.log.log_element_skipped("polygon", "fewer than two points")
            return
        first, last = points[0], points[-1]
        if abs(first.x - last.x) + abs(first.y - last.y) > self.geometry.polygon_close_tolerance:
            points.append(first)
        contour = Contour(context.matrix.apply(points), closed=True)
        self._emit_contour(contour, style, tag, classify=True)

    def _path(self, element: Any, context: SvgContext, style: Style, tag: str) -> None:
        data = element.get("d")
        if not data:
            self.log.log_element_skipped("path", "no path data")
            return
        contours, errors = self.interpreter.interpret_with_report(data)
        self.log.log_tokens_recovered(len(errors))
        if not contours:
            self.log.log_element_skipped("path", "no contours")
            return
        for index, contour in enumerate(contours):
            part_tag = tag if len(contours) == 1 else f"{tag}.{index}"
            transformed = Contour(context.matrix.apply(contour.points), contour.closed)
            self._emit_contour(transformed, style, part_tag, classify=True)


class SvgReader:
    """Reads SVG drawings into DrawingDocuments.

    The reader holds settings only; each ``read`` builds fresh conversion
    state.

    Args:
        settings: Application settings (defaults if None)
    """

    def __init__(self, settings: VectorCamSettings | None = None) -> None:
        self._settings = settings or VectorCamSettings()

    def read(self, source: bytes | str | Path, file_name: str | None = None) -> DrawingDocument:
        """Read an SVG drawing.

        Args:
            source: File path, SVG text or raw bytes
            file_name: Name recorded in the document (defaults to the path's
                name, or ``drawing.svg``)

        Returns:
            The converted drawing

        Raises:
            DocumentParseError: If the XML is malformed or not SVG
            NumericParseError: If a coordinate is not a number
        """
        if isinstance(source, Path):
            file_name = file_name or source.name
            try:
                content: bytes | str = source.read_bytes()
            except OSError as e:
                raise DocumentParseError(file_name, str(e)) from e
        else:
            content = source
        file_name = file_name or "drawing.svg"

        try:
            root = ET.fromstring(content)
        except (ET.ParseError, DefusedXmlException) as e:
            raise DocumentParseError(file_name, str(e)) from e

        if _local_name(root.tag) != "svg":
            raise DocumentParseError(file_name, f"root element is <{_local_name(root.tag)}>")

        return self._convert(root, file_name)

    def _convert(self, root: Any, file_name: str) -> DrawingDocument:
        start_time = time.perf_counter()
        options = self._settings.importer
        page = page_geometry(root.attrib, options.import_resolution)

        classes: dict[str, dict[str, str]] = {}
        for element in root.iter():
            if _local_name(element.tag) == "style":
                for name, rules in parse_css_classes(element.text).items():
                    classes.setdefault(name, {}).update(rules)

        conversion = _SvgConversion(self._settings, page, file_name)
        conversion.log.log_resolution(page.resolution, page.width_mm, page.height_mm or 0.0)

        context = SvgContext(matrix=page.page_transform(options.flip_y), classes=classes)
        context = replace(context, matrix=context.matrix.append(parse_transform(root.get("transform"))))
        conversion.walk(root, context)

        document = conversion.assembler.build(file_name)
        if options.flip_y and page.height_mm is None and not document.is_empty():
            document = translate(document, 0.0, -document.bounds.min_y)

        conversion.log.log_complete((time.perf_counter() - start_time) * 1000)
        return document


def read_svg(
    source: bytes | str | Path,
    file_name: str | None = None,
    settings: VectorCamSettings | None = None,
) -> DrawingDocument:
    """Read an SVG drawing with the given settings.

    See SvgReader.read.
    """
    return SvgReader(settings).read(source, file_name)
