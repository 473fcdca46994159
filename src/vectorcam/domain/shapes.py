"""Canonical drawing primitives.

A drawing is a flat collection of four primitive kinds: Line, Circle, Arc and
Polyline. The set is closed; ``Shape`` is the union of the four and code that
dispatches on it handles every variant explicitly.

Serialization follows the renderer's JSON naming (camelCase keys), so a
``to_dict`` result can be handed straight to the browser client.
"""

import math
import re
from dataclasses import dataclass, field, replace
from typing import Any, ClassVar

from vectorcam.domain.contour import Point

_NAMED_COLORS: dict[str, tuple[int, int, int]] = {
    "black": (0, 0, 0),
    "white": (255, 255, 255),
    "red": (255, 0, 0),
    "green": (0, 128, 0),
    "lime": (0, 255, 0),
    "blue": (0, 0, 255),
    "yellow": (255, 255, 0),
    "cyan": (0, 255, 255),
    "magenta": (255, 0, 255),
    "gray": (128, 128, 128),
    "grey": (128, 128, 128),
    "orange": (255, 165, 0),
    "purple": (128, 0, 128),
    "brown": (165, 42, 42),
}

_RGB_PATTERN = re.compile(r"rgb\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*\)", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class Color:
    """An RGBA color with 8-bit channels."""

    r: int
    g: int
    b: int
    a: int = 255

    @classmethod
    def parse(cls, text: str | None) -> "Color | None":
        """Parse a CSS color value.

        Supports ``#rrggbb``, ``#rgb``, ``rgb(r, g, b)`` and a small set of
        color names.

        Args:
            text: Color value from a style or attribute

        Returns:
            Parsed color, or None for ``none`` and unrecognized values

        Examples:
            >>> Color.parse("#ff8000")
            Color(r=255, g=128, b=0, a=255)
            >>> Color.parse("none") is None
            True
        """
        if text is None:
            return None
        value = text.strip().lower()
        if not value or value == "none":
            return None

        if value.startswith("#"):
            digits = value[1:]
            if len(digits) == 3:
                digits = "".join(c * 2 for c in digits)
            if len(digits) != 6:
                return None
            try:
                return cls(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))
            except ValueError:
                return None

        match = _RGB_PATTERN.fullmatch(value)
        if match:
            r, g, b = (min(255, int(v)) for v in match.groups())
            return cls(r, g, b)

        named = _NAMED_COLORS.get(value)
        if named is not None:
            return cls(*named)
        return None

    def to_hex(self) -> str:
        """Format as ``#rrggbb``."""
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def to_dict(self) -> dict[str, Any]:
        return {"r": self.r, "g": self.g, "b": self.b, "a": self.a}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Color":
        return cls(r=data["r"], g=data["g"], b=data["b"], a=data.get("a", 255))


@dataclass(frozen=True, slots=True)
class Style:
    """Presentation attributes shared by every primitive.

    Attributes:
        stroke: Stroke color (None = not stroked)
        stroke_width: Stroke width in source units
        fill: Fill color (None = not filled)
        visible: Invisible shapes stay in the document but not in its bounds
        layer: Layer name, if any
    """

    stroke: Color | None = None
    stroke_width: float = 1.0
    fill: Color | None = None
    visible: bool = True
    layer: str | None = None

    def with_layer(self, layer: str | None) -> "Style":
        return replace(self, layer=layer)


def _base_dict(tag: str, style: Style) -> dict[str, Any]:
    return {
        "codeName": tag,
        "color": style.stroke.to_dict() if style.stroke else None,
        "fillColor": style.fill.to_dict() if style.fill else None,
        "strokeWidth": style.stroke_width,
        "isVisible": style.visible,
        "layerName": style.layer,
    }


def _style_from_dict(data: dict[str, Any]) -> Style:
    stroke = data.get("color")
    fill = data.get("fillColor")
    return Style(
        stroke=Color.from_dict(stroke) if stroke else None,
        stroke_width=data.get("strokeWidth", 1.0),
        fill=Color.from_dict(fill) if fill else None,
        visible=data.get("isVisible", True),
        layer=data.get("layerName"),
    )


@dataclass(frozen=True, slots=True)
class Line:
    """Straight segment between two points."""

    kind: ClassVar[str] = "line"

    start: Point
    end: Point
    style: Style = field(default_factory=Style)
    tag: str = ""

    def length(self) -> float:
        return self.start.distance_to(self.end)

    def reversed(self) -> "Line":
        """Return the same segment running end to start."""
        return replace(self, start=self.end, end=self.start)

    def to_dict(self) -> dict[str, Any]:
        data = _base_dict(self.tag, self.style)
        data["startPoint"] = self.start.to_dict()
        data["endPoint"] = self.end.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Line":
        return cls(
            start=Point.from_dict(data["startPoint"]),
            end=Point.from_dict(data["endPoint"]),
            style=_style_from_dict(data),
            tag=data.get("codeName", ""),
        )


@dataclass(frozen=True, slots=True)
class Circle:
    """Full circle."""

    kind: ClassVar[str] = "circle"

    center: Point
    radius: float
    style: Style = field(default_factory=Style)
    tag: str = ""

    def to_dict(self) -> dict[str, Any]:
        data = _base_dict(self.tag, self.style)
        data["center"] = self.center.to_dict()
        data["radius"] = self.radius
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Circle":
        return cls(
            center=Point.from_dict(data["center"]),
            radius=data["radius"],
            style=_style_from_dict(data),
            tag=data.get("codeName", ""),
        )


@dataclass(frozen=True, slots=True)
class Arc:
    """Circular arc.

    Angles are in degrees, measured counter-clockwise from the positive x
    axis. The arc runs from ``start_angle_deg`` to ``end_angle_deg`` in the
    direction given by ``clockwise``.
    """

    kind: ClassVar[str] = "arc"

    center: Point
    radius: float
    start_angle_deg: float
    end_angle_deg: float
    clockwise: bool = False
    style: Style = field(default_factory=Style)
    tag: str = ""

    @property
    def start_point(self) -> Point:
        angle = math.radians(self.start_angle_deg)
        return Point(
            self.center.x + self.radius * math.cos(angle),
            self.center.y + self.radius * math.sin(angle),
        )

    @property
    def end_point(self) -> Point:
        angle = math.radians(self.end_angle_deg)
        return Point(
            self.center.x + self.radius * math.cos(angle),
            self.center.y + self.radius * math.sin(angle),
        )

    def counter_clockwise(self) -> "Arc":
        """Return the same arc expressed counter-clockwise.

        CAD formats only store counter-clockwise arcs, so a clockwise arc
        swaps its start and end angles.
        """
        if not self.clockwise:
            return self
        return replace(
            self,
            start_angle_deg=self.end_angle_deg,
            end_angle_deg=self.start_angle_deg,
            clockwise=False,
        )

    def to_dict(self) -> dict[str, Any]:
        data = _base_dict(self.tag, self.style)
        data["center"] = self.center.to_dict()
        data["radius"] = self.radius
        data["startAngle"] = self.start_angle_deg
        data["endAngle"] = self.end_angle_deg
        data["isClockwise"] = self.clockwise
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Arc":
        return cls(
            center=Point.from_dict(data["center"]),
            radius=data["radius"],
            start_angle_deg=data["startAngle"],
            end_angle_deg=data["endAngle"],
            clockwise=data.get("isClockwise", False),
            style=_style_from_dict(data),
            tag=data.get("codeName", ""),
        )


@dataclass(frozen=True, slots=True)
class Polyline:
    """Sequence of connected straight segments."""

    kind: ClassVar[str] = "polyline"

    vertices: tuple[Point, ...]
    closed: bool = False
    style: Style = field(default_factory=Style)
    tag: str = ""

    def to_dict(self) -> dict[str, Any]:
        data = _base_dict(self.tag, self.style)
        data["isClosed"] = self.closed
        data["vertexes"] = [v.to_dict() for v in self.vertices]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Polyline":
        return cls(
            vertices=tuple(Point.from_dict(v) for v in data["vertexes"]),
            closed=data.get("isClosed", False),
            style=_style_from_dict(data),
            tag=data.get("codeName", ""),
        )


Shape = Line | Circle | Arc | Polyline


@dataclass(frozen=True, slots=True)
class Rect:
    """Axis-aligned rectangle given by its corner and size."""

    x: float
    y: float
    width: float
    height: float

    def offset(self, dx: float, dy: float) -> "Rect":
        return Rect(self.x + dx, self.y + dy, self.width, self.height)

    def to_bounds(self) -> "Bounds":
        return Bounds(self.x, self.x + self.width, self.y, self.y + self.height)


@dataclass(frozen=True, slots=True)
class Bounds:
    """Axis-aligned extent of a drawing."""

    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @classmethod
    def empty(cls) -> "Bounds":
        return cls(0.0, 0.0, 0.0, 0.0)

    @classmethod
    def from_points(cls, points: list[Point]) -> "Bounds":
        """Smallest bounds containing all points.

        Raises:
            ValueError: If points is empty
        """
        if not points:
            raise ValueError("Cannot compute bounds of no points")
        xs = [p.x for p in points]
        ys = [p.y for p in points]
        return cls(min(xs), max(xs), min(ys), max(ys))

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def union(self, other: "Bounds") -> "Bounds":
        return Bounds(
            min(self.min_x, other.min_x),
            max(self.max_x, other.max_x),
            min(self.min_y, other.min_y),
            max(self.max_y, other.max_y),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "min": {"x": self.min_x, "y": self.min_y},
            "max": {"x": self.max_x, "y": self.max_y},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Bounds":
        return cls(
            min_x=data["min"]["x"],
            max_x=data["max"]["x"],
            min_y=data["min"]["y"],
            max_y=data["max"]["y"],
        )
