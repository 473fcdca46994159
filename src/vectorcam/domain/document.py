"""Drawing document: all primitives imported from one file."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from vectorcam.domain.shapes import Arc, Bounds, Circle, Line, Polyline, Shape


@dataclass(frozen=True, slots=True)
class DrawingDocument:
    """Canonical drawing model for one imported file.

    Documents are immutable. Operations that change a drawing return a new
    document, so a published document can be read while its replacement is
    being built.

    Attributes:
        file_name: Name of the source file
        bounds: Extent of all visible primitives
        circles: Circle primitives
        lines: Line primitives
        arcs: Arc primitives
        polylines: Polyline primitives
    """

    file_name: str
    bounds: Bounds = field(default_factory=Bounds.empty)
    circles: tuple[Circle, ...] = ()
    lines: tuple[Line, ...] = ()
    arcs: tuple[Arc, ...] = ()
    polylines: tuple[Polyline, ...] = ()

    @classmethod
    def from_shapes(
        cls, file_name: str, shapes: Iterable[Shape], bounds: Bounds
    ) -> "DrawingDocument":
        """Group shapes by kind into a new document.

        Args:
            file_name: Name of the source file
            shapes: Primitives in any order
            bounds: Precomputed bounds of the visible primitives

        Returns:
            New document keeping the relative order within each kind
        """
        circles: list[Circle] = []
        lines: list[Line] = []
        arcs: list[Arc] = []
        polylines: list[Polyline] = []
        for shape in shapes:
            if isinstance(shape, Circle):
                circles.append(shape)
            elif isinstance(shape, Line):
                lines.append(shape)
            elif isinstance(shape, Arc):
                arcs.append(shape)
            elif isinstance(shape, Polyline):
                polylines.append(shape)
            else:
                raise TypeError(f"Unknown shape type: {type(shape).__name__}")
        return cls(
            file_name=file_name,
            bounds=bounds,
            circles=tuple(circles),
            lines=tuple(lines),
            arcs=tuple(arcs),
            polylines=tuple(polylines),
        )

    def shapes(self) -> Iterator[Shape]:
        """Iterate over every primitive, grouped by kind."""
        yield from self.circles
        yield from self.lines
        yield from self.arcs
        yield from self.polylines

    def counts(self) -> dict[str, int]:
        """Number of primitives of each kind."""
        return {
            Circle.kind: len(self.circles),
            Line.kind: len(self.lines),
            Arc.kind: len(self.arcs),
            Polyline.kind: len(self.polylines),
        }

    def is_empty(self) -> bool:
        return not any(self.counts().values())

    def layer_names(self) -> list[str]:
        """Distinct layer names in first-seen order."""
        names: list[str] = []
        for shape in self.shapes():
            layer = shape.style.layer
            if layer and layer not in names:
                names.append(layer)
        return names

    def to_dict(self) -> dict[str, Any]:
        """Serialize into the renderer's JSON structure."""
        return {
            "fileName": self.file_name,
            "bounds": self.bounds.to_dict(),
            "circles": [c.to_dict() for c in self.circles],
            "lines": [line.to_dict() for line in self.lines],
            "arcs": [a.to_dict() for a in self.arcs],
            "polylines": [p.to_dict() for p in self.polylines],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DrawingDocument":
        """Deserialize from the renderer's JSON structure."""
        return cls(
            file_name=data["fileName"],
            bounds=Bounds.from_dict(data["bounds"]),
            circles=tuple(Circle.from_dict(c) for c in data.get("circles", [])),
            lines=tuple(Line.from_dict(line) for line in data.get("lines", [])),
            arcs=tuple(Arc.from_dict(a) for a in data.get("arcs", [])),
            polylines=tuple(Polyline.from_dict(p) for p in data.get("polylines", [])),
        )
