"""Domain models for vectorcam.

This module contains the core domain models representing points, contours,
arcs and the canonical drawing primitives. All models are designed to be:

- Immutable where possible (using frozen dataclasses)
- Serializable to the renderer's JSON structure
- Independent of any file format library

Key classes:
- Point: A 2D point
- Contour: An ordered point sequence, open or closed
- ArcSpec: A center-parameterized elliptical arc
- Line, Circle, Arc, Polyline: The canonical primitives (union: Shape)
- Style, Color: Presentation attributes
- Bounds, Rect: Axis-aligned extents
- DrawingDocument: All primitives imported from one file
"""

from vectorcam.domain.arc import ArcSpec
from vectorcam.domain.contour import Contour, Point
from vectorcam.domain.document import DrawingDocument
from vectorcam.domain.shapes import (
    Arc,
    Bounds,
    Circle,
    Color,
    Line,
    Polyline,
    Rect,
    Shape,
    Style,
)

__all__: list[str] = [
    # Core types
    "Point",
    "Contour",
    "ArcSpec",
    # Primitives
    "Arc",
    "Circle",
    "Line",
    "Polyline",
    "Shape",
    # Presentation
    "Color",
    "Style",
    # Extents
    "Bounds",
    "Rect",
    # Document
    "DrawingDocument",
]
