"""Core geometry algorithms for vectorcam.

This module contains the algorithms that turn vector markup into canonical
primitives:

- Affine transform parsing and composition
- Path data tokenizing and interpretation
- Bezier flattening and elliptical arc reconstruction
- Biarc fitting for rounded corners
- Polygon-to-circle classification
- Closed-form arc bounding boxes
- Drawing assembly and editing operations

All functions are pure and no component keeps state between calls, so
several documents can be converted at once by independent callers.

Key functions:
- parse_transform: Parse an SVG transform list into a Matrix2D
- compose: Chain two transforms in application order
- tokenize: Split path data into commands and numbers
- resolve_endpoint_arc: Convert an SVG arc to center form
- sample_arc: Sample an arc into points
- fit_biarc: Fit two tangent arcs between two points
- classify_polygon_as_circle: Recognize flattened circles
- arc_bounds: Bounding box of a circular arc

Key classes:
- Matrix2D: 2D affine transform
- PathTokenizer: Cursor over path data
- PathInterpreter: Path data to contours
- DrawingAssembler: Collects primitives into a DrawingDocument
"""

from vectorcam.core.arc import (
    arc_step_count,
    circular_arc_spec,
    resolve_endpoint_arc,
    sample_arc,
    sample_circular_arc,
    to_arc_shape,
)
from vectorcam.core.assembler import DrawingAssembler, rebuild
from vectorcam.core.biarc import BiArc, biarc_points, fit_biarc
from vectorcam.core.bounds import arc_bounds, compute_bounds, get_quadrant, shape_bounds
from vectorcam.core.classifier import (
    CircleClassification,
    CircleMatch,
    NotACircle,
    classify_polygon_as_circle,
)
from vectorcam.core.geometry import (
    angle_radians,
    append_points,
    bounding_rect,
    calculate_steps,
    calculate_steps_as_int,
    line_intersection,
    polygon_area,
    polygon_centroid,
    reflect,
    render_arc,
    render_circle,
    signed_area,
)
from vectorcam.core.interpreter import PathInterpreter
from vectorcam.core.operations import (
    circles_to_layers,
    flatten,
    join_lines,
    polylines_to_circles,
    rotate,
    transform_document,
    transform_shape,
    translate,
    trim,
)
from vectorcam.core.tokenizer import PathTokenizer, tokenize
from vectorcam.core.transform import Matrix2D, compose, parse_transform

__all__ = [
    # Transform
    "Matrix2D",
    "compose",
    "parse_transform",
    # Path reading
    "PathInterpreter",
    "PathTokenizer",
    "tokenize",
    # Arcs
    "BiArc",
    "arc_step_count",
    "biarc_points",
    "circular_arc_spec",
    "fit_biarc",
    "resolve_endpoint_arc",
    "sample_arc",
    "sample_circular_arc",
    "to_arc_shape",
    # Classification
    "CircleClassification",
    "CircleMatch",
    "NotACircle",
    "classify_polygon_as_circle",
    # Bounds
    "arc_bounds",
    "compute_bounds",
    "get_quadrant",
    "shape_bounds",
    # Geometry functions
    "angle_radians",
    "append_points",
    "bounding_rect",
    "calculate_steps",
    "calculate_steps_as_int",
    "line_intersection",
    "polygon_area",
    "polygon_centroid",
    "reflect",
    "render_arc",
    "render_circle",
    "signed_area",
    # Assembly and operations
    "DrawingAssembler",
    "circles_to_layers",
    "flatten",
    "join_lines",
    "polylines_to_circles",
    "rebuild",
    "rotate",
    "transform_document",
    "transform_shape",
    "translate",
    "trim",
]
