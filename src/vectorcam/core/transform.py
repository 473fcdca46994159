"""Affine transform composition.

Matrices use the SVG convention::

    | a  c  e |
    | b  d  f |
    | 0  0  1 |

so a point maps as ``(x, y) -> (a*x + c*y + e, b*x + d*y + f)``.

Two composition helpers exist because they read in opposite directions:

- ``compose(first, second)`` maps points through ``first`` and then through
  ``second``.
- ``Matrix2D.append(local)`` nests a local frame inside this one. Reading a
  transform list left to right appends each operation, so later operations
  apply inside the frame built by earlier ones. This is how SVG transform
  lists and nested groups behave.
"""

import math
import re
from dataclasses import dataclass

import structlog

from vectorcam.domain import Point
from vectorcam.exceptions import GeometricDegeneracyError, NumericParseError

logger = structlog.get_logger(__name__)

_FUNCTION_PATTERN = re.compile(r"([A-Za-z]+)\s*\(([^)]*)\)")
_ARG_SEPARATOR = re.compile(r"[\s,]+")


@dataclass(frozen=True, slots=True)
class Matrix2D:
    """2D affine transform.

    Attributes:
        a: x scale / rotation component
        b: y shear / rotation component
        c: x shear / rotation component
        d: y scale / rotation component
        e: x translation
        f: y translation
    """

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    @classmethod
    def identity(cls) -> "Matrix2D":
        return cls()

    @classmethod
    def translation(cls, tx: float, ty: float = 0.0) -> "Matrix2D":
        return cls(1.0, 0.0, 0.0, 1.0, tx, ty)

    @classmethod
    def scaling(cls, sx: float, sy: float | None = None) -> "Matrix2D":
        return cls(sx, 0.0, 0.0, sx if sy is None else sy, 0.0, 0.0)

    @classmethod
    def rotation(cls, degrees: float, cx: float = 0.0, cy: float = 0.0) -> "Matrix2D":
        """Counter-clockwise rotation (in y-up terms) about (cx, cy)."""
        theta = math.radians(degrees)
        cos_t = math.cos(theta)
        sin_t = math.sin(theta)
        rotate = cls(cos_t, sin_t, -sin_t, cos_t, 0.0, 0.0)
        if cx == 0.0 and cy == 0.0:
            return rotate
        return cls.translation(cx, cy).append(rotate).append(cls.translation(-cx, -cy))

    @classmethod
    def skew_x(cls, degrees: float) -> "Matrix2D":
        return cls(1.0, 0.0, math.tan(math.radians(degrees)), 1.0, 0.0, 0.0)

    @classmethod
    def skew_y(cls, degrees: float) -> "Matrix2D":
        return cls(1.0, math.tan(math.radians(degrees)), 0.0, 1.0, 0.0, 0.0)

    def multiply(self, other: "Matrix2D") -> "Matrix2D":
        """Matrix product ``self @ other``.

        The result applies ``other`` to a point first, then ``self``.
        """
        return Matrix2D(
            a=self.a * other.a + self.c * other.b,
            b=self.b * other.a + self.d * other.b,
            c=self.a * other.c + self.c * other.d,
            d=self.b * other.c + self.d * other.d,
            e=self.a * other.e + self.c * other.f + self.e,
            f=self.b * other.e + self.d * other.f + self.f,
        )

    def append(self, local: "Matrix2D") -> "Matrix2D":
        """Nest a local transform inside this frame.

        Args:
            local: Transform declared inside this coordinate frame

        Returns:
            Transform from the local frame to this frame's parent
        """
        return self.multiply(local)

    @property
    def determinant(self) -> float:
        return self.a * self.d - self.b * self.c

    @property
    def is_identity(self) -> bool:
        return self == Matrix2D()

    @property
    def is_invertible(self) -> bool:
        return abs(self.determinant) > 1e-12

    @property
    def flips(self) -> bool:
        """Whether the transform mirrors (reverses orientation)."""
        return self.determinant < 0

    @property
    def scale_factor(self) -> float:
        """Uniform scale applied to lengths (exact for similarities)."""
        return math.sqrt(abs(self.determinant))

    @property
    def is_similarity(self) -> bool:
        """Whether circles stay circles: no shear and equal axis scales."""
        col_x = math.hypot(self.a, self.b)
        col_y = math.hypot(self.c, self.d)
        dot = self.a * self.c + self.b * self.d
        scale = max(col_x, col_y, 1e-12)
        return abs(col_x - col_y) <= 1e-9 * scale and abs(dot) <= 1e-9 * scale * scale

    def inverse(self) -> "Matrix2D":
        """Inverse transform.

        A non-invertible transform (for example ``scale(0)``) has no
        inverse; identity is returned instead and the event is logged.
        """
        det = self.determinant
        if not self.is_invertible:
            logger.debug(
                "Identity substituted for inverse",
                reason=str(GeometricDegeneracyError("inverse", f"determinant {det}")),
            )
            return Matrix2D()
        return Matrix2D(
            a=self.d / det,
            b=-self.b / det,
            c=-self.c / det,
            d=self.a / det,
            e=(self.c * self.f - self.d * self.e) / det,
            f=(self.b * self.e - self.a * self.f) / det,
        )

    def apply_point(self, point: Point) -> Point:
        return Point(
            self.a * point.x + self.c * point.y + self.e,
            self.b * point.x + self.d * point.y + self.f,
        )

    def apply(self, points: list[Point]) -> list[Point]:
        """Map every point through the transform.

        Args:
            points: Points in source space (left unchanged)

        Returns:
            New list of transformed points
        """
        if self.is_identity:
            return list(points)
        return [self.apply_point(p) for p in points]


def compose(first: Matrix2D, second: Matrix2D) -> Matrix2D:
    """Transform equivalent to applying ``first`` and then ``second``.

    Examples:
        >>> m = compose(Matrix2D.translation(10, 0), Matrix2D.scaling(2))
        >>> m.apply_point(Point(1, 1))
        Point(x=22.0, y=2.0)
    """
    return second.multiply(first)


def _parse_args(text: str, offset: int) -> list[float]:
    values = []
    position = offset
    for token in _ARG_SEPARATOR.split(text.strip()):
        if not token:
            continue
        try:
            values.append(float(token))
        except ValueError:
            raise NumericParseError(token, position) from None
        position += len(token) + 1
    return values


def _build(name: str, args: list[float]) -> Matrix2D | None:
    if name == "translate" and args:
        return Matrix2D.translation(args[0], args[1] if len(args) > 1 else 0.0)
    if name == "scale" and args:
        return Matrix2D.scaling(args[0], args[1] if len(args) > 1 else None)
    if name == "rotate" and args:
        if len(args) >= 3:
            return Matrix2D.rotation(args[0], args[1], args[2])
        return Matrix2D.rotation(args[0])
    if name == "matrix" and len(args) >= 6:
        return Matrix2D(*args[:6])
    if name == "skewX" and args:
        return Matrix2D.skew_x(args[0])
    if name == "skewY" and args:
        return Matrix2D.skew_y(args[0])
    return None


def parse_transform(text: str | None) -> Matrix2D:
    """Parse an SVG transform attribute.

    Supports ``translate``, ``scale``, ``rotate``, ``matrix``, ``skewX`` and
    ``skewY``. Unknown functions and functions with too few arguments
    contribute identity.

    Args:
        text: Transform list such as ``"translate(10,20) rotate(45)"``

    Returns:
        Composed transform (identity for empty input)

    Raises:
        NumericParseError: If an argument is not a number

    Examples:
        >>> parse_transform("scale(2)")
        Matrix2D(a=2.0, b=0.0, c=0.0, d=2.0, e=0.0, f=0.0)
    """
    matrix = Matrix2D()
    if not text:
        return matrix

    for match in _FUNCTION_PATTERN.finditer(text):
        name = match.group(1)
        args = _parse_args(match.group(2), match.start(2))
        operation = _build(name, args)
        if operation is None:
            logger.debug("Transform ignored", function=name, args=len(args))
            continue
        matrix = matrix.append(operation)
    return matrix
