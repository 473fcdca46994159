"""Center-parameterized elliptical arc."""

import math
from dataclasses import dataclass
from typing import Any

from vectorcam.domain.contour import Point

TWO_PI = 2.0 * math.pi


@dataclass(frozen=True, slots=True)
class ArcSpec:
    """An elliptical arc described by its center and angles.

    Angles are parametric angles of the unrotated ellipse, in radians. The
    sign of ``sweep_angle`` gives the direction: positive sweeps towards
    increasing angle.

    Attributes:
        center: Ellipse center
        radius_x: Radius along the ellipse's local x axis
        radius_y: Radius along the ellipse's local y axis
        rotation: Rotation of the local x axis, in radians
        start_angle: Parametric angle of the first point
        sweep_angle: Signed angular extent, 0 < |sweep_angle| <= 4*pi

    Raises:
        ValueError: If the sweep is zero or wider than two full turns
    """

    center: Point
    radius_x: float
    radius_y: float
    rotation: float
    start_angle: float
    sweep_angle: float

    def __post_init__(self) -> None:
        if not 0.0 < abs(self.sweep_angle) <= 2.0 * TWO_PI:
            raise ValueError(f"Arc sweep out of range: {self.sweep_angle}")

    @property
    def end_angle(self) -> float:
        """Parametric angle of the last point."""
        return self.start_angle + self.sweep_angle

    @property
    def is_circular(self) -> bool:
        """Whether both radii are equal."""
        return math.isclose(self.radius_x, self.radius_y, rel_tol=1e-9, abs_tol=1e-12)

    @property
    def clockwise(self) -> bool:
        """Whether the arc sweeps towards decreasing angle."""
        return self.sweep_angle < 0

    def point_at(self, angle: float) -> Point:
        """Evaluate the arc at a parametric angle.

        Args:
            angle: Parametric angle in radians

        Returns:
            Point on the rotated ellipse
        """
        cos_r = math.cos(self.rotation)
        sin_r = math.sin(self.rotation)
        x = self.radius_x * math.cos(angle)
        y = self.radius_y * math.sin(angle)
        return Point(
            self.center.x + x * cos_r - y * sin_r,
            self.center.y + x * sin_r + y * cos_r,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "center": self.center.to_dict(),
            "radius_x": self.radius_x,
            "radius_y": self.radius_y,
            "rotation": self.rotation,
            "start_angle": self.start_angle,
            "sweep_angle": self.sweep_angle,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ArcSpec":
        """Deserialize from dictionary."""
        return cls(
            center=Point.from_dict(data["center"]),
            radius_x=data["radius_x"],
            radius_y=data["radius_y"],
            rotation=data["rotation"],
            start_angle=data["start_angle"],
            sweep_angle=data["sweep_angle"],
        )
