"""Configuration settings for vectorcam."""

from pathlib import Path

from pydantic import BaseModel, Field


class GeometryConfig(BaseModel):
    """Configuration for sampling density and shape classification.

    Lengths are in canonical units (millimetres) unless stated otherwise.
    The circle tolerances are empirical and kept configurable rather than
    derived.
    """

    curve_section: float = Field(
        default=1.0,
        gt=0.0,
        le=100.0,
        description="Arc length covered by one sample when rendering circles and arcs",
    )
    min_bezier_step: float = Field(
        default=0.01,
        gt=0.0,
        le=1.0,
        description="Smallest parameter step used when flattening Bezier curves",
    )
    circle_min_vertices: int = Field(
        default=10,
        ge=3,
        le=1000,
        description="Polygons with fewer vertices are never classified as circles",
    )
    circle_shape_tolerance: float = Field(
        default=0.2,
        ge=0.0,
        le=1.0,
        description="Allowed relative deviation of width/height from 1",
    )
    circle_area_tolerance: float = Field(
        default=0.2,
        ge=0.0,
        le=1.0,
        description="Allowed relative deviation of polygon area from the circle area",
    )
    circle_radius_deviation: float = Field(
        default=0.05,
        ge=0.0,
        le=10.0,
        description="Allowed absolute deviation of each vertex from the bounding-box radius",
    )
    ellipse_step_degrees: float = Field(
        default=8.0,
        gt=0.0,
        le=45.0,
        description="Angular step when sampling ellipses",
    )
    ellipse_fine_step_degrees: float = Field(
        default=4.0,
        gt=0.0,
        le=45.0,
        description="Angular step for large ellipses",
    )
    ellipse_fine_threshold: float = Field(
        default=100.0,
        gt=0.0,
        description="Radius above which ellipses use the fine step (source units)",
    )
    polygon_close_tolerance: float = Field(
        default=0.001,
        ge=0.0,
        description="Manhattan distance between polygon ends that still counts as open",
    )


class ImportConfig(BaseModel):
    """Configuration for document import."""

    import_resolution: float | None = Field(
        default=None,
        gt=0.0,
        description="Source units per millimetre (None = derive from the document)",
    )
    use_contours: bool = Field(
        default=False,
        description="Emit every element as a polyline instead of native primitives",
    )
    detect_circles: bool = Field(
        default=True,
        description="Rewrite closed near-circular path contours as circles",
    )
    flip_y: bool = Field(
        default=True,
        description="Flip the SVG y-down page into y-up drawing coordinates",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class VectorCamSettings(BaseModel):
    """Main application settings."""

    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    importer: ImportConfig = Field(default_factory=ImportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> VectorCamSettings:
    """Get default application settings."""
    return VectorCamSettings()
