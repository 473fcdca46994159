"""Unit tests for settings and import logging."""

import pytest
import structlog
from pydantic import ValidationError

from vectorcam.config import GeometryConfig, VectorCamSettings, get_default_settings
from vectorcam.utils import ImportLogger, ImportStats


class TestSettings:
    """Tests for the pydantic settings models."""

    def test_defaults(self) -> None:
        """Test the default geometry tolerances."""
        settings = get_default_settings()
        assert settings.geometry.curve_section == 1.0
        assert settings.geometry.circle_min_vertices == 10
        assert settings.importer.detect_circles is True
        assert settings.importer.import_resolution is None
        assert settings.logging.log_file is None

    def test_nested_override(self) -> None:
        """Test overriding a nested option from a mapping."""
        settings = VectorCamSettings.model_validate(
            {"importer": {"use_contours": True}, "geometry": {"curve_section": 0.5}}
        )
        assert settings.importer.use_contours is True
        assert settings.geometry.curve_section == 0.5

    @pytest.mark.parametrize(
        "field,value",
        [
            ("curve_section", 0.0),
            ("circle_min_vertices", 2),
            ("circle_area_tolerance", 1.5),
            ("ellipse_step_degrees", 90.0),
        ],
    )
    def test_out_of_range(self, field: str, value: float) -> None:
        """Test that out of range values are rejected."""
        with pytest.raises(ValidationError):
            GeometryConfig.model_validate({field: value})

    def test_resolution_must_be_positive(self) -> None:
        """Test that a zero import resolution is rejected."""
        with pytest.raises(ValidationError):
            VectorCamSettings.model_validate({"importer": {"import_resolution": 0}})


class TestImportStats:
    """Tests for ImportStats."""

    def test_shape_count(self) -> None:
        """Test summing shapes across kinds."""
        stats = ImportStats(shapes_by_kind={"line": 3, "circle": 2})
        assert stats.shape_count == 5

    def test_duration(self) -> None:
        """Test duration with and without timestamps."""
        assert ImportStats().duration_seconds == 0.0
        assert ImportStats(start_time=1.0, end_time=3.5).duration_seconds == 2.5


class TestImportLogger:
    """Tests for ImportLogger."""

    def test_tracks_statistics(self) -> None:
        """Test that logging calls update the statistics."""
        log = ImportLogger(structlog.get_logger("test"), "part.svg")
        log.log_element("path", "p1")
        log.log_element("circle", None)
        log.log_element_skipped("text", "unsupported element")
        log.log_shape("line")
        log.log_shape("line")
        log.log_shape("circle")
        log.log_tokens_recovered(0)
        log.log_tokens_recovered(3)

        stats = log.stats
        assert stats.elements_read == 2
        assert stats.elements_skipped == 1
        assert stats.tokens_recovered == 3
        assert stats.shapes_by_kind == {"line": 2, "circle": 1}
        assert stats.shape_count == 3
