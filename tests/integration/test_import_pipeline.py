"""Integration tests for the import pipeline.

Reads a realistic SVG drawing and checks:
- Every element kind becomes the expected primitive
- JSON output reads back into the same document
- DXF output keeps primitive counts and layers
- SVG output reads back with its circles and layers
- Editing operations compose
"""

import json
from pathlib import Path

import ezdxf
import pytest

from vectorcam.core import circles_to_layers, flatten, join_lines, rotate, trim
from vectorcam.domain import Color, DrawingDocument
from vectorcam.io import Loaded, load_drawing_file, read_dxf, read_svg, write_document

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"
BRACKET_PATH = FIXTURES_DIR / "bracket.svg"


@pytest.fixture
def bracket() -> DrawingDocument:
    """The bracket drawing read with default settings."""
    return read_svg(BRACKET_PATH)


class TestSvgImport:
    """Test reading the bracket drawing."""

    def test_counts(self, bracket: DrawingDocument) -> None:
        """Test the primitive count of each kind."""
        assert bracket.counts() == {"circle": 4, "line": 4, "arc": 4, "polyline": 2}

    def test_layers(self, bracket: DrawingDocument) -> None:
        """Test that every group label became a layer."""
        assert set(bracket.layer_names()) == {"Outline", "Holes", "Engrave"}
        assert {c.style.layer for c in bracket.circles} == {"Holes"}
        assert {line.style.layer for line in bracket.lines} == {"Outline"}

    def test_detected_circle(self, bracket: DrawingDocument) -> None:
        """Test that the circular path became a circle."""
        circle = next(c for c in bracket.circles if c.tag == "round_hole")
        assert circle.radius == pytest.approx(5.0, abs=0.05)
        assert circle.center.x == pytest.approx(40.0, abs=0.05)
        assert circle.center.y == pytest.approx(25.0, abs=0.05)

    def test_styles(self, bracket: DrawingDocument) -> None:
        """Test that class rules reached the primitives."""
        assert all(c.style.stroke == Color(255, 0, 0) for c in bracket.circles)
        assert all(c.style.stroke_width == 0.2 for c in bracket.circles)
        assert all(p.style.stroke == Color(0, 0, 255) for p in bracket.polylines)

    def test_bounds(self, bracket: DrawingDocument) -> None:
        """Test that the outline defines the bounds in y-up millimetres."""
        bounds = bracket.bounds
        assert bounds.min_x == pytest.approx(10.0, abs=1e-6)
        assert bounds.max_x == pytest.approx(110.0, abs=1e-6)
        assert bounds.min_y == pytest.approx(10.0, abs=1e-6)
        assert bounds.max_y == pytest.approx(70.0, abs=1e-6)

    def test_format_detection(self) -> None:
        """Test that the loader identifies the drawing as SVG."""
        outcome = load_drawing_file(BRACKET_PATH)
        assert isinstance(outcome, Loaded)
        assert outcome.format == "svg"
        assert outcome.document == read_svg(BRACKET_PATH)


class TestOutput:
    """Test writing the bracket drawing."""

    def test_json_round_trip(self, tmp_path: Path, bracket: DrawingDocument) -> None:
        """Test that the JSON output reads back into an equal document."""
        path = tmp_path / "bracket.json"
        write_document(bracket, path)
        data = json.loads(path.read_text(encoding="utf-8"))
        assert DrawingDocument.from_dict(data) == bracket

    def test_dxf_round_trip(self, tmp_path: Path, bracket: DrawingDocument) -> None:
        """Test that the DXF output keeps counts, layers and bounds."""
        path = tmp_path / "bracket.dxf"
        write_document(bracket, path)

        document = read_dxf(path)
        assert document.counts() == bracket.counts()
        assert set(document.layer_names()) == set(bracket.layer_names())
        assert document.bounds.min_x == pytest.approx(bracket.bounds.min_x, abs=1e-6)
        assert document.bounds.max_y == pytest.approx(bracket.bounds.max_y, abs=1e-6)

    def test_svg_round_trip(self, tmp_path: Path, bracket: DrawingDocument) -> None:
        """Test that the SVG output keeps circles, layers and bounds."""
        path = tmp_path / "bracket_out.svg"
        write_document(bracket, path)

        document = read_svg(path)
        assert len(document.circles) == len(bracket.circles)
        assert len(document.lines) == len(bracket.lines)
        assert len(document.polylines) == len(bracket.polylines) + len(bracket.arcs)
        assert set(document.layer_names()) == set(bracket.layer_names())
        assert document.bounds.min_x == pytest.approx(bracket.bounds.min_x, abs=1e-3)
        assert document.bounds.max_y == pytest.approx(bracket.bounds.max_y, abs=1e-3)

    def test_dxf_is_valid(self, tmp_path: Path, bracket: DrawingDocument) -> None:
        """Test that ezdxf's auditor finds no errors in the output."""
        path = tmp_path / "bracket.dxf"
        write_document(bracket, path)
        auditor = ezdxf.readfile(path).audit()
        assert not auditor.has_errors


class TestOperations:
    """Test editing operations on the bracket drawing."""

    def test_trim(self, bracket: DrawingDocument) -> None:
        """Test that trimming moves the outline corner to the origin."""
        trimmed = trim(bracket)
        assert trimmed.bounds.min_x == pytest.approx(0.0, abs=1e-9)
        assert trimmed.bounds.min_y == pytest.approx(0.0, abs=1e-9)
        assert trimmed.bounds.width == pytest.approx(bracket.bounds.width)
        assert trimmed.counts() == bracket.counts()

    def test_rotate_swaps_extent(self, bracket: DrawingDocument) -> None:
        """Test that a quarter turn swaps width and height."""
        rotated = rotate(bracket, 90)
        assert rotated.bounds.width == pytest.approx(bracket.bounds.height, abs=1e-6)
        assert rotated.bounds.height == pytest.approx(bracket.bounds.width, abs=1e-6)

    def test_diameter_layers(self, bracket: DrawingDocument) -> None:
        """Test diameter layers for the holes."""
        layered = circles_to_layers(bracket)
        assert {c.style.layer for c in layered.circles} == {
            "Diameter_8.00",
            "Diameter_10.00",
            "Diameter_12.00",
        }

    def test_join_leaves_disconnected_outline(self, bracket: DrawingDocument) -> None:
        """Test that outline lines separated by arcs are not joined."""
        joined = join_lines(bracket)
        assert len(joined.lines) == 4

    def test_flatten_closes_outline(self, bracket: DrawingDocument) -> None:
        """Test that the rounded outline's lines and arcs become one closed polyline."""
        flat = flatten(bracket)
        outline = [p for p in flat.polylines if p.tag == "outline"]
        assert len(outline) == 1
        assert outline[0].closed
        assert flat.lines == ()
        assert flat.arcs == ()
        assert len(flat.circles) == len(bracket.circles)
