"""Unit tests for drawing output."""

import json
from pathlib import Path

import pytest

from vectorcam.core.assembler import DrawingAssembler
from vectorcam.domain import DrawingDocument, Point
from vectorcam.exceptions import DocumentWriteError
from vectorcam.io.writer import write_document, write_json


@pytest.fixture
def document() -> DrawingDocument:
    """Small drawing with a line and a circle."""
    assembler = DrawingAssembler()
    assembler.add_line(Point(0, 0), Point(10, 0), tag="edge")
    assembler.add_circle(Point(5, 5), 1.5)
    return assembler.build("part.svg")


class TestWriteJson:
    """Tests for write_json function."""

    def test_structure(self, tmp_path: Path, document: DrawingDocument) -> None:
        """Test the renderer JSON layout."""
        path = tmp_path / "part.json"
        write_json(document, path)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["fileName"] == "part.svg"
        assert data["bounds"] == {"min": {"x": 0.0, "y": 0.0}, "max": {"x": 10.0, "y": 6.5}}
        assert data["lines"][0]["codeName"] == "edge"
        assert data["lines"][0]["endPoint"] == {"x": 10.0, "y": 0.0}
        assert data["circles"][0]["radius"] == 1.5
        assert data["arcs"] == []
        assert data["polylines"] == []

    def test_round_trip(self, tmp_path: Path, document: DrawingDocument) -> None:
        """Test that the written JSON reads back into an equal document."""
        path = tmp_path / "part.json"
        write_json(document, path)
        assert DrawingDocument.from_dict(json.loads(path.read_text(encoding="utf-8"))) == document

    def test_unwritable(self, tmp_path: Path, document: DrawingDocument) -> None:
        """Test that an unwritable path raises DocumentWriteError."""
        with pytest.raises(DocumentWriteError):
            write_json(document, tmp_path / "missing" / "part.json")


class TestWriteDocument:
    """Tests for write_document function."""

    @pytest.mark.parametrize("name", ["part.json", "part.DXF", "part.svg"])
    def test_by_suffix(self, tmp_path: Path, document: DrawingDocument, name: str) -> None:
        """Test that the suffix picks the format."""
        path = tmp_path / name
        write_document(document, path)
        assert path.stat().st_size > 0

    def test_unsupported_suffix(self, tmp_path: Path, document: DrawingDocument) -> None:
        """Test that other suffixes are refused."""
        with pytest.raises(DocumentWriteError) as exc_info:
            write_document(document, tmp_path / "part.png")
        assert ".png" in exc_info.value.reason
        assert not (tmp_path / "part.png").exists()
