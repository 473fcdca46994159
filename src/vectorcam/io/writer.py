"""Drawing output."""

import json
from pathlib import Path

import structlog

from vectorcam.domain import DrawingDocument
from vectorcam.exceptions import DocumentWriteError
from vectorcam.io.dxf_codec import write_dxf
from vectorcam.io.svg_writer import write_svg

logger = structlog.get_logger(__name__)

SUPPORTED_SUFFIXES = (".json", ".dxf", ".svg")


def write_json(document: DrawingDocument, path: Path) -> None:
    """Write the renderer JSON for a drawing.

    Raises:
        DocumentWriteError: If the file cannot be written
    """
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(document.to_dict(), f, indent=2)
    except OSError as e:
        raise DocumentWriteError(str(path), str(e)) from e
    logger.info("JSON written", path=str(path))


def write_document(document: DrawingDocument, path: Path) -> None:
    """Write a drawing in the format given by the path's suffix.

    Args:
        document: Drawing to write
        path: Output path ending in ``.json``, ``.dxf`` or ``.svg``

    Raises:
        DocumentWriteError: If the suffix is unsupported or writing fails
    """
    suffix = path.suffix.lower()
    if suffix == ".json":
        write_json(document, path)
    elif suffix == ".dxf":
        write_dxf(document, path)
    elif suffix == ".svg":
        write_svg(document, path)
    else:
        raise DocumentWriteError(
            str(path), f"unsupported output format '{suffix}' (use {', '.join(SUPPORTED_SUFFIXES)})"
        )
