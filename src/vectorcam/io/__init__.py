"""Drawing I/O layer for vectorcam.

This module reads SVG and DXF drawings into DrawingDocuments and writes
them back out. It keeps defusedxml and ezdxf out of the geometry core.

Key responsibilities:
- Parse SVG markup safely and convert each element
- Read and write DXF through ezdxf
- Detect the input format by trying each reader in turn
- Write renderer JSON, DXF or SVG output

Key classes:
- SvgReader: Convert SVG documents
- Loaded / LoadFailed / Unsuccessful: Loader outcomes
"""

from vectorcam.io.dxf_codec import read_dxf, write_dxf
from vectorcam.io.loader import (
    LoadFailed,
    Loaded,
    LoadOutcome,
    Unsuccessful,
    load_drawing,
    load_drawing_file,
    require_document,
)
from vectorcam.io.svg_reader import SvgContext, SvgReader, read_svg
from vectorcam.io.svg_writer import build_svg, write_svg
from vectorcam.io.writer import write_document, write_json

__all__ = [
    # Readers
    "SvgContext",
    "SvgReader",
    "read_dxf",
    "read_svg",
    # Loader
    "LoadFailed",
    "LoadOutcome",
    "Loaded",
    "Unsuccessful",
    "load_drawing",
    "load_drawing_file",
    "require_document",
    # Writers
    "build_svg",
    "write_document",
    "write_dxf",
    "write_json",
    "write_svg",
]
