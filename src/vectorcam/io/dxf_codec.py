"""DXF reading and writing through ezdxf.

Only the 2D entities that map onto the drawing primitives are read: LINE,
CIRCLE, ARC, LWPOLYLINE and POLYLINE. DXF coordinates are taken as
millimetres.
"""

import io
import time
from pathlib import Path
from typing import Any

import ezdxf
import structlog
from ezdxf import colors
from ezdxf.filemanagement import dxf_stream_info
from ezdxf.lldxf.const import DXFError, DXFStructureError
from ezdxf.lldxf.validator import is_dxf_stream
from ezdxf.path import make_path

from vectorcam.config import VectorCamSettings
from vectorcam.core.assembler import DrawingAssembler
from vectorcam.domain import (
    Arc,
    Circle,
    Color,
    DrawingDocument,
    Line,
    Point,
    Polyline,
    Style,
)
from vectorcam.exceptions import DocumentParseError, DocumentWriteError
from vectorcam.utils.logging import ImportLogger

logger = structlog.get_logger(__name__)

ENTITY_QUERY = "LINE CIRCLE ARC LWPOLYLINE POLYLINE"

# Maximum distance between a bulged polyline segment and its flattening
BULGE_FLATTENING_DISTANCE = 0.01

_MILLIMETERS = 4


def _read_bytes(data: bytes) -> Any:
    """Read DXF text in the encoding its header declares.

    Files before R2007 are written in the code page named by
    ``$DWGCODEPAGE``; later ones are always UTF-8.
    """
    header_text = data.decode("utf-8", errors="ignore")
    if not is_dxf_stream(io.StringIO(header_text)):
        raise DXFStructureError("not a DXF document")
    encoding = dxf_stream_info(io.StringIO(header_text)).encoding
    return ezdxf.read(io.StringIO(data.decode(encoding, errors="surrogateescape")))


def _load(source: bytes | Path, file_name: str) -> Any:
    try:
        if isinstance(source, Path):
            return ezdxf.readfile(source)
        return _read_bytes(source)
    except (DXFError, OSError, LookupError, ValueError, StopIteration) as e:
        raise DocumentParseError(file_name, str(e) or type(e).__name__) from e


def _entity_color(entity: Any, layer_colors: dict[str, int]) -> Color | None:
    rgb = entity.rgb
    if rgb is not None:
        return Color(*rgb)
    aci = entity.dxf.color
    if aci == 256:
        aci = layer_colors.get(entity.dxf.layer, 7)
    if 1 <= aci <= 255:
        return Color(*colors.aci2rgb(aci))
    return None


def _style(entity: Any, layer_colors: dict[str, int]) -> Style:
    return Style(stroke=_entity_color(entity, layer_colors), layer=entity.dxf.layer)


def _vertices(entity: Any) -> list[Point]:
    if entity.dxftype() == "LWPOLYLINE":
        if any(bulge for *_, bulge in entity.get_points("xyb")):
            return [Point(v.x, v.y) for v in make_path(entity).flattening(BULGE_FLATTENING_DISTANCE)]
        return [Point(x, y) for x, y in entity.get_points("xy")]
    return [Point(v.x, v.y) for v in entity.points()]


def read_dxf(
    source: bytes | Path,
    file_name: str | None = None,
    settings: VectorCamSettings | None = None,
) -> DrawingDocument:
    """Read a DXF drawing.

    Args:
        source: File path or raw DXF bytes
        file_name: Name recorded in the document
        settings: Application settings (defaults if None)

    Returns:
        Drawing with the modelspace's supported entities

    Raises:
        DocumentParseError: If ezdxf cannot read the data
    """
    settings = settings or VectorCamSettings()
    if file_name is None:
        file_name = source.name if isinstance(source, Path) else "drawing.dxf"

    start_time = time.perf_counter()
    doc = _load(source, file_name)
    import_log = ImportLogger(logger, file_name)
    layer_colors = {layer.dxf.name: abs(layer.dxf.color) for layer in doc.layers}
    assembler = DrawingAssembler(settings.geometry, detect_circles=False)

    for entity in doc.modelspace().query(ENTITY_QUERY):
        kind = entity.dxftype()
        tag = entity.dxf.handle or ""
        style = _style(entity, layer_colors)
        import_log.log_element(kind, tag)

        if kind == "LINE":
            start, end = entity.dxf.start, entity.dxf.end
            shape: Line | Circle | Arc | Polyline = assembler.add_line(
                Point(start.x, start.y), Point(end.x, end.y), style, tag
            )
        elif kind == "CIRCLE":
            center = entity.dxf.center
            shape = assembler.add_circle(Point(center.x, center.y), entity.dxf.radius, style, tag)
        elif kind == "ARC":
            center = entity.dxf.center
            shape = assembler.add_arc(
                Point(center.x, center.y),
                entity.dxf.radius,
                entity.dxf.start_angle,
                entity.dxf.end_angle,
                style=style,
                tag=tag,
            )
        else:
            vertices = _vertices(entity)
            if len(vertices) < 2:
                import_log.log_element_skipped(kind, "fewer than two vertices")
                continue
            shape = assembler.add_polyline(vertices, bool(entity.is_closed), style, tag)
        import_log.log_shape(shape.kind)

    import_log.log_complete((time.perf_counter() - start_time) * 1000)
    return assembler.build(file_name)


def _attributes(style: Style) -> dict[str, Any]:
    return {"layer": style.layer or "0"}


def _add_entity(msp: Any, shape: Line | Circle | Arc | Polyline) -> Any:
    attributes = _attributes(shape.style)
    if isinstance(shape, Line):
        return msp.add_line(shape.start.to_tuple(), shape.end.to_tuple(), dxfattribs=attributes)
    if isinstance(shape, Circle):
        return msp.add_circle(shape.center.to_tuple(), shape.radius, dxfattribs=attributes)
    if isinstance(shape, Arc):
        arc = shape.counter_clockwise()
        return msp.add_arc(
            arc.center.to_tuple(),
            arc.radius,
            arc.start_angle_deg,
            arc.end_angle_deg,
            dxfattribs=attributes,
        )
    if isinstance(shape, Polyline):
        return msp.add_lwpolyline(
            [v.to_tuple() for v in shape.vertices], close=shape.closed, dxfattribs=attributes
        )
    raise TypeError(f"Unknown shape type: {type(shape).__name__}")


def write_dxf(document: DrawingDocument, path: Path) -> None:
    """Write a drawing as an R2010 DXF file in millimetres.

    Each layer name used by the drawing becomes a DXF layer. Shapes without
    a layer go on layer ``0``. Clockwise arcs are stored counter-clockwise.

    Args:
        document: Drawing to write
        path: Output file path

    Raises:
        DocumentWriteError: If the file cannot be written
    """
    doc = ezdxf.new(dxfversion="R2010")
    doc.header["$MEASUREMENT"] = 1
    doc.header["$INSUNITS"] = _MILLIMETERS
    for name in document.layer_names():
        if name not in doc.layers:
            doc.layers.new(name)

    msp = doc.modelspace()
    for shape in document.shapes():
        entity = _add_entity(msp, shape)
        if shape.style.stroke is not None:
            stroke = shape.style.stroke
            entity.rgb = (stroke.r, stroke.g, stroke.b)

    try:
        doc.saveas(path)
    except OSError as e:
        raise DocumentWriteError(str(path), str(e)) from e
    logger.info("DXF written", path=str(path), shapes=sum(document.counts().values()))
