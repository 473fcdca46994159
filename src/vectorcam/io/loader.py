"""Format detection by trial.

A drawing's format is not trusted from its file name. Each known parser is
tried in turn and the first one that succeeds wins. The result is a tagged
value so the "nothing could read it" case is an ordinary outcome rather
than an exception.
"""

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import structlog

from vectorcam.config import VectorCamSettings
from vectorcam.domain import DrawingDocument
from vectorcam.exceptions import (
    DocumentParseError,
    NumericParseError,
    UnsupportedFormatError,
)
from vectorcam.io.dxf_codec import read_dxf
from vectorcam.io.svg_reader import read_svg

logger = structlog.get_logger(__name__)

Parser = Callable[[bytes, str, VectorCamSettings], DrawingDocument]


@dataclass(frozen=True, slots=True)
class Loaded:
    """A parser read the drawing."""

    document: DrawingDocument
    format: str


@dataclass(frozen=True, slots=True)
class LoadFailed:
    """A parser rejected the drawing."""

    format: str
    reason: str


@dataclass(frozen=True, slots=True)
class Unsuccessful:
    """No parser could read the drawing."""

    attempts: tuple[LoadFailed, ...]

    @property
    def formats(self) -> list[str]:
        return [attempt.format for attempt in self.attempts]


LoadOutcome = Loaded | Unsuccessful


def _parse_dxf(data: bytes, file_name: str, settings: VectorCamSettings) -> DrawingDocument:
    return read_dxf(data, file_name, settings)


def _parse_svg(data: bytes, file_name: str, settings: VectorCamSettings) -> DrawingDocument:
    return read_svg(data, file_name, settings)


PARSERS: tuple[tuple[str, Parser], ...] = (
    ("dxf", _parse_dxf),
    ("svg", _parse_svg),
)


def _attempt(
    format_name: str,
    parser: Parser,
    data: bytes,
    file_name: str,
    settings: VectorCamSettings,
) -> Loaded | LoadFailed:
    try:
        return Loaded(parser(data, file_name, settings), format_name)
    except (DocumentParseError, NumericParseError) as e:
        logger.debug("Parser rejected drawing", format=format_name, file=file_name, reason=str(e))
        return LoadFailed(format_name, str(e))


def load_drawing(
    data: bytes,
    file_name: str,
    settings: VectorCamSettings | None = None,
    parsers: tuple[tuple[str, Parser], ...] = PARSERS,
) -> LoadOutcome:
    """Read a drawing with the first parser that accepts it.

    Args:
        data: Raw file contents
        file_name: Name recorded in the document
        settings: Application settings (defaults if None)
        parsers: Ordered (format, parser) pairs to try

    Returns:
        Loaded with the document and its format, or Unsuccessful listing
        every rejection
    """
    settings = settings or VectorCamSettings()
    failures: list[LoadFailed] = []
    for format_name, parser in parsers:
        result = _attempt(format_name, parser, data, file_name, settings)
        if isinstance(result, Loaded):
            logger.info("Drawing loaded", format=format_name, file=file_name)
            return result
        failures.append(result)

    logger.warning("Conversion unsuccessful", file=file_name, tried=[f.format for f in failures])
    return Unsuccessful(tuple(failures))


def load_drawing_file(path: Path, settings: VectorCamSettings | None = None) -> LoadOutcome:
    """Read a drawing file with the first parser that accepts it.

    Raises:
        DocumentParseError: If the file cannot be read
    """
    try:
        data = path.read_bytes()
    except OSError as e:
        raise DocumentParseError(path.name, str(e)) from e
    return load_drawing(data, path.name, settings)


def require_document(outcome: LoadOutcome, file_name: str) -> DrawingDocument:
    """Unwrap a load outcome for callers that need a document.

    Raises:
        UnsupportedFormatError: If no parser could read the drawing
    """
    if isinstance(outcome, Loaded):
        return outcome.document
    raise UnsupportedFormatError(file_name, outcome.formats)
