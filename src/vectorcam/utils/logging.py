"""Logging utilities for vectorcam."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog


@dataclass
class ImportStats:
    """Statistics from an import run."""

    elements_read: int = 0
    elements_skipped: int = 0
    tokens_recovered: int = 0
    shapes_by_kind: dict[str, int] = field(default_factory=dict)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def shape_count(self) -> int:
        """Total number of shapes emitted."""
        return sum(self.shapes_by_kind.values())

    @property
    def duration_seconds(self) -> float:
        """Calculate import duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("vectorcam")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class ImportLogger:
    """Logger for tracking import progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger, file_name: str) -> None:
        self._logger = logger.bind(file=file_name)
        self._stats = ImportStats()

    def log_element(self, tag: str, element_id: str | None) -> None:
        """Log an element being converted."""
        self._logger.debug("Converting element", element=tag, id=element_id)
        self._stats.elements_read += 1

    def log_element_skipped(self, tag: str, reason: str) -> None:
        """Log an element that produced no shapes."""
        self._logger.debug("Element skipped", element=tag, reason=reason)
        self._stats.elements_skipped += 1

    def log_shape(self, kind: str) -> None:
        """Count an emitted shape."""
        self._stats.shapes_by_kind[kind] = self._stats.shapes_by_kind.get(kind, 0) + 1

    def log_tokens_recovered(self, count: int) -> None:
        """Record characters skipped by the path tokenizer."""
        if count:
            self._logger.debug("Path characters skipped", count=count)
            self._stats.tokens_recovered += count

    def log_resolution(self, resolution: float, width_mm: float, height_mm: float) -> None:
        """Log the import resolution derived from the document."""
        self._logger.debug(
            "Import resolution",
            resolution=round(resolution, 6),
            width_mm=round(width_mm, 3),
            height_mm=round(height_mm, 3),
        )

    def log_complete(self, duration_ms: float) -> None:
        """Log the end of an import."""
        self._logger.info(
            "Import complete",
            shapes=self._stats.shape_count,
            skipped=self._stats.elements_skipped,
            duration_ms=round(duration_ms, 2),
        )

    @property
    def stats(self) -> ImportStats:
        """Get current import statistics."""
        return self._stats
