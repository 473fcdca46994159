"""CLI application entry point for vectorcam.

This module provides the main CLI interface using Typer.
"""

import time
from pathlib import Path
from typing import Annotated

import typer

from vectorcam import __version__
from vectorcam.cli.output import (
    console,
    print_attempts,
    print_document_info,
    print_error,
    print_header,
    print_loaded,
    print_step,
    print_success,
)
from vectorcam.config import ImportConfig, LoggingConfig, VectorCamSettings
from vectorcam.core import (
    circles_to_layers,
    flatten,
    join_lines,
    polylines_to_circles,
    rotate,
    trim,
)
from vectorcam.domain import DrawingDocument
from vectorcam.exceptions import UnsupportedFormatError, VectorCamError
from vectorcam.io import Loaded, load_drawing_file, write_document
from vectorcam.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="vectorcam",
    help="Convert SVG and DXF drawings into canonical CAD primitives.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]VectorCam[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_options(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Convert SVG and DXF drawings into canonical CAD primitives."""


def _load(input_file: Path, settings: VectorCamSettings) -> Loaded:
    """Load a drawing or raise when no parser accepts it."""
    outcome = load_drawing_file(input_file, settings)
    if isinstance(outcome, Loaded):
        return outcome
    print_attempts([(a.format, a.reason) for a in outcome.attempts])
    raise UnsupportedFormatError(input_file.name, outcome.formats)


def _check_input(input_file: Path) -> None:
    if not input_file.exists():
        print_error(
            f"Input file not found: {input_file}",
            details=f"The file '{input_file}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not input_file.is_file():
        print_error(
            f"Input path is not a file: {input_file}",
            details="Please provide a path to an SVG or DXF drawing.",
        )
        raise typer.Exit(code=1)


@app.command()
def convert(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="Path to input SVG or DXF drawing",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path, .json, .dxf or .svg (default: {name}.json)",
        ),
    ] = None,
    contours: Annotated[
        bool,
        typer.Option(
            "--contours",
            help="Read every element as a polyline",
        ),
    ] = False,
    no_detect_circles: Annotated[
        bool,
        typer.Option(
            "--no-detect-circles",
            help="Keep circular paths as polylines",
        ),
    ] = False,
    to_circles: Annotated[
        bool,
        typer.Option(
            "--polylines-to-circles",
            help="Replace closed polylines that trace circles with circles",
        ),
    ] = False,
    to_layers: Annotated[
        bool,
        typer.Option(
            "--circles-to-layers",
            help="Put circles on layers named after their diameter",
        ),
    ] = False,
    flatten_curves: Annotated[
        bool,
        typer.Option(
            "--flatten",
            help="Chain connected lines and arcs into polylines",
        ),
    ] = False,
    flatten_circles: Annotated[
        bool,
        typer.Option(
            "--flatten-circles",
            help="With --flatten, render circles into polylines too",
        ),
    ] = False,
    join: Annotated[
        bool,
        typer.Option(
            "--join-lines",
            help="Chain connected lines into polylines",
        ),
    ] = False,
    trim_origin: Annotated[
        bool,
        typer.Option(
            "--trim",
            help="Move the drawing so its bounds start at the origin",
        ),
    ] = False,
    rotation: Annotated[
        float,
        typer.Option(
            "--rotate",
            help="Rotate counter-clockwise by this many degrees",
        ),
    ] = 0.0,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
) -> None:
    """Convert a drawing to renderer JSON, DXF or SVG.

    The input format is detected by trying each reader in turn.

    Example:
        vectorcam convert bracket.svg -o bracket.dxf --trim
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    _check_input(input_file)

    output_path = output if output is not None else input_file.with_suffix(".json")
    settings = VectorCamSettings(
        importer=ImportConfig(use_contours=contours, detect_circles=not no_detect_circles),
        logging=LoggingConfig(
            log_file=log_file,
            log_level="DEBUG" if verbose else log_level,
        ),
    )
    configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )

    if not quiet:
        print_header(__version__)

    start_time = time.perf_counter()
    try:
        if not quiet:
            print_step("Loading drawing")
        loaded = _load(input_file, settings)
        document = loaded.document
        if not quiet:
            print_loaded(input_file.name, loaded.format, document)

        document = _apply_operations(
            document,
            settings,
            to_circles=to_circles,
            join=join,
            to_layers=to_layers,
            flatten_curves=flatten_curves,
            flatten_circles=flatten_circles,
            rotation=rotation,
            trim_origin=trim_origin,
            quiet=quiet,
        )

        if not quiet:
            print_step("Writing")
        write_document(document, output_path)
    except VectorCamError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    if not quiet:
        print_success(
            output_path=str(output_path),
            file_size=_format_file_size(output_path),
            total_time_s=time.perf_counter() - start_time,
            counts=document.counts(),
        )


def _apply_operations(
    document: DrawingDocument,
    settings: VectorCamSettings,
    *,
    to_circles: bool = False,
    join: bool = False,
    to_layers: bool = False,
    flatten_curves: bool = False,
    flatten_circles: bool = False,
    rotation: float = 0.0,
    trim_origin: bool = False,
    quiet: bool = True,
) -> DrawingDocument:
    """Run the requested editing operations in a fixed order.

    Lines are joined before circles are detected so that circles drawn as
    runs of lines are found.
    """
    steps = [
        (join, "Joining lines", join_lines),
        (to_circles, "Detecting circles", lambda d: polylines_to_circles(d, settings.geometry)),
        (to_layers, "Assigning diameter layers", circles_to_layers),
        (
            flatten_curves,
            "Flattening curves",
            lambda d: flatten(d, settings.geometry, convert_circles=flatten_circles),
        ),
        (rotation != 0.0, f"Rotating {rotation:g}°", lambda d: rotate(d, rotation)),
        (trim_origin, "Trimming to origin", trim),
    ]
    for enabled, message, operation in steps:
        if not enabled:
            continue
        if not quiet:
            print_step(message)
        document = operation(document)
    return document


@app.command()
def info(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="Path to input SVG or DXF drawing",
            show_default=False,
        ),
    ],
    contours: Annotated[
        bool,
        typer.Option(
            "--contours",
            help="Read every element as a polyline",
        ),
    ] = False,
) -> None:
    """Show primitive counts, bounds and layers of a drawing."""
    _check_input(input_file)
    settings = VectorCamSettings(importer=ImportConfig(use_contours=contours))
    try:
        loaded = _load(input_file, settings)
    except VectorCamError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    print_document_info(loaded.document, loaded.format)


def _format_file_size(path: Path) -> str:
    """Format file size in human-readable form.

    Args:
        path: Path to file

    Returns:
        Human-readable file size (e.g., "428 KB")
    """
    try:
        size_bytes = path.stat().st_size
    except OSError:
        return "unknown"
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
