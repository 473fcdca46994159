"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from vectorcam.domain import DrawingDocument

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]VectorCam[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_loaded(file_name: str, format_name: str, document: DrawingDocument) -> None:
    """Print a one-line summary of a loaded drawing."""
    counts = document.counts()
    line = Text("  ")
    line.append(file_name)
    line.append(f" ({format_name.upper()})")
    console.print(line)
    console.print(f"  {sum(counts.values()):,} primitives {SYM_DOT} {len(document.layer_names())} layers")


def print_document_info(document: DrawingDocument, format_name: str) -> None:
    """Print primitive counts, bounds and layers as a table.

    Args:
        document: Drawing to describe
        format_name: Format the drawing was read from
    """
    table = Table(title=document.file_name, show_header=True, header_style="bold")
    table.add_column("Property")
    table.add_column("Value", justify="right")

    table.add_row("Format", format_name.upper())
    for kind, count in document.counts().items():
        table.add_row(f"{kind.capitalize()}s", f"{count:,}")

    bounds = document.bounds
    table.add_row("Min", f"({bounds.min_x:.3f}, {bounds.min_y:.3f})")
    table.add_row("Max", f"({bounds.max_x:.3f}, {bounds.max_y:.3f})")
    table.add_row("Size", f"{bounds.width:.3f} {SYM_DOT} {bounds.height:.3f} mm")

    layers = document.layer_names()
    table.add_row("Layers", ", ".join(layers) if layers else "-")

    console.print(table)


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_success(
    output_path: str,
    file_size: str,
    total_time_s: float,
    counts: dict[str, int],
) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output file
        file_size: Human-readable file size string
        total_time_s: Total conversion time in seconds
        counts: Primitive counts by kind
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    line = Text("  ")
    line.append(output_path, style="bold")
    line.append(f" ({file_size})")
    console.print(line)

    console.print(
        f"  {counts.get('line', 0)} lines {SYM_DOT} {counts.get('circle', 0)} circles {SYM_DOT} "
        f"{counts.get('arc', 0)} arcs {SYM_DOT} {counts.get('polyline', 0)} polylines"
    )


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")


def print_attempts(attempts: list[tuple[str, str]]) -> None:
    """Print why each parser rejected a drawing.

    Args:
        attempts: (format, reason) pairs
    """
    for format_name, reason in attempts:
        line = Text(f"  {format_name.upper()} {SYM_DOT} ")
        line.append(reason)
        console.print(line)
