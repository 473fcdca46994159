"""Command-line interface for vectorcam.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Format detection by trial (DXF, then SVG)
- Editing operations applied in a fixed order
- Verbose/quiet output modes
- Detailed error reporting
"""

from vectorcam.cli.app import cli, main

__all__ = ["cli", "main"]
