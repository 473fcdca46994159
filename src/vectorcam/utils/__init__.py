"""Utility functions for vectorcam.

This module provides utility functions including:

- Logging setup and configuration
- Import statistics tracking
"""

from vectorcam.utils.logging import (
    ImportLogger,
    ImportStats,
    configure_logging,
)

__all__ = [
    "ImportLogger",
    "ImportStats",
    "configure_logging",
]
