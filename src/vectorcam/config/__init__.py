"""Configuration management for vectorcam.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- GeometryConfig: Sampling density and circle classification tolerances
- ImportConfig: Document import options
- LoggingConfig: Logging settings
- VectorCamSettings: Main application settings
"""

from vectorcam.config.settings import (
    GeometryConfig,
    ImportConfig,
    LoggingConfig,
    VectorCamSettings,
    get_default_settings,
)

__all__ = [
    "GeometryConfig",
    "ImportConfig",
    "LoggingConfig",
    "VectorCamSettings",
    "get_default_settings",
]
