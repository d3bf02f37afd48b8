"""Configuration management for typeplate.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- MeshParams: Per-call mesh generation parameters
- GeometryConfig: Curve flattening tolerances
- ProcessingConfig: Glyph decoding settings
- LoggingConfig: Logging settings
- TypeplateSettings: Main application settings
"""

from typeplate.config.settings import (
    Align,
    GeometryConfig,
    LoggingConfig,
    MeshParams,
    MeshTopology,
    ProcessingConfig,
    SupportPadding,
    TypeplateSettings,
    get_default_settings,
)

__all__ = [
    "Align",
    "GeometryConfig",
    "LoggingConfig",
    "MeshParams",
    "MeshTopology",
    "ProcessingConfig",
    "SupportPadding",
    "TypeplateSettings",
    "get_default_settings",
]
