"""Utility functions for typeplate.

This module provides utility functions including:

- Logging setup and configuration
- Generation statistics tracking
"""

from typeplate.utils.logging import (
    GenerationLogger,
    GenerationStats,
    configure_logging,
)

__all__ = [
    "GenerationLogger",
    "GenerationStats",
    "configure_logging",
]
