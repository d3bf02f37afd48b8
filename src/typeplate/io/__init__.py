"""Font I/O layer for typeplate.

This module handles reading font files using fonttools and exposes them
through the FontProvider interface used by the layout engine.

Key classes:
- FontReader: Load fonts and supply positioned glyph outlines
"""

from typeplate.io.reader import FontReader, recording_to_contours

__all__ = [
    "FontReader",
    "recording_to_contours",
]
