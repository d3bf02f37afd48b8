"""Domain models for typeplate.

This module contains the data flowing through the geometry engine. All models
are immutable (frozen dataclasses) and independent of fontTools.

Key classes:
- ContourPoint: A font control point with its on-curve flag
- Path2D: A closed path of line, quadratic and arc segments
- GlyphData / PlacedGlyph: Glyph outlines as supplied by a font
- GlyphOutline: Decoded outer and hole paths of a glyph
- TextLayout: Positioned outlines of a whole string
- MeshResult: Extruded solids and summary dimensions
"""

from typeplate.domain.contour import Contour, ContourPoint
from typeplate.domain.layout import (
    Bounds,
    FontProvider,
    GlyphData,
    GlyphOutline,
    PlacedGlyph,
    TextLayout,
)
from typeplate.domain.mesh import Dimensions, MeshResult, Solid3D
from typeplate.domain.path import (
    ArcSegment,
    LineSegment,
    Path2D,
    PathKind,
    QuadraticSegment,
    Segment,
    Vec2,
)

__all__: list[str] = [
    # Enums
    "PathKind",
    # Contours
    "Contour",
    "ContourPoint",
    # Paths
    "ArcSegment",
    "LineSegment",
    "Path2D",
    "QuadraticSegment",
    "Segment",
    "Vec2",
    # Layout
    "Bounds",
    "FontProvider",
    "GlyphData",
    "GlyphOutline",
    "PlacedGlyph",
    "TextLayout",
    # Mesh
    "Dimensions",
    "MeshResult",
    "Solid3D",
]
