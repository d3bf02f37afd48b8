"""Glyph and text layout models.

- GlyphData: Outline and metrics of one glyph, in font units
- PlacedGlyph: A glyph with its pen position in output units
- FontProvider: Interface every font source implements
- GlyphOutline: Decoded outer/hole paths of one positioned glyph
- Bounds: Axis-aligned bounding box
- TextLayout: Positioned outlines of a whole string
"""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Protocol

from typeplate.domain.contour import Contour
from typeplate.domain.path import Path2D


@dataclass(frozen=True)
class GlyphData:
    """Outline data of a single glyph.

    Attributes:
        name: Glyph name (e.g., "A", "space")
        contours: Raw contours in font units
        advance_width: Horizontal advance in font units
        bounds: Ink box (x_min, y_min, x_max, y_max) in font units, None for
            glyphs without outline
    """

    name: str
    contours: tuple[Contour, ...]
    advance_width: float
    bounds: tuple[float, float, float, float] | None = None

    def is_empty(self) -> bool:
        """Check if the glyph has no outline (e.g. space)."""
        return not self.contours or self.bounds is None


@dataclass(frozen=True)
class PlacedGlyph:
    """A glyph and its pen origin, already scaled to output units."""

    glyph: GlyphData
    x: float
    y: float


class FontProvider(Protocol):
    """Source of glyph outlines for a string."""

    @property
    def units_per_em(self) -> int: ...

    def iter_glyphs(self, text: str, size: float) -> Iterator[PlacedGlyph]:
        """Yield the glyphs of ``text`` with pen positions for ``size``.

        Characters the font cannot map are skipped.
        """
        ...


@dataclass(frozen=True)
class GlyphOutline:
    """Decoded paths of one glyph."""

    outers: tuple[Path2D, ...] = ()
    holes: tuple[Path2D, ...] = ()

    def is_empty(self) -> bool:
        return not self.outers and not self.holes

    @property
    def paths(self) -> tuple[Path2D, ...]:
        return self.outers + self.holes


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned bounding box."""

    min_x: float = 0.0
    min_y: float = 0.0
    max_x: float = 0.0
    max_y: float = 0.0

    @property
    def min(self) -> tuple[float, float]:
        return (self.min_x, self.min_y)

    @property
    def max(self) -> tuple[float, float]:
        return (self.max_x, self.max_y)

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def is_empty(self) -> bool:
        """Zero extent means no ink."""
        return self.width == 0 and self.height == 0

    def union(self, other: "Bounds") -> "Bounds":
        return Bounds(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y),
        )


@dataclass(frozen=True)
class TextLayout:
    """Positioned outlines of a (possibly multi-line) string.

    Attributes:
        glyphs: Decoded glyphs in text order
        bounds: Tight bounding box of all ink
        line_widths: Right edge of each line, before alignment
        line_offsets: Horizontal alignment offset applied to each line
    """

    glyphs: tuple[GlyphOutline, ...] = ()
    bounds: Bounds = Bounds()
    line_widths: tuple[float, ...] = ()
    line_offsets: tuple[float, ...] = ()

    def is_empty(self) -> bool:
        return not self.glyphs
