"""Font reader for loading TTF/OTF fonts.

This module provides the FontReader class for loading font files and
supplying glyph outlines to the layout engine.
"""

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from fontTools.pens.boundsPen import BoundsPen
from fontTools.pens.cu2quPen import Cu2QuPen
from fontTools.pens.recordingPen import RecordingPen
from fontTools.ttLib import TTFont, TTLibError
from fontTools.ttLib.tables._g_l_y_f import flagOnCurve

from typeplate.domain import Contour, ContourPoint, GlyphData, PlacedGlyph
from typeplate.exceptions import FontFormatError, FontLoadError, GlyphNotFoundError

logger = logging.getLogger(__name__)


class FontReader:
    """Loads TTF/OTF fonts and supplies glyph outlines.

    TrueType contours are read straight from the ``glyf`` table with their
    on-curve flags. CFF outlines are converted to quadratic curves and reversed,
    so every contour follows the TrueType winding convention.

    Example:
        with FontReader(Path("font.ttf")) as reader:
            for placed in reader.iter_glyphs("Hi", size=20):
                print(placed.glyph.name, placed.x)
    """

    def __init__(self, font_path: Path, cu2qu_max_err: float = 1.0) -> None:
        """Initialize the font reader.

        Args:
            font_path: Path to the TTF or OTF font file
            cu2qu_max_err: Maximum error, in font units, when converting cubic
                outlines to quadratic ones
        """
        self._font_path = font_path
        self._cu2qu_max_err = cu2qu_max_err
        self._font: TTFont | None = None
        self._cmap: dict[int, str] = {}
        self._glyph_cache: dict[str, GlyphData] = {}

    def load(self) -> None:
        """Load the font file.

        Raises:
            FileNotFoundError: If font file does not exist
            FontLoadError: If the file cannot be parsed
            FontFormatError: If the font has no outline table
        """
        if not self._font_path.exists():
            raise FileNotFoundError(f"Font file not found: {self._font_path}")

        try:
            font = TTFont(str(self._font_path))
        except (TTLibError, OSError) as e:
            raise FontLoadError(str(self._font_path), str(e)) from e

        if not any(tag in font for tag in ("glyf", "CFF ", "CFF2")):
            font.close()
            raise FontFormatError(str(self._font_path), "no glyf or CFF outline table")

        self._font = font
        self._cmap = font.getBestCmap() or {}
        self._glyph_cache.clear()

    def _require_font(self) -> TTFont:
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return self._font

    @property
    def format(self) -> str:
        """Return font format.

        Returns:
            'TrueType' for TTF fonts, 'OpenType' for OTF fonts

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        font = self._require_font()
        if "CFF " in font or "CFF2" in font:
            return "OpenType"
        return "TrueType"

    @property
    def units_per_em(self) -> int:
        """Return font's units per em.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return self._require_font()["head"].unitsPerEm  # type: ignore[attr-defined]

    @property
    def glyph_count(self) -> int:
        """Return total number of glyphs in the font.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return self._require_font()["maxp"].numGlyphs

    @property
    def family_name(self) -> str:
        """Return the font family name, or the file stem if unnamed."""
        name_table = self._require_font().get("name")
        if name_table is not None:
            family = name_table.getBestFamilyName()
            if family:
                return str(family)
        return self._font_path.stem

    def get_glyph(self, name: str) -> GlyphData | None:
        """Get a specific glyph by name.

        Args:
            name: Name of the glyph to retrieve

        Returns:
            GlyphData, or None if the font has no such glyph

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        font = self._require_font()

        cached = self._glyph_cache.get(name)
        if cached is not None:
            return cached

        glyph_set = font.getGlyphSet()
        if name not in glyph_set:
            return None

        if "glyf" in font:
            contours = self._glyf_contours(name)
        else:
            contours = self._cff_contours(name)

        bounds_pen = BoundsPen(glyph_set)
        glyph_set[name].draw(bounds_pen)

        advance_width, _ = font["hmtx"][name]
        glyph = GlyphData(
            name=name,
            contours=contours,
            advance_width=float(advance_width),
            bounds=bounds_pen.bounds,
        )
        self._glyph_cache[name] = glyph
        return glyph

    def glyph_for_char(self, char: str) -> GlyphData:
        """Get the glyph mapped to a character.

        Raises:
            GlyphNotFoundError: If the character is not in the font's cmap
        """
        self._require_font()
        name = self._cmap.get(ord(char))
        glyph = self.get_glyph(name) if name is not None else None
        if glyph is None:
            raise GlyphNotFoundError(char)
        return glyph

    def iter_glyphs(self, text: str, size: float) -> Iterator[PlacedGlyph]:
        """Yield the glyphs of a string with their pen positions.

        The pen advances by each glyph's advance width scaled to ``size``.
        Kerning is not applied. Characters missing from the font are skipped.

        Args:
            text: A single line of text
            size: Em size in output units

        Yields:
            PlacedGlyph for each mapped character

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        scale = size / self.units_per_em
        x = 0.0

        for char in text:
            try:
                glyph = self.glyph_for_char(char)
            except GlyphNotFoundError as e:
                logger.debug("Skipping character: %s", e)
                continue

            yield PlacedGlyph(glyph=glyph, x=x, y=0.0)
            x += glyph.advance_width * scale

    def _glyf_contours(self, name: str) -> tuple[Contour, ...]:
        """Read raw contours and on-curve flags from the glyf table."""
        glyf_table = self._require_font()["glyf"]
        coordinates, end_points, flags = glyf_table[name].getCoordinates(glyf_table)

        contours: list[Contour] = []
        start = 0
        for end in end_points:
            contours.append(
                tuple(
                    ContourPoint(
                        float(coordinates[i][0]),
                        float(coordinates[i][1]),
                        bool(flags[i] & flagOnCurve),
                    )
                    for i in range(start, end + 1)
                )
            )
            start = end + 1
        return tuple(contours)

    def _cff_contours(self, name: str) -> tuple[Contour, ...]:
        """Convert CFF outlines to quadratic contours in TrueType direction."""
        glyph_set = self._require_font().getGlyphSet()
        recording = RecordingPen()
        glyph_set[name].draw(
            Cu2QuPen(recording, self._cu2qu_max_err, reverse_direction=True)
        )
        return recording_to_contours(recording.value)

    def close(self) -> None:
        """Close the font file and free resources."""
        if self._font is not None:
            self._font.close()
            self._font = None
        self._cmap = {}
        self._glyph_cache.clear()

    def __enter__(self) -> "FontReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()


def recording_to_contours(recording: list[tuple[str, tuple[Any, ...]]]) -> tuple[Contour, ...]:
    """Convert a RecordingPen recording of quadratic outlines to raw contours.

    The RecordingPen records drawing commands like:
    - ('moveTo', ((x, y),))
    - ('lineTo', ((x, y),))
    - ('qCurveTo', ((x1, y1), ..., (xn, yn)))  # last point on-curve
    - ('qCurveTo', ((x1, y1), ..., None))  # contour without on-curve points
    - ('closePath', ())

    Args:
        recording: List of drawing commands from RecordingPen

    Returns:
        Contours with on-curve flags
    """
    contours: list[Contour] = []
    current: list[ContourPoint] = []

    def finish() -> None:
        # Pens repeat the start point when the final curve closes the contour.
        if len(current) > 1 and current[-1] == current[0]:
            current.pop()
        if current:
            contours.append(tuple(current))
        current.clear()

    for command, args in recording:
        if command == "moveTo":
            finish()
            x, y = args[0]
            current.append(ContourPoint(x, y, True))

        elif command == "lineTo":
            x, y = args[0]
            current.append(ContourPoint(x, y, True))

        elif command == "qCurveTo":
            *controls, last = args
            for x, y in controls:
                current.append(ContourPoint(x, y, False))
            if last is not None:
                current.append(ContourPoint(last[0], last[1], True))

        elif command == "curveTo":
            raise ValueError("Cubic segment left in a quadratic recording")

        elif command in ("closePath", "endPath"):
            finish()

    finish()
    return tuple(contours)
