"""Shared fixtures: an in-memory font and a small TrueType file built on the fly."""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from typeplate.domain import (
    Bounds,
    ContourPoint,
    GlyphData,
    GlyphOutline,
    LineSegment,
    Path2D,
    PathKind,
    PlacedGlyph,
    TextLayout,
)


def clockwise_rect(x0: float, y0: float, x1: float, y1: float) -> tuple[ContourPoint, ...]:
    """Rectangle wound like a TrueType outer contour."""
    return (
        ContourPoint(x0, y0),
        ContourPoint(x0, y1),
        ContourPoint(x1, y1),
        ContourPoint(x1, y0),
    )


def counter_clockwise_rect(x0: float, y0: float, x1: float, y1: float) -> tuple[ContourPoint, ...]:
    """Rectangle wound like a TrueType hole contour."""
    return (
        ContourPoint(x0, y0),
        ContourPoint(x1, y0),
        ContourPoint(x1, y1),
        ContourPoint(x0, y1),
    )


def rect_path(x0: float, y0: float, x1: float, y1: float, kind: PathKind = PathKind.OUTER) -> Path2D:
    """Closed rectangular path in output coordinates."""
    return Path2D(
        start=(x0, y0),
        segments=(
            LineSegment((x1, y0)),
            LineSegment((x1, y1)),
            LineSegment((x0, y1)),
            LineSegment((x0, y0)),
        ),
        kind=kind,
    )


class FakeFont:
    """FontProvider over a fixed glyph table, 10 units per em.

    With ``size=10`` one font unit maps to one output unit.
    """

    units_per_em = 10

    GLYPHS = {
        # Bar, 2 wide and 7 high
        "I": GlyphData("I", (clockwise_rect(0, 0, 2, 7),), 3, (0, 0, 2, 7)),
        # Box with a 2 x 3 counter
        "O": GlyphData(
            "O",
            (clockwise_rect(0, 0, 6, 7), counter_clockwise_rect(2, 2, 4, 5)),
            7,
            (0, 0, 6, 7),
        ),
        # Two glyphs that fill their full advance of 10
        "A": GlyphData("A", (clockwise_rect(0, 0, 10, 7),), 10, (0, 0, 10, 7)),
        "B": GlyphData("B", (clockwise_rect(0, 0, 10, 7),), 10, (0, 0, 10, 7)),
        " ": GlyphData("space", (), 3, None),
    }

    def iter_glyphs(self, text: str, size: float) -> Iterator[PlacedGlyph]:
        scale = size / self.units_per_em
        x = 0.0
        for char in text:
            glyph = self.GLYPHS.get(char)
            if glyph is None:
                continue
            yield PlacedGlyph(glyph=glyph, x=x, y=0.0)
            x += glyph.advance_width * scale


@pytest.fixture
def fake_font() -> FakeFont:
    """In-memory font with glyphs I, O, A, B and space."""
    return FakeFont()


@pytest.fixture
def block_layout() -> TextLayout:
    """Layout of a single 50 x 20 block with a 10 x 6 counter."""
    return TextLayout(
        glyphs=(
            GlyphOutline(
                outers=(rect_path(0, 0, 50, 20),),
                holes=(rect_path(20, 7, 30, 13, PathKind.HOLE),),
            ),
        ),
        bounds=Bounds(0, 0, 50, 20),
        line_widths=(50.0,),
        line_offsets=(0.0,),
    )


def _draw_box(pen: TTGlyphPen, x0: int, y0: int, x1: int, y1: int, clockwise: bool = True) -> None:
    points = [(x0, y0), (x0, y1), (x1, y1), (x1, y0)]
    if not clockwise:
        points.reverse()
    pen.moveTo(points[0])
    for point in points[1:]:
        pen.lineTo(point)
    pen.closePath()


def build_test_font(path: Path) -> Path:
    """Write a TrueType font with glyphs I, O and space (1000 UPM).

    - I: bar from (0, 0) to (200, 700), advance 300
    - O: box from (0, 0) to (600, 700) with a (150, 150)-(450, 550) counter,
      advance 700
    - space: no outline, advance 250
    """
    fb = FontBuilder(1000, isTTF=True)
    glyph_order = [".notdef", "space", "I", "O"]
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap({ord(" "): "space", ord("I"): "I", ord("O"): "O"})

    notdef = TTGlyphPen(None)
    _draw_box(notdef, 50, 0, 450, 700)

    bar = TTGlyphPen(None)
    _draw_box(bar, 0, 0, 200, 700)

    box = TTGlyphPen(None)
    _draw_box(box, 0, 0, 600, 700)
    _draw_box(box, 150, 150, 450, 550, clockwise=False)

    glyphs = {
        ".notdef": notdef.glyph(),
        "space": TTGlyphPen(None).glyph(),
        "I": bar.glyph(),
        "O": box.glyph(),
    }
    fb.setupGlyf(glyphs)

    advances = {".notdef": 500, "space": 250, "I": 300, "O": 700}
    glyf_table = fb.font["glyf"]
    fb.setupHorizontalMetrics(
        {name: (advances[name], getattr(glyf_table[name], "xMin", 0)) for name in glyph_order}
    )
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": "Typeplate Test", "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=800, usWinAscent=800, usWinDescent=200)
    fb.setupPost()
    fb.save(str(path))
    return path


@pytest.fixture
def ttf_path(tmp_path: Path) -> Path:
    """Path to a freshly built TrueType test font."""
    return build_test_font(tmp_path / "TypeplateTest-Regular.ttf")


@pytest.fixture(autouse=True)
def _drop_log_handlers() -> Iterator[None]:
    """Remove handlers installed by configure_logging after each test."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_typeplate_handler", False):
            root.removeHandler(handler)
            handler.close()
