"""Multi-line text layout.

Layout runs in two passes because a line's alignment offset depends on the
widest line, which is only known once every line has been measured:

1. Measurement: walk each line, record glyph positions, ink boxes and the
   line's right edge.
2. Emission: shift each line by its alignment offset and decode the glyph
   outlines, optionally in worker processes.
"""

import logging
import math
from collections.abc import Sequence
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass

from typeplate.config.settings import Align
from typeplate.core.decoder import decode_glyph
from typeplate.domain import Bounds, FontProvider, GlyphData, GlyphOutline, TextLayout
from typeplate.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Placement:
    """A glyph positioned during measurement, before alignment."""

    glyph: GlyphData
    x: float
    y: float


@dataclass
class _LineMeasure:
    placements: list[_Placement]
    width: float = 0.0
    ink: Bounds | None = None


def split_lines(text: str) -> list[str]:
    """Split text into lines, dropping trailing whitespace of each line."""
    return [line.rstrip() for line in text.split("\n")]


def alignment_offsets(line_widths: Sequence[float], align: Align) -> list[float]:
    """Compute the horizontal offset of each line.

    Lines narrower than the widest line are shifted right by the full
    difference (right alignment) or half of it (center alignment).

    Args:
        line_widths: Right edge of each line
        align: Requested alignment

    Returns:
        One offset per line

    Examples:
        >>> alignment_offsets([10.0, 20.0], Align.RIGHT)
        [10.0, 0.0]
        >>> alignment_offsets([10.0, 20.0], Align.CENTER)
        [5.0, 0.0]
    """
    offsets = [0.0] * len(line_widths)
    if align is Align.LEFT or not line_widths:
        return offsets

    max_width = max(line_widths)
    divisor = 2 if align is Align.CENTER else 1
    for index, width in enumerate(line_widths):
        if width < max_width:
            offsets[index] = (max_width - width) / divisor
    return offsets


def _require_finite(**values: float) -> None:
    for name, value in values.items():
        if not math.isfinite(value):
            raise ConfigurationError(name, f"must be finite, got {value}")


def _measure_line(
    font: FontProvider,
    line: str,
    size: float,
    scale: float,
    spacing: float,
    baseline: float,
) -> _LineMeasure:
    measure = _LineMeasure(placements=[])
    dx = 0.0

    for placed in font.iter_glyphs(line, size):
        x = placed.x + dx
        y = placed.y - baseline
        dx += spacing

        measure.placements.append(_Placement(placed.glyph, x, y))

        if placed.glyph.bounds is None:
            measure.width = x
            continue

        x_min, y_min, x_max, y_max = placed.glyph.bounds
        box = Bounds(x + x_min * scale, y + y_min * scale, x + x_max * scale, y + y_max * scale)
        measure.width = box.max_x
        measure.ink = box if measure.ink is None else measure.ink.union(box)

    return measure


def _decode_all(
    jobs: list[tuple],
    max_workers: int,
) -> list[GlyphOutline]:
    """Decode glyph jobs, preserving job order."""
    results: list[GlyphOutline | None] = [None] * len(jobs)

    if max_workers <= 1 or len(jobs) < 2:
        for index, job in enumerate(jobs):
            results[index] = decode_glyph(*job)
    else:
        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            pending = {executor.submit(decode_glyph, *job): index for index, job in enumerate(jobs)}
            for future in as_completed(pending):
                results[pending[future]] = future.result()

    return [outline for outline in results if outline is not None]


def layout_text(
    font: FontProvider,
    text: str,
    size: float,
    spacing: float = 0.1,
    line_spacing: float = 1.0,
    align: Align = Align.LEFT,
    max_workers: int = 1,
) -> TextLayout:
    """Lay out a (possibly multi-line) string as positioned glyph outlines.

    Each glyph advances the pen by the font's advance width plus a fixed
    ``spacing``. Line ``n`` sits ``n * (size + line_spacing)`` below the
    first baseline.

    Args:
        font: Glyph outline provider
        text: Text to lay out, lines separated by newlines
        size: Em size in output units
        spacing: Extra advance after each glyph
        line_spacing: Extra gap between lines
        align: Line alignment
        max_workers: Worker processes for outline decoding (1 = in-process)

    Returns:
        TextLayout with glyphs in text order. Empty or whitespace-only text
        yields no glyphs and zero-extent bounds.

    Raises:
        ConfigurationError: If a numeric argument is NaN or infinite
    """
    _require_finite(size=size, spacing=spacing, line_spacing=line_spacing)

    scale = size / font.units_per_em
    line_advance = size + line_spacing
    lines = split_lines(text)

    measures = [
        _measure_line(font, line, size, scale, spacing, index * line_advance)
        for index, line in enumerate(lines)
    ]
    line_widths = [m.width for m in measures]
    offsets = alignment_offsets(line_widths, align)

    bounds: Bounds | None = None
    jobs: list[tuple] = []
    for measure, offset in zip(measures, offsets):
        if measure.ink is not None:
            shifted = Bounds(
                measure.ink.min_x + offset,
                measure.ink.min_y,
                measure.ink.max_x + offset,
                measure.ink.max_y,
            )
            bounds = shifted if bounds is None else bounds.union(shifted)

        for placement in measure.placements:
            if placement.glyph.is_empty():
                continue
            jobs.append((placement.glyph.contours, scale, placement.x + offset, placement.y))

    glyphs = tuple(o for o in _decode_all(jobs, max_workers) if not o.is_empty())

    logger.debug(
        "Laid out %d glyphs on %d lines (align=%s)", len(glyphs), len(lines), align.value
    )

    return TextLayout(
        glyphs=glyphs,
        bounds=bounds if bounds is not None else Bounds(),
        line_widths=tuple(line_widths),
        line_offsets=tuple(offsets),
    )
