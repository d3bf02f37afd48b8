"""Conversion of raw glyph contours into closed 2D paths.

TrueType outlines are built from on-curve points and quadratic control
points. Two consecutive control points imply an on-curve point halfway
between them. Each contour is classified as filled area or hole from the
winding of its raw points.
"""

import logging

from typeplate.core.geometry import classify_contour
from typeplate.domain import (
    Contour,
    ContourPoint,
    GlyphOutline,
    LineSegment,
    Path2D,
    PathKind,
    QuadraticSegment,
    Segment,
    Vec2,
)
from typeplate.exceptions import MalformedContourError

logger = logging.getLogger(__name__)

MIN_CONTOUR_POINTS = 2


class _PathBuilder:
    """Accumulates segments in output coordinates."""

    def __init__(self, scale: float, offset_x: float, offset_y: float) -> None:
        self._scale = scale
        self._offset_x = offset_x
        self._offset_y = offset_y
        self._start: Vec2 | None = None
        self._current: Vec2 | None = None
        self._segments: list[Segment] = []

    def coord(self, point: ContourPoint) -> Vec2:
        return (
            point.x * self._scale + self._offset_x,
            point.y * self._scale + self._offset_y,
        )

    def move_to(self, point: ContourPoint) -> None:
        self._start = self._current = self.coord(point)

    def line_to(self, point: ContourPoint) -> None:
        end = self.coord(point)
        if end != self._current:
            self._segments.append(LineSegment(end))
            self._current = end

    def quadratic_to(self, control: ContourPoint, point: ContourPoint) -> None:
        end = self.coord(point)
        self._segments.append(QuadraticSegment(self.coord(control), end))
        self._current = end

    def close(self, kind: PathKind) -> Path2D:
        if self._start is None:
            raise RuntimeError("close() called before move_to()")
        if self._current != self._start:
            self._segments.append(LineSegment(self._start))
        return Path2D(start=self._start, segments=tuple(self._segments), kind=kind)


def decode_contour(contour: Contour, scale: float, offset_x: float, offset_y: float) -> Path2D:
    """Decode one raw contour into a closed path.

    Points are mapped to ``(x * scale + offset_x, y * scale + offset_y)``.
    The path starts at the last point if it is on-curve, else at the first
    point if that is on-curve, else halfway between the two.

    Args:
        contour: Raw contour points in font units
        scale: Font units to output units factor
        offset_x: Horizontal offset in output units
        offset_y: Vertical offset in output units

    Returns:
        Closed path tagged OUTER or HOLE

    Raises:
        MalformedContourError: If the contour has fewer than 2 points
    """
    n = len(contour)
    if n < MIN_CONTOUR_POINTS:
        raise MalformedContourError(n)

    builder = _PathBuilder(scale, offset_x, offset_y)

    first = contour[0]
    last = contour[-1]
    if last.on_curve:
        builder.move_to(last)
    elif first.on_curve:
        builder.move_to(first)
    else:
        builder.move_to(last.midpoint(first))

    for i, curr in enumerate(contour):
        nxt = contour[(i + 1) % n]
        if curr.on_curve:
            builder.line_to(curr)
        else:
            # A curve into an off-curve point always ends on the implied
            # midpoint, so the current point is already this curve's start.
            curve_end = nxt if nxt.on_curve else curr.midpoint(nxt)
            builder.quadratic_to(curr, curve_end)

    return builder.close(classify_contour(contour))


def decode_glyph(
    contours: tuple[Contour, ...],
    scale: float,
    offset_x: float,
    offset_y: float,
) -> GlyphOutline:
    """Decode all contours of a glyph.

    Degenerate contours are dropped.

    Returns:
        GlyphOutline with outer and hole paths in contour order
    """
    outers: list[Path2D] = []
    holes: list[Path2D] = []

    for index, contour in enumerate(contours):
        try:
            path = decode_contour(contour, scale, offset_x, offset_y)
        except MalformedContourError as e:
            logger.debug("Dropping contour %d: %s", index, e)
            continue

        if path.is_hole:
            holes.append(path)
        else:
            outers.append(path)

    return GlyphOutline(outers=tuple(outers), holes=tuple(holes))
