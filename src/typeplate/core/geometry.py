"""Geometric operations on contours and paths.

This module provides core mathematical utilities for:
- Winding classification of raw font contours
- Signed area calculation (shoelace formula)
- Path flattening into polygon rings
- Conversion of rings into shapely polygons

All functions are pure and stateless.
"""

import logging

from shapely.geometry import MultiPolygon, Polygon
from shapely.geometry.base import BaseGeometry

from typeplate.core._bezier import flatten_arc as _flatten_arc
from typeplate.core._bezier import flatten_quadratic as _flatten_quadratic
from typeplate.domain import (
    ArcSegment,
    Contour,
    LineSegment,
    Path2D,
    PathKind,
    QuadraticSegment,
    Vec2,
)

logger = logging.getLogger(__name__)


def winding_sum(contour: Contour) -> float:
    """Accumulate the winding sum of a raw contour.

    Computes ``sum((prev.x - curr.x) * (curr.y + prev.y))`` over consecutive
    points, starting with the edge from the last point to the first. The result
    is twice the shoelace area, so it is positive for counter-clockwise
    contours (y axis pointing up).

    Args:
        contour: Raw contour points

    Returns:
        Winding sum in squared font units

    Examples:
        >>> from typeplate.domain import ContourPoint as P
        >>> winding_sum((P(0, 0), P(1, 0), P(1, 1), P(0, 1)))  # CCW square
        2.0
        >>> winding_sum((P(0, 0), P(0, 1), P(1, 1), P(1, 0)))  # CW square
        -2.0
    """
    total = 0.0
    if not contour:
        return total

    prev = contour[-1]
    for curr in contour:
        total += (prev.x - curr.x) * (curr.y + prev.y)
        prev = curr
    return total


def classify_contour(contour: Contour) -> PathKind:
    """Classify a raw contour as filled area or hole.

    In TrueType convention outer contours wind clockwise, so a positive
    winding sum marks a hole.
    """
    return PathKind.HOLE if winding_sum(contour) > 0 else PathKind.OUTER


def signed_area(points: list[Vec2]) -> float:
    """Calculate signed area of a polygon using the shoelace formula.

    The sign of the area indicates winding direction:
    - Positive area: counter-clockwise winding
    - Negative area: clockwise winding

    Args:
        points: Polygon vertices, without repeating the first point

    Returns:
        Signed area in square units. Returns 0.0 for degenerate polygons.
    """
    n = len(points)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += points[i][0] * points[j][1]
        area -= points[j][0] * points[i][1]

    return area / 2.0


def flatten_path(path: Path2D, tolerance: float) -> list[Vec2]:
    """Convert a path into a polygon ring.

    Curves and arcs are subdivided until each chord is within ``tolerance``
    of the true curve. Consecutive duplicate points are removed and the closing
    point is not repeated.

    Args:
        path: Closed path
        tolerance: Maximum distance from the true outline

    Returns:
        Ring vertices in drawing order
    """
    points: list[Vec2] = [path.start]
    current = path.start

    for segment in path.segments:
        if isinstance(segment, LineSegment):
            points.append(segment.end)
        elif isinstance(segment, QuadraticSegment):
            points.extend(_flatten_quadratic(current, segment.control, segment.end, tolerance))
        elif isinstance(segment, ArcSegment):
            points.extend(
                _flatten_arc(
                    segment.center,
                    segment.radius,
                    segment.start_angle,
                    segment.end_angle,
                    tolerance,
                )
            )
        else:
            raise TypeError(f"Unknown segment type: {type(segment).__name__}")
        current = segment.end

    ring: list[Vec2] = []
    for point in points:
        if not ring or point != ring[-1]:
            ring.append(point)
    if len(ring) > 1 and _close(ring[0], ring[-1]):
        ring.pop()
    return ring


def _close(a: Vec2, b: Vec2, eps: float = 1e-9) -> bool:
    return abs(a[0] - b[0]) <= eps and abs(a[1] - b[1]) <= eps


def fix_valid(geom: BaseGeometry) -> BaseGeometry:
    """Repair self-intersections with a zero-width buffer."""
    if geom.is_valid:
        return geom
    return geom.buffer(0)


def as_polygons(geom: BaseGeometry) -> list[Polygon]:
    """Split a geometry into its polygon parts."""
    if geom.is_empty:
        return []
    if isinstance(geom, Polygon):
        return [geom]
    if isinstance(geom, MultiPolygon):
        return list(geom.geoms)
    if hasattr(geom, "geoms"):
        return [g for g in geom.geoms if isinstance(g, Polygon)]
    return []


def path_to_polygon(path: Path2D, tolerance: float, min_area: float = 0.0) -> BaseGeometry:
    """Build a valid shapely geometry from a path.

    Returns an empty Polygon when the ring encloses less than ``min_area``.
    """
    ring = flatten_path(path, tolerance)
    if len(ring) < 3:
        return Polygon()

    polygon = fix_valid(Polygon(ring))
    if polygon.area <= min_area:
        logger.debug("Discarding degenerate ring with %d points", len(ring))
        return Polygon()
    return polygon
