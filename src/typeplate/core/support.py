"""Rounded-rectangle support outline."""

import logging
import math
from dataclasses import dataclass

from typeplate.domain import ArcSegment, LineSegment, Path2D, PathKind, Segment
from typeplate.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SupportShape:
    """Outline of the backing plate, from (0, 0) to (width, height)."""

    path: Path2D
    width: float
    height: float
    radius: float


def clamp_radius(width: float, height: float, radius: float) -> float:
    """Clamp a corner radius to [0, min(width, height) / 2]."""
    max_radius = min(width / 2, height / 2)
    return max(0.0, min(radius, max_radius))


def build_rounded_rect(width: float, height: float, radius: float) -> SupportShape:
    """Build a rounded rectangle with its lower-left corner at the origin.

    The outline runs counter-clockwise from ``(radius, 0)``: bottom edge,
    lower-right arc, right edge, upper-right arc, top edge, upper-left arc,
    left edge, lower-left arc. With a zero radius the arcs are omitted.

    Args:
        width: Rectangle width
        height: Rectangle height
        radius: Requested corner radius

    Returns:
        SupportShape with the clamped radius

    Raises:
        ConfigurationError: If width or height is negative or not finite
    """
    for name, value in (("width", width), ("height", height)):
        if not math.isfinite(value) or value < 0:
            raise ConfigurationError(name, f"must be a finite, non-negative number, got {value}")

    r = clamp_radius(width, height, radius)
    if r != radius:
        logger.debug("Clamped support corner radius from %s to %s", radius, r)

    half_pi = math.pi / 2
    corners = (
        # edge end point, arc center, arc start angle
        ((width - r, 0.0), (width - r, r), -half_pi),
        ((width, height - r), (width - r, height - r), 0.0),
        ((r, height), (r, height - r), half_pi),
        ((0.0, r), (r, r), math.pi),
    )

    segments: list[Segment] = []
    for edge_end, center, start_angle in corners:
        segments.append(LineSegment(edge_end))
        if r:
            segments.append(ArcSegment(center, r, start_angle, start_angle + half_pi))

    if not r:
        segments.append(LineSegment((0.0, 0.0)))

    path = Path2D(start=(r, 0.0), segments=tuple(segments), kind=PathKind.OUTER)
    return SupportShape(path=path, width=width, height=height, radius=r)
