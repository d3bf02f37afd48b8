"""Closed 2D paths built from explicit segment variants.

A Path2D starts at a point and is followed by a sequence of segments, each
of which ends where the next one begins:

- LineSegment: straight line to ``end``
- QuadraticSegment: quadratic Bezier through ``control`` to ``end``
- ArcSegment: circular arc around ``center``

Paths are tagged as OUTER (filled area) or HOLE (subtracted area).
"""

import math
from dataclasses import dataclass, replace
from enum import Enum, auto

Vec2 = tuple[float, float]

CLOSURE_TOLERANCE = 1e-9


class PathKind(Enum):
    """Whether a path adds or removes filled area."""

    OUTER = auto()
    HOLE = auto()


@dataclass(frozen=True, slots=True)
class LineSegment:
    """Straight segment from the current point to ``end``."""

    end: Vec2

    def translated(self, dx: float, dy: float) -> "LineSegment":
        return LineSegment((self.end[0] + dx, self.end[1] + dy))


@dataclass(frozen=True, slots=True)
class QuadraticSegment:
    """Quadratic Bezier from the current point through ``control`` to ``end``."""

    control: Vec2
    end: Vec2

    def translated(self, dx: float, dy: float) -> "QuadraticSegment":
        return QuadraticSegment(
            (self.control[0] + dx, self.control[1] + dy),
            (self.end[0] + dx, self.end[1] + dy),
        )


@dataclass(frozen=True, slots=True)
class ArcSegment:
    """Circular arc, counter-clockwise when ``end_angle > start_angle``.

    Angles are in radians. The arc starts at the current point, which must lie
    on the circle at ``start_angle``.
    """

    center: Vec2
    radius: float
    start_angle: float
    end_angle: float

    @property
    def end(self) -> Vec2:
        return (
            self.center[0] + self.radius * math.cos(self.end_angle),
            self.center[1] + self.radius * math.sin(self.end_angle),
        )

    def translated(self, dx: float, dy: float) -> "ArcSegment":
        return replace(self, center=(self.center[0] + dx, self.center[1] + dy))


Segment = LineSegment | QuadraticSegment | ArcSegment


@dataclass(frozen=True, slots=True)
class Path2D:
    """A closed path in output coordinates.

    Attributes:
        start: First point of the path
        segments: Segments in drawing order; the last one ends at ``start``
        kind: OUTER for filled area, HOLE for subtracted area
    """

    start: Vec2
    segments: tuple[Segment, ...]
    kind: PathKind = PathKind.OUTER

    @property
    def end(self) -> Vec2:
        """Point where the last segment ends."""
        if not self.segments:
            return self.start
        return self.segments[-1].end

    @property
    def is_hole(self) -> bool:
        return self.kind is PathKind.HOLE

    def is_closed(self, tolerance: float = CLOSURE_TOLERANCE) -> bool:
        """Check that the path ends where it starts."""
        end = self.end
        return math.hypot(end[0] - self.start[0], end[1] - self.start[1]) <= tolerance

    def translated(self, dx: float, dy: float) -> "Path2D":
        """Return a copy moved by (dx, dy)."""
        return Path2D(
            start=(self.start[0] + dx, self.start[1] + dy),
            segments=tuple(segment.translated(dx, dy) for segment in self.segments),
            kind=self.kind,
        )

    def with_kind(self, kind: PathKind) -> "Path2D":
        """Return a copy tagged with another kind."""
        return replace(self, kind=kind)
