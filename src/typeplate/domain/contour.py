"""Raw font contour types.

This module defines the control-point representation read from font data:
- ContourPoint: A control point with its on-curve flag
- Contour: An implicitly closed sequence of control points
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ContourPoint:
    """A control point of a glyph contour.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate in font units
        y: Y coordinate in font units
        on_curve: True if the point lies on the outline, False for a
            quadratic control point
    """

    x: float
    y: float
    on_curve: bool = True

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)

    def midpoint(self, other: "ContourPoint") -> "ContourPoint":
        """Return the on-curve point halfway between this point and another."""
        return ContourPoint((self.x + other.x) / 2, (self.y + other.y) / 2, True)


# The last point connects back to the first.
Contour = tuple[ContourPoint, ...]
