"""Internal curve flattening algorithms.

This is an internal module containing helper functions for flatten_path.
Not intended for public use.
"""

import math

from typeplate.domain import Vec2

MAX_DEPTH = 16


def flatten_quadratic(p0: Vec2, p1: Vec2, p2: Vec2, tolerance: float, depth: int = 0) -> list[Vec2]:
    """Flatten a quadratic Bezier curve using recursive subdivision.

    Args:
        p0: Start point
        p1: Control point
        p2: End point
        tolerance: Maximum distance from true curve
        depth: Current recursion depth

    Returns:
        Points approximating the curve, excluding ``p0``
    """
    # Curve midpoint (at t=0.5)
    curve_mid_x = 0.25 * p0[0] + 0.5 * p1[0] + 0.25 * p2[0]
    curve_mid_y = 0.25 * p0[1] + 0.5 * p1[1] + 0.25 * p2[1]

    # Chord midpoint
    line_mid_x = (p0[0] + p2[0]) / 2
    line_mid_y = (p0[1] + p2[1]) / 2

    distance = math.hypot(curve_mid_x - line_mid_x, curve_mid_y - line_mid_y)

    if distance <= tolerance or depth >= MAX_DEPTH:
        return [p2]

    # Subdivide at t=0.5
    q1 = ((p0[0] + p1[0]) / 2, (p0[1] + p1[1]) / 2)
    mid = (curve_mid_x, curve_mid_y)
    r1 = ((p1[0] + p2[0]) / 2, (p1[1] + p2[1]) / 2)

    left = flatten_quadratic(p0, q1, mid, tolerance, depth + 1)
    right = flatten_quadratic(mid, r1, p2, tolerance, depth + 1)
    return left + right


def flatten_arc(
    center: Vec2,
    radius: float,
    start_angle: float,
    end_angle: float,
    tolerance: float,
) -> list[Vec2]:
    """Flatten a circular arc into chords.

    The number of chords is chosen so that the sagitta of each chord stays
    within ``tolerance``.

    Returns:
        Points along the arc, excluding the start point
    """
    sweep = end_angle - start_angle
    if radius <= 0 or sweep == 0:
        return []

    if tolerance >= radius:
        steps = 1
    else:
        max_step = 2 * math.acos(1 - tolerance / radius)
        steps = max(1, math.ceil(abs(sweep) / max_step))

    points: list[Vec2] = []
    for i in range(1, steps + 1):
        angle = start_angle + sweep * i / steps
        points.append(
            (center[0] + radius * math.cos(angle), center[1] + radius * math.sin(angle))
        )
    return points
