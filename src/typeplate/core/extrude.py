"""Extrusion of 2D outlines into closed solids.

Paths are flattened into shapely polygons, combined with boolean operations
in 2D, then extruded along +Z with trimesh.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable

import trimesh
from shapely.geometry import Polygon
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union

from typeplate.core.geometry import as_polygons, fix_valid, path_to_polygon
from typeplate.domain import GlyphOutline, Path2D, Solid3D
from typeplate.exceptions import ExtrusionError

logger = logging.getLogger(__name__)


def empty_solid() -> Solid3D:
    """Return a solid without vertices or faces."""
    return trimesh.Trimesh()


def union_paths(paths: Iterable[Path2D], tolerance: float, min_area: float = 0.0) -> BaseGeometry:
    """Union the areas enclosed by several paths, ignoring their kind."""
    polygons = [path_to_polygon(p, tolerance, min_area) for p in paths]
    polygons = [p for p in polygons if not p.is_empty]
    if not polygons:
        return Polygon()
    return fix_valid(unary_union(polygons))


def glyph_fill(outline: GlyphOutline, tolerance: float, min_area: float = 0.0) -> BaseGeometry:
    """Build the filled area of a glyph.

    Each hole is subtracted from the smallest outer path that contains it, so
    fills nested inside holes (as in a registered sign) are preserved.

    Args:
        outline: Decoded glyph paths
        tolerance: Curve flattening tolerance
        min_area: Rings enclosing less area are ignored

    Returns:
        Polygon or MultiPolygon, empty when the glyph has no outer area
    """
    outers = [path_to_polygon(p, tolerance, min_area) for p in outline.outers]
    outers = [p for p in outers if not p.is_empty]
    if not outers:
        return Polygon()

    holes_by_outer: dict[int, list[BaseGeometry]] = defaultdict(list)
    for path in outline.holes:
        hole = path_to_polygon(path, tolerance, min_area)
        if hole.is_empty:
            continue

        containers = [i for i, outer in enumerate(outers) if outer.contains(hole)]
        if not containers:
            probe = hole.representative_point()
            containers = [i for i, outer in enumerate(outers) if outer.contains(probe)]
        if not containers:
            logger.debug("Hole outside every outer path ignored")
            continue

        parent = min(containers, key=lambda i: outers[i].area)
        holes_by_outer[parent].append(hole)

    parts = []
    for index, outer in enumerate(outers):
        holes = holes_by_outer.get(index)
        parts.append(fix_valid(outer.difference(unary_union(holes))) if holes else outer)

    return fix_valid(unary_union(parts))


def extrude(geom: BaseGeometry, depth: float) -> Solid3D:
    """Extrude a 2D area along +Z from z=0 to z=depth.

    Args:
        geom: Polygon or MultiPolygon
        depth: Extrusion depth

    Returns:
        Closed solid; empty when ``depth <= 0`` or the area is empty

    Raises:
        ExtrusionError: If a polygon cannot be triangulated
    """
    if depth <= 0 or geom.is_empty:
        return empty_solid()

    meshes: list[Solid3D] = []
    for polygon in as_polygons(geom):
        try:
            meshes.append(trimesh.creation.extrude_polygon(polygon, height=depth))
        except ValueError as e:
            raise ExtrusionError(str(e)) from e

    return merge_solids(meshes)


def merge_solids(solids: Iterable[Solid3D | None]) -> Solid3D:
    """Merge solids into one mesh by concatenating their surfaces.

    Vertices and faces are appended as they are; nothing is re-triangulated.
    Empty or missing solids are skipped.
    """
    meshes = [s for s in solids if s is not None and not s.is_empty]
    if not meshes:
        return empty_solid()
    if len(meshes) == 1:
        return meshes[0].copy()
    return trimesh.util.concatenate(meshes)
