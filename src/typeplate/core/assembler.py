"""Assembly of text and support solids.

The assembler extrudes the laid-out glyphs and the support outline and
combines them according to the requested MeshTopology:

- TEXT_ONLY: the text solid alone
- TEXT_WITH_SUPPORT: text standing on a plate
- VERTICAL_TEXT_WITH_SUPPORT: text rotated upright on a plate
- NEGATIVE_TEXT: a plate with the letters punched out, the letter counters
  as loose plugs, and an optional backing slab underneath
"""

import logging
import math

import numpy as np
import trimesh
from shapely.geometry.base import BaseGeometry

from typeplate.config.settings import DEFAULT_EXTRUDE_DEPTH, GeometryConfig, MeshParams, MeshTopology
from typeplate.core.extrude import empty_solid, extrude, glyph_fill, merge_solids, union_paths
from typeplate.core.geometry import fix_valid, path_to_polygon
from typeplate.core.support import SupportShape, build_rounded_rect, clamp_radius
from typeplate.domain import Dimensions, MeshResult, Solid3D, TextLayout
from typeplate.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

_NUMERIC_PARAMS = (
    "size",
    "extrude_depth",
    "spacing",
    "line_spacing",
    "support_depth",
    "support_corner_radius",
)


def _check_params(params: MeshParams) -> None:
    for name in _NUMERIC_PARAMS:
        value = getattr(params, name)
        if not math.isfinite(value):
            raise ConfigurationError(name, f"must be finite, got {value}")
    for side, value in params.support_padding.model_dump().items():
        if not math.isfinite(value):
            raise ConfigurationError(f"support_padding.{side}", f"must be finite, got {value}")


class MeshAssembler:
    """Turns a TextLayout into solids for one of the mesh topologies.

    The assembler holds only immutable configuration; every call builds fresh
    geometry.

    Example:
        assembler = MeshAssembler()
        result = assembler.assemble(layout, MeshParams(topology=MeshTopology.TEXT_ONLY))
        print(result.dimensions.text_width)
    """

    def __init__(self, geometry: GeometryConfig | None = None) -> None:
        """Initialize the assembler.

        Args:
            geometry: Curve flattening tolerances (defaults if None)
        """
        self.geometry = geometry or GeometryConfig()

    def assemble(self, layout: TextLayout, params: MeshParams) -> MeshResult:
        """Extrude and combine text and support.

        Args:
            layout: Positioned glyph outlines
            params: Mesh parameters

        Returns:
            MeshResult with the solids of the selected topology

        Raises:
            ConfigurationError: If a parameter is NaN/infinite or the
                negative-text depth is not positive
        """
        _check_params(params)

        topology = params.topology
        text_depth = params.extrude_depth if params.extrude_depth >= 0 else DEFAULT_EXTRUDE_DEPTH
        support_depth = params.support_depth
        padding = params.support_padding
        bounds = layout.bounds

        width = bounds.width + padding.left + padding.right
        # Upright text stands on its extrusion depth instead of its 2D height.
        height_source = text_depth if topology is MeshTopology.VERTICAL_TEXT_WITH_SUPPORT else bounds.height
        height = height_source + padding.top + padding.bottom

        border_radius = clamp_radius(width, height, params.support_corner_radius)

        move_x = -bounds.min_x + padding.left
        move_y = -bounds.min_y + padding.bottom

        text_solid: Solid3D | None = None
        support_solid: Solid3D | None = None

        if topology is MeshTopology.NEGATIVE_TEXT:
            support = build_rounded_rect(width, height, params.support_corner_radius)
            support_solid = self._negative_support(
                layout, support, text_depth, support_depth, move_x, move_y
            )
        else:
            text_solid = self.text_solid(layout, text_depth)

            if topology.has_support:
                support = build_rounded_rect(width, height, params.support_corner_radius)
                support_solid = extrude(self._support_area(support), support_depth)

            # Text sits inside the padded area on top of the plate, even
            # when no plate is built.
            offset_y = move_y
            if topology is MeshTopology.VERTICAL_TEXT_WITH_SUPPORT:
                text_solid = _stand_upright(text_solid)
                offset_y += text_depth

            if not text_solid.is_empty:
                text_solid.apply_translation((move_x, offset_y, support_depth))

        logger.debug(
            "Assembled %s: %d glyphs, support %.3f x %.3f",
            topology.value,
            len(layout.glyphs),
            width,
            height,
        )

        return MeshResult(
            topology=topology,
            dimensions=Dimensions(
                width=width,
                height=height,
                border_radius=border_radius,
                text_width=bounds.width,
                text_height=bounds.height,
                text_depth=text_depth,
            ),
            text_solid=text_solid,
            support_solid=support_solid,
        )

    def text_solid(self, layout: TextLayout, depth: float) -> Solid3D:
        """Extrude every glyph, holes subtracted from their outer paths."""
        tolerance = self.geometry.curve_tolerance
        min_area = self.geometry.min_polygon_area
        return merge_solids(
            extrude(glyph_fill(glyph, tolerance, min_area), depth) for glyph in layout.glyphs
        )

    def _support_area(self, support: SupportShape) -> BaseGeometry:
        return path_to_polygon(
            support.path, self.geometry.curve_tolerance, self.geometry.min_polygon_area
        )

    def _negative_support(
        self,
        layout: TextLayout,
        support: SupportShape,
        text_depth: float,
        support_depth: float,
        move_x: float,
        move_y: float,
    ) -> Solid3D:
        """Build the punched plate, letter plugs and backing slab as one solid."""
        # The plate must be at least as thick as the text it is cut from.
        total_depth = max(support_depth, text_depth)
        if total_depth <= 0:
            raise ConfigurationError(
                "support_depth",
                f"negative text needs a positive thickness, got {total_depth}",
            )

        tolerance = self.geometry.curve_tolerance
        min_area = self.geometry.min_polygon_area
        support_area = self._support_area(support)
        slab_depth = total_depth - text_depth

        slab = extrude(support_area, slab_depth) if slab_depth > 0 else empty_solid()

        cavities = union_paths(
            (path.translated(move_x, move_y) for glyph in layout.glyphs for path in glyph.outers),
            tolerance,
            min_area,
        )
        plate_area = support_area if cavities.is_empty else fix_valid(support_area.difference(cavities))
        plate = extrude(plate_area, text_depth)

        plugs = extrude(
            union_paths(
                (path.translated(move_x, move_y) for glyph in layout.glyphs for path in glyph.holes),
                tolerance,
                min_area,
            ),
            text_depth,
        )

        if slab_depth > 0:
            for solid in (plate, plugs):
                if not solid.is_empty:
                    solid.apply_translation((0.0, 0.0, slab_depth))

        return merge_solids([plate, plugs, slab])


def _stand_upright(solid: Solid3D) -> Solid3D:
    """Rotate a solid +90 degrees about the X axis (+Z extrusion becomes -Y)."""
    if solid.is_empty:
        return solid
    rotation = trimesh.transformations.rotation_matrix(np.pi / 2, [1.0, 0.0, 0.0])
    return solid.apply_transform(rotation)


def assemble(layout: TextLayout, params: MeshParams, geometry: GeometryConfig | None = None) -> MeshResult:
    """Assemble solids with a one-off MeshAssembler."""
    return MeshAssembler(geometry).assemble(layout, params)
