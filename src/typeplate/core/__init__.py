"""Core geometry engine for typeplate.

This module contains the algorithms for:

- Outline decoding (quadratic contours to closed paths, hole classification)
- Text layout (measurement, alignment, emission)
- Support outline construction (rounded rectangles)
- Extrusion and assembly of solids

All functions are pure and stateless; MeshGenerator adds logging and
statistics around them.

Key functions:
- decode_contour / decode_glyph: Contours to Path2D
- layout_text: String to TextLayout
- alignment_offsets: Per-line alignment offsets
- build_rounded_rect: Support outline
- extrude / merge_solids: 2D areas to solids
- assemble / generate_mesh: Whole pipeline

Key classes:
- MeshAssembler: Combines text and support per topology
- MeshGenerator: Orchestrator with structured logging
"""

from typeplate.core.assembler import MeshAssembler, assemble
from typeplate.core.decoder import decode_contour, decode_glyph
from typeplate.core.extrude import extrude, glyph_fill, merge_solids, union_paths
from typeplate.core.generator import MeshGenerator, generate_mesh
from typeplate.core.geometry import (
    classify_contour,
    flatten_path,
    path_to_polygon,
    signed_area,
    winding_sum,
)
from typeplate.core.layout import alignment_offsets, layout_text, split_lines
from typeplate.core.support import SupportShape, build_rounded_rect, clamp_radius

__all__ = [
    # Assembly classes
    "MeshAssembler",
    "MeshGenerator",
    # Support classes
    "SupportShape",
    "alignment_offsets",
    "assemble",
    "build_rounded_rect",
    "clamp_radius",
    "classify_contour",
    "decode_contour",
    "decode_glyph",
    "extrude",
    "flatten_path",
    "generate_mesh",
    "glyph_fill",
    "layout_text",
    "merge_solids",
    "path_to_polygon",
    "signed_area",
    "split_lines",
    "union_paths",
    "winding_sum",
]
