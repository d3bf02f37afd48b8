"""Mesh generation results."""

from dataclasses import asdict, dataclass

import trimesh

from typeplate.config.settings import MeshTopology

# Extruded, merged surface mesh. Empty meshes are valid solids with no faces.
Solid3D = trimesh.Trimesh


@dataclass(frozen=True)
class Dimensions:
    """Summary dimensions of an assembly.

    Attributes:
        width: Support width (text width plus left/right padding)
        height: Support height as built
        border_radius: Support corner radius after clamping
        text_width: Width of the text ink box
        text_height: Height of the text ink box
        text_depth: Extrusion depth of the text
    """

    width: float
    height: float
    border_radius: float
    text_width: float
    text_height: float
    text_depth: float

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class MeshResult:
    """Solids and dimensions produced for one call.

    ``text_solid`` is None for NEGATIVE_TEXT; ``support_solid`` is None for
    TEXT_ONLY.
    """

    topology: MeshTopology
    dimensions: Dimensions
    text_solid: Solid3D | None = None
    support_solid: Solid3D | None = None

    def solids(self) -> list[Solid3D]:
        """Return the solids that are present, text first."""
        return [s for s in (self.text_solid, self.support_solid) if s is not None]

    def combined(self) -> Solid3D:
        """Concatenate all solids into one mesh, e.g. for export."""
        meshes = [s for s in self.solids() if not s.is_empty]
        if not meshes:
            return trimesh.Trimesh()
        return trimesh.util.concatenate(meshes)
