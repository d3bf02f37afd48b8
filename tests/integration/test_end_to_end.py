"""End-to-end tests: font file to solids for every topology."""

from pathlib import Path

import pytest
import trimesh

from typeplate.config import Align, MeshParams, MeshTopology, SupportPadding, TypeplateSettings
from typeplate.core import MeshGenerator, generate_mesh
from typeplate.io import FontReader

# At size 10 the 1000 UPM test font maps 100 font units to 1 output unit:
# I is a 2 x 7 bar, O a 6 x 7 box with a 3 x 4 counter.
SIZE = 10


@pytest.fixture
def reader(ttf_path: Path):
    with FontReader(ttf_path) as font:
        yield font


class TestEndToEnd:
    """Full pipeline against the generated test font."""

    def test_text_only_volume(self, reader: FontReader) -> None:
        """Test glyph areas minus counters times depth."""
        params = MeshParams(topology=MeshTopology.TEXT_ONLY, size=SIZE, extrude_depth=5)
        result = generate_mesh(reader, "IO", params)

        solid = result.text_solid
        assert solid.is_watertight
        assert solid.volume == pytest.approx((14 + 42 - 12) * 5)

    def test_text_with_support_layout(self, reader: FontReader) -> None:
        """Test the plate wraps the text ink box plus padding."""
        params = MeshParams(
            size=SIZE,
            spacing=0,
            extrude_depth=5,
            support_depth=2,
            support_padding=SupportPadding.uniform(1),
        )
        result = generate_mesh(reader, "I O", params)
        dims = result.dimensions

        # I at 0, space advances 3 + 2.5, O spans 5.5 to 11.5
        assert dims.text_width == pytest.approx(11.5)
        assert dims.text_height == pytest.approx(7)
        assert dims.width == pytest.approx(13.5)
        assert dims.height == pytest.approx(9)
        assert result.support_solid.bounds[1, 2] == pytest.approx(2)
        assert result.text_solid.bounds.ravel().tolist() == pytest.approx([1, 1, 2, 12.5, 8, 7])

    def test_multiline_centered(self, reader: FontReader) -> None:
        """Test a centered short line sits in the middle of the block."""
        params = MeshParams(
            topology=MeshTopology.TEXT_ONLY,
            size=SIZE,
            spacing=0,
            line_spacing=1,
            align=Align.CENTER,
        )
        generator = MeshGenerator(TypeplateSettings())
        layout = generator.layout(reader, "I\nOO", params)

        # Line widths: 2 and 7 + 6 = 13
        assert layout.line_widths == pytest.approx((2, 13))
        assert layout.line_offsets == pytest.approx((5.5, 0))
        assert layout.bounds.min_y == pytest.approx(-11)
        assert layout.bounds.max_y == pytest.approx(7)

    def test_negative_text_volume(self, reader: FontReader) -> None:
        """Test slab, punched plate and plug volumes add up."""
        params = MeshParams(
            topology=MeshTopology.NEGATIVE_TEXT,
            size=SIZE,
            extrude_depth=5,
            support_depth=10,
            support_corner_radius=0,
            support_padding=SupportPadding.uniform(10),
        )
        result = generate_mesh(reader, "O", params)

        plate_area = 26 * 27
        expected = plate_area * 5 + (plate_area - 42) * 5 + 12 * 5
        assert result.text_solid is None
        assert result.support_solid.volume == pytest.approx(expected)
        assert result.support_solid.bounds[1, 2] == pytest.approx(10)

    def test_vertical_text(self, reader: FontReader) -> None:
        """Test upright text rises above the plate by its ink height."""
        params = MeshParams(
            topology=MeshTopology.VERTICAL_TEXT_WITH_SUPPORT,
            size=SIZE,
            extrude_depth=3,
            support_depth=1,
            support_padding=SupportPadding.uniform(2),
        )
        result = generate_mesh(reader, "I", params)

        assert result.dimensions.height == pytest.approx(3 + 4)
        z_min, z_max = result.text_solid.bounds[:, 2]
        assert z_min == pytest.approx(1)
        assert z_max == pytest.approx(1 + 7)

    def test_export_round_trip(self, reader: FontReader, tmp_path: Path) -> None:
        """Test the combined mesh survives an STL export."""
        result = generate_mesh(reader, "IO", MeshParams(size=SIZE))
        output = tmp_path / "plate.stl"
        result.combined().export(str(output))

        loaded = trimesh.load(str(output))
        assert len(loaded.faces) == sum(len(s.faces) for s in result.solids())

    def test_unsupported_text_gives_support_only(self, reader: FontReader) -> None:
        """Test text the font cannot map still yields a plate."""
        result = generate_mesh(reader, "xyz", MeshParams(size=SIZE))
        assert result.text_solid.is_empty
        assert result.dimensions.text_width == 0
        assert result.dimensions.width == 20
