"""Unit tests for the Font I/O layer.

Tests for FontReader and the pen recording converter.
"""

from pathlib import Path
from unittest.mock import MagicMock, Mock, patch

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.t2CharStringPen import T2CharStringPen

from typeplate.core.geometry import classify_contour
from typeplate.domain import ContourPoint, PathKind
from typeplate.exceptions import FontFormatError, FontLoadError, GlyphNotFoundError
from typeplate.io.reader import FontReader, recording_to_contours


def _build_cff_font(path: Path) -> Path:
    """Write a CFF-flavoured OpenType font with one bar glyph."""
    fb = FontBuilder(1000, isTTF=False)
    glyph_order = [".notdef", "I"]
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap({ord("I"): "I"})

    char_strings = {}
    for name, (width, x1) in {".notdef": (500, 400), "I": (300, 200)}.items():
        pen = T2CharStringPen(width, None)
        # CFF outers run counter-clockwise
        pen.moveTo((0, 0))
        pen.lineTo((x1, 0))
        pen.lineTo((x1, 700))
        pen.lineTo((0, 700))
        pen.closePath()
        char_strings[name] = pen.getCharString()

    fb.setupCFF("TypeplateCFF", {"FullName": "TypeplateCFF"}, char_strings, {})
    lsb = {name: cs.calcBounds(None)[0] for name, cs in char_strings.items()}
    fb.setupHorizontalMetrics({".notdef": (500, lsb[".notdef"]), "I": (300, lsb["I"])})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": "Typeplate CFF", "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=800, usWinAscent=800, usWinDescent=200)
    fb.setupPost()
    fb.save(str(path))
    return path


class TestFontReader:
    """Tests for FontReader class."""

    def test_init(self) -> None:
        """Test FontReader initialization."""
        path = Path("test.ttf")
        reader = FontReader(path)
        assert reader._font_path == path
        assert reader._font is None

    def test_load_nonexistent_file(self) -> None:
        """Test loading a nonexistent file raises FileNotFoundError."""
        reader = FontReader(Path("nonexistent.ttf"))
        with pytest.raises(FileNotFoundError):
            reader.load()

    def test_load_garbage(self, tmp_path: Path) -> None:
        """Test a file that is not a font raises FontLoadError."""
        path = tmp_path / "broken.ttf"
        path.write_bytes(b"definitely not a font")
        with pytest.raises(FontLoadError) as exc_info:
            FontReader(path).load()
        assert exc_info.value.path == str(path)

    def test_format_before_load(self) -> None:
        """Test accessing format before loading raises RuntimeError."""
        reader = FontReader(Path("test.ttf"))
        with pytest.raises(RuntimeError, match="Font not loaded"):
            _ = reader.format

    def test_units_per_em_before_load(self) -> None:
        """Test accessing units_per_em before loading raises RuntimeError."""
        reader = FontReader(Path("test.ttf"))
        with pytest.raises(RuntimeError, match="Font not loaded"):
            _ = reader.units_per_em

    def test_iter_glyphs_before_load(self) -> None:
        """Test iterating glyphs before loading raises RuntimeError."""
        reader = FontReader(Path("test.ttf"))
        with pytest.raises(RuntimeError, match="Font not loaded"):
            list(reader.iter_glyphs("I", 10))

    @patch("typeplate.io.reader.TTFont")
    @patch.object(Path, "exists", return_value=True)
    def test_format_truetype(self, _mock_exists, mock_ttfont) -> None:  # noqa: ARG002
        """Test format property for TrueType fonts."""
        mock_font = MagicMock()
        mock_font.__contains__ = Mock(side_effect=lambda x: x == "glyf")
        mock_ttfont.return_value = mock_font

        reader = FontReader(Path("test.ttf"))
        reader.load()

        assert reader.format == "TrueType"

    @patch("typeplate.io.reader.TTFont")
    @patch.object(Path, "exists", return_value=True)
    def test_format_opentype(self, _mock_exists, mock_ttfont) -> None:  # noqa: ARG002
        """Test format property for OpenType fonts."""
        mock_font = MagicMock()
        mock_font.__contains__ = Mock(side_effect=lambda x: x == "CFF ")
        mock_ttfont.return_value = mock_font

        reader = FontReader(Path("test.otf"))
        reader.load()

        assert reader.format == "OpenType"

    @patch("typeplate.io.reader.TTFont")
    @patch.object(Path, "exists", return_value=True)
    def test_no_outline_table(self, _mock_exists, mock_ttfont) -> None:  # noqa: ARG002
        """Test fonts without glyf or CFF are rejected."""
        mock_font = MagicMock()
        mock_font.__contains__ = Mock(return_value=False)
        mock_ttfont.return_value = mock_font

        with pytest.raises(FontFormatError):
            FontReader(Path("bitmap.ttf")).load()
        mock_font.close.assert_called_once()


class TestTrueTypeFont:
    """Tests against a small generated TrueType font."""

    def test_metadata(self, ttf_path: Path) -> None:
        """Test font-level properties."""
        with FontReader(ttf_path) as reader:
            assert reader.format == "TrueType"
            assert reader.units_per_em == 1000
            assert reader.glyph_count == 4
            assert reader.family_name == "Typeplate Test"

    def test_glyph_contours(self, ttf_path: Path) -> None:
        """Test contours keep their points and on-curve flags."""
        with FontReader(ttf_path) as reader:
            glyph = reader.glyph_for_char("I")

        assert glyph.name == "I"
        assert glyph.advance_width == 300
        assert glyph.bounds == (0, 0, 200, 700)
        assert len(glyph.contours) == 1
        assert glyph.contours[0] == (
            ContourPoint(0, 0),
            ContourPoint(0, 700),
            ContourPoint(200, 700),
            ContourPoint(200, 0),
        )

    def test_counter_is_hole(self, ttf_path: Path) -> None:
        """Test the counter of O winds opposite to its outer contour."""
        with FontReader(ttf_path) as reader:
            glyph = reader.glyph_for_char("O")

        kinds = [classify_contour(c) for c in glyph.contours]
        assert kinds == [PathKind.OUTER, PathKind.HOLE]

    def test_space_has_no_outline(self, ttf_path: Path) -> None:
        """Test a blank glyph has advance but no ink."""
        with FontReader(ttf_path) as reader:
            glyph = reader.glyph_for_char(" ")
        assert glyph.is_empty()
        assert glyph.advance_width == 250

    def test_missing_character(self, ttf_path: Path) -> None:
        """Test unmapped characters raise GlyphNotFoundError."""
        with FontReader(ttf_path) as reader:
            with pytest.raises(GlyphNotFoundError) as exc_info:
                reader.glyph_for_char("Z")
        assert exc_info.value.char == "Z"

    def test_get_glyph_unknown_name(self, ttf_path: Path) -> None:
        """Test unknown glyph names return None."""
        with FontReader(ttf_path) as reader:
            assert reader.get_glyph("nope") is None

    def test_glyph_cache(self, ttf_path: Path) -> None:
        """Test repeated lookups return the cached glyph."""
        with FontReader(ttf_path) as reader:
            assert reader.get_glyph("O") is reader.get_glyph("O")

    def test_iter_glyphs_skips_missing(self, ttf_path: Path) -> None:
        """Test pen positions advance only for mapped characters."""
        with FontReader(ttf_path) as reader:
            placed = list(reader.iter_glyphs("IZ O", size=10))

        assert [p.glyph.name for p in placed] == ["I", "space", "O"]
        assert [p.x for p in placed] == pytest.approx([0.0, 3.0, 5.5])
        assert all(p.y == 0.0 for p in placed)

    def test_close_releases_font(self, ttf_path: Path) -> None:
        """Test closing the reader drops the font."""
        reader = FontReader(ttf_path)
        reader.load()
        reader.close()
        with pytest.raises(RuntimeError, match="Font not loaded"):
            _ = reader.units_per_em


class TestCffFont:
    """Tests against a small generated CFF font."""

    def test_cff_outline_in_truetype_direction(self, tmp_path: Path) -> None:
        """Test CFF contours are reversed so outers classify as outer."""
        path = _build_cff_font(tmp_path / "TypeplateCFF.otf")
        with FontReader(path) as reader:
            assert reader.format == "OpenType"
            glyph = reader.glyph_for_char("I")

        assert glyph.bounds == (0, 0, 200, 700)
        assert len(glyph.contours) == 1
        contour = glyph.contours[0]
        assert len(contour) == 4
        assert all(p.on_curve for p in contour)
        assert classify_contour(contour) is PathKind.OUTER


class TestRecordingToContours:
    """Tests for recording_to_contours."""

    def test_lines_and_curves(self) -> None:
        """Test on/off-curve flags follow the pen commands."""
        recording = [
            ("moveTo", ((0, 0),)),
            ("lineTo", ((10, 0),)),
            ("qCurveTo", ((10, 10), (0, 10))),
            ("closePath", ()),
        ]
        assert recording_to_contours(recording) == (
            (
                ContourPoint(0, 0),
                ContourPoint(10, 0),
                ContourPoint(10, 10, False),
                ContourPoint(0, 10),
            ),
        )

    def test_repeated_start_dropped(self) -> None:
        """Test a curve ending on the start point does not duplicate it."""
        recording = [
            ("moveTo", ((0, 0),)),
            ("lineTo", ((10, 0),)),
            ("qCurveTo", ((10, 10), (0, 0))),
            ("closePath", ()),
        ]
        contour = recording_to_contours(recording)[0]
        assert contour[0] == ContourPoint(0, 0)
        assert contour[-1] == ContourPoint(10, 10, False)

    def test_all_off_curve(self) -> None:
        """Test a curve without on-curve points."""
        recording = [
            ("qCurveTo", ((0, 0), (10, 0), (10, 10), None)),
            ("closePath", ()),
        ]
        contour = recording_to_contours(recording)[0]
        assert len(contour) == 3
        assert not any(p.on_curve for p in contour)

    def test_multiple_contours(self) -> None:
        """Test each moveTo starts a new contour."""
        recording = [
            ("moveTo", ((0, 0),)),
            ("lineTo", ((1, 0),)),
            ("closePath", ()),
            ("moveTo", ((5, 5),)),
            ("lineTo", ((6, 5),)),
            ("endPath", ()),
        ]
        assert len(recording_to_contours(recording)) == 2

    def test_cubic_rejected(self) -> None:
        """Test cubic segments are not accepted."""
        recording = [
            ("moveTo", ((0, 0),)),
            ("curveTo", ((1, 1), (2, 1), (3, 0))),
        ]
        with pytest.raises(ValueError, match="Cubic"):
            recording_to_contours(recording)
