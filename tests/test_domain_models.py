"""Tests for domain models to verify they work correctly."""

import pytest

from iconsmith.domain import (
    Font,
    FontDefinition,
    Glyph,
    GlyphDefinition,
    GlyphOutline,
)


class TestGlyphOutline:
    """Tests for GlyphOutline class."""

    def test_outline_creation(self) -> None:
        """Test basic outline creation."""
        outline = GlyphOutline(path="M0 0H10V10Z", width=1000)
        assert outline.path == "M0 0H10V10Z"
        assert outline.width == 1000
        assert not outline.is_empty()

    def test_blank_path_is_empty(self) -> None:
        """Test that blank path data counts as empty."""
        assert GlyphOutline(path="  ", width=1000).is_empty()

    def test_zero_width_is_empty(self) -> None:
        """Test that a zero advance counts as empty."""
        assert GlyphOutline(path="M0 0H10V10Z", width=0).is_empty()

    def test_outline_immutable(self) -> None:
        """Test that outline is immutable."""
        outline = GlyphOutline(path="M0 0H10V10Z", width=500)
        with pytest.raises(AttributeError):
            outline.width = 10  # type: ignore


class TestGlyph:
    """Tests for Glyph class."""

    def test_current_values_default_to_originals(self) -> None:
        """Test that name and code start at their import-time values."""
        glyph = Glyph(uid="u1", original_name="home", original_code=0xE800, font_id="f")
        assert glyph.name == "home"
        assert glyph.code == 0xE800
        assert not glyph.selected
        assert not glyph.just_imported

    def test_reference_glyph_is_empty(self) -> None:
        """Test a glyph known only by reference has nothing to draw."""
        glyph = Glyph(uid="u1", original_name="home", original_code=0x41, font_id="f")
        assert glyph.is_empty()

    def test_glyph_with_outline(self) -> None:
        """Test a glyph with a drawable outline is not empty."""
        glyph = Glyph(
            uid="u1",
            original_name="home",
            original_code=0x41,
            font_id="f",
            outline=GlyphOutline(path="M0 0H10V10Z", width=750),
        )
        assert not glyph.is_empty()

    def test_glyphs_compare_by_identity(self) -> None:
        """Test that equal field values do not make glyphs equal."""
        a = Glyph(uid="u1", original_name="home", original_code=0x41, font_id="f")
        b = Glyph(uid="u1", original_name="home", original_code=0x41, font_id="f")
        assert a != b
        assert a == a


class TestFont:
    """Tests for Font class."""

    @pytest.fixture
    def font(self) -> Font:
        """Create a font with two glyphs, one selected."""
        font = Font(font_id="demo", fullname="Demo")
        for uid, code in (("a", 0x61), ("b", 0x62)):
            glyph = Glyph(uid=uid, original_name=uid, original_code=code, font_id="demo")
            font.glyphs.append(glyph)
            font.glyph_map[uid] = glyph
        font.glyphs[1].selected = True
        return font

    def test_font_defaults_to_read_only(self) -> None:
        """Test that fonts are read-only unless created as custom."""
        assert Font(font_id="demo").read_only
        assert Font(font_id="custom", read_only=False).is_custom

    def test_lookup(self, font: Font) -> None:
        """Test glyph lookup by uid."""
        assert font.get("a") is font.glyphs[0]
        assert font.get("missing") is None
        assert "a" in font
        assert "missing" not in font

    def test_len_and_iter(self, font: Font) -> None:
        """Test container protocol."""
        assert len(font) == 2
        assert [glyph.uid for glyph in font] == ["a", "b"]

    def test_selected_glyphs(self, font: Font) -> None:
        """Test selected glyphs in font order."""
        assert [glyph.uid for glyph in font.selected_glyphs()] == ["b"]


class TestFontDefinition:
    """Tests for FontDefinition class."""

    def test_units_per_em(self) -> None:
        """Test em size from ascent and descent."""
        definition = FontDefinition(font_id="icons", ascent=850, descent=-150)
        assert definition.units_per_em == 1000

    def test_to_dict(self) -> None:
        """Test the encoder input dictionary shape."""
        definition = FontDefinition(
            font_id="icons",
            ascent=850,
            descent=-150,
            glyphs=[GlyphDefinition(name="home", code=0xE800, outline="M0 850H10Z", width=1000)],
        )
        assert definition.to_dict() == {
            "font": {"id": "icons", "ascent": 850, "descent": -150},
            "glyphs": [
                {"name": "home", "code": 0xE800, "outline": "M0 850H10Z", "width": 1000},
            ],
        }
