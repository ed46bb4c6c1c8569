"""Tests for the config serializer and the font assembler."""

import json

import pytest

from iconsmith.config import FontSettings, ProjectConfig
from iconsmith.core.assembler import FontAssembler
from iconsmith.core.importer import GlyphImporter
from iconsmith.core.outline import path_bounds
from iconsmith.core.registry import FontCollection
from iconsmith.core.serializer import serialize
from iconsmith.domain import GlyphOutline
from iconsmith.exceptions import FontAssemblyError
from iconsmith.io.reader import parse_svg_font, parse_svg_image

BOX = GlyphOutline(path="M0 0L10 0L10 10L0 10Z", width=1000)


def build_session(logger, demo_font_svg: bytes, tall_box_svg: bytes, square_svg: bytes):
    """Create a curated collection: two images, one picked source glyph."""
    collection = FontCollection()
    importer = GlyphImporter(collection, FontSettings(name="icons"), logger=logger)
    font = importer.load_source_font(parse_svg_font(demo_font_svg))

    (first,) = importer.import_image(parse_svg_image(tall_box_svg), "first.svg", "h1")
    (second,) = importer.import_image(parse_svg_image(square_svg), "second.svg", "h2")

    alpha = font.glyphs[0]
    collection.toggle_select(alpha, True)
    collection.rename(alpha, "alpha-renamed")
    collection.set_code(alpha, 0x41)
    collection.toggle_select(first, False)
    return collection, importer, font, first, second


class TestSerialize:
    """Tests for serialize."""

    def test_empty_collection(self) -> None:
        """Test an empty collection serializes to font parameters only."""
        config = serialize(FontCollection(), FontSettings(name="icons", ascent=800))
        assert config.name == "icons"
        assert config.ascent == 800
        assert config.glyphs == []

    def test_descriptor_order_and_fields(self, logger, demo_font_svg, tall_box_svg, square_svg) -> None:
        """Test selected glyphs come first, then unselected custom glyphs."""
        collection, _, font, first, second = build_session(logger, demo_font_svg, tall_box_svg, square_svg)
        config = serialize(collection, FontSettings(name="icons"))

        alpha = font.glyphs[0]
        assert [descriptor.uid for descriptor in config.glyphs] == [second.uid, alpha.uid, first.uid]

        second_d, alpha_d, first_d = config.glyphs
        assert second_d.outline == second.outline.path
        assert second_d.width == second.outline.width
        assert second_d.content_hash == "h2"
        assert second_d.selected
        assert (alpha_d.name, alpha_d.code, alpha_d.owner_font_id) == ("alpha-renamed", 0x41, "demo")
        assert alpha_d.outline is None
        assert not first_d.selected

    def test_json_keys(self, logger, demo_font_svg, tall_box_svg, square_svg) -> None:
        """Test the on-disk spelling of descriptor keys."""
        collection, *_ = build_session(logger, demo_font_svg, tall_box_svg, square_svg)
        data = json.loads(serialize(collection, FontSettings(name="icons")).to_json())
        assert set(data["glyphs"][0]) == {
            "uid",
            "name",
            "code",
            "contentHash",
            "ownerFontId",
            "outline",
            "width",
            "selected",
        }
        assert "outline" not in data["glyphs"][1]

    def test_round_trip(self, logger, demo_font_svg, tall_box_svg, square_svg) -> None:
        """Test importing a serialized config reproduces the curation."""
        collection, importer, *_ = build_session(logger, demo_font_svg, tall_box_svg, square_svg)
        config = serialize(collection, importer.font_settings)

        restored = FontCollection()
        restored_importer = GlyphImporter(restored, FontSettings(), logger=logger)
        restored_importer.load_source_font(parse_svg_font(demo_font_svg))
        assert restored_importer.import_config(config.to_json()) is not None

        def state(c: FontCollection) -> list[tuple]:
            return sorted((g.uid, g.name, g.code, g.selected) for g in c.iter_glyphs())

        assert state(restored) == state(collection)
        assert [g.uid for g in restored.selected_glyphs] == [g.uid for g in collection.selected_glyphs]
        assert serialize(restored, restored_importer.font_settings) == config

    def test_round_trip_keeps_unselected_custom_codes(
        self, logger, demo_font_svg, tall_box_svg, square_svg
    ) -> None:
        """Test a deselected custom glyph keeps its code when re-selected later."""
        collection, importer, _, first, _ = build_session(logger, demo_font_svg, tall_box_svg, square_svg)
        config = serialize(collection, importer.font_settings)

        restored = FontCollection()
        GlyphImporter(restored, FontSettings(), logger=logger).import_config(config.to_json())
        glyph = restored.get_glyph(first.uid)
        restored.toggle_select(glyph, True)
        assert glyph.code == first.code


class TestFontAssembler:
    """Tests for FontAssembler."""

    @pytest.fixture
    def collection(self) -> FontCollection:
        """Create a collection with two selected custom glyphs."""
        collection = FontCollection()
        font = collection.custom_font
        for name, code in (("b", 0xE801), ("a", 0xE800)):
            glyph = collection.add_glyph(font, name=name, code=code, outline=BOX)
            collection.toggle_select(glyph, True)
        return collection

    def test_empty_font(self) -> None:
        """Test a font without glyphs yields nothing."""
        assert FontAssembler(FontSettings()).assemble(FontCollection().custom_font) is None

    def test_nothing_selected(self, collection: FontCollection) -> None:
        """Test a font without selected glyphs yields nothing."""
        collection.clear_selection()
        assert FontAssembler(FontSettings()).assemble(collection.custom_font) is None
        assert FontAssembler(FontSettings()).assemble_selection(collection) is None

    def test_metrics(self, collection: FontCollection) -> None:
        """Test ascent is rescaled to the grid and descent spans the rest."""
        definition = FontAssembler(FontSettings(units_per_em=2048, ascent=1638)).assemble(
            collection.custom_font
        )
        assert definition.ascent == 800
        assert definition.descent == -200
        assert definition.units_per_em == 1000

    def test_glyphs_flipped(self, collection: FontCollection) -> None:
        """Test outlines are flipped into font coordinates."""
        definition = FontAssembler(FontSettings()).assemble(collection.custom_font)
        glyph = definition.glyphs[0]
        assert (glyph.name, glyph.code, glyph.width) == ("b", 0xE801, 1000)
        assert path_bounds(glyph.outline) == (0, 840, 10, 850)

    def test_to_dict(self, collection: FontCollection) -> None:
        """Test the encoder input shape."""
        data = FontAssembler(FontSettings()).assemble(collection.custom_font).to_dict()
        assert data["font"] == {"id": "custom_icons", "ascent": 850, "descent": -150}
        assert [glyph["name"] for glyph in data["glyphs"]] == ["b", "a"]
        assert set(data["glyphs"][0]) == {"name", "code", "outline", "width"}

    def test_assemble_selection_order(self, collection: FontCollection) -> None:
        """Test the whole selection is exported in selection order."""
        demo = collection.add_font("demo")
        picked = collection.add_glyph(demo, name="picked", code=0x61, outline=BOX)
        collection.toggle_select(picked, True)
        a = collection.custom_font.glyphs[1]
        collection.toggle_select(a, False)
        collection.toggle_select(a, True)

        definition = FontAssembler(FontSettings()).assemble_selection(collection)
        assert definition.font_id == "custom_icons"
        assert [glyph.name for glyph in definition.glyphs] == ["b", "picked", "a"]

    def test_assemble_skips_unselected(self, collection: FontCollection) -> None:
        """Test only selected glyphs of a font are assembled."""
        collection.toggle_select(collection.custom_font.glyphs[0], False)
        definition = FontAssembler(FontSettings()).assemble(collection.custom_font)
        assert [glyph.name for glyph in definition.glyphs] == ["a"]

    def test_empty_outline_skipped(self, collection: FontCollection) -> None:
        """Test a selected glyph with a zero advance is left out."""
        flat = collection.add_glyph(
            collection.custom_font, name="flat", code=0xE802, outline=GlyphOutline(path="M0 0H10", width=0)
        )
        collection.toggle_select(flat, True)
        definition = FontAssembler(FontSettings()).assemble(collection.custom_font)
        assert [glyph.name for glyph in definition.glyphs] == ["b", "a"]

    def test_malformed_outline(self, collection: FontCollection) -> None:
        """Test path data fontTools cannot parse raises FontAssemblyError."""
        broken = collection.add_glyph(
            collection.custom_font, name="broken", code=0xE802, outline=GlyphOutline(path="M0 0 L10", width=1000)
        )
        collection.toggle_select(broken, True)
        with pytest.raises(FontAssemblyError, match="glyph 'broken'") as exc_info:
            FontAssembler(FontSettings()).assemble_selection(collection)
        assert exc_info.value.font_id == "custom_icons"

    def test_config_round_trip(self, collection: FontCollection) -> None:
        """Test the assembler reads metrics from imported configs."""
        config = ProjectConfig(units_per_em=1000, ascent=900)
        definition = FontAssembler(config.apply_to(FontSettings())).assemble(collection.custom_font)
        assert definition.ascent == 900
