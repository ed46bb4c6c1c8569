"""End-to-end test that builds a source directory and verifies the font files."""

import json
from pathlib import Path

import pytest
from fontTools.ttLib import TTFont

from iconsmith.config import BuildConfig, FontSettings, IconsmithSettings
from iconsmith.core.builder import IconFontBuilder
from iconsmith.utils import BuildStats


@pytest.fixture
def source_dir(tmp_path: Path, tall_box_svg: bytes, square_svg: bytes, demo_font_svg: bytes) -> Path:
    """Create a source directory with images, an SVG font and a broken file."""
    directory = tmp_path / "icons"
    directory.mkdir()
    (directory / "box.svg").write_bytes(tall_box_svg)
    (directory / "broken.svg").write_text("<svg><path d=", encoding="utf-8")
    (directory / "set.svg").write_bytes(demo_font_svg)
    (directory / "square.svg").write_bytes(square_svg)
    return directory


def run_build(source_dir: Path, logger) -> BuildStats:
    settings = IconsmithSettings(
        font=FontSettings(name="Demo Icons", copyright="(c) demo"),
        build=BuildConfig(max_workers=2),
    )
    return IconFontBuilder(settings, logger=logger).build(source_dir)


class TestEndToEndBuild:
    """Build a directory and read the results back with fontTools."""

    def test_all_formats_written(self, source_dir: Path, logger) -> None:
        """Test every output format lands in dist/ with the family file name."""
        stats = run_build(source_dir, logger)
        dist = source_dir / "dist"
        assert stats.written_files == [
            dist / "demo-icons.ttf",
            dist / "demo-icons.woff",
            dist / "demo-icons.woff2",
            dist / "demo-icons.svg",
        ]
        assert TTFont(dist / "demo-icons.woff").flavor == "woff"
        assert TTFont(dist / "demo-icons.woff2").flavor == "woff2"

    def test_truetype_contents(self, source_dir: Path, logger) -> None:
        """Test cmap, metrics and names of the TrueType output."""
        run_build(source_dir, logger)
        font = TTFont(source_dir / "dist" / "demo-icons.ttf")

        assert font.getBestCmap() == {
            0x61: "alpha",
            0x64: "glyph",
            0xE800: "box",
            0xE803: "square",
        }
        assert font["head"].unitsPerEm == 1000
        assert font["hhea"].ascent == 850
        assert font["hhea"].descent == -150
        assert font["hmtx"]["box"][0] == 500
        assert font["hmtx"]["alpha"][0] == 500
        assert font["hmtx"]["glyph"][0] == 250
        assert font["name"].getDebugName(1) == "Demo Icons"
        assert font["name"].getDebugName(0) == "(c) demo"

    def test_box_outline_position(self, source_dir: Path, logger) -> None:
        """Test the tall box fills the em from descent to ascent."""
        run_build(source_dir, logger)
        font = TTFont(source_dir / "dist" / "demo-icons.ttf")
        glyph = font["glyf"]["box"]
        glyph.recalcBounds(font["glyf"])
        assert (glyph.xMin, glyph.yMin, glyph.xMax, glyph.yMax) == (0, -150, 500, 850)

    def test_config_contents(self, source_dir: Path, logger) -> None:
        """Test config.json records every glyph with its code and outline."""
        stats = run_build(source_dir, logger)
        assert stats.imported_count == 3
        assert stats.error_count == 1

        config = json.loads((source_dir / "config.json").read_text(encoding="utf-8"))
        assert config["name"] == "Demo Icons"
        assert [(glyph["name"], glyph["code"]) for glyph in config["glyphs"]] == [
            ("box", 0xE800),
            ("alpha", 0x61),
            ("glyph", 0x64),
            ("square", 0xE803),
        ]
        assert all(glyph["ownerFontId"] == "custom_icons" for glyph in config["glyphs"])
        assert all(glyph["outline"] and glyph["selected"] for glyph in config["glyphs"])

    def test_rebuild_is_idempotent(self, source_dir: Path, logger) -> None:
        """Test a second build reuses config.json and changes nothing."""
        run_build(source_dir, logger)
        config = (source_dir / "config.json").read_text(encoding="utf-8")
        cmap = TTFont(source_dir / "dist" / "demo-icons.ttf").getBestCmap()

        stats = run_build(source_dir, logger)
        assert stats.config_loaded
        assert stats.imported_count == 0
        assert stats.duplicate_count == 3
        assert (source_dir / "config.json").read_text(encoding="utf-8") == config
        assert TTFont(source_dir / "dist" / "demo-icons.ttf").getBestCmap() == cmap

    def test_deselected_glyph_not_exported(self, source_dir: Path, logger) -> None:
        """Test a deselected glyph whose source is gone stays out of the font."""
        run_build(source_dir, logger)
        config_path = source_dir / "config.json"
        config = json.loads(config_path.read_text(encoding="utf-8"))
        config["glyphs"][0]["selected"] = False
        config["glyphs"][1]["code"] = 0x41
        config_path.write_text(json.dumps(config), encoding="utf-8")
        (source_dir / "box.svg").unlink()

        stats = run_build(source_dir, logger)
        assert stats.selected_count == 3
        cmap = TTFont(source_dir / "dist" / "demo-icons.ttf").getBestCmap()
        assert "box" not in cmap.values()
        assert cmap[0x41] == "alpha"
        saved = json.loads(config_path.read_text(encoding="utf-8"))
        assert [glyph["name"] for glyph in saved["glyphs"]][-1] == "box"
        assert not saved["glyphs"][-1]["selected"]
