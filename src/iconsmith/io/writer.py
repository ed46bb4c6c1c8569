"""Font writer for encoding assembled font definitions.

This module provides the FontWriter class, which turns a FontDefinition
into binary font files with fontTools, and helpers for writing the
persisted project config.
"""

import re
import xml.etree.ElementTree as ET
from pathlib import Path

from fontTools.fontBuilder import FontBuilder
from fontTools.pens.cu2quPen import Cu2QuPen
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.svgLib.path import parse_path
from fontTools.ttLib import TTFont

from iconsmith.config.project import ProjectConfig
from iconsmith.config.settings import FontSettings, OutputFormat
from iconsmith.domain.definition import FontDefinition
from iconsmith.exceptions import FontAssemblyError, FontSaveError

_INVALID_NAME_CHARS = re.compile(r"[^A-Za-z0-9._-]")

SVG_FONT_HEADER = (
    '<?xml version="1.0" standalone="no"?>\n'
    '<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.1//EN" '
    '"http://www.w3.org/Graphics/SVG/1.1/DTD/svg11.dtd">\n'
)


def unique_glyph_names(names: list[str]) -> list[str]:
    """Make glyph names safe and unique for the post table.

    Characters outside [A-Za-z0-9._-] become underscores; repeated names
    get a numeric suffix (``home``, ``home.1``, ...).

    Args:
        names: Glyph names in export order

    Returns:
        Sanitized names in the same order
    """
    seen: set[str] = {".notdef"}
    result: list[str] = []
    for name in names:
        base = _INVALID_NAME_CHARS.sub("_", name) or "glyph"
        candidate = base
        counter = 1
        while candidate in seen:
            candidate = f"{base}.{counter}"
            counter += 1
        seen.add(candidate)
        result.append(candidate)
    return result


def draw_truetype_glyph(path: str):
    """Draw font-coordinate path data into a TrueType glyph.

    Cubic segments (and arcs) are converted to quadratic curves.

    Returns:
        Tuple of (glyph, left side bearing)
    """
    tt_pen = TTGlyphPen(None)
    if path.strip():
        parse_path(path, Cu2QuPen(tt_pen, max_err=1.0, reverse_direction=False))
    glyph = tt_pen.glyph()

    lsb = 0
    if glyph.numberOfContours > 0:
        lsb = min(x for x, _ in glyph.coordinates)
    return glyph, int(lsb)


class FontWriter:
    """Encodes a FontDefinition into font files.

    Example:
        writer = FontWriter(definition, settings.font)
        paths = writer.save(Path("dist"), [OutputFormat.TTF, OutputFormat.WOFF2])
    """

    def __init__(self, definition: FontDefinition, settings: FontSettings) -> None:
        """Initialize the font writer.

        Args:
            definition: Assembled font definition
            settings: Global font parameters (names, copyright)
        """
        self._definition = definition
        self._settings = settings
        self._names = unique_glyph_names([glyph.name for glyph in definition.glyphs])

    @property
    def family_name(self) -> str:
        """Get the family name written to the name table."""
        return self._settings.family_name

    def build(self) -> TTFont:
        """Build a TrueType font from the definition.

        Returns:
            In-memory fontTools TTFont

        Raises:
            FontAssemblyError: If the glyph set is empty or an outline is malformed
        """
        definition = self._definition
        if not definition.glyphs:
            raise FontAssemblyError(definition.font_id, "empty glyph set")

        upm = definition.units_per_em
        glyphs = {".notdef": TTGlyphPen(None).glyph()}
        metrics = {".notdef": (upm, 0)}
        cmap: dict[int, str] = {}

        for name, glyph_def in zip(self._names, definition.glyphs):
            try:
                glyph, lsb = draw_truetype_glyph(glyph_def.outline)
            except Exception as e:
                raise FontAssemblyError(
                    definition.font_id, f"glyph '{glyph_def.name}': {e}"
                ) from e
            glyphs[name] = glyph
            metrics[name] = (glyph_def.width, lsb)
            cmap[glyph_def.code] = name

        family = self.family_name
        ps_name = re.sub(r"[^A-Za-z0-9-]", "", family) or "iconsmith"
        name_strings = {
            "familyName": family,
            "styleName": "Regular",
            "uniqueFontIdentifier": f"{ps_name}-Regular",
            "fullName": self._settings.fullname or family,
            "psName": ps_name,
            "version": "Version 1.0",
        }
        if self._settings.copyright:
            name_strings["copyright"] = self._settings.copyright

        try:
            fb = FontBuilder(upm, isTTF=True)
            fb.setupGlyphOrder([".notdef", *self._names])
            fb.setupCharacterMap(cmap)
            fb.setupGlyf(glyphs)
            fb.setupHorizontalMetrics(metrics)
            fb.setupHorizontalHeader(ascent=definition.ascent, descent=definition.descent)
            fb.setupNameTable(name_strings)
            fb.setupOS2(
                sTypoAscender=definition.ascent,
                sTypoDescender=definition.descent,
                sTypoLineGap=0,
                usWinAscent=definition.ascent,
                usWinDescent=abs(definition.descent),
            )
            fb.setupPost()
            fb.setupMaxp()
        except Exception as e:
            raise FontAssemblyError(definition.font_id, str(e)) from e

        return fb.font

    def to_svg_font(self) -> str:
        """Render the definition as an SVG font document."""
        definition = self._definition
        upm = str(definition.units_per_em)
        family = self.family_name

        svg = ET.Element("svg", {"xmlns": "http://www.w3.org/2000/svg"})
        defs = ET.SubElement(svg, "defs")
        font = ET.SubElement(defs, "font", {"id": family, "horiz-adv-x": upm})
        ET.SubElement(
            font,
            "font-face",
            {
                "font-family": family,
                "font-weight": "400",
                "font-stretch": "normal",
                "units-per-em": upm,
                "ascent": str(definition.ascent),
                "descent": str(definition.descent),
            },
        )
        ET.SubElement(font, "missing-glyph", {"horiz-adv-x": upm})
        for name, glyph_def in zip(self._names, definition.glyphs):
            ET.SubElement(
                font,
                "glyph",
                {
                    "glyph-name": name,
                    "unicode": chr(glyph_def.code),
                    "d": glyph_def.outline,
                    "horiz-adv-x": str(glyph_def.width),
                },
            )

        return SVG_FONT_HEADER + ET.tostring(svg, encoding="unicode")

    def save(self, output_dir: Path, formats: list[OutputFormat]) -> list[Path]:
        """Write the requested formats to a directory.

        Args:
            output_dir: Target directory (created if missing)
            formats: Formats to write

        Returns:
            Paths of written files, in ``formats`` order

        Raises:
            FontAssemblyError: If the font cannot be built
            FontSaveError: If a file cannot be written
        """
        binary_formats = [fmt for fmt in formats if fmt is not OutputFormat.SVG]
        font = self.build() if binary_formats else None

        written: list[Path] = []
        for fmt in formats:
            path = self.get_output_path(output_dir, self.family_name, fmt)
            try:
                output_dir.mkdir(parents=True, exist_ok=True)
                if font is None or fmt is OutputFormat.SVG:
                    path.write_text(self.to_svg_font(), encoding="utf-8")
                else:
                    font.flavor = None if fmt is OutputFormat.TTF else fmt.value
                    font.save(str(path))
            except Exception as e:
                raise FontSaveError(str(path), str(e)) from e
            written.append(path)

        return written

    @staticmethod
    def get_output_path(output_dir: Path, family_name: str, fmt: OutputFormat) -> Path:
        """Generate the output path for a format.

        Converts: ("dist", "My Icons", woff2) -> dist/my-icons.woff2
        """
        stem = re.sub(r"\s+", "-", family_name.strip().lower()) or "iconsmith"
        return output_dir / f"{stem}.{fmt.value}"


def write_project_config(config: ProjectConfig, path: Path) -> None:
    """Write the persisted config as JSON.

    Raises:
        FontSaveError: If the file cannot be written
    """
    try:
        path.write_text(config.to_json() + "\n", encoding="utf-8")
    except OSError as e:
        raise FontSaveError(str(path), str(e)) from e
