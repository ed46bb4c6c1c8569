"""Source and font I/O layer for iconsmith.

This module handles reading glyph sources and writing font files. It
provides a clean abstraction layer between file formats (SVG, fontTools)
and the domain models.

Key responsibilities:
- Scan source directories and fingerprint source bytes
- Parse SVG images and SVG fonts into plain data
- Encode font definitions as TTF/WOFF/WOFF2/SVG fonts
- Write the persisted project config

Key classes:
- SourceReader: Scan a directory for source files
- FontWriter: Encode and save fonts
"""

from iconsmith.io.reader import (
    LoadedSource,
    SourceKind,
    SourceReader,
    SvgFont,
    SvgFontGlyph,
    SvgImage,
    fingerprint,
    load_source,
    parse_svg_font,
    parse_svg_image,
)
from iconsmith.io.writer import FontWriter, write_project_config

__all__ = [
    "FontWriter",
    "LoadedSource",
    "SourceKind",
    "SourceReader",
    "SvgFont",
    "SvgFontGlyph",
    "SvgImage",
    "fingerprint",
    "load_source",
    "parse_svg_font",
    "parse_svg_image",
    "write_project_config",
]
