"""Core glyph curation and build logic for iconsmith.

This module contains the code allocation engine, the glyph registry and
the pipeline that imports sources and assembles fonts.

Key components:
- CodeAllocator: Code point validation and allocation table
- FontCollection: Registry of fonts, glyphs and the selection
- GlyphImporter: Config, SVG image and SVG font import
- serialize: Collection -> persisted config
- FontAssembler: Selected glyphs -> encoder input
- IconFontBuilder: Orchestrates a full build run
"""

from iconsmith.core.assembler import FontAssembler
from iconsmith.core.builder import IconFontBuilder
from iconsmith.core.codes import CodeAllocator, CodePolicy, is_valid_code
from iconsmith.core.importer import GlyphImporter, derive_glyph_name, stable_uid
from iconsmith.core.registry import FontCollection, generate_uid
from iconsmith.core.serializer import serialize

__all__ = [
    "CodeAllocator",
    "CodePolicy",
    "FontAssembler",
    "FontCollection",
    "GlyphImporter",
    "IconFontBuilder",
    "derive_glyph_name",
    "generate_uid",
    "is_valid_code",
    "serialize",
    "stable_uid",
]
