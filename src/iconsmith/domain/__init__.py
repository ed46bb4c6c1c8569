"""Domain models for iconsmith.

This module contains the core domain models representing glyphs, their
outlines and the fonts that own them. Models are:

- Plain dataclasses, independent of fonttools implementation details
- Compared by identity where they carry mutable state (Glyph, Font)

Key classes:
- GlyphOutline: Normalized path data plus advance width
- Glyph: A single icon with identity, name and code point
- Font: An ordered glyph container, mutable or read-only
- FontDefinition: Encoder input for one font
- GlyphDefinition: One encoder glyph
"""

from iconsmith.domain.definition import FontDefinition, GlyphDefinition
from iconsmith.domain.font import Font
from iconsmith.domain.glyph import Glyph, GlyphOutline

__all__: list[str] = [
    # Registry types
    "Font",
    "Glyph",
    "GlyphOutline",
    # Encoder input
    "FontDefinition",
    "GlyphDefinition",
]
