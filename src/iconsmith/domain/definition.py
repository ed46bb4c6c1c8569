"""Font definition handed to the encoder.

A FontDefinition is the declarative, encoder-ready projection of a font:
metrics plus glyph outlines already in font coordinates (y up, baseline
at 0, 1000 units per em).
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class GlyphDefinition:
    """One encoder glyph.

    Attributes:
        name: Glyph name
        code: Unicode code point
        outline: Absolute path data in font coordinates
        width: Advance width
    """

    name: str
    code: int
    outline: str
    width: int

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "name": self.name,
            "code": self.code,
            "outline": self.outline,
            "width": self.width,
        }


@dataclass
class FontDefinition:
    """Encoder input for one font.

    Attributes:
        font_id: Identity of the font
        ascent: Ascent in the 1000-unit grid
        descent: Descent in the 1000-unit grid (ascent - 1000)
        glyphs: Glyphs in export order
    """

    font_id: str
    ascent: int
    descent: int
    glyphs: list[GlyphDefinition] = field(default_factory=list)

    @property
    def units_per_em(self) -> int:
        """Get the em size spanned by ascent and descent."""
        return self.ascent - self.descent

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the encoder input dictionary."""
        return {
            "font": {
                "id": self.font_id,
                "ascent": self.ascent,
                "descent": self.descent,
            },
            "glyphs": [glyph.to_dict() for glyph in self.glyphs],
        }
