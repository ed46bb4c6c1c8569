"""Font representation.

A font is a named, ordered collection of glyphs sharing the design grid.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field

from iconsmith.domain.glyph import Glyph


@dataclass(eq=False)
class Font:
    """An ordered glyph container.

    Exactly one font of a collection is mutable (the custom font). All
    others are read-only sources: their glyphs can be selected, renamed
    and renumbered but never removed.

    Attributes:
        font_id: Identity of the font, also used as display name
        fullname: Human readable name
        read_only: Whether glyphs may be removed from this font
        glyphs: Glyphs in insertion order
        glyph_map: Glyphs by uid for fast lookup
    """

    font_id: str
    fullname: str = ""
    read_only: bool = True
    glyphs: list[Glyph] = field(default_factory=list)
    glyph_map: dict[str, Glyph] = field(default_factory=dict, repr=False)

    @property
    def is_custom(self) -> bool:
        """Check if this is the mutable custom font."""
        return not self.read_only

    def get(self, uid: str) -> Glyph | None:
        """Get a glyph of this font by uid."""
        return self.glyph_map.get(uid)

    def selected_glyphs(self) -> list[Glyph]:
        """Get selected glyphs in font order."""
        return [glyph for glyph in self.glyphs if glyph.selected]

    def __len__(self) -> int:
        return len(self.glyphs)

    def __iter__(self) -> Iterator[Glyph]:
        return iter(self.glyphs)

    def __contains__(self, uid: object) -> bool:
        return uid in self.glyph_map
