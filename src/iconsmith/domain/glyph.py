"""Glyph representation and outline data.

This module defines the glyph domain model, which represents a single
icon with its identity, naming, code point and normalized outline.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class GlyphOutline:
    """Normalized vector shape of a glyph.

    The path is SVG path data in the 1000-unit design grid, with the
    y axis pointing down (SVG image convention). The assembler flips it
    into font coordinates on export.

    Attributes:
        path: Absolute SVG path data
        width: Advance width in design grid units
    """

    path: str
    width: int

    def is_empty(self) -> bool:
        """Check if the outline draws nothing or takes no horizontal space.

        Returns:
            True for blank path data or a non-positive advance width
        """
        return not self.path.strip() or self.width <= 0


@dataclass(eq=False)
class Glyph:
    """A single icon glyph.

    Glyphs compare by identity: the code allocation table maps code points
    to glyph objects, and two distinct glyphs may hold equal field values.

    ``name``, ``code`` and ``selected`` are mutated only through the
    FontCollection mutation API so the allocation table stays consistent.

    Attributes:
        uid: Immutable identity, unique within the whole collection
        original_name: Name at import time
        original_code: Code point at import time (the allocation baseline)
        font_id: Identity of the owning font
        outline: Normalized shape (None for glyphs known only by reference)
        content_hash: Fingerprint of the source bytes
        ref_code: Reference identifier used for previews
        name: Current name
        code: Current code point
        selected: Whether the glyph is part of the exported selection
        just_imported: Suppresses the baseline rule on the first selection
    """

    uid: str
    original_name: str
    original_code: int
    font_id: str
    outline: GlyphOutline | None = None
    content_hash: str | None = None
    ref_code: int | None = None
    name: str | None = None
    code: int | None = None
    selected: bool = False
    just_imported: bool = field(default=False, repr=False)

    def __post_init__(self) -> None:
        if self.name is None:
            self.name = self.original_name
        if self.code is None:
            self.code = self.original_code

    def is_empty(self) -> bool:
        """Check if glyph has no drawable outline.

        Returns:
            True if the glyph has no outline or an empty one
        """
        return self.outline is None or self.outline.is_empty()
