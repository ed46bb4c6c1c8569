"""Glyph and font registry.

The FontCollection owns every Font and Glyph of a build run, the
collection-wide selection list and the code allocator. All glyph state
changes (select, rename, renumber, add, remove) go through its mutation
API, which keeps the allocation table consistent with glyph state.
"""

import uuid
from collections.abc import Iterator

import structlog

from iconsmith.config.settings import CUSTOM_FONT_ID
from iconsmith.core.codes import UNICODE_PRIVATE_USE_AREA_MIN, CodeAllocator
from iconsmith.domain import Font, Glyph, GlyphOutline
from iconsmith.exceptions import (
    DuplicateGlyphError,
    GlyphNotFoundError,
    ReadOnlyFontError,
)


def generate_uid() -> str:
    """Generate a fresh glyph identity.

    Uses 122 random bits (UUID4), so the collision probability between two
    identities is about 2**-122.

    Returns:
        32 character lowercase hex string
    """
    return uuid.uuid4().hex


class FontCollection:
    """Registry of fonts, glyphs and the selection.

    The custom font is created with the collection and always comes first.
    Read-only source fonts are appended with ``add_font``.

    Example:
        collection = FontCollection()
        glyph = collection.add_glyph(collection.custom_font, name="home", code=0xE800)
        collection.toggle_select(glyph, True)
        collection.set_code(glyph, 0x41)
    """

    def __init__(
        self,
        custom_font_id: str = CUSTOM_FONT_ID,
        allocator: CodeAllocator | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the collection with an empty custom font.

        Args:
            custom_font_id: Identity of the mutable font
            allocator: Code allocator (a fresh one if None)
            logger: Logger for registry events
        """
        self._logger = logger or structlog.get_logger("iconsmith.registry")
        self.allocator = allocator or CodeAllocator(logger=self._logger)
        self.fonts: list[Font] = [Font(font_id=custom_font_id, read_only=False)]
        self.glyph_map: dict[str, Glyph] = {}
        self.selected_glyphs: list[Glyph] = []

    @property
    def custom_font(self) -> Font:
        """Get the single mutable font."""
        return self.fonts[0]

    def add_font(self, font_id: str, fullname: str = "") -> Font:
        """Register a read-only source font.

        Raises:
            ValueError: If a font with the same identity exists
        """
        if self.get_font(font_id) is not None:
            raise ValueError(f"Font '{font_id}' is already registered")
        font = Font(font_id=font_id, fullname=fullname, read_only=True)
        self.fonts.append(font)
        return font

    def get_font(self, font_id: str) -> Font | None:
        """Get a font by identity."""
        for font in self.fonts:
            if font.font_id == font_id:
                return font
        return None

    def font_of(self, glyph: Glyph) -> Font:
        """Get the font owning a glyph.

        Raises:
            GlyphNotFoundError: If the glyph's font is not registered
        """
        font = self.get_font(glyph.font_id)
        if font is None:
            raise GlyphNotFoundError(glyph.uid)
        return font

    def get_glyph(self, uid: str) -> Glyph | None:
        """Get a glyph from any font by uid."""
        return self.glyph_map.get(uid)

    def iter_glyphs(self) -> Iterator[Glyph]:
        """Iterate glyphs of all fonts, font by font."""
        for font in self.fonts:
            yield from font.glyphs

    def find_by_content_hash(self, content_hash: str, font: Font | None = None) -> list[Glyph]:
        """Get glyphs imported from a source with the given fingerprint.

        Args:
            content_hash: Source fingerprint
            font: Restrict the search to this font (all fonts if None)

        Returns:
            Matching glyphs in font order
        """
        glyphs = font.glyphs if font is not None else self.iter_glyphs()
        return [glyph for glyph in glyphs if glyph.content_hash == content_hash]

    def next_ref_code(self) -> int:
        """Get the next free reference identifier.

        Returns:
            One past the highest reference identifier in use, or the
            start of the Private Use Area when none is in use
        """
        refs = [glyph.ref_code for glyph in self.iter_glyphs() if glyph.ref_code is not None]
        return max(refs) + 1 if refs else UNICODE_PRIVATE_USE_AREA_MIN

    def add_glyph(
        self,
        font: Font,
        *,
        name: str,
        code: int,
        outline: GlyphOutline | None = None,
        uid: str | None = None,
        content_hash: str | None = None,
        ref_code: int | None = None,
    ) -> Glyph:
        """Create a glyph and insert it into a font.

        The glyph is not selected; callers decide.

        Args:
            font: Owning font
            name: Import-time name
            code: Import-time code point
            outline: Normalized shape
            uid: Supplied identity (a fresh one is generated if None)
            content_hash: Source fingerprint
            ref_code: Reference identifier

        Returns:
            The new glyph

        Raises:
            DuplicateGlyphError: If the uid is already registered
        """
        uid = uid or generate_uid()
        if uid in self.glyph_map:
            raise DuplicateGlyphError(uid)

        glyph = Glyph(
            uid=uid,
            original_name=name,
            original_code=code,
            font_id=font.font_id,
            outline=outline,
            content_hash=content_hash,
            ref_code=ref_code,
        )
        font.glyphs.append(glyph)
        font.glyph_map[uid] = glyph
        self.glyph_map[uid] = glyph
        return glyph

    def remove_glyph(self, font: Font, uid: str | None = None) -> None:
        """Remove one glyph, or every glyph, of the custom font.

        Removed glyphs are deselected first so their codes are released.

        Args:
            font: Font to remove from (must be the custom font)
            uid: Glyph to remove (all glyphs of the font if None)

        Raises:
            ReadOnlyFontError: If the font is read-only
            GlyphNotFoundError: If the uid is not in the font
        """
        if font.read_only:
            raise ReadOnlyFontError(font.font_id, "remove glyphs")

        if uid is None:
            for glyph in list(font.glyphs):
                self._remove(font, glyph)
            return

        glyph = font.get(uid)
        if glyph is None:
            raise GlyphNotFoundError(uid)
        self._remove(font, glyph)

    def _remove(self, font: Font, glyph: Glyph) -> None:
        self.toggle_select(glyph, False)
        del self.glyph_map[glyph.uid]
        del font.glyph_map[glyph.uid]
        font.glyphs.remove(glyph)

    def toggle_select(self, glyph: Glyph, value: bool) -> None:
        """Select or deselect a glyph.

        This is the only valid way to change ``glyph.selected``. In order it
        sets the flag, updates the ordered selection list and runs the
        allocator's selection transition.

        Raises:
            CodeSpaceExhaustedError: If no code can be allocated on selection
        """
        if glyph.selected == value:
            return

        glyph.selected = value
        if value:
            self.selected_glyphs.append(glyph)
            self.allocator.on_select(glyph)
        else:
            self.selected_glyphs.remove(glyph)
            self.allocator.on_deselect(glyph)

    def clear_selection(self) -> None:
        """Deselect every glyph."""
        for glyph in list(self.selected_glyphs):
            self.toggle_select(glyph, False)

    def reset_custom_font(self) -> None:
        """Clear the selection and drop every custom glyph."""
        self.clear_selection()
        self.remove_glyph(self.custom_font)

    def rename(self, glyph: Glyph, name: str) -> str:
        """Rename a glyph.

        Blank names revert to the import-time name.

        Returns:
            The name the glyph ends up with
        """
        name = name.strip() if name else ""
        glyph.name = name or glyph.original_name
        return glyph.name

    def set_code(self, glyph: Glyph, code: int) -> int:
        """Renumber a glyph through the allocator's edit protocol.

        Returns:
            The code the glyph ends up with
        """
        return self.allocator.change_code(glyph, code)
