"""Font assembler.

Turns the selected glyphs of a font into the encoder input: outlines
are flipped from the y-down design grid into font coordinates and the
ascent is rescaled to the 1000-unit em.
"""

from collections.abc import Iterable

import structlog

from iconsmith.config.settings import FontSettings
from iconsmith.core.outline import DESIGN_GRID, grid_to_font
from iconsmith.core.registry import FontCollection
from iconsmith.domain import Font, FontDefinition, Glyph, GlyphDefinition
from iconsmith.exceptions import FontAssemblyError
from iconsmith.utils.numbers import round_half_up


class FontAssembler:
    """Builds FontDefinition objects from selected glyphs.

    Example:
        assembler = FontAssembler(settings.font)
        definition = assembler.assemble(collection.custom_font)
        if definition is not None:
            FontWriter(definition, settings.font).save(output_dir, formats)
    """

    def __init__(
        self,
        font_settings: FontSettings,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self.font_settings = font_settings
        self._logger = logger or structlog.get_logger("iconsmith.assembler")

    @property
    def ascent(self) -> int:
        """Get the ascent rescaled to the design grid."""
        return round_half_up(
            self.font_settings.ascent * DESIGN_GRID / self.font_settings.units_per_em
        )

    def _definition(self, font_id: str, glyphs: Iterable[Glyph]) -> FontDefinition | None:
        ascent = self.ascent
        definitions = []
        for glyph in glyphs:
            if glyph.is_empty() or glyph.code is None:
                self._logger.warning("Glyph without outline not exported", glyph=glyph.uid)
                continue
            name = glyph.name or glyph.original_name
            try:
                outline = grid_to_font(glyph.outline.path, ascent)
            except (ValueError, IndexError) as e:
                raise FontAssemblyError(font_id, f"glyph '{name}': {e}") from e
            definitions.append(
                GlyphDefinition(
                    name=name,
                    code=glyph.code,
                    outline=outline,
                    width=glyph.outline.width,
                )
            )

        if not definitions:
            return None

        return FontDefinition(
            font_id=font_id,
            ascent=ascent,
            descent=ascent - DESIGN_GRID,
            glyphs=definitions,
        )

    def assemble(self, font: Font) -> FontDefinition | None:
        """Assemble the selected glyphs of one font.

        Args:
            font: Font to assemble

        Returns:
            FontDefinition, or None when the font has no selected glyphs

        Raises:
            FontAssemblyError: If an outline is malformed
        """
        if not font.glyphs:
            return None
        return self._definition(font.font_id, font.selected_glyphs())

    def assemble_selection(
        self, collection: FontCollection, font_id: str | None = None
    ) -> FontDefinition | None:
        """Assemble every selected glyph of a collection in selection order.

        Args:
            collection: Collection to export
            font_id: Identity of the output font (the custom font id if None)

        Returns:
            FontDefinition, or None when nothing is selected

        Raises:
            FontAssemblyError: If an outline is malformed
        """
        font_id = font_id or collection.custom_font.font_id
        definition = self._definition(font_id, collection.selected_glyphs)
        if definition is not None:
            self._logger.debug(
                "Selection assembled",
                font=font_id,
                glyphs=len(definition.glyphs),
                ascent=definition.ascent,
            )
        return definition
