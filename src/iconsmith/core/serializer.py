"""Config serializer.

Projects the curation state of a FontCollection into the persisted
config: selected glyphs in selection order, followed by unselected
custom glyphs so imported icons survive a rebuild.
"""

from iconsmith.config.project import GlyphDescriptor, ProjectConfig
from iconsmith.config.settings import FontSettings
from iconsmith.core.registry import FontCollection
from iconsmith.domain import Glyph


def describe_glyph(glyph: Glyph, custom: bool) -> GlyphDescriptor:
    """Build the persisted descriptor of one glyph.

    Args:
        glyph: Glyph to describe
        custom: Whether the glyph belongs to the custom font (outline is stored)

    Returns:
        Descriptor for config.json
    """
    descriptor = GlyphDescriptor(
        uid=glyph.uid,
        name=glyph.name or "",
        code=glyph.code,
        content_hash=glyph.content_hash,
        owner_font_id=glyph.font_id,
        selected=glyph.selected,
    )
    if custom and glyph.outline is not None:
        descriptor.outline = glyph.outline.path
        descriptor.width = glyph.outline.width
    return descriptor


def serialize(collection: FontCollection, font_settings: FontSettings) -> ProjectConfig:
    """Serialize a collection into the persisted config.

    Args:
        collection: Collection to serialize
        font_settings: Global font parameters

    Returns:
        Config whose import reproduces the selection, names and codes
    """
    custom_font = collection.custom_font
    descriptors = [
        describe_glyph(glyph, glyph.font_id == custom_font.font_id)
        for glyph in collection.selected_glyphs
    ]
    descriptors.extend(
        describe_glyph(glyph, True) for glyph in custom_font.glyphs if not glyph.selected
    )
    return ProjectConfig.from_font_settings(font_settings, descriptors)
