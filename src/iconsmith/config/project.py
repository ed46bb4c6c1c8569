"""Persisted project config (config.json) schema.

The project config is the declarative, reloadable form of a user's
curation: global font parameters plus an ordered list of glyph
descriptors. Keys use the camelCase spelling of the on-disk format,
while legacy ``src`` and ``svg: {path, width}`` entries are still read.
"""

from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)

from iconsmith.config.settings import FontSettings


class GlyphDescriptor(BaseModel):
    """One glyph entry of the persisted config.

    Attributes:
        uid: Glyph identity
        name: Current glyph name (empty = keep original)
        code: Current code point (None/0 = keep original)
        content_hash: Fingerprint of the source the glyph came from
        owner_font_id: Identity of the font owning the glyph
        outline: Normalized path data (custom font entries only)
        width: Advance width (custom font entries only)
        selected: Whether the glyph is part of the exported selection
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    uid: str
    name: str = ""
    code: int | None = None
    content_hash: str | None = Field(
        default=None,
        validation_alias=AliasChoices("contentHash", "content_hash"),
        serialization_alias="contentHash",
    )
    owner_font_id: str = Field(
        validation_alias=AliasChoices("ownerFontId", "owner_font_id", "src"),
        serialization_alias="ownerFontId",
    )
    outline: str | None = None
    width: int | float | None = None
    selected: bool = True

    @model_validator(mode="before")
    @classmethod
    def _unpack_legacy_svg(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("svg"), dict):
            data = dict(data)
            svg = data.pop("svg")
            data.setdefault("outline", svg.get("path"))
            data.setdefault("width", svg.get("width"))
        return data

    @field_validator("name", mode="before")
    @classmethod
    def _empty_name(cls, value: Any) -> Any:
        return value or ""


class ProjectConfig(BaseModel):
    """The whole persisted config."""

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    css_prefix_text: str | None = None
    css_use_suffix: bool | None = None
    units_per_em: int = 1000
    ascent: int = 850
    copyright: str | None = None
    fullname: str | None = None
    glyphs: list[GlyphDescriptor] = Field(default_factory=list)

    @field_validator("name", mode="before")
    @classmethod
    def _empty_name(cls, value: Any) -> Any:
        return value or ""

    @field_validator("units_per_em", "ascent", mode="before")
    @classmethod
    def _default_metric(cls, value: Any, info: ValidationInfo) -> Any:
        # Zero, empty and missing metrics fall back to the defaults
        if not value:
            return cls.model_fields[info.field_name].default
        return value

    @field_validator("units_per_em")
    @classmethod
    def _positive_units_per_em(cls, value: int) -> int:
        # A negative em would flip every glyph on export
        return value if value > 0 else cls.model_fields["units_per_em"].default

    @classmethod
    def from_json(cls, text: str | bytes) -> "ProjectConfig":
        """Parse config.json content.

        Raises:
            pydantic.ValidationError: If the text is not valid JSON or
                does not match the schema
        """
        return cls.model_validate_json(text)

    def to_json(self) -> str:
        """Serialize to config.json content."""
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=2)

    @classmethod
    def from_font_settings(
        cls, settings: FontSettings, glyphs: list[GlyphDescriptor]
    ) -> "ProjectConfig":
        """Build a config from the global font parameters and descriptors."""
        return cls(
            name=settings.name,
            css_prefix_text=settings.css_prefix_text,
            css_use_suffix=settings.css_use_suffix,
            units_per_em=settings.units_per_em,
            ascent=settings.ascent,
            copyright=settings.copyright,
            fullname=settings.fullname,
            glyphs=glyphs,
        )

    def apply_to(self, settings: FontSettings) -> FontSettings:
        """Return a copy of ``settings`` updated with this config's parameters.

        Optional keys absent from the config, and an empty name, keep their
        current values.
        """
        update: dict[str, Any] = {
            "units_per_em": self.units_per_em,
            "ascent": self.ascent,
        }
        if self.name:
            update["name"] = self.name
        for key in ("css_prefix_text", "css_use_suffix", "copyright", "fullname"):
            value = getattr(self, key)
            if value is not None:
                update[key] = value
        return settings.model_copy(update=update)
