"""Configuration settings for Iconsmith."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

CUSTOM_FONT_ID = "custom_icons"


class OutputFormat(str, Enum):
    """Font file formats the writer can emit."""

    TTF = "ttf"
    WOFF = "woff"
    WOFF2 = "woff2"
    SVG = "svg"


class FontSettings(BaseModel):
    """Global parameters of the generated font.

    These are the values persisted at the top level of config.json.
    Outlines are always kept in a 1000 units-per-em design grid;
    ``units_per_em`` and ``ascent`` only move the baseline on export.
    """

    name: str = Field(
        default="",
        description="Font name (empty = use the default family name)",
    )
    fullname: str | None = Field(
        default=None,
        description="Human readable full font name",
    )
    copyright: str | None = Field(
        default=None,
        description="Copyright notice written to the name table",
    )
    units_per_em: int = Field(
        default=1000,
        gt=0,
        description="Units per em used to interpret ascent",
    )
    ascent: int = Field(
        default=850,
        description="Ascent in units_per_em units",
    )
    css_prefix_text: str | None = Field(
        default="icon-",
        description="CSS class prefix for generated glyph classes",
    )
    css_use_suffix: bool | None = Field(
        default=False,
        description="Use the CSS prefix as a suffix instead",
    )
    custom_font_id: str = Field(
        default=CUSTOM_FONT_ID,
        description="Identity of the single mutable font",
    )

    @property
    def family_name(self) -> str:
        """Get the family name used for output files and the name table."""
        return self.name.strip() or "iconsmith"


class BuildConfig(BaseModel):
    """Configuration for a build run."""

    config_filename: str = Field(
        default="config.json",
        description="Reserved file name of the persisted config inside the source directory",
    )
    extensions: list[str] = Field(
        default_factory=lambda: [".svg"],
        description="Source file extensions to scan for",
    )
    formats: list[OutputFormat] = Field(
        default_factory=lambda: [
            OutputFormat.TTF,
            OutputFormat.WOFF,
            OutputFormat.WOFF2,
            OutputFormat.SVG,
        ],
        description="Font formats to write",
    )
    output_dir: Path | None = Field(
        default=None,
        description="Directory for font files (None = <source>/dist)",
    )
    max_workers: int | None = Field(
        default=None,
        description="Max reader threads (None = auto)",
    )
    source_fonts: list[Path] = Field(
        default_factory=list,
        description="SVG fonts loaded as read-only glyph sources",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class IconsmithSettings(BaseModel):
    """Main application settings."""

    font: FontSettings = Field(default_factory=FontSettings)
    build: BuildConfig = Field(default_factory=BuildConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> IconsmithSettings:
    """Get default application settings."""
    return IconsmithSettings()
