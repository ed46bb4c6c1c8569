"""Configuration management for iconsmith.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments, the persisted
config.json of a source directory, or defaults.

Key classes:
- FontSettings: Global parameters of the generated font
- BuildConfig: Build run settings
- LoggingConfig: Logging settings
- IconsmithSettings: Main application settings
- ProjectConfig: Persisted config.json schema
- GlyphDescriptor: One glyph entry of the persisted config
"""

from iconsmith.config.project import GlyphDescriptor, ProjectConfig
from iconsmith.config.settings import (
    CUSTOM_FONT_ID,
    BuildConfig,
    FontSettings,
    IconsmithSettings,
    LoggingConfig,
    OutputFormat,
    get_default_settings,
)

__all__ = [
    "CUSTOM_FONT_ID",
    "BuildConfig",
    "FontSettings",
    "GlyphDescriptor",
    "IconsmithSettings",
    "LoggingConfig",
    "OutputFormat",
    "ProjectConfig",
    "get_default_settings",
]
