"""Build orchestration for icon fonts.

This module coordinates one build run over a source directory:

1. Load read-only source fonts
2. Replay the persisted config (config.json)
3. Scan and import source files (read concurrently, applied serially)
4. Persist the updated config
5. Assemble the selection and write font files

Key components:
- IconFontBuilder: Main orchestrator class for a build run
"""

import time
from collections.abc import Callable
from pathlib import Path

import structlog

from iconsmith.config import FontSettings, IconsmithSettings
from iconsmith.core.assembler import FontAssembler
from iconsmith.core.importer import GlyphImporter
from iconsmith.core.registry import FontCollection
from iconsmith.core.serializer import serialize
from iconsmith.exceptions import ConfigLoadError, FontBuildError, SourceError
from iconsmith.io import FontWriter, SourceReader, write_project_config
from iconsmith.utils import BuildStats, configure_logging


class IconFontBuilder:
    """Orchestrates an icon font build.

    Example:
        settings = IconsmithSettings()
        builder = IconFontBuilder(settings)
        stats = builder.build(source_dir=Path("icons"))
        print(stats.written_files)
    """

    def __init__(
        self,
        config: IconsmithSettings,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the builder with configuration.

        Args:
            config: Iconsmith settings
            logger: Logger to use (logging is configured from ``config`` if None)
        """
        self.config = config
        if logger is None:
            logger = configure_logging(
                log_file=config.logging.log_file,
                console_level=config.logging.log_level,
                file_level=config.logging.file_log_level,
                quiet=False,
            )
        self.logger = logger
        self.collection = FontCollection(
            custom_font_id=config.font.custom_font_id,
            logger=self.logger,
        )
        self.importer = GlyphImporter(self.collection, config.font, logger=self.logger)

    @property
    def font_settings(self) -> FontSettings:
        """Get the global font parameters in effect (updated by config.json)."""
        return self.importer.font_settings

    def get_config_path(self, source_dir: Path) -> Path:
        """Get the location of the persisted config inside a source directory."""
        return source_dir / self.config.build.config_filename

    def get_output_dir(self, source_dir: Path) -> Path:
        """Get the font output directory (``<source>/dist`` unless configured)."""
        return self.config.build.output_dir or source_dir / "dist"

    def build(
        self,
        source_dir: Path,
        output_dir: Path | None = None,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> BuildStats:
        """Run a build over a source directory.

        Args:
            source_dir: Directory holding SVG sources and config.json
            output_dir: Directory for font files (default from settings)
            progress_callback: Optional callback(completed, total, file_name, success)
                for progress updates

        Returns:
            BuildStats with counts, timing, written files and error details

        Raises:
            FileNotFoundError: If the source directory does not exist
            ConfigLoadError: If config.json exists but cannot be read
            FontSaveError: If config.json cannot be written
            CodeSpaceExhaustedError: If the Private Use Area is run out
        """
        stats = self.importer.build_logger.stats
        stats.start_time = time.time()

        if output_dir is None:
            output_dir = self.get_output_dir(source_dir)

        self.logger.info(
            "Starting build",
            source=str(source_dir),
            output=str(output_dir),
            max_workers=self.config.build.max_workers,
        )

        self._load_source_fonts()

        config_path = self.get_config_path(source_dir)
        if config_path.is_file():
            try:
                text = config_path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                raise ConfigLoadError(str(config_path), str(e)) from e
            stats.config_loaded = self.importer.import_config(text) is not None

        reader = SourceReader(
            source_dir,
            extensions=self.config.build.extensions,
            exclude=[self.config.build.config_filename],
        )
        paths = reader.scan()

        self.importer.import_sources(
            paths,
            max_workers=self.config.build.max_workers,
            progress_callback=progress_callback,
        )

        write_project_config(serialize(self.collection, self.font_settings), config_path)
        self.logger.info("Config written", path=str(config_path))

        stats.selected_count = len(self.collection.selected_glyphs)
        self._export(output_dir, stats)

        stats.end_time = time.time()

        self.logger.info(
            "Build complete",
            imported=stats.imported_count,
            duplicates=stats.duplicate_count,
            errors=stats.error_count,
            selected=stats.selected_count,
            files=len(stats.written_files),
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return stats

    def _load_source_fonts(self) -> None:
        """Register configured SVG fonts as read-only sources."""
        build_logger = self.importer.build_logger
        for path in self.config.build.source_fonts:
            try:
                self.importer.load_source_font(path)
            except (SourceError, ValueError) as e:
                build_logger.log_source_error(str(path), e)

    def _export(self, output_dir: Path, stats: BuildStats) -> None:
        """Assemble the selection and write every configured format."""
        assembler = FontAssembler(self.font_settings, logger=self.logger)
        font_id = self.collection.custom_font.font_id
        try:
            definition = assembler.assemble_selection(self.collection, font_id)
            if definition is None:
                self.logger.warning("No glyphs selected, nothing to export")
                return
            writer = FontWriter(definition, self.font_settings)
            stats.written_files = writer.save(output_dir, self.config.build.formats)
        except FontBuildError as e:
            stats.export_failed = True
            stats.errors.append((font_id, str(e)))
            self.logger.error(
                "Font export failed",
                font=font_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            return

        for path in stats.written_files:
            self.logger.info("Font written", path=str(path))
