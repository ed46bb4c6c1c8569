"""Logging utilities for Iconsmith."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog


@dataclass
class BuildStats:
    """Statistics from a build run."""

    imported_count: int = 0
    glyphs_added: int = 0
    duplicate_count: int = 0
    skipped_count: int = 0
    error_count: int = 0
    selected_count: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    written_files: list[Path] = field(default_factory=list)
    config_loaded: bool = False
    export_failed: bool = False
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate build duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def processed_count(self) -> int:
        """Number of sources that were read, imported or recognised as duplicates."""
        return self.imported_count + self.duplicate_count


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("iconsmith")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class BuildLogger:
    """Logger for tracking build progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = BuildStats()

    def log_source_imported(self, source: str, kind: str, glyphs_added: int) -> None:
        """Log a source that produced new glyphs."""
        self._logger.info(
            "Source imported",
            source=source,
            kind=kind,
            glyphs=glyphs_added,
        )
        self._stats.imported_count += 1
        self._stats.glyphs_added += glyphs_added

    def log_source_duplicate(self, source: str, content_hash: str, reselected: int) -> None:
        """Log a source whose fingerprint is already registered."""
        self._logger.debug(
            "Source already imported",
            source=source,
            content_hash=content_hash,
            reselected=reselected,
        )
        self._stats.duplicate_count += 1

    def log_source_skipped(self, source: str, reason: str) -> None:
        """Log skipped source."""
        self._logger.debug("Source skipped", source=source, reason=reason)
        self._stats.skipped_count += 1

    def log_source_error(
        self,
        source: str,
        error: Exception | str,
        traceback: str | None = None,
    ) -> None:
        """Log source read or import error."""
        self._logger.error(
            "Source import failed",
            source=source,
            error=str(error),
            error_type=type(error).__name__ if isinstance(error, Exception) else None,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((source, str(error)))

    def log_glyph_skipped(self, source: str, glyph_name: str, reason: str) -> None:
        """Log a glyph of a font source that was not imported."""
        self._logger.debug(
            "Glyph skipped",
            source=source,
            glyph=glyph_name,
            reason=reason,
        )

    @property
    def stats(self) -> BuildStats:
        """Get current build statistics."""
        return self._stats
