"""CLI application entry point for iconsmith.

This module provides the main CLI interface using Typer.
"""

import os
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from iconsmith import __version__
from iconsmith.cli.output import (
    console,
    create_progress,
    print_build_summary,
    print_cancellation_notice,
    print_code_table,
    print_config_header,
    print_error,
    print_header,
    print_source_info,
    print_step,
)
from iconsmith.config import (
    BuildConfig,
    FontSettings,
    IconsmithSettings,
    LoggingConfig,
    OutputFormat,
    ProjectConfig,
)
from iconsmith.core import IconFontBuilder
from iconsmith.exceptions import FontSaveError, IconsmithError, SourceError
from iconsmith.io import SourceReader

app = typer.Typer(
    name="iconsmith",
    help="Build icon fonts from SVG images and SVG fonts.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Iconsmith[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def _root(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Build icon fonts from SVG images and SVG fonts."""


@app.command()
def build(
    source_dir: Annotated[
        Path,
        typer.Argument(
            help="Directory with SVG sources and config.json",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output directory for font files (default: SOURCE_DIR/dist)",
        ),
    ] = None,
    name: Annotated[
        str,
        typer.Option(
            "--name",
            help="Font family name when config.json sets none",
        ),
    ] = "",
    formats: Annotated[
        list[OutputFormat] | None,
        typer.Option(
            "--format",
            "-f",
            help="Font format to write (repeatable, default: all)",
            case_sensitive=False,
        ),
    ] = None,
    source_fonts: Annotated[
        list[Path] | None,
        typer.Option(
            "--source-font",
            "-s",
            help="SVG font to offer as a read-only glyph source (repeatable)",
        ),
    ] = None,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of reader threads (default: auto)",
            min=1,
        ),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
) -> None:
    """Build an icon font from a source directory.

    Reads config.json, imports every SVG image and SVG font found in the
    directory, writes the updated config.json back and exports the
    selected glyphs.

    Example:
        iconsmith build icons -o dist --format woff2
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if not source_dir.is_dir():
        print_error(
            f"Source directory not found: {source_dir}",
            details=f"The directory '{source_dir}' does not exist or is not a directory.",
        )
        raise typer.Exit(code=1)

    if verbose and log_level.upper() == "WARNING":
        log_level = "INFO"

    build_config = BuildConfig(
        output_dir=output,
        max_workers=workers,
        source_fonts=source_fonts or [],
    )
    if formats:
        build_config.formats = list(dict.fromkeys(formats))

    settings = IconsmithSettings(
        font=FontSettings(name=name),
        build=build_config,
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "ERROR",
        ),
    )

    if not quiet:
        print_header(__version__)

    try:
        builder = IconFontBuilder(settings)

        paths = SourceReader(
            source_dir,
            extensions=settings.build.extensions,
            exclude=[settings.build.config_filename],
        ).scan()

        if not quiet:
            print_step("Reading sources")
            print_source_info(
                str(source_dir),
                len(paths),
                builder.get_config_path(source_dir).is_file(),
            )
            actual_workers = workers if workers else min(32, (os.cpu_count() or 1) + 4)
            console.print(f"  {actual_workers} reader threads")

        try:
            if not quiet and paths:
                with create_progress() as progress:
                    task_id = progress.add_task(
                        f"Importing {len(paths)} files",
                        total=len(paths),
                    )

                    def update_progress(completed: int, *_: object) -> None:
                        progress.update(task_id, completed=completed)

                    stats = builder.build(source_dir, progress_callback=update_progress)
            else:
                stats = builder.build(source_dir)
        except KeyboardInterrupt:
            if not quiet:
                print_cancellation_notice()
            raise typer.Exit(code=130) from None

        if not quiet:
            print_build_summary(
                stats,
                {str(path): _format_file_size(path) for path in stats.written_files},
            )

        if stats.error_count or stats.export_failed:
            raise typer.Exit(code=1)

    except FileNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except SourceError as e:
        print_error(f"Could not read source: {e}")
        raise typer.Exit(code=1)
    except FontSaveError as e:
        print_error(f"Could not write {e.path}: {e.reason}")
        raise typer.Exit(code=1)
    except IconsmithError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


@app.command()
def codes(
    config_file: Annotated[
        Path,
        typer.Argument(
            help="Path to a config.json",
            show_default=False,
        ),
    ],
) -> None:
    """Show the glyphs of a config.json with their code points.

    Invalid codes and codes shared by selected glyphs are flagged.
    """
    if not config_file.is_file():
        print_error(f"Config file not found: {config_file}")
        raise typer.Exit(code=1)

    try:
        config = ProjectConfig.from_json(config_file.read_bytes())
    except ValidationError as e:
        print_error(
            f"Could not parse config: {config_file}",
            details=f"{e.error_count()} validation errors",
        )
        raise typer.Exit(code=1)

    print_config_header(
        config.name or FontSettings().family_name,
        total=len(config.glyphs),
        selected=sum(1 for glyph in config.glyphs if glyph.selected),
    )
    print_code_table(config.glyphs)


def _format_file_size(path: Path) -> str:
    """Format file size in human-readable form.

    Args:
        path: Path to file

    Returns:
        Human-readable file size (e.g., "12 KB")
    """
    try:
        size_bytes = path.stat().st_size
    except OSError:
        return "unknown"
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
