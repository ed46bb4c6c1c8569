"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars, tables, and formatted messages.
"""

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

from iconsmith.config import GlyphDescriptor
from iconsmith.core.codes import is_valid_code
from iconsmith.utils import BuildStats

console = Console()

SYM_STEP = "▸"
SYM_OK = "✓"
SYM_ERR = "✗"
SYM_DOT = "·"


def create_progress() -> Progress:
    """Create a rich progress bar for source import.

    Returns:
        Configured Progress instance with bar and time elapsed.
    """
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )


def print_header(version: str) -> None:
    """Print application header."""
    console.print(f"\n[bold]Iconsmith[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a build step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_source_info(source_dir: str, source_count: int, config_found: bool) -> None:
    """Print what a build is about to read.

    Args:
        source_dir: Source directory
        source_count: Number of source files found
        config_found: Whether a persisted config exists
    """
    line = Text("  ")
    line.append(source_dir)
    console.print(line)
    config_state = "config.json found" if config_found else "no config.json"
    console.print(f"  {source_count:,} source files {SYM_DOT} {config_state}")


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def format_code(code: int | None) -> str:
    """Format a code point as U+XXXX."""
    if code is None:
        return "-"
    return f"U+{code:04X}"


def print_build_summary(stats: BuildStats, file_sizes: dict[str, str]) -> None:
    """Print build result with summary.

    Args:
        stats: Statistics of the finished build
        file_sizes: Human-readable size per written file
    """
    time_str = _format_time(stats.duration_seconds)
    failed = stats.export_failed or stats.error_count > 0

    if failed:
        console.print(f"\n[bold yellow]{SYM_ERR} Finished with errors[/bold yellow] in {time_str}")
    else:
        console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    for path, size in file_sizes.items():
        line = Text("  ")
        line.append(path, style="bold")
        line.append(f" ({size})")
        console.print(line)

    error_style = "red" if stats.error_count > 0 else "green"
    console.print(
        f"  {stats.processed_count} sources {SYM_DOT} {stats.glyphs_added} new glyphs {SYM_DOT} "
        f"{stats.duplicate_count} unchanged "
        f"{SYM_DOT} {stats.selected_count} selected {SYM_DOT} "
        f"[{error_style}]{stats.error_count} errors[/{error_style}]"
    )

    for source, error in stats.errors[:10]:
        console.print(f"  [red]{SYM_ERR}[/red] {escape(source)}: {escape(error)}")
    if len(stats.errors) > 10:
        console.print(f"  {SYM_DOT}{SYM_DOT}{SYM_DOT} (+{len(stats.errors) - 10} more)")


def print_code_table(glyphs: list[GlyphDescriptor]) -> None:
    """Print the glyph table of a persisted config.

    Selected glyphs with an invalid code or a code shared with another
    selected glyph are flagged.

    Args:
        glyphs: Descriptors in config order
    """
    counts: dict[int, int] = {}
    for glyph in glyphs:
        if glyph.selected and glyph.code is not None:
            counts[glyph.code] = counts.get(glyph.code, 0) + 1

    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Name")
    table.add_column("Code")
    table.add_column("Font")
    table.add_column("Selected", justify="center")
    table.add_column("Status")

    for index, glyph in enumerate(glyphs, start=1):
        if glyph.code is not None and not is_valid_code(glyph.code):
            status = "[red]invalid[/red]"
        elif glyph.selected and glyph.code is not None and counts[glyph.code] > 1:
            status = "[red]duplicate[/red]"
        else:
            status = f"[green]{SYM_OK}[/green]"
        table.add_row(
            str(index),
            escape(glyph.name) or "-",
            format_code(glyph.code),
            escape(glyph.owner_font_id),
            SYM_OK if glyph.selected else "",
            status,
        )

    console.print(table)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")


def print_cancellation_notice() -> None:
    """Print cancellation acknowledgment."""
    console.print(f"\n{SYM_DOT} [bold]Cancelled[/bold]")
    console.print("  Output files may be incomplete")


def print_config_header(name: str, total: int, selected: int) -> None:
    """Print the title line of a config listing."""
    line = Text("\n")
    line.append(name, style="bold")
    line.append(f" {total} glyphs {SYM_DOT} {selected} selected")
    console.print(line)
