"""Command-line interface for iconsmith.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Progress bars for source import
- Verbose/quiet output modes
- Glyph code table of a persisted config
"""

from iconsmith.cli.app import cli, main

__all__ = ["cli", "main"]
