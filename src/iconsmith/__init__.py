"""Iconsmith - Build custom icon fonts from SVG sources.

Iconsmith is a CLI tool that collects SVG icon images and SVG fonts from a
directory, assigns each glyph a unique and valid Unicode code point, and
writes the result as TTF/WOFF/WOFF2/SVG fonts plus a reloadable config.json.

Example:
    $ iconsmith build ./icons

This will read ./icons/config.json (if present), import every SVG file in
./icons, write back the curated config.json and emit the font files.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
