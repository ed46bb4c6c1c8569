"""Shared fixtures: small SVG sources."""

import pytest
import structlog

# 100x200 box at (10, 20)
TALL_BOX_SVG = (
    b'<svg xmlns="http://www.w3.org/2000/svg" viewBox="10 20 100 200">'
    b'<path d="M10 20L110 20L110 220L10 220Z"/>'
    b"</svg>"
)

SQUARE_SVG = (
    b'<svg xmlns="http://www.w3.org/2000/svg" width="24" height="24">'
    b'<rect x="2" y="2" width="20" height="20"/>'
    b"</svg>"
)

# units-per-em 2000, ascent 1700
DEMO_FONT_SVG = (
    b'<svg xmlns="http://www.w3.org/2000/svg"><defs>'
    b'<font id="demo" horiz-adv-x="500">'
    b'<font-face font-family="demo" units-per-em="2000" ascent="1700" descent="-300"/>'
    b'<glyph glyph-name="alpha" unicode="a" horiz-adv-x="1000" d="M0 0L1000 0L1000 2000L0 2000Z"/>'
    b'<glyph glyph-name="space" unicode=" " horiz-adv-x="500"/>'
    b'<glyph glyph-name="zero" unicode="z" horiz-adv-x="0" d="M0 0L10 10L0 10Z"/>'
    b'<glyph unicode="d" d="M0 0L100 100L0 100Z"/>'
    b"</font></defs></svg>"
)


@pytest.fixture
def tall_box_svg() -> bytes:
    """SVG image whose viewBox is a 100x200 box at (10, 20)."""
    return TALL_BOX_SVG


@pytest.fixture
def square_svg() -> bytes:
    """24x24 SVG image sized by width/height, drawn with a rect."""
    return SQUARE_SVG


@pytest.fixture
def demo_font_svg() -> bytes:
    """SVG font with one usable glyph, one default-advance glyph and two skipped ones."""
    return DEMO_FONT_SVG


@pytest.fixture
def logger() -> structlog.stdlib.BoundLogger:
    """Logger that leaves the global logging setup alone."""
    return structlog.get_logger("iconsmith.tests")
