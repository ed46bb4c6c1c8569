"""Path arithmetic on SVG path data.

Outlines are stored as SVG path strings. Every transformation parses the
path into a fontTools pen pipeline, applies an affine transform and
writes absolute path data back with rounded coordinates. Arcs are
converted to cubic curves on the way.

Key functions:
- transform_path: Apply an affine transform and round
- path_bounds: Control box of path data
- normalize_image: SVG image -> design grid outline
- font_to_grid: SVG font glyph -> design grid path
- grid_to_font: Design grid path -> font coordinates (y up)
"""

from fontTools.misc.transform import Transform
from fontTools.pens.boundsPen import ControlBoundsPen
from fontTools.pens.svgPathPen import SVGPathPen
from fontTools.pens.transformPen import TransformPen
from fontTools.svgLib.path import parse_path

from iconsmith.domain.glyph import GlyphOutline
from iconsmith.utils.numbers import number_formatter, round_half_up

DESIGN_GRID = 1000


def transform_path(
    path: str,
    transformation: Transform | tuple[float, float, float, float, float, float],
    decimals: int | None = 1,
) -> str:
    """Apply an affine transform to path data.

    Args:
        path: SVG path data
        transformation: Affine transform (xx, xy, yx, yy, dx, dy)
        decimals: Decimal places of output coordinates

    Returns:
        Absolute SVG path data
    """
    if not path.strip():
        return ""
    out = SVGPathPen(None, ntos=number_formatter(decimals))
    parse_path(path, TransformPen(out, transformation))
    return out.getCommands()


def round_path(path: str, decimals: int = 1) -> str:
    """Convert path data to absolute commands with rounded coordinates."""
    return transform_path(path, Transform(), decimals)


def path_bounds(path: str) -> tuple[float, float, float, float] | None:
    """Get the control box of path data.

    Returns:
        (x_min, y_min, x_max, y_max), or None for empty path data
    """
    if not path.strip():
        return None
    pen = ControlBoundsPen(None)
    parse_path(path, pen)
    return pen.bounds


def normalize_image(
    path: str, x: float, y: float, width: float, height: float
) -> GlyphOutline:
    """Fit an SVG image into the design grid.

    Translates by the image origin, scales uniformly so the image height
    spans the grid, and rounds coordinates to one decimal place.

    Args:
        path: Merged path data of the image
        x: Bounding box x (viewBox origin)
        y: Bounding box y (viewBox origin)
        width: Bounding box width
        height: Bounding box height

    Returns:
        Normalized outline

    Raises:
        ValueError: If the height is not positive
    """
    if height <= 0:
        raise ValueError(f"Image height must be positive, got {height}")

    scale = DESIGN_GRID / height
    # translate(-x, -y) then scale(scale)
    transformation = Transform(scale, 0, 0, scale, -x * scale, -y * scale)
    return GlyphOutline(
        path=transform_path(path, transformation),
        width=round_half_up(width * scale),
    )


def font_to_grid(path: str, ascent: float, units_per_em: float) -> str:
    """Re-express an SVG font glyph in the design grid.

    Font glyphs have the y axis pointing up from the baseline; the grid
    has it pointing down from the ascent line.
    """
    scale = DESIGN_GRID / units_per_em
    # translate(0, -ascent) then scale(scale, -scale)
    return transform_path(path, Transform(scale, 0, 0, -scale, 0, ascent * scale))


def grid_to_font(path: str, ascent: float) -> str:
    """Flip a design grid path into font coordinates.

    Inverse orientation of ``font_to_grid`` for a 1000 units-per-em font:
    scale(1, -1) then translate(0, ascent).
    """
    return transform_path(path, Transform(1, 0, 0, -1, 0, ascent))
