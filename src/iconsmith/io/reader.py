"""Source reader for SVG icon images and SVG fonts.

This module reads source files, fingerprints their bytes and parses them
into plain data structures the importer turns into glyphs. Reading is
side-effect free so many files can be loaded concurrently.
"""

import hashlib
import re
import traceback
import xml.etree.ElementTree as ET
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from fontTools.pens.svgPathPen import SVGPathPen
from fontTools.svgLib import SVGPath

from iconsmith.exceptions import SourceFormatError, SourceReadError
from iconsmith.utils.numbers import number_formatter

_NUMBER_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


class SourceKind(Enum):
    """Kind of a glyph source file."""

    IMAGE = "image"
    FONT = "font"


@dataclass
class SvgImage:
    """A single SVG icon image flattened to one path.

    Attributes:
        path: Merged path data of every drawable element
        x: Bounding box x (viewBox origin)
        y: Bounding box y (viewBox origin)
        width: Bounding box width
        height: Bounding box height
    """

    path: str
    x: float
    y: float
    width: float
    height: float


@dataclass
class SvgFontGlyph:
    """A ``<glyph>`` element of an SVG font."""

    name: str
    path: str
    unicode: str | None = None
    advance: float | None = None

    @property
    def code(self) -> int | None:
        """Get the first code point of the unicode attribute."""
        return ord(self.unicode[0]) if self.unicode else None


@dataclass
class SvgFont:
    """An SVG font (``<font>``/``<font-face>``/``<glyph>`` document)."""

    font_id: str
    ascent: float
    units_per_em: float
    default_advance: float | None = None
    glyphs: list[SvgFontGlyph] = field(default_factory=list)


@dataclass
class LoadedSource:
    """Result of reading one source file.

    Exactly one of ``image``, ``font`` or ``error`` is set.
    """

    path: Path
    content_hash: str | None = None
    kind: SourceKind | None = None
    image: SvgImage | None = None
    font: SvgFont | None = None
    error: str | None = None
    traceback: str | None = None

    @property
    def ok(self) -> bool:
        """Check if the source was read and parsed."""
        return self.error is None


def fingerprint(data: bytes) -> str:
    """Compute the content fingerprint of source bytes (md5 hex)."""
    return hashlib.md5(data).hexdigest()


def detect_kind(data: bytes) -> SourceKind:
    """Tell SVG fonts from SVG images."""
    return SourceKind.FONT if b"<font" in data else SourceKind.IMAGE


def _local_name(tag: object) -> str:
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def _parse_length(value: str | None) -> float | None:
    if not value:
        return None
    match = _NUMBER_RE.match(value.strip())
    return float(match.group()) if match else None


def parse_svg_image(data: bytes, source: str = "<memory>") -> SvgImage:
    """Flatten an SVG image into one path plus its bounding box.

    The bounding box is taken from ``viewBox``, or from the ``width`` and
    ``height`` attributes with the origin at (0, 0).

    Args:
        data: SVG document bytes
        source: Name used in error messages

    Returns:
        Parsed image

    Raises:
        SourceFormatError: If the document is not usable as an icon
    """
    try:
        svg = SVGPath.fromstring(data)
    except Exception as e:
        raise SourceFormatError(source, f"not a valid SVG document: {e}") from e

    root = svg.root
    if _local_name(root.tag) != "svg":
        raise SourceFormatError(source, "root element is not <svg>")

    view_box = root.attrib.get("viewBox")
    if view_box:
        numbers = [float(n) for n in _NUMBER_RE.findall(view_box)]
        if len(numbers) != 4:
            raise SourceFormatError(source, f"malformed viewBox '{view_box}'")
        x, y, width, height = numbers
    else:
        x = y = 0.0
        width = _parse_length(root.attrib.get("width")) or 0.0
        height = _parse_length(root.attrib.get("height")) or 0.0

    if width <= 0 or height <= 0:
        raise SourceFormatError(source, "missing or empty image dimensions")

    pen = SVGPathPen(None, ntos=number_formatter(None))
    try:
        svg.draw(pen)
    except Exception as e:
        raise SourceFormatError(source, f"cannot draw paths: {e}") from e

    path = pen.getCommands()
    if not path:
        raise SourceFormatError(source, "no drawable elements")

    return SvgImage(path=path, x=x, y=y, width=width, height=height)


def parse_svg_font(data: bytes, source: str = "<memory>") -> SvgFont:
    """Parse an SVG font document.

    Args:
        data: SVG font bytes
        source: Name used in error messages

    Returns:
        Parsed font with every ``<glyph>`` element, including blank ones

    Raises:
        SourceFormatError: If the document has no ``<font>`` element
    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        raise SourceFormatError(source, f"not a valid SVG document: {e}") from e

    font_el = next((el for el in root.iter() if _local_name(el.tag) == "font"), None)
    if font_el is None:
        raise SourceFormatError(source, "no <font> element")

    face_el = next((el for el in font_el.iter() if _local_name(el.tag) == "font-face"), None)
    face = face_el.attrib if face_el is not None else {}

    units_per_em = _parse_length(face.get("units-per-em")) or 1000.0
    ascent = _parse_length(face.get("ascent"))
    if ascent is None:
        ascent = units_per_em * 0.85

    font = SvgFont(
        font_id=font_el.attrib.get("id", "") or face.get("font-family", ""),
        ascent=ascent,
        units_per_em=units_per_em,
        default_advance=_parse_length(font_el.attrib.get("horiz-adv-x")),
    )

    for el in font_el.iter():
        if _local_name(el.tag) != "glyph":
            continue
        font.glyphs.append(
            SvgFontGlyph(
                name=el.attrib.get("glyph-name") or "glyph",
                path=el.attrib.get("d", ""),
                unicode=el.attrib.get("unicode") or None,
                advance=_parse_length(el.attrib.get("horiz-adv-x")),
            )
        )

    return font


def read_source(path: Path) -> tuple[bytes, str]:
    """Read a source file and fingerprint it.

    Raises:
        SourceReadError: If the file cannot be read
    """
    try:
        data = path.read_bytes()
    except OSError as e:
        raise SourceReadError(str(path), str(e)) from e
    return data, fingerprint(data)


def load_source(path: Path) -> LoadedSource:
    """Read, fingerprint and parse one source file.

    Designed to run in worker threads: never raises, failures are
    reported in the ``error`` field.

    Args:
        path: Source file

    Returns:
        LoadedSource with the parsed image or font, or the error
    """
    result = LoadedSource(path=path)
    try:
        data, result.content_hash = read_source(path)
        result.kind = detect_kind(data)
        if result.kind is SourceKind.FONT:
            result.font = parse_svg_font(data, source=str(path))
        else:
            result.image = parse_svg_image(data, source=str(path))
    except Exception as e:
        result.error = str(e)
        result.traceback = traceback.format_exc()
    return result


class SourceReader:
    """Scans a directory for glyph source files.

    Example:
        reader = SourceReader(Path("icons"), exclude=["config.json"])
        for path in reader.scan():
            print(path.name)
    """

    def __init__(
        self,
        directory: Path,
        extensions: Iterable[str] = (".svg",),
        exclude: Iterable[str] = (),
    ) -> None:
        """Initialize the source reader.

        Args:
            directory: Directory to scan (not recursive)
            extensions: File extensions to pick up, case-insensitive
            exclude: File names to skip
        """
        self._directory = directory
        self._extensions = {ext.lower() for ext in extensions}
        self._exclude = set(exclude)

    def scan(self) -> list[Path]:
        """List source files in name order.

        Raises:
            FileNotFoundError: If the directory does not exist
        """
        if not self._directory.is_dir():
            raise FileNotFoundError(f"Source directory not found: {self._directory}")

        return sorted(
            path
            for path in self._directory.iterdir()
            if path.is_file()
            and path.suffix.lower() in self._extensions
            and path.name not in self._exclude
        )
