"""Import pipeline: persisted config, SVG images and SVG fonts.

The importer turns source data into glyphs of a FontCollection and
reconciles a persisted config with the glyphs already known. Source
files are read and parsed concurrently; the resulting collection
mutations are applied one at a time on the calling thread.
"""

import hashlib
import re
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

import structlog
from pydantic import ValidationError

from iconsmith.config.project import GlyphDescriptor, ProjectConfig
from iconsmith.config.settings import FontSettings
from iconsmith.core.codes import UNICODE_PRIVATE_USE_AREA_MIN
from iconsmith.core.outline import font_to_grid, normalize_image
from iconsmith.core.registry import FontCollection
from iconsmith.domain import Font, Glyph, GlyphOutline
from iconsmith.exceptions import SourceFormatError
from iconsmith.io.reader import (
    LoadedSource,
    SourceKind,
    SvgFont,
    SvgImage,
    load_source,
    parse_svg_font,
    read_source,
)
from iconsmith.utils.logging import BuildLogger
from iconsmith.utils.numbers import round_half_up

_WHITESPACE_RE = re.compile(r"\s")

DEFAULT_FONT_GLYPH_NAME = "glyph"


def derive_glyph_name(filename: str) -> str:
    """Derive a glyph name from a source file name.

    Example:
        derive_glyph_name("Arrow Left.svg")  # "arrow-left"
    """
    stem = Path(filename).name
    if stem.lower().endswith(".svg"):
        stem = stem[:-4]
    return _WHITESPACE_RE.sub("-", stem.lower())


def stable_uid(font_id: str, name: str, code: int) -> str:
    """Derive a reproducible uid for a glyph of a read-only source font."""
    return hashlib.md5(f"{font_id}:{name}:{code}".encode()).hexdigest()


def _font_glyph_outlines(
    svg_font: SvgFont,
) -> Iterable[tuple[str, int, GlyphOutline | None, str | None]]:
    """Yield (name, code, outline, skip reason) for each glyph of an SVG font."""
    scale = 1000 / svg_font.units_per_em
    for font_glyph in svg_font.glyphs:
        name = font_glyph.name or DEFAULT_FONT_GLYPH_NAME
        code = font_glyph.code
        if code is None:
            code = UNICODE_PRIVATE_USE_AREA_MIN

        if not font_glyph.path.strip():
            yield name, code, None, "empty outline"
            continue

        advance = font_glyph.advance
        if advance is None:
            advance = svg_font.default_advance
        if not advance:
            yield name, code, None, "zero advance width"
            continue

        path = font_to_grid(font_glyph.path, svg_font.ascent, svg_font.units_per_em)
        yield name, code, GlyphOutline(path=path, width=round_half_up(advance * scale)), None


class GlyphImporter:
    """Imports glyph sources into a font collection.

    Example:
        importer = GlyphImporter(collection, FontSettings())
        importer.import_config(config_path.read_text())
        stats = importer.import_sources(reader.scan())
    """

    def __init__(
        self,
        collection: FontCollection,
        font_settings: FontSettings | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the importer.

        Args:
            collection: Collection receiving the glyphs
            font_settings: Global font parameters (updated by import_config)
            logger: Logger for import events
        """
        self.collection = collection
        self.font_settings = font_settings or FontSettings()
        self._logger = logger or structlog.get_logger("iconsmith.importer")
        self.build_logger = BuildLogger(self._logger)

    def import_config(self, text: str | bytes) -> ProjectConfig | None:
        """Replace the curation state with a persisted config.

        Global font parameters are updated, every glyph is deselected,
        custom glyphs are dropped and the descriptors are replayed in
        order. Descriptors referencing unknown glyphs are skipped.

        Args:
            text: config.json content

        Returns:
            The parsed config, or None if it could not be parsed (the
            collection is left untouched)
        """
        try:
            config = ProjectConfig.from_json(text)
        except ValidationError as e:
            self._logger.error(
                "Config parse failed",
                error=str(e),
                error_count=e.error_count(),
            )
            return None

        self.font_settings = config.apply_to(self.font_settings)
        self.collection.reset_custom_font()

        custom_font = self.collection.custom_font
        for descriptor in config.glyphs:
            if descriptor.owner_font_id == custom_font.font_id:
                self._replay_custom(custom_font, descriptor)
            else:
                self._replay_reference(descriptor)

        self._logger.info(
            "Config imported",
            glyphs=len(config.glyphs),
            selected=len(self.collection.selected_glyphs),
        )
        return config

    def _replay_custom(self, font: Font, descriptor: GlyphDescriptor) -> None:
        if not descriptor.outline:
            self._logger.warning(
                "Custom glyph without outline skipped",
                uid=descriptor.uid,
                name=descriptor.name,
            )
            return
        if descriptor.uid in self.collection.glyph_map:
            self._logger.warning("Duplicate glyph uid skipped", uid=descriptor.uid)
            return

        ref_code = self.collection.next_ref_code()
        glyph = self.collection.add_glyph(
            font,
            name=descriptor.name or DEFAULT_FONT_GLYPH_NAME,
            code=descriptor.code or ref_code,
            outline=GlyphOutline(
                path=descriptor.outline,
                width=round_half_up(descriptor.width or 0),
            ),
            uid=descriptor.uid,
            content_hash=descriptor.content_hash,
            ref_code=ref_code,
        )
        glyph.just_imported = True
        if descriptor.selected:
            self.collection.toggle_select(glyph, True)

    def _replay_reference(self, descriptor: GlyphDescriptor) -> None:
        glyph = self.collection.get_glyph(descriptor.uid)
        if glyph is None:
            self._logger.debug(
                "Glyph reference not found",
                uid=descriptor.uid,
                font=descriptor.owner_font_id,
            )
            return
        if glyph.selected:
            self._logger.warning("Duplicate glyph uid skipped", uid=descriptor.uid)
            return

        self.collection.set_code(glyph, descriptor.code or glyph.original_code)
        self.collection.rename(glyph, descriptor.name)
        glyph.just_imported = True
        if descriptor.selected:
            self.collection.toggle_select(glyph, True)

    def _reselect(self, glyphs: list[Glyph]) -> None:
        for glyph in glyphs:
            self.collection.toggle_select(glyph, True)

    def _add_selected(
        self,
        *,
        name: str,
        code: int,
        outline: GlyphOutline,
        content_hash: str | None,
        ref_code: int,
    ) -> Glyph:
        glyph = self.collection.add_glyph(
            self.collection.custom_font,
            name=name,
            code=code,
            outline=outline,
            content_hash=content_hash,
            ref_code=ref_code,
        )
        glyph.just_imported = True
        self.collection.toggle_select(glyph, True)
        return glyph

    def import_image(
        self, image: SvgImage, filename: str, content_hash: str | None = None
    ) -> list[Glyph]:
        """Import a single SVG image as a new selected custom glyph.

        A custom glyph with the same fingerprint is re-selected instead.

        Args:
            image: Parsed image
            filename: Source file name (the glyph name is derived from it)
            content_hash: Fingerprint of the source bytes

        Returns:
            Newly created glyphs (empty for a duplicate)
        """
        if content_hash is not None:
            existing = self.collection.find_by_content_hash(
                content_hash, self.collection.custom_font
            )
            if existing:
                self._reselect(existing)
                self.build_logger.log_source_duplicate(filename, content_hash, len(existing))
                return []

        outline = normalize_image(image.path, image.x, image.y, image.width, image.height)
        ref_code = self.collection.next_ref_code()
        glyph = self._add_selected(
            name=derive_glyph_name(filename),
            code=ref_code,
            outline=outline,
            content_hash=content_hash,
            ref_code=ref_code,
        )
        self.build_logger.log_source_imported(filename, SourceKind.IMAGE.value, 1)
        return [glyph]

    def import_font(
        self, svg_font: SvgFont, content_hash: str | None = None, source: str = ""
    ) -> list[Glyph]:
        """Import every usable glyph of an SVG font as selected custom glyphs.

        Glyphs without path data or advance width are skipped. When the
        fingerprint is already known, the glyphs imported from it are
        re-selected instead.

        Args:
            svg_font: Parsed SVG font
            content_hash: Fingerprint of the whole font file
            source: Source name for log events

        Returns:
            Newly created glyphs in document order
        """
        source = source or svg_font.font_id
        if content_hash is not None:
            existing = self.collection.find_by_content_hash(
                content_hash, self.collection.custom_font
            )
            if existing:
                self._reselect(existing)
                self.build_logger.log_source_duplicate(source, content_hash, len(existing))
                return []

        added: list[Glyph] = []
        ref_code = self.collection.next_ref_code()
        for name, code, outline, reason in _font_glyph_outlines(svg_font):
            if outline is None:
                self.build_logger.log_glyph_skipped(source, name, reason or "")
                continue
            added.append(
                self._add_selected(
                    name=name,
                    code=code,
                    outline=outline,
                    content_hash=content_hash,
                    ref_code=ref_code,
                )
            )
            ref_code += 1

        self.build_logger.log_source_imported(source, SourceKind.FONT.value, len(added))
        return added

    def import_source(self, loaded: LoadedSource) -> list[Glyph]:
        """Apply one loaded source to the collection.

        Failed sources are logged and skipped.

        Returns:
            Newly created glyphs
        """
        source = str(loaded.path)
        if not loaded.ok:
            self.build_logger.log_source_error(
                source, loaded.error or "unknown error", loaded.traceback
            )
            return []

        if loaded.image is not None:
            return self.import_image(loaded.image, loaded.path.name, loaded.content_hash)
        if loaded.font is not None:
            return self.import_font(loaded.font, loaded.content_hash, source=source)

        self.build_logger.log_source_skipped(source, "nothing to import")
        return []

    def import_sources(
        self,
        paths: list[Path],
        max_workers: int | None = None,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> list[Glyph]:
        """Import a batch of source files.

        Files are read, fingerprinted and parsed in worker threads. Their
        mutations are applied serially in the order of ``paths`` so code
        allocation does not depend on thread scheduling. Returns once
        every dispatched file has completed.

        Args:
            paths: Source files
            max_workers: Max reader threads (None = auto)
            progress_callback: Callback(completed, total, name, success)

        Returns:
            Newly created glyphs
        """
        total = len(paths)
        if total == 0:
            return []

        self._logger.info("Importing sources", total=total, max_workers=max_workers)

        loaded: dict[int, LoadedSource] = {}
        completed = 0
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            future_to_index = {
                executor.submit(load_source, path): index for index, path in enumerate(paths)
            }
            for future in as_completed(future_to_index):
                index = future_to_index[future]
                result = future.result()
                loaded[index] = result
                completed += 1
                if progress_callback:
                    progress_callback(completed, total, result.path.name, result.ok)

        added: list[Glyph] = []
        for index in range(total):
            added.extend(self.import_source(loaded[index]))

        self._logger.info(
            "Sources imported",
            total=total,
            glyphs=len(added),
            errors=self.build_logger.stats.error_count,
        )
        return added

    def load_source_font(self, source: Path | SvgFont, font_id: str | None = None) -> Font:
        """Register an SVG font as a read-only glyph source.

        Its glyphs start unselected and carry uids derived from font id,
        glyph name and code, so persisted configs can refer to them
        across runs.

        Args:
            source: SVG font file or parsed SVG font
            font_id: Font identity (defaults to the font's id, then the file stem)

        Returns:
            The registered font

        Raises:
            SourceReadError: If the file cannot be read
            SourceFormatError: If the file is not an SVG font
        """
        if isinstance(source, Path):
            data, _ = read_source(source)
            svg_font = parse_svg_font(data, source=str(source))
            fallback_id = source.stem
        else:
            svg_font = source
            fallback_id = ""

        font_id = font_id or svg_font.font_id or fallback_id
        if not font_id:
            raise SourceFormatError(str(source), "font has no identity")

        font = self.collection.add_font(font_id, fullname=svg_font.font_id or font_id)
        ref_code = self.collection.next_ref_code()
        for name, code, outline, reason in _font_glyph_outlines(svg_font):
            if outline is None:
                self.build_logger.log_glyph_skipped(font_id, name, reason or "")
                continue
            uid = stable_uid(font_id, name, code)
            if uid in self.collection.glyph_map:
                self._logger.warning("Duplicate source glyph skipped", font=font_id, glyph=name)
                continue
            self.collection.add_glyph(
                font,
                name=name,
                code=code,
                outline=outline,
                uid=uid,
                ref_code=ref_code,
            )
            ref_code += 1

        self._logger.info("Source font loaded", font=font_id, glyphs=len(font))
        return font
