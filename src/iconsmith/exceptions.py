"""Exception hierarchy for Iconsmith."""


class IconsmithError(Exception):
    """Base exception for all Iconsmith errors."""

    pass


class ConfigError(IconsmithError):
    """Errors related to the persisted project config."""

    pass


class ConfigLoadError(ConfigError):
    """Error loading a config file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load config '{path}': {reason}")


class SourceError(IconsmithError):
    """Errors related to glyph source files."""

    pass


class SourceReadError(SourceError):
    """Error reading a source file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read source '{path}': {reason}")


class SourceFormatError(SourceError):
    """Unsupported or invalid source format."""

    def __init__(self, path: str, details: str) -> None:
        self.path = path
        self.details = details
        super().__init__(f"Invalid source format '{path}': {details}")


class GlyphError(IconsmithError):
    """Errors related to glyph registry operations."""

    pass


class GlyphNotFoundError(GlyphError):
    """Requested glyph not found in font."""

    def __init__(self, uid: str) -> None:
        self.uid = uid
        super().__init__(f"Glyph '{uid}' not found")


class DuplicateGlyphError(GlyphError):
    """A glyph with the same uid is already registered."""

    def __init__(self, uid: str) -> None:
        self.uid = uid
        super().__init__(f"Glyph '{uid}' is already registered")


class ReadOnlyFontError(GlyphError):
    """Attempted to modify the glyph set of a read-only font."""

    def __init__(self, font_id: str, operation: str) -> None:
        self.font_id = font_id
        self.operation = operation
        super().__init__(f"Font '{font_id}' is read-only: cannot {operation}")


class CodeAllocationError(IconsmithError):
    """Errors in code point allocation."""

    pass


class CodeSpaceExhaustedError(CodeAllocationError):
    """No free code point left in the scanned range."""

    def __init__(self, min_code: int, max_code: int) -> None:
        self.min_code = min_code
        self.max_code = max_code
        super().__init__(
            f"Free glyph codes in range U+{min_code:04X}..U+{max_code:04X} are run out"
        )


class FontBuildError(IconsmithError):
    """Errors related to font assembly or encoding."""

    pass


class FontAssemblyError(FontBuildError):
    """Error encoding an assembled font definition."""

    def __init__(self, font_id: str, reason: str) -> None:
        self.font_id = font_id
        self.reason = reason
        super().__init__(f"Failed to build font '{font_id}': {reason}")


class FontSaveError(FontBuildError):
    """Error saving a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save font '{path}': {reason}")
