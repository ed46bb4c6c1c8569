"""Code point validation and allocation.

This module keeps automatic glyph code assignment under control while the
user selects, deselects and renumbers glyphs. The allocation table maps
code points to the glyph currently holding them and is populated only for
selected glyphs: the code of an unselected glyph is reclaimable.

Key components:
- is_valid_code: Code point validity check
- CodePolicy: Allocation policies (pua, ascii, unicode)
- CodeAllocator: Allocation table plus selection and edit hooks
"""

from enum import Enum

import structlog

from iconsmith.domain.glyph import Glyph
from iconsmith.exceptions import CodeSpaceExhaustedError

UNICODE_CODES_MIN = 0x0
UNICODE_CODES_MAX = 0x10FFFF

UNICODE_PRIVATE_USE_AREA_MIN = 0xE800
UNICODE_PRIVATE_USE_AREA_MAX = 0xF8FF

ASCII_PRINTABLE_MIN = 0x21
ASCII_PRINTABLE_MAX = 0x7E

# UTF-16 surrogates
RESTRICTED_BLOCK_MIN = 0xD800
RESTRICTED_BLOCK_MAX = 0xDFFF

# Restricted single codes, see http://www.w3.org/TR/xml11/#charsets
RESTRICTED_SINGLE_CODES: frozenset[int] = frozenset(
    [*range(0x0, 0x9), 0xB, 0xC, *range(0xE, 0x20)]
    + [*range(0x7F, 0x85), *range(0x86, 0xA0)]
    + [*range(0xFDD0, 0xFDE0)]
    + [(plane << 16) | low for plane in range(0x11) for low in (0xFFFE, 0xFFFF)]
)


def is_valid_code(code: int | None) -> bool:
    """Check if a code point may be assigned to a glyph.

    Args:
        code: Candidate code point

    Returns:
        True if the code is a Unicode scalar value outside the surrogate
        block and the restricted single codes
    """
    if code is None:
        return False
    return (
        UNICODE_CODES_MIN <= code <= UNICODE_CODES_MAX
        and not (RESTRICTED_BLOCK_MIN <= code <= RESTRICTED_BLOCK_MAX)
        and code not in RESTRICTED_SINGLE_CODES
    )


class CodePolicy(str, Enum):
    """Code allocation policy."""

    PUA = "pua"
    ASCII = "ascii"
    UNICODE = "unicode"


class CodeAllocator:
    """Owns the code point -> glyph allocation table.

    All methods mutate glyph codes and the table synchronously; the
    allocator is not reentrant and must be driven from one thread.

    Example:
        allocator = CodeAllocator()
        allocator.allocate(glyph, CodePolicy.PUA)
        allocator.owner(glyph.code) is glyph  # True
    """

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._table: dict[int, Glyph] = {}
        self._logger = logger or structlog.get_logger("iconsmith.codes")

    def owner(self, code: int | None) -> Glyph | None:
        """Get the glyph recorded for a code, if any."""
        if code is None:
            return None
        return self._table.get(code)

    def is_free(self, code: int | None) -> bool:
        """Check if a code is unassigned or held by an unselected glyph."""
        holder = self.owner(code)
        return holder is None or not holder.selected

    def used_codes(self) -> dict[int, Glyph]:
        """Get a snapshot of the allocation table entries held by selected glyphs."""
        return {code: glyph for code, glyph in self._table.items() if glyph.selected}

    def find_code(self, min_code: int, max_code: int) -> int | None:
        """Return the first valid and available code in a range.

        Args:
            min_code: First code to try
            max_code: Last code to try (inclusive)

        Returns:
            The code, or None if the whole range is taken
        """
        for code in range(min_code, max_code + 1):
            if is_valid_code(code) and self.is_free(code):
                return code
        return None

    def _is_available(self, code: int | None, min_code: int, max_code: int) -> bool:
        return (
            code is not None
            and min_code <= code <= max_code
            and is_valid_code(code)
            and self.is_free(code)
        )

    def find_private_use_area(self, preferred: int | None = None) -> int:
        """Return the preferred code if usable, else the first free PUA code.

        Raises:
            CodeSpaceExhaustedError: If the Private Use Area is run out
        """
        if preferred is not None and self._is_available(
            preferred, UNICODE_PRIVATE_USE_AREA_MIN, UNICODE_PRIVATE_USE_AREA_MAX
        ):
            return preferred

        code = self.find_code(UNICODE_PRIVATE_USE_AREA_MIN, UNICODE_PRIVATE_USE_AREA_MAX)
        if code is None:
            raise CodeSpaceExhaustedError(
                UNICODE_PRIVATE_USE_AREA_MIN, UNICODE_PRIVATE_USE_AREA_MAX
            )
        return code

    def find_ascii(self, preferred: int | None = None) -> int:
        """Return the preferred code if usable, else the first free printable ASCII code.

        Falls back to the Private Use Area when printable ASCII is taken.
        """
        if preferred is not None and self._is_available(
            preferred, ASCII_PRINTABLE_MIN, ASCII_PRINTABLE_MAX
        ):
            return preferred

        code = self.find_code(ASCII_PRINTABLE_MIN, ASCII_PRINTABLE_MAX)
        return code if code is not None else self.find_private_use_area()

    def find_unicode(self, code: int | None) -> int:
        """Return the given code if valid and available, else a free PUA code."""
        if code is not None and is_valid_code(code) and self.is_free(code):
            return code
        return self.find_private_use_area()

    def release(self, glyph: Glyph) -> None:
        """Clear the table entry for the glyph's current code if it still points at it."""
        if glyph.code is not None and self._table.get(glyph.code) is glyph:
            del self._table[glyph.code]

    def allocate(self, glyph: Glyph, policy: CodePolicy | str) -> int:
        """Allocate a code for a glyph under a policy.

        The glyph's present code is kept whenever it already satisfies the
        policy without collision, so repeated calls are idempotent.

        Args:
            glyph: Glyph to allocate a code for
            policy: Allocation policy

        Returns:
            The allocated code (also written to ``glyph.code``)

        Raises:
            ValueError: If the policy is unknown
            CodeSpaceExhaustedError: If the Private Use Area is run out
        """
        policy = CodePolicy(policy)
        old_code = glyph.code

        # Release must complete before the new code is computed
        self.release(glyph)

        if policy is CodePolicy.PUA:
            new_code = self.find_private_use_area(old_code)
        elif policy is CodePolicy.ASCII:
            new_code = self.find_ascii(old_code)
        else:
            new_code = self.find_unicode(old_code)

        glyph.code = new_code
        self._table[new_code] = glyph

        if new_code != old_code:
            self._logger.debug(
                "Code allocated",
                glyph=glyph.uid,
                policy=policy.value,
                old_code=old_code,
                new_code=new_code,
            )
        return new_code

    def on_select(self, glyph: Glyph) -> None:
        """Apply the selection-transition rule to a newly selected glyph.

        A glyph still at its import-time baseline gets an automatic PUA code;
        a glyph the user renumbered keeps its code unless it collides. A glyph
        flagged ``just_imported`` keeps its present code (unless invalid or
        colliding) and the flag is consumed.
        """
        if glyph.just_imported:
            glyph.just_imported = False
            self.allocate(glyph, CodePolicy.UNICODE)
            return

        if glyph.code == glyph.original_code:
            self.allocate(glyph, CodePolicy.PUA)
        else:
            self.allocate(glyph, CodePolicy.UNICODE)

    def on_deselect(self, glyph: Glyph) -> None:
        """Free the code of a deselected glyph, keeping ``glyph.code`` for display."""
        self.release(glyph)

    def change_code(self, glyph: Glyph, code: int) -> int:
        """Apply a manual code edit.

        For a selected glyph, a code held by another selected glyph is
        swapped: the previous holder receives the editor's pre-edit code.
        An invalid code is rolled back to the pre-edit code, or re-derived
        from the original baseline when the pre-edit code was invalid too.

        Args:
            glyph: Edited glyph
            code: Requested code point

        Returns:
            The code the glyph ends up with
        """
        previous_code = glyph.code

        if not glyph.selected:
            glyph.code = code
            return code

        self.release(glyph)

        if not is_valid_code(code):
            if (
                previous_code is not None
                and is_valid_code(previous_code)
                and self.is_free(previous_code)
            ):
                new_code = previous_code
            else:
                new_code = self.find_unicode(glyph.original_code)
            glyph.code = new_code
            self._table[new_code] = glyph
            self._logger.info(
                "Invalid code rejected",
                glyph=glyph.uid,
                requested=code,
                code=new_code,
            )
            return new_code

        holder = self._table.get(code)
        if (
            previous_code is not None
            and holder is not None
            and holder is not glyph
            and holder.selected
        ):
            holder.code = previous_code
            self._table[previous_code] = holder
            self._logger.info(
                "Codes swapped",
                glyph=glyph.uid,
                other=holder.uid,
                code=code,
                other_code=previous_code,
            )

        glyph.code = code
        self._table[code] = glyph
        return code
