"""GNU gettext ``.mo`` catalog constants and enums.

Layout reference: the "Binary MO files" chapter of the GNU gettext manual.
"""

from __future__ import annotations

from enum import Enum

# ── header layout ─────────────────────────────────────────────────────

MAGIC_SIZE = 4
INT_SIZE = 4
HEADER_SIZE = 20            # magic, revision, count, source table, translation table
TABLE_ENTRY_SIZE = 2 * INT_SIZE  # (length, offset)

# The whole 32-bit magic is 0x950412DE. Only its leading byte, read as a
# signed char, is used to tell the two orderings apart.
MAGIC_BIG_ENDIAN = -107     # 0x95
MAGIC_LITTLE_ENDIAN = -34   # 0xDE

MAGIC_BYTES_BIG_ENDIAN = b"\x95\x04\x12\xde"
MAGIC_BYTES_LITTLE_ENDIAN = b"\xde\x12\x04\x95"

SUPPORTED_REVISION = 0

# Separates msgctxt from msgid inside a source string.
CONTEXT_SEPARATOR = b"\x04"

DEFAULT_ENCODING = "utf-8"


# ── byte order ────────────────────────────────────────────────────────

class ByteOrder(Enum):
    BIG = ">"
    LITTLE = "<"

    @property
    def uint32(self) -> str:
        """``struct`` format for one unsigned 32-bit integer."""
        return f"{self.value}I"
