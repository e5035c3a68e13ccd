"""Seekable binary reader for ``.mo`` catalog data.

Wraps any readable, seekable binary file object (an open file, ``io.BytesIO``,
...). Integer reads take the byte order as an argument: the stream itself
never remembers which ordering a catalog uses.
"""

from __future__ import annotations

import io
import struct
from typing import BinaryIO, Optional, Union

from motext.decoder.defs import INT_SIZE, ByteOrder

EOF = -1
CHAR_BIT = 8


class CatalogStream:
    """Random-access byte reader over a binary file object."""

    __slots__ = ("_handle", "eof")

    def __init__(self, handle: Union[BinaryIO, bytes, bytearray]) -> None:
        if isinstance(handle, (bytes, bytearray)):
            handle = io.BytesIO(bytes(handle))
        self._handle = handle
        self.eof = False

    # ── properties ────────────────────────────────────────────────────

    @property
    def pos(self) -> int:
        return self._handle.tell()

    @property
    def size(self) -> int:
        """Total length of the underlying data in bytes."""
        current = self._handle.tell()
        end = self._handle.seek(0, io.SEEK_END)
        self._handle.seek(current)
        return end

    # ── positioning ───────────────────────────────────────────────────

    def seek(self, offset: int) -> None:
        """Move the cursor to the absolute *offset*."""
        self._handle.seek(offset)

    def rewind(self) -> None:
        self._handle.seek(0)
        self.eof = False

    # ── byte-level reads ──────────────────────────────────────────────

    def read(self, length: int) -> bytes:
        """Read *length* bytes; sets ``eof`` if fewer were available."""
        result = self._handle.read(length)
        if len(result) < length:
            self.eof = True
        return result

    def read_char(self) -> int:
        """Read one signed byte, or return EOF."""
        raw = self.read(1)
        if not raw:
            return EOF
        return sign_extend(raw[0], CHAR_BIT)

    def read_uint32(self, byte_order: ByteOrder) -> int:
        """Read an unsigned 32-bit integer in *byte_order*, or return EOF."""
        raw = self.read(INT_SIZE)
        if len(raw) < INT_SIZE:
            return EOF
        return struct.unpack(byte_order.uint32, raw)[0]

    def read_string(self, length: int, offset: Optional[int] = None) -> Optional[bytes]:
        """Read a *length*-byte string, seeking to *offset* first if given.

        A zero length yields ``None`` rather than ``b""``.
        """
        if offset is not None:
            self.seek(offset)
        if length <= 0:
            return None
        return self.read(length)


# ── utility functions ─────────────────────────────────────────────────

def sign_extend(value: int, bits: int) -> int:
    """Sign-extend *value* from *bits*-wide to Python int."""
    sign_bit = 1 << (bits - 1)
    mask = (1 << bits) - 1
    value &= mask
    if value & sign_bit:
        value -= 1 << bits
    return value
