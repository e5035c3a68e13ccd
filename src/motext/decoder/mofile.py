"""Decoder for compiled GNU gettext catalogs (``.mo`` files).

Usage:
    from motext.decoder.mofile import decode, decode_file, load_catalog

    with open("locale/de/main.mo", "rb") as fh:
        messages = decode(fh, context="urls")

    messages = decode_file("locale/de/main.mo")
    catalog = load_catalog("locale/de/main.mo")
    print(catalog.byte_order, catalog.metadata.get("language"))

Messages whose source string carries a context (``"<ctx>\\x04<msgid>"``) are
returned only when that exact context is requested, keyed by the bare msgid.
Messages without a context are returned only when no context is requested.
"""

from __future__ import annotations

import codecs
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Optional, Union

from motext.decoder.defs import (
    CONTEXT_SEPARATOR,
    DEFAULT_ENCODING,
    MAGIC_BIG_ENDIAN,
    MAGIC_LITTLE_ENDIAN,
    MAGIC_SIZE,
    SUPPORTED_REVISION,
    TABLE_ENTRY_SIZE,
    ByteOrder,
)
from motext.decoder.stream import EOF, CatalogStream
from motext.errors import CatalogNotFoundError, InvalidCatalogError

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


@dataclass
class OffsetTable:
    """Lengths and offsets of the N strings referenced by one table."""
    lengths: list[int] = field(default_factory=list)
    offsets: list[int] = field(default_factory=list)


@dataclass
class RawCatalog:
    """Undecoded result of one pass over a catalog stream."""
    byte_order: ByteOrder
    revision: int
    message_count: int
    messages: dict[bytes, Optional[bytes]]
    header_entry: Optional[bytes] = None


@dataclass
class MoCatalog:
    """A decoded catalog together with its header information."""
    path: Optional[Path]
    context: Optional[str]
    byte_order: ByteOrder
    revision: int
    message_count: int
    messages: dict[str, Optional[str]]
    metadata: dict[str, str] = field(default_factory=dict)
    encoding: str = DEFAULT_ENCODING

    @property
    def charset(self) -> Optional[str]:
        return charset_from_metadata(self.metadata)

    def gettext(self, message: str) -> str:
        """Return the translation of *message*, or *message* itself."""
        translation = self.messages.get(message)
        return message if translation is None else translation

    def __len__(self) -> int:
        return len(self.messages)

    def __contains__(self, message: object) -> bool:
        return message in self.messages


# ── public API ────────────────────────────────────────────────────────

def decode(
    source: Union[BinaryIO, bytes, bytearray],
    context: Optional[str] = None,
    encoding: str = DEFAULT_ENCODING,
) -> dict[str, Optional[str]]:
    """Decode a ``.mo`` byte stream into a ``msgid -> translation`` dict.

    *source* must be readable and seekable; it is rewound before reading and
    left open. A zero-length translation is stored as ``None``. The metadata
    header entry (empty msgid) is stored under ``""`` when no context is
    requested.

    Raises:
        InvalidCatalogError: unknown magic number, non-zero revision or
            truncated data. Nothing is returned in that case.
    """
    raw = read_catalog(CatalogStream(source), _encode_context(context, encoding))
    return _decode_messages(raw.messages, encoding)


def decode_file(
    path: PathLike,
    context: Optional[str] = None,
    encoding: str = DEFAULT_ENCODING,
) -> dict[str, Optional[str]]:
    """Open *path*, decode it with :func:`decode` and close it again."""
    with _open_catalog(path) as handle:
        return decode(handle, context, encoding)


def load_catalog(
    path: PathLike,
    context: Optional[str] = None,
    encoding: Optional[str] = None,
) -> MoCatalog:
    """Decode *path* into a :class:`MoCatalog`.

    If *encoding* is not given, the charset declared in the catalog's
    metadata entry is used, falling back to UTF-8.
    """
    with _open_catalog(path) as handle:
        stream = CatalogStream(handle)
        raw = read_catalog(stream, _encode_context(context, encoding or DEFAULT_ENCODING))
        metadata = {}
        if raw.header_entry:
            metadata = parse_metadata(raw.header_entry.decode(DEFAULT_ENCODING, errors="replace"))

        if encoding is None:
            encoding = _known_encoding(charset_from_metadata(metadata))
            # the context was compared as UTF-8 before the charset was known
            if _encode_context(context, encoding) != _encode_context(context, DEFAULT_ENCODING):
                raw = read_catalog(stream, _encode_context(context, encoding))

    return MoCatalog(
        path=Path(path),
        context=context or None,
        byte_order=raw.byte_order,
        revision=raw.revision,
        message_count=raw.message_count,
        messages=_decode_messages(raw.messages, encoding),
        metadata=metadata,
        encoding=encoding,
    )


def read_catalog(stream: CatalogStream, context: Optional[bytes] = None) -> RawCatalog:
    """Run the decoding algorithm over *stream*, comparing bytes only."""
    stream.rewind()

    byte_order = parse_magic_number(stream)
    revision = parse_revision_number(stream, byte_order)

    message_count = stream.read_uint32(byte_order)
    source_offset = stream.read_uint32(byte_order)
    translation_offset = stream.read_uint32(byte_order)
    if stream.eof:
        raise InvalidCatalogError("unexpected end of catalog while reading header")

    logger.debug(
        "Catalog header: %s-endian, %d message(s), tables at %d/%d",
        byte_order.name.lower(), message_count, source_offset, translation_offset,
    )

    if message_count == 0:
        return RawCatalog(byte_order, revision, 0, {})

    sources = read_offsets(stream, byte_order, message_count, source_offset)
    translations = read_offsets(stream, byte_order, message_count, translation_offset)

    messages, header_entry = read_translations(stream, context, message_count, sources, translations)
    return RawCatalog(byte_order, revision, message_count, messages, header_entry)


# ── algorithm steps ───────────────────────────────────────────────────

def parse_magic_number(stream: CatalogStream) -> ByteOrder:
    """Select the byte order from the leading byte of the magic number."""
    magic = stream.read_char()
    if magic == EOF:
        raise InvalidCatalogError("unexpected end of catalog while reading magic number", EOF)
    stream.read(MAGIC_SIZE - 1)

    if magic == MAGIC_BIG_ENDIAN:
        return ByteOrder.BIG
    if magic == MAGIC_LITTLE_ENDIAN:
        return ByteOrder.LITTLE
    raise InvalidCatalogError(f"unknown magic number: {magic}", magic)


def parse_revision_number(stream: CatalogStream, byte_order: ByteOrder) -> int:
    revision = stream.read_uint32(byte_order)
    if revision == EOF:
        raise InvalidCatalogError("unexpected end of catalog while reading revision", EOF)
    if revision != SUPPORTED_REVISION:
        raise InvalidCatalogError(f"revision number is invalid: {revision}", revision)
    return revision


def read_offsets(stream: CatalogStream, byte_order: ByteOrder, count: int, offset: int) -> OffsetTable:
    """Read *count* ``(length, offset)`` pairs starting at *offset*."""
    if offset + count * TABLE_ENTRY_SIZE > stream.size:
        raise InvalidCatalogError(f"offset table at {offset} runs past the end of the catalog", offset)

    table = OffsetTable()
    stream.seek(offset)

    for _ in range(count):
        table.lengths.append(stream.read_uint32(byte_order))
        table.offsets.append(stream.read_uint32(byte_order))
        if stream.eof:
            raise InvalidCatalogError(f"offset table at {offset} runs past the end of the catalog", offset)
    return table


def read_translations(
    stream: CatalogStream,
    context: Optional[bytes],
    count: int,
    sources: OffsetTable,
    translations: OffsetTable,
) -> tuple[dict[bytes, Optional[bytes]], Optional[bytes]]:
    """Pair source and translation strings, filtered by *context*.

    Returns the message dict and the raw metadata header entry (the
    translation of the empty msgid), if the catalog has one.
    """
    result: dict[bytes, Optional[bytes]] = {}
    header_entry: Optional[bytes] = None

    for index in range(count):
        msgid = None
        if sources.offsets[index] > 0:
            msgid = _read_checked(stream, sources.lengths[index], sources.offsets[index])

        eot_pos = msgid.find(CONTEXT_SEPARATOR) if msgid else -1

        is_context_match = bool(context) and eot_pos >= 0 and msgid[:eot_pos] == context
        is_plain_match = not context and eot_pos < 0
        if not (is_context_match or is_plain_match):
            if msgid is None and header_entry is None:
                header_entry = _read_checked(stream, translations.lengths[index], translations.offsets[index])
            continue

        if eot_pos >= 0:
            msgid = msgid[eot_pos + 1:]

        translation = _read_checked(stream, translations.lengths[index], translations.offsets[index])
        if msgid is None and header_entry is None:
            header_entry = translation
        result[msgid or b""] = translation

    return result, header_entry


# ── metadata ──────────────────────────────────────────────────────────

def parse_metadata(text: str) -> dict[str, str]:
    """Parse the ``Key: value`` lines of a catalog's header entry.

    Keys are lower-cased; lines without a colon are ignored.
    """
    metadata: dict[str, str] = {}
    for line in text.splitlines():
        key, sep, value = line.partition(":")
        if not sep:
            continue
        key = key.strip().lower()
        if key:
            metadata[key] = value.strip()
    return metadata


def charset_from_metadata(metadata: dict[str, str]) -> Optional[str]:
    """Return the ``charset=`` parameter of the Content-Type header."""
    content_type = metadata.get("content-type", "")
    for param in content_type.split(";"):
        name, sep, value = param.partition("=")
        if sep and name.strip().lower() == "charset":
            return value.strip() or None
    return None


# ── helpers ───────────────────────────────────────────────────────────

def _open_catalog(path: PathLike) -> BinaryIO:
    try:
        return open(path, "rb")
    except FileNotFoundError as exc:
        raise CatalogNotFoundError(f"Can't access catalog file {path}") from exc


def _read_checked(stream: CatalogStream, length: int, offset: int) -> Optional[bytes]:
    if length > 0 and offset + length > stream.size:
        raise InvalidCatalogError(
            f"string of {length} bytes at {offset} runs past the end of the catalog", offset
        )
    value = stream.read_string(length, offset)
    if value is not None and len(value) < length:
        raise InvalidCatalogError(
            f"string of {length} bytes at {offset} runs past the end of the catalog", offset
        )
    return value


def _known_encoding(charset: Optional[str]) -> str:
    # msgfmt templates leave the literal "CHARSET" placeholder in place
    if not charset:
        return DEFAULT_ENCODING
    try:
        codecs.lookup(charset)
    except LookupError:
        logger.warning("Unknown catalog charset %r, using %s", charset, DEFAULT_ENCODING)
        return DEFAULT_ENCODING
    return charset


def _encode_context(context: Optional[str], encoding: str) -> Optional[bytes]:
    return context.encode(encoding) if context else None


def _decode_messages(messages: dict[bytes, Optional[bytes]], encoding: str) -> dict[str, Optional[str]]:
    try:
        return {
            key.decode(encoding): None if value is None else value.decode(encoding)
            for key, value in messages.items()
        }
    except UnicodeDecodeError as exc:
        raise InvalidCatalogError(f"cannot decode strings as {encoding}", encoding) from exc

