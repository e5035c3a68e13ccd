"""Shared fixtures: hand-built ``.mo`` catalogs."""

from __future__ import annotations

import struct
from typing import Optional

import pytest

HEADER_ENTRY = (
    b"Project-Id-Version: motext-tests\n"
    b"Language: de\n"
    b"Content-Type: text/plain; charset=UTF-8\n"
)


def build_mo(
    messages: list[tuple[Optional[bytes], bytes]],
    byte_order: str = "<",
    revision: int = 0,
    magic: Optional[bytes] = None,
) -> bytes:
    """Assemble a catalog the way msgfmt lays it out.

    A source of ``None`` is written with offset 0 and length 0. Strings are
    NUL-terminated and stored after both tables.
    """
    count = len(messages)
    source_table = 28
    translation_table = source_table + 8 * count
    data_start = translation_table + 8 * count

    blob = b""
    sources = []
    translations = []
    for source, translation in messages:
        if source is None:
            sources.append((0, 0))
        else:
            sources.append((len(source), data_start + len(blob)))
            blob += source + b"\0"
        translations.append((len(translation), data_start + len(blob)))
        blob += translation + b"\0"

    if magic is None:
        magic = struct.pack(f"{byte_order}I", 0x950412DE)
    out = magic
    out += struct.pack(f"{byte_order}6I", revision, count, source_table, translation_table, 0, data_start)
    for length, offset in sources + translations:
        out += struct.pack(f"{byte_order}2I", length, offset)
    return out + blob


@pytest.fixture
def make_mo():
    return build_mo


@pytest.fixture
def sample_messages():
    return [
        (b"", HEADER_ENTRY),
        (b"Test translation", b"This is a test translation"),
        (b"urls\x04Test url", b"test-url"),
        (b"cli\x04Test url", b"test-cli-url"),
    ]


@pytest.fixture
def locale_dir(tmp_path, sample_messages):
    """``<tmp>/locale`` with en_US and ru_RU ``main`` catalogs."""
    root = tmp_path / "locale"
    (root / "en_US").mkdir(parents=True)
    (root / "en_US" / "main.mo").write_bytes(build_mo(sample_messages))

    (root / "ru_RU").mkdir()
    ru = [
        (b"", HEADER_ENTRY.replace(b"Language: de", b"Language: ru")),
        (b"urls\x04Test url", "тестовая-ссылка".encode("utf-8")),
    ]
    (root / "ru_RU" / "main.mo").write_bytes(build_mo(ru, byte_order=">"))
    return root
