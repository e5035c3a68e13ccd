"""Tests for motext.decoder.stream – seekable catalog reader."""

import io
import struct

import pytest

from motext.decoder.defs import ByteOrder
from motext.decoder.stream import CatalogStream, EOF, sign_extend


class TestSignExtend:
    def test_8bit(self):
        assert sign_extend(0x95, 8) == -107
        assert sign_extend(0xDE, 8) == -34
        assert sign_extend(0x7F, 8) == 127

    def test_generic(self):
        assert sign_extend(0b10, 2) == -2
        assert sign_extend(0b01, 2) == 1


class TestCatalogStream:
    def test_accepts_bytes(self):
        s = CatalogStream(b"\x01\x02")
        assert s.read(2) == b"\x01\x02"

    def test_read_char_signed(self):
        s = CatalogStream(bytes([0x42, 0xFF]))
        assert s.read_char() == 0x42
        assert s.read_char() == -1
        assert s.read_char() == EOF
        assert s.eof is True

    def test_read_uint32_little(self):
        s = CatalogStream(struct.pack("<I", 0x01020304))
        assert s.read_uint32(ByteOrder.LITTLE) == 0x01020304

    def test_read_uint32_big(self):
        s = CatalogStream(struct.pack(">I", 0x01020304))
        assert s.read_uint32(ByteOrder.BIG) == 0x01020304

    def test_byte_order_is_per_call(self):
        s = CatalogStream(b"\x01\x00\x00\x00\x01\x00\x00\x00")
        assert s.read_uint32(ByteOrder.LITTLE) == 1
        assert s.read_uint32(ByteOrder.BIG) == 0x01000000

    def test_read_uint32_short(self):
        s = CatalogStream(b"\x01\x02")
        assert s.read_uint32(ByteOrder.LITTLE) == EOF
        assert s.eof is True

    def test_size_keeps_position(self):
        s = CatalogStream(b"abcdef")
        s.seek(2)
        assert s.size == 6
        assert s.pos == 2

    def test_read_bytes(self):
        s = CatalogStream(b"Hello")
        assert s.read(3) == b"Hel"
        assert s.read(10) == b"lo"  # reads only what's available
        assert s.eof is True

    def test_read_string_seeks_backward(self):
        s = CatalogStream(b"XXXHelloXXX")
        s.seek(9)
        assert s.read_string(5, 3) == b"Hello"
        assert s.pos == 8

    def test_read_string_zero_length_is_none(self):
        s = CatalogStream(b"abc")
        assert s.read_string(0, 1) is None

    def test_rewind_resets_eof(self):
        s = CatalogStream(io.BytesIO(b"ab"))
        s.read(5)
        assert s.eof is True
        s.rewind()
        assert s.eof is False
        assert s.pos == 0


class TestByteOrder:
    @pytest.mark.parametrize("order, fmt", [(ByteOrder.BIG, ">I"), (ByteOrder.LITTLE, "<I")])
    def test_uint32_format(self, order, fmt):
        assert order.uint32 == fmt
