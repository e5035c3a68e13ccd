"""Binary ``.mo`` catalog decoding."""

from motext.decoder.defs import ByteOrder
from motext.decoder.mofile import MoCatalog, decode, decode_file, load_catalog

__all__ = ["ByteOrder", "MoCatalog", "decode", "decode_file", "load_catalog"]
