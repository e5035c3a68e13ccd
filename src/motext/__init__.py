"""motext – gettext ``.mo`` catalog decoder and translator."""

__version__ = "0.1.0"

from motext.decoder.mofile import MoCatalog, decode, decode_file, load_catalog
from motext.errors import (
    CatalogFileError,
    CatalogNotFoundError,
    GettextError,
    InvalidCatalogError,
    UnsupportedFormatError,
)
from motext.translation.cache import CatalogCache
from motext.translation.translator import Translator

__all__ = [
    "__version__",
    "CatalogCache",
    "CatalogFileError",
    "CatalogNotFoundError",
    "GettextError",
    "InvalidCatalogError",
    "MoCatalog",
    "Translator",
    "UnsupportedFormatError",
    "decode",
    "decode_file",
    "load_catalog",
]
