"""Exception hierarchy shared by the decoder and the translation layer."""

from __future__ import annotations

from typing import Any, Optional


class GettextError(Exception):
    """Base class for all motext errors."""


class CatalogFileError(GettextError):
    """A catalog file could not be used."""


class CatalogNotFoundError(CatalogFileError):
    """Neither a ``.mo`` nor a ``.po`` catalog exists for a locale/domain."""

    def __init__(self, message: str, locale: Optional[str] = None, domain: Optional[str] = None) -> None:
        super().__init__(message)
        self.locale = locale
        self.domain = domain


class InvalidCatalogError(CatalogFileError):
    """The byte stream is not a well-formed ``.mo`` catalog.

    ``value`` holds the offending raw value (magic byte, revision, ...)
    when there is one.
    """

    MESSAGE_PREFIX = "Invalid mo file: "

    def __init__(self, message: str, value: Any = None) -> None:
        super().__init__(self.MESSAGE_PREFIX + message)
        self.value = value


class UnsupportedFormatError(CatalogFileError):
    """The resolved catalog is in a format the decoder cannot read."""

    def __init__(self, message: str, path: Any = None) -> None:
        super().__init__(message)
        self.path = path
