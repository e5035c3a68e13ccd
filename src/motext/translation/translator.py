"""Translator: resolve a catalog, look a message up, fill in placeholders.

Usage:
    from motext.translation.translator import Translator

    t = Translator("de_DE", "path/to/locale")
    t("Test translation")                               # default domain, no context
    t("Test url", domain="main", context="urls")
    t(["Welcome to {title}", {"{title}": "test page"}])

A message missing from its catalog is returned unchanged. Catalog errors
(missing file, corrupt ``.mo``, ``.po`` only) propagate when ``debug`` is set;
otherwise they are logged and the untranslated text is returned.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping, Optional, Sequence, Union

from motext.decoder.mofile import load_catalog
from motext.errors import GettextError, UnsupportedFormatError
from motext.translation.cache import CatalogCache
from motext.translation.resolver import MO_SUFFIX, resolve_catalog

logger = logging.getLogger(__name__)

DEFAULT_DOMAIN = "main"

TranslatableText = Union[str, Sequence[Union[str, Mapping[str, str]]]]


class Translator:
    """Looks up translations in ``<base_path>/<locale>/<domain>.mo`` catalogs."""

    def __init__(
        self,
        locale: str,
        base_path: Union[str, Path],
        debug: bool = False,
        cache: Optional[CatalogCache] = None,
    ) -> None:
        self.locale = locale
        self.base_path = Path(base_path)
        self.debug = debug
        self.cache = cache if cache is not None else CatalogCache(self.load_messages)

    def set_locale(self, locale: str) -> Translator:
        self.locale = locale
        return self

    def load_messages(self, locale: str, domain: str, context: Optional[str] = None) -> dict[str, Optional[str]]:
        """Resolve and decode the catalog for *locale*/*domain*, uncached."""
        path = resolve_catalog(self.base_path, locale, domain)
        if path.suffix != MO_SUFFIX:
            raise UnsupportedFormatError(f"Unsupported dictionary file: {path.name}", path)
        logger.debug("Loading catalog %s (context=%r)", path, context)
        return load_catalog(path, context).messages

    def translate(
        self,
        text: TranslatableText,
        domain: str = DEFAULT_DOMAIN,
        context: Optional[str] = None,
        locale: Optional[str] = None,
    ) -> str:
        """Translate *text*.

        *text* is either a message or a sequence ``[message, {placeholder:
        value}, ...]``; placeholders are substituted after the lookup.
        """
        message, replacements = split_placeholders(text)
        # unlike a bare gettext fallback, placeholders are filled in on a
        # miss or a suppressed catalog error too
        translation = self.lookup(message, domain, context, locale)
        if replacements:
            return replace_placeholders(translation, replacements)
        return translation

    __call__ = translate

    def lookup(
        self,
        message: str,
        domain: str = DEFAULT_DOMAIN,
        context: Optional[str] = None,
        locale: Optional[str] = None,
    ) -> str:
        """Return the translation of *message*, or *message* on a miss."""
        locale = locale or self.locale
        try:
            messages = self.cache.get(locale, domain, context)
        except GettextError as exc:
            if self.debug:
                raise
            logger.warning("Returning untranslated text for %s/%s: %s", locale, domain, exc)
            return message

        translation = messages.get(message)
        return message if translation is None else translation


def split_placeholders(text: TranslatableText) -> tuple[str, dict[str, str]]:
    """Split ``[template, {key: value}, ...]`` into template and replacements."""
    if isinstance(text, str):
        return text, {}
    if not text:
        raise ValueError("Nothing to translate: empty placeholder sequence")

    template, *rest = text
    if not isinstance(template, str):
        raise TypeError(f"Template must be a string, got {type(template).__name__}")

    replacements: dict[str, str] = {}
    for item in rest:
        if not isinstance(item, Mapping):
            raise TypeError(f"Placeholder values must be mappings, got {type(item).__name__}")
        replacements.update({str(k): str(v) for k, v in item.items()})
    return template, replacements


def replace_placeholders(text: str, replacements: Mapping[str, str]) -> str:
    """Literal find-and-replace of each key of *replacements* in *text*.

    Keys are applied in order, each over the result of the previous one.
    """
    for placeholder, value in replacements.items():
        text = text.replace(placeholder, value)
    return text
