"""Catalog resolution, caching and lookup."""

from motext.translation.cache import CatalogCache
from motext.translation.resolver import available_locales, resolve_catalog
from motext.translation.translator import DEFAULT_DOMAIN, Translator, replace_placeholders

__all__ = [
    "CatalogCache",
    "DEFAULT_DOMAIN",
    "Translator",
    "available_locales",
    "replace_placeholders",
    "resolve_catalog",
]
