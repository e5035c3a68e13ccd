"""Lazily populated cache of decoded catalogs.

One entry per ``(locale, domain, context)`` tuple. An entry is decoded on
first access and kept until :meth:`CatalogCache.clear` or
:meth:`CatalogCache.invalidate` drops it.
"""

from __future__ import annotations

import logging
import threading
from types import MappingProxyType
from typing import Callable, Mapping, Optional

logger = logging.getLogger(__name__)

CacheKey = tuple[str, str, Optional[str]]
Messages = Mapping[str, Optional[str]]
Loader = Callable[[str, str, Optional[str]], Mapping[str, Optional[str]]]


def make_key(locale: str, domain: str, context: Optional[str] = None) -> CacheKey:
    """Build the cache key; an empty context is the same as no context."""
    return (locale, domain, context or None)


class CatalogCache:
    """Thread-safe memo of ``loader(locale, domain, context)`` results.

    Concurrent requests for the same key wait for the single in-flight load.
    Loads for different keys never block each other.
    """

    def __init__(self, loader: Loader) -> None:
        self._loader = loader
        self._entries: dict[CacheKey, Messages] = {}
        self._key_locks: dict[CacheKey, threading.Lock] = {}
        self._lock = threading.Lock()

    def get(self, locale: str, domain: str, context: Optional[str] = None) -> Messages:
        key = make_key(locale, domain, context)

        entry = self._entries.get(key)
        if entry is not None:
            return entry

        with self._lock:
            key_lock = self._key_locks.setdefault(key, threading.Lock())

        with key_lock:
            entry = self._entries.get(key)
            if entry is None:
                logger.debug("Catalog cache miss for %s", key)
                entry = MappingProxyType(dict(self._loader(*key)))
                self._entries[key] = entry
        return entry

    def invalidate(self, locale: Optional[str] = None, domain: Optional[str] = None) -> int:
        """Drop entries matching *locale* and/or *domain*; return how many."""
        with self._lock:
            stale = [
                key for key in self._entries
                if (locale is None or key[0] == locale) and (domain is None or key[1] == domain)
            ]
            for key in stale:
                del self._entries[key]
        return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
