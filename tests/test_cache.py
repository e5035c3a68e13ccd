"""Tests for motext.translation.cache – per-key catalog memoization."""

import threading
import time

import pytest

from motext.translation.cache import CatalogCache, make_key


class CountingLoader:
    def __init__(self, delay: float = 0.0):
        self.calls = []
        self.delay = delay
        self._lock = threading.Lock()

    def __call__(self, locale, domain, context):
        with self._lock:
            self.calls.append((locale, domain, context))
        if self.delay:
            time.sleep(self.delay)
        return {"hello": f"{locale}/{domain}/{context}"}


class TestMakeKey:
    def test_tuple_key(self):
        assert make_key("de", "main", "urls") == ("de", "main", "urls")

    def test_empty_context_is_none(self):
        assert make_key("de", "main", "") == make_key("de", "main", None) == ("de", "main", None)

    def test_no_separator_collisions(self):
        assert make_key("de.main", "urls") != make_key("de", "main", "urls")


class TestCatalogCache:
    def test_loads_once_per_key(self):
        loader = CountingLoader()
        cache = CatalogCache(loader)

        first = cache.get("de", "main", "urls")
        second = cache.get("de", "main", "urls")

        assert first is second
        assert loader.calls == [("de", "main", "urls")]

    def test_distinct_keys(self):
        loader = CountingLoader()
        cache = CatalogCache(loader)

        cache.get("de", "main")
        cache.get("de", "main", "urls")
        cache.get("ru", "main")
        cache.get("de", "other")

        assert len(loader.calls) == 4
        assert len(cache) == 4
        assert ("de", "main", None) in cache

    def test_entries_are_read_only(self):
        cache = CatalogCache(CountingLoader())
        entry = cache.get("de", "main")
        with pytest.raises(TypeError):
            entry["hello"] = "changed"

    def test_loader_errors_not_cached(self):
        calls = []

        def failing(locale, domain, context):
            calls.append(locale)
            raise RuntimeError("boom")

        cache = CatalogCache(failing)
        for _ in range(2):
            with pytest.raises(RuntimeError):
                cache.get("de", "main")
        assert len(calls) == 2
        assert len(cache) == 0

    def test_invalidate(self):
        loader = CountingLoader()
        cache = CatalogCache(loader)
        cache.get("de", "main")
        cache.get("de", "main", "urls")
        cache.get("ru", "main")

        assert cache.invalidate(locale="de") == 2
        assert len(cache) == 1
        cache.get("de", "main")
        assert len(loader.calls) == 4

    def test_invalidate_by_domain(self):
        cache = CatalogCache(CountingLoader())
        cache.get("de", "main")
        cache.get("de", "other")
        assert cache.invalidate(domain="other") == 1
        assert ("de", "main", None) in cache

    def test_clear(self):
        loader = CountingLoader()
        cache = CatalogCache(loader)
        cache.get("de", "main")
        cache.clear()
        assert len(cache) == 0
        cache.get("de", "main")
        assert len(loader.calls) == 2

    def test_concurrent_same_key_decodes_once(self):
        loader = CountingLoader(delay=0.05)
        cache = CatalogCache(loader)
        results = []

        def worker():
            results.append(cache.get("de", "main", "urls"))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(loader.calls) == 1
        assert all(r is results[0] for r in results)
