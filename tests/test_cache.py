# Area: Content Tests
"""Tests for the generation cache."""

import threading
import time

from king_of_hearts._content.cache import (
    GenerationCache,
    KeyedLocks,
    make_key,
    normalize_topic,
)
from factories import question_set


class TestKeys:
    """Tests for cache keys."""

    def test_normalize_topic(self):
        """Case and runs of whitespace are normalized."""
        assert normalize_topic("  Reality   TV ") == "reality tv"

    def test_make_key_includes_context(self):
        """Context names disambiguate the same topic."""
        assert make_key("Wine", "Ana", "Ben") == "wine|Ana|Ben"
        assert make_key("Wine", "Ana", "Ben") != make_key("Wine", "Ana", "Cleo")
        assert make_key("WINE") == "wine||"

    def test_keyed_locks_reuse(self):
        """The same key always gets the same lock."""
        locks = KeyedLocks()
        assert locks.lock_for("a") is locks.lock_for("a")
        assert locks.lock_for("a") is not locks.lock_for("b")


class TestGenerationCache:
    """Tests for GenerationCache."""

    def test_get_or_create_runs_factory_once(self):
        """Second lookup returns the stored set."""
        cache = GenerationCache()
        calls = []

        def factory():
            calls.append(1)
            return question_set("Wine")

        first = cache.get_or_create("wine||", factory)
        second = cache.get_or_create("wine||", factory)
        assert first is second
        assert len(calls) == 1
        assert cache.factory_calls == 1

    def test_put_get_contains(self):
        """Basic mapping operations."""
        cache = GenerationCache()
        qs = question_set("Wine")
        assert cache.get("wine||") is None
        cache.put("wine||", qs)
        assert cache.contains("wine||")
        assert cache.get("wine||") is qs
        assert len(cache) == 1
        assert list(cache) == ["wine||"]

    def test_clear(self):
        """clear() empties the cache."""
        cache = GenerationCache()
        cache.put("wine||", question_set("Wine"))
        cache.clear()
        assert len(cache) == 0
        assert cache.get("wine||") is None

    def test_single_flight_under_concurrency(self):
        """Concurrent misses on one key run the factory once."""
        cache = GenerationCache()
        barrier = threading.Barrier(5)
        results = []

        def factory():
            time.sleep(0.05)
            return question_set("Wine")

        def worker():
            barrier.wait()
            results.append(cache.get_or_create("wine||", factory))

        threads = [threading.Thread(target=worker) for _ in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert cache.factory_calls == 1
        assert all(r is results[0] for r in results)

    def test_different_keys_generate_independently(self):
        """Each key gets its own factory call."""
        cache = GenerationCache()
        cache.get_or_create("wine||", lambda: question_set("Wine"))
        cache.get_or_create("coffee||", lambda: question_set("Coffee"))
        assert cache.factory_calls == 2
