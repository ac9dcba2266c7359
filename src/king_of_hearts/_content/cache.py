# Area: Content
"""
king_of_hearts._content.cache — Generation cache
================================================

Session-scoped cache of generated question sets.

Keys combine the case-normalized topic with the disambiguating context
(player and expert names). Entries live as long as the cache object and
are never invalidated mid-session, so a topic's display name stays put
for the whole game.

``get_or_create`` is single-flight: concurrent callers for the same key
wait on a per-key lock, and only the first runs the factory.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, Iterator, Optional

from .models import QuestionSet

logger = logging.getLogger("king_of_hearts.content.cache")

KEY_SEPARATOR = "|"


def normalize_topic(topic: str) -> str:
    """Lower-case and collapse whitespace."""
    return " ".join((topic or "").lower().split())


def make_key(topic: str, player_name: str = "", expert_name: str = "") -> str:
    return KEY_SEPARATOR.join([normalize_topic(topic), player_name or "", expert_name or ""])


class KeyedLocks:
    """Hands out one lock per key."""

    def __init__(self) -> None:
        self._locks: Dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    def lock_for(self, key: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock

    def clear(self) -> None:
        with self._guard:
            self._locks.clear()


class GenerationCache:
    """
    Maps cache keys to question sets.

    Attributes:
        factory_calls: number of times a factory actually ran
    """

    def __init__(self) -> None:
        self._entries: Dict[str, QuestionSet] = {}
        self._entries_lock = threading.Lock()
        self._inflight = KeyedLocks()
        self.factory_calls = 0

    def get(self, key: str) -> Optional[QuestionSet]:
        with self._entries_lock:
            return self._entries.get(key)

    def put(self, key: str, question_set: QuestionSet) -> None:
        with self._entries_lock:
            self._entries[key] = question_set

    def contains(self, key: str) -> bool:
        with self._entries_lock:
            return key in self._entries

    def get_or_create(self, key: str, factory: Callable[[], QuestionSet]) -> QuestionSet:
        cached = self.get(key)
        if cached is not None:
            logger.debug(f"Cache hit: {key}")
            return cached

        with self._inflight.lock_for(key):
            # Another caller may have finished while we waited
            cached = self.get(key)
            if cached is not None:
                logger.debug(f"Cache hit after wait: {key}")
                return cached

            logger.debug(f"Cache miss: {key}")
            with self._entries_lock:
                self.factory_calls += 1
            question_set = factory()
            self.put(key, question_set)
            return question_set

    def clear(self) -> None:
        with self._entries_lock:
            self._entries.clear()
        self._inflight.clear()
        logger.info("Generation cache cleared")

    def __len__(self) -> int:
        with self._entries_lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        with self._entries_lock:
            return iter(list(self._entries))
