# Area: Content
"""
king_of_hearts._content.topic_namer — Fun display names for topics
==================================================================

Turns a raw topic ("Wine") into a short player-facing label
("Wine Snob Territory"). The acceptability rules live in the prompt;
code only strips quotes and rejects empty replies.

Names are memoized per normalized topic for the namer's lifetime, so
each distinct topic costs at most one LLM call no matter how many
rounds or players reference it. Failures fall back to the raw topic
and are memoized too, keeping the label stable for the session.
"""

from __future__ import annotations

import logging
from typing import Dict

from ..errors import LLMServiceError
from .cache import KeyedLocks, normalize_topic
from .llm_client import BaseLLMClient
from .prompts import NAMER_SYSTEM_PROMPT, NAMER_USER_TEMPLATE

logger = logging.getLogger("king_of_hearts.content.namer")

DEFAULT_NAME_MAX_TOKENS = 50

_QUOTES = "\"'“”‘’`"


def clean_display_name(text: str) -> str:
    """Take the first line of a reply and strip surrounding quotes."""
    lines = [line for line in (text or "").strip().splitlines() if line.strip()]
    if not lines:
        return ""
    return lines[0].strip().strip(_QUOTES).strip()


class TopicNamer:
    """Memoizing display-name generator."""

    def __init__(self, llm_client: BaseLLMClient, max_tokens: int = DEFAULT_NAME_MAX_TOKENS):
        self._llm_client = llm_client
        self._max_tokens = max_tokens
        self._names: Dict[str, str] = {}
        self._locks = KeyedLocks()
        self.generation_count = 0

    def name(self, topic: str) -> str:
        """Return the display name for ``topic``, generating it at most once."""
        key = normalize_topic(topic)
        if not key:
            raise ValueError("topic must be non-empty")

        with self._locks.lock_for(key):
            if key in self._names:
                logger.debug(f"Display name cache hit for: {topic}")
                return self._names[key]

            display = self._generate(topic.strip())
            self._names[key] = display
            return display

    def _generate(self, topic: str) -> str:
        self.generation_count += 1
        logger.info(f"Generating display name for: {topic}")
        try:
            reply = self._llm_client.complete(
                NAMER_SYSTEM_PROMPT,
                [{"role": "user", "content": NAMER_USER_TEMPLATE.format(topic=topic)}],
                max_tokens=self._max_tokens,
            )
        except LLMServiceError as e:
            logger.warning(
                f"Display name generation failed for '{topic}': {e}",
                extra={"topic": topic},
            )
            return topic

        display = clean_display_name(reply)
        if not display:
            logger.warning(f"Empty display name for '{topic}', using topic")
            return topic

        logger.info(f"Display name for '{topic}': '{display}'")
        return display

    def known_names(self) -> Dict[str, str]:
        return dict(self._names)

    def clear(self) -> None:
        self._names.clear()
        self._locks.clear()
