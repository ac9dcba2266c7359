# Area: Shared
"""
king_of_hearts.demo — Offline demo LLM client
=============================================

A MockLLMClient preloaded with canned replies so the CLI and local
experiments run without an API key. Questions are generic templates
built around the requested topic; display names append a suffix.

Usage:
    from king_of_hearts import demo_client, GameOrchestrator

    game = GameOrchestrator(players, demo_client(), shared_topic="Movies")
"""

import json
import re

from ._content.llm_client import MockLLMClient

_QUOTED = re.compile(r'"([^"]+)"')

DEMO_NAME_SUFFIX = "Showdown"

DEMO_QUESTIONS = (
    (100, "Which word best names the topic '{topic}' in one word?", "Warm-up.", "{topic}"),
    (200, "How many letters are in the word '{topic}'?", "Count carefully.", "{length}"),
    (300, "What is the first letter of '{topic}'?", "Look closely.", "{first}"),
    (400, "What is the last letter of '{topic}'?", "The end.", "{last}"),
)


def _topic_from(prompt: str) -> str:
    match = _QUOTED.search(prompt)
    return match.group(1) if match else "Trivia"


def demo_display_name(prompt: str) -> str:
    return f"{_topic_from(prompt)} {DEMO_NAME_SUFFIX}"


def demo_questions(prompt: str) -> str:
    """Build a valid four-question JSON reply for the topic in ``prompt``."""
    topic = _topic_from(prompt)
    letters = topic.replace(" ", "")
    values = {
        "topic": topic,
        "length": str(len(letters)),
        "first": letters[:1].upper(),
        "last": letters[-1:].upper(),
    }
    questions = [
        {
            "difficulty": tier,
            "questionText": text.format(**values),
            "rangeText": hint,
            "answer": {"display": answer.format(**values), "acceptable": [answer.format(**values)]},
        }
        for tier, text, hint, answer in DEMO_QUESTIONS
    ]
    return json.dumps({"questions": questions})


def demo_client() -> MockLLMClient:
    return MockLLMClient(
        responses={
            "category name for": demo_display_name,
            "trivia questions about": demo_questions,
        }
    )
