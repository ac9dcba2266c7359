# Area: Test Support
"""Builders shared across the test modules."""

import json
from typing import Dict, Iterable, List, Optional, Sequence

from king_of_hearts.config import DIFFICULTY_TIERS
from king_of_hearts.errors import LLMServiceError
from king_of_hearts._content.llm_client import MockLLMClient
from king_of_hearts._content.models import Answer, QuestionSet, TriviaQuestion
from king_of_hearts._game.session import Player


def question_entries(topic: str, tiers: Sequence[int] = DIFFICULTY_TIERS) -> List[dict]:
    return [
        {
            "difficulty": tier,
            "questionText": f"{topic} question worth {tier}?",
            "rangeText": f"Hint {tier}",
            "answer": {"display": f"{topic} answer {tier}", "acceptable": [f"{topic}-{tier}"]},
        }
        for tier in tiers
    ]


def questions_json(topic: str, tiers: Sequence[int] = DIFFICULTY_TIERS, fenced: bool = False) -> str:
    text = json.dumps({"questions": question_entries(topic, tiers)})
    return f"```json\n{text}\n```" if fenced else text


def name_key(topic: str) -> str:
    return f'category name for: "{topic}"'


def questions_key(topic: str) -> str:
    return f'questions about "{topic}"'


def mock_client(
    topics: Iterable[str] = (),
    failing: Iterable[str] = (),
    names: Optional[Dict[str, str]] = None,
) -> MockLLMClient:
    """MockLLMClient that knows names and questions for ``topics``.

    Topics in ``failing`` raise LLMServiceError for the question call.
    """
    names = names or {}
    responses = {}
    for topic in topics:
        responses[name_key(topic)] = names.get(topic, f"{topic} Zone")
        responses[questions_key(topic)] = questions_json(topic)
    for topic in failing:
        responses[name_key(topic)] = names.get(topic, f"{topic} Zone")
        responses[questions_key(topic)] = LLMServiceError(f"upstream down for {topic}")
    return MockLLMClient(responses)


def question_set(topic: str, display: Optional[str] = None) -> QuestionSet:
    display = display or f"{topic} Zone"
    return QuestionSet(
        topic=topic,
        display_topic=display,
        questions=tuple(
            TriviaQuestion(
                original_topic=topic,
                display_topic=display,
                difficulty=tier,
                question_text=f"{topic} question worth {tier}?",
                hint_text="",
                answer=Answer(display=f"{topic} answer {tier}"),
            )
            for tier in DIFFICULTY_TIERS
        ),
    )


SELF_TOPICS = ["Wine", "Coffee", "Jazz", "Chess", "Soccer", "Knitting", "Opera", "Poker"]
PEER_TOPICS = ["Dogs", "Excel", "Reality TV", "Pottery", "Trucks", "Baking", "Anime", "Golf"]
NAMES = ["Ana", "Ben", "Cleo", "Dev", "Eli", "Fay", "Gus", "Hana"]


def make_players(count: int) -> List[Player]:
    return [
        Player(NAMES[i], self_topic=SELF_TOPICS[i], peer_topic=PEER_TOPICS[i])
        for i in range(count)
    ]
