"""
king_of_hearts.types — TypedDict schemas for endpoint and session payloads
==========================================================================

This module documents the exact JSON structures the package consumes
and produces: the generation endpoint bodies and responses, and the
persisted session snapshot.

All types are exported from the main package:

    from king_of_hearts import BulkRequest, QuestionPayload, ...

Use __annotations__ to inspect fields:

    >>> AnswerPayload.__annotations__
    {'display': str, 'acceptable': List[str]}
"""

from typing import Dict, List, Optional, TypedDict


# ============================================
# Trivia questions
# ============================================

class AnswerPayload(TypedDict):
    """Canonical answer plus accepted variants."""
    display: str            # e.g., "Jeff Probst"
    acceptable: List[str]   # e.g., ["Jeff Probst", "Probst"]


class QuestionPayload(TypedDict):
    """One generated question.

    Fields
    ------
    originalCategory : str
        The topic as the player typed it.
    displayCategory : str
        The fun display name, or the topic itself for fallback questions.
    difficulty : int
        Tier: 100, 200, 300 or 400.
    questionText : str
        The question.
    rangeText : str
        A short hint.
    answer : AnswerPayload
        Canonical answer and accepted variants.
    """
    originalCategory: str
    displayCategory: str
    difficulty: int
    questionText: str
    rangeText: str
    answer: AnswerPayload


# ============================================
# Bulk generation endpoint
# ============================================

class _BulkCategoryRequired(TypedDict):
    name: str
    expert: str


class BulkCategory(_BulkCategoryRequired, total=False):
    """One topic to generate, with its owner."""
    round: int


class _BulkRequestRequired(TypedDict):
    categories: List[BulkCategory]
    players: List[str]


class BulkRequest(_BulkRequestRequired, total=False):
    """Body for ContentService.generate_bulk().

    ``players[0]`` is used as the player name for every topic.
    ``playerCount`` adds ``pointLadders`` to the response.
    """
    playerCount: int


class _BulkResponseRequired(TypedDict):
    success: bool
    questionsByCategory: Dict[str, List[QuestionPayload]]
    totalCategories: int
    totalQuestions: int


class BulkResponse(_BulkResponseRequired, total=False):
    """Result of bulk generation.

    ``errors`` lists ``"<topic>: <reason>"`` for topics that fell back
    and is omitted when every topic generated.
    """
    errors: List[str]
    pointLadders: Dict[str, List[int]]


# ============================================
# Single generation endpoint
# ============================================

class _SingleRequestRequired(TypedDict):
    category: str
    playerName: str
    expertName: str


class SingleRequest(_SingleRequestRequired, total=False):
    """Body for ContentService.generate_single()."""
    round: int
    playerCount: int


class _SingleResponseRequired(TypedDict):
    success: bool
    questions: List[QuestionPayload]
    category: str
    count: int


class SingleResponse(_SingleResponseRequired, total=False):
    round: int
    pointValues: List[int]


class ErrorResponse(TypedDict):
    """Returned with status 400 or 500."""
    success: bool           # always False
    error: str


# ============================================
# Persisted session
# ============================================

class PlayerPayload(TypedDict):
    name: str
    selfCategory: str       # round 1 topic
    peerCategory: str       # round 2 topic, assigned by another player
    score: int


class AskedQuestionPayload(TypedDict):
    category: str
    difficulty: int
    round: int


class SessionPayload(TypedDict):
    """Output of GameSession.to_dict()."""
    players: List[PlayerPayload]
    currentRound: int
    currentPlayerIndex: int
    questionsAsked: List[AskedQuestionPayload]
    sharedCategory: Optional[str]
