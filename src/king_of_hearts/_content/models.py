# Area: Content
"""
king_of_hearts._content.models — Trivia question models
=======================================================

Two layers of pydantic models:

  - Raw*        : the JSON shape the LLM is asked to return. Parsing a
                  reply through RawQuestionBatch is the shape check.
  - TriviaQuestion / QuestionSet : immutable game-facing objects.

Game-facing models serialize with camelCase aliases so payloads match
the generation endpoint format (``questionText``, ``displayCategory``...).
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..config import DIFFICULTY_TIERS


def _dedupe(values) -> Tuple[str, ...]:
    seen = []
    for value in values:
        if value and value not in seen:
            seen.append(value)
    return tuple(seen)


def _normalize_answer(text: str) -> str:
    return " ".join(text.lower().split())


# ═══════════════════════════════════════════════════════════════════
# 1. RAW LLM PAYLOAD
# ═══════════════════════════════════════════════════════════════════

class RawAnswer(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    display: str = Field(min_length=1)
    acceptable: List[str] = Field(default_factory=list)


class RawQuestion(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    difficulty: int
    questionText: str = Field(min_length=1)
    rangeText: str = ""
    answer: RawAnswer


class RawQuestionBatch(BaseModel):
    questions: List[RawQuestion]

    @model_validator(mode="after")
    def _check_ladder(self) -> "RawQuestionBatch":
        if len(self.questions) != len(DIFFICULTY_TIERS):
            raise ValueError(
                f"expected {len(DIFFICULTY_TIERS)} questions, got {len(self.questions)}"
            )
        tiers = sorted(q.difficulty for q in self.questions)
        if tiers != list(DIFFICULTY_TIERS):
            raise ValueError(f"expected difficulty tiers {list(DIFFICULTY_TIERS)}, got {tiers}")
        return self


# ═══════════════════════════════════════════════════════════════════
# 2. GAME-FACING MODELS
# ═══════════════════════════════════════════════════════════════════

class Answer(BaseModel):
    """Canonical answer plus accepted variants."""
    model_config = ConfigDict(frozen=True)

    display: str
    acceptable: Tuple[str, ...] = ()

    @field_validator("acceptable", mode="before")
    @classmethod
    def _unique_variants(cls, value):
        return _dedupe(value or ())


class TriviaQuestion(BaseModel):
    """One question for one (topic, difficulty tier) pair."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    original_topic: str = Field(alias="originalCategory")
    display_topic: str = Field(alias="displayCategory")
    difficulty: int
    question_text: str = Field(alias="questionText")
    hint_text: str = Field(default="", alias="rangeText")
    answer: Answer

    @field_validator("difficulty")
    @classmethod
    def _known_tier(cls, value: int) -> int:
        if value not in DIFFICULTY_TIERS:
            raise ValueError(f"difficulty must be one of {DIFFICULTY_TIERS}")
        return value

    def accepts(self, given: str) -> bool:
        """Case- and whitespace-insensitive match against the answer variants."""
        guess = _normalize_answer(given or "")
        if not guess:
            return False
        candidates = (self.answer.display,) + self.answer.acceptable
        return any(_normalize_answer(c) == guess for c in candidates)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class QuestionSet(BaseModel):
    """The four questions for one topic, exactly one per tier."""
    model_config = ConfigDict(frozen=True)

    topic: str
    display_topic: str
    questions: Tuple[TriviaQuestion, ...]
    is_fallback: bool = False

    @model_validator(mode="after")
    def _one_per_tier(self) -> "QuestionSet":
        tiers = [q.difficulty for q in self.questions]
        if sorted(tiers) != list(DIFFICULTY_TIERS):
            raise ValueError(f"question set needs tiers {list(DIFFICULTY_TIERS)}, got {tiers}")
        return self

    def question_for(self, tier: int) -> Optional[TriviaQuestion]:
        for question in self.questions:
            if question.difficulty == tier:
                return question
        return None

    @property
    def tiers(self) -> Tuple[int, ...]:
        return tuple(sorted(q.difficulty for q in self.questions))

    def to_payload(self) -> List[dict]:
        return [q.to_payload() for q in sorted(self.questions, key=lambda q: q.difficulty)]
