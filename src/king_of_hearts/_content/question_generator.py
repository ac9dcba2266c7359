# Area: Content
"""
king_of_hearts._content.question_generator — Trivia question generation
========================================================================

Turns a topic into a QuestionSet of four questions, one per difficulty
tier, using a single LLM round trip.

Two layers:

  - ``try_generate``  returns a GenerationResult: either a QuestionSet
                      or the GenerationFailure explaining what went wrong.
  - ``generate``      collapses the result through ``degrade_to_fallback``
                      so callers always get a QuestionSet. Failures are
                      logged, never surfaced to players.

Fallback questions are deterministic templates keyed only by tier and
the raw topic. They ask a human judge to accept any reasonable answer.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from pydantic import ValidationError

from ..config import DIFFICULTY_TIERS
from ..errors import GenerationFailure, LLMServiceError
from .._shared.logging_config import log_package_error
from .cache import GenerationCache, make_key
from .llm_client import RESPONSE_FORMAT_JSON, BaseLLMClient
from .models import Answer, QuestionSet, RawQuestionBatch, TriviaQuestion
from .prompts import QUESTIONS_SYSTEM_PROMPT, QUESTIONS_USER_TEMPLATE
from .topic_namer import TopicNamer

logger = logging.getLogger("king_of_hearts.content.generator")

DEFAULT_QUESTION_MAX_TOKENS = 2000

_CODE_FENCE = re.compile(r"```(?:json)?\s*([\s\S]*?)```")

FALLBACK_ANSWER_DISPLAY = "(Accept any reasonable answer - the judge decides)"
FALLBACK_ANSWER_VARIANTS = ("any reasonable answer", "judge decides")

FALLBACK_TEMPLATES = {
    100: (
        "what is the most famous thing associated with {topic}?",
        "Think of the most obvious answer - we're being generous here.",
    ),
    200: (
        "who is the most well-known person in the field of {topic}?",
        "Any famous name related to {topic} works.",
    ),
    300: (
        "in what year did {topic} become widely popular or recognized?",
        "We'll accept anything within 10 years.",
    ),
    400: (
        "what is a technical term or insider phrase used in {topic}?",
        "Only true {topic} experts would know this.",
    ),
}


@dataclass(frozen=True)
class GenerationContext:
    """Who a question set is generated for. Only used to key the cache."""
    player_name: str = ""
    expert_name: str = ""


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of one generation attempt."""
    topic: str
    question_set: Optional[QuestionSet] = None
    failure: Optional[GenerationFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None and self.question_set is not None


def fallback_question_set(topic: str) -> QuestionSet:
    """Build the deterministic fallback set. Never calls the LLM."""
    raw_topic = (topic or "").strip() or "this topic"
    questions = [
        TriviaQuestion(
            original_topic=raw_topic,
            display_topic=raw_topic,
            difficulty=tier,
            question_text=FALLBACK_TEMPLATES[tier][0].format(topic=raw_topic),
            hint_text=FALLBACK_TEMPLATES[tier][1].format(topic=raw_topic),
            answer=Answer(display=FALLBACK_ANSWER_DISPLAY, acceptable=FALLBACK_ANSWER_VARIANTS),
        )
        for tier in DIFFICULTY_TIERS
    ]
    return QuestionSet(
        topic=raw_topic,
        display_topic=raw_topic,
        questions=tuple(questions),
        is_fallback=True,
    )


def degrade_to_fallback(result: GenerationResult) -> QuestionSet:
    """Collapse a GenerationResult into a QuestionSet, logging any failure."""
    if result.ok:
        return result.question_set
    if result.failure is not None:
        log_package_error(result.failure, level=logging.WARNING)
    if result.question_set is not None and result.question_set.is_fallback:
        return result.question_set
    logger.info(f"Using fallback questions for: {result.topic}")
    return fallback_question_set(result.topic)


def extract_json_text(content: str) -> str:
    """Pull the JSON body out of a reply that may be wrapped in a code fence."""
    match = _CODE_FENCE.search(content)
    if match:
        return match.group(1).strip()
    return content.strip()


def parse_question_payload(topic: str, content: str) -> RawQuestionBatch:
    """
    Parse and shape-check an LLM reply.

    Accepts either ``{"questions": [...]}`` or a bare list.

    Raises:
        GenerationFailure: on malformed JSON, wrong count or missing fields
    """
    try:
        parsed = json.loads(extract_json_text(content))
    except json.JSONDecodeError as e:
        raise GenerationFailure(topic, f"malformed JSON: {e.msg}") from e

    if isinstance(parsed, list):
        parsed = {"questions": parsed}
    if not isinstance(parsed, dict):
        raise GenerationFailure(topic, f"expected object, got {type(parsed).__name__}")

    try:
        return RawQuestionBatch.model_validate(parsed)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'payload'}: {err['msg']}"
            for err in e.errors()
        )
        raise GenerationFailure(topic, f"invalid question payload: {problems}") from e


class QuestionGenerator:
    """
    Generates question sets for topics.

    Args:
        llm_client: completion service
        namer: display-name generator, shared across the session
        cache: optional session cache; when given, ``*_cached`` methods
               generate at most once per cache key
        max_tokens: completion budget for the question call
    """

    def __init__(
        self,
        llm_client: BaseLLMClient,
        namer: TopicNamer,
        cache: Optional[GenerationCache] = None,
        max_tokens: int = DEFAULT_QUESTION_MAX_TOKENS,
    ):
        self._llm_client = llm_client
        self._namer = namer
        self._cache = cache
        self._max_tokens = max_tokens

    @property
    def cache(self) -> Optional[GenerationCache]:
        return self._cache

    def try_generate(
        self, topic: str, context: Optional[GenerationContext] = None
    ) -> GenerationResult:
        clean_topic = _require_topic(topic)
        logger.info(f"Generating questions for topic: {clean_topic}")

        try:
            reply = self._llm_client.complete(
                QUESTIONS_SYSTEM_PROMPT,
                [{"role": "user", "content": QUESTIONS_USER_TEMPLATE.format(topic=clean_topic)}],
                response_format=RESPONSE_FORMAT_JSON,
                max_tokens=self._max_tokens,
            )
            batch = parse_question_payload(clean_topic, reply)
            question_set = self._build_set(clean_topic, batch)
        except LLMServiceError as e:
            return GenerationResult(clean_topic, failure=GenerationFailure(clean_topic, str(e)))
        except GenerationFailure as e:
            return GenerationResult(clean_topic, failure=e)
        except Exception as e:
            logger.error(
                f"Unexpected error generating '{clean_topic}': {e}",
                exc_info=True,
                extra={"topic": clean_topic},
            )
            reason = str(e) or type(e).__name__
            return GenerationResult(clean_topic, failure=GenerationFailure(clean_topic, reason))

        logger.info(
            f"Generated {len(question_set.questions)} questions for: "
            f"{clean_topic} (displayed as: {question_set.display_topic})"
        )
        return GenerationResult(clean_topic, question_set=question_set)

    def _build_set(self, clean_topic: str, batch: RawQuestionBatch) -> QuestionSet:
        display_topic = self._namer.name(clean_topic)
        return QuestionSet(
            topic=clean_topic,
            display_topic=display_topic,
            questions=tuple(
                TriviaQuestion(
                    original_topic=clean_topic,
                    display_topic=display_topic,
                    difficulty=raw.difficulty,
                    question_text=raw.questionText,
                    hint_text=raw.rangeText,
                    answer=Answer(display=raw.answer.display, acceptable=raw.answer.acceptable),
                )
                for raw in sorted(batch.questions, key=lambda q: q.difficulty)
            ),
        )

    def generate(self, topic: str, context: Optional[GenerationContext] = None) -> QuestionSet:
        """Always returns a QuestionSet: generated, or the fallback."""
        return degrade_to_fallback(self.try_generate(topic, context))

    def try_generate_cached(
        self, topic: str, context: Optional[GenerationContext] = None
    ) -> GenerationResult:
        """
        Cache-aware ``try_generate``.

        The cached value is the degraded set, so a failed topic keeps its
        fallback for the rest of the session. The failure is still
        reported to the caller that triggered the generation.
        """
        if self._cache is None:
            return self.try_generate(topic, context)

        clean_topic = _require_topic(topic)
        context = context or GenerationContext()
        key = make_key(clean_topic, context.player_name, context.expert_name)
        failures: List[GenerationFailure] = []

        def factory() -> QuestionSet:
            result = self.try_generate(clean_topic, context)
            if result.failure is not None:
                failures.append(result.failure)
            return degrade_to_fallback(result)

        question_set = self._cache.get_or_create(key, factory)
        return GenerationResult(
            clean_topic,
            question_set=question_set,
            failure=failures[0] if failures else None,
        )

    def generate_cached(
        self, topic: str, context: Optional[GenerationContext] = None
    ) -> QuestionSet:
        result = self.try_generate_cached(topic, context)
        return result.question_set if result.question_set is not None else degrade_to_fallback(result)

    def get_question(
        self, topic: str, tier: int, context: Optional[GenerationContext] = None
    ) -> Optional[TriviaQuestion]:
        """Single-question lookup for one (topic, tier) pair."""
        return self.generate_cached(topic, context).question_for(tier)


def _require_topic(topic: str) -> str:
    clean = (topic or "").strip()
    if not clean:
        raise ValueError("topic must be non-empty")
    return clean
