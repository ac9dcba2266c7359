# Area: Content
"""
Content pipeline - turns player topics into trivia questions.

This package handles:
- LLM completion clients (Anthropic and mock)
- Topic display names
- Question generation, validation and fallback
- The per-session generation cache
- Rate-limited bulk generation
- The bulk and single generation endpoints
"""

from .batch_scheduler import BatchResult, BatchScheduler, GenerationRequest
from .cache import GenerationCache, make_key, normalize_topic
from .llm_client import AnthropicClient, BaseLLMClient, MockLLMClient
from .models import Answer, QuestionSet, TriviaQuestion
from .question_generator import (
    GenerationContext,
    GenerationResult,
    QuestionGenerator,
    degrade_to_fallback,
    fallback_question_set,
)
from .service import ContentService
from .topic_namer import TopicNamer

__all__ = [
    "BatchResult",
    "BatchScheduler",
    "GenerationRequest",
    "GenerationCache",
    "make_key",
    "normalize_topic",
    "AnthropicClient",
    "BaseLLMClient",
    "MockLLMClient",
    "Answer",
    "QuestionSet",
    "TriviaQuestion",
    "GenerationContext",
    "GenerationResult",
    "QuestionGenerator",
    "degrade_to_fallback",
    "fallback_question_set",
    "ContentService",
    "TopicNamer",
]
