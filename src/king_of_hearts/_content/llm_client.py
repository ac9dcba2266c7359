# Area: Content
"""
king_of_hearts._content.llm_client — LLM completion service
============================================================

Abstraction over the LLM completion service used by the content
pipeline. The pipeline only needs one call:

    complete(system_prompt, messages, response_format) -> text

Any failure (missing credentials, HTTP error, timeout, empty reply) is
raised as LLMServiceError. Callers never distinguish error subtypes.

Two clients:
  - AnthropicClient: Anthropic Messages API with a per-request timeout
  - MockLLMClient: canned responses for tests and offline runs
"""

from __future__ import annotations

import logging
import os
import threading
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional, Union

import anthropic

from ..errors import LLMServiceError

logger = logging.getLogger("king_of_hearts.content.llm")

DEFAULT_MODEL = "claude-sonnet-4-20250514"
DEFAULT_MAX_TOKENS = 2000
DEFAULT_TIMEOUT_SECONDS = 30.0

# response_format values understood by the clients
RESPONSE_FORMAT_TEXT = "text"
RESPONSE_FORMAT_JSON = "json"

Message = Dict[str, str]
CannedResponse = Union[str, Exception, Callable[[str], str]]


class BaseLLMClient(ABC):
    """Abstract base for LLM clients."""

    @abstractmethod
    def complete(
        self,
        system_prompt: str,
        messages: List[Message],
        response_format: str = RESPONSE_FORMAT_TEXT,
        max_tokens: Optional[int] = None,
    ) -> str:
        """Return the completion text. Raises LLMServiceError on any failure."""
        ...

    @abstractmethod
    def is_available(self) -> bool:
        """Check if client is properly configured."""
        ...


class AnthropicClient(BaseLLMClient):
    """Anthropic Claude API client.

    SDK retries are disabled: a topic gets exactly one round trip, and
    retrying across topics is the batch scheduler's business.
    For JSON responses the assistant turn is prefilled with ``{`` so the
    model starts inside the object.
    """

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        api_key: Optional[str] = None,
    ):
        self.model = model
        self.max_tokens = max_tokens
        self.timeout_seconds = timeout_seconds
        self._api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        self._client: Optional[anthropic.Anthropic] = None
        self._init_lock = threading.Lock()

    def _get_client(self) -> anthropic.Anthropic:
        # Lazy so that importing the package never needs credentials
        with self._init_lock:
            if self._client is None:
                if not self._api_key:
                    raise LLMServiceError("ANTHROPIC_API_KEY is not set")
                self._client = anthropic.Anthropic(
                    api_key=self._api_key,
                    timeout=self.timeout_seconds,
                    max_retries=0,
                )
            return self._client

    def is_available(self) -> bool:
        return bool(self._api_key)

    def complete(
        self,
        system_prompt: str,
        messages: List[Message],
        response_format: str = RESPONSE_FORMAT_TEXT,
        max_tokens: Optional[int] = None,
    ) -> str:
        client = self._get_client()
        request_messages = list(messages)
        prefill = ""
        if response_format == RESPONSE_FORMAT_JSON:
            prefill = "{"
            request_messages.append({"role": "assistant", "content": prefill})

        try:
            response = client.messages.create(
                model=self.model,
                max_tokens=max_tokens or self.max_tokens,
                system=system_prompt,
                messages=request_messages,
            )
        except anthropic.APITimeoutError as e:
            raise LLMServiceError(
                f"LLM request timed out after {self.timeout_seconds}s", cause=e
            ) from e
        except anthropic.APIError as e:
            raise LLMServiceError(f"LLM request failed: {e}", cause=e) from e

        text = "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )
        if not text.strip():
            raise LLMServiceError("LLM returned empty response")
        return prefill + text


class MockLLMClient(BaseLLMClient):
    """Mock client for testing.

    ``responses`` maps a substring of the last user message to the text to
    return, an exception to raise, or a callable that builds the text from
    the prompt. The first matching key wins.
    Every call is recorded in ``calls``.
    """

    def __init__(
        self,
        responses: Optional[Dict[str, CannedResponse]] = None,
        default: Optional[CannedResponse] = None,
    ):
        self._responses = responses or {}
        self._default = default
        self._lock = threading.Lock()
        self.calls: List[Dict[str, object]] = []

    def is_available(self) -> bool:
        return True

    def complete(
        self,
        system_prompt: str,
        messages: List[Message],
        response_format: str = RESPONSE_FORMAT_TEXT,
        max_tokens: Optional[int] = None,
    ) -> str:
        prompt = messages[-1]["content"] if messages else ""
        with self._lock:
            self.calls.append({
                "system_prompt": system_prompt,
                "prompt": prompt,
                "response_format": response_format,
            })

        response = self._default
        for key, candidate in self._responses.items():
            if key in prompt:
                response = candidate
                break

        if isinstance(response, Exception):
            raise response
        if callable(response):
            response = response(prompt)
        if not response:
            raise LLMServiceError("No canned response configured")
        return response

    def calls_matching(self, fragment: str) -> int:
        """Count recorded calls whose prompt contains ``fragment``."""
        with self._lock:
            return sum(1 for call in self.calls if fragment in str(call["prompt"]))
