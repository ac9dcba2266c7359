# Area: Shared
"""
king_of_hearts.errors — Custom exception classes
=================================================

Defines the exception hierarchy for content generation and gameplay.
Each exception stores full context for structured logging.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
import json


class KingOfHeartsError(Exception):
    """Base exception for all King of Hearts package errors."""
    pass


class LLMServiceError(KingOfHeartsError):
    """Raised by an LLM client when a completion cannot be obtained."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message)


class GenerationFailure(KingOfHeartsError):
    """Raised when question generation for a topic fails.

    Transport errors, timeouts, malformed JSON and wrong-shaped payloads
    all end up here. The generator always recovers from it locally.
    """

    def __init__(self, topic: str, reason: str):
        self.topic = topic
        self.reason = reason
        super().__init__(f"Generation failed for '{topic}': {reason}")

    def format_error_log(self) -> str:
        return _format_error_block(
            error_type="GENERATION_FAILURE",
            subject=self.topic,
            details={"reason": self.reason},
            errors=None,
        )


class InvalidSelection(KingOfHeartsError):
    """Raised when a caller violates the round state machine contract."""

    def __init__(self, action: str, reason: str, phase: Optional[str] = None):
        self.action = action
        self.reason = reason
        self.phase = phase
        message = f"Invalid {action}: {reason}"
        if phase:
            message += f" (phase: {phase})"
        super().__init__(message)

    def format_error_log(self) -> str:
        return _format_error_block(
            error_type="INVALID_SELECTION",
            subject=self.action,
            details={"reason": self.reason, "phase": self.phase},
            errors=None,
        )


class BatchPartialFailure(KingOfHeartsError):
    """Raised when some topics in a bulk request fell back to templates."""

    def __init__(self, failed_topics: List[str], errors: List[str]):
        self.failed_topics = failed_topics
        self.errors = errors
        super().__init__(
            f"{len(failed_topics)} topic(s) failed to generate: {', '.join(failed_topics)}"
        )

    def format_error_log(self) -> str:
        return _format_error_block(
            error_type="BATCH_PARTIAL_FAILURE",
            subject="bulk_generation",
            details={"failed_topics": self.failed_topics},
            errors=self.errors,
        )


class RequestValidationError(KingOfHeartsError):
    """Raised when a generation endpoint receives a malformed body."""

    def __init__(self, endpoint: str, errors: List[str], body: Optional[Dict[str, Any]] = None):
        self.endpoint = endpoint
        self.errors = errors
        self.body = body
        super().__init__(f"Invalid request for '{endpoint}': {'; '.join(errors)}")

    def format_error_log(self) -> str:
        return _format_error_block(
            error_type="REQUEST_VALIDATION_FAILURE",
            subject=self.endpoint,
            details=self.body or {},
            errors=self.errors,
        )


def _format_error_block(
    error_type: str,
    subject: str,
    details: Dict[str, Any],
    errors: Optional[List[str]],
) -> str:
    """Format a structured multi-line error block for logs."""
    from datetime import datetime, timezone

    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

    lines = [
        "",
        "=" * 64,
        f" {error_type}",
        "=" * 64,
        f" Timestamp:    {timestamp}",
        f" Subject:      {subject}",
        "",
        " ── DETAILS " + "─" * 52,
        _indent_json(details),
    ]

    if errors:
        lines.append("")
        lines.append(" ── ERRORS " + "─" * 53)
        for error in errors:
            lines.append(f" • {error}")

    lines.append("")
    lines.append("=" * 64)
    lines.append("")

    return "\n".join(lines)


def _indent_json(data: Dict[str, Any], indent: int = 2) -> str:
    """Format JSON with indentation for error logs."""
    try:
        formatted = json.dumps(data, indent=indent, default=str)
        return "\n".join(" " + line for line in formatted.split("\n"))
    except (TypeError, ValueError):
        return f" {repr(data)}"
