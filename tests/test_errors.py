# Area: Shared Tests
"""Tests for the exception hierarchy."""

import pytest

from king_of_hearts.errors import (
    BatchPartialFailure,
    GenerationFailure,
    InvalidSelection,
    KingOfHeartsError,
    LLMServiceError,
    RequestValidationError,
)


class TestErrorHierarchy:
    """Every package error derives from KingOfHeartsError."""

    @pytest.mark.parametrize("error", [
        LLMServiceError("down"),
        GenerationFailure("Wine", "timeout"),
        InvalidSelection("resolve", "bad phase"),
        BatchPartialFailure(["Wine"], ["Wine: timeout"]),
        RequestValidationError("single", ["Missing or invalid category"]),
    ])
    def test_base_class(self, error):
        assert isinstance(error, KingOfHeartsError)

    def test_llm_service_error_keeps_cause(self):
        cause = TimeoutError("slow")
        assert LLMServiceError("timed out", cause=cause).cause is cause


class TestErrorMessages:
    """Tests for messages and structured log blocks."""

    def test_generation_failure(self):
        err = GenerationFailure("Wine", "malformed JSON: Expecting value")
        assert str(err) == "Generation failed for 'Wine': malformed JSON: Expecting value"
        block = err.format_error_log()
        assert "GENERATION_FAILURE" in block
        assert "Subject:      Wine" in block
        assert "malformed JSON" in block

    def test_invalid_selection_with_phase(self):
        err = InvalidSelection("attempt_steal", "transition not allowed", "AWAITING_SCORE_RESOLUTION")
        assert str(err) == (
            "Invalid attempt_steal: transition not allowed (phase: AWAITING_SCORE_RESOLUTION)"
        )
        assert "INVALID_SELECTION" in err.format_error_log()

    def test_batch_partial_failure(self):
        err = BatchPartialFailure(["Wine", "Jazz"], ["Wine: timeout", "Jazz: bad JSON"])
        assert str(err) == "2 topic(s) failed to generate: Wine, Jazz"
        block = err.format_error_log()
        assert " • Jazz: bad JSON" in block

    def test_request_validation_error(self):
        err = RequestValidationError("bulk", ["players must be a non-empty array"], {"players": []})
        assert "players must be a non-empty array" in str(err)
        assert "REQUEST_VALIDATION_FAILURE" in err.format_error_log()
