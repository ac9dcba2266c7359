# Area: Content Tests
"""Tests for trivia question models."""

import pytest
from pydantic import ValidationError

from king_of_hearts._content.models import (
    Answer,
    QuestionSet,
    RawQuestionBatch,
    TriviaQuestion,
)
from factories import question_entries, question_set


def make_question(**overrides):
    data = {
        "original_topic": "Wine",
        "display_topic": "Wine Snob Territory",
        "difficulty": 200,
        "question_text": "Which grape is used in Chablis?",
        "hint_text": "White Burgundy.",
        "answer": Answer(display="Chardonnay", acceptable=["Chardonnay", "chardonnay grape"]),
    }
    data.update(overrides)
    return TriviaQuestion(**data)


class TestTriviaQuestion:
    """Tests for TriviaQuestion."""

    def test_accepts_display_answer_case_insensitive(self):
        """Answer matching ignores case and surrounding whitespace."""
        q = make_question()
        assert q.accepts("  CHARDONNAY ") is True

    def test_accepts_acceptable_variant(self):
        """Any acceptable variant matches."""
        q = make_question()
        assert q.accepts("Chardonnay Grape") is True

    def test_rejects_wrong_or_empty_answer(self):
        """Wrong and blank answers are rejected."""
        q = make_question()
        assert q.accepts("Merlot") is False
        assert q.accepts("   ") is False

    def test_unknown_tier_rejected(self):
        """Difficulty must be one of the four tiers."""
        with pytest.raises(ValidationError):
            make_question(difficulty=250)

    def test_is_immutable(self):
        """Questions cannot be changed after creation."""
        q = make_question()
        with pytest.raises(ValidationError):
            q.difficulty = 300

    def test_payload_uses_camel_case(self):
        """to_payload() emits the endpoint field names."""
        payload = make_question().to_payload()
        assert payload["originalCategory"] == "Wine"
        assert payload["displayCategory"] == "Wine Snob Territory"
        assert payload["questionText"] == "Which grape is used in Chablis?"
        assert payload["rangeText"] == "White Burgundy."
        assert payload["answer"]["acceptable"] == ["Chardonnay", "chardonnay grape"]

    def test_populates_from_aliases(self):
        """A payload can be read back by alias."""
        payload = make_question().to_payload()
        assert TriviaQuestion.model_validate(payload) == make_question()

    def test_duplicate_variants_collapsed(self):
        """Acceptable variants are de-duplicated in order."""
        answer = Answer(display="2000", acceptable=["2000", "2000", "two thousand"])
        assert answer.acceptable == ("2000", "two thousand")


class TestQuestionSet:
    """Tests for QuestionSet."""

    def test_one_question_per_tier(self):
        """A set exposes its tiers and looks questions up by tier."""
        qs = question_set("Wine")
        assert qs.tiers == (100, 200, 300, 400)
        assert qs.question_for(300).difficulty == 300
        assert qs.question_for(500) is None

    def test_missing_tier_rejected(self):
        """Three questions are not a set."""
        qs = question_set("Wine")
        with pytest.raises(ValidationError):
            QuestionSet(topic="Wine", display_topic="Wine", questions=qs.questions[:3])

    def test_duplicate_tier_rejected(self):
        """Two 100s and no 400 is not a set."""
        qs = question_set("Wine")
        questions = (qs.questions[0],) + qs.questions[:3]
        with pytest.raises(ValidationError):
            QuestionSet(topic="Wine", display_topic="Wine", questions=questions)

    def test_payload_sorted_by_difficulty(self):
        """to_payload() lists questions from 100 to 400."""
        qs = question_set("Wine")
        shuffled = QuestionSet(
            topic="Wine", display_topic="Wine Zone", questions=tuple(reversed(qs.questions))
        )
        assert [q["difficulty"] for q in shuffled.to_payload()] == [100, 200, 300, 400]


class TestRawQuestionBatch:
    """Tests for the LLM payload shape check."""

    def test_valid_batch(self):
        """Four entries at the four tiers pass."""
        batch = RawQuestionBatch.model_validate({"questions": question_entries("Wine")})
        assert len(batch.questions) == 4

    def test_wrong_count_rejected(self):
        """Three entries fail."""
        with pytest.raises(ValidationError):
            RawQuestionBatch.model_validate({"questions": question_entries("Wine", (100, 200, 300))})

    def test_wrong_tiers_rejected(self):
        """Four entries with a duplicated tier fail."""
        with pytest.raises(ValidationError):
            RawQuestionBatch.model_validate(
                {"questions": question_entries("Wine", (100, 100, 300, 400))}
            )

    def test_blank_question_text_rejected(self):
        """Whitespace-only questionText fails after stripping."""
        entries = question_entries("Wine")
        entries[0]["questionText"] = "   "
        with pytest.raises(ValidationError):
            RawQuestionBatch.model_validate({"questions": entries})

    def test_missing_answer_display_rejected(self):
        """An answer without display fails."""
        entries = question_entries("Wine")
        del entries[2]["answer"]["display"]
        with pytest.raises(ValidationError):
            RawQuestionBatch.model_validate({"questions": entries})
