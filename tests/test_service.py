# Area: Content Tests
"""Tests for the generation endpoints."""

from unittest.mock import Mock

import pytest

from king_of_hearts._content.batch_scheduler import BatchScheduler
from king_of_hearts._content.cache import GenerationCache
from king_of_hearts._content.question_generator import FALLBACK_ANSWER_DISPLAY, QuestionGenerator
from king_of_hearts._content.service import ContentService
from king_of_hearts._content.topic_namer import TopicNamer
from factories import mock_client


def _service(topics=("Wine", "Coffee"), failing=()):
    client = mock_client(topics, failing=failing)
    generator = QuestionGenerator(client, TopicNamer(client), cache=GenerationCache())
    scheduler = BatchScheduler(generator.try_generate_cached, sleep=Mock())
    return ContentService(generator, scheduler), client


def _bulk(*names, **extra):
    body = {
        "categories": [{"name": n, "expert": "Ben"} for n in names],
        "players": ["Ana", "Ben"],
    }
    body.update(extra)
    return body


class TestBulkEndpoint:
    """Tests for bulk generation."""

    def test_success(self):
        service, _ = _service()
        status, payload = service.handle_request(_bulk("Wine", "Coffee"))
        assert status == 200
        assert payload["success"] is True
        assert payload["totalCategories"] == 2
        assert payload["totalQuestions"] == 8
        assert "errors" not in payload
        assert "pointLadders" not in payload

        wine = payload["questionsByCategory"]["Wine"]
        assert [q["difficulty"] for q in wine] == [100, 200, 300, 400]
        assert wine[0]["displayCategory"] == "Wine Zone"
        assert wine[0]["originalCategory"] == "Wine"
        assert set(wine[0]) == {
            "originalCategory", "displayCategory", "difficulty", "questionText", "rangeText", "answer",
        }

    def test_partial_failure(self):
        """A failed topic gets fallback questions and an error string."""
        service, _ = _service(topics=("Wine",), failing=("Jazz",))
        status, payload = service.handle_request(_bulk("Wine", "Jazz"))
        assert status == 200
        assert payload["success"] is True
        assert payload["errors"] == ["Jazz: upstream down for Jazz"]
        jazz = payload["questionsByCategory"]["Jazz"]
        assert jazz[0]["displayCategory"] == "Jazz"
        assert jazz[0]["answer"]["display"] == FALLBACK_ANSWER_DISPLAY
        assert payload["totalQuestions"] == 8

    def test_point_ladders(self):
        service, _ = _service()
        _, payload = service.handle_request(_bulk("Wine", playerCount=7))
        assert payload["pointLadders"] == {"1": [200, 300], "2": [500]}

    def test_bulk_reuses_cache(self):
        service, client = _service()
        service.handle_request(_bulk("Wine"))
        service.handle_request(_bulk("Wine"))
        assert client.calls_matching('questions about "Wine"') == 1

    @pytest.mark.parametrize("body, message", [
        ({"categories": [], "players": ["Ana"]}, "categories must be a non-empty array"),
        ({"categories": [{"name": "Wine"}]}, "players must be a non-empty array"),
        ({"categories": [{"name": "Wine"}], "players": []}, "players must be a non-empty array"),
        ({"categories": [{"expert": "Ana"}], "players": ["Ana"]}, "Missing or invalid categories[0].name"),
        ({"categories": [{"name": "  "}], "players": ["Ana"]}, "Missing or invalid categories[0].name"),
    ])
    def test_validation(self, body, message):
        service, client = _service()
        status, payload = service.handle_request(body)
        assert status == 400
        assert payload == {"success": False, "error": message}
        assert client.calls == []

    def test_bad_round(self):
        service, _ = _service()
        status, _ = service.handle_request(
            {"categories": [{"name": "Wine", "round": 9}], "players": ["Ana"]}
        )
        assert status == 400

    def test_bad_player_count(self):
        service, _ = _service()
        status, _ = service.handle_request(_bulk("Wine", playerCount=1))
        assert status == 400


class TestSingleEndpoint:
    """Tests for single-topic generation."""

    def test_success(self):
        service, _ = _service()
        status, payload = service.handle_request({
            "category": " Wine ", "playerName": "Ana", "expertName": "Ben",
            "round": 1, "playerCount": 4,
        })
        assert status == 200
        assert payload["category"] == "Wine"
        assert payload["count"] == 4
        assert payload["round"] == 1
        assert payload["pointValues"] == [100, 200, 300]
        assert payload["questions"][3]["difficulty"] == 400

    def test_final_round_has_no_point_values(self):
        service, _ = _service()
        _, payload = service.handle_request({
            "category": "Wine", "playerName": "Ana", "expertName": "Ben",
            "round": 3, "playerCount": 4,
        })
        assert payload["round"] == 3
        assert "pointValues" not in payload

    def test_cached_per_context(self):
        """Same topic and context generate once."""
        service, client = _service()
        body = {"category": "Wine", "playerName": "Ana", "expertName": "Ben"}
        service.handle_request(body)
        service.handle_request(dict(body, category="wine"))
        assert client.calls_matching('questions about "Wine"') == 1

    @pytest.mark.parametrize("body, message", [
        ({}, "Missing or invalid category"),
        ({"category": "Wine", "expertName": "Ben"}, "Missing or invalid playerName"),
        ({"category": "Wine", "playerName": "  ", "expertName": "Ben"}, "Missing or invalid playerName"),
        ({"category": "Wine", "playerName": "Ana"}, "Missing or invalid expertName"),
        ({"category": 7, "playerName": "Ana", "expertName": "Ben"}, "Missing or invalid category"),
    ])
    def test_validation(self, body, message):
        service, _ = _service()
        status, payload = service.handle_request(body)
        assert status == 400
        assert payload["error"] == message

    def test_non_object_body(self):
        service, _ = _service()
        status, payload = service.handle_request(["Wine"])
        assert status == 400
        assert payload["error"] == "Request body must be a JSON object"


class TestServiceErrors:
    """Tests for the 500 boundary."""

    def test_unexpected_error(self):
        service, _ = _service()
        service._generator.generate_cached = Mock(side_effect=RuntimeError("boom"))
        status, payload = service.handle_request(
            {"category": "Wine", "playerName": "Ana", "expertName": "Ben"}
        )
        assert status == 500
        assert payload == {"success": False, "error": "boom"}

    def test_describe(self):
        info = ContentService.describe()
        assert info["status"] == "ok"
        assert set(info["usage"]) == {"single", "bulk"}
