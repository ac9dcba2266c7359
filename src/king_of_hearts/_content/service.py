# Area: Content
"""
king_of_hearts._content.service — Generation endpoints
======================================================

Transport-free handlers for the two generation endpoints.

BULK:
    Request:  {categories: [{name, expert, round?}], players: [str], playerCount?}
    Response: {success, questionsByCategory, totalCategories, totalQuestions,
               errors?, pointLadders?}

SINGLE:
    Request:  {category, playerName, expertName, round?, playerCount?}
    Response: {success, questions, category, count, round?, pointValues?}

``generate_bulk``/``generate_single`` raise RequestValidationError on a
bad body. ``handle_request`` is the boundary: it picks the endpoint,
turns validation errors into a 400 payload and anything unexpected into
a 500 payload.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from ..config import BOARD_ROUNDS, FINAL_ROUND, MIN_PLAYERS
from ..errors import RequestValidationError
from .._game.ladder import LadderTable, ladder_for, ladder_table
from .._shared.logging_config import log_package_error
from .._shared.validation import FieldError, FieldValidator, ValidationResult
from .batch_scheduler import BatchScheduler, GenerationRequest
from .question_generator import GenerationContext, QuestionGenerator

logger = logging.getLogger("king_of_hearts.content.service")

ENDPOINT_BULK = "bulk"
ENDPOINT_SINGLE = "single"

ROUND_CHOICES = list(BOARD_ROUNDS) + [FINAL_ROUND]

USAGE = {
    "single": "POST with { category, playerName, expertName, round?, playerCount? }",
    "bulk": "POST with { categories: [{ name, expert, round? }], players: string[], playerCount? }",
}


class ContentService:
    """
    Args:
        generator: question generator, normally with a session cache
        scheduler: batch scheduler wrapping the same generator
        ladders: ladder table used to report point values
    """

    def __init__(
        self,
        generator: QuestionGenerator,
        scheduler: BatchScheduler,
        ladders: Optional[LadderTable] = None,
    ):
        self._generator = generator
        self._scheduler = scheduler
        self._ladders = ladders

    # ── Boundary ───────────────────────────────────────────────────

    def handle_request(self, body: Any) -> Tuple[int, Dict[str, Any]]:
        """Dispatch a request body; returns (status, payload)."""
        if isinstance(body, dict) and isinstance(body.get("categories"), list):
            handler, endpoint = self.generate_bulk, ENDPOINT_BULK
        else:
            handler, endpoint = self.generate_single, ENDPOINT_SINGLE

        try:
            return 200, handler(body)
        except RequestValidationError as e:
            log_package_error(e, level=logging.WARNING)
            return 400, {"success": False, "error": e.errors[0] if e.errors else str(e)}
        except Exception as e:
            logger.error(f"Error generating questions ({endpoint}): {e}", exc_info=True)
            return 500, {"success": False, "error": str(e) or "Failed to generate questions"}

    @staticmethod
    def describe() -> Dict[str, Any]:
        return {"status": "ok", "message": "King of Hearts question generator", "usage": USAGE}

    # ── Endpoints ──────────────────────────────────────────────────

    def generate_bulk(self, body: Any) -> Dict[str, Any]:
        body = _require_object(ENDPOINT_BULK, body)
        result = ValidationResult()

        categories = body.get("categories")
        players = body.get("players")
        for field_name, value in (("categories", categories), ("players", players)):
            if value is None:
                result.add_error(FieldError(field_name, "missing",
                                            message=f"{field_name} must be a non-empty array"))
            else:
                FieldValidator.is_list(value, field_name, result, min_length=1)
        player_count = self._validate_player_count(body, result)

        entries: List[Dict[str, Any]] = []
        if result.is_valid:
            for i, cat in enumerate(categories):
                entry = self._validate_category(cat, i, result)
                if entry is not None:
                    entries.append(entry)
            for i, name in enumerate(players):
                FieldValidator.non_empty_string(name, f"players[{i}]", result)

        if not result.is_valid:
            raise RequestValidationError(ENDPOINT_BULK, result.messages(), body)

        host = players[0].strip()
        logger.info(f"Bulk generating questions for {len(entries)} categories")
        requests = [
            GenerationRequest(e["name"], GenerationContext(host, e["expert"]))
            for e in entries
        ]
        batch = self._scheduler.run(requests)

        payload: Dict[str, Any] = {
            "success": True,
            "questionsByCategory": {
                topic: question_set.to_payload() for topic, question_set in batch.results.items()
            },
            "totalCategories": len(entries),
            "totalQuestions": batch.total_questions,
        }
        if batch.errors:
            payload["errors"] = list(batch.errors)
        if player_count is not None:
            payload["pointLadders"] = {
                str(r): list(values) for r, values in ladder_table(player_count, self._ladders).items()
            }

        logger.info(
            f"Bulk generation complete: {batch.total_questions} questions "
            f"for {len(entries)} categories"
        )
        return payload

    def generate_single(self, body: Any) -> Dict[str, Any]:
        body = _require_object(ENDPOINT_SINGLE, body)
        result = ValidationResult()

        for field_name in ("category", "playerName", "expertName"):
            value = FieldValidator.required(body, field_name, result)
            FieldValidator.non_empty_string(value, field_name, result)
        round_number = body.get("round")
        FieldValidator.one_of(round_number, "round", ROUND_CHOICES, result)
        player_count = self._validate_player_count(body, result)

        if not result.is_valid:
            raise RequestValidationError(ENDPOINT_SINGLE, result.messages(), body)

        category = body["category"].strip()
        logger.info(f"Generating questions for category: {category}")
        context = GenerationContext(body["playerName"].strip(), body["expertName"].strip())
        question_set = self._generator.generate_cached(category, context)

        payload: Dict[str, Any] = {
            "success": True,
            "questions": question_set.to_payload(),
            "category": category,
            "count": len(question_set.questions),
        }
        if round_number is not None:
            payload["round"] = round_number
            if player_count is not None and round_number in BOARD_ROUNDS:
                payload["pointValues"] = list(ladder_for(round_number, player_count, self._ladders))
        return payload

    # ── Validation helpers ─────────────────────────────────────────

    @staticmethod
    def _validate_category(cat: Any, index: int, result: ValidationResult) -> Optional[Dict[str, Any]]:
        field_name = f"categories[{index}]"
        if not isinstance(cat, dict):
            result.add_error(FieldError(field_name, "invalid_type", expected="object",
                                        received=type(cat).__name__))
            return None
        name_ok = FieldValidator.non_empty_string(cat.get("name") or "", f"{field_name}.name", result)
        expert = cat.get("expert") or ""
        if not isinstance(expert, str):
            result.add_error(FieldError(f"{field_name}.expert", "invalid_type",
                                        expected="string", received=type(expert).__name__))
            return None
        if cat.get("round") is not None:
            FieldValidator.one_of(cat["round"], f"{field_name}.round", ROUND_CHOICES, result)
        if not name_ok:
            return None
        return {"name": cat["name"].strip(), "expert": expert.strip()}

    @staticmethod
    def _validate_player_count(body: Dict[str, Any], result: ValidationResult) -> Optional[int]:
        value = body.get("playerCount")
        if value is None:
            return None
        if not FieldValidator.positive_int(value, "playerCount", result):
            return None
        if value < MIN_PLAYERS:
            result.add_error(FieldError("playerCount", "out_of_range", expected=f">= {MIN_PLAYERS}",
                                        received=value))
            return None
        return value


def _require_object(endpoint: str, body: Any) -> Dict[str, Any]:
    if not isinstance(body, dict):
        raise RequestValidationError(endpoint, ["Request body must be a JSON object"])
    return body
