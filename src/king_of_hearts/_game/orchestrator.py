# Area: Game
"""
king_of_hearts._game.orchestrator — Game orchestrator
=====================================================

Owns everything one game session needs and walks it through:

    pregenerate() -> start_round(1) -> start_round(2)
        -> start_final() -> submit_wager() x N -> resolve_final() x N

Each orchestrator builds its own GenerationCache and TopicNamer; nothing
is shared between sessions.
"""

from __future__ import annotations

import logging
import random
import time
from typing import Any, Callable, Dict, List, Optional

from ..config import BOARD_ROUNDS, DEFAULT_CONFIG, FINAL_ROUND, MIN_PLAYERS
from ..errors import InvalidSelection
from .._content.batch_scheduler import BatchResult, BatchScheduler, GenerationRequest
from .._content.cache import GenerationCache, make_key, normalize_topic
from .._content.llm_client import BaseLLMClient
from .._content.models import QuestionSet, TriviaQuestion
from .._content.question_generator import GenerationContext, QuestionGenerator
from .._content.topic_namer import TopicNamer
from .round_engine import RoundEngine
from .session import GameSession, Player
from .state_machine import PhaseListener
from .wagering import Wager, WageringResolver

logger = logging.getLogger("king_of_hearts.game.orchestrator")


class GeneratorQuestionSource:
    """Feeds a RoundEngine from the session's generator and cache."""

    def __init__(self, generator: QuestionGenerator):
        self._generator = generator

    def cached(self, topic: str, context: GenerationContext) -> Optional[QuestionSet]:
        return self._generator.cache.get(make_key(topic, context.player_name, context.expert_name))

    def generate(self, topic: str, context: GenerationContext) -> QuestionSet:
        return self._generator.generate_cached(topic, context)


class GameOrchestrator:
    """
    Runs one King of Hearts game.

    Args:
        players: players in seating order
        llm_client: completion service for questions and names
        shared_topic: the final round's topic
        config: loaded configuration (see config.load_config)
        rng: random source for the first player of each round
        sleep: passed to the BatchScheduler
        listener: phase listener handed to every RoundEngine
    """

    def __init__(
        self,
        players: List[Player],
        llm_client: BaseLLMClient,
        shared_topic: Optional[str] = None,
        config: Optional[Dict[str, Any]] = None,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], None] = time.sleep,
        listener: Optional[PhaseListener] = None,
    ):
        if len(players) < MIN_PLAYERS:
            raise ValueError(f"Need at least {MIN_PLAYERS} players, got {len(players)}")
        names = [p.name for p in players]
        if len(set(names)) != len(names):
            raise ValueError(f"Player names must be unique: {names}")

        self.config = dict(DEFAULT_CONFIG)
        self.config.update(config or {})
        self.players = players
        self.shared_topic = shared_topic.strip() if shared_topic else None
        self.current_round = 1
        self.round: Optional[RoundEngine] = None
        self.wagering: Optional[WageringResolver] = None
        self.final_question: Optional[TriviaQuestion] = None
        self._rng = rng or random.Random()
        self._listener = listener

        self.cache = GenerationCache()
        self.namer = TopicNamer(llm_client, max_tokens=self.config["name_max_tokens"])
        self.generator = QuestionGenerator(
            llm_client, self.namer, cache=self.cache, max_tokens=self.config["max_tokens"]
        )
        self.scheduler = BatchScheduler(
            self.generator.try_generate_cached,
            batch_size=self.config["batch_size"],
            delay_seconds=self.config["batch_delay_seconds"],
            sleep=sleep,
        )
        self._source = GeneratorQuestionSource(self.generator)

    # ── Setup ──────────────────────────────────────────────────────

    def generation_requests(self) -> List[GenerationRequest]:
        """
        One request per (topic, owner) across both board rounds, plus the final.

        A topic that comes back in round 2 under a different owner gets its
        own set, so round 2 never replays round 1's upper tiers. The final
        topic has no owner and is always generated separately.
        """
        host = self.players[0].name
        requests: List[GenerationRequest] = []
        seen = set()
        for round_number in BOARD_ROUNDS:
            for player in self.players:
                topic = player.topic_for_round(round_number).strip()
                if topic and (normalize_topic(topic), player.name) not in seen:
                    seen.add((normalize_topic(topic), player.name))
                    requests.append(GenerationRequest(topic, GenerationContext(host, player.name)))
        if self.shared_topic:
            requests.append(GenerationRequest(self.shared_topic, GenerationContext(host, "")))
        return requests

    def pregenerate(self) -> BatchResult:
        requests = self.generation_requests()
        logger.info(f"Pre-generating questions for {len(requests)} topic(s)")
        result = self.scheduler.run(requests)
        if result.failures:
            logger.warning(
                f"{len(result.failures)} topic(s) will use fallback questions: "
                f"{', '.join(result.failed_topics)}"
            )
        return result

    # ── Board rounds ───────────────────────────────────────────────

    def start_round(self, round_number: int, first_player_index: Optional[int] = None) -> RoundEngine:
        if round_number not in BOARD_ROUNDS:
            raise InvalidSelection("start_round", f"round {round_number} is not a board round")
        if self.round is not None and not self.round.is_round_complete():
            raise InvalidSelection(
                "start_round", f"round {self.round.round_number} is still in progress"
            )
        if round_number < self.current_round or (
            self.round is not None and round_number <= self.round.round_number
        ):
            raise InvalidSelection("start_round", f"round {round_number} has already been played")

        if first_player_index is None:
            first_player_index = self._rng.randrange(len(self.players))
        self.current_round = round_number
        self.round = RoundEngine(
            self.players,
            round_number,
            self._source,
            ladders=self.config["round_ladders"],
            first_player_index=first_player_index,
            listener=self._listener,
        )
        return self.round

    # ── Final round ────────────────────────────────────────────────

    def start_final(self) -> TriviaQuestion:
        """Switch to the wagering round and return its single question."""
        if not self.shared_topic:
            raise InvalidSelection("start_final", "no shared topic was chosen")
        if self.current_round != BOARD_ROUNDS[-1] or self.round is None or not self.round.is_round_complete():
            raise InvalidSelection("start_final", "the board rounds are not finished")
        return self._enter_final()

    def _enter_final(self) -> TriviaQuestion:
        context = GenerationContext(self.players[0].name, "")
        question_set = self._source.cached(self.shared_topic, context) or self.generator.generate_cached(
            self.shared_topic, context
        )
        self.final_question = min(question_set.questions, key=lambda q: q.difficulty)
        self.current_round = FINAL_ROUND
        self.round = None
        self.wagering = WageringResolver()
        logger.info(f"Final round on '{question_set.display_topic}'")
        return self.final_question

    def submit_wager(self, player_name: str, raw_amount: Any) -> Wager:
        return self._require_wagering("submit_wager").submit_wager(self.player(player_name), raw_amount)

    def resolve_final(self, player_name: str, correct: bool) -> int:
        wagering = self._require_wagering("resolve_final")
        if not wagering.all_locked(self.players):
            raise InvalidSelection("resolve_final", "not every player has wagered yet")
        wager = wagering.wager_for(player_name)
        if wager is None:
            raise InvalidSelection("resolve_final", f"no wager submitted by {player_name}")
        delta = wagering.resolve(wager, correct)
        self.player(player_name).score += delta
        return delta

    def is_game_over(self) -> bool:
        return self.wagering is not None and self.wagering.all_resolved(self.players)

    def standings(self) -> List[Player]:
        """Players ordered by score, highest first."""
        return sorted(self.players, key=lambda p: p.score, reverse=True)

    # ── Persistence ────────────────────────────────────────────────

    def to_session(self) -> GameSession:
        return GameSession(
            players=self.players,
            current_round=self.current_round,
            current_player_index=self.round.current_player_index if self.round else 0,
            questions_asked=self.round.asked if self.round else frozenset(),
            shared_topic=self.shared_topic,
        )

    @classmethod
    def from_session(
        cls,
        session: GameSession,
        llm_client: BaseLLMClient,
        config: Optional[Dict[str, Any]] = None,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> "GameOrchestrator":
        """
        Resume a saved game.

        A board round resumes with its asked record. A game saved in the
        final round reloads the final question and opens wagering afresh,
        since wagers are not part of the saved session.
        """
        orchestrator = cls(
            session.players, llm_client, shared_topic=session.shared_topic,
            config=config, rng=rng, sleep=sleep,
        )
        orchestrator.current_round = session.current_round
        if session.current_round in BOARD_ROUNDS:
            orchestrator.round = RoundEngine(
                orchestrator.players,
                session.current_round,
                orchestrator._source,
                ladders=orchestrator.config["round_ladders"],
                first_player_index=session.current_player_index,
                asked=session.questions_asked,
            )
        elif session.current_round == FINAL_ROUND and orchestrator.shared_topic:
            orchestrator._enter_final()
        return orchestrator

    # ── Helpers ────────────────────────────────────────────────────

    def player(self, name: str) -> Player:
        for p in self.players:
            if p.name == name:
                return p
        raise InvalidSelection("player", f"unknown player '{name}'")

    def _require_wagering(self, action: str) -> WageringResolver:
        if self.wagering is None:
            raise InvalidSelection(action, "the final round has not started")
        return self.wagering
