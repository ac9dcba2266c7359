# Area: Game
"""
king_of_hearts._game.round_engine — Board round engine
======================================================

Drives one board round (round 1 or 2) turn by turn:

    select_category -> select_point_value -> reveal_question
        -> attempt_steal | decline_steal -> resolve

Each topic belongs to exactly one player this round; that player is the
topic's expert. A steal is only possible when the expert is somebody
other than the player answering.

The asked record is written before the question is fetched, so an
interrupted turn can never serve the same (topic, tier) twice. A source
that blows up mid-generation is replaced by the fallback set so the turn
still reaches the reveal. Turns advance strictly round-robin after every
resolution.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Dict, FrozenSet, Iterable, List, Optional, Protocol, Set, Union

from ..config import ROUND_LADDERS
from ..errors import InvalidSelection
from .._content.cache import normalize_topic
from .._content.models import QuestionSet, TriviaQuestion
from .._content.question_generator import GenerationContext, fallback_question_set
from .enums import Outcome, RoundEvent, RoundPhase
from .ladder import LadderTable, ladder_for, tier_for_point_value
from .session import AskedPair, Player
from .state_machine import PhaseListener, RoundStateMachine
from .steal import ScoreDelta, StealResolver, coerce_outcome

logger = logging.getLogger("king_of_hearts.game.round")


class QuestionSource(Protocol):
    """Where the engine gets questions from."""

    def cached(self, topic: str, context: GenerationContext) -> Optional[QuestionSet]:
        ...

    def generate(self, topic: str, context: GenerationContext) -> QuestionSet:
        ...


@dataclass(frozen=True)
class QuestionContext:
    """Everything about the question currently in play."""
    topic: str
    point_value: int
    tier: int
    expert_name: Optional[str]
    is_own_category: bool
    question: Optional[TriviaQuestion] = None
    steal_attempted: bool = False

    @property
    def steal_available(self) -> bool:
        return self.expert_name is not None and not self.is_own_category


class RoundEngine:
    """
    State machine for one board round.

    Args:
        players: all players, in turn order; scores are updated in place
        round_number: 1 or 2
        source: question supplier
        ladders: ladder table, defaults to config.ROUND_LADDERS
        first_player_index: who takes the first turn
        asked: asked pairs to restore from a saved session
        listener: called with (old_phase, new_phase) on every transition
    """

    def __init__(
        self,
        players: List[Player],
        round_number: int,
        source: QuestionSource,
        ladders: Optional[LadderTable] = None,
        first_player_index: int = 0,
        asked: Iterable[AskedPair] = (),
        listener: Optional[PhaseListener] = None,
    ):
        if not players:
            raise ValueError("A round needs players")
        if not 0 <= first_player_index < len(players):
            raise ValueError(f"first_player_index {first_player_index} out of range")

        self.players = players
        self.round_number = round_number
        self.ladder = ladder_for(round_number, len(players), ladders if ladders is not None else ROUND_LADDERS)
        self._source = source
        self._current_index = first_player_index
        self._current: Optional[QuestionContext] = None

        # normalized topic -> owning player, and -> topic as submitted
        self._topics: Dict[str, Player] = {}
        self._topic_names: Dict[str, str] = {}
        for player in players:
            topic = player.topic_for_round(round_number)
            key = normalize_topic(topic)
            if not key:
                raise ValueError(f"{player.name} has no topic for round {round_number}")
            if key in self._topics:
                raise ValueError(
                    f"Topic '{topic}' is claimed by both {self._topics[key].name} and {player.name}"
                )
            self._topics[key] = player
            self._topic_names[key] = topic.strip()

        self._asked: Set[AskedPair] = set()
        for topic, tier in asked:
            key = normalize_topic(topic)
            if key in self._topics:
                self._asked.add((self._topic_names[key], tier))

        initial = (
            RoundPhase.ROUND_COMPLETE if self.is_round_complete()
            else RoundPhase.AWAITING_CATEGORY_SELECTION
        )
        self._machine = RoundStateMachine(initial, listener=listener)

        logger.info(
            f"Round {round_number} ready: {len(players)} players, ladder {list(self.ladder)}, "
            f"{self.current_player.name} starts"
        )

    # ── Read-only state ────────────────────────────────────────────

    @property
    def phase(self) -> RoundPhase:
        return self._machine.current_phase

    @property
    def current_player(self) -> Player:
        return self.players[self._current_index]

    @property
    def current_player_index(self) -> int:
        return self._current_index

    @property
    def current_question(self) -> Optional[QuestionContext]:
        return self._current

    @property
    def asked(self) -> FrozenSet[AskedPair]:
        return frozenset(self._asked)

    @property
    def topics(self) -> List[str]:
        return list(self._topic_names.values())

    def expert_for(self, topic: str) -> Optional[str]:
        player = self._topics.get(normalize_topic(topic))
        return player.name if player else None

    def available_points(self, topic: str) -> List[int]:
        name = self._canonical(topic)
        if name is None:
            return []
        return [
            pv for pv in self.ladder
            if (name, tier_for_point_value(pv, self.ladder)) not in self._asked
        ]

    def is_topic_exhausted(self, topic: str) -> bool:
        return not self.available_points(topic)

    def is_round_complete(self) -> bool:
        return all(self.is_topic_exhausted(t) for t in self._topic_names.values())

    def available_categories(self) -> List[Dict[str, object]]:
        return [
            {"name": name, "expert": self._topics[key].name, "available": not self.is_topic_exhausted(name)}
            for key, name in self._topic_names.items()
        ]

    # ── Turn actions ───────────────────────────────────────────────

    def select_category(self, topic: str) -> None:
        self._machine.require("select_category", RoundPhase.AWAITING_CATEGORY_SELECTION)
        name = self._canonical(topic)
        if name is None:
            raise InvalidSelection("select_category", f"'{topic}' is not a topic this round")
        if self.is_topic_exhausted(name):
            raise InvalidSelection("select_category", f"'{name}' has no questions left")

        expert = self._topics[normalize_topic(name)].name
        self._current = QuestionContext(
            topic=name,
            point_value=0,
            tier=0,
            expert_name=expert,
            is_own_category=expert == self.current_player.name,
        )
        self._machine.transition(RoundEvent.CATEGORY_SELECTED)
        logger.info(f"{self.current_player.name} picked '{name}'", extra={"player": self.current_player.name})

    def select_point_value(self, topic: str, point_value: int) -> TriviaQuestion:
        """
        Claim (topic, point value) and fetch its question.

        The pair is recorded as asked before the question is fetched. If
        the source raises while generating, the topic's fallback set is
        served instead.

        Raises:
            InvalidSelection: wrong phase, different topic, value not on the
                ladder, or pair already asked
        """
        self._machine.require("select_point_value", RoundPhase.AWAITING_POINT_SELECTION)
        name = self._canonical(topic)
        if name is None or name != self._current.topic:
            raise InvalidSelection(
                "select_point_value", f"'{topic}' is not the selected category '{self._current.topic}'"
            )
        if point_value not in self.ladder:
            raise InvalidSelection(
                "select_point_value", f"{point_value} is not on this round's ladder {list(self.ladder)}"
            )
        tier = tier_for_point_value(point_value, self.ladder)
        if (name, tier) in self._asked:
            raise InvalidSelection("select_point_value", f"'{name}' for {point_value} was already asked")

        self._asked.add((name, tier))
        self._current = replace(self._current, point_value=point_value, tier=tier)

        # Same context as the bulk requests: host player, this round's owner
        context = GenerationContext(self.players[0].name, self._current.expert_name or "")
        question_set = self._source.cached(name, context)
        if question_set is None:
            self._machine.transition(RoundEvent.GENERATION_STARTED)
            logger.info(f"No cached questions for '{name}', generating")
            try:
                question_set = self._source.generate(name, context)
            except Exception as e:
                logger.error(
                    f"Generation for '{name}' crashed, using fallback questions: {e}",
                    exc_info=True,
                    extra={"topic": name},
                )
                question_set = fallback_question_set(name)
            self._machine.transition(RoundEvent.GENERATION_FINISHED)
        else:
            self._machine.transition(RoundEvent.POINT_SELECTED)

        question = question_set.question_for(tier)
        self._current = replace(self._current, question=question)
        return question

    def reveal_question(self) -> QuestionContext:
        self._machine.require("reveal_question", RoundPhase.AWAITING_QUESTION_REVEAL)
        if self._current.steal_available:
            self._machine.transition(RoundEvent.QUESTION_REVEALED)
        else:
            self._machine.transition(RoundEvent.QUESTION_REVEALED_NO_STEAL)
        return self._current

    def attempt_steal(self) -> None:
        self._machine.require("attempt_steal", RoundPhase.AWAITING_STEAL_DECISION)
        self._current = replace(self._current, steal_attempted=True)
        self._machine.transition(RoundEvent.STEAL_ATTEMPTED)
        logger.info(
            f"{self._current.expert_name} attempts a steal on '{self._current.topic}'",
            extra={"player": self._current.expert_name},
        )

    def decline_steal(self) -> None:
        self._machine.require("decline_steal", RoundPhase.AWAITING_STEAL_DECISION)
        self._machine.transition(RoundEvent.STEAL_DECLINED)

    def resolve(self, outcome: Union[Outcome, str]) -> ScoreDelta:
        """
        Score the current question, apply the deltas and pass the turn.

        Returns:
            The ScoreDelta that was applied
        """
        self._machine.require("resolve", RoundPhase.AWAITING_SCORE_RESOLUTION)
        outcome = coerce_outcome(outcome)
        ctx = self._current
        player = self.current_player

        delta = StealResolver.resolve(
            outcome,
            ctx.point_value,
            is_own_category=ctx.is_own_category,
            steal_attempted=ctx.steal_attempted,
            expert_present=ctx.steal_available,
        )

        player.score += delta.original_delta
        if delta.expert_delta is not None:
            self._player_named(ctx.expert_name).score += delta.expert_delta

        logger.info(
            f"'{ctx.topic}' {ctx.point_value}: {outcome.value} -> "
            f"{player.name} {delta.original_delta:+d}"
            + (f", {ctx.expert_name} {delta.expert_delta:+d}" if delta.expert_delta is not None else "")
        )

        self._current = None
        self._current_index = (self._current_index + 1) % len(self.players)
        if self.is_round_complete():
            self._machine.transition(RoundEvent.ROUND_FINISHED)
            logger.info(f"Round {self.round_number} complete")
        else:
            self._machine.transition(RoundEvent.SCORE_RESOLVED)
        return delta

    # ── Helpers ────────────────────────────────────────────────────

    def _canonical(self, topic: str) -> Optional[str]:
        return self._topic_names.get(normalize_topic(topic))

    def _player_named(self, name: str) -> Player:
        for player in self.players:
            if player.name == name:
                return player
        raise KeyError(name)
