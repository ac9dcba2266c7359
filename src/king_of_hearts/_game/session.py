# Area: Game
"""
king_of_hearts._game.session — Players and persisted session shape
==================================================================

``GameSession.to_dict()`` produces the JSON-compatible snapshot a
front end stores between pages; ``from_dict`` reads it back. How and
where it is stored is the caller's business.

    {
      "players": [{"name", "selfCategory", "peerCategory", "score"}],
      "currentRound": 1,
      "currentPlayerIndex": 0,
      "questionsAsked": [{"category", "difficulty", "round"}],
      "sharedCategory": "..."
    }
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

from ..config import BOARD_ROUNDS, FINAL_ROUND

AskedPair = Tuple[str, int]


@dataclass
class Player:
    name: str
    self_topic: str
    peer_topic: str
    score: int = 0

    def topic_for_round(self, round_number: int) -> str:
        """Round 1 plays the player's own topic, round 2 the assigned one."""
        if round_number == 1:
            return self.self_topic
        if round_number == 2:
            return self.peer_topic
        raise ValueError(f"Round {round_number} has no per-player topic")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "selfCategory": self.self_topic,
            "peerCategory": self.peer_topic,
            "score": self.score,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        return cls(
            name=data["name"],
            self_topic=data["selfCategory"],
            peer_topic=data["peerCategory"],
            score=int(data.get("score", 0)),
        )


@dataclass
class GameSession:
    players: List[Player]
    current_round: int = 1
    current_player_index: int = 0
    questions_asked: FrozenSet[AskedPair] = field(default_factory=frozenset)
    shared_topic: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "players": [p.to_dict() for p in self.players],
            "currentRound": self.current_round,
            "currentPlayerIndex": self.current_player_index,
            "questionsAsked": [
                {"category": topic, "difficulty": tier, "round": self.current_round}
                for topic, tier in sorted(self.questions_asked)
            ],
            "sharedCategory": self.shared_topic,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameSession":
        """
        Rebuild a session from its snapshot.

        Asked records from other rounds are dropped since the record is
        round-scoped.

        Raises:
            ValueError: If required keys are missing or the round is unknown
        """
        try:
            players = [Player.from_dict(p) for p in data["players"]]
            current_round = int(data.get("currentRound", 1))
            asked = frozenset(
                (q["category"], int(q["difficulty"]))
                for q in data.get("questionsAsked", [])
                if int(q.get("round", current_round)) == current_round
            )
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed session snapshot: {e}") from e

        if current_round not in BOARD_ROUNDS + (FINAL_ROUND,):
            raise ValueError(f"Unknown round {current_round}")

        index = int(data.get("currentPlayerIndex", 0))
        if players and not 0 <= index < len(players):
            raise ValueError(f"currentPlayerIndex {index} out of range")

        return cls(
            players=players,
            current_round=current_round,
            current_player_index=index,
            questions_asked=asked,
            shared_topic=data.get("sharedCategory"),
        )

    def player(self, name: str) -> Player:
        for p in self.players:
            if p.name == name:
                return p
        raise KeyError(name)
