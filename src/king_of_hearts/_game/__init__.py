# Area: Game
"""
Game engine - board rounds, steals and the final wager.

This package handles:
- Point ladders per round and player count
- The round state machine and turn order
- Steal scoring
- Final-round wagers
- Session snapshots and whole-game orchestration
"""

from .enums import Outcome, RoundEvent, RoundPhase
from .ladder import ladder_for, ladder_table, tier_for_point_value
from .orchestrator import GameOrchestrator
from .round_engine import QuestionContext, RoundEngine
from .session import GameSession, Player
from .state_machine import RoundStateMachine
from .steal import ScoreDelta, StealResolver
from .wagering import Wager, WageringResolver

__all__ = [
    "Outcome",
    "RoundEvent",
    "RoundPhase",
    "ladder_for",
    "ladder_table",
    "tier_for_point_value",
    "GameOrchestrator",
    "QuestionContext",
    "RoundEngine",
    "GameSession",
    "Player",
    "RoundStateMachine",
    "ScoreDelta",
    "StealResolver",
    "Wager",
    "WageringResolver",
]
