# Area: Game
"""
king_of_hearts._game.steal — Steal scoring
==========================================

Point deltas for one resolved board question.

    outcome   original player               expert (only if a steal was attempted)
    -------   ---------------------------   --------------------------------------
    original  +pv                           -pv
    expert    -pv own / -(pv // 2) other    +pv
    nobody    -pv own / -(pv // 2) other    -pv

"own" means the question's topic is the answering player's category for
the current round. Half penalties always floor.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from ..errors import InvalidSelection
from .enums import Outcome


@dataclass(frozen=True)
class ScoreDelta:
    """Points to apply. ``expert_delta`` is None when the expert did not play."""
    original_delta: int
    expert_delta: Optional[int] = None


def coerce_outcome(outcome: Union[Outcome, str]) -> Outcome:
    if isinstance(outcome, Outcome):
        return outcome
    try:
        return Outcome(str(outcome).lower())
    except ValueError:
        raise InvalidSelection(
            "resolve", f"unknown outcome '{outcome}', expected one of "
            f"{[o.value for o in Outcome]}"
        ) from None


class StealResolver:
    """Stateless scoring rules for the steal mechanic."""

    @staticmethod
    def resolve(
        outcome: Union[Outcome, str],
        point_value: int,
        is_own_category: bool,
        steal_attempted: bool,
        expert_present: bool,
    ) -> ScoreDelta:
        outcome = coerce_outcome(outcome)
        if isinstance(point_value, bool) or not isinstance(point_value, int) or point_value <= 0:
            raise InvalidSelection("resolve", f"point value must be a positive integer, got {point_value!r}")
        if steal_attempted and not expert_present:
            raise InvalidSelection("resolve", "steal attempted without an expert")

        miss_penalty = -point_value if is_own_category else -(point_value // 2)
        steal_penalty = -point_value if steal_attempted else None

        if outcome is Outcome.ORIGINAL:
            return ScoreDelta(point_value, steal_penalty)
        if outcome is Outcome.EXPERT:
            if not steal_attempted:
                raise InvalidSelection("resolve", "expert cannot win without attempting a steal")
            return ScoreDelta(miss_penalty, point_value)
        return ScoreDelta(miss_penalty, steal_penalty)
