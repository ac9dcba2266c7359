# Area: Game
"""
king_of_hearts._game.state_machine — Round state machine
========================================================

Table-driven phase tracking for a board round. The RoundEngine fires
events; anything not in the table for the current phase is rejected
with InvalidSelection.
"""

import logging
from typing import Callable, List, Optional

from ..errors import InvalidSelection
from .enums import RoundEvent, RoundPhase

logger = logging.getLogger("king_of_hearts.game.state_machine")

# Valid phase transitions: {current_phase: {event: next_phase}}
TRANSITIONS = {
    RoundPhase.AWAITING_CATEGORY_SELECTION: {
        RoundEvent.CATEGORY_SELECTED: RoundPhase.AWAITING_POINT_SELECTION,
    },
    RoundPhase.AWAITING_POINT_SELECTION: {
        RoundEvent.POINT_SELECTED: RoundPhase.AWAITING_QUESTION_REVEAL,
        RoundEvent.GENERATION_STARTED: RoundPhase.GENERATING,
    },
    RoundPhase.GENERATING: {
        RoundEvent.GENERATION_FINISHED: RoundPhase.AWAITING_QUESTION_REVEAL,
    },
    RoundPhase.AWAITING_QUESTION_REVEAL: {
        RoundEvent.QUESTION_REVEALED: RoundPhase.AWAITING_STEAL_DECISION,
        RoundEvent.QUESTION_REVEALED_NO_STEAL: RoundPhase.AWAITING_SCORE_RESOLUTION,
    },
    RoundPhase.AWAITING_STEAL_DECISION: {
        RoundEvent.STEAL_ATTEMPTED: RoundPhase.AWAITING_SCORE_RESOLUTION,
        RoundEvent.STEAL_DECLINED: RoundPhase.AWAITING_SCORE_RESOLUTION,
    },
    RoundPhase.AWAITING_SCORE_RESOLUTION: {
        RoundEvent.SCORE_RESOLVED: RoundPhase.AWAITING_CATEGORY_SELECTION,
        RoundEvent.ROUND_FINISHED: RoundPhase.ROUND_COMPLETE,
    },
    RoundPhase.ROUND_COMPLETE: {},
}

PhaseListener = Callable[[RoundPhase, RoundPhase], None]


class RoundStateMachine:
    """
    Phase tracker for one board round.

    Attributes:
        current_phase: The current phase
        history: Phases entered, in order, starting with the initial one
    """

    def __init__(
        self,
        initial_phase: RoundPhase = RoundPhase.AWAITING_CATEGORY_SELECTION,
        listener: Optional[PhaseListener] = None,
    ):
        self.current_phase = initial_phase
        self.history: List[RoundPhase] = [initial_phase]
        self._listener = listener

    def can_transition(self, event: RoundEvent) -> bool:
        return event in TRANSITIONS.get(self.current_phase, {})

    def require(self, action: str, *phases: RoundPhase) -> None:
        """Raise InvalidSelection unless the machine is in one of ``phases``."""
        if self.current_phase not in phases:
            expected = ", ".join(p.value for p in phases)
            raise InvalidSelection(
                action,
                f"not allowed now, expected {expected}",
                phase=self.current_phase.value,
            )

    def transition(self, event: RoundEvent) -> RoundPhase:
        """
        Execute a phase transition.

        Raises:
            InvalidSelection: If the event is not valid in the current phase
        """
        if not self.can_transition(event):
            raise InvalidSelection(
                event.value.lower(),
                "transition not allowed",
                phase=self.current_phase.value,
            )

        previous = self.current_phase
        self.current_phase = TRANSITIONS[previous][event]
        self.history.append(self.current_phase)
        logger.debug(f"Round phase: {previous.value} -> {self.current_phase.value} ({event.value})")
        if self._listener is not None:
            self._listener(previous, self.current_phase)
        return self.current_phase

    @property
    def is_complete(self) -> bool:
        return self.current_phase == RoundPhase.ROUND_COMPLETE
