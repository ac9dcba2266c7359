# Area: Game
"""
king_of_hearts._game.enums — Round state machine enums
======================================================

Defines the phases and events of a board round, and the three ways a
question can be resolved.
"""

from enum import Enum


class RoundPhase(Enum):
    """
    Phases of a board round.

    Phase transitions:
    AWAITING_CATEGORY_SELECTION -> AWAITING_POINT_SELECTION (on CATEGORY_SELECTED)
    AWAITING_POINT_SELECTION -> AWAITING_QUESTION_REVEAL (on POINT_SELECTED, question cached)
    AWAITING_POINT_SELECTION -> GENERATING (on GENERATION_STARTED, cache miss)
    GENERATING -> AWAITING_QUESTION_REVEAL (on GENERATION_FINISHED)
    AWAITING_QUESTION_REVEAL -> AWAITING_STEAL_DECISION (on QUESTION_REVEALED)
    AWAITING_QUESTION_REVEAL -> AWAITING_SCORE_RESOLUTION (on QUESTION_REVEALED_NO_STEAL)
    AWAITING_STEAL_DECISION -> AWAITING_SCORE_RESOLUTION (on STEAL_ATTEMPTED or STEAL_DECLINED)
    AWAITING_SCORE_RESOLUTION -> AWAITING_CATEGORY_SELECTION (on SCORE_RESOLVED)
    AWAITING_SCORE_RESOLUTION -> ROUND_COMPLETE (on ROUND_FINISHED)
    """
    AWAITING_CATEGORY_SELECTION = "AWAITING_CATEGORY_SELECTION"
    AWAITING_POINT_SELECTION = "AWAITING_POINT_SELECTION"
    GENERATING = "GENERATING"
    AWAITING_QUESTION_REVEAL = "AWAITING_QUESTION_REVEAL"
    AWAITING_STEAL_DECISION = "AWAITING_STEAL_DECISION"
    AWAITING_SCORE_RESOLUTION = "AWAITING_SCORE_RESOLUTION"
    ROUND_COMPLETE = "ROUND_COMPLETE"


class RoundEvent(Enum):
    """Events that drive RoundPhase transitions."""
    CATEGORY_SELECTED = "CATEGORY_SELECTED"
    POINT_SELECTED = "POINT_SELECTED"
    GENERATION_STARTED = "GENERATION_STARTED"
    GENERATION_FINISHED = "GENERATION_FINISHED"
    QUESTION_REVEALED = "QUESTION_REVEALED"
    QUESTION_REVEALED_NO_STEAL = "QUESTION_REVEALED_NO_STEAL"
    STEAL_ATTEMPTED = "STEAL_ATTEMPTED"
    STEAL_DECLINED = "STEAL_DECLINED"
    SCORE_RESOLVED = "SCORE_RESOLVED"
    ROUND_FINISHED = "ROUND_FINISHED"


class Outcome(Enum):
    """Who answered correctly."""
    ORIGINAL = "original"
    EXPERT = "expert"
    NOBODY = "nobody"
