# Area: Game
"""
king_of_hearts._game.ladder — Point ladders
===========================================

Resolves which point values a topic offers in a round, given how many
people are playing, and maps each point value onto the difficulty tier
whose question is shown for it.

Ladder values that are all tiers map directly (round 1). Otherwise the
ladder is aligned to the top of the tier list, so the hardest value
gets the 400 question:

    (250, 500) -> 250: 300, 500: 400
    (500,)     -> 500: 400
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from ..config import BOARD_ROUNDS, DIFFICULTY_TIERS, MIN_PLAYERS, ROUND_LADDERS

LadderTable = Dict[int, List[Tuple[int, Tuple[int, ...]]]]


def ladder_for(
    round_number: int,
    player_count: int,
    ladders: Optional[LadderTable] = None,
) -> Tuple[int, ...]:
    """
    Return the point values available per topic.

    Raises:
        ValueError: unknown round or too few players
    """
    ladders = ladders if ladders is not None else ROUND_LADDERS
    if round_number not in ladders:
        raise ValueError(f"No point ladder for round {round_number}")
    if player_count < MIN_PLAYERS:
        raise ValueError(f"Need at least {MIN_PLAYERS} players, got {player_count}")

    eligible = [row for row in ladders[round_number] if row[0] <= player_count]
    if not eligible:
        raise ValueError(f"No ladder row in round {round_number} for {player_count} players")
    _, values = max(eligible, key=lambda row: row[0])
    return tuple(values)


def tier_for_point_value(point_value: int, ladder: Tuple[int, ...]) -> int:
    """Map a ladder point value to the difficulty tier of its question."""
    if point_value not in ladder:
        raise ValueError(f"{point_value} is not on ladder {list(ladder)}")
    if all(value in DIFFICULTY_TIERS for value in ladder):
        return point_value
    rank_from_top = len(ladder) - 1 - ladder.index(point_value)
    return DIFFICULTY_TIERS[len(DIFFICULTY_TIERS) - 1 - rank_from_top]


def ladder_table(player_count: int, ladders: Optional[LadderTable] = None) -> Dict[int, Tuple[int, ...]]:
    """Board-round ladders for a player count, keyed by round."""
    return {r: ladder_for(r, player_count, ladders) for r in BOARD_ROUNDS}
