# Area: Game
"""
king_of_hearts._game.wagering — Final round wagers
==================================================

Each player locks exactly one wager on the shared topic. The amount is
clamped into ``[0, max(score, 0)]`` using the score at wager time.
Anything that does not read as a number counts as 0.

Resolution is symmetric: a correct answer wins the wager, a wrong one
loses it. Each wager resolves once.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, Optional

from ..errors import InvalidSelection
from .session import Player

logger = logging.getLogger("king_of_hearts.game.wagering")

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


@dataclass(frozen=True)
class Wager:
    player_name: str
    amount: int
    locked: bool = True
    correct: Optional[bool] = None


def parse_amount(raw: Any) -> int:
    """Read a raw wager as an integer; unreadable input is 0."""
    if raw is None or isinstance(raw, bool):
        return 0
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if math.isfinite(raw) else 0
    if isinstance(raw, str):
        match = _LEADING_INT.match(raw)
        return int(match.group(1)) if match else 0
    return 0


def clamp_wager(raw: Any, score: int) -> int:
    return max(0, min(parse_amount(raw), max(score, 0)))


class WageringResolver:
    """Collects and settles final-round wagers."""

    def __init__(self) -> None:
        self._wagers: Dict[str, Wager] = {}

    def submit_wager(self, player: Player, raw_amount: Any) -> Wager:
        if player.name in self._wagers:
            raise InvalidSelection("submit_wager", f"{player.name} has already wagered")

        amount = clamp_wager(raw_amount, player.score)
        if amount != parse_amount(raw_amount):
            logger.info(
                f"Wager for {player.name} clamped from {raw_amount!r} to {amount}",
                extra={"player": player.name},
            )
        wager = Wager(player.name, amount)
        self._wagers[player.name] = wager
        return wager

    def resolve(self, wager: Wager, correct: bool) -> int:
        """Return the score delta for ``wager`` and mark it settled."""
        current = self._wagers.get(wager.player_name)
        if current is None:
            raise InvalidSelection("resolve_wager", f"no wager submitted by {wager.player_name}")
        if current.correct is not None:
            raise InvalidSelection("resolve_wager", f"wager for {wager.player_name} already resolved")

        self._wagers[wager.player_name] = replace(current, correct=bool(correct))
        delta = current.amount if correct else -current.amount
        logger.info(
            f"Final wager for {wager.player_name}: {'correct' if correct else 'wrong'} ({delta:+d})",
            extra={"player": wager.player_name},
        )
        return delta

    def wager_for(self, player_name: str) -> Optional[Wager]:
        return self._wagers.get(player_name)

    def all_locked(self, players: Iterable[Player]) -> bool:
        return all(p.name in self._wagers for p in players)

    def all_resolved(self, players: Iterable[Player]) -> bool:
        return all(
            p.name in self._wagers and self._wagers[p.name].correct is not None
            for p in players
        )

    def wagers(self) -> Dict[str, Wager]:
        return dict(self._wagers)
