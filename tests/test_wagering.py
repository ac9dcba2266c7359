# Area: Game Tests
"""Tests for final-round wagering."""

import pytest

from king_of_hearts.errors import InvalidSelection
from king_of_hearts._game.session import Player
from king_of_hearts._game.wagering import WageringResolver, clamp_wager, parse_amount


class TestParseAmount:
    """Tests for reading raw wager input."""

    @pytest.mark.parametrize("raw, expected", [
        (300, 300),
        ("300", 300),
        ("  150 points", 150),
        ("-20", -20),
        (99.9, 99),
        ("abc", 0),
        ("", 0),
        (None, 0),
        (True, 0),
        (float("nan"), 0),
        ([5], 0),
    ])
    def test_parse(self, raw, expected):
        """Leading integers are read, everything else is 0."""
        assert parse_amount(raw) == expected


class TestClampWager:
    """Tests for clamp_wager()."""

    def test_within_range(self):
        assert clamp_wager(200, 500) == 200

    def test_above_score(self):
        """Wagers cannot exceed the current score."""
        assert clamp_wager(900, 500) == 500

    def test_negative_amount(self):
        assert clamp_wager(-50, 500) == 0

    def test_negative_score(self):
        """A player in the red can only wager 0."""
        assert clamp_wager(100, -200) == 0


class TestWageringResolver:
    """Tests for WageringResolver."""

    def test_submit_locks(self):
        """Submitted wagers are locked and clamped."""
        resolver = WageringResolver()
        wager = resolver.submit_wager(Player("Ana", "Wine", "Dogs", score=400), "1000")
        assert wager.amount == 400
        assert wager.locked is True
        assert resolver.wager_for("Ana") == wager

    def test_resubmit_rejected(self):
        """A locked wager cannot be changed."""
        resolver = WageringResolver()
        ana = Player("Ana", "Wine", "Dogs", score=400)
        resolver.submit_wager(ana, 100)
        with pytest.raises(InvalidSelection):
            resolver.submit_wager(ana, 200)
        assert resolver.wager_for("Ana").amount == 100

    def test_resolve_symmetric(self):
        """Correct wins the wager, wrong loses it."""
        resolver = WageringResolver()
        ana = Player("Ana", "Wine", "Dogs", score=400)
        ben = Player("Ben", "Coffee", "Excel", score=300)
        a = resolver.submit_wager(ana, 250)
        b = resolver.submit_wager(ben, 300)
        assert resolver.resolve(a, True) == 250
        assert resolver.resolve(b, False) == -300

    def test_resolve_once(self):
        """A wager settles only once."""
        resolver = WageringResolver()
        wager = resolver.submit_wager(Player("Ana", "Wine", "Dogs", score=100), 50)
        resolver.resolve(wager, True)
        with pytest.raises(InvalidSelection):
            resolver.resolve(wager, True)

    def test_zero_wager(self):
        """Zero wagers resolve to zero either way."""
        resolver = WageringResolver()
        wager = resolver.submit_wager(Player("Ana", "Wine", "Dogs", score=-100), 500)
        assert wager.amount == 0
        assert resolver.resolve(wager, False) == 0

    def test_all_locked_and_resolved(self):
        resolver = WageringResolver()
        players = [Player("Ana", "Wine", "Dogs", 100), Player("Ben", "Coffee", "Excel", 100)]
        resolver.submit_wager(players[0], 10)
        assert resolver.all_locked(players) is False
        resolver.submit_wager(players[1], 10)
        assert resolver.all_locked(players) is True
        assert resolver.all_resolved(players) is False
        for player in players:
            resolver.resolve(resolver.wager_for(player.name), True)
        assert resolver.all_resolved(players) is True
