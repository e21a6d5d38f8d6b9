"""Tests for pot management and side pot calculation."""

import pytest
from chipstack.card import cards
from chipstack.player import Player
from chipstack.pot import PotManager


def _in_hand(name: str, seat: int, contribution: int, chips: int = 0, folded: bool = False) -> Player:
    p = Player(name=name, chips=chips, seat=seat)
    p.hole_cards = cards("2c 3d")
    p.hand_contribution = contribution
    p.folded = folded
    return p


class TestPotManager:
    def test_add_and_total(self):
        pot = PotManager()
        pot.add(100)
        pot.add(200)
        assert pot.total == 300

    def test_reset(self):
        pot = PotManager()
        pot.add(500)
        pot.reset()
        assert pot.total == 0

    def test_take(self):
        pot = PotManager()
        pot.add(300)
        assert pot.take(120) == 120
        assert pot.total == 180

    def test_cannot_take_more_than_pot(self):
        pot = PotManager()
        pot.add(50)
        with pytest.raises(ValueError):
            pot.take(51)

    def test_negative_add_rejected(self):
        with pytest.raises(ValueError):
            PotManager().add(-1)


class TestSidePots:
    def test_two_player_single_pot(self):
        a = _in_hand("A", 0, 100)
        b = _in_hand("B", 1, 100)

        pots = PotManager.calculate_side_pots([a, b])
        assert len(pots) == 1
        assert pots[0].amount == 200
        assert sorted(p.name for p in pots[0].eligible_players) == ["A", "B"]

    def test_three_player_with_short_all_in(self):
        short = _in_hand("Short", 0, 50)
        mid = _in_hand("Mid", 1, 100, chips=500)
        big = _in_hand("Big", 2, 100, chips=500)

        pots = PotManager.calculate_side_pots([short, mid, big])
        assert len(pots) == 2
        assert pots[0].amount == 150
        assert len(pots[0].eligible_players) == 3
        assert pots[1].amount == 100
        assert sorted(p.name for p in pots[1].eligible_players) == ["Big", "Mid"]

    def test_folded_player_not_eligible(self):
        folder = _in_hand("Folder", 0, 100, chips=500, folded=True)
        winner = _in_hand("Winner", 1, 100, chips=500)

        pots = PotManager.calculate_side_pots([folder, winner])
        assert len(pots) == 1
        assert pots[0].amount == 200
        assert pots[0].eligible_players == [winner]

    def test_dead_money_above_contenders_merges_down(self):
        """A folder who put in more than any contender still feeds the top pot."""
        folder = _in_hand("Folder", 0, 300, chips=200, folded=True)
        a = _in_hand("A", 1, 100)
        b = _in_hand("B", 2, 100)

        pots = PotManager.calculate_side_pots([folder, a, b])
        assert len(pots) == 1
        assert pots[0].amount == 500
        assert {p.name for p in pots[0].eligible_players} == {"A", "B"}

    def test_no_bets_no_pots(self):
        a = Player(name="A", chips=500, seat=0)
        b = Player(name="B", chips=500, seat=1)
        assert PotManager.calculate_side_pots([a, b]) == []

    def test_three_different_all_in_levels(self):
        small = _in_hand("Small", 0, 50)
        mid = _in_hand("Mid", 1, 150)
        big = _in_hand("Big", 2, 300)

        pots = PotManager.calculate_side_pots([small, mid, big])
        assert [p.amount for p in pots] == [150, 200, 150]
        assert [len(p.eligible_players) for p in pots] == [3, 2, 1]

    def test_pots_sum_to_contributions(self):
        players = [_in_hand(f"P{i}", i, c) for i, c in enumerate([20, 75, 75, 400])]
        players[1].folded = True
        pots = PotManager.calculate_side_pots(players)
        assert sum(p.amount for p in pots) == 570
