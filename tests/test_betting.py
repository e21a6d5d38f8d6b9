"""Tests for betting round state machine."""

import pytest
from chipstack.action import Action
from chipstack.betting import BettingRound, Street
from chipstack.card import cards
from chipstack.errors import EngineStalled
from chipstack.player import Player
from chipstack.pot import PotManager


def _make_players(*stacks: int) -> list[Player]:
    players = []
    for i, chips in enumerate(stacks):
        p = Player(name=f"P{i}", chips=chips, seat=i)
        p.hole_cards = cards("2c 7d")
        players.append(p)
    return players


def _round(players: list[Player], current_bet: int = 0, **kwargs) -> BettingRound:
    return BettingRound(players=players, pot=PotManager(), big_blind=20, current_bet=current_bet, **kwargs)


def _post(betting: BettingRound, player: Player, amount: int) -> None:
    betting.pot.add(player.pay(amount))


class TestStreet:
    def test_order(self):
        assert Street.PREFLOP.next is Street.FLOP
        assert Street.RIVER.next is Street.SHOWDOWN
        assert Street.COMPLETE.next is Street.COMPLETE

    def test_cards_dealt(self):
        assert [s.cards_dealt for s in (Street.FLOP, Street.TURN, Street.RIVER)] == [3, 1, 1]


class TestBettingRound:
    def test_check_around(self):
        players = _make_players(1000, 1000, 1000)
        betting = _round(players)
        for p in players:
            assert betting.next_to_act() is p
            betting.apply(p, Action.check())
        assert betting.is_complete()
        assert betting.pot.total == 0

    def test_single_check_does_not_end_street(self):
        players = _make_players(1000, 1000)
        betting = _round(players)
        betting.apply(players[0], Action.check())
        assert not betting.is_complete()
        assert betting.next_to_act() is players[1]

    def test_bet_call_call(self):
        players = _make_players(1000, 1000, 1000)
        betting = _round(players)
        betting.apply(players[0], Action.raise_to(100))
        betting.apply(players[1], Action.call())
        betting.apply(players[2], Action.call())

        assert betting.is_complete()
        assert betting.pot.total == 300
        assert all(p.bet == 100 for p in players)

    def test_bet_raise_fold_call(self):
        players = _make_players(1000, 1000, 1000)
        betting = _round(players)
        betting.apply(players[0], Action.raise_to(100))
        betting.apply(players[1], Action.raise_to(200))
        betting.apply(players[2], Action.fold())
        assert betting.next_to_act() is players[0]
        betting.apply(players[0], Action.call())

        assert betting.is_complete()
        assert players[0].bet == 200
        assert players[2].folded
        assert betting.pot.total == 400

    def test_everyone_folds_to_one(self):
        players = _make_players(1000, 1000, 1000)
        betting = _round(players)
        betting.apply(players[0], Action.raise_to(100))
        betting.apply(players[1], Action.fold())
        betting.apply(players[2], Action.fold())
        assert betting.is_complete()
        assert betting.next_to_act() is None

    def test_big_blind_gets_option(self):
        """Limpers matching the big blind still leave the big blind to act."""
        sb, bb, btn = _make_players(1000, 1000, 1000)
        betting = _round([btn, sb, bb], current_bet=20)
        _post(betting, sb, 10)
        _post(betting, bb, 20)
        betting.apply(btn, Action.call())
        betting.apply(sb, Action.call())
        assert not betting.is_complete()
        assert betting.next_to_act() is bb
        betting.apply(bb, Action.check())
        assert betting.is_complete()
        assert betting.pot.total == 60


class TestNormalization:
    def test_check_facing_bet_becomes_call(self):
        players = _make_players(1000, 1000)
        betting = _round(players)
        betting.apply(players[0], Action.raise_to(60))
        betting.apply(players[1], Action.check())
        assert players[1].bet == 60

    def test_call_with_nothing_owed_becomes_check(self):
        players = _make_players(1000, 1000)
        betting = _round(players)
        description = betting.apply(players[0], Action.call())
        assert "checks" in description
        assert players[0].chips == 1000

    def test_fold_with_nothing_owed_is_still_a_fold(self):
        players = _make_players(1000, 1000)
        betting = _round(players)
        betting.apply(players[0], Action.fold())
        assert players[0].folded

    def test_raise_below_minimum_is_raised_to_minimum(self):
        players = _make_players(1000, 1000)
        betting = _round(players, current_bet=20)
        betting.apply(players[0], Action.raise_to(25))
        assert betting.current_bet == 40
        assert players[0].bet == 40

    @pytest.mark.parametrize("requested, expected", [(95, 100), (109, 100), (110, 120), (130, 140)])
    def test_raise_snaps_to_big_blind_multiple(self, requested, expected):
        players = _make_players(1000, 1000)
        betting = _round(players)
        betting.apply(players[0], Action.raise_to(requested))
        assert players[0].bet == expected

    def test_raise_capped_by_stack_is_all_in(self):
        players = _make_players(150, 1000)
        betting = _round(players)
        description = betting.apply(players[0], Action.raise_to(400))
        assert players[0].chips == 0
        assert players[0].bet == 150
        assert betting.current_bet == 150
        assert "all-in" in description


class TestAllIn:
    def test_short_call_all_in(self):
        """100 chips facing a raise to 200: all-in for 100, pot grows by 100."""
        raiser, short = _make_players(1000, 100)
        betting = _round([raiser, short])
        betting.apply(raiser, Action.raise_to(200))
        pot_before = betting.pot.total

        betting.apply(short, Action.call())

        assert short.chips == 0
        assert short.bet == 100
        assert betting.pot.total == pot_before + 100
        assert betting.current_bet == 200
        assert betting.is_complete()

    def test_all_in_response(self):
        players = _make_players(500, 500)
        betting = _round(players)
        betting.apply(players[0], Action.all_in())
        betting.apply(players[1], Action.call())
        assert players[0].is_all_in
        assert betting.pot.total == 1000
        assert betting.is_complete()

    def test_short_all_in_does_not_reopen_raising(self):
        a, b, c = _make_players(1000, 1000, 110)
        betting = _round([a, b, c])
        betting.apply(a, Action.raise_to(100))
        betting.apply(b, Action.call())
        betting.apply(c, Action.all_in())  # 110 is less than a full raise

        assert betting.current_bet == 110
        assert not betting.can_raise(a)
        betting.apply(a, Action.raise_to(500))  # only allowed to call
        assert a.bet == 110
        betting.apply(b, Action.call())
        assert betting.is_complete()

    def test_full_all_in_raise_reopens(self):
        a, b, c = _make_players(1000, 1000, 300)
        betting = _round([a, b, c])
        betting.apply(a, Action.raise_to(100))
        betting.apply(b, Action.call())
        betting.apply(c, Action.all_in())
        assert betting.can_raise(a)
        betting.apply(a, Action.raise_to(600))
        assert a.bet == 600


class TestIterationGuard:
    def test_stalled_street_raises(self):
        players = _make_players(100_000, 100_000)
        betting = _round(players, max_actions=5)
        with pytest.raises(EngineStalled):
            for _ in range(10):
                p = betting.next_to_act()
                betting.apply(p, Action.raise_to(betting.min_raise))
