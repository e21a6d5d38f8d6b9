"""Tests for elimination and ranking."""

import pytest
from chipstack.errors import InvariantViolation
from chipstack.player import Player
from chipstack.ranking import Standings, verify_ranks


def _players(*stacks: int) -> list[Player]:
    return [Player(name=f"P{i}", chips=c, seat=i) for i, c in enumerate(stacks)]


class TestStandings:
    def test_ranks_follow_elimination_order(self):
        players = _players(0, 0, 0, 4000)
        standings = Standings(players)
        standings.eliminate(players[2])
        standings.eliminate(players[0])
        standings.eliminate(players[1])

        assert players[2].rank == 2
        assert players[0].rank == 3
        assert players[1].rank == 4
        assert [p.place for p in (players[2], players[0], players[1])] == [4, 3, 2]

    def test_eliminated_player_is_folded(self):
        players = _players(0, 100)
        standings = Standings(players)
        standings.eliminate(players[0])
        assert players[0].eliminated
        assert players[0].folded
        assert standings.remaining == [players[1]]

    def test_cannot_eliminate_with_chips(self):
        players = _players(10, 100)
        with pytest.raises(InvariantViolation):
            Standings(players).eliminate(players[0])

    def test_cannot_eliminate_twice(self):
        players = _players(0, 100)
        standings = Standings(players)
        standings.eliminate(players[0])
        with pytest.raises(InvariantViolation):
            standings.eliminate(players[0])

    def test_eliminate_busted_skips_paid_players(self):
        players = _players(0, 0, 300)
        standings = Standings(players)
        out = standings.eliminate_busted(players, paid={players[1].id})
        assert out == [players[0]]
        assert not players[1].eliminated

    def test_crown(self):
        players = _players(0, 0, 300)
        standings = Standings(players)
        standings.eliminate_busted(players, paid=set())
        winner = standings.crown(300)
        assert winner is players[2]
        assert winner.rank == 1
        assert [p.rank for p in standings.by_rank()] == [1, 2, 3]

    def test_crown_requires_all_chips(self):
        players = _players(0, 250)
        standings = Standings(players)
        standings.eliminate(players[0])
        with pytest.raises(InvariantViolation):
            standings.crown(300)

    def test_crown_requires_single_survivor(self):
        players = _players(100, 200)
        with pytest.raises(InvariantViolation):
            Standings(players).crown(300)


class TestVerifyRanks:
    def test_valid_field(self):
        players = _players(0, 0, 300)
        players[0].eliminated, players[0].rank = True, 3
        players[1].eliminated, players[1].rank = True, 2
        players[2].rank = 1
        verify_ranks(players)

    def test_gap_in_ranks(self):
        players = _players(0, 300)
        players[0].eliminated, players[0].rank = True, 3
        with pytest.raises(InvariantViolation):
            verify_ranks(players)

    def test_two_survivors_ranked(self):
        players = _players(100, 200)
        players[0].rank = 1
        players[1].rank = 1
        with pytest.raises(InvariantViolation):
            verify_ranks(players)
