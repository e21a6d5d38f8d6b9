"""Tests for position module."""

import pytest
from chipstack.position import Position, assign_positions, position_from_utg_distance


class TestPositionProperties:
    def test_early_positions(self):
        assert Position.UTG.is_early
        assert Position.UTG_1.is_early
        assert not Position.CO.is_early

    def test_late_positions(self):
        assert Position.CO.is_late
        assert Position.BTN.is_late
        assert not Position.SB.is_late

    def test_blind_positions(self):
        assert Position.SB.is_blind
        assert Position.BB.is_blind
        assert not Position.BTN.is_blind

    def test_short_format(self):
        assert Position.UTG.short == "UTG"
        assert Position.UTG_1.short == "UTG+1"
        assert Position.BB.short == "BB"


class TestPositionFromUtgDistance:
    def test_6max_table(self):
        """6-player table: UTG, HJ, CO, BTN, SB, BB."""
        expected = [Position.UTG, Position.HJ, Position.CO, Position.BTN, Position.SB, Position.BB]
        assert [position_from_utg_distance(d, 6) for d in range(6)] == expected

    def test_9max_table(self):
        assert position_from_utg_distance(0, 9) == Position.UTG
        assert position_from_utg_distance(1, 9) == Position.UTG_1
        assert position_from_utg_distance(2, 9) == Position.MP
        assert position_from_utg_distance(3, 9) == Position.MP
        assert position_from_utg_distance(4, 9) == Position.HJ
        assert position_from_utg_distance(5, 9) == Position.CO
        assert position_from_utg_distance(6, 9) == Position.BTN
        assert position_from_utg_distance(8, 9) == Position.BB

    def test_invalid_distance(self):
        with pytest.raises(ValueError):
            position_from_utg_distance(-1, 6)
        with pytest.raises(ValueError):
            position_from_utg_distance(6, 6)


class TestAssignPositions:
    def test_heads_up(self):
        # Seat 1 is first after the button, seat 0 is the button
        assert assign_positions([1, 0]) == {0: Position.BTN, 1: Position.BB}

    def test_three_handed(self):
        positions = assign_positions([4, 7, 2])
        assert positions == {4: Position.SB, 7: Position.BB, 2: Position.BTN}

    def test_four_handed(self):
        positions = assign_positions([1, 2, 3, 0])
        assert positions[1] == Position.SB
        assert positions[2] == Position.BB
        assert positions[3] == Position.CO
        assert positions[0] == Position.BTN
