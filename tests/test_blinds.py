"""Tests for the blind schedule."""

import pytest
from chipstack.blinds import BlindLevel, BlindSchedule
from chipstack.errors import ConfigurationError


class TestBlindSchedule:
    def test_escalation(self):
        schedule = BlindSchedule(small_blind=10, big_blind=20, hands_per_level=2)
        assert schedule.level_for(1) == BlindLevel(1, 10, 20)
        assert schedule.level_for(2) == BlindLevel(1, 10, 20)
        assert schedule.level_for(3) == BlindLevel(2, 20, 40)
        assert schedule.level_for(4) == BlindLevel(2, 20, 40)
        assert schedule.level_for(5) == BlindLevel(3, 40, 80)

    def test_custom_multiplier(self):
        schedule = BlindSchedule(small_blind=5, big_blind=10, hands_per_level=1, multiplier=3)
        assert schedule.level_for(3) == BlindLevel(3, 45, 90)

    def test_explicit_levels_repeat_last(self):
        schedule = BlindSchedule(
            small_blind=10, big_blind=20, hands_per_level=1,
            levels=((10, 20), (15, 30), (25, 50)),
        )
        assert schedule.level_for(2) == BlindLevel(2, 15, 30)
        assert schedule.level_for(3) == BlindLevel(3, 25, 50)
        assert schedule.level_for(9) == BlindLevel(9, 25, 50)

    def test_hands_until_increase(self):
        schedule = BlindSchedule(small_blind=10, big_blind=20, hands_per_level=10)
        assert schedule.hands_until_increase(1) == 10
        assert schedule.hands_until_increase(10) == 1
        assert schedule.hands_until_increase(11) == 10

    def test_level(self):
        schedule = BlindSchedule(small_blind=10, big_blind=20, hands_per_level=10)
        assert [schedule.level(h) for h in (1, 10, 11, 21)] == [1, 1, 2, 3]

    def test_hand_numbers_start_at_one(self):
        schedule = BlindSchedule(small_blind=10, big_blind=20, hands_per_level=2)
        with pytest.raises(ValueError):
            schedule.level_for(0)

    def test_str(self):
        assert str(BlindLevel(2, 20, 40)) == "Level 2: 20/40"

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"small_blind": 10, "big_blind": 20, "hands_per_level": 0},
            {"small_blind": 0, "big_blind": 20, "hands_per_level": 5},
            {"small_blind": 30, "big_blind": 20, "hands_per_level": 5},
            {"small_blind": 10, "big_blind": 20, "hands_per_level": 5, "multiplier": 0},
        ],
    )
    def test_invalid_schedules(self, kwargs):
        with pytest.raises(ConfigurationError):
            BlindSchedule(**kwargs)
