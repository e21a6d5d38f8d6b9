"""Blind schedule - which blinds apply to a given hand."""

from __future__ import annotations

from dataclasses import dataclass, field

from .errors import ConfigurationError


@dataclass(frozen=True)
class BlindLevel:
    """A blind level in the tournament schedule."""

    level: int
    small_blind: int
    big_blind: int

    def __str__(self) -> str:
        return f"Level {self.level}: {self.small_blind}/{self.big_blind}"


@dataclass(frozen=True)
class BlindSchedule:
    """Blinds that grow every ``hands_per_level`` hands.

    By default both blinds are multiplied by ``multiplier`` at each new
    level. An explicit list of ``(small, big)`` pairs can be given
    instead; once it runs out the last pair repeats.

    Hand numbers are 1-based: hands 1..hands_per_level play at level 1.
    """

    small_blind: int
    big_blind: int
    hands_per_level: int
    multiplier: int = 2
    levels: tuple[tuple[int, int], ...] = field(default=())

    def __post_init__(self) -> None:
        if self.hands_per_level < 1:
            raise ConfigurationError("hands_per_level must be at least 1")
        if self.multiplier < 1:
            raise ConfigurationError("multiplier must be at least 1")
        if not 0 < self.small_blind <= self.big_blind:
            raise ConfigurationError("blinds must satisfy 0 < small <= big")

    def level(self, hand_number: int) -> int:
        """Blind level in force for a 1-based hand number."""
        if hand_number < 1:
            raise ValueError(f"hand_number must be at least 1, got {hand_number}")
        return (hand_number - 1) // self.hands_per_level + 1

    def level_for(self, hand_number: int) -> BlindLevel:
        level = self.level(hand_number)
        if self.levels:
            small, big = self.levels[min(level, len(self.levels)) - 1]
            return BlindLevel(level, small, big)
        factor = self.multiplier ** (level - 1)
        return BlindLevel(level, self.small_blind * factor, self.big_blind * factor)

    def hands_until_increase(self, hand_number: int) -> int:
        """Hands left at the current level, counting ``hand_number`` itself."""
        return self.hands_per_level - (hand_number - 1) % self.hands_per_level
