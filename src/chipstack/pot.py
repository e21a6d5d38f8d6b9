"""Pot management with side pot calculation."""

from __future__ import annotations

from dataclasses import dataclass

from .player import Player


@dataclass
class SidePot:
    """A single pot (main or side) with its eligible winners."""

    amount: int
    eligible_players: list[Player]


@dataclass
class PotManager:
    """Tracks the chips in the middle for the current hand."""

    _total: int = 0

    def add(self, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"Cannot add a negative amount ({amount}) to the pot")
        self._total += amount

    def take(self, amount: int) -> int:
        """Remove ``amount`` chips for a winner."""
        if amount > self._total:
            raise ValueError(f"Cannot take {amount} from a pot of {self._total}")
        self._total -= amount
        return amount

    def reset(self) -> None:
        self._total = 0

    @property
    def total(self) -> int:
        return self._total

    @staticmethod
    def calculate_side_pots(players: list[Player]) -> list[SidePot]:
        """Calculate main pot and side pots from hand contributions.

        Algorithm:
        1. Collect all unique hand_contribution values, sorted ascending
        2. For each level, each contributor puts in min(their_bet, level) - prev_level
        3. Eligible = players still in the hand whose contribution >= that level
        4. Folded players' chips stay in the pot but they can't win it

        A layer nobody live can win (dead money above every contender) is
        merged into the pot below it. Adjacent layers with the same
        contenders are merged into one pot.
        """
        in_pot = [p for p in players if p.hand_contribution > 0]
        if not in_pot:
            return []

        bet_levels = sorted({p.hand_contribution for p in in_pot})
        layers: list[SidePot] = []
        prev_level = 0

        for level in bet_levels:
            pot_amount = sum(
                min(p.hand_contribution, level) - min(p.hand_contribution, prev_level)
                for p in in_pot
            )
            eligible = [
                p for p in in_pot if p.is_in_hand and p.hand_contribution >= level
            ]
            if pot_amount > 0:
                layers.append(SidePot(amount=pot_amount, eligible_players=eligible))
            prev_level = level

        pots: list[SidePot] = []
        carry = 0
        for layer in layers:
            if not layer.eligible_players:
                if pots:
                    pots[-1].amount += layer.amount
                else:
                    carry += layer.amount
                continue
            if pots and _ids(pots[-1]) == _ids(layer):
                pots[-1].amount += layer.amount + carry
            else:
                pots.append(
                    SidePot(amount=layer.amount + carry, eligible_players=layer.eligible_players)
                )
            carry = 0

        return pots


def _ids(pot: SidePot) -> list[str]:
    return [p.id for p in pot.eligible_players]
