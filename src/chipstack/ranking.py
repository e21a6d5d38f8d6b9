"""Elimination and final ranking."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from .errors import InvariantViolation
from .player import Player

logger = logging.getLogger(__name__)


@dataclass
class Standings:
    """Assigns ranks as players bust out.

    The sole survivor is rank 1. Eliminated players are ranked 2, 3, 4, ...
    in the order they went out, and each also gets a conventional
    finishing ``place`` (first out of N players finishes Nth).
    """

    players: list[Player]
    eliminated: list[Player] = field(default_factory=list)

    @property
    def remaining(self) -> list[Player]:
        return [p for p in self.players if not p.eliminated]

    def eliminate(self, player: Player) -> None:
        """Knock out a player holding exactly zero chips."""
        if player.eliminated:
            raise InvariantViolation(f"{player.name} was already eliminated")
        if player.chips != 0:
            raise InvariantViolation(
                f"{player.name} cannot be eliminated holding {player.chips} chips"
            )
        player.eliminated = True
        player.folded = True
        self.eliminated.append(player)
        player.rank = len(self.eliminated) + 1
        player.place = len(self.players) - len(self.eliminated) + 1
        logger.info(
            "%s eliminated (rank %d, finishes %d of %d)",
            player.name, player.rank, player.place, len(self.players),
        )

    def eliminate_busted(
        self, candidates: Iterable[Player], paid: set[str]
    ) -> list[Player]:
        """Eliminate every listed player left on zero who won nothing.

        Candidates are ranked in the order given, so callers pass them
        shortest stack first.
        """
        busted = [
            p for p in candidates
            if not p.eliminated and p.chips == 0 and p.id not in paid
        ]
        for player in busted:
            self.eliminate(player)
        return busted

    def crown(self, total_chips: int) -> Player:
        """Rank the last player standing first and check the books."""
        remaining = self.remaining
        if len(remaining) != 1:
            raise InvariantViolation(
                f"Cannot crown a winner with {len(remaining)} players remaining"
            )
        winner = remaining[0]
        if winner.chips != total_chips:
            raise InvariantViolation(
                f"Winner {winner.name} holds {winner.chips} of {total_chips} chips"
            )
        winner.rank = 1
        winner.place = 1
        self.verify()
        logger.info("%s wins the tournament with %d chips", winner.name, winner.chips)
        return winner

    def verify(self) -> None:
        """Ranks must run 2, 3, 4, ... in elimination order."""
        for expected, player in enumerate(self.eliminated, start=2):
            if player.rank != expected:
                raise InvariantViolation(
                    f"{player.name} has rank {player.rank}, expected {expected}"
                )
        verify_ranks(self.players)

    def by_rank(self) -> list[Player]:
        """Players ordered by rank, unranked players last."""
        return sorted(self.players, key=lambda p: (p.rank is None, p.rank or 0))


def verify_ranks(players: Iterable[Player]) -> None:
    """Check ranks across a field of players.

    Eliminated players must hold the distinct ranks 2..k+1 and only a
    single player still standing may hold rank 1.
    """
    players = list(players)
    out = sorted(p.rank or 0 for p in players if p.eliminated)
    if out != list(range(2, len(out) + 2)):
        raise InvariantViolation(f"Eliminated ranks {out} are not 2..{len(out) + 1}")
    ranked_survivors = [p for p in players if not p.eliminated and p.rank is not None]
    if len(ranked_survivors) > 1 or any(p.rank != 1 for p in ranked_survivors):
        raise InvariantViolation("Only the last player standing may hold rank 1")
