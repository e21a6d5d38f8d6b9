"""Immutable state snapshots emitted by the tournament loop."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Awaitable, Callable

from .player import Player


class EventType(Enum):
    GAME_STATE = "gameState"
    BLIND_LEVEL_UP = "blindLevelUp"
    HAND_COMPLETE = "handComplete"
    ELIMINATION = "elimination"
    TOURNAMENT_COMPLETE = "tournamentComplete"


@dataclass(frozen=True)
class PlayerSnapshot:
    id: str
    name: str
    seat: int
    chips: int
    hand: tuple[str, ...]
    bet: int
    folded: bool
    eliminated: bool
    rank: int | None
    place: int | None
    hands_won: int
    hands_played: int
    total_bets: int
    biggest_pot: int

    @classmethod
    def from_player(cls, player: Player) -> PlayerSnapshot:
        return cls(
            id=player.id,
            name=player.name,
            seat=player.seat,
            chips=player.chips,
            hand=tuple(str(c) for c in player.hole_cards),
            bet=player.bet,
            folded=player.folded,
            eliminated=player.eliminated,
            rank=player.rank,
            place=player.place,
            hands_won=player.hands_won,
            hands_played=player.hands_played,
            total_bets=player.total_bets,
            biggest_pot=player.biggest_pot,
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["hand"] = list(self.hand)
        return data


@dataclass(frozen=True)
class TableSnapshot:
    """Everything an observer needs to redraw the table."""

    players: tuple[PlayerSnapshot, ...]
    pot: int
    community: tuple[str, ...]
    current_bet: int
    acting_seat: int | None
    dealer_seat: int
    street: str
    last_action: str | None
    hand_number: int
    level: int
    small_blind: int
    big_blind: int
    hands_until_increase: int
    winners: tuple[PlayerSnapshot, ...] = ()

    @property
    def total_chips(self) -> int:
        return sum(p.chips for p in self.players) + self.pot

    def to_dict(self) -> dict[str, Any]:
        return {
            "players": [p.to_dict() for p in self.players],
            "pot": self.pot,
            "community": list(self.community),
            "current_bet": self.current_bet,
            "acting_seat": self.acting_seat,
            "dealer_seat": self.dealer_seat,
            "street": self.street,
            "last_action": self.last_action,
            "hand_number": self.hand_number,
            "level": self.level,
            "small_blind": self.small_blind,
            "big_blind": self.big_blind,
            "hands_until_increase": self.hands_until_increase,
            "winners": [p.to_dict() for p in self.winners],
        }


@dataclass(frozen=True)
class TournamentEvent:
    type: EventType
    snapshot: TableSnapshot
    message: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "message": self.message,
            "data": self.snapshot.to_dict(),
        }


EventSink = Callable[[TournamentEvent], "Awaitable[None] | None"]
