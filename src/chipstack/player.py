"""Player state and the read-only view handed to decision policies."""

from __future__ import annotations

from dataclasses import dataclass, field

from .card import Card
from .config import StrategyProfile
from .position import Position


@dataclass(frozen=True)
class OpponentView:
    """What a deciding player can see about another seat."""

    name: str
    seat: int
    chips: int
    bet: int
    folded: bool
    eliminated: bool


@dataclass(frozen=True)
class DecisionContext:
    """Read-only snapshot given to a policy when deciding.

    All monetary values are in chips (int), not big blinds.
    """

    player_name: str
    hole_cards: list[Card]
    community: list[Card]
    street: str
    pot_total: int
    current_bet: int
    to_call: int
    min_raise: int
    chips: int
    bet: int
    big_blind: int
    position: Position
    num_active_players: int
    opponents: list[OpponentView] = field(default_factory=list)
    profile: StrategyProfile | None = None

    @property
    def position_group(self) -> str:
        """'late' for the cutoff and button, 'early' otherwise."""
        return "late" if self.position.is_late else "early"

    @property
    def facing_bet(self) -> bool:
        return self.to_call > 0

    @property
    def max_raise(self) -> int:
        """The raise-to total that would put this player all-in."""
        return self.bet + self.chips


@dataclass
class Player:
    """A player at the poker table."""

    name: str
    chips: int
    seat: int
    id: str = ""
    profile: StrategyProfile | None = None

    hole_cards: list[Card] = field(default_factory=list)
    bet: int = 0
    hand_contribution: int = 0
    folded: bool = False
    eliminated: bool = False
    rank: int | None = None
    place: int | None = None

    # Lifetime counters
    hands_won: int = 0
    hands_played: int = 0
    total_bets: int = 0
    biggest_pot: int = 0

    def __post_init__(self) -> None:
        if not self.id:
            self.id = f"player-{self.seat}"
        if self.chips < 0:
            raise ValueError(f"{self.name} cannot start with negative chips")

    @property
    def is_in_hand(self) -> bool:
        """Still contesting the pot (dealt in, not folded, not eliminated)."""
        return bool(self.hole_cards) and not self.folded and not self.eliminated

    @property
    def is_all_in(self) -> bool:
        """Contesting the pot with nothing left behind."""
        return self.is_in_hand and self.chips == 0

    @property
    def can_act(self) -> bool:
        """Can still make decisions this hand."""
        return self.is_in_hand and self.chips > 0

    def reset_for_new_hand(self) -> None:
        """Reset per-hand state."""
        self.hole_cards = []
        self.folded = False
        self.bet = 0
        self.hand_contribution = 0

    def reset_for_new_street(self) -> None:
        """Reset per-street state (bet resets, hand contribution persists)."""
        self.bet = 0

    def pay(self, amount: int) -> int:
        """Move chips from the stack into the pot, capped at the stack.

        Returns the amount actually paid.
        """
        actual = max(0, min(amount, self.chips))
        self.chips -= actual
        self.bet += actual
        self.hand_contribution += actual
        self.total_bets += actual
        return actual

    def fold(self) -> None:
        """Fold the hand."""
        self.folded = True

    def win(self, amount: int) -> None:
        """Receive chips from a pot."""
        self.chips += amount
