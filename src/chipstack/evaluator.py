"""Showdown evaluation - comparing hands and determining winners."""

from dataclasses import dataclass

from .card import Card
from .hand import Hand, HandValue


@dataclass
class PlayerHand:
    """A contender's hole cards at showdown."""

    player_id: str | int
    hole_cards: list[Card]
    hand_value: HandValue | None = None

    def evaluate(self, community: list[Card]) -> HandValue:
        """Evaluate this player's best hand with the community cards."""
        self.hand_value = Hand(cards=self.hole_cards + community).evaluate()
        return self.hand_value


@dataclass
class GameResult:
    """Result of evaluating a showdown."""

    winners: list[PlayerHand]
    all_hands: list[PlayerHand]
    is_tie: bool

    @property
    def winner(self) -> PlayerHand | None:
        """Get the single winner, or None if tie."""
        if len(self.winners) == 1:
            return self.winners[0]
        return None

    @property
    def best_value(self) -> HandValue | None:
        return self.winners[0].hand_value if self.winners else None


def evaluate_game(
    players: list[PlayerHand],
    community: list[Card],
) -> GameResult:
    """Evaluate all contenders and determine winner(s).

    Args:
        players: Contenders in action order. Tied winners keep this order,
            which decides who receives odd chips when a pot is split.
        community: 3 to 5 community cards (each hand needs 5-7 cards).

    Returns:
        GameResult with winners and all evaluated hands, best first.
    """
    if not players:
        raise ValueError("Need at least one contender")
    if not 3 <= len(community) <= 5:
        raise ValueError(f"Need 3 to 5 community cards, got {len(community)}")

    for player in players:
        player.evaluate(community)

    # sorted() is stable, so ties stay in action order
    sorted_hands = sorted(players, key=lambda p: p.hand_value, reverse=True)  # type: ignore

    best_value = sorted_hands[0].hand_value
    winners = [p for p in players if p.hand_value == best_value]

    return GameResult(
        winners=winners,
        all_hands=sorted_hands,
        is_tie=len(winners) > 1,
    )


def compare_hands(hand1: Hand, hand2: Hand) -> int:
    """Compare two hands.

    Returns:
        1 if hand1 wins, -1 if hand2 wins, 0 if tie
    """
    v1, v2 = hand1.value, hand2.value
    if v1 > v2:
        return 1
    elif v1 < v2:
        return -1
    return 0


def split_pot(amount: int, shares: int) -> list[int]:
    """Split ``amount`` into ``shares`` integer parts that sum to it.

    Odd chips go one at a time to the earliest shares.
    """
    if shares < 1:
        raise ValueError("Cannot split a pot between zero winners")
    base, remainder = divmod(amount, shares)
    return [base + (1 if i < remainder else 0) for i in range(shares)]
