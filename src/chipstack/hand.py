"""Poker hand evaluation for Texas Hold'em."""

from collections import Counter
from dataclasses import dataclass
from enum import IntEnum
from itertools import combinations
from typing import Iterable

from .card import Card, Rank


class HandRank(IntEnum):
    """Poker hand categories from lowest to highest."""

    HIGH_CARD = 0
    ONE_PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


@dataclass(frozen=True, slots=True, order=True)
class HandValue:
    """Comparable hand value for determining winners.

    Comparison works by:
    1. Category (pair beats high card, etc.)
    2. Tiebreak ranks, compared left to right

    Tiebreak layout per category:
        HIGH_CARD, FLUSH            five ranks, descending
        ONE_PAIR                    pair, then three kickers
        TWO_PAIR                    high pair, low pair, kicker
        THREE_OF_A_KIND             trips, then two kickers
        STRAIGHT, STRAIGHT_FLUSH    top card (5 for the wheel)
        FULL_HOUSE                  trips, pair
        FOUR_OF_A_KIND              quads, kicker
    """

    category: HandRank
    tiebreak: tuple[int, ...]

    def __str__(self) -> str:
        return str(self.category)

    def describe(self) -> str:
        """Readable summary, e.g. 'Full House, Aces over Kings'."""
        top = Rank(self.tiebreak[0])
        match self.category:
            case HandRank.HIGH_CARD:
                return f"High Card, {top.word}"
            case HandRank.ONE_PAIR:
                return f"One Pair, {top.plural}"
            case HandRank.TWO_PAIR:
                return f"Two Pair, {top.plural} and {Rank(self.tiebreak[1]).plural}"
            case HandRank.THREE_OF_A_KIND:
                return f"Three of a Kind, {top.plural}"
            case HandRank.STRAIGHT:
                return f"Straight, {top.word} high"
            case HandRank.FLUSH:
                return f"Flush, {top.word} high"
            case HandRank.FULL_HOUSE:
                return f"Full House, {top.plural} over {Rank(self.tiebreak[1]).plural}"
            case HandRank.FOUR_OF_A_KIND:
                return f"Four of a Kind, {top.plural}"
            case HandRank.STRAIGHT_FLUSH:
                if top == Rank.ACE:
                    return "Royal Flush"
                return f"Straight Flush, {top.word} high"
        return str(self.category)


@dataclass
class Hand:
    """A set of 5-7 cards with evaluation capabilities."""

    cards: list[Card]

    def __post_init__(self) -> None:
        if not 5 <= len(self.cards) <= 7:
            raise ValueError(f"Hand must have 5 to 7 cards, got {len(self.cards)}")
        if len(set(self.cards)) != len(self.cards):
            raise ValueError("Hand contains duplicate cards")

    def evaluate(self) -> HandValue:
        """Evaluate the best 5-card hand from available cards.

        For Texas Hold'em, this finds the best 5-card combination
        from up to 7 cards (2 hole + 5 community).
        """
        if len(self.cards) == 5:
            return _evaluate_five(self.cards)
        return max(_evaluate_five(list(five)) for five in combinations(self.cards, 5))

    @property
    def value(self) -> HandValue:
        """Shorthand for evaluate()."""
        return self.evaluate()


def evaluate_hand(cards: Iterable[Card]) -> HandValue:
    """Evaluate 5 to 7 cards into a comparable HandValue."""
    return Hand(cards=list(cards)).evaluate()


def _evaluate_five(cards: list[Card]) -> HandValue:
    """Evaluate exactly 5 cards."""
    ranks = sorted((c.rank.value for c in cards), reverse=True)
    rank_counts = Counter(ranks)

    is_flush = len({c.suit for c in cards}) == 1
    straight_high = _straight_high(ranks)

    # Straight flush (includes royal flush)
    if is_flush and straight_high:
        return HandValue(HandRank.STRAIGHT_FLUSH, (straight_high,))

    quads = _ranks_with_count(rank_counts, 4)
    trips = _ranks_with_count(rank_counts, 3)
    pairs = _ranks_with_count(rank_counts, 2)
    singles = _ranks_with_count(rank_counts, 1)

    if quads:
        return HandValue(HandRank.FOUR_OF_A_KIND, (quads[0], singles[0]))

    if trips and pairs:
        return HandValue(HandRank.FULL_HOUSE, (trips[0], pairs[0]))

    if is_flush:
        return HandValue(HandRank.FLUSH, tuple(ranks))

    if straight_high:
        return HandValue(HandRank.STRAIGHT, (straight_high,))

    if trips:
        return HandValue(HandRank.THREE_OF_A_KIND, (trips[0], *singles[:2]))

    if len(pairs) == 2:
        return HandValue(HandRank.TWO_PAIR, (pairs[0], pairs[1], singles[0]))

    if pairs:
        return HandValue(HandRank.ONE_PAIR, (pairs[0], *singles[:3]))

    return HandValue(HandRank.HIGH_CARD, tuple(ranks))


def _straight_high(ranks: list[int]) -> int:
    """Top card of a straight formed by five descending ranks, or 0."""
    if len(set(ranks)) != 5:
        return 0
    if ranks[0] - ranks[4] == 4:
        return ranks[0]
    # Wheel (A-2-3-4-5) - ace plays low
    if ranks == [14, 5, 4, 3, 2]:
        return 5
    return 0


def _ranks_with_count(counts: Counter[int], count: int) -> list[int]:
    """Rank values that appear exactly `count` times, sorted descending."""
    return sorted((r for r, c in counts.items() if c == count), reverse=True)
