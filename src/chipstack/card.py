"""Card representations for poker."""

from enum import IntEnum
from dataclasses import dataclass
from typing import Self


class Suit(IntEnum):
    """Card suits. Values don't affect poker hand ranking."""

    CLUBS = 0
    DIAMONDS = 1
    HEARTS = 2
    SPADES = 3

    @property
    def symbol(self) -> str:
        """Unicode symbol for the suit."""
        return _SUIT_SYMBOLS[self.value]

    def __str__(self) -> str:
        return self.symbol


_SUIT_SYMBOLS = ["♣", "♦", "♥", "♠"]

_SUIT_CHARS = {
    "C": Suit.CLUBS,
    "D": Suit.DIAMONDS,
    "H": Suit.HEARTS,
    "S": Suit.SPADES,
    "♣": Suit.CLUBS,
    "♦": Suit.DIAMONDS,
    "♥": Suit.HEARTS,
    "♠": Suit.SPADES,
}


class Rank(IntEnum):
    """Card ranks. Higher value = higher rank."""

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    @property
    def symbol(self) -> str:
        """Short symbol for the rank."""
        if self.value <= 10:
            return str(self.value)
        return {11: "J", 12: "Q", 13: "K", 14: "A"}[self.value]

    @property
    def word(self) -> str:
        """Spoken name used in hand descriptions ("Ace", "Six")."""
        return _RANK_WORDS[self.value]

    @property
    def plural(self) -> str:
        """Spoken plural ("Aces", "Sixes")."""
        return "Sixes" if self.value == 6 else f"{self.word}s"

    def __str__(self) -> str:
        return self.symbol


_RANK_WORDS = {
    2: "Two", 3: "Three", 4: "Four", 5: "Five", 6: "Six", 7: "Seven",
    8: "Eight", 9: "Nine", 10: "Ten", 11: "Jack", 12: "Queen", 13: "King",
    14: "Ace",
}

_RANK_CHARS = {r.symbol: r for r in Rank} | {"T": Rank.TEN}


@dataclass(frozen=True, slots=True)
class Card:
    """A playing card with rank and suit."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank.symbol}{self.suit.symbol}"

    def __repr__(self) -> str:
        return f"Card({self.rank.symbol}{self.suit.symbol})"

    @classmethod
    def from_str(cls, s: str) -> Self:
        """Parse a card from string like 'As', 'Kh', '10d', 'Tc' or 'Q♥'.

        Rank: 2-10, T, J, Q, K, A
        Suit: c(lubs), d(iamonds), h(earts), s(pades) or the suit symbol
        """
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        suit = _SUIT_CHARS.get(s[-1])
        if suit is None:
            raise ValueError(f"Invalid suit: {s[-1]}")

        rank = _RANK_CHARS.get(s[:-1])
        if rank is None:
            raise ValueError(f"Invalid rank: {s[:-1]}")

        return cls(rank=rank, suit=suit)


def full_deck() -> list[Card]:
    """All 52 cards in a fixed, unshuffled order."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


def card(s: str) -> Card:
    """Shorthand for Card.from_str()."""
    return Card.from_str(s)


def cards(s: str) -> list[Card]:
    """Parse space or comma separated cards, e.g. ``"As Kd, 10h"``."""
    return [card(part) for part in s.replace(",", " ").split() if part]
