"""Deck of cards for a single hand."""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from .card import Card, full_deck
from .errors import DeckExhausted


@dataclass
class Deck:
    """A standard 52-card deck, drawn from the end of ``cards``.

    A deck is built fresh for every hand and never refilled, so no card
    can come out of the same instance twice.
    """

    cards: list[Card] = field(default_factory=full_deck)
    _drawn: int = field(default=0, repr=False)

    @classmethod
    def new_shuffled(cls, rng: random.Random | None = None) -> Deck:
        """Build a full deck in uniformly random order."""
        deck = cls()
        deck.shuffle(rng)
        return deck

    def shuffle(self, rng: random.Random | None = None) -> None:
        """Shuffle the remaining cards."""
        (rng or random).shuffle(self.cards)

    def draw(self) -> Card:
        """Draw a single card."""
        if not self.cards:
            raise DeckExhausted(f"Deck exhausted after {self._drawn} cards")
        self._drawn += 1
        return self.cards.pop()

    def draw_many(self, n: int) -> list[Card]:
        """Draw up to ``n`` cards, fewer only if the deck runs out."""
        n = min(n, len(self.cards))
        return [self.draw() for _ in range(n)]

    @property
    def drawn(self) -> int:
        """How many cards have left this deck."""
        return self._drawn

    def __len__(self) -> int:
        return len(self.cards)
