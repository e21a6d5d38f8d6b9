"""Preflop starting-hand tiers used by the profile policy.

Hands are written as canonical keys:
  - Pairs:  "AA", "KK", ..., "22"
  - Suited: "AKs", "T9s" (higher rank first)
  - Offsuit: "AKo", "KQo"

Tiers are cumulative, so TIGHT is a superset of PREMIUM.
"""

from .card import Card, Rank
from .position import Position

_ORDER = "AKQJT98765432"


def hand_key(rank1: Rank, rank2: Rank, suited: bool) -> str:
    """Build a canonical key like 'AKs', '77', 'T9o'."""
    r1 = "T" if rank1 == Rank.TEN else rank1.symbol
    r2 = "T" if rank2 == Rank.TEN else rank2.symbol
    if _ORDER.index(r1) > _ORDER.index(r2):
        r1, r2 = r2, r1
    if r1 == r2:
        return r1 + r2
    return f"{r1}{r2}{'s' if suited else 'o'}"


def hole_cards_to_key(card1: Card, card2: Card) -> str:
    return hand_key(card1.rank, card2.rank, card1.suit == card2.suit)


# ── Tiers ───────────────────────────────────────────────────

PREMIUM: frozenset[str] = frozenset({
    "AA", "KK", "QQ", "JJ",
    "AKs", "AKo",
})

TIGHT: frozenset[str] = PREMIUM | {
    "TT", "99",
    "AQs", "AQo", "AJs",
    "KQs",
}

PLAYABLE: frozenset[str] = TIGHT | {
    "88", "77", "66",
    "ATs", "A9s", "A8s", "A5s", "A4s",
    "ATo",
    "KJs", "KTs",
    "QJs", "QTs",
    "JTs",
    "T9s", "98s", "87s",
}

WIDE: frozenset[str] = PLAYABLE | {
    "55", "44", "33", "22",
    "A7s", "A6s", "A3s", "A2s",
    "AJo",
    "KQo", "KJo", "KTo",
    "K9s", "K8s",
    "QJo", "QTo",
    "Q9s",
    "J9s", "JTo",
    "T8s",
    "97s", "86s", "76s", "65s", "54s",
}

# Tier -> strength estimate in [0, 1]; hands outside every tier score by rank.
_TIER_STRENGTH: tuple[tuple[frozenset[str], float], ...] = (
    (PREMIUM, 0.9),
    (TIGHT, 0.75),
    (PLAYABLE, 0.6),
    (WIDE, 0.45),
)


# Position -> (raise range, call range) when facing no raise beyond the blind
POSITION_RANGES: dict[Position, tuple[frozenset[str], frozenset[str]]] = {
    Position.UTG:   (TIGHT,    frozenset()),
    Position.UTG_1: (TIGHT,    frozenset()),
    Position.MP:    (PLAYABLE, frozenset()),
    Position.HJ:    (PLAYABLE, frozenset()),
    Position.CO:    (WIDE,     frozenset()),
    Position.BTN:   (WIDE,     frozenset()),
    Position.SB:    (PLAYABLE, TIGHT),
    Position.BB:    (TIGHT,    WIDE),
}


def preflop_strength(card1: Card, card2: Card) -> float:
    """Rough 0..1 strength of a starting hand."""
    key = hole_cards_to_key(card1, card2)
    for tier, strength in _TIER_STRENGTH:
        if key in tier:
            return strength
    high = max(card1.rank, card2.rank)
    return round(0.1 + 0.2 * (high - Rank.TWO) / (Rank.ACE - Rank.TWO), 3)
