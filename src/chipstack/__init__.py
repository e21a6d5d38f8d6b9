"""Chipstack - No-Limit Texas Hold'em tournament engine."""

__version__ = "0.1.0"

from .action import Action, ActionType
from .betting import BettingRound, Street
from .blinds import BlindLevel, BlindSchedule
from .card import Card, Rank, Suit, card, cards
from .config import Config, StrategyProfile, TournamentConfig
from .deck import Deck
from .errors import (
    ChipstackError,
    ConfigurationError,
    DeckExhausted,
    EngineStalled,
    InvariantViolation,
    TournamentCancelled,
)
from .evaluator import GameResult, PlayerHand, compare_hands, evaluate_game, split_pot
from .events import EventType, PlayerSnapshot, TableSnapshot, TournamentEvent
from .hand import Hand, HandRank, HandValue, evaluate_hand
from .player import DecisionContext, OpponentView, Player
from .policy import DecisionPolicy, PassivePolicy, ProfilePolicy, RandomPolicy, make_policy
from .position import Position
from .pot import PotManager, SidePot
from .ranking import Standings, verify_ranks
from .table import HandResult, Table
from .tournament import Tournament

__all__ = [
    "Action",
    "ActionType",
    "BettingRound",
    "BlindLevel",
    "BlindSchedule",
    "Card",
    "ChipstackError",
    "Config",
    "ConfigurationError",
    "DecisionContext",
    "DecisionPolicy",
    "Deck",
    "DeckExhausted",
    "EngineStalled",
    "EventType",
    "GameResult",
    "Hand",
    "HandRank",
    "HandResult",
    "HandValue",
    "InvariantViolation",
    "OpponentView",
    "PassivePolicy",
    "Player",
    "PlayerHand",
    "PlayerSnapshot",
    "Position",
    "PotManager",
    "ProfilePolicy",
    "RandomPolicy",
    "Rank",
    "SidePot",
    "Standings",
    "StrategyProfile",
    "Street",
    "Suit",
    "Table",
    "TableSnapshot",
    "Tournament",
    "TournamentCancelled",
    "TournamentConfig",
    "TournamentEvent",
    "card",
    "cards",
    "compare_hands",
    "evaluate_game",
    "evaluate_hand",
    "make_policy",
    "split_pot",
    "verify_ranks",
]
