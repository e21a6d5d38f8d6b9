"""Exception hierarchy for the tournament engine."""


class ChipstackError(Exception):
    """Base class for all engine errors."""


class ConfigurationError(ChipstackError, ValueError):
    """The tournament cannot be started with the given settings."""


class DeckExhausted(ChipstackError):
    """A card was requested from an empty deck."""


class InvariantViolation(ChipstackError, AssertionError):
    """Chip conservation or rank ordering no longer holds."""


class EngineStalled(ChipstackError, RuntimeError):
    """A street exceeded its action budget without completing."""


class TournamentCancelled(ChipstackError):
    """The tournament loop was asked to stop between actions."""
