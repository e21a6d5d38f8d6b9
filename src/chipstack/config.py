"""Tournament configuration and strategy profiles."""

import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Self

from .errors import ConfigurationError

MAX_PLAYERS = 10
DECK_SIZE = 52
COMMUNITY_CARDS = 5


@dataclass(frozen=True)
class StrategyProfile:
    """A named play-style handed to a player's decision policy.

    Attributes:
        name: Display name of the persona.
        style: One of "aggressive", "conservative", "balanced",
            "unpredictable".
        risk_tolerance: 0 = nit, 1 = gambler. Scales hand strength.
        bluff_frequency: Probability of raising regardless of strength.
        description: One-line summary of the persona.
    """

    name: str
    style: str = "balanced"
    risk_tolerance: float = 0.5
    bluff_frequency: float = 0.25
    description: str = ""


DEFAULT_PROFILES: list[StrategyProfile] = [
    StrategyProfile(
        "The Shark", "aggressive", 0.8, 0.4,
        "Aggressive player who loves to raise and put pressure on opponents",
    ),
    StrategyProfile(
        "The Rock", "conservative", 0.2, 0.1,
        "Tight player who only plays premium hands",
    ),
    StrategyProfile(
        "The Pro", "balanced", 0.5, 0.25,
        "Well-rounded player who adapts to the situation",
    ),
    StrategyProfile(
        "The Wild Card", "unpredictable", 0.6, 0.6,
        "Unpredictable player who keeps opponents guessing",
    ),
]


@dataclass
class TournamentConfig:
    """Configuration for a tournament.

    Attributes:
        player_count: Seats at the table (2-10).
        starting_chips: Stack each player starts with.
        small_blind: Small blind at level 1.
        big_blind: Big blind at level 1.
        hands_per_level: Hands played before the blinds go up.
        blind_multiplier: Factor applied to both blinds at each new level.
        blind_levels: Explicit (small, big) pairs, one per level, used
            instead of the multiplier. The last pair repeats.
        policy: Registered decision policy name for every seat.
        policy_timeout: Seconds to wait for a decision, None to wait forever.
        action_delay: Pause after each emitted event, 0 disables pacing.
        max_actions_per_street: Guard against policies that never let a
            street finish.
        seed: Seeds the deck and the policies for reproducible runs.
        profiles: Personas assigned to seats round-robin.
    """

    player_count: int = 4
    starting_chips: int = 1000
    small_blind: int = 10
    big_blind: int = 20
    hands_per_level: int = 10
    blind_multiplier: int = 2
    blind_levels: list[tuple[int, int]] = field(default_factory=list)
    policy: str = "profile"
    policy_timeout: float | None = 5.0
    action_delay: float = 0.0
    max_actions_per_street: int = 200
    seed: int | None = None
    profiles: list[StrategyProfile] = field(
        default_factory=lambda: list(DEFAULT_PROFILES)
    )

    @property
    def total_chips(self) -> int:
        return self.player_count * self.starting_chips

    def profile_for_seat(self, seat: int) -> StrategyProfile | None:
        if not self.profiles:
            return None
        return self.profiles[seat % len(self.profiles)]

    def validate(self) -> None:
        """Reject settings the engine cannot run. Raises ConfigurationError."""
        if not 2 <= self.player_count <= MAX_PLAYERS:
            raise ConfigurationError(
                f"player_count must be 2..{MAX_PLAYERS}, got {self.player_count}"
            )
        if 2 * self.player_count + COMMUNITY_CARDS > DECK_SIZE:
            raise ConfigurationError(
                f"{self.player_count} players need more cards than one deck holds"
            )
        if self.starting_chips <= 0:
            raise ConfigurationError("starting_chips must be positive")
        if not 0 < self.small_blind <= self.big_blind:
            raise ConfigurationError(
                f"blinds must satisfy 0 < small <= big, got {self.small_blind}/{self.big_blind}"
            )
        if self.hands_per_level < 1:
            raise ConfigurationError("hands_per_level must be at least 1")
        if self.blind_multiplier < 1:
            raise ConfigurationError("blind_multiplier must be at least 1")
        for number, (small, big) in enumerate(self.blind_levels, start=1):
            if not 0 < small <= big:
                raise ConfigurationError(
                    f"blind level {number} must satisfy 0 < small <= big, got {small}/{big}"
                )
        if self.max_actions_per_street < 1:
            raise ConfigurationError("max_actions_per_street must be at least 1")
        if self.action_delay < 0:
            raise ConfigurationError("action_delay cannot be negative")
        if self.policy_timeout is not None and self.policy_timeout <= 0:
            raise ConfigurationError("policy_timeout must be positive or None")


@dataclass
class Config:
    """Application configuration."""

    tournament: TournamentConfig = field(default_factory=TournamentConfig)

    @classmethod
    def load(cls) -> Self:
        """Load config from file, falling back to defaults."""
        config_paths = [
            Path.cwd() / "chipstack.toml",
            Path.cwd() / ".chipstack.toml",
            Path.home() / ".config" / "chipstack" / "config.toml",
            Path.home() / ".chipstack.toml",
        ]

        for path in config_paths:
            if path.exists():
                return cls.from_file(path)

        return cls()

    @classmethod
    def from_file(cls, path: Path) -> Self:
        """Load config from a TOML file."""
        with open(path, "rb") as f:
            data = tomllib.load(f)
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        known = {f.name for f in fields(TournamentConfig)} - {"profiles", "blind_levels"}
        section = data.get("tournament", {})
        unknown = set(section) - known
        if unknown:
            raise ConfigurationError(
                f"Unknown [tournament] keys: {', '.join(sorted(unknown))}"
            )
        tournament = TournamentConfig(**section)

        if "profiles" in data:
            try:
                tournament.profiles = [StrategyProfile(**p) for p in data["profiles"]]
            except TypeError as e:
                raise ConfigurationError(f"Invalid [[profiles]] entry: {e}") from e

        if "blind_levels" in data:
            try:
                tournament.blind_levels = [
                    (int(level["small_blind"]), int(level["big_blind"]))
                    for level in data["blind_levels"]
                ]
            except (KeyError, TypeError, ValueError) as e:
                raise ConfigurationError(f"Invalid [[blind_levels]] entry: {e!r}") from e

        tournament.validate()
        return cls(tournament=tournament)


# Global config instance (loaded lazily)
_config: Config | None = None


def get_config() -> Config:
    """Get the global config instance."""
    global _config
    if _config is None:
        _config = Config.load()
    return _config
