"""Tournament loop - manages blinds, elimination, and game progression."""

from __future__ import annotations

import asyncio
import inspect
import logging
import random
from dataclasses import dataclass, field
from enum import Enum

from .blinds import BlindSchedule
from .config import TournamentConfig
from .errors import EngineStalled, TournamentCancelled
from .events import EventSink, EventType, TournamentEvent
from .player import Player
from .policy import DecisionPolicy, decide_with_fallback, make_policy
from .table import HandResult, Table

logger = logging.getLogger(__name__)

# Hands without a finish before we assume a policy loop and give up
MAX_HANDS = 100_000


class TournamentState(Enum):
    RUNNING = "running"
    COMPLETE = "complete"


def build_players(config: TournamentConfig) -> list[Player]:
    """Seat ``player_count`` players, naming them after their profiles."""
    players = []
    for seat in range(config.player_count):
        profile = config.profile_for_seat(seat)
        base = profile.name if profile else f"Player {seat + 1}"
        players.append(
            Player(name=base, chips=config.starting_chips, seat=seat, profile=profile)
        )
    # Profiles repeat past four seats; keep display names unique
    names = [p.name for p in players]
    for p in players:
        if names.count(p.name) > 1:
            p.name = f"{p.name} {p.seat + 1}"
    return players


@dataclass
class Tournament:
    """Plays hands until one player holds every chip.

    Each seat's policy is consulted one action at a time. Observers get
    a :class:`TournamentEvent` after every action and at each milestone
    through ``on_event``, which may be a plain function or a coroutine.
    """

    config: TournamentConfig = field(default_factory=TournamentConfig)
    players: list[Player] | None = None
    policies: dict[str, DecisionPolicy] | None = None
    on_event: EventSink | None = None

    state: TournamentState = field(default=TournamentState.RUNNING, init=False)
    table: Table = field(init=False, repr=False)
    schedule: BlindSchedule = field(init=False, repr=False)
    _stop_requested: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        self.config.validate()
        if self.players is None:
            self.players = build_players(self.config)
        rng = random.Random(self.config.seed)
        self.schedule = BlindSchedule(
            small_blind=self.config.small_blind,
            big_blind=self.config.big_blind,
            hands_per_level=self.config.hands_per_level,
            multiplier=self.config.blind_multiplier,
            levels=tuple(self.config.blind_levels),
        )
        self.table = Table(
            players=self.players,
            small_blind=self.config.small_blind,
            big_blind=self.config.big_blind,
            max_actions_per_street=self.config.max_actions_per_street,
            rng=rng,
        )
        policies = dict(self.policies or {})
        for p in self.players:
            if p.id not in policies:
                seed = None if self.config.seed is None else self.config.seed + p.seat
                policies[p.id] = make_policy(self.config.policy, p.profile, seed)
        self.policies = policies

    @property
    def hand_number(self) -> int:
        return self.table.hand_number

    def stop(self) -> None:
        """Ask the running loop to stop before the next action."""
        self._stop_requested = True

    def run(self) -> Player:
        """Run the tournament to completion. Returns the winner."""
        return asyncio.run(self.play())

    async def play(self) -> Player:
        table = self.table
        while len(table.active_players) > 1:
            if table.hand_number >= MAX_HANDS:
                raise EngineStalled(f"No winner after {MAX_HANDS} hands")
            await self._play_hand()

        winner = table.standings.crown(table.total_chips)
        self.state = TournamentState.COMPLETE
        await self._emit(
            EventType.TOURNAMENT_COMPLETE,
            f"{winner.name} wins the tournament",
            winners=table.standings.by_rank(),
        )
        return winner

    async def _play_hand(self) -> HandResult:
        table = self.table
        self._check_stop()
        table.hand_number += 1
        hand_number = table.hand_number

        level = self.schedule.level_for(hand_number)
        previous_level = table.level
        table.set_blinds(level)
        if level.level > previous_level:
            logger.info("Blinds up: %s", level)
            await self._emit(EventType.BLIND_LEVEL_UP, f"Blinds increase to {level}")

        table.deal_cards()
        await self._emit(EventType.GAME_STATE, f"Hand #{hand_number} dealt")

        while (player := table.acting_player) is not None:
            self._check_stop()
            if self.config.action_delay > 0:
                await asyncio.sleep(self.config.action_delay)
            context = table.decision_context(player)
            action = await decide_with_fallback(
                self.policies[player.id], context, self.config.policy_timeout
            )
            table.act(action)
            await self._emit(EventType.GAME_STATE, table.last_action or "")

        result = table.award_pot()
        for busted in table.check_eliminations(result):
            await self._emit(EventType.ELIMINATION, f"{busted.name} is eliminated")

        table.rotate_button()
        table.verify_chip_conservation()
        await self._emit(
            EventType.HAND_COMPLETE,
            f"Hand #{hand_number} complete",
            winners=result.winners,
        )
        return result

    def _check_stop(self) -> None:
        if self._stop_requested:
            logger.info("Tournament stopped at hand #%d", self.table.hand_number)
            raise TournamentCancelled(f"Stopped during hand #{self.table.hand_number}")

    async def _emit(
        self, kind: EventType, message: str, winners: list[Player] | None = None
    ) -> None:
        if self.on_event is None:
            return
        hand = max(self.table.hand_number, 1)
        snapshot = self.table.snapshot(
            hands_until_increase=self.schedule.hands_until_increase(hand),
            winners=winners,
        )
        outcome = self.on_event(TournamentEvent(kind, snapshot, message))
        if inspect.isawaitable(outcome):
            await outcome
