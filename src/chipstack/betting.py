"""Betting round state machine."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from .action import Action, ActionType
from .errors import EngineStalled
from .player import Player
from .pot import PotManager

logger = logging.getLogger(__name__)


class Street(Enum):
    """Stages of a hand, in order."""

    PREFLOP = "preflop"
    FLOP = "flop"
    TURN = "turn"
    RIVER = "river"
    SHOWDOWN = "showdown"
    COMPLETE = "complete"

    @property
    def next(self) -> Street:
        order = list(Street)
        if self is Street.COMPLETE:
            return self
        return order[order.index(self) + 1]

    @property
    def cards_dealt(self) -> int:
        """Community cards revealed when this street begins."""
        return {Street.FLOP: 3, Street.TURN: 1, Street.RIVER: 1}.get(self, 0)

    @property
    def is_betting(self) -> bool:
        return self in (Street.PREFLOP, Street.FLOP, Street.TURN, Street.RIVER)

    def __str__(self) -> str:
        return self.value


@dataclass
class BettingRound:
    """Runs a single betting round (one street), one action at a time.

    Players are in action order for this street. The round ends when
    every player who can still act has acted since the last full raise
    and matched the current bet. All-in players are exempt.

    Raises are raise-to totals. They are snapped to the nearest multiple
    of the big blind and floored at ``current_bet + big_blind``. An
    all-in for less than a full raise lifts the bet to call but does not
    let players who already acted raise again.
    """

    players: list[Player]
    pot: PotManager
    big_blind: int
    current_bet: int = 0
    max_actions: int = 200
    actions_taken: int = 0
    _acted: set[str] = field(default_factory=set, repr=False)
    _raise_closed: set[str] = field(default_factory=set, repr=False)
    _cursor: int = field(default=0, repr=False)

    @property
    def min_raise(self) -> int:
        """Smallest legal raise-to total."""
        return self.current_bet + self.big_blind

    def to_call(self, player: Player) -> int:
        return max(0, self.current_bet - player.bet)

    def is_complete(self) -> bool:
        """True once no further action is possible or required."""
        if sum(1 for p in self.players if p.is_in_hand) <= 1:
            return True
        actors = [p for p in self.players if p.can_act]
        if not actors:
            return True
        # A lone player with chips behind has nobody left to bet against
        if len(actors) == 1 and actors[0].bet >= self.current_bet:
            return True
        return not any(self._needs_action(p) for p in actors)

    def next_to_act(self) -> Player | None:
        """The player whose decision is pending, or None if the round is over."""
        if self.is_complete():
            return None
        n = len(self.players)
        for i in range(n):
            player = self.players[(self._cursor + i) % n]
            if self._needs_action(player):
                return player
        return None

    def can_raise(self, player: Player) -> bool:
        return player.id not in self._raise_closed

    def apply(self, player: Player, action: Action) -> str:
        """Apply an action for ``player`` and return its description.

        Illegal inputs are corrected rather than rejected: a check facing a
        bet becomes a call, a call with nothing owed becomes a check, and a
        raise from a player who may not re-raise becomes a call.
        """
        if self.actions_taken >= self.max_actions:
            raise EngineStalled(
                f"Street exceeded {self.max_actions} actions without completing"
            )
        self.actions_taken += 1

        kind = action.type
        owed = self.to_call(player)
        if kind == ActionType.CHECK and owed > 0:
            kind = ActionType.CALL
        elif kind == ActionType.CALL and owed == 0:
            kind = ActionType.CHECK
        elif kind in (ActionType.RAISE, ActionType.ALL_IN) and not self.can_raise(player):
            kind = ActionType.CALL if owed > 0 else ActionType.CHECK

        if kind == ActionType.FOLD:
            description = self.fold(player)
        elif kind == ActionType.CHECK:
            description = self.check(player)
        elif kind == ActionType.CALL:
            description = self.call(player)
        elif kind == ActionType.RAISE:
            description = self.raise_to(player, action.amount)
        else:
            description = self.all_in(player)

        self._acted.add(player.id)
        for i, p in enumerate(self.players):
            if p is player:
                self._cursor = (i + 1) % len(self.players)
        logger.debug(description)
        return description

    def fold(self, player: Player) -> str:
        player.fold()
        return f"{player.name} folds"

    def check(self, player: Player) -> str:
        if self.to_call(player) > 0:
            raise ValueError(f"{player.name} cannot check facing {self.to_call(player)}")
        return f"{player.name} checks"

    def call(self, player: Player) -> str:
        paid = player.pay(self.to_call(player))
        self.pot.add(paid)
        if player.chips == 0:
            return f"{player.name} calls {paid} and is all-in"
        return f"{player.name} calls {paid}"

    def raise_to(self, player: Player, amount: int) -> str:
        """Raise to ``amount`` after snapping and flooring it."""
        bb = self.big_blind
        target = (max(amount, 0) + bb // 2) // bb * bb
        target = max(target, self.min_raise)
        return self._raise(player, target)

    def all_in(self, player: Player) -> str:
        """Commit the whole stack; a call if it does not exceed the bet."""
        target = player.bet + player.chips
        if target <= self.current_bet:
            return self.call(player)
        return self._raise(player, target)

    def _raise(self, player: Player, target: int) -> str:
        previous_bet = self.current_bet
        needed = target - player.bet
        paid = player.pay(needed)
        self.pot.add(paid)

        if paid == needed:
            self.current_bet = target
        elif player.bet > previous_bet:
            self.current_bet = player.bet

        increment = self.current_bet - previous_bet
        if increment >= self.big_blind:
            # Full raise: everyone else must respond and may raise again
            self._acted = {player.id}
            self._raise_closed.clear()
        elif increment > 0:
            # Short all-in: callers may call the extra but not re-raise
            self._raise_closed |= self._acted

        if player.chips == 0:
            if increment == 0:
                return f"{player.name} calls {paid} and is all-in"
            return f"{player.name} raises to {player.bet} and is all-in"
        return f"{player.name} raises to {player.bet}"

    def _needs_action(self, player: Player) -> bool:
        return player.can_act and (
            player.id not in self._acted or player.bet < self.current_bet
        )
