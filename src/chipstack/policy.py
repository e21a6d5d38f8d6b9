"""Decision policies - pluggable per-seat strategies.

A policy is anything with ``decide(context) -> Action`` (or an awaitable
of one). The engine never trusts the answer: it normalizes illegal
actions and falls back to fold/check if the policy raises or stalls.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import random
from typing import Awaitable, Callable, Protocol

from .action import Action, fallback_action
from .config import StrategyProfile
from .errors import ConfigurationError
from .hand import HandRank, evaluate_hand
from .player import DecisionContext
from .position import Position
from .ranges import POSITION_RANGES, hole_cards_to_key, preflop_strength

logger = logging.getLogger(__name__)


class DecisionPolicy(Protocol):
    """Anything with a ``decide`` method returning an Action.

    ``decide`` may be a coroutine function; the tournament awaits it and
    the policy timeout applies. A plain ``decide`` is called inline on the
    event loop, so the timeout cannot interrupt it and it must not block.
    Wrap slow synchronous work in ``asyncio.to_thread`` from an async
    ``decide`` to keep it under the timeout.
    """

    def decide(self, context: DecisionContext) -> Action | Awaitable[Action]: ...


class PassivePolicy:
    """Never folds, never raises: checks or calls everything."""

    def decide(self, context: DecisionContext) -> Action:
        return Action.call() if context.facing_bet else Action.check()


class RandomPolicy:
    """Uniformly random legal-looking actions. Useful for fuzzing the engine."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def decide(self, context: DecisionContext) -> Action:
        roll = self._rng.random()
        if roll < 0.2:
            return Action.fold()
        if roll < 0.6:
            return Action.call() if context.facing_bet else Action.check()
        if roll < 0.9:
            bb = context.big_blind
            return Action.raise_to(context.min_raise + bb * self._rng.randint(0, 4))
        return Action.all_in()


# Made-hand strength for postflop play, indexed by category
_MADE_HAND_STRENGTH: dict[HandRank, float] = {
    HandRank.STRAIGHT_FLUSH: 0.95,
    HandRank.FOUR_OF_A_KIND: 0.9,
    HandRank.FULL_HOUSE: 0.8,
    HandRank.FLUSH: 0.7,
    HandRank.STRAIGHT: 0.65,
    HandRank.THREE_OF_A_KIND: 0.6,
    HandRank.TWO_PAIR: 0.4,
    HandRank.ONE_PAIR: 0.2,
}

VALUE_RAISE_THRESHOLD = 0.8
FOLD_THRESHOLD = 0.2


class ProfilePolicy:
    """Plays a :class:`StrategyProfile` persona.

    Strength comes from preflop range tiers or the made hand postflop and
    is scaled by ``1 + risk_tolerance``. Weak hands fold unless the
    persona is aggressive; strong ones raise; a bluff may fire at
    ``bluff_frequency`` whenever the stack covers three times the bet.
    """

    def __init__(self, profile: StrategyProfile | None = None, seed: int | None = None) -> None:
        self.profile = profile or StrategyProfile("Default")
        self._rng = random.Random(seed)

    def decide(self, context: DecisionContext) -> Action:
        profile = context.profile or self.profile
        strength = self.hand_strength(context)
        effective = strength * (1 + profile.risk_tolerance)

        if (
            self._rng.random() < profile.bluff_frequency
            and context.chips > context.current_bet * 3
        ):
            return Action.raise_to(self._bluff_size(context, profile))

        if effective >= VALUE_RAISE_THRESHOLD:
            target = context.current_bet + max(
                context.big_blind, int(context.pot_total * profile.risk_tolerance)
            )
            return Action.raise_to(min(target, context.max_raise))

        if effective < FOLD_THRESHOLD and profile.style != "aggressive":
            return Action.fold() if context.facing_bet else Action.check()

        return Action.call() if context.facing_bet else Action.check()

    def hand_strength(self, context: DecisionContext) -> float:
        """0..1 strength of the current holding."""
        if not context.community:
            return self._preflop_strength(context)
        value = evaluate_hand(context.hole_cards + context.community)
        if value.category == HandRank.HIGH_CARD:
            return min((value.tiebreak[0] - 2) / 12, 0.1)
        return _MADE_HAND_STRENGTH[value.category]

    def _preflop_strength(self, context: DecisionContext) -> float:
        first, second = context.hole_cards[:2]
        strength = preflop_strength(first, second)
        # Widen for short-handed tables like a button open
        position = Position.BTN if context.num_active_players <= 2 else context.position
        raise_range, call_range = POSITION_RANGES[position]
        key = hole_cards_to_key(first, second)
        if key in raise_range:
            strength += 0.1
        elif key in call_range:
            strength += 0.05
        return min(strength, 1.0)

    @staticmethod
    def _bluff_size(context: DecisionContext, profile: StrategyProfile) -> int:
        size = min(
            context.current_bet * 3,
            context.max_raise,
            int(context.pot_total * (profile.risk_tolerance + 0.5)),
        )
        return max(size, context.min_raise)


PolicyFactory = Callable[[StrategyProfile | None, int | None], DecisionPolicy]

POLICIES: dict[str, PolicyFactory] = {
    "passive": lambda profile, seed: PassivePolicy(),
    "random": lambda profile, seed: RandomPolicy(seed),
    "profile": lambda profile, seed: ProfilePolicy(profile, seed),
}


def make_policy(
    name: str, profile: StrategyProfile | None = None, seed: int | None = None
) -> DecisionPolicy:
    """Build a registered policy by name."""
    try:
        factory = POLICIES[name]
    except KeyError:
        known = ", ".join(sorted(POLICIES))
        raise ConfigurationError(f"Unknown policy {name!r} (known: {known})") from None
    return factory(profile, seed)


async def decide_with_fallback(
    policy: DecisionPolicy, context: DecisionContext, timeout: float | None
) -> Action:
    """Ask ``policy`` for an action, falling back to fold/check on failure.

    Exceptions and timeouts are logged and replaced by the fallback.
    Only awaitable decisions are bounded by ``timeout``.
    Cancellation is not caught.
    """
    try:
        decision = policy.decide(context)
        if inspect.isawaitable(decision):
            decision = await asyncio.wait_for(decision, timeout)
    except TimeoutError:
        logger.warning(
            "%s's policy timed out after %.1fs; using fallback", context.player_name, timeout
        )
        return fallback_action(context.to_call)
    except Exception:
        logger.warning("%s's policy failed; using fallback", context.player_name, exc_info=True)
        return fallback_action(context.to_call)

    if not isinstance(decision, Action):
        logger.warning(
            "%s's policy returned %r instead of an Action; using fallback",
            context.player_name, decision,
        )
        return fallback_action(context.to_call)
    return decision
