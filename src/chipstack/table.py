"""Table state - deals hands and applies actions one at a time."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

from .action import Action, ActionType
from .betting import BettingRound, Street
from .blinds import BlindLevel
from .card import Card
from .deck import Deck
from .errors import InvariantViolation
from .evaluator import PlayerHand, evaluate_game, split_pot
from .events import PlayerSnapshot, TableSnapshot
from .hand import HandValue
from .player import DecisionContext, OpponentView, Player
from .position import Position, assign_positions
from .pot import PotManager, SidePot
from .ranking import Standings

logger = logging.getLogger(__name__)


@dataclass
class HandResult:
    """Outcome of a single hand."""

    hand_number: int
    pots: list[SidePot]
    pot_winners: list[tuple[SidePot, list[Player], HandValue | None]]
    community: list[Card]
    went_to_showdown: bool
    payouts: dict[str, int] = field(default_factory=dict)

    @property
    def winners(self) -> list[Player]:
        """Everyone who won a contested pot, in the order pots were awarded."""
        seen: list[Player] = []
        for pot, pot_winners, _ in self.pot_winners:
            if self.went_to_showdown and len(pot.eligible_players) == 1:
                continue
            for p in pot_winners:
                if all(p is not s for s in seen):
                    seen.append(p)
        return seen


@dataclass
class Table:
    """Seats, pot, board and the betting state of the current hand.

    The table exclusively owns its players. Between hands the chips on
    the table plus the pot always equal ``total_chips``.
    """

    players: list[Player]
    small_blind: int
    big_blind: int
    dealer_seat: int | None = None
    max_actions_per_street: int = 200
    rng: random.Random = field(default_factory=random.Random, repr=False)

    pot: PotManager = field(default_factory=PotManager)
    community: list[Card] = field(default_factory=list)
    street: Street = Street.COMPLETE
    deck: Deck | None = field(default=None, repr=False)
    hand_number: int = 0
    level: int = 1
    last_action: str | None = None
    betting: BettingRound | None = field(default=None, repr=False)
    total_chips: int = 0
    standings: Standings = field(init=False, repr=False)
    _positions: dict[int, Position] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        if len(self.players) < 2:
            raise ValueError("A table needs at least two players")
        if len({p.seat for p in self.players}) != len(self.players):
            raise ValueError("Seats must be unique")
        self.players.sort(key=lambda p: p.seat)
        self.total_chips = sum(p.chips for p in self.players)
        self.standings = Standings(self.players)
        if self.dealer_seat is None:
            self.dealer_seat = self.players[0].seat

    # ── Seating ──────────────────────────────────────────────

    @property
    def active_players(self) -> list[Player]:
        """Players not yet eliminated, in seat order."""
        return [p for p in self.players if not p.eliminated]

    @property
    def contenders(self) -> list[Player]:
        """Players still contesting the current pot."""
        return [p for p in self.players if p.is_in_hand]

    def seats_from_button(self) -> list[Player]:
        """Active players in dealing order; the button is last."""
        alive = self.active_players
        after = [p for p in alive if p.seat > self.dealer_seat]
        before = [p for p in alive if p.seat <= self.dealer_seat]
        return after + before

    def rotate_button(self) -> None:
        """Move the button to the next active seat clockwise."""
        order = self.seats_from_button()
        if order:
            self.dealer_seat = order[0].seat

    def set_blinds(self, level: BlindLevel) -> None:
        self.level = level.level
        self.small_blind = level.small_blind
        self.big_blind = level.big_blind

    # ── Hand lifecycle ───────────────────────────────────────

    def deal_cards(self) -> None:
        """Start a hand: fresh deck, hole cards, blinds, first actor."""
        order = self.seats_from_button()
        if len(order) < 2:
            raise InvariantViolation("Cannot deal a hand to fewer than two players")
        self.dealer_seat = order[-1].seat

        self.pot.reset()
        self.community = []
        self.last_action = None
        for p in self.players:
            p.reset_for_new_hand()

        self.deck = Deck.new_shuffled(self.rng)
        for p in order:
            p.hole_cards = self.deck.draw_many(2)
            p.hands_played += 1

        if len(order) == 2:
            # Heads-up: the button posts the small blind and acts first
            sb_player, bb_player = order[1], order[0]
            preflop_order = [sb_player, bb_player]
        else:
            sb_player, bb_player = order[0], order[1]
            preflop_order = order[2:] + order[:2]

        self._positions = assign_positions([p.seat for p in order])
        self.street = Street.PREFLOP
        self.betting = BettingRound(
            players=preflop_order,
            pot=self.pot,
            big_blind=self.big_blind,
            current_bet=self.big_blind,
            max_actions=self.max_actions_per_street,
        )

        self.pot.add(sb_player.pay(self.small_blind))
        self.pot.add(bb_player.pay(self.big_blind))
        self.last_action = (
            f"{sb_player.name} posts {sb_player.bet}, {bb_player.name} posts {bb_player.bet}"
        )
        logger.info(
            "Hand #%d: button %s, blinds %d/%d",
            self.hand_number, order[-1].name, self.small_blind, self.big_blind,
        )
        self._advance()

    @property
    def acting_player(self) -> Player | None:
        if self.is_hand_complete() or self.betting is None:
            return None
        return self.betting.next_to_act()

    @property
    def current_bet(self) -> int:
        return self.betting.current_bet if self.betting and self.street.is_betting else 0

    def is_hand_complete(self) -> bool:
        """True once betting is over: one contender left or showdown reached."""
        if self.street in (Street.SHOWDOWN, Street.COMPLETE):
            return True
        return len(self.contenders) <= 1

    def act(self, action: Action) -> str:
        """Apply ``action`` for the acting player and move the hand along."""
        player = self.acting_player
        if player is None:
            raise RuntimeError("No player is due to act")
        return self._apply(player, action)

    # Direct per-player operations. They bypass turn order, which the
    # loop never does, but tests and tools use them to set up spots.

    def fold(self, player: Player) -> str:
        """Fold ``player``; a folded player on zero chips is out at once."""
        return self._apply(player, Action.fold())

    def check(self, player: Player) -> str:
        return self._apply(player, Action.check())

    def call(self, player: Player) -> str:
        return self._apply(player, Action.call())

    def raise_to(self, player: Player, amount: int) -> str:
        return self._apply(player, Action.raise_to(amount))

    def _apply(self, player: Player, action: Action) -> str:
        if self.betting is None or not self.street.is_betting:
            raise RuntimeError("No betting round in progress")
        description = self.betting.apply(player, action)
        if action.type == ActionType.FOLD and player.chips == 0 and not player.eliminated:
            self.standings.eliminate(player)
        self.last_action = description
        self._advance()
        return description

    def _advance(self) -> None:
        """Close finished streets, dealing the board until action is needed."""
        assert self.betting is not None
        while self.street.is_betting and self.betting.is_complete():
            if len(self.contenders) <= 1:
                return
            for p in self.players:
                p.reset_for_new_street()
            self.street = self.street.next
            if self.street is Street.SHOWDOWN:
                logger.debug("Showdown between %s", ", ".join(p.name for p in self.contenders))
                return
            assert self.deck is not None
            self.community.extend(self.deck.draw_many(self.street.cards_dealt))
            logger.debug(
                "%s: %s", self.street.value.capitalize(), " ".join(str(c) for c in self.community)
            )
            self.betting = BettingRound(
                players=[p for p in self.seats_from_button() if p.is_in_hand],
                pot=self.pot,
                big_blind=self.big_blind,
                max_actions=self.max_actions_per_street,
            )

    def award_pot(self) -> HandResult:
        """Pay out the pot(s) once the hand is complete."""
        if not self.is_hand_complete():
            raise RuntimeError("Hand is still in progress")

        order = [p for p in self.seats_from_button() if p.is_in_hand]
        went_to_showdown = len(order) > 1
        payouts: dict[str, int] = {}
        pot_winners: list[tuple[SidePot, list[Player], HandValue | None]] = []
        side_pots = PotManager.calculate_side_pots(self.players)

        if not went_to_showdown:
            # Everyone else folded - last player takes everything
            if order:
                winner = order[0]
                amount = self.pot.take(self.pot.total)
                winner.win(amount)
                payouts[winner.id] = amount
                pot_winners.append(
                    (SidePot(amount=amount, eligible_players=[winner]), [winner], None)
                )
        else:
            for sp in side_pots:
                eligible = [p for p in order if any(p is e for e in sp.eligible_players)]
                if len(eligible) == 1:
                    winners, value = eligible, None
                else:
                    game = evaluate_game(
                        [PlayerHand(p.id, list(p.hole_cards)) for p in eligible],
                        self.community,
                    )
                    winning_ids = [w.player_id for w in game.winners]
                    winners = [p for p in eligible if p.id in winning_ids]
                    value = game.best_value
                for w, share in zip(winners, split_pot(sp.amount, len(winners))):
                    w.win(self.pot.take(share))
                    payouts[w.id] = payouts.get(w.id, 0) + share
                pot_winners.append((sp, winners, value))

        if self.pot.total != 0:
            raise InvariantViolation(f"{self.pot.total} chips left in the pot after payout")

        self.street = Street.COMPLETE
        result = HandResult(
            hand_number=self.hand_number,
            pots=side_pots,
            pot_winners=pot_winners,
            community=list(self.community),
            went_to_showdown=went_to_showdown,
            payouts=payouts,
        )
        for w in result.winners:
            w.hands_won += 1
        for player_id, amount in payouts.items():
            player = self._player_by_id(player_id)
            player.biggest_pot = max(player.biggest_pot, amount)
        for sp, winners, value in pot_winners:
            logger.info(
                "%s wins %d%s",
                " and ".join(w.name for w in winners),
                sp.amount,
                f" with {value.describe()}" if value else "",
            )
        return result

    def check_eliminations(self, result: HandResult) -> list[Player]:
        """Eliminate players left on zero chips who won nothing this hand."""
        order = self.seats_from_button()
        busted = sorted(
            (p for p in order if p.chips == 0),
            key=lambda p: (p.hand_contribution, order.index(p)),
        )
        return self.standings.eliminate_busted(busted, paid=set(result.payouts))

    def verify_chip_conservation(self) -> None:
        on_table = sum(p.chips for p in self.players) + self.pot.total
        if on_table != self.total_chips:
            raise InvariantViolation(
                f"Chip count drifted: {on_table} on the table, expected {self.total_chips}"
            )

    # ── Views ────────────────────────────────────────────────

    def position_of(self, player: Player) -> Position:
        return self._positions.get(player.seat, Position.UTG)

    def decision_context(self, player: Player) -> DecisionContext:
        """Build the read-only view a policy decides from."""
        assert self.betting is not None
        return DecisionContext(
            player_name=player.name,
            hole_cards=list(player.hole_cards),
            community=list(self.community),
            street=self.street.value,
            pot_total=self.pot.total,
            current_bet=self.betting.current_bet,
            to_call=self.betting.to_call(player),
            min_raise=self.betting.min_raise,
            chips=player.chips,
            bet=player.bet,
            big_blind=self.big_blind,
            position=self.position_of(player),
            num_active_players=len(self.contenders),
            opponents=[
                OpponentView(
                    name=p.name,
                    seat=p.seat,
                    chips=p.chips,
                    bet=p.bet,
                    folded=p.folded,
                    eliminated=p.eliminated,
                )
                for p in self.players
                if p is not player
            ],
            profile=player.profile,
        )

    def snapshot(
        self,
        hands_until_increase: int = 0,
        winners: list[Player] | None = None,
    ) -> TableSnapshot:
        acting = self.acting_player
        return TableSnapshot(
            players=tuple(PlayerSnapshot.from_player(p) for p in self.players),
            pot=self.pot.total,
            community=tuple(str(c) for c in self.community),
            current_bet=self.current_bet,
            acting_seat=acting.seat if acting else None,
            dealer_seat=self.dealer_seat,
            street=self.street.value,
            last_action=self.last_action,
            hand_number=self.hand_number,
            level=self.level,
            small_blind=self.small_blind,
            big_blind=self.big_blind,
            hands_until_increase=hands_until_increase,
            winners=tuple(PlayerSnapshot.from_player(p) for p in winners or []),
        )

    def _player_by_id(self, player_id: str) -> Player:
        for p in self.players:
            if p.id == player_id:
                return p
        raise KeyError(player_id)
