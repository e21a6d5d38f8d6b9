"""Table position representation for poker."""

from enum import IntEnum


class Position(IntEnum):
    """Player positions at a poker table, ordered by preflop action.

    UTG acts first preflop; BB acts last. Postflop order reverses
    (blinds act first, button last), but the enum value reflects
    preflop seating distance from UTG.
    """

    UTG = 0
    UTG_1 = 1
    MP = 2
    HJ = 3
    CO = 4
    BTN = 5
    SB = 6
    BB = 7

    @property
    def short(self) -> str:
        """Short abbreviation (e.g. 'UTG', 'BTN')."""
        return "UTG+1" if self is Position.UTG_1 else self.name

    @property
    def is_early(self) -> bool:
        return self in (Position.UTG, Position.UTG_1)

    @property
    def is_late(self) -> bool:
        return self in (Position.CO, Position.BTN)

    @property
    def is_blind(self) -> bool:
        return self in (Position.SB, Position.BB)


def position_from_utg_distance(utg_distance: int, total_players: int) -> Position:
    """Map a seat's UTG distance to a named Position.

    The mapping works backward from the blinds: the last seat is always BB,
    second-to-last is SB, then BTN, CO, HJ. Remaining early seats compress
    into UTG / UTG+1 / MP.
    """
    if utg_distance < 0 or utg_distance >= total_players:
        raise ValueError(
            f"utg_distance must be 0..{total_players - 1}, got {utg_distance}"
        )

    from_end = total_players - 1 - utg_distance
    by_distance_from_end = [Position.BB, Position.SB, Position.BTN, Position.CO, Position.HJ]
    if from_end < len(by_distance_from_end):
        return by_distance_from_end[from_end]

    # Early positions
    if utg_distance == 0:
        return Position.UTG
    if utg_distance == 1:
        return Position.UTG_1
    return Position.MP


def assign_positions(seats_after_button: list[int]) -> dict[int, Position]:
    """Label seats given in dealing order (first seat left of the button).

    The button is the last seat in the list. Heads-up, the button posts
    the small blind, so it is labelled BTN and the other seat BB.
    """
    n = len(seats_after_button)
    if n == 2:
        return {seats_after_button[1]: Position.BTN, seats_after_button[0]: Position.BB}

    positions: dict[int, Position] = {}
    # Preflop order starts after the two blinds
    preflop = seats_after_button[2:] + seats_after_button[:2]
    for utg_distance, seat in enumerate(preflop):
        positions[seat] = position_from_utg_distance(utg_distance, n)
    return positions
