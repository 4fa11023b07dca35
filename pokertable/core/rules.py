"""
Texas Hold'em rules, table configuration and constants.

Seat arithmetic follows the table's fixed conventions:

1. The small blind sits one seat after the dealer, the big blind two seats
   after. Seats without chips are skipped, so heads-up the non-dealer posts
   the small blind and the dealer posts the big blind.

2. Pre-flop the first seat to act is three seats after the dealer (the seat
   after the big blind). Post-flop it is the first seat after the dealer
   that can still act.

3. The minimum bet or raise is to the table's current bet plus one big
   blind.

4. One pot per hand. All-in players compete for the whole pot; side pots
   are not split out.
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import List, Sequence


class GamePhase(Enum):
    """Phases of a Texas Hold'em hand."""
    WAITING = auto()      # No hand started yet
    DEALING = auto()      # Blinds and hole cards going out
    PREFLOP = auto()      # After hole cards dealt, before flop
    FLOP = auto()         # After 3 community cards
    TURN = auto()         # After 4th community card
    RIVER = auto()        # After 5th community card
    SHOWDOWN = auto()     # Hands compared, pot paid
    GAME_OVER = auto()    # Everyone but one folded, pot paid


class ActionType(Enum):
    """Possible player actions."""
    FOLD = "FOLD"
    CHECK = "CHECK"
    CALL = "CALL"
    BET = "BET"
    RAISE = "RAISE"


# Default game settings
DEFAULT_SMALL_BLIND = 10
DEFAULT_BIG_BLIND = 20
DEFAULT_STARTING_STACK = 1000
DEFAULT_SEAT_COUNT = 4
MIN_PLAYERS = 2
MAX_PLAYERS = 10

# Cards per phase
HOLE_CARDS = 2
FLOP_CARDS = 3
TURN_CARDS = 1
RIVER_CARDS = 1
TOTAL_COMMUNITY_CARDS = 5

# Hand evaluation
HAND_SIZE = 5  # Best 5-card hand

BETTING_PHASES = (GamePhase.PREFLOP, GamePhase.FLOP, GamePhase.TURN, GamePhase.RIVER)
HAND_OVER_PHASES = (GamePhase.SHOWDOWN, GamePhase.GAME_OVER)

NEXT_STREET = {
    GamePhase.PREFLOP: (GamePhase.FLOP, FLOP_CARDS),
    GamePhase.FLOP: (GamePhase.TURN, TURN_CARDS),
    GamePhase.TURN: (GamePhase.RIVER, RIVER_CARDS),
}


@dataclass(frozen=True)
class TableConfig:
    """Blinds and starting stack for a table."""
    small_blind: int = DEFAULT_SMALL_BLIND
    big_blind: int = DEFAULT_BIG_BLIND
    starting_stack: int = DEFAULT_STARTING_STACK

    def __post_init__(self) -> None:
        if self.small_blind <= 0 or self.big_blind <= 0:
            raise ValueError("Blinds must be positive")
        if self.small_blind > self.big_blind:
            raise ValueError("Small blind cannot exceed big blind")
        if self.starting_stack <= 0:
            raise ValueError("Starting stack must be positive")


def validate_seat_count(seat_count: int) -> None:
    """Raise ValueError unless 2 <= seat_count <= 10."""
    if seat_count < MIN_PLAYERS or seat_count > MAX_PLAYERS:
        raise ValueError(f"Number of players must be {MIN_PLAYERS}-{MAX_PLAYERS}")


def seat_after(seats: Sequence[int], position: int, offset: int) -> int:
    """
    Return the seat `offset` places after `position`, counting only `seats`.

    Args:
        seats: Sorted seat indices taking part in the hand
        position: A seat index contained in `seats`
        offset: How many seats to move clockwise

    Returns:
        Seat index
    """
    if not seats:
        raise ValueError("No seats in the hand")
    idx = list(seats).index(position)
    return seats[(idx + offset) % len(seats)]


def get_blind_positions(seats: Sequence[int], dealer_position: int) -> List[int]:
    """
    Calculate small blind and big blind seats.

    Args:
        seats: Sorted seat indices holding chips
        dealer_position: Seat of the dealer

    Returns:
        [small_blind_seat, big_blind_seat]
    """
    if len(seats) < MIN_PLAYERS:
        raise ValueError("Need at least 2 players")
    return [seat_after(seats, dealer_position, 1), seat_after(seats, dealer_position, 2)]


def get_first_to_act_preflop(seats: Sequence[int], dealer_position: int) -> int:
    """Seat three places after the dealer (skips both blinds)."""
    return seat_after(seats, dealer_position, 3)


def calculate_min_raise(current_bet: int, big_blind: int) -> int:
    """
    Calculate the minimum total a bet or raise must reach.

    Args:
        current_bet: Current highest bet in the round
        big_blind: Big blind amount

    Returns:
        Minimum total bet amount
    """
    return current_bet + big_blind
