"""
Heuristic decision policy for AI seats.

The policy is a pure function of a table snapshot, a seat and a
personality. It estimates hand strength, compares it with the pot odds,
occasionally bluffs, and always answers with one of the actions the engine
listed as legal.

Usage:
    decision = decide(game.snapshot(), seat_index=2,
                      personality=Personality.tight_aggressive(),
                      rng=random.Random(7))
    game.player_action(decision.action, decision.amount)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple
import logging
import random

from pokertable.core.card import Card
from pokertable.core.hand import HandCategory, TIEBREAK_SPAN, evaluate_hand
from pokertable.core.rules import ActionType, GamePhase, HAND_SIZE
from pokertable.core.snapshot import SeatSnapshot, TableSnapshot


logger = logging.getLogger(__name__)

# Strength band per category; the tiebreak score places a hand inside its band
CATEGORY_STRENGTH_BANDS: Dict[HandCategory, Tuple[float, float]] = {
    HandCategory.HIGH_CARD: (0.00, 0.20),
    HandCategory.ONE_PAIR: (0.20, 0.50),
    HandCategory.TWO_PAIR: (0.50, 0.65),
    HandCategory.THREE_OF_A_KIND: (0.65, 0.75),
    HandCategory.STRAIGHT: (0.75, 0.82),
    HandCategory.FLUSH: (0.82, 0.88),
    HandCategory.FULL_HOUSE: (0.88, 0.94),
    HandCategory.FOUR_OF_A_KIND: (0.94, 0.98),
    HandCategory.STRAIGHT_FLUSH: (0.98, 1.00),
}

VALUE_BET_THRESHOLD = 0.6
STRONG_HAND_THRESHOLD = 0.8
# Share of the pot bet by a personality with aggressiveness 0.5
BASE_POT_FRACTION = 0.5
CHIP_UNIT = 10

FALLBACK_ORDER = (ActionType.CALL, ActionType.CHECK, ActionType.FOLD)


@dataclass(frozen=True)
class Personality:
    """
    Playing style of an AI seat.

    Attributes:
        name: Display name of the style
        aggressiveness: 0 = passive, 1 = aggressive
        bluff_frequency: Chance of bluffing on a post-flop decision
    """
    name: str
    aggressiveness: float = 0.5
    bluff_frequency: float = 0.1

    def __post_init__(self) -> None:
        for field_name in ("aggressiveness", "bluff_frequency"):
            value = getattr(self, field_name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{field_name} must be in [0, 1], got {value}")

    @classmethod
    def tight_passive(cls) -> Personality:
        return cls("Tight Passive", aggressiveness=0.2, bluff_frequency=0.05)

    @classmethod
    def tight_aggressive(cls) -> Personality:
        return cls("Tight Aggressive", aggressiveness=0.8, bluff_frequency=0.1)

    @classmethod
    def loose_passive(cls) -> Personality:
        return cls("Loose Passive", aggressiveness=0.3, bluff_frequency=0.15)

    @classmethod
    def loose_aggressive(cls) -> Personality:
        return cls("Loose Aggressive", aggressiveness=0.9, bluff_frequency=0.2)

    @classmethod
    def unpredictable(cls) -> Personality:
        return cls("Unpredictable", aggressiveness=0.5, bluff_frequency=0.3)


@dataclass(frozen=True)
class Decision:
    """An action chosen by a policy, with the street total for BET/RAISE."""
    action: ActionType
    amount: int = 0

    def to_dict(self) -> dict:
        return {"action": self.action.value, "amount": self.amount}


def hand_strength(hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> float:
    """
    Estimate hand strength in [0, 1].

    With at least 5 cards visible the evaluated (category, tiebreak) pair is
    mapped through CATEGORY_STRENGTH_BANDS. Before the flop only the hole
    cards are scored.
    """
    if len(hole_cards) < 2:
        return 0.0
    if len(hole_cards) + len(community_cards) < HAND_SIZE:
        return preflop_strength(hole_cards)

    result = evaluate_hand(hole_cards, community_cards)
    low, high = CATEGORY_STRENGTH_BANDS[result.category]
    return low + (high - low) * (result.tiebreak_score / TIEBREAK_SPAN)


def preflop_strength(hole_cards: Sequence[Card]) -> float:
    """Score two hole cards on high cards, pairs, suitedness and connectedness."""
    card1, card2 = hole_cards[0], hole_cards[1]

    # 0.0 for the lowest two ranks, 0.4 for two aces
    strength = 0.4 * (card1.value + card2.value - 4) / 24

    if card1.value == card2.value:
        strength += 0.3 + 0.2 * (card1.value - 2) / 12

    if card1.suit == card2.suit:
        strength += 0.05

    if abs(card1.value - card2.value) == 1:
        strength += 0.05

    return min(strength, 1.0)


def pot_odds(call_amount: int, pot_total: int) -> float:
    """Cost of calling relative to the pot after the call; 0 if nothing to call."""
    if call_amount <= 0:
        return 0.0
    return call_amount / (pot_total + call_amount)


def wager_amount(snapshot: TableSnapshot, seat: SeatSnapshot, personality: Personality) -> int:
    """
    Street total for a bet or raise.

    The added wager is a pot fraction scaled by aggressiveness, floored at
    the big blind, rounded to the nearest 10 chips and capped at the
    seat's stack.
    """
    fraction = BASE_POT_FRACTION * (0.5 + personality.aggressiveness)
    size = max(snapshot.total_pot * fraction, snapshot.big_blind)
    size = int(size / CHIP_UNIT + 0.5) * CHIP_UNIT
    return min(snapshot.current_bet + size, seat.current_bet + seat.chips)


def decide(
    snapshot: TableSnapshot,
    seat_index: int,
    personality: Personality,
    rng: Optional[random.Random] = None,
) -> Decision:
    """
    Choose an action for a seat.

    Args:
        snapshot: Table state, including the legal actions for the seat
        seat_index: The seat deciding (normally the active seat)
        personality: Playing style
        rng: Random source for bluff and aggression rolls

    Returns:
        A Decision whose action is always in snapshot.available_actions

    Raises:
        ValueError: If the snapshot lists no legal actions
    """
    available = list(snapshot.available_actions)
    if not available:
        raise ValueError("No legal actions to choose from")
    rng = rng if rng is not None else random.Random()

    seat = snapshot.players[seat_index]
    strength = hand_strength(seat.hole_cards, snapshot.community_cards)
    call_amount = min(snapshot.call_amount_for(seat_index), seat.chips)
    odds = pot_odds(call_amount, snapshot.total_pot)

    decision = None
    if snapshot.phase != GamePhase.PREFLOP and rng.random() < personality.bluff_frequency:
        aggressive = next((a for a in (ActionType.RAISE, ActionType.BET) if a in available), None)
        if aggressive is not None:
            decision = Decision(aggressive, wager_amount(snapshot, seat, personality))

    if decision is None:
        if snapshot.call_amount_for(seat_index) == 0:
            if strength >= VALUE_BET_THRESHOLD or rng.random() < personality.aggressiveness:
                decision = Decision(ActionType.BET, wager_amount(snapshot, seat, personality))
            else:
                decision = Decision(ActionType.CHECK)
        elif strength >= STRONG_HAND_THRESHOLD:
            decision = Decision(ActionType.RAISE, wager_amount(snapshot, seat, personality))
        elif strength > odds:
            decision = Decision(ActionType.CALL, call_amount)
        else:
            decision = Decision(ActionType.FOLD)

    decision = _validate(decision, available, call_amount)
    logger.debug(
        f"{seat.name} ({personality.name}): strength={strength:.2f} "
        f"odds={odds:.2f} -> {decision.action.value} {decision.amount}"
    )
    return decision


def _validate(decision: Decision, available: Sequence[ActionType], call_amount: int) -> Decision:
    """Swap an illegal choice for CALL, then CHECK, then FOLD."""
    if decision.action in available:
        return decision
    for fallback in FALLBACK_ORDER:
        if fallback in available:
            return Decision(fallback, call_amount if fallback == ActionType.CALL else 0)
    return Decision(available[0])
