"""
Player class for Texas Hold'em.

Manages per-seat state including:
- Stack (chip count)
- Hole cards
- Current bet in the street
- Folded / all-in / dealer flags
"""

from __future__ import annotations
from typing import List, Optional
from dataclasses import dataclass, field

from pokertable.core.card import Card
from pokertable.core.hand import HandResult


@dataclass
class Player:
    """
    A seat at the table.

    Attributes:
        name: Display name
        chips: Chips behind (not yet wagered)
        seat: Seat position at the table (0-indexed)
        hole_cards: The player's private cards (0 or 2)
        current_bet: Amount wagered in the current street
        is_folded: Out of the current hand
        is_all_in: Whole stack wagered, no more actions this hand
        is_dealer: Holds the dealer button this hand
        has_acted: Acted since the last bet/raise on this street
        hand: Last evaluated hand, set at showdown
    """
    name: str
    chips: int
    seat: int = 0
    hole_cards: List[Card] = field(default_factory=list)
    current_bet: int = 0
    is_folded: bool = False
    is_all_in: bool = False
    is_dealer: bool = False
    has_acted: bool = False
    hand: Optional[HandResult] = None
    # Track last action for display
    last_action: Optional[str] = None

    def reset_for_new_hand(self) -> None:
        """Reset player state for a new hand."""
        self.hole_cards = []
        self.current_bet = 0
        self.is_all_in = False
        self.is_dealer = False
        self.has_acted = False
        self.hand = None
        self.last_action = None
        # A busted seat sits the hand out
        self.is_folded = self.chips == 0

    def reset_for_new_round(self) -> None:
        """Reset player state for a new street (flop, turn, river)."""
        self.current_bet = 0
        self.has_acted = False

    def deal_cards(self, cards: List[Card]) -> None:
        """Deal hole cards to the player."""
        self.hole_cards = list(cards)

    def bet(self, amount: int) -> int:
        """
        Move chips from the stack into the current bet.

        Args:
            amount: Amount to wager

        Returns:
            Actual amount wagered (less than asked if the stack runs out)
        """
        if amount <= 0:
            return 0

        actual_amount = min(amount, self.chips)

        self.chips -= actual_amount
        self.current_bet += actual_amount

        if self.chips == 0:
            self.is_all_in = True

        return actual_amount

    def fold(self) -> None:
        """Fold the hand."""
        self.is_folded = True
        self.last_action = "FOLD"

    def check(self) -> None:
        """Check (pass without betting)."""
        self.last_action = "CHECK"

    def call(self, amount_to_call: int) -> int:
        """
        Call the current bet.

        Returns:
            Actual amount called (may be all-in)
        """
        actual = self.bet(amount_to_call)
        self.last_action = f"ALL-IN ${self.current_bet}" if self.is_all_in else f"CALL ${actual}"
        return actual

    def raise_to(self, total_amount: int) -> int:
        """
        Bet or raise to a street total.

        Args:
            total_amount: Target current_bet for this street

        Returns:
            Chips added by this action
        """
        actual = self.bet(total_amount - self.current_bet)
        if self.is_all_in:
            self.last_action = f"ALL-IN ${self.current_bet}"
        else:
            self.last_action = f"RAISE ${self.current_bet}"
        return actual

    @property
    def can_act(self) -> bool:
        """Check if player can take an action."""
        return not self.is_folded and not self.is_all_in and self.chips > 0

    @property
    def is_in_hand(self) -> bool:
        """Check if player is still contending for the pot."""
        return not self.is_folded

    def __repr__(self) -> str:
        return (
            f"Player({self.name}, chips={self.chips}, "
            f"bet={self.current_bet}, folded={self.is_folded}, all_in={self.is_all_in})"
        )

    def __str__(self) -> str:
        cards_str = " ".join(str(c) for c in self.hole_cards) if self.hole_cards else "??"
        return f"{self.name} [{cards_str}] ${self.chips}"
