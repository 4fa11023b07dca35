"""
Read-only views of the table.

The engine hands these out after every state change. They are frozen
copies: drivers, agents and the HTTP layer read them and never touch the
live Player objects.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from pokertable.core.card import Card
from pokertable.core.hand import HandResult
from pokertable.core.rules import ActionType, GamePhase, HAND_OVER_PHASES


@dataclass(frozen=True)
class SeatSnapshot:
    """Public and private state of one seat."""
    seat_index: int
    name: str
    chips: int
    hole_cards: Tuple[Card, ...]
    current_bet: int
    is_folded: bool
    is_all_in: bool
    is_dealer: bool
    has_acted: bool
    last_action: Optional[str] = None

    @property
    def can_act(self) -> bool:
        return not self.is_folded and not self.is_all_in and self.chips > 0

    def to_dict(self, hide_cards: bool = False) -> Dict[str, Any]:
        result = {
            "seat_index": self.seat_index,
            "name": self.name,
            "chips": self.chips,
            "current_bet": self.current_bet,
            "is_folded": self.is_folded,
            "is_all_in": self.is_all_in,
            "is_dealer": self.is_dealer,
            "has_acted": self.has_acted,
            "last_action": self.last_action,
            "hole_cards": [],
        }
        if not hide_cards:
            result["hole_cards"] = [c.to_dict() for c in self.hole_cards]
        return result


@dataclass(frozen=True)
class WinnerEntry:
    """One winner of a settled pot."""
    seat_index: int
    name: str
    amount_won: int
    hand: Optional[HandResult] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seat_index": self.seat_index,
            "name": self.name,
            "amount_won": self.amount_won,
            "hand": self.hand.to_dict() if self.hand else None,
        }


@dataclass(frozen=True)
class WinnerInfo:
    """Outcome of a finished hand."""
    winners: Tuple[WinnerEntry, ...]
    pot: int
    showdown: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "winners": [w.to_dict() for w in self.winners],
            "pot": self.pot,
            "showdown": self.showdown,
        }


@dataclass(frozen=True)
class TableSnapshot:
    """
    Everything a driver needs to render the table or pick an action.

    `pot` holds chips swept in from finished streets; wagers of the current
    street are still on each seat's `current_bet` (see `total_pot`).
    """
    phase: GamePhase
    hand_number: int
    pot: int
    current_bet: int
    small_blind: int
    big_blind: int
    community_cards: Tuple[Card, ...]
    active_player_index: Optional[int]
    dealer_index: int
    players: Tuple[SeatSnapshot, ...]
    available_actions: Tuple[ActionType, ...] = field(default_factory=tuple)
    winner_info: Optional[WinnerInfo] = None

    @property
    def total_pot(self) -> int:
        """Pot plus all street wagers not yet swept in."""
        return self.pot + sum(p.current_bet for p in self.players)

    @property
    def is_hand_over(self) -> bool:
        return self.phase in HAND_OVER_PHASES

    @property
    def active_player(self) -> Optional[SeatSnapshot]:
        if self.active_player_index is None:
            return None
        return self.players[self.active_player_index]

    def call_amount_for(self, seat_index: int) -> int:
        """Chips the seat must add to match the table bet (before stack cap)."""
        return max(0, self.current_bet - self.players[seat_index].current_bet)

    def to_dict(self, for_seat: Optional[int] = None) -> Dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Args:
            for_seat: If given, hide every other seat's hole cards until
                showdown
        """
        def hidden(p: SeatSnapshot) -> bool:
            if for_seat is None or p.seat_index == for_seat:
                return False
            # Contenders show their cards at showdown
            return not (self.phase == GamePhase.SHOWDOWN and not p.is_folded)

        return {
            "phase": self.phase.name,
            "hand_number": self.hand_number,
            "pot": self.pot,
            "total_pot": self.total_pot,
            "current_bet": self.current_bet,
            "small_blind": self.small_blind,
            "big_blind": self.big_blind,
            "community_cards": [c.to_dict() for c in self.community_cards],
            "active_player_index": self.active_player_index,
            "dealer_index": self.dealer_index,
            "available_actions": [a.value for a in self.available_actions],
            "players": [
                p.to_dict(hide_cards=hidden(p)) for p in self.players
            ],
            "winner_info": self.winner_info.to_dict() if self.winner_info else None,
        }
