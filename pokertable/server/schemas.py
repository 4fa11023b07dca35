"""
Pydantic schemas for API request/response validation.
"""

from typing import List, Optional
from pydantic import BaseModel, Field

from pokertable.core.rules import (
    DEFAULT_BIG_BLIND, DEFAULT_SEAT_COUNT, DEFAULT_SMALL_BLIND,
    DEFAULT_STARTING_STACK, MAX_PLAYERS, MIN_PLAYERS,
)


# ============= Request Schemas =============

class InitGameRequest(BaseModel):
    """Request to seat a new table."""
    seat_count: int = Field(ge=MIN_PLAYERS, le=MAX_PLAYERS, default=DEFAULT_SEAT_COUNT)
    small_blind: int = Field(gt=0, default=DEFAULT_SMALL_BLIND)
    big_blind: int = Field(gt=0, default=DEFAULT_BIG_BLIND)
    starting_stack: int = Field(gt=0, default=DEFAULT_STARTING_STACK)
    seed: Optional[int] = Field(default=None, description="Seed for shuffles and AI rolls")


class ActionRequest(BaseModel):
    """Request to take a game action."""
    action_type: str = Field(..., description="Action type: FOLD, CHECK, CALL, BET, RAISE")
    amount: Optional[int] = Field(default=0, ge=0, description="Street total for BET/RAISE actions")


# ============= Response Schemas =============

class CardSchema(BaseModel):
    """Card representation."""
    rank: str
    suit: str
    value: int
    text: str
    color: str


class SeatSchema(BaseModel):
    """One seat; hole cards are empty when hidden from the viewer."""
    seat_index: int
    name: str
    chips: int
    current_bet: int
    is_folded: bool
    is_all_in: bool
    is_dealer: bool
    has_acted: bool
    last_action: Optional[str] = None
    hole_cards: List[CardSchema] = []


class HandSchema(BaseModel):
    """An evaluated 5-card hand."""
    category: str
    name: str
    description: str
    tiebreak_score: int
    cards: List[str]


class WinnerSchema(BaseModel):
    """Winner information."""
    seat_index: int
    name: str
    amount_won: int
    hand: Optional[HandSchema] = None


class WinnerInfoSchema(BaseModel):
    """Outcome of a finished hand."""
    winners: List[WinnerSchema]
    pot: int
    showdown: bool


class GameStateSchema(BaseModel):
    """Table state as seen from the human seat."""
    phase: str
    hand_number: int
    pot: int
    total_pot: int
    current_bet: int
    small_blind: int
    big_blind: int
    community_cards: List[CardSchema]
    active_player_index: Optional[int] = None
    dealer_index: int
    available_actions: List[str]
    players: List[SeatSchema]
    winner_info: Optional[WinnerInfoSchema] = None
    human_seat: int


class ActionSchema(BaseModel):
    """Available action."""
    type: str
    amount: Optional[int] = None
    min: Optional[int] = None
    max: Optional[int] = None


class LegalActionsSchema(BaseModel):
    """Legal actions for the human seat; empty when it is not their turn."""
    actions: List[ActionSchema]
    message: Optional[str] = None


class ActionResultSchema(BaseModel):
    """Result of an action, with the table state after the bots have played."""
    success: bool
    message: str
    action_type: Optional[str] = None
    amount: int = 0
    state: GameStateSchema
