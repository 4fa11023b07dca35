"""
pokertable Core - Pure Python Texas Hold'em Engine

This module contains all table logic without any network dependencies.
"""

from pokertable.core.card import Card, Deck, Rank, Suit
from pokertable.core.errors import PokerError, DeckEmptyError, InvariantError
from pokertable.core.player import Player
from pokertable.core.hand import HandCategory, HandResult, evaluate_hand, compare_hands
from pokertable.core.rules import GamePhase, ActionType, TableConfig
from pokertable.core.snapshot import TableSnapshot, SeatSnapshot, WinnerInfo, WinnerEntry
from pokertable.core.game import TexasHoldemGame, ActionResult

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "PokerError",
    "DeckEmptyError",
    "InvariantError",
    "Player",
    "HandCategory",
    "HandResult",
    "evaluate_hand",
    "compare_hands",
    "GamePhase",
    "ActionType",
    "TableConfig",
    "TableSnapshot",
    "SeatSnapshot",
    "WinnerInfo",
    "WinnerEntry",
    "TexasHoldemGame",
    "ActionResult",
]
