"""
pokertable - Texas Hold'em Table Engine

A single-table Texas Hold'em engine with:
- Pure Python betting state machine and hand evaluator
- Heuristic AI seats driven by explicit personalities
- A small FastAPI driver for playing against the AI seats

Usage:
    from pokertable.core import TexasHoldemGame, TableConfig
    from pokertable.agents import Personality, PolicyAgent, decide
"""

__version__ = "0.1.0"

from pokertable.core.card import Card, Deck
from pokertable.core.player import Player
from pokertable.core.game import TexasHoldemGame
from pokertable.core.hand import HandCategory, evaluate_hand
from pokertable.core.rules import ActionType, GamePhase, TableConfig

__all__ = [
    "Card",
    "Deck",
    "Player",
    "TexasHoldemGame",
    "HandCategory",
    "evaluate_hand",
    "ActionType",
    "GamePhase",
    "TableConfig",
    "__version__",
]
