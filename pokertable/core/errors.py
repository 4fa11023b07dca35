"""
Exceptions raised by the poker engine.

Rejected player actions are not exceptions: they come back as a failed
ActionResult and leave the table untouched. The errors here signal
programming mistakes or broken engine invariants.
"""


class PokerError(Exception):
    """Base class for engine errors."""


class DeckEmptyError(PokerError, RuntimeError):
    """Raised when a card is dealt from an empty deck."""


class InvariantError(PokerError, RuntimeError):
    """Raised when a table invariant (e.g. chip conservation) is broken."""
