"""
Card and Deck classes for Texas Hold'em.

A card carries its rank value directly (2-14, ace high) so the hand
evaluator can do arithmetic on it. The deck takes an injectable random
source so tests can replay the exact same shuffle.
"""

from __future__ import annotations
import random
from dataclasses import dataclass
from typing import List, Optional
from enum import Enum, IntEnum

from pokertable.core.errors import DeckEmptyError


class Suit(Enum):
    """Card suits."""
    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"


class Rank(IntEnum):
    """Card ranks; the integer value is the card's value (2-14)."""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


SUIT_SYMBOLS = {
    Suit.CLUBS: "♣",
    Suit.DIAMONDS: "♦",
    Suit.HEARTS: "♥",
    Suit.SPADES: "♠",
}

SUIT_CHARS = {
    Suit.CLUBS: "c",
    Suit.DIAMONDS: "d",
    Suit.HEARTS: "h",
    Suit.SPADES: "s",
}

RANK_LABELS = {
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "10",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
    Rank.ACE: "A",
}

# Reverse mappings
LABEL_TO_RANK = {v: k for k, v in RANK_LABELS.items()}
LABEL_TO_RANK["T"] = Rank.TEN  # Also accept "T"
CHAR_TO_SUIT = {v: k for k, v in SUIT_CHARS.items()}
SYMBOL_TO_SUIT = {v: k for k, v in SUIT_SYMBOLS.items()}

DECK_SIZE = 52


def rank_value(label: str) -> int:
    """
    Map a rank label to its value.

    Numeric ranks parse directly; J=11, Q=12, K=13, A=14.
    """
    label = label.strip().upper()
    if label not in LABEL_TO_RANK:
        raise ValueError(f"Invalid rank: {label}")
    return int(LABEL_TO_RANK[label])


@dataclass(frozen=True)
class Card:
    """
    An immutable playing card.

    Cards can be created from:
    - Rank and Suit enums: Card(Rank.ACE, Suit.SPADES)
    - String notation: Card.from_string("As"), Card.from_string("10♥")
    """

    rank: Rank
    suit: Suit

    def __post_init__(self) -> None:
        # Coerce plain ints/strings so Card(14, "spades") also works
        object.__setattr__(self, "rank", Rank(self.rank))
        object.__setattr__(self, "suit", Suit(self.suit))

    @classmethod
    def from_string(cls, s: str) -> Card:
        """
        Create a card from string notation.

        Accepts formats:
        - "As", "Kh", "Td", "10d", "2c" (rank + suit char)
        - "A♠", "K♥", "10♦", "2♣" (rank + suit symbol)
        """
        s = s.strip()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_part, suit_part = s[:-1], s[-1]
        rank = Rank(rank_value(rank_part))

        if suit_part.lower() in CHAR_TO_SUIT:
            suit = CHAR_TO_SUIT[suit_part.lower()]
        elif suit_part in SYMBOL_TO_SUIT:
            suit = SYMBOL_TO_SUIT[suit_part]
        else:
            raise ValueError(f"Invalid suit: {suit_part}")

        return cls(rank, suit)

    @property
    def value(self) -> int:
        """Numeric value, 2 through 14."""
        return int(self.rank)

    @property
    def label(self) -> str:
        """Rank label like 'A', '10', '7'."""
        return RANK_LABELS[self.rank]

    @property
    def color(self) -> str:
        """Return 'red' for hearts/diamonds, 'black' for clubs/spades."""
        return "red" if self.suit in (Suit.HEARTS, Suit.DIAMONDS) else "black"

    @property
    def short_str(self) -> str:
        """Short string like 'As', '10h'."""
        return f"{self.label}{SUIT_CHARS[self.suit]}"

    def __repr__(self) -> str:
        return f"Card({self.short_str})"

    def __str__(self) -> str:
        return f"{self.label}{SUIT_SYMBOLS[self.suit]}"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "rank": self.label,
            "suit": self.suit.value,
            "value": self.value,
            "text": str(self),
            "color": self.color,
        }


class Deck:
    """
    A standard 52-card deck dealt from the end of its card list.

    Usage:
        deck = Deck(rng=random.Random(7))
        deck.reset()
        card = deck.deal()
        deck.burn()
    """

    def __init__(self, rng: Optional[random.Random] = None, shuffle: bool = True):
        """
        Args:
            rng: Random source for shuffling; a fresh unseeded one if omitted
            shuffle: Shuffle right away (otherwise the deck is in build order)
        """
        self._rng = rng if rng is not None else random.Random()
        self._cards: List[Card] = []
        self._dealt: List[Card] = []
        self._build()
        if shuffle:
            self.shuffle()

    def _build(self) -> None:
        self._cards = [Card(rank, suit) for suit in Suit for rank in Rank]
        self._dealt = []

    def reset(self) -> None:
        """Rebuild all 52 cards and shuffle them."""
        self._build()
        self.shuffle()

    def shuffle(self) -> None:
        """Shuffle the remaining cards (Fisher-Yates via the injected rng)."""
        self._rng.shuffle(self._cards)

    def deal(self) -> Card:
        """
        Remove and return the top card.

        Raises:
            DeckEmptyError: If no cards remain.
        """
        if not self._cards:
            raise DeckEmptyError("Cannot deal from an empty deck")
        card = self._cards.pop()
        self._dealt.append(card)
        return card

    def deal_many(self, n: int) -> List[Card]:
        """Deal n cards, in deal order."""
        return [self.deal() for _ in range(n)]

    def burn(self) -> Card:
        """Burn (discard) the top card."""
        return self.deal()

    @property
    def remaining(self) -> int:
        """Number of cards remaining in the deck."""
        return len(self._cards)

    @property
    def cards(self) -> List[Card]:
        """Copy of the undealt cards; the last element is dealt next."""
        return self._cards.copy()

    @property
    def dealt_cards(self) -> List[Card]:
        """List of cards that have been dealt (burns included)."""
        return self._dealt.copy()

    def __len__(self) -> int:
        return len(self._cards)

    def __repr__(self) -> str:
        return f"Deck({self.remaining} cards remaining)"


def parse_cards(cards_str: str) -> List[Card]:
    """
    Parse space-separated cards, e.g. "As Kh 10d" or "A♠ K♥ 10♦".

    Returns:
        List of Card objects
    """
    return [Card.from_string(s) for s in cards_str.split()]
