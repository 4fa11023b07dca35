"""
Hand Evaluation for Texas Hold'em.

This module picks the best 5-card hand out of a player's 2 hole cards and
up to 5 community cards by scoring every 5-card subset (21 of them at the
river) and keeping the highest.

A hand is ranked by the pair (category, tiebreak_score); higher is better.
The tiebreak score encodes the ranks that matter for the category as
base-15 digits, most significant first, so two hands of the same category
compare correctly as plain integers.

Hand Categories (best to worst):
1. Straight Flush: 5 consecutive cards of same suit (A-high is a royal)
2. Four of a Kind: 4 cards of same rank
3. Full House: 3 of a kind + pair
4. Flush: 5 cards of same suit
5. Straight: 5 consecutive cards
6. Three of a Kind: 3 cards of same rank
7. Two Pair: 2 different pairs
8. One Pair: 2 cards of same rank
9. High Card: No made hand

Note: Ace can be low in A-2-3-4-5 straight (wheel), the lowest straight.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple
from itertools import combinations
from enum import IntEnum
from collections import Counter

from pokertable.core.card import Card, Rank
from pokertable.core.rules import TOTAL_COMMUNITY_CARDS


class HandCategory(IntEnum):
    """Hand categories from worst (lowest value) to best (highest value)."""
    HIGH_CARD = 0
    ONE_PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8


# Hand category names for display
HAND_CATEGORY_NAMES = {
    HandCategory.STRAIGHT_FLUSH: "Straight Flush",
    HandCategory.FOUR_OF_A_KIND: "Four of a Kind",
    HandCategory.FULL_HOUSE: "Full House",
    HandCategory.FLUSH: "Flush",
    HandCategory.STRAIGHT: "Straight",
    HandCategory.THREE_OF_A_KIND: "Three of a Kind",
    HandCategory.TWO_PAIR: "Two Pair",
    HandCategory.ONE_PAIR: "One Pair",
    HandCategory.HIGH_CARD: "High Card",
}

# Positional base for tiebreak digits; must exceed the highest rank value (14)
TIEBREAK_BASE = 15
TIEBREAK_DIGITS = 5
# Exclusive upper bound of any tiebreak score
TIEBREAK_SPAN = TIEBREAK_BASE ** TIEBREAK_DIGITS

WHEEL_RANKS = [Rank.ACE, Rank.FIVE, Rank.FOUR, Rank.THREE, Rank.TWO]


@dataclass(frozen=True)
class HandResult:
    """
    The best 5-card hand found for a player.

    Attributes:
        category: Hand category
        tiebreak_score: Ordered kicker encoding, comparable within a category
        cards: The 5 cards making the hand, most significant first
    """
    category: HandCategory
    tiebreak_score: int
    cards: Tuple[Card, ...]

    @property
    def key(self) -> Tuple[int, int]:
        """Sort key; a higher key is a better hand."""
        return (int(self.category), self.tiebreak_score)

    @property
    def name(self) -> str:
        if self.category == HandCategory.STRAIGHT_FLUSH and self.cards[0].rank == Rank.ACE:
            return "Royal Flush"
        return HAND_CATEGORY_NAMES[self.category]

    @property
    def description(self) -> str:
        return describe_hand(self)

    def beats(self, other: HandResult) -> bool:
        return self.key > other.key

    def ties(self, other: HandResult) -> bool:
        return self.key == other.key

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "category": self.category.name,
            "name": self.name,
            "description": self.description,
            "tiebreak_score": self.tiebreak_score,
            "cards": [str(c) for c in self.cards],
        }


def evaluate_hand(hole_cards: Sequence[Card], community_cards: Sequence[Card] = ()) -> HandResult:
    """
    Find the best 5-card hand from hole and community cards.

    Args:
        hole_cards: The player's private cards
        community_cards: 0-5 shared cards

    Returns:
        HandResult for the best 5-card subset

    Raises:
        ValueError: If fewer than 5 or more than 7 cards in total, more
            than 5 community cards, or a card appears twice
    """
    if len(community_cards) > TOTAL_COMMUNITY_CARDS:
        raise ValueError(f"At most 5 community cards, got {len(community_cards)}")

    cards = list(hole_cards) + list(community_cards)
    if len(cards) < 5 or len(cards) > 7:
        raise ValueError(f"Need 5-7 cards, got {len(cards)}")
    if len(set(cards)) != len(cards):
        raise ValueError("Duplicate cards in hand")

    best = None
    for combo in combinations(cards, 5):
        result = score_five_cards(combo)
        if best is None or result.key > best.key:
            best = result

    return best


def score_five_cards(cards: Sequence[Card]) -> HandResult:
    """Score exactly 5 cards."""
    if len(cards) != 5:
        raise ValueError(f"Need exactly 5 cards, got {len(cards)}")

    sorted_cards = sorted(cards, key=lambda c: c.rank, reverse=True)
    ranks = [c.rank for c in sorted_cards]

    is_flush = len({c.suit for c in sorted_cards}) == 1
    is_straight, straight_high = _check_straight(ranks)

    rank_counts = Counter(ranks)
    # Rank groups ordered by count, then rank, both descending
    groups = sorted(rank_counts.items(), key=lambda rc: (rc[1], rc[0]), reverse=True)
    counts = [c for _, c in groups]
    group_ranks = [r for r, _ in groups]

    if is_straight:
        if straight_high == Rank.FIVE:
            sorted_cards = _reorder_wheel(sorted_cards)
        category = HandCategory.STRAIGHT_FLUSH if is_flush else HandCategory.STRAIGHT
        return _result(category, [straight_high], sorted_cards)

    ordered_cards = _sort_by_count(sorted_cards, rank_counts)

    if counts == [4, 1]:
        category = HandCategory.FOUR_OF_A_KIND
    elif counts == [3, 2]:
        category = HandCategory.FULL_HOUSE
    elif is_flush:
        return _result(HandCategory.FLUSH, ranks, sorted_cards)
    elif counts == [3, 1, 1]:
        category = HandCategory.THREE_OF_A_KIND
    elif counts == [2, 2, 1]:
        category = HandCategory.TWO_PAIR
    elif counts == [2, 1, 1, 1]:
        category = HandCategory.ONE_PAIR
    else:
        category = HandCategory.HIGH_CARD

    return _result(category, group_ranks, ordered_cards)


def encode_tiebreak(ranks: Sequence[int]) -> int:
    """
    Encode ordered ranks as left-aligned base-15 digits.

    The first rank lands in the most significant of 5 digit positions, so
    any higher earlier rank outweighs everything after it.
    """
    if len(ranks) > TIEBREAK_DIGITS:
        raise ValueError(f"At most {TIEBREAK_DIGITS} ranks, got {len(ranks)}")
    score = 0
    for i, rank in enumerate(ranks):
        score += int(rank) * TIEBREAK_BASE ** (TIEBREAK_DIGITS - 1 - i)
    return score


def _result(category: HandCategory, ranks: Sequence[int], cards: List[Card]) -> HandResult:
    return HandResult(category=category, tiebreak_score=encode_tiebreak(ranks), cards=tuple(cards))


def _check_straight(ranks: List[Rank]) -> Tuple[bool, Optional[Rank]]:
    """
    Check if sorted ranks form a straight.

    Returns:
        Tuple of (is_straight, high_card_rank)
    """
    unique_ranks = sorted(set(ranks), reverse=True)
    if len(unique_ranks) != 5:
        return False, None

    if unique_ranks[0] - unique_ranks[4] == 4:
        return True, unique_ranks[0]

    if unique_ranks == WHEEL_RANKS:
        return True, Rank.FIVE  # 5-high straight

    return False, None


def _sort_by_count(cards: List[Card], rank_counts: Counter) -> List[Card]:
    """Sort cards by count (descending), then by rank (descending)."""
    return sorted(cards, key=lambda c: (rank_counts[c.rank], c.rank), reverse=True)


def _reorder_wheel(cards: List[Card]) -> List[Card]:
    """Reorder wheel straight so Ace is last (5-4-3-2-A)."""
    ace = [c for c in cards if c.rank == Rank.ACE][0]
    others = [c for c in cards if c.rank != Rank.ACE]
    return others + [ace]


def compare_hands(hand1: HandResult, hand2: HandResult) -> int:
    """
    Compare two evaluated hands.

    Returns:
        1 if hand1 wins, -1 if hand2 wins, 0 if tie
    """
    if hand1.key > hand2.key:
        return 1
    if hand1.key < hand2.key:
        return -1
    return 0


def describe_hand(hand: HandResult) -> str:
    """Get a human-readable description of the hand."""
    category = hand.category
    best_cards = hand.cards

    if category == HandCategory.STRAIGHT_FLUSH:
        if best_cards[0].rank == Rank.ACE:
            return "Royal Flush"
        return f"Straight Flush, {_rank_name(best_cards[0].rank)} high"
    elif category == HandCategory.FOUR_OF_A_KIND:
        return f"Four of a Kind, {_plural(best_cards[0].rank)}"
    elif category == HandCategory.FULL_HOUSE:
        return (
            f"Full House, {_plural(best_cards[0].rank)} "
            f"full of {_plural(best_cards[3].rank)}"
        )
    elif category == HandCategory.FLUSH:
        return f"Flush, {_rank_name(best_cards[0].rank)} high"
    elif category == HandCategory.STRAIGHT:
        if best_cards[-1].rank == Rank.ACE:
            return "Straight, Five high (Wheel)"
        return f"Straight, {_rank_name(best_cards[0].rank)} high"
    elif category == HandCategory.THREE_OF_A_KIND:
        return f"Three of a Kind, {_plural(best_cards[0].rank)}"
    elif category == HandCategory.TWO_PAIR:
        return (
            f"Two Pair, {_plural(best_cards[0].rank)} "
            f"and {_plural(best_cards[2].rank)}"
        )
    elif category == HandCategory.ONE_PAIR:
        return f"Pair of {_plural(best_cards[0].rank)}"
    else:
        return f"High Card, {_rank_name(best_cards[0].rank)}"


def _rank_name(rank: Rank) -> str:
    """Get the name of a rank."""
    names = {
        Rank.TWO: "Two", Rank.THREE: "Three", Rank.FOUR: "Four",
        Rank.FIVE: "Five", Rank.SIX: "Six", Rank.SEVEN: "Seven",
        Rank.EIGHT: "Eight", Rank.NINE: "Nine", Rank.TEN: "Ten",
        Rank.JACK: "Jack", Rank.QUEEN: "Queen", Rank.KING: "King",
        Rank.ACE: "Ace"
    }
    return names[rank]


def _plural(rank: Rank) -> str:
    name = _rank_name(rank)
    return name + "es" if rank == Rank.SIX else name + "s"
