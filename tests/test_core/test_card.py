"""
Tests for Card and Deck classes.
"""

import random

import pytest
from pokertable.core.card import DECK_SIZE, Card, Deck, Rank, Suit, parse_cards, rank_value
from pokertable.core.errors import DeckEmptyError


class TestCard:
    """Tests for Card class."""

    def test_card_creation(self):
        """Test creating a card."""
        card = Card(Rank.ACE, Suit.SPADES)
        assert card.rank == Rank.ACE
        assert card.suit == Suit.SPADES
        assert card.value == 14

    def test_card_coerces_plain_values(self):
        """Plain ints and suit names are accepted."""
        card = Card(12, "hearts")
        assert card.rank == Rank.QUEEN
        assert card.suit == Suit.HEARTS

    def test_card_from_string(self):
        """Test creating cards from string notation."""
        # Standard notation
        card1 = Card.from_string("As")
        assert card1.rank == Rank.ACE
        assert card1.suit == Suit.SPADES

        # With symbol
        card2 = Card.from_string("K♥")
        assert card2.rank == Rank.KING
        assert card2.suit == Suit.HEARTS

        # Ten, both spellings
        assert Card.from_string("10d") == Card.from_string("Td") == Card(Rank.TEN, Suit.DIAMONDS)

    def test_card_from_bad_string(self):
        """Unknown ranks and suits raise ValueError."""
        with pytest.raises(ValueError):
            Card.from_string("1s")
        with pytest.raises(ValueError):
            Card.from_string("Ax")
        with pytest.raises(ValueError):
            Card.from_string("A")

    def test_rank_values(self):
        """Numeric ranks parse directly, faces map to 11-14."""
        assert rank_value("2") == 2
        assert rank_value("10") == 10
        assert rank_value("J") == 11
        assert rank_value("Q") == 12
        assert rank_value("K") == 13
        assert rank_value("A") == 14

    def test_card_equality(self):
        """Test card equality."""
        card1 = Card(Rank.ACE, Suit.SPADES)
        card2 = Card(Rank.ACE, Suit.SPADES)
        card3 = Card(Rank.KING, Suit.SPADES)

        assert card1 == card2
        assert card1 != card3

    def test_card_is_immutable(self):
        """Cards are frozen."""
        card = Card(Rank.ACE, Suit.SPADES)
        with pytest.raises(AttributeError):
            card.rank = Rank.KING

    def test_card_str(self):
        """Test card string representation."""
        card = Card(Rank.ACE, Suit.SPADES)
        assert str(card) == "A♠"
        assert card.short_str == "As"
        assert repr(card) == "Card(As)"
        assert str(Card(Rank.TEN, Suit.HEARTS)) == "10♥"

    def test_card_color(self):
        """Test card color."""
        spade = Card(Rank.ACE, Suit.SPADES)
        heart = Card(Rank.KING, Suit.HEARTS)

        assert spade.color == "black"
        assert heart.color == "red"

    def test_card_hash(self):
        """Test card hashing (for use in sets/dicts)."""
        card1 = Card(Rank.ACE, Suit.SPADES)
        card2 = Card(Rank.ACE, Suit.SPADES)

        card_set = {card1}
        assert card2 in card_set

    def test_card_to_dict(self):
        """Test JSON form."""
        data = Card(Rank.QUEEN, Suit.DIAMONDS).to_dict()
        assert data == {
            "rank": "Q",
            "suit": "diamonds",
            "value": 12,
            "text": "Q♦",
            "color": "red",
        }


class TestDeck:
    """Tests for Deck class."""

    def test_deck_has_52_cards(self, unshuffled_deck):
        """Test that a new deck has 52 cards."""
        assert len(unshuffled_deck) == DECK_SIZE
        assert unshuffled_deck.remaining == 52

    def test_reset_gives_52_distinct_cards(self, deck):
        """After reset the deck holds every (suit, rank) pair exactly once."""
        deck.deal_many(20)
        deck.reset()
        pairs = {(c.suit, c.rank) for c in deck.cards}
        assert len(pairs) == 52
        assert deck.remaining == 52
        assert deck.dealt_cards == []

    def test_deck_deal_takes_last_card(self, deck):
        """Dealing removes and returns the last card."""
        top = deck.cards[-1]
        card = deck.deal()
        assert card == top
        assert deck.remaining == 51
        assert card not in deck.cards

    def test_deck_deal_many(self, deck):
        """Test dealing several cards."""
        cards = deck.deal_many(5)
        assert len(cards) == 5
        assert deck.remaining == 47

    def test_deck_burn(self, deck):
        """Test burning a card."""
        initial = deck.remaining
        burned = deck.burn()
        assert isinstance(burned, Card)
        assert deck.remaining == initial - 1
        assert burned in deck.dealt_cards

    def test_deal_from_empty_deck(self, deck):
        """Dealing from an empty deck raises DeckEmptyError."""
        deck.deal_many(52)
        with pytest.raises(DeckEmptyError):
            deck.deal()

    def test_deck_empty_error_is_runtime_error(self, deck):
        """Deck underflow is a programming error."""
        deck.deal_many(52)
        with pytest.raises(RuntimeError):
            deck.deal()

    def test_seeded_shuffle_is_reproducible(self):
        """The same seed gives the same order."""
        deck1 = Deck(rng=random.Random(42))
        deck2 = Deck(rng=random.Random(42))
        assert deck1.cards == deck2.cards

    def test_deck_shuffle_changes_order(self, unshuffled_deck):
        """Test that shuffling changes card order."""
        before = unshuffled_deck.cards
        unshuffled_deck.shuffle()
        # Probability of an unchanged 52-card order is negligible
        assert unshuffled_deck.cards != before
        assert sorted(before, key=str) == sorted(unshuffled_deck.cards, key=str)

    def test_deck_dealt_cards_tracked(self, deck):
        """Test that dealt cards are tracked."""
        dealt = deck.deal_many(3)
        assert deck.dealt_cards == dealt


class TestParseCards:
    """Tests for parse_cards function."""

    def test_parse_space_separated(self):
        """Test parsing space-separated cards."""
        cards = parse_cards("As Kh Qd")
        assert len(cards) == 3
        assert cards[0].rank == Rank.ACE
        assert cards[1].rank == Rank.KING
        assert cards[2].rank == Rank.QUEEN

    def test_parse_with_symbols(self):
        """Test parsing cards with suit symbols."""
        cards = parse_cards("A♠ K♥ 10♦")
        assert cards == [
            Card(Rank.ACE, Suit.SPADES),
            Card(Rank.KING, Suit.HEARTS),
            Card(Rank.TEN, Suit.DIAMONDS),
        ]
