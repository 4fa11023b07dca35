"""
Pytest configuration and shared fixtures for pokertable tests.
"""

import random

import pytest
from pokertable.core.card import Card, Deck, Rank, Suit, parse_cards
from pokertable.core.player import Player
from pokertable.core.game import TexasHoldemGame
from pokertable.core.rules import TableConfig


@pytest.fixture
def rng():
    """A seeded random source so every run deals the same cards."""
    return random.Random(1234)


@pytest.fixture
def deck(rng):
    """Create a fresh shuffled deck."""
    return Deck(rng=rng, shuffle=True)


@pytest.fixture
def unshuffled_deck():
    """Create a fresh unshuffled deck."""
    return Deck(shuffle=False)


@pytest.fixture
def sample_player():
    """Create a sample player with 1000 chips."""
    return Player(name="Test", chips=1000, seat=0)


@pytest.fixture
def config():
    """Default blinds 10/20 and 1000-chip stacks."""
    return TableConfig(small_blind=10, big_blind=20, starting_stack=1000)


@pytest.fixture
def two_player_game(config, rng):
    """A heads-up game with the first hand dealt."""
    game = TexasHoldemGame(config=config, rng=rng)
    game.init_game(2)
    return game


@pytest.fixture
def four_player_game(config, rng):
    """A 4-player game with the first hand dealt."""
    game = TexasHoldemGame(config=config, rng=rng)
    game.init_game(4)
    return game


@pytest.fixture
def six_player_game(config, rng):
    """A 6-player game with the first hand dealt."""
    game = TexasHoldemGame(config=config, rng=rng)
    game.init_game(6)
    return game


@pytest.fixture
def sample_hand():
    """Create a sample 5-card hand (pair of aces)."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.ACE, Suit.HEARTS),
        Card(Rank.KING, Suit.DIAMONDS),
        Card(Rank.QUEEN, Suit.CLUBS),
        Card(Rank.JACK, Suit.SPADES),
    ]


@pytest.fixture
def royal_flush():
    """Create a royal flush hand."""
    return parse_cards("As Ks Qs Js 10s")


@pytest.fixture
def straight_flush():
    """Create a straight flush (9-high)."""
    return parse_cards("9h 8h 7h 6h 5h")


@pytest.fixture
def wheel_straight():
    """Create a wheel straight (A-2-3-4-5)."""
    return parse_cards("As 2h 3d 4c 5s")


def rig_hand(game, hole_cards, board):
    """
    Give seats fixed hole cards and stack the deck for the board.

    Args:
        game: A game with a hand in progress
        hole_cards: {seat_index: "As Kd"} for each seat in the hand
        board: Five community cards, e.g. "2c 7d 9h Jc Qs"

    The remaining deck is rebuilt so burns and deals produce `board` in order.
    """
    used = []
    for seat, cards_str in hole_cards.items():
        cards = parse_cards(cards_str)
        game.players[seat].hole_cards = cards
        used.extend(cards)

    board_cards = parse_cards(board)
    used.extend(board_cards)
    filler = [c for c in Deck(shuffle=False).cards if c not in used]

    # Dealt from the end: burn, flop x3, burn, turn, burn, river
    order = [filler.pop(), *board_cards[:3], filler.pop(), board_cards[3], filler.pop(), board_cards[4]]
    game.deck._cards = filler + list(reversed(order))


def play_to_showdown(game):
    """Check or call every remaining decision."""
    while game.is_hand_running():
        actions = game.get_player_actions()
        action = "CHECK" if "CHECK" in [a.value for a in actions] else "CALL"
        assert game.player_action(action).success


@pytest.fixture
def rig():
    """Fixture form of rig_hand."""
    return rig_hand


@pytest.fixture
def showdown():
    """Fixture form of play_to_showdown."""
    return play_to_showdown
