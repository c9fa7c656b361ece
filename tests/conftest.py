"""Pytest fixtures for blackjack table tests."""

import pytest
from random import Random

from blackjack_table.cards import Card, Deck, Rank, Suit
from blackjack_table.game import BlackjackDealer, BlackjackTable
from blackjack_table.hand import Hand
from blackjack_table.memory import HiLoMemory
from blackjack_table.players import BasicStrategy, Player
from config import TableConfig

# Filler left under stacked cards so the deck never drops below the
# reshuffle threshold during a scripted round.
FILLER = [Card(Rank.NINE, suit) for suit in Suit] * 5


def _make_hand(*cards: str) -> Hand:
    """Build a hand from short card strings such as 'AS', '10H'."""
    return Hand.from_cards(Card.from_string(c) for c in cards)


def _stacked_deck(*cards: str) -> Deck:
    """A deck that deals ``cards`` in the given order, then filler."""
    deck = Deck()
    deck.restore(FILLER + [Card.from_string(c) for c in reversed(cards)])
    return deck


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def deck(rng):
    """A shuffled deck."""
    d = Deck(rng=rng)
    d.shuffle()
    return d


@pytest.fixture
def make_hand():
    """Factory building hands from card strings."""
    return _make_hand


@pytest.fixture
def stacked_deck():
    """Factory building decks that deal cards in a scripted order."""
    return _stacked_deck


@pytest.fixture
def empty_hand():
    return Hand()


@pytest.fixture
def blackjack_hand():
    """A natural blackjack (A-K)."""
    return _make_hand("AS", "KH")


@pytest.fixture
def bust_hand():
    """A busted hand (2-Q-K = 22)."""
    return _make_hand("2S", "QH", "KC")


@pytest.fixture
def hilo():
    return HiLoMemory()


@pytest.fixture
def table_config(tmp_path):
    """Table limits matching the defaults, writing files under tmp_path."""
    return TableConfig(
        min_bet=1,
        max_bet=500,
        average_file=str(tmp_path / "average.txt"),
        save_file=str(tmp_path / "table.json"),
    )


@pytest.fixture
def basic_player():
    return Player(strategy=BasicStrategy(), balance=200)


@pytest.fixture
def dealer(table_config, rng):
    return BlackjackDealer(table_config=table_config, rng=rng)


@pytest.fixture
def table(table_config, rng):
    return BlackjackTable(table_config=table_config, rng=rng)
