"""Tests for Card and Deck classes."""

import pytest
from random import Random

from blackjack_table.cards import Card, Deck, Rank, Suit


class TestRank:
    """Tests for the Rank enum."""

    def test_blackjack_values(self):
        assert [r.blackjack_value for r in Rank] == [2, 3, 4, 5, 6, 7, 8, 9, 10, 10, 10, 10, 11]

    def test_ranks_are_ordered(self):
        ranks = list(Rank)
        assert ranks[0] == Rank.TWO
        assert ranks[-1] == Rank.ACE

    def test_previous_rank(self):
        assert Rank.THREE.previous == Rank.TWO
        assert Rank.ACE.previous == Rank.KING

    def test_previous_wraps_to_ace(self):
        assert Rank.TWO.previous == Rank.ACE


class TestCard:
    """Tests for the Card class."""

    def test_card_immutability(self):
        card = Card(Rank.ACE, Suit.SPADES)
        with pytest.raises(AttributeError):
            card.rank = Rank.KING

    def test_card_value(self):
        assert Card(Rank.TWO, Suit.HEARTS).value == 2
        assert Card(Rank.JACK, Suit.HEARTS).value == 10
        assert Card(Rank.KING, Suit.HEARTS).value == 10
        assert Card(Rank.ACE, Suit.HEARTS).value == 11

    def test_card_from_string(self):
        assert Card.from_string("AS") == Card(Rank.ACE, Suit.SPADES)
        assert Card.from_string("10D") == Card(Rank.TEN, Suit.DIAMONDS)
        assert Card.from_string("kh") == Card(Rank.KING, Suit.HEARTS)
        assert Card.from_string("Q♣") == Card(Rank.QUEEN, Suit.CLUBS)

    @pytest.mark.parametrize("text", ["A", "1S", "AX", ""])
    def test_card_from_invalid_string(self, text):
        with pytest.raises(ValueError):
            Card.from_string(text)

    def test_card_hash(self):
        cards = {Card(Rank.ACE, Suit.SPADES), Card(Rank.ACE, Suit.SPADES)}
        assert len(cards) == 1

    def test_natural_order_is_descending_rank(self):
        cards = [
            Card(Rank.TWO, Suit.CLUBS),
            Card(Rank.ACE, Suit.HEARTS),
            Card(Rank.KING, Suit.SPADES),
            Card(Rank.KING, Suit.CLUBS),
        ]
        assert sorted(cards) == [
            Card(Rank.ACE, Suit.HEARTS),
            Card(Rank.KING, Suit.CLUBS),
            Card(Rank.KING, Suit.SPADES),
            Card(Rank.TWO, Suit.CLUBS),
        ]

    def test_ascending_and_suit_keys(self):
        cards = [
            Card(Rank.KING, Suit.HEARTS),
            Card(Rank.TWO, Suit.SPADES),
            Card(Rank.ACE, Suit.CLUBS),
        ]
        assert sorted(cards, key=Card.ascending_key)[0] == Card(Rank.TWO, Suit.SPADES)
        assert sorted(cards, key=Card.suit_key) == [
            Card(Rank.ACE, Suit.CLUBS),
            Card(Rank.KING, Suit.HEARTS),
            Card(Rank.TWO, Suit.SPADES),
        ]

    def test_blackjack_pair(self):
        assert Card.is_blackjack_pair(Card(Rank.ACE, Suit.CLUBS), Card(Rank.QUEEN, Suit.HEARTS))
        assert not Card.is_blackjack_pair(Card(Rank.ACE, Suit.CLUBS), Card(Rank.NINE, Suit.HEARTS))


class TestDeck:
    """Tests for the Deck class."""

    def test_deck_has_52_unique_cards(self):
        deck = Deck()
        assert len(deck) == 52
        assert len(set(deck)) == 52

    def test_deal_removes_card(self, deck):
        top = list(deck)[-1]
        assert deck.deal() == top
        assert deck.cards_remaining == 51

    def test_deal_from_empty_deck(self):
        deck = Deck()
        deck.restore([])
        with pytest.raises(IndexError):
            deck.deal()

    def test_shuffle_is_reproducible(self):
        a = Deck(rng=Random(7))
        b = Deck(rng=Random(7))
        a.shuffle()
        b.shuffle()
        assert list(a) == list(b)
        assert list(a) != list(Deck())

    def test_reset_restores_full_deck(self, deck):
        for _ in range(10):
            deck.deal()
        deck.reset()
        assert len(deck) == 52

    def test_below_fraction(self):
        deck = Deck()
        deck.restore(list(deck)[:13])
        assert not deck.below_fraction(0.25)
        deck.deal()
        assert deck.below_fraction(0.25)
