"""Tests for card memory."""

from blackjack_table.cards import Card, Deck, Rank, Suit


class TestHiLoMemory:
    """Tests for the Hi-Lo running count."""

    def test_tag_values(self, hilo):
        assert hilo.tag_values[Rank.TWO] == 1
        assert hilo.tag_values[Rank.SIX] == 1
        assert hilo.tag_values[Rank.SEVEN] == 0
        assert hilo.tag_values[Rank.NINE] == 0
        assert hilo.tag_values[Rank.TEN] == -1
        assert hilo.tag_values[Rank.ACE] == -1

    def test_balanced_count(self, hilo):
        assert hilo.name == "Hi-Lo"
        assert hilo.full_deck_sum == 0

    def test_see_updates_count(self, hilo):
        assert hilo.see(Card(Rank.FIVE, Suit.HEARTS)) == 1
        assert hilo.see(Card(Rank.KING, Suit.HEARTS)) == -1
        assert hilo.see(Card(Rank.TWO, Suit.HEARTS)) == 1
        assert hilo.running_count == 1
        assert hilo.cards_seen == 3

    def test_see_all(self, hilo):
        cards = [Card(Rank.TWO, Suit.CLUBS), Card(Rank.THREE, Suit.CLUBS), Card(Rank.EIGHT, Suit.CLUBS)]
        assert hilo.see_all(cards) == 2
        assert hilo.running_count == 2

    def test_full_deck_returns_to_zero(self, hilo):
        hilo.see_all(Deck())
        assert hilo.running_count == 0
        assert hilo.cards_seen == 52

    def test_reset(self, hilo):
        hilo.see(Card(Rank.TWO, Suit.CLUBS))
        hilo.reset()
        assert hilo.running_count == 0
        assert hilo.cards_seen == 0

    def test_restore(self, hilo):
        hilo.restore(running_count=4, cards_seen=12)
        assert hilo.running_count == 4
        assert hilo.cards_seen == 12
        assert repr(hilo) == "HiLoMemory(running_count=4)"
