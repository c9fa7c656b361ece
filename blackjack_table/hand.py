"""Hand valuation for blackjack."""

from collections import Counter
from typing import Iterable, Iterator

from blackjack_table.cards import Card, Rank, Suit


class Hand:
    """
    An ordered hand of cards with incremental value tracking.

    Every ace may count as 1 or 11, so a hand holding ``k`` aces has
    ``k + 1`` possible totals, each 10 above the previous. The totals are
    updated card by card instead of being recomputed, and are always
    derivable by replaying the cards through :meth:`add_card`.
    """

    def __init__(self, cards: Iterable[Card] | None = None) -> None:
        self._cards: list[Card] = []
        self._rank_counts: Counter[Rank] = Counter()
        self._totals: list[int] = []
        if cards is not None:
            self.add_cards(cards)

    @classmethod
    def from_cards(cls, cards: Iterable[Card]) -> "Hand":
        """Build a hand by replaying cards in order."""
        return cls(cards)

    def copy(self) -> "Hand":
        return Hand(self._cards)

    def add_card(self, card: Card) -> None:
        """Add a card to the hand, updating every possible total."""
        self._cards.append(card)
        self._rank_counts[card.rank] += 1

        if not self._totals:
            self._totals = [1, 11] if card.is_ace else [card.value]
            return

        if card.is_ace:
            # This ace counted as 11 on top of the highest line
            self._totals.append(self._totals[-1] + 11)
            for i in range(len(self._totals) - 1):
                self._totals[i] += 1
        else:
            for i in range(len(self._totals)):
                self._totals[i] += card.value

    def add_cards(self, cards: Iterable[Card]) -> None:
        for card in cards:
            self.add_card(card)

    def add_hand(self, hand: "Hand") -> None:
        """Add every card of another hand."""
        self.add_cards(list(hand))

    def remove_card(self, card: Card) -> bool:
        """
        Remove the first occurrence of a card.

        Returns:
            False (and leaves the hand untouched) if the card is not present
        """
        try:
            self._cards.remove(card)
        except ValueError:
            return False

        self._rank_counts[card.rank] -= 1
        if not self._rank_counts[card.rank]:
            del self._rank_counts[card.rank]

        if not self._cards:
            self._totals = []
            return True

        if card.is_ace:
            self._totals.pop()
            delta = 1
        else:
            delta = card.value
        self._totals = [total - delta for total in self._totals]
        return True

    def remove_hand(self, hand: "Hand") -> bool:
        """
        Remove every occurrence of each card held by another hand.

        Returns:
            True if at least one card was removed
        """
        removed = False
        for card in list(hand):
            while self.remove_card(card):
                removed = True
        return removed

    def remove_at(self, position: int) -> Card | None:
        """Remove and return the card at ``position``, or None if out of range."""
        if 0 <= position < len(self._cards):
            card = self._cards[position]
            if self.remove_card(card):
                return card
        return None

    @property
    def cards(self) -> list[Card]:
        """Return a copy of the cards in deal order."""
        return list(self._cards)

    @property
    def possible_totals(self) -> list[int]:
        """Return every total the hand can represent, ascending."""
        return sorted(self._totals)

    @property
    def rank_counts(self) -> dict[Rank, int]:
        return dict(self._rank_counts)

    def count_rank(self, rank: Rank) -> int:
        return self._rank_counts[rank]

    def count_suit(self, suit: Suit) -> int:
        return sum(1 for card in self._cards if card.suit == suit)

    def is_over(self, threshold: int) -> bool:
        """
        Check whether even the lowest total exceeds ``threshold``.

        An empty hand is never over.
        """
        if not self._totals:
            return False
        return min(self._totals) > threshold

    def highest_value_at_most(self, threshold: int) -> int:
        """
        Return the best total not exceeding ``threshold``.

        When every total exceeds the threshold the smallest one is returned,
        so a busted hand still reports its bust value. Returns -1 for an
        empty hand.
        """
        if not self._totals:
            return -1
        self._totals.sort()
        within = [total for total in self._totals if total <= threshold]
        return within[-1] if within else self._totals[0]

    def is_blackjack(self) -> bool:
        """Check for a natural: exactly two cards summing to 21."""
        return len(self._cards) == 2 and Card.is_blackjack_pair(*self._cards)

    def sorted_descending(self) -> "Hand":
        return Hand(sorted(self._cards))

    def sorted_ascending(self) -> "Hand":
        return Hand(sorted(self._cards, key=Card.ascending_key))

    def sorted_by_suit(self) -> "Hand":
        return Hand(sorted(self._cards, key=Card.suit_key))

    def reversed(self) -> "Hand":
        return Hand(reversed(self._cards))

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(list(self._cards))

    def __contains__(self, card: object) -> bool:
        return card in self._cards

    def __str__(self) -> str:
        if not self._cards:
            return "(empty)"
        cards_str = " ".join(str(card) for card in self._cards)
        value_str = f"({self.highest_value_at_most(21)})"
        if self.is_blackjack():
            value_str = "(BLACKJACK)"
        elif self.is_over(21):
            value_str = f"(BUST {self.highest_value_at_most(21)})"
        return f"{cards_str} {value_str}"

    def __repr__(self) -> str:
        return f"Hand({self._cards!r}, totals={self.possible_totals})"
