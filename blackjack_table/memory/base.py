"""Abstract base class for player card memory."""

from abc import ABC, abstractmethod
from typing import Iterable, Mapping

from blackjack_table.cards import Card, Rank


class CardMemory(ABC):
    """
    Cards a seat has seen since the last reshuffle.

    Memory is fed the cards played at the end of each round and is wiped
    whenever the dealer rebuilds the deck. Subclasses define how each rank
    moves the running count.
    """

    def __init__(self) -> None:
        self._running_count: int = 0
        self._cards_seen: int = 0

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @property
    @abstractmethod
    def tag_values(self) -> Mapping[Rank, int]:
        """Map each Rank to the amount it moves the running count."""
        ...

    @property
    def full_deck_sum(self) -> int:
        """Sum of tag values over a complete deck (0 for a balanced count)."""
        return sum(self.tag_values[rank] * 4 for rank in Rank)

    def see(self, card: Card) -> int:
        """
        Record a single card.

        Returns:
            The tag value of the card
        """
        tag_value = self.tag_values[card.rank]
        self._running_count += tag_value
        self._cards_seen += 1
        return tag_value

    def see_all(self, cards: Iterable[Card]) -> int:
        """Record several cards and return their combined tag value."""
        return sum(self.see(card) for card in cards)

    @property
    def running_count(self) -> int:
        return self._running_count

    @property
    def cards_seen(self) -> int:
        return self._cards_seen

    def restore(self, running_count: int, cards_seen: int) -> None:
        """Restore counters from a snapshot."""
        self._running_count = running_count
        self._cards_seen = cards_seen

    def reset(self) -> None:
        """Forget everything, e.g. after a reshuffle."""
        self._running_count = 0
        self._cards_seen = 0

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(running_count={self._running_count})"
