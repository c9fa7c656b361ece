"""Abstract base class for seat decision strategies."""

from abc import ABC, abstractmethod

from blackjack_table.cards import Card
from blackjack_table.hand import Hand
from blackjack_table.memory import CardMemory


class PlayerStrategy(ABC):
    """
    Decides when a seat hits and how much it bets.

    The dealer and the settlement engine only consume the decisions; they
    never look at which strategy produced them.
    """

    DEFAULT_BET = 10

    @property
    @abstractmethod
    def kind(self) -> str:
        """Return the player type shown at the table."""
        ...

    @abstractmethod
    def decide_hit(
        self,
        hand: Hand,
        dealer_card: Card | None,
        memory: CardMemory,
    ) -> bool:
        """
        Decide whether to take another card.

        Args:
            hand: The seat's current hand
            dealer_card: The dealer's up card, if one has been dealt
            memory: Cards seen since the last reshuffle

        Returns:
            True to hit, False to stick
        """
        ...

    def make_bet(self, min_bet: int, max_bet: int, memory: CardMemory) -> int:
        """Return the bet for the next round."""
        return self.DEFAULT_BET

    @property
    def is_human(self) -> bool:
        return False

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
