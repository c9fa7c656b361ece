"""A seat at the table: balance, hand, memory and strategy."""

from dataclasses import dataclass, field
from typing import Iterable

from blackjack_table.cards import Card
from blackjack_table.hand import Hand
from blackjack_table.memory import CardMemory, HiLoMemory
from blackjack_table.players.base import PlayerStrategy


@dataclass(eq=False)
class Player:
    """Player state across rounds."""

    strategy: PlayerStrategy
    balance: int = 200
    hand: Hand = field(default_factory=Hand)
    bet: int = 0
    memory: CardMemory = field(default_factory=HiLoMemory)
    dealer_card: Card | None = None

    @property
    def kind(self) -> str:
        return self.strategy.kind

    @property
    def is_human(self) -> bool:
        return self.strategy.is_human

    def new_hand(self) -> Hand:
        """
        Start a fresh hand for the next round.

        Returns:
            The hand that was just replaced
        """
        self.bet = 0
        previous = self.hand
        self.hand = Hand()
        return previous

    def make_bet(self, min_bet: int, max_bet: int) -> int:
        self.bet = self.strategy.make_bet(min_bet, max_bet, self.memory)
        return self.bet

    def hit(self) -> bool:
        return self.strategy.decide_hit(self.hand, self.dealer_card, self.memory)

    def take_card(self, card: Card) -> None:
        self.hand.add_card(card)

    def settle_bet(self, amount: int) -> bool:
        """
        Apply a settled amount to the balance.

        Returns:
            True if the balance is still non-negative
        """
        self.balance += amount
        return self.balance >= 0

    @property
    def hand_total(self) -> int:
        return self.hand.highest_value_at_most(21)

    @property
    def is_blackjack(self) -> bool:
        return self.hand.is_blackjack()

    @property
    def is_bust(self) -> bool:
        return self.hand.is_over(21)

    def view_dealer_card(self, card: Card) -> None:
        self.dealer_card = card

    def view_cards(self, cards: Iterable[Card]) -> None:
        """Remember the cards played in a finished round."""
        self.memory.see_all(cards)

    def new_deck(self) -> None:
        """Forget seen cards after the deck is rebuilt."""
        self.memory.reset()

    def __str__(self) -> str:
        return (
            f"{self.kind} player, hand {self.hand}, "
            f"value {self.hand_total}, balance {self.balance}"
        )
