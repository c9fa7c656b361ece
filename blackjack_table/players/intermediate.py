"""Dealer-card-aware strategy."""

from blackjack_table.cards import Card, Rank
from blackjack_table.hand import Hand
from blackjack_table.memory import CardMemory
from blackjack_table.players.base import PlayerStrategy


class IntermediateStrategy(PlayerStrategy):
    """
    Hit thresholds that depend on the hand and the dealer's up card.

    Thresholds:
        hand holds an ace: hit while not over 8
        dealer shows 7 or higher: hit while not over 16
        otherwise: hit while not over 11
    """

    SOFT_THRESHOLD = 8
    STRONG_DEALER_THRESHOLD = 16
    WEAK_DEALER_THRESHOLD = 11
    STRONG_DEALER_VALUE = 7

    @property
    def kind(self) -> str:
        return "Intermediate"

    def decide_hit(
        self,
        hand: Hand,
        dealer_card: Card | None,
        memory: CardMemory,
    ) -> bool:
        if hand.count_rank(Rank.ACE):
            return not hand.is_over(self.SOFT_THRESHOLD)
        if dealer_card is not None and dealer_card.value >= self.STRONG_DEALER_VALUE:
            return not hand.is_over(self.STRONG_DEALER_THRESHOLD)
        return not hand.is_over(self.WEAK_DEALER_THRESHOLD)
