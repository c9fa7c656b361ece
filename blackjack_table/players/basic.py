"""Fixed-threshold strategy."""

from blackjack_table.cards import Card
from blackjack_table.hand import Hand
from blackjack_table.memory import CardMemory
from blackjack_table.players.base import PlayerStrategy


class BasicStrategy(PlayerStrategy):
    """Mimic the dealer: hit until every total is over 16, always bet 10."""

    STAND_THRESHOLD = 16

    @property
    def kind(self) -> str:
        return "Basic"

    def decide_hit(
        self,
        hand: Hand,
        dealer_card: Card | None,
        memory: CardMemory,
    ) -> bool:
        return not hand.is_over(self.STAND_THRESHOLD)
