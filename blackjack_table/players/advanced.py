"""Card-counting strategy."""

from blackjack_table.memory import CardMemory
from blackjack_table.players.intermediate import IntermediateStrategy


class AdvancedStrategy(IntermediateStrategy):
    """
    Intermediate play with bets scaled by the running count.

    Bets the base amount while the count is zero or negative and
    ``base * count`` once the deck turns rich in high cards.
    """

    @property
    def kind(self) -> str:
        return "Advanced"

    def make_bet(self, min_bet: int, max_bet: int, memory: CardMemory) -> int:
        count = memory.running_count
        if count <= 0:
            return self.DEFAULT_BET
        return self.DEFAULT_BET * count
