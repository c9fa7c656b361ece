"""Round settlement: payouts for every seat against the dealer."""

from enum import Enum
from typing import Iterable

from blackjack_table.hand import Hand

BUST_THRESHOLD = 21


class Outcome(Enum):
    """How a settled bet ended for the player."""

    WON = "won"
    LOST = "lost"
    PUSHED = "pushed"

    @classmethod
    def from_amount(cls, amount: int) -> "Outcome":
        if amount > 0:
            return cls.WON
        if amount < 0:
            return cls.LOST
        return cls.PUSHED


def score_hand(hand: Hand) -> int:
    """Return the comparable score of a hand (may exceed 21 on a bust)."""
    return hand.highest_value_at_most(BUST_THRESHOLD)


def settle_hand(dealer_hand: Hand, player_hand: Hand, bet: int) -> int:
    """
    Settle one player's bet against the dealer.

    Rules are applied in order, so a busted player loses even when the
    dealer busts too. Blackjack pays even money.

    Returns:
        +bet if the player wins, -bet if they lose, 0 on a push
    """
    if player_hand.is_over(BUST_THRESHOLD):
        return -bet

    player_blackjack = player_hand.is_blackjack()
    dealer_blackjack = dealer_hand.is_blackjack()

    if dealer_hand.is_over(BUST_THRESHOLD) or (player_blackjack and not dealer_blackjack):
        return bet

    if (dealer_blackjack and not player_blackjack) or (
        score_hand(player_hand) < score_hand(dealer_hand)
    ):
        return -bet

    return 0


def settle_round(
    dealer_hand: Hand,
    player_bets: Iterable[tuple[Hand, int]],
) -> list[int]:
    """
    Settle every (hand, bet) pair of a round.

    Returns:
        Signed settled amounts, in the order the pairs were given
    """
    return [settle_hand(dealer_hand, hand, bet) for hand, bet in player_bets]
