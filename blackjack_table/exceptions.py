"""Table errors.

Busts, blackjacks and pushes are ordinary outcomes and never raise. These
cover misbehaving collaborators and unreadable saved state.
"""

from transitions import MachineError

# Raised by the round state machine when a step is called out of order.
InvalidTransitionError = MachineError


class BlackjackError(Exception):
    """Base class for table errors."""


class InvalidBetError(BlackjackError):
    """A seat kept offering bets outside the table limits."""

    def __init__(self, amount: int, min_bet: int, max_bet: int) -> None:
        self.amount = amount
        self.min_bet = min_bet
        self.max_bet = max_bet
        super().__init__(
            f"Bet of {amount} is outside the table limits ({min_bet}-{max_bet})"
        )


class SnapshotError(BlackjackError):
    """A saved table could not be read or validated."""
