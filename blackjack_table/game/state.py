"""Round state enumeration."""

from enum import Enum, auto


class RoundState(Enum):
    """
    Round state machine states.

    Flow: AWAITING_BETS → DEALING → PLAYER_TURNS → DEALER_TURN → SETTLEMENT → ROUND_COMPLETE
    """

    AWAITING_BETS = auto()
    DEALING = auto()

    # One sub-turn per seat, each cycling hit/stick
    PLAYER_TURNS = auto()

    # Dealer hits while not over 16
    DEALER_TURN = auto()

    SETTLEMENT = auto()
    ROUND_COMPLETE = auto()

    # Every seat is out of funds; seating players reopens the table
    GAME_OVER = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()
