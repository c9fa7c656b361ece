"""Round engine: events, states, settlement, dealer and table."""

from blackjack_table.game.events import EventEmitter, EventType, TableEvent
from blackjack_table.game.state import RoundState
from blackjack_table.game.settlement import Outcome, score_hand, settle_hand, settle_round
from blackjack_table.game.dealer import BlackjackDealer, SeatResult
from blackjack_table.game.table import BlackjackTable, GameMode, TableStatus

__all__ = [
    "EventEmitter",
    "EventType",
    "TableEvent",
    "RoundState",
    "Outcome",
    "score_hand",
    "settle_hand",
    "settle_round",
    "BlackjackDealer",
    "SeatResult",
    "BlackjackTable",
    "GameMode",
    "TableStatus",
]
