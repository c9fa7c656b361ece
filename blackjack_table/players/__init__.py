"""Seats and the strategies that drive them."""

from blackjack_table.players.base import PlayerStrategy
from blackjack_table.players.basic import BasicStrategy
from blackjack_table.players.intermediate import IntermediateStrategy
from blackjack_table.players.advanced import AdvancedStrategy
from blackjack_table.players.human import HumanStrategy, Prompt
from blackjack_table.players.player import Player

__all__ = [
    "PlayerStrategy",
    "BasicStrategy",
    "IntermediateStrategy",
    "AdvancedStrategy",
    "HumanStrategy",
    "Prompt",
    "Player",
]
