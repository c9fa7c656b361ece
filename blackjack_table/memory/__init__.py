"""Card memory used by counting strategies."""

from blackjack_table.memory.base import CardMemory
from blackjack_table.memory.hilo import HiLoMemory

__all__ = [
    "CardMemory",
    "HiLoMemory",
]
