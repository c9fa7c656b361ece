"""Blackjack table simulator engine - UI-agnostic."""

from blackjack_table.cards import Card, Deck, Rank, Suit
from blackjack_table.hand import Hand

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "Hand",
]
