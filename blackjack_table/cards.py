"""Card and Deck classes - immutable card representations."""

from dataclasses import dataclass
from enum import Enum, auto
from functools import total_ordering
from random import Random
from typing import Iterator


class Suit(Enum):
    """Card suits, in sort order."""

    CLUBS = auto()
    DIAMONDS = auto()
    HEARTS = auto()
    SPADES = auto()

    def __str__(self) -> str:
        symbols = {
            Suit.CLUBS: "♣",
            Suit.DIAMONDS: "♦",
            Suit.HEARTS: "♥",
            Suit.SPADES: "♠",
        }
        return symbols[self]


class Rank(Enum):
    """Card ranks from TWO to ACE with blackjack values."""

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    def __str__(self) -> str:
        if self.value <= 10:
            return str(self.value)
        return {
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
            Rank.ACE: "A",
        }[self]

    @property
    def blackjack_value(self) -> int:
        """Return the blackjack point value (Ace = 11, face cards = 10)."""
        if self.value <= 10:
            return self.value
        if self == Rank.ACE:
            return 11
        return 10

    @property
    def is_ace(self) -> bool:
        return self == Rank.ACE

    @property
    def previous(self) -> "Rank":
        """Return the rank below this one, wrapping TWO around to ACE."""
        ranks = list(Rank)
        return ranks[ranks.index(self) - 1]


@total_ordering
@dataclass(frozen=True, slots=True)
class Card:
    """
    Immutable playing card.

    The natural ordering sorts higher ranks first and breaks ties by suit,
    so ``sorted(cards)`` yields a hand in descending rank order.
    """

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        if self.rank != other.rank:
            return self.rank.value > other.rank.value
        return self.suit.value < other.suit.value

    @property
    def value(self) -> int:
        """Return the blackjack point value."""
        return self.rank.blackjack_value

    @property
    def is_ace(self) -> bool:
        return self.rank.is_ace

    @staticmethod
    def ascending_key(card: "Card") -> tuple[int, int]:
        """Sort key for ascending rank, then suit."""
        return (card.rank.value, card.suit.value)

    @staticmethod
    def suit_key(card: "Card") -> tuple[int, int]:
        """Sort key for suit, then ascending rank."""
        return (card.suit.value, card.rank.value)

    @staticmethod
    def is_blackjack_pair(a: "Card", b: "Card") -> bool:
        """Check whether two cards sum to 21."""
        return a.value + b.value == 21

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like '2♣', 'AS', 'Kh'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        rank_map = {
            "2": Rank.TWO,
            "3": Rank.THREE,
            "4": Rank.FOUR,
            "5": Rank.FIVE,
            "6": Rank.SIX,
            "7": Rank.SEVEN,
            "8": Rank.EIGHT,
            "9": Rank.NINE,
            "10": Rank.TEN,
            "T": Rank.TEN,
            "J": Rank.JACK,
            "Q": Rank.QUEEN,
            "K": Rank.KING,
            "A": Rank.ACE,
        }

        suit_map = {
            "C": Suit.CLUBS,
            "♣": Suit.CLUBS,
            "D": Suit.DIAMONDS,
            "♦": Suit.DIAMONDS,
            "H": Suit.HEARTS,
            "♥": Suit.HEARTS,
            "S": Suit.SPADES,
            "♠": Suit.SPADES,
        }

        if rank_str not in rank_map:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in suit_map:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(rank_map[rank_str], suit_map[suit_str])


class Deck:
    """A single 52-card deck, dealt from the top (end of the list)."""

    TOTAL_CARDS = 52

    def __init__(self, rng: Random | None = None) -> None:
        self._rng = rng or Random()
        self._cards: list[Card] = []
        self.reset()

    def reset(self) -> None:
        """Reset deck to all 52 cards in order."""
        self._cards = [Card(rank, suit) for suit in Suit for rank in Rank]

    def shuffle(self) -> None:
        """Shuffle the remaining cards in place (Fisher-Yates)."""
        self._rng.shuffle(self._cards)

    def deal(self) -> Card:
        """Deal a card from the top of the deck."""
        if not self._cards:
            raise IndexError("Cannot deal from empty deck")
        return self._cards.pop()

    def restore(self, cards: list[Card]) -> None:
        """Replace the remaining cards, top of the deck last."""
        self._cards = list(cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    @property
    def cards_remaining(self) -> int:
        return len(self._cards)

    @property
    def total_cards(self) -> int:
        return self.TOTAL_CARDS

    def below_fraction(self, fraction: float) -> bool:
        """Check whether fewer than ``fraction`` of a full deck remain."""
        return len(self._cards) < int(self.TOTAL_CARDS * fraction)
