"""Save and restore tables through explicit snapshot models.

Hands are stored as their ordered cards only. Possible totals and rank
counts are rebuilt by replaying the cards on load, so restored hands can
never disagree with their cards.
"""

import dataclasses
import logging
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError

from blackjack_table.cards import Card, Deck, Rank, Suit
from blackjack_table.exceptions import SnapshotError
from blackjack_table.game.dealer import BETWEEN_ROUNDS, BlackjackDealer
from blackjack_table.game.state import RoundState
from blackjack_table.game.table import BlackjackTable, GameMode
from blackjack_table.hand import Hand
from blackjack_table.players import (
    AdvancedStrategy,
    BasicStrategy,
    HumanStrategy,
    IntermediateStrategy,
    Player,
    PlayerStrategy,
    Prompt,
)
from config import config

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1

PlayerKind = Literal["Basic", "Intermediate", "Advanced", "Human"]


class CardSnapshot(BaseModel):
    """A card as rank and suit enum values."""

    rank: int = Field(..., ge=Rank.TWO.value, le=Rank.ACE.value)
    suit: int = Field(..., ge=1, le=4)

    @classmethod
    def from_card(cls, card: Card) -> "CardSnapshot":
        return cls(rank=card.rank.value, suit=card.suit.value)

    def to_card(self) -> Card:
        return Card(Rank(self.rank), Suit(self.suit))


class HandSnapshot(BaseModel):
    """A hand as its cards in deal order."""

    cards: list[CardSnapshot] = Field(default_factory=list)

    @classmethod
    def from_hand(cls, hand: Hand) -> "HandSnapshot":
        return cls(cards=[CardSnapshot.from_card(c) for c in hand])

    def to_hand(self) -> Hand:
        return Hand.from_cards(c.to_card() for c in self.cards)


class PlayerSnapshot(BaseModel):
    """A seat: strategy kind, money, hand and card memory."""

    kind: PlayerKind
    balance: int
    bet: int = 0
    hand: HandSnapshot = Field(default_factory=HandSnapshot)
    running_count: int = 0
    cards_seen: int = Field(default=0, ge=0)
    dealer_card: CardSnapshot | None = None

    @classmethod
    def from_player(cls, player: Player) -> "PlayerSnapshot":
        return cls(
            kind=player.kind,
            balance=player.balance,
            bet=player.bet,
            hand=HandSnapshot.from_hand(player.hand),
            running_count=player.memory.running_count,
            cards_seen=player.memory.cards_seen,
            dealer_card=(
                CardSnapshot.from_card(player.dealer_card)
                if player.dealer_card is not None
                else None
            ),
        )

    def to_player(self, prompt: Prompt | None = None) -> Player:
        player = Player(
            strategy=_strategy_for(self.kind, prompt),
            balance=self.balance,
            hand=self.hand.to_hand(),
            bet=self.bet,
            dealer_card=self.dealer_card.to_card() if self.dealer_card else None,
        )
        player.memory.restore(self.running_count, self.cards_seen)
        return player


class TableSnapshot(BaseModel):
    """Everything needed to resume a table."""

    version: Literal[1] = SNAPSHOT_VERSION
    mode: GameMode
    state: str = RoundState.AWAITING_BETS.name
    round: int = Field(default=1, ge=1)
    min_bet: int = Field(..., ge=1)
    max_bet: int = Field(..., ge=1)
    record_average: bool = False
    had_human: bool = False
    players: list[PlayerSnapshot] = Field(default_factory=list)
    bets: list[int] = Field(default_factory=list)
    dealer_hand: HandSnapshot = Field(default_factory=HandSnapshot)
    # Bottom of the deck first, next card to deal last
    deck: list[CardSnapshot] = Field(default_factory=list)
    deck_sum: int = 0
    average: int = 0

    @classmethod
    def from_table(cls, table: BlackjackTable) -> "TableSnapshot":
        dealer = table.dealer
        return cls(
            mode=table.mode,
            state=dealer.state.name,
            round=dealer.round,
            min_bet=dealer.min_bet,
            max_bet=dealer.max_bet,
            record_average=dealer.record_average,
            had_human=table.had_human,
            players=[PlayerSnapshot.from_player(p) for p in dealer.players],
            bets=list(dealer.bets),
            dealer_hand=HandSnapshot.from_hand(dealer.hand),
            deck=[CardSnapshot.from_card(c) for c in dealer.deck],
            deck_sum=dealer.deck_sum,
            average=dealer.average,
        )

    def to_table(self, prompt: Prompt | None = None) -> BlackjackTable:
        """
        Rebuild a live table.

        Raises:
            SnapshotError: If the state is unknown, the bets do not match the
                seats, or a human seat has no prompt
        """
        try:
            state = RoundState[self.state]
        except KeyError:
            raise SnapshotError(f"Unknown round state: {self.state}") from None
        if state in BETWEEN_ROUNDS:
            if self.bets:
                raise SnapshotError(f"No bets can be outstanding in state {state.name}")
        elif len(self.bets) != len(self.players):
            raise SnapshotError(
                f"Expected one bet per seat, got {len(self.bets)} for {len(self.players)} seats"
            )
        if self.max_bet < self.min_bet:
            raise SnapshotError("max_bet is below min_bet")

        table_config = dataclasses.replace(
            config.table, min_bet=self.min_bet, max_bet=self.max_bet
        )
        deck = Deck()
        deck.restore([c.to_card() for c in self.deck])

        dealer = BlackjackDealer(
            table_config=table_config,
            record_average=self.record_average,
            deck=deck,
        )
        dealer.players = [p.to_player(prompt) for p in self.players]
        dealer.bets = list(self.bets)
        dealer.hand = self.dealer_hand.to_hand()
        dealer.round = self.round
        dealer.deck_sum = self.deck_sum
        dealer.average = self.average
        dealer._machine_state = state.name.lower()

        table = BlackjackTable(mode=self.mode, table_config=table_config, dealer=dealer)
        table.had_human = self.had_human
        return table


def _strategy_for(kind: str, prompt: Prompt | None) -> PlayerStrategy:
    if kind == "Basic":
        return BasicStrategy()
    if kind == "Intermediate":
        return IntermediateStrategy()
    if kind == "Advanced":
        return AdvancedStrategy()
    if prompt is None:
        raise SnapshotError("Restoring a human seat needs a prompt function")
    return HumanStrategy(prompt)


def snapshot_table(table: BlackjackTable) -> dict[str, Any]:
    """Encode a table as JSON-compatible data."""
    return TableSnapshot.from_table(table).model_dump(mode="json")


def restore_table(data: Any, prompt: Prompt | None = None) -> BlackjackTable:
    """
    Decode a table from :func:`snapshot_table` data.

    Raises:
        SnapshotError: If the data does not describe a valid table
    """
    try:
        snapshot = TableSnapshot.model_validate(data)
    except ValidationError as exc:
        raise SnapshotError(f"Invalid table snapshot: {exc}") from exc
    return snapshot.to_table(prompt)


def save_table(table: BlackjackTable, path: str | Path | None = None) -> Path:
    """Write a table snapshot as JSON and return the file path."""
    target = Path(path or config.table.save_file)
    target.write_text(TableSnapshot.from_table(table).model_dump_json(indent=2))
    logger.info("Table saved to %s", target)
    return target


def load_table(path: str | Path | None = None, prompt: Prompt | None = None) -> BlackjackTable:
    """
    Read a table snapshot written by :func:`save_table`.

    Raises:
        SnapshotError: If the file is missing or does not hold a valid table
    """
    source = Path(path or config.table.save_file)
    try:
        raw = source.read_text()
    except OSError as exc:
        raise SnapshotError(f"Cannot read {source}: {exc}") from exc

    try:
        snapshot = TableSnapshot.model_validate_json(raw)
    except ValidationError as exc:
        raise SnapshotError(f"Invalid table snapshot in {source}: {exc}") from exc

    table = snapshot.to_table(prompt)
    logger.info("Table loaded from %s (round %d)", source, table.round)
    return table
