"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, ConfigDict, Field
from typing import Literal


class NewTableRequest(BaseModel):
    """Request to open a simulated table."""

    mode: Literal["basic", "intermediate", "advanced"] = "basic"
    seed: int | None = Field(default=None, description="Seed for reproducible shuffles")


class RoundsRequest(BaseModel):
    """Request to simulate rounds."""

    count: int = Field(default=1, ge=1, le=1000, description="Rounds to play")


class CardResponse(BaseModel):
    """Card representation."""

    model_config = ConfigDict(from_attributes=True)

    rank: str
    suit: str
    value: int


class HandResponse(BaseModel):
    """Hand representation."""

    cards: list[CardResponse]
    possible_totals: list[int]
    score: int
    is_blackjack: bool
    is_bust: bool


class PlayerResponse(BaseModel):
    """A seat at the table."""

    seat: int
    kind: str
    balance: int
    running_count: int
    hand: HandResponse


class TableStateResponse(BaseModel):
    """Current table state."""

    mode: str
    state: str
    status: Literal["running", "all_broke", "humans_broke"]
    round: int
    min_bet: int
    max_bet: int
    cards_remaining: int
    dealer_hand: HandResponse
    players: list[PlayerResponse]


class SeatResultResponse(BaseModel):
    """Settlement of one seat."""

    seat: int
    kind: str
    bet: int
    score: int
    amount: int
    outcome: Literal["won", "lost", "pushed"]
    balance: int
    eliminated: bool


class RoundResponse(BaseModel):
    """One simulated round."""

    round: int
    results: list[SeatResultResponse]


class RoundsResponse(BaseModel):
    """Result of a batch of simulated rounds."""

    rounds: list[RoundResponse]
    table: TableStateResponse
