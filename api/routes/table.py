"""Table API endpoints."""

from random import Random
from typing import Annotated, Any

from fastapi import APIRouter, Body, Header, HTTPException

from api.schemas import (
    CardResponse,
    HandResponse,
    NewTableRequest,
    PlayerResponse,
    RoundResponse,
    RoundsRequest,
    RoundsResponse,
    SeatResultResponse,
    TableStateResponse,
)
from api.session import (
    close_session,
    open_session,
    read_snapshot,
    verify_token,
    write_snapshot,
)
from blackjack_table.exceptions import SnapshotError
from blackjack_table.game import BlackjackTable, GameMode, RoundState, SeatResult, TableStatus
from blackjack_table.hand import Hand
from blackjack_table.persistence import restore_table, snapshot_table

router = APIRouter()

SessionToken = Annotated[str, Header(alias="X-Session-ID")]

# Rounds are played whole, so stored tables always sit between rounds
RESUMABLE_STATES = (RoundState.AWAITING_BETS, RoundState.GAME_OVER)


def _require_valid(token: str) -> None:
    if not verify_token(token):
        raise HTTPException(status_code=401, detail="Invalid or expired session")


async def _load_table(token: str) -> BlackjackTable:
    """Load the session's table or fail with 401/404."""
    _require_valid(token)
    snapshot = await read_snapshot(token)
    if snapshot is None:
        raise HTTPException(status_code=404, detail="No table for this session")
    try:
        return restore_table(snapshot)
    except SnapshotError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc


def _hand_to_response(hand: Hand) -> HandResponse:
    return HandResponse(
        cards=[
            CardResponse(rank=str(c.rank), suit=str(c.suit), value=c.value)
            for c in hand
        ],
        possible_totals=hand.possible_totals,
        score=hand.highest_value_at_most(21),
        is_blackjack=hand.is_blackjack(),
        is_bust=hand.is_over(21),
    )


def _table_state_response(table: BlackjackTable) -> TableStateResponse:
    dealer = table.dealer
    return TableStateResponse(
        mode=table.mode.value,
        state=dealer.state.name,
        status=table.status.value,
        round=dealer.round,
        min_bet=dealer.min_bet,
        max_bet=dealer.max_bet,
        cards_remaining=dealer.deck.cards_remaining,
        dealer_hand=_hand_to_response(dealer.hand),
        players=[
            PlayerResponse(
                seat=seat,
                kind=player.kind,
                balance=player.balance,
                running_count=player.memory.running_count,
                hand=_hand_to_response(player.hand),
            )
            for seat, player in enumerate(table.players, start=1)
        ],
    )


def _result_to_response(result: SeatResult) -> SeatResultResponse:
    return SeatResultResponse(
        seat=result.seat,
        kind=result.kind,
        bet=result.bet,
        score=result.score,
        amount=result.amount,
        outcome=result.outcome.value,
        balance=result.balance,
        eliminated=result.eliminated,
    )


@router.post("/new")
async def new_table(
    request: NewTableRequest | None = None,
    session_id: Annotated[str | None, Header(alias="X-Session-ID")] = None,
) -> dict[str, str]:
    """Open a preset table, in a new session unless a valid one is given."""
    request = request or NewTableRequest()
    rng = Random(request.seed) if request.seed is not None else None
    snapshot = snapshot_table(BlackjackTable.preset(GameMode(request.mode), rng=rng))

    if session_id is None:
        session_id = await open_session(snapshot)
    else:
        _require_valid(session_id)
        await write_snapshot(session_id, snapshot)
    return {"session_id": session_id}


@router.get("/state")
async def get_state(session_id: SessionToken) -> TableStateResponse:
    """Get current table state."""
    table = await _load_table(session_id)
    return _table_state_response(table)


@router.post("/rounds")
async def play_rounds(request: RoundsRequest, session_id: SessionToken) -> RoundsResponse:
    """Simulate rounds until the count is reached or the table empties."""
    table = await _load_table(session_id)

    rounds: list[RoundResponse] = []
    for _ in range(request.count):
        if table.status != TableStatus.RUNNING:
            break
        round_number = table.round
        table.play_round()
        rounds.append(
            RoundResponse(
                round=round_number,
                results=[_result_to_response(r) for r in table.dealer.last_results],
            )
        )

    await write_snapshot(session_id, snapshot_table(table))
    return RoundsResponse(rounds=rounds, table=_table_state_response(table))


@router.get("/snapshot")
async def get_snapshot(session_id: SessionToken) -> dict[str, Any]:
    """Export the session's table snapshot."""
    table = await _load_table(session_id)
    return snapshot_table(table)


@router.post("/snapshot")
async def put_snapshot(
    snapshot: Annotated[dict[str, Any], Body()],
    session_id: SessionToken,
) -> TableStateResponse:
    """Replace the session's table with an uploaded snapshot."""
    _require_valid(session_id)
    try:
        table = restore_table(snapshot)
    except SnapshotError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    if table.dealer.state not in RESUMABLE_STATES:
        raise HTTPException(
            status_code=400,
            detail=f"Tables can only be imported between rounds, not in {table.dealer.state.name}",
        )

    await write_snapshot(session_id, snapshot_table(table))
    return _table_state_response(table)


@router.delete("/session")
async def leave_table(session_id: SessionToken) -> dict[str, str]:
    """Close the session and discard its table."""
    _require_valid(session_id)
    await close_session(session_id)
    return {"status": "closed"}
