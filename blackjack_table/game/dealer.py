"""Dealer: runs rounds for the seated players with a state machine."""

import logging
from dataclasses import dataclass
from pathlib import Path
from random import Random
from typing import Callable, Iterable

from transitions import Machine

from blackjack_table.cards import Card, Deck
from blackjack_table.exceptions import InvalidBetError, InvalidTransitionError
from blackjack_table.game.events import EventEmitter, EventType, TableEvent
from blackjack_table.game.settlement import Outcome, score_hand, settle_hand
from blackjack_table.game.state import RoundState
from blackjack_table.hand import Hand
from blackjack_table.players import Player
from config import TableConfig, config

logger = logging.getLogger(__name__)

PLAYER_STICK_THRESHOLD = 20
DEALER_STICK_THRESHOLD = 16

# Seats may change only while no bets are outstanding
BETWEEN_ROUNDS = (RoundState.AWAITING_BETS, RoundState.ROUND_COMPLETE, RoundState.GAME_OVER)


@dataclass(frozen=True)
class SeatResult:
    """Settlement of one seat for one round."""

    seat: int
    kind: str
    bet: int
    score: int
    amount: int
    balance: int
    eliminated: bool

    @property
    def outcome(self) -> Outcome:
        return Outcome.from_amount(self.amount)


class BlackjackDealer:
    """
    Deals, plays the house hand and settles bets.

    The dealer owns the deck, the active roster, the bets of the current
    round and the round counter. Each round walks the state machine:
    ``take_bets`` → ``deal_first_cards`` → ``play`` per seat →
    ``play_dealer`` → ``settle_bets``. Calling a step out of order raises
    :class:`~blackjack_table.exceptions.InvalidTransitionError`.
    """

    STATES = [s.name.lower() for s in RoundState]

    TRANSITIONS = [
        {"trigger": "_bets_taken", "source": "awaiting_bets", "dest": "dealing"},
        {"trigger": "_cards_dealt", "source": "dealing", "dest": "player_turns"},
        {"trigger": "_players_done", "source": "player_turns", "dest": "dealer_turn"},
        {"trigger": "_dealer_done", "source": "dealer_turn", "dest": "settlement"},
        {"trigger": "_settled", "source": "settlement", "dest": "round_complete"},
        {"trigger": "_next_round", "source": "round_complete", "dest": "awaiting_bets"},
        {"trigger": "_reopen", "source": "game_over", "dest": "awaiting_bets"},
        {"trigger": "_end_game", "source": "*", "dest": "game_over"},
    ]

    def __init__(
        self,
        table_config: TableConfig | None = None,
        record_average: bool = False,
        rng: Random | None = None,
        deck: Deck | None = None,
    ) -> None:
        """
        Initialize a dealer with a freshly shuffled deck.

        Args:
            table_config: Betting limits and deck rules (uses global config if not provided)
            record_average: Track the average profit/loss per deck and write it to a file
            rng: Random number generator for reproducible shuffles
            deck: Deck to deal from, used as-is (not reshuffled)
        """
        self.config = table_config or config.table
        self.record_average = record_average
        if deck is None:
            deck = Deck(rng=rng)
            deck.shuffle()
        self.deck = deck

        self.players: list[Player] = []
        self.hand = Hand()
        self.bets: list[int] = []
        self.round = 1
        self.deck_sum = 0
        self.average = 0
        self.last_results: list[SeatResult] = []
        self.events = EventEmitter()

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="awaiting_bets",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def state(self) -> RoundState:
        """Get current round state as enum."""
        return RoundState[self._machine_state.upper()]  # type: ignore

    @property
    def min_bet(self) -> int:
        return self.config.min_bet

    @property
    def max_bet(self) -> int:
        return self.config.max_bet

    def subscribe(
        self,
        handler: Callable[[TableEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        self.events.subscribe(handler, event_type)

    def assign_players(self, players: Iterable[Player]) -> None:
        """Seat a roster, reopening the table if it had emptied."""
        self._require_between_rounds()
        self.players = list(players)
        if self.state == RoundState.GAME_OVER and self.players:
            self._reopen()

    def seat(self, player: Player) -> None:
        self.assign_players([*self.players, player])

    def unseat(self, player: Player) -> bool:
        self._require_between_rounds()
        if player not in self.players:
            return False
        self.players = [p for p in self.players if p is not player]
        return True

    def is_out_of_balance(self, player: Player) -> bool:
        return player.balance < self.min_bet

    def seat_number(self, player: Player) -> int:
        return self.players.index(player) + 1

    def take_bets(self) -> list[int]:
        """
        Collect a bet from every seat that can still afford the minimum.

        Seats below the minimum are dropped before betting. A bet outside
        the table limits is refused and requested again.

        Returns:
            The accepted bets, in seat order

        Raises:
            InvalidBetError: If a seat keeps betting outside the limits
        """
        self._require(RoundState.AWAITING_BETS)
        self._narrate(f"Round {self.round}:")
        self.bets = []
        roster: list[Player] = []

        for player in self.players:
            if self.is_out_of_balance(player):
                self._narrate(
                    f"Player {self.seat_number(player)} cannot afford the minimum bet "
                    "and leaves the table."
                )
                self.events.emit(
                    EventType.PLAYER_ELIMINATED,
                    seat=self.seat_number(player),
                    balance=player.balance,
                )
                continue
            roster.append(player)
            self.bets.append(self._collect_bet(player, len(roster)))

        self.players = roster
        if not self.players:
            self._finish_game()
            return []

        self._bets_taken()
        return list(self.bets)

    def _collect_bet(self, player: Player, seat: int) -> int:
        bet = player.make_bet(self.min_bet, self.max_bet)
        attempts = 1
        while not self.min_bet <= bet <= self.max_bet:
            logger.warning(
                "Player %d bet %d outside limits %d-%d", seat, bet, self.min_bet, self.max_bet
            )
            self.events.emit(EventType.BET_REJECTED, seat=seat, amount=bet)
            if attempts >= self.config.bet_attempts:
                raise InvalidBetError(bet, self.min_bet, self.max_bet)
            bet = player.make_bet(self.min_bet, self.max_bet)
            attempts += 1

        self._narrate(f"Player {seat} (balance {player.balance}) bets {bet}.")
        self.events.emit(EventType.BET_PLACED, seat=seat, amount=bet)
        return bet

    def deal_first_cards(self) -> None:
        """Deal the dealer's up card, then two cards to every seat."""
        self._require(RoundState.DEALING)
        self._check_deck()
        self.events.emit(EventType.ROUND_STARTED, round=self.round, seats=len(self.players))

        card = self._draw()
        self.hand.add_card(card)
        self.events.emit(EventType.CARD_DEALT, hand="dealer", card=str(card))

        for player in self.players:
            player.view_dealer_card(card)
            for _ in range(2):
                dealt = self._draw()
                player.take_card(dealt)
                self.events.emit(
                    EventType.CARD_DEALT,
                    hand=f"player {self.seat_number(player)}",
                    card=str(dealt),
                )

        self._cards_dealt()

    def play(self, player: Player) -> int:
        """
        Let one seat hit until it sticks or every total is over 20.

        Returns:
            The seat's score
        """
        self._require(RoundState.PLAYER_TURNS)
        self._check_deck()
        seat = self.seat_number(player)

        while not player.hand.is_over(PLAYER_STICK_THRESHOLD):
            if not player.hit():
                self._narrate(f"Player {seat} sticks on {player.hand}.")
                self.events.emit(EventType.PLAYER_STICK, seat=seat, score=player.hand_total)
                break
            card = self._draw()
            player.take_card(card)
            self._narrate(f"Player {seat} hits: {card}.")
            self.events.emit(EventType.PLAYER_HIT, seat=seat, card=str(card))

        return self.score_hand(player.hand)

    def play_dealer(self) -> int:
        """
        Play the house hand: hit while not over 16.

        Returns:
            The dealer's score
        """
        self._players_done()
        self._check_deck()

        while not self.hand.is_over(DEALER_STICK_THRESHOLD):
            card = self._draw()
            self.hand.add_card(card)
            self._narrate(f"Dealer hits: {card}.")
            self.events.emit(EventType.DEALER_HITS, card=str(card))

        score = self.score_hand(self.hand)
        self._narrate(f"Dealer sticks on {self.hand}.")
        self.events.emit(EventType.DEALER_STANDS, score=score, bust=self.hand.is_over(21))
        return score

    def score_hand(self, hand: Hand) -> int:
        return score_hand(hand)

    def settle_bets(self) -> list[int]:
        """
        Settle every seat against the dealer and prepare the next round.

        Balances are updated, seats that can no longer afford the minimum
        leave the roster, the remaining seats see every card played, and
        the dealer's hand is cleared.

        Returns:
            Signed settled amounts, in seat order
        """
        self._dealer_done()

        dealer_hand = self.hand
        self.hand = Hand()
        cards_played: list[Card] = list(dealer_hand)

        amounts: list[int] = []
        results: list[SeatResult] = []
        next_roster: list[Player] = []

        for seat, (player, bet) in enumerate(zip(self.players, self.bets), start=1):
            hand = player.new_hand()
            amount = settle_hand(dealer_hand, hand, bet)
            player.settle_bet(amount)
            self.deck_sum += amount
            amounts.append(amount)
            cards_played.extend(hand)

            eliminated = self.is_out_of_balance(player)
            result = SeatResult(
                seat=seat,
                kind=player.kind,
                bet=bet,
                score=self.score_hand(hand),
                amount=amount,
                balance=player.balance,
                eliminated=eliminated,
            )
            results.append(result)
            self._report(result, hand)

            if eliminated:
                self._narrate(f"Player {seat} is out of funds and leaves the table.")
                self.events.emit(EventType.PLAYER_ELIMINATED, seat=seat, balance=player.balance)
            else:
                next_roster.append(player)

        self.players = next_roster
        for player in self.players:
            player.view_cards(cards_played)

        self.bets = []
        self.last_results = results
        self.events.emit(EventType.ROUND_ENDED, round=self.round, amounts=amounts)
        self.round += 1

        self._settled()
        if self.players:
            self._next_round()
        else:
            self._finish_game()
        return amounts

    def play_round(self) -> list[int]:
        """
        Run one complete round.

        Returns:
            Signed settled amounts, in seat order (empty if nobody could bet)
        """
        self.take_bets()
        if self.state == RoundState.GAME_OVER:
            return []

        self.deal_first_cards()
        for player in self.players:
            self.play(player)
        self.play_dealer()
        return self.settle_bets()

    def _report(self, result: SeatResult, hand: Hand) -> None:
        event_type = {
            Outcome.WON: EventType.PLAYER_WINS,
            Outcome.LOST: EventType.PLAYER_LOSES,
            Outcome.PUSHED: EventType.PUSH,
        }[result.outcome]
        self._narrate(
            f"Player {result.seat} ({result.kind}): {hand}. "
            f"Bet {result.outcome.value}: {result.amount}. New balance: {result.balance}."
        )
        self.events.emit(
            event_type,
            seat=result.seat,
            amount=result.amount,
            balance=result.balance,
        )

    def _require(self, state: RoundState) -> None:
        if self.state != state:
            raise InvalidTransitionError(f"Expected state {state}, table is in {self.state}")

    def _require_between_rounds(self) -> None:
        if self.state not in BETWEEN_ROUNDS:
            raise InvalidTransitionError(f"Cannot change seats while the table is in {self.state}")

    def _finish_game(self) -> None:
        self._narrate("Every player is out of funds.")
        self.events.emit(EventType.GAME_ENDED, round=self.round)
        self._end_game()

    def _draw(self) -> Card:
        if not len(self.deck):
            self._reshuffle()
        return self.deck.deal()

    def _check_deck(self) -> None:
        """Rebuild the deck once it falls below the reshuffle fraction."""
        if self.deck.below_fraction(self.config.reshuffle_fraction):
            self._reshuffle()

    def _reshuffle(self) -> None:
        self.deck.reset()
        self.deck.shuffle()
        logger.info("Deck rebuilt and shuffled in round %d", self.round)
        self.events.emit(EventType.DECK_RESHUFFLED, round=self.round)

        if self.record_average:
            self._record_average()

        for player in self.players:
            player.new_deck()

    def _record_average(self) -> None:
        """Fold the finished deck's profit/loss into the running average."""
        if self.average == 0:
            self.average = self.deck_sum
        # Truncates toward zero
        self.average = int((self.average + self.deck_sum) / 2)
        self.deck_sum = 0

        logger.info("Average profit/loss per deck: %d", self.average)
        self.events.emit(EventType.AVERAGE_RECORDED, average=self.average)
        try:
            Path(self.config.average_file).write_text(str(self.average))
        except OSError:
            logger.exception("Could not write average to %s", self.config.average_file)

    def _narrate(self, message: str) -> None:
        # Averaging runs simulate many decks, keep them quiet
        logger.log(logging.DEBUG if self.record_average else logging.INFO, message)

    def __str__(self) -> str:
        return f"Dealer hand {self.hand}, value {self.score_hand(self.hand)}"
