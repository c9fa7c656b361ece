"""Table: roster limits, game presets and the multi-round loop."""

import logging
from enum import Enum
from random import Random

from blackjack_table.game.dealer import BlackjackDealer
from blackjack_table.players import (
    AdvancedStrategy,
    BasicStrategy,
    HumanStrategy,
    IntermediateStrategy,
    Player,
    PlayerStrategy,
    Prompt,
)
from config import TableConfig, config

logger = logging.getLogger(__name__)


class GameMode(Enum):
    """Preset tables."""

    BASIC = "basic"
    INTERMEDIATE = "intermediate"
    HUMAN = "human"
    ADVANCED = "advanced"

    @property
    def records_average(self) -> bool:
        return self == GameMode.ADVANCED


class TableStatus(Enum):
    """Whether a table can keep playing."""

    RUNNING = "running"
    ALL_BROKE = "all_broke"
    HUMANS_BROKE = "humans_broke"


class BlackjackTable:
    """
    A dealer and up to ``max_players`` seats.

    The roster lives with the dealer, which drops seats that run out of
    funds; the table only enforces seating limits and drives rounds.
    """

    def __init__(
        self,
        mode: GameMode = GameMode.BASIC,
        table_config: TableConfig | None = None,
        record_average: bool | None = None,
        rng: Random | None = None,
        dealer: BlackjackDealer | None = None,
    ) -> None:
        self.mode = mode
        self.config = table_config or config.table
        if record_average is None:
            record_average = mode.records_average
        self.dealer = dealer or BlackjackDealer(
            table_config=self.config,
            record_average=record_average,
            rng=rng,
        )
        self.had_human = False

    @classmethod
    def preset(
        cls,
        mode: GameMode,
        prompt: Prompt | None = None,
        table_config: TableConfig | None = None,
        rng: Random | None = None,
    ) -> "BlackjackTable":
        """
        Build one of the preset tables.

        Args:
            mode: Which preset to seat
            prompt: Input function for the human seat (required for HUMAN)
            table_config: Table limits
            rng: Random number generator for reproducible shuffles
        """
        strategies: list[PlayerStrategy]
        if mode == GameMode.BASIC:
            strategies = [BasicStrategy() for _ in range(4)]
        elif mode == GameMode.INTERMEDIATE:
            strategies = [IntermediateStrategy() for _ in range(4)]
        elif mode == GameMode.HUMAN:
            if prompt is None:
                raise ValueError("A human table needs a prompt function")
            strategies = [BasicStrategy(), HumanStrategy(prompt)]
        else:
            strategies = [BasicStrategy(), IntermediateStrategy(), AdvancedStrategy()]

        table = cls(mode=mode, table_config=table_config, rng=rng)
        for strategy in strategies:
            table.add_player(Player(strategy=strategy, balance=table.config.starting_balance))
        return table

    @property
    def players(self) -> list[Player]:
        return self.dealer.players

    @property
    def round(self) -> int:
        return self.dealer.round

    def add_player(self, player: Player) -> bool:
        """
        Seat a player.

        Returns:
            False if the table is full or the player cannot cover more than the minimum bet

        Raises:
            InvalidTransitionError: If bets for the current round are outstanding
        """
        if len(self.players) >= self.config.max_players:
            return False
        if player.balance - self.config.min_bet <= 0:
            return False
        self.dealer.seat(player)
        if player.is_human:
            self.had_human = True
        return True

    def remove_player(self, player: Player) -> bool:
        return self.dealer.unseat(player)

    def human_count(self) -> int:
        return sum(1 for p in self.players if p.is_human)

    @property
    def status(self) -> TableStatus:
        if not self.players:
            return TableStatus.ALL_BROKE
        if self.had_human and self.human_count() == 0:
            return TableStatus.HUMANS_BROKE
        return TableStatus.RUNNING

    def play_round(self) -> list[int]:
        return self.dealer.play_round()

    def run(self, rounds: int) -> TableStatus:
        """
        Play up to ``rounds`` rounds.

        Stops early once every seat is out of funds, or once a table that
        seated a human has no human left.
        """
        if rounds < 1:
            raise ValueError("rounds must be at least 1")

        for _ in range(rounds):
            if self.status != TableStatus.RUNNING:
                break
            self.play_round()

        status = self.status
        if status != TableStatus.RUNNING:
            logger.info("Game over after round %d: %s", self.round - 1, status.value)
        return status

    def __str__(self) -> str:
        if not self.players:
            return "No player is currently assigned to the table."
        lines = ["Players at the table:"]
        lines.extend(f"Player {i}: {p}" for i, p in enumerate(self.players, start=1))
        return "\n".join(lines)
