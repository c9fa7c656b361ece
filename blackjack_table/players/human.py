"""Interactive strategy backed by a prompt function."""

from typing import Callable

from blackjack_table.cards import Card
from blackjack_table.hand import Hand
from blackjack_table.memory import CardMemory
from blackjack_table.players.base import PlayerStrategy

# Shows a message and returns the user's reply, e.g. ``input``
Prompt = Callable[[str], str]


class HumanStrategy(PlayerStrategy):
    """Ask a person for every decision."""

    def __init__(self, prompt: Prompt) -> None:
        self._prompt = prompt

    @property
    def kind(self) -> str:
        return "Human"

    @property
    def is_human(self) -> bool:
        return True

    def decide_hit(
        self,
        hand: Hand,
        dealer_card: Card | None,
        memory: CardMemory,
    ) -> bool:
        showing = f"Dealer shows {dealer_card}. " if dealer_card is not None else ""
        message = f"{showing}Your hand: {hand}\nHit? (Y/N) "
        while True:
            answer = self._prompt(message).strip().upper()
            if answer in ("Y", "N"):
                return answer == "Y"
            message = "Please answer Y or N: "

    def make_bet(self, min_bet: int, max_bet: int, memory: CardMemory) -> int:
        message = f"Place your bet ({min_bet}-{max_bet}): "
        while True:
            answer = self._prompt(message).strip()
            try:
                bet = int(answer)
            except ValueError:
                message = f"Bets are whole numbers ({min_bet}-{max_bet}): "
                continue
            if min_bet <= bet <= max_bet:
                return bet
            message = f"Bet must be between {min_bet} and {max_bet}: "
