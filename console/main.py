"""Console entry point: the table menu loop."""

import logging
from enum import IntEnum
from pathlib import Path

import click

from blackjack_table.exceptions import SnapshotError
from blackjack_table.game import BlackjackTable, GameMode, TableStatus
from blackjack_table.persistence import load_table, save_table
from config import config


class MenuOption(IntEnum):
    CONTINUE = 1
    SAVE = 2
    LOAD = 3
    END = 4


MENU = (
    "\nPlease select one of the following options:\n"
    "1. Continue Game.\n"
    "2. Save Game.\n"
    "3. Load Game.\n"
    "4. End Game."
)

GAME_OVER_MESSAGES = {
    TableStatus.ALL_BROKE: "Game Over! Every player is out of funds.",
    TableStatus.HUMANS_BROKE: "Game Over! Every human player is out of funds.",
}


def human_prompt(message: str) -> str:
    """Ask the person at the keyboard."""
    return click.prompt(message, type=str, prompt_suffix="", show_default=False)


def configure_logging() -> None:
    logging.basicConfig(level=config.logging.level, format=config.logging.format)


def run_menu(table: BlackjackTable, save_path: Path) -> BlackjackTable:
    """
    Offer the menu until the player ends the game or the table empties.

    Returns:
        The table as it stood when the loop ended (a load replaces it)
    """
    if table.status != TableStatus.RUNNING:
        click.echo("Table is empty. Game cannot start.")
        return table

    click.echo(f"Welcome to a new game of {table.mode.value.title()} Blackjack")
    while True:
        click.echo(MENU)
        option = MenuOption(click.prompt("Input", type=click.IntRange(1, 4)))

        if option == MenuOption.END:
            break
        if option == MenuOption.SAVE:
            save_table(table, save_path)
            click.echo(f"Game saved to {save_path}.")
            continue
        if option == MenuOption.LOAD:
            try:
                table = load_table(save_path, prompt=human_prompt)
            except SnapshotError as exc:
                click.echo(f"Could not load game: {exc}")
            else:
                click.echo(f"Game loaded, round {table.round}.")
            continue

        rounds = click.prompt(
            "How many hands would you like to simulate?",
            type=click.IntRange(min=1),
        )
        if table.dealer.record_average:
            click.echo("Average profit/loss per deck is written to "
                       f"{table.config.average_file}.")
        status = table.run(rounds)
        if status != TableStatus.RUNNING:
            click.echo(GAME_OVER_MESSAGES[status])
            break

    click.echo("Thank you for playing Blackjack!")
    return table


@click.command()
@click.argument(
    "mode",
    type=click.Choice([m.value for m in GameMode]),
    default=GameMode.BASIC.value,
)
@click.option(
    "--save-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Where Save/Load keep the table.",
)
def main(mode: str, save_file: Path | None) -> None:
    """Play a table of blackjack in MODE (basic, intermediate, human, advanced)."""
    configure_logging()
    table = BlackjackTable.preset(GameMode(mode), prompt=human_prompt)
    run_menu(table, save_file or Path(config.table.save_file))


if __name__ == "__main__":
    main()
