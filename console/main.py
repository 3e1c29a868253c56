"""Main entry point for the localjack console game."""

import logging
from random import Random

import click

from blackjack import BlackjackError, Player, Table
from config import load_config
from console.event_log import attach_event_logger
from console.input_handler import prompt_play_again
from console.session import play_round

EXIT_OK = 0
EXIT_EXECUTION_ERROR = 1
EXIT_INVALID_CONFIG = 2

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def initialise(pack_count: int, rng: Random | None = None) -> tuple[Table, Player]:
    """Create a table and seat a single player at it."""
    table = Table(pack_count=pack_count, rng=rng)
    player = Player(name="You")
    table.join(player)
    return table, player


@click.command()
@click.option(
    "--decks",
    "-d",
    type=int,
    default=None,
    help="Number of decks to draw from. [default: $BLACKJACK_PACKS or 1]",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Logging verbosity. [default: $BLACKJACK_LOG_LEVEL or WARNING]",
)
@click.option("--seed", type=int, default=None, help="Seed the deck for a repeatable game.")
@click.pass_context
def main(ctx: click.Context, decks: int | None, log_level: str | None, seed: int | None) -> None:
    """Play single-player blackjack in the terminal."""
    try:
        app_config = load_config(pack_count=decks, log_level=log_level)
    except ValueError as exc:
        click.echo(f"invalid configuration: {exc}", err=True)
        ctx.exit(EXIT_INVALID_CONFIG)

    logging.basicConfig(level=app_config.log.numeric_level, format=app_config.log.format)

    try:
        table, player = initialise(
            app_config.game.pack_count,
            rng=Random(seed) if seed is not None else None,
        )
    except BlackjackError as exc:
        click.echo(f"error: {exc}", err=True)
        ctx.exit(EXIT_EXECUTION_ERROR)
    attach_event_logger(table)

    stream = click.get_text_stream("stdin")
    while True:
        try:
            play_round(table, player, stream)
            again = prompt_play_again(stream)
        except BlackjackError as exc:
            click.echo(f"\nexecution error! {exc}", err=True)
            ctx.exit(EXIT_EXECUTION_ERROR)
        except click.Abort:
            click.echo("\nexecution error! input closed", err=True)
            ctx.exit(EXIT_EXECUTION_ERROR)
        if not again:
            break

    click.echo("Thanks for playing! 💙")


if __name__ == "__main__":
    main()
