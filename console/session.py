"""Single-player round loop.

A win is simply finishing on 21 or less; the only way to lose is to go
bust. There is no dealer.
"""

from typing import TextIO

import click

from blackjack import BlackjackError, Player, Table
from console.input_handler import Action, prompt_action
from console.render import render_cards, render_outcome, render_score


def play_round(table: Table, player: Player, stream: TextIO) -> None:
    """
    Deal, let the player hit or stick until the hand is over, then end the round.

    Raises:
        BlackjackError: The table could not be dealt or an action failed
        click.Abort: Input ran out mid-round
    """
    click.echo("Dealing new table...", nl=False)
    # Deal resets the table itself, which is what a fresh round wants
    errors = table.deal()
    if errors:
        raise BlackjackError(
            "errors returned when dealing new table: " + "; ".join(str(e) for e in errors)
        )
    click.echo("...Table ready to play!")

    hand = player.current_hand
    if hand is None:
        raise BlackjackError("no hand was dealt")

    while True:
        click.echo("Your hand:")
        click.echo(render_cards(hand))
        click.echo("----------")

        score = hand.score()
        if score.locked:
            if not score.valid:
                click.echo(f"Bust! Your hand is worth {score.best}")
            else:
                click.echo(f"Sticking with a score of {score.best}")
            break

        click.echo(render_score(hand))

        if prompt_action(stream) is Action.HIT:
            hand.hit()
            continue

        click.echo(f"Sticking with a score of {score.best}")
        hand.stick()
        break

    table.end_round()
    click.echo(render_outcome(hand))
