"""Console input handling.

Turns raw lines typed by the player into actions. Input is read from a
text stream so the round loop can be driven by a file or a test runner
as easily as by a terminal.
"""

from enum import Enum, auto
from typing import TextIO

import click

HIT_KEYWORDS = frozenset({"hit", "take", "deal", "h"})
STICK_KEYWORDS = frozenset({"stick", "stand", "stay", "s"})


class Action(Enum):
    """Player decisions the console understands."""

    HIT = auto()
    STICK = auto()


def parse_action(text: str) -> Action | None:
    """Match text against the hit/stick synonyms, ignoring case and whitespace."""
    word = text.strip().lower()
    if word in HIT_KEYWORDS:
        return Action.HIT
    if word in STICK_KEYWORDS:
        return Action.STICK
    return None


def parse_yes_no(text: str) -> bool | None:
    """Interpret a play-again answer. Any 'y' wins over any 'n'."""
    answer = text.strip().lower()
    if "y" in answer:
        return True
    if "n" in answer:
        return False
    return None


def read_line(stream: TextIO) -> str:
    """
    Read one line of input.

    Raises:
        click.Abort: The input stream is closed
    """
    line = stream.readline()
    if not line:
        raise click.Abort()
    return line.rstrip("\r\n")


def prompt_action(stream: TextIO) -> Action:
    """Ask for hit or stick until a recognised answer is given."""
    click.echo("Action ([h]it, [s]tick): ", nl=False)
    while True:
        action = parse_action(read_line(stream))
        if action is not None:
            return action
        click.echo("Invalid action! Choose one of [h]it, [s]tick: ", nl=False)


def prompt_play_again(stream: TextIO) -> bool:
    """Ask whether to play another round."""
    click.echo("Do you want to play again? [y]es, [n]o: ", nl=False)
    while True:
        answer = parse_yes_no(read_line(stream))
        if answer is not None:
            return answer
        click.echo("Invalid action! Choose one of [y]es, [n]o: ", nl=False)
